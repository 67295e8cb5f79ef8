"""
Logging setup for the document overlap checker.

Library modules only ask for loggers (through ``LoggerMixin`` or
``logging.getLogger``); the entry points install handlers with
``setup_logging``.
"""

import logging
import logging.handlers
import sys
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List


# Extra attributes copied from a LogRecord into the JSON payload
CONTEXT_FIELDS = (
    'operation',
    'document_name',
    'file_path',
    'corpus_size',
    'match_count',
    'similarity',
    'duration',
)

PLAIN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, carrying the detection context fields."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log_entry.update(
            (name, getattr(record, name)) for name in CONTEXT_FIELDS if hasattr(record, name)
        )
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Document names may hold non-ASCII characters
        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=str)


def _file_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_level: str = "INFO",
                  log_dir: str = "logs",
                  structured_logging: bool = True,
                  enable_console: bool = True,
                  enable_file: bool = True) -> List[logging.Handler]:
    """
    Replace the root logger's handlers.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ...)
        log_dir: Directory for ``app.log`` and ``errors.log`` (WARNING and above)
        structured_logging: JSON lines instead of plain text
        enable_console: Also log to stdout
        enable_file: Write the rotating log files

    Returns:
        The handlers now attached to the root logger
    """
    level = getattr(logging, log_level.upper())
    formatter = StructuredFormatter() if structured_logging else logging.Formatter(PLAIN_FORMAT)

    handlers = []
    if enable_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(level)
        console.setFormatter(formatter)
        handlers.append(console)
    if enable_file:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(directory / "app.log", level, formatter))
        handlers.append(_file_handler(directory / "errors.log", logging.WARNING, formatter))

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    for handler in handlers:
        root_logger.addHandler(handler)
    return handlers


class LoggerMixin:
    """Adds a per-class ``logger`` and timed ``log_operation`` blocks."""

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        return self._logger

    def log_operation(self, operation: str, **context) -> "OperationLogger":
        """Time a block and log its outcome with ``context`` as record extras."""
        return OperationLogger(self.logger, dict(context, operation=operation))


class OperationLogger:
    """
    Context manager around one detection step.

    Callers may add results to ``extra`` inside the block (for example the
    match count); they are logged together with the elapsed seconds.
    """

    def __init__(self, logger: logging.Logger, extra: dict):
        self.logger = logger
        self.extra = extra
        self._started = None

    def __enter__(self):
        self._started = datetime.now(timezone.utc)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.extra['duration'] = (datetime.now(timezone.utc) - self._started).total_seconds()
        operation = self.extra['operation']
        if exc_type is None:
            self.logger.info(f"Completed {operation}", extra=self.extra)
        else:
            self.logger.warning(f"Failed {operation}: {exc_val}", extra=self.extra)
        return False
