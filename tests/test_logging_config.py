import json
import logging

import pytest

from overlap_checker.core.logging_config import LoggerMixin, StructuredFormatter, setup_logging


class Worker(LoggerMixin):
    pass


def test_structured_formatter_emits_json_with_context():
    record = logging.LogRecord("overlap", logging.INFO, __file__, 10, "checked %s", ("تقرير.pdf",), None)
    record.operation = "analyze_document"
    record.match_count = 2

    payload = json.loads(StructuredFormatter().format(record))
    assert payload["message"] == "checked تقرير.pdf"
    assert payload["operation"] == "analyze_document"
    assert payload["match_count"] == 2
    assert payload["level"] == "INFO"


def test_logger_is_named_after_class():
    assert Worker().logger.name == f"{__name__}.Worker"


def test_log_operation_records_duration(caplog):
    caplog.set_level(logging.DEBUG)
    with Worker().log_operation("unit_operation", corpus_size=3):
        pass

    record = caplog.records[-1]
    assert record.operation == "unit_operation"
    assert record.corpus_size == 3
    assert record.duration >= 0
    assert record.levelno == logging.INFO


def test_log_operation_does_not_swallow_errors(caplog):
    caplog.set_level(logging.DEBUG)
    with pytest.raises(ValueError):
        with Worker().log_operation("failing_operation"):
            raise ValueError("boom")

    assert caplog.records[-1].levelno == logging.WARNING
    assert "failing_operation" in caplog.records[-1].getMessage()


def test_setup_logging_writes_rotating_files(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(log_dir=str(tmp_path / "logs"), enable_console=False)
        logging.getLogger("overlap.test").warning("disk check")
        for handler in root.handlers:
            handler.flush()

        app_log = (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")
        errors_log = (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")
        assert json.loads(app_log.splitlines()[-1])["message"] == "disk check"
        assert "disk check" in errors_log
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_setup_logging_console_only_plain_text():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        handlers = setup_logging(log_level="debug", structured_logging=False, enable_file=False)

        assert len(handlers) == 1
        assert type(handlers[0]) is logging.StreamHandler
        assert not isinstance(handlers[0].formatter, StructuredFormatter)
        assert root.handlers == handlers
        assert root.level == logging.DEBUG
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
