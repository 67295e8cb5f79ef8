"""
Input validation and error types for the document overlap checker.

Every failure a user can see is a ``ValidationError`` subclass whose
message is written to be shown verbatim.
"""

from pathlib import Path
from typing import Any, Optional, Union
from functools import wraps
import inspect


class ValidationError(Exception):
    """Base class for validation errors."""

    def __init__(self, message: str, field: str = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(self.message)


class FileValidationError(ValidationError):
    """Raised for file-related validation errors."""
    pass


class DirectoryValidationError(ValidationError):
    """Raised for directory-related validation errors."""
    pass


class ParameterValidationError(ValidationError):
    """Raised for parameter validation errors."""
    pass


class ExtractionError(ValidationError):
    """Base class for documents that cannot be turned into text."""
    pass


class UnsupportedFileTypeError(ExtractionError):
    pass


class FileTooLargeError(ExtractionError):
    pass


class InsufficientContentError(ExtractionError):
    """The extracted text is too short to compare."""
    pass


class ScannedDocumentError(ExtractionError):
    """A page-oriented document holds images but no extractable text."""
    pass


class EncryptedDocumentError(ExtractionError):
    pass


class CorruptedDocumentError(ExtractionError):
    pass

class FileValidator:
    """Checks applied to documents read from disk."""

    ALLOWED_DOCUMENT_EXTENSIONS = {'.pdf', '.txt'}
    MAX_FILE_SIZE_MB = 20

    @staticmethod
    def validate_document_file(file_path: Union[str, Path], max_size_mb: float = MAX_FILE_SIZE_MB) -> Path:
        """
        Validate an existing PDF or plain-text document.

        Returns:
            Path object

        Raises:
            FileValidationError: If the path is empty, missing or not a file
            UnsupportedFileTypeError: If the extension is not .pdf or .txt
            FileTooLargeError: If the file exceeds ``max_size_mb``
        """
        if not file_path:
            raise FileValidationError("File path cannot be empty", field="file_path", value=file_path)

        path = Path(file_path)

        if not path.is_file():
            reason = "Path is not a file" if path.exists() else "File does not exist"
            raise FileValidationError(f"{reason}: {file_path}", field="file_path", value=file_path)

        if path.suffix.lower() not in FileValidator.ALLOWED_DOCUMENT_EXTENSIONS:
            raise UnsupportedFileTypeError(
                "Unsupported file type. Please upload a PDF or TXT file.",
                field="file_path",
                value=file_path
            )

        size_mb = path.stat().st_size / (1024 * 1024)
        if size_mb > max_size_mb:
            raise FileTooLargeError(
                f"File size exceeds {max_size_mb:g}MB limit. Current size: {size_mb:.1f}MB",
                field="file_path",
                value=file_path
            )

        return path


class DirectoryValidator:
    """Directory validation utilities."""

    @staticmethod
    def validate_directory_path(dir_path: Union[str, Path]) -> Path:
        """
        Validate that a directory exists.

        Raises:
            DirectoryValidationError: If validation fails
        """
        if not dir_path:
            raise DirectoryValidationError("Directory path cannot be empty", field="dir_path", value=dir_path)

        path = Path(dir_path)

        if not path.is_dir():
            reason = "Path is not a directory" if path.exists() else "Directory does not exist"
            raise DirectoryValidationError(f"{reason}: {dir_path}", field="dir_path", value=dir_path)

        return path


class ParameterValidator:
    """Parameter validation utilities."""

    @staticmethod
    def validate_positive_integer(value: Any, field: str, min_value: int = 1, max_value: Optional[int] = None) -> int:
        """Validate (and coerce) an integer parameter within bounds."""
        if isinstance(value, bool):
            raise ParameterValidationError(
                f"{field} must be an integer, got bool",
                field=field,
                value=value
            )
        if not isinstance(value, int):
            try:
                value = int(value)
            except (ValueError, TypeError):
                raise ParameterValidationError(
                    f"{field} must be an integer, got {type(value).__name__}",
                    field=field,
                    value=value
                )

        if value < min_value:
            raise ParameterValidationError(
                f"{field} must be >= {min_value}, got {value}",
                field=field,
                value=value
            )

        if max_value is not None and value > max_value:
            raise ParameterValidationError(
                f"{field} must be <= {max_value}, got {value}",
                field=field,
                value=value
            )

        return value

    @staticmethod
    def validate_positive_float(value: Any, field: str, min_value: float = 0.0, max_value: Optional[float] = None) -> float:
        """Validate (and coerce) a numeric parameter within bounds."""
        if not isinstance(value, (int, float)):
            try:
                value = float(value)
            except (ValueError, TypeError):
                raise ParameterValidationError(
                    f"{field} must be a number, got {type(value).__name__}",
                    field=field,
                    value=value
                )

        if value < min_value:
            raise ParameterValidationError(
                f"{field} must be >= {min_value}, got {value}",
                field=field,
                value=value
            )

        if max_value is not None and value > max_value:
            raise ParameterValidationError(
                f"{field} must be <= {max_value}, got {value}",
                field=field,
                value=value
            )

        return float(value)

    @staticmethod
    def validate_string(value: Any, field: str, min_length: int = 0) -> str:
        """Validate a string parameter."""
        if not isinstance(value, str):
            raise ParameterValidationError(
                f"{field} must be a string, got {type(value).__name__}",
                field=field,
                value=value
            )

        if len(value) < min_length:
            raise ParameterValidationError(
                f"{field} must be at least {min_length} characters, got {len(value)}",
                field=field,
                value=value
            )

        return value


def validate_inputs(**validators):
    """
    Decorator to validate function inputs.

    Args:
        **validators: Mapping of parameter names to validation callables.
            Each callable receives the bound value and returns the value
            to pass on.
    """
    def decorator(func):
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound_args = sig.bind(*args, **kwargs)
            bound_args.apply_defaults()

            for param_name, validator in validators.items():
                if param_name in bound_args.arguments:
                    value = bound_args.arguments[param_name]
                    try:
                        bound_args.arguments[param_name] = validator(value)
                    except ValidationError:
                        raise
                    except Exception as e:
                        raise ParameterValidationError(
                            f"Validation failed for {param_name}: {str(e)}",
                            field=param_name,
                            value=value
                        )

            return func(*bound_args.args, **bound_args.kwargs)
        return wrapper
    return decorator
