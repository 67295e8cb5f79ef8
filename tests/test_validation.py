import pytest

from overlap_checker.core.validation import (
    DirectoryValidationError, DirectoryValidator, FileTooLargeError, FileValidationError,
    FileValidator, ParameterValidationError, ParameterValidator, UnsupportedFileTypeError,
)


def test_document_file_must_exist(tmp_path):
    with pytest.raises(FileValidationError, match="does not exist"):
        FileValidator.validate_document_file(tmp_path / "missing.pdf")
    with pytest.raises(FileValidationError, match="not a file"):
        FileValidator.validate_document_file(tmp_path)
    with pytest.raises(FileValidationError):
        FileValidator.validate_document_file("")


def test_document_file_type_and_size(tmp_path):
    image = tmp_path / "scan.png"
    image.write_bytes(b"\x89PNG")
    with pytest.raises(UnsupportedFileTypeError):
        FileValidator.validate_document_file(image)

    essay = tmp_path / "essay.TXT"
    essay.write_bytes(b"x" * 2048)
    assert FileValidator.validate_document_file(essay) == essay
    with pytest.raises(FileTooLargeError):
        FileValidator.validate_document_file(essay, max_size_mb=0.001)


def test_directory_must_exist(tmp_path):
    assert DirectoryValidator.validate_directory_path(tmp_path) == tmp_path
    with pytest.raises(DirectoryValidationError, match="does not exist"):
        DirectoryValidator.validate_directory_path(tmp_path / "missing")

    stray = tmp_path / "notes.txt"
    stray.write_text("notes", encoding="utf-8")
    with pytest.raises(DirectoryValidationError, match="not a directory"):
        DirectoryValidator.validate_directory_path(stray)


def test_validate_string_checks_type_and_min_length():
    assert ParameterValidator.validate_string("essay.txt", "file_name", min_length=1) == "essay.txt"
    with pytest.raises(ParameterValidationError):
        ParameterValidator.validate_string("", "file_name", min_length=1)
    with pytest.raises(ParameterValidationError):
        ParameterValidator.validate_string(42, "content")
    with pytest.raises(TypeError):
        ParameterValidator.validate_string("abc", "code", pattern=r"^[a-z]+$")
