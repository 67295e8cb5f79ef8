import pytest

from overlap_checker.core.config import ExtractionConfig
from overlap_checker.core.document_reader import DocumentReader, clean_text, find_document_files
from overlap_checker.core.validation import (
    ExtractionError, UnsupportedFileTypeError, FileTooLargeError, InsufficientContentError,
    ScannedDocumentError, EncryptedDocumentError, FileValidationError, DirectoryValidationError,
)

from conftest import CLIMATE_TEXT, build_pdf


@pytest.fixture
def reader():
    return DocumentReader()


def test_clean_text_strips_control_and_symbol_characters():
    raw = "Hello\x00 world\t\n  \u00a92024 caf\u00e9!\ufffe"
    assert clean_text(raw) == "Hello world 2024 caf !"


def test_clean_text_keeps_basic_punctuation():
    raw = 'He said: "wait (now)", didn\'t he? Yes - indeed; fine.'
    assert clean_text(raw) == raw


def test_read_text_file(reader):
    content = reader.read_bytes(f"  {CLIMATE_TEXT}\r\n\r\n".encode("utf-8"), "essay.txt")
    assert content.text == CLIMATE_TEXT
    assert content.page_count is None
    assert content.has_images is False


def test_declared_mime_type_wins_over_file_name(reader):
    content = reader.read_bytes(CLIMATE_TEXT.encode("utf-8"), "upload", mime_type="text/plain")
    assert content.text == CLIMATE_TEXT


def test_invalid_utf8_is_replaced_and_cleaned(reader):
    content = reader.read_bytes(b"Readable text here \xff\xfe and more", "bad.txt")
    assert content.text == "Readable text here and more"


def test_unsupported_type_is_rejected(reader):
    with pytest.raises(UnsupportedFileTypeError) as excinfo:
        reader.read_bytes(b"\x89PNG", "picture.png")
    assert "Unsupported file type" in str(excinfo.value)


def test_oversized_payload_is_rejected():
    reader = DocumentReader(ExtractionConfig(max_file_size_mb=0.001))
    with pytest.raises(FileTooLargeError) as excinfo:
        reader.read_bytes(b"a" * 2000, "big.txt")
    assert "exceeds" in str(excinfo.value)


def test_short_text_file_is_rejected(reader):
    with pytest.raises(InsufficientContentError):
        reader.read_bytes(b"hi \x00\x01", "tiny.txt")


def test_read_pdf(reader):
    content = reader.read_bytes(build_pdf(CLIMATE_TEXT), "essay.pdf")
    assert content.text == CLIMATE_TEXT
    assert content.page_count == 1
    assert content.has_images is False


def test_blank_pdf_has_no_readable_text(reader):
    with pytest.raises(InsufficientContentError):
        reader.read_bytes(build_pdf(), "blank.pdf")


def test_image_only_pdf_is_reported_as_scanned(reader):
    with pytest.raises(ScannedDocumentError) as excinfo:
        reader.read_bytes(build_pdf(with_image=True), "scan.pdf")
    assert "OCR" in str(excinfo.value)


def test_password_protected_pdf_is_rejected(reader):
    with pytest.raises(EncryptedDocumentError):
        reader.read_bytes(build_pdf(CLIMATE_TEXT, password="secret"), "locked.pdf")


def test_garbage_pdf_is_rejected(reader):
    with pytest.raises(ExtractionError):
        reader.read_bytes(b"this is not a pdf document at all", "broken.pdf")


def test_read_file_from_disk(reader, tmp_path):
    path = tmp_path / "essay.txt"
    path.write_text(CLIMATE_TEXT, encoding="utf-8")
    assert reader.read_file(path).text == CLIMATE_TEXT


def test_read_file_errors(reader, tmp_path):
    with pytest.raises(FileValidationError):
        reader.read_file(tmp_path / "missing.txt")

    other = tmp_path / "slides.pptx"
    other.write_bytes(b"data")
    with pytest.raises(UnsupportedFileTypeError):
        reader.read_file(other)


def test_find_document_files(tmp_path):
    (tmp_path / "b.txt").write_text("text", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "a.PDF").write_bytes(b"%PDF")
    (tmp_path / "image.png").write_bytes(b"png")

    found = find_document_files(tmp_path)
    assert found == [str(tmp_path / "b.txt"), str(tmp_path / "nested" / "a.PDF")]


def test_find_document_files_missing_directory(tmp_path):
    with pytest.raises(DirectoryValidationError):
        find_document_files(tmp_path / "nope")
