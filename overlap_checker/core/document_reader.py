import os
import re
import mimetypes
import unicodedata
from pathlib import Path
from typing import List, Optional, Union

import fitz  # PyMuPDF

from .config import ExtractionConfig, DEFAULT_EXTRACTION_CONFIG
from .logging_config import LoggerMixin
from .models import ExtractedContent
from .validation import (
    DirectoryValidator, FileValidator,
    UnsupportedFileTypeError, FileTooLargeError, InsufficientContentError,
    ScannedDocumentError, EncryptedDocumentError, CorruptedDocumentError,
)


PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"
SUPPORTED_MIME_TYPES = (PDF_MIME_TYPE, TEXT_MIME_TYPE)

_WHITESPACE = re.compile(r'\s+')
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_SPECIALS_BLOCK = re.compile(r"[\ufff0-\uffff]")
# Anything that is not an ASCII word character, whitespace or basic punctuation
_NON_TEXT = re.compile(r'''[^\w\s.,!?;:()"'\-]''', re.ASCII)


def normalize_filename(filename: str) -> str:
    """Normalize a file name to NFC so the same name always compares equal."""
    return unicodedata.normalize('NFC', filename)


def clean_text(text: str) -> str:
    """
    Normalize extracted text before it reaches the similarity engine.

    Collapses whitespace, drops control and non-printable characters and
    replaces symbols and non-ASCII letters with spaces.
    """
    text = _WHITESPACE.sub(' ', text)
    text = _CONTROL_CHARS.sub('', text)
    text = _SPECIALS_BLOCK.sub('', text)
    text = _NON_TEXT.sub(' ', text)
    return _WHITESPACE.sub(' ', text).strip()


def find_document_files(directory_path: Union[str, Path]) -> List[str]:
    """
    Recursively collect ``.pdf`` and ``.txt`` files under a directory.

    Returns:
        Full paths, sorted by their normalized form

    Raises:
        DirectoryValidationError: If the directory does not exist
    """
    validated_path = DirectoryValidator.validate_directory_path(directory_path)

    found = []
    for root, _, files in os.walk(validated_path):
        for file in files:
            if Path(normalize_filename(file)).suffix.lower() in FileValidator.ALLOWED_DOCUMENT_EXTENSIONS:
                found.append(os.path.join(root, file))

    return sorted(found, key=normalize_filename)


class DocumentReader(LoggerMixin):
    """
    Turns uploaded PDF and plain-text files into cleaned text.

    Every rejection is raised as an ``ExtractionError`` subclass carrying a
    message that can be shown to the user as is.
    """

    def __init__(self, config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG):
        self.config = config

    def resolve_mime_type(self, file_name: str, mime_type: Optional[str] = None) -> str:
        if not mime_type:
            mime_type, _ = mimetypes.guess_type(file_name)
        if mime_type not in SUPPORTED_MIME_TYPES:
            raise UnsupportedFileTypeError(
                "Unsupported file type. Please upload a PDF or TXT file.",
                field="mime_type",
                value=mime_type
            )
        return mime_type

    def _check_size(self, size: int, file_name: str):
        if size > self.config.max_file_size_bytes:
            raise FileTooLargeError(
                f"File size exceeds {self.config.max_file_size_mb:g}MB limit. "
                f"Current size: {size / 1024 / 1024:.1f}MB",
                field="file_size",
                value=file_name
            )

    def read_file(self, file_path: Union[str, Path]) -> ExtractedContent:
        """
        Read a PDF or TXT document from disk.

        Raises:
            FileValidationError: If the path does not point to a file
            ExtractionError: If the document is rejected
        """
        path = FileValidator.validate_document_file(file_path, max_size_mb=self.config.max_file_size_mb)
        return self.read_bytes(path.read_bytes(), normalize_filename(path.name))

    def read_bytes(self, data: bytes, file_name: str, mime_type: Optional[str] = None) -> ExtractedContent:
        """
        Extract cleaned text from an uploaded payload.

        Args:
            data: Raw file content
            file_name: Original file name, used to guess the MIME type
            mime_type: Declared MIME type, if the uploader supplied one

        Returns:
            ExtractedContent with the cleaned text and, for PDFs, the page count
        """
        mime_type = self.resolve_mime_type(file_name, mime_type)
        self._check_size(len(data), file_name)

        with self.log_operation("extract_text", document_name=file_name):
            if mime_type == PDF_MIME_TYPE:
                return self._read_pdf(data, file_name)
            return self._read_text(data, file_name)

    def _read_text(self, data: bytes, file_name: str) -> ExtractedContent:
        text = clean_text(data.decode('utf-8', errors='replace'))
        if len(text) < self.config.min_text_length:
            raise InsufficientContentError(
                "Text file is too short or contains no readable content.",
                field="content",
                value=file_name
            )
        return ExtractedContent(text=text)

    def _read_pdf(self, data: bytes, file_name: str) -> ExtractedContent:
        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except (RuntimeError, ValueError) as e:
            self.logger.warning(f"Cannot open PDF {file_name}: {str(e)}", extra={'document_name': file_name})
            raise CorruptedDocumentError(
                "Invalid PDF file. The file may be corrupted.",
                field="content",
                value=file_name
            ) from e

        with doc:
            if doc.needs_pass:
                raise EncryptedDocumentError(
                    "This PDF is password-protected. Please provide an unlocked version.",
                    field="content",
                    value=file_name
                )

            page_texts = []
            has_images = False
            for page in doc:
                try:
                    page_text = page.get_text()
                    if page_text.strip():
                        page_texts.append(page_text)
                    if page.get_images():
                        has_images = True
                except RuntimeError as e:
                    # Skip unreadable pages
                    self.logger.warning(f"Error processing page {page.number + 1} of {file_name}: {str(e)}")
                    continue

            page_count = doc.page_count

        text = clean_text('\n'.join(page_texts))

        if len(text) < self.config.min_text_length:
            if has_images:
                raise ScannedDocumentError(
                    "This PDF appears to contain scanned images. Text extraction failed. "
                    "The document may need OCR processing.",
                    field="content",
                    value=file_name
                )
            raise InsufficientContentError(
                "No readable text found in this PDF. The document may be corrupted or contain only images.",
                field="content",
                value=file_name
            )

        self.logger.debug(f"Extracted {len(text)} characters from {page_count} pages of {file_name}")
        return ExtractedContent(text=text, page_count=page_count, has_images=has_images)
