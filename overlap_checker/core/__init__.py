"""
Core functionality for overlap detection.

This package contains the processing logic:
- Text segmentation into significant words and sentences
- Document and sentence similarity scoring
- PDF and plain-text extraction
- The per-session corpus of checked documents
"""

from .config import DetectorConfig, ExtractionConfig, STOP_WORDS
from .models import (
    Document, SentenceMatch, SimilarityReport, ExtractedContent, DetectionResult,
    similarity_level
)
from .text_processing import TextSegmenter
from .similarity import SimilarityEngine
from .document_reader import DocumentReader, clean_text, find_document_files
from .session import DetectionSession, UploadTracker
from .logging_config import setup_logging, LoggerMixin, OperationLogger
from .validation import (
    ValidationError, FileValidationError, DirectoryValidationError,
    ParameterValidationError, ExtractionError, UnsupportedFileTypeError,
    FileTooLargeError, InsufficientContentError, ScannedDocumentError,
    EncryptedDocumentError, CorruptedDocumentError,
    FileValidator, DirectoryValidator, ParameterValidator,
    validate_inputs
)

__all__ = [
    'DetectorConfig',
    'ExtractionConfig',
    'STOP_WORDS',
    'Document',
    'SentenceMatch',
    'SimilarityReport',
    'ExtractedContent',
    'DetectionResult',
    'similarity_level',
    'TextSegmenter',
    'SimilarityEngine',
    'DocumentReader',
    'clean_text',
    'find_document_files',
    'DetectionSession',
    'UploadTracker',
    'setup_logging',
    'LoggerMixin',
    'OperationLogger',
    'ValidationError',
    'FileValidationError',
    'DirectoryValidationError',
    'ParameterValidationError',
    'ExtractionError',
    'UnsupportedFileTypeError',
    'FileTooLargeError',
    'InsufficientContentError',
    'ScannedDocumentError',
    'EncryptedDocumentError',
    'CorruptedDocumentError',
    'FileValidator',
    'DirectoryValidator',
    'ParameterValidator',
    'validate_inputs',
]
