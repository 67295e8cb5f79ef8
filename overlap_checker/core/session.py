import threading
import uuid
from pathlib import Path
from typing import Optional, Tuple, Union

from .config import ExtractionConfig, DEFAULT_EXTRACTION_CONFIG
from .document_reader import DocumentReader, TEXT_MIME_TYPE, normalize_filename
from .logging_config import LoggerMixin
from .models import DetectionResult, Document
from .similarity import SimilarityEngine
from .validation import (
    ParameterValidator, InsufficientContentError, validate_inputs
)


class DetectionSession(LoggerMixin):
    """
    Owns the corpus of checked documents for one user session.

    Each submission is scored against every document already in the
    session and then added to it, newest first. The similarity engine only
    ever receives an immutable snapshot of the corpus.
    """

    def __init__(self,
                 engine: Optional[SimilarityEngine] = None,
                 reader: Optional[DocumentReader] = None,
                 config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG):
        self.engine = engine or SimilarityEngine()
        self.config = config
        self.reader = reader or DocumentReader(config)
        self._results = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    @property
    def results(self) -> Tuple[DetectionResult, ...]:
        """Checked documents, newest first."""
        with self._lock:
            return tuple(self._results)

    def documents(self) -> Tuple[Document, ...]:
        return tuple(result.as_document() for result in self.results)

    @validate_inputs(
        file_name=lambda x: ParameterValidator.validate_string(x, "file_name", min_length=1),
        content=lambda x: ParameterValidator.validate_string(x, "content"),
    )
    def check_text(self, file_name: str, content: str, file_type: str = TEXT_MIME_TYPE,
                   page_count: Optional[int] = None) -> DetectionResult:
        """
        Score already extracted text against the corpus and record it.

        Raises:
            ParameterValidationError: If ``file_name`` or ``content`` is not a string
            InsufficientContentError: If the text is too short to compare
        """
        if len(content) < self.config.min_content_length:
            raise InsufficientContentError(
                "File content is too short for meaningful plagiarism detection.",
                field="content",
                value=file_name
            )

        report = self.engine.analyze(content, self.documents())

        result = DetectionResult(
            id=uuid.uuid4().hex,
            file_name=file_name,
            file_type=file_type,
            content=content,
            similarity=report.similarity,
            matches=report.matches,
            word_count=report.word_count,
            page_count=page_count,
        )

        with self._lock:
            self._results.insert(0, result)

        self.logger.info(
            f"Checked {file_name}: {result.similarity}% similar, {len(result.matches)} sentence matches",
            extra={'document_name': file_name, 'similarity': result.similarity, 'match_count': len(result.matches)}
        )
        return result

    def submit_bytes(self, data: bytes, file_name: str, mime_type: Optional[str] = None) -> DetectionResult:
        """
        Extract an uploaded file and check it.

        Raises:
            ExtractionError: If the file is rejected; the corpus is left unchanged
        """
        file_name = normalize_filename(file_name)
        mime_type = self.reader.resolve_mime_type(file_name, mime_type)
        extracted = self.reader.read_bytes(data, file_name, mime_type)
        return self.check_text(file_name, extracted.text, file_type=mime_type, page_count=extracted.page_count)

    def submit_file(self, file_path: Union[str, Path]) -> DetectionResult:
        """Extract a document from disk and check it."""
        path = Path(file_path)
        extracted = self.reader.read_file(path)
        file_name = normalize_filename(path.name)
        return self.check_text(
            file_name,
            extracted.text,
            file_type=self.reader.resolve_mime_type(file_name),
            page_count=extracted.page_count,
        )

    def remove(self, result_id: str) -> bool:
        """Drop one result from the corpus. Returns False if the id is unknown."""
        with self._lock:
            for index, result in enumerate(self._results):
                if result.id == result_id:
                    del self._results[index]
                    self.logger.info(f"Removed {result.file_name} from corpus", extra={'document_name': result.file_name})
                    return True
        return False

    def clear(self):
        with self._lock:
            count = len(self._results)
            self._results.clear()
        self.logger.info(f"Cleared {count} documents from corpus", extra={'corpus_size': 0})


class UploadTracker:
    """
    Remembers which uploads a UI has already submitted.

    A file widget keeps returning its last file on every rerun, so each
    ``(name, size)`` pair is submitted once. ``reset`` forgets them and
    changes ``uploader_key``, so a UI that keys its widget on it gets an
    empty widget and can accept the same file again.
    """

    def __init__(self):
        self.nonce = 0
        self._processed = set()

    @property
    def uploader_key(self) -> str:
        return f"uploader-{self.nonce}"

    def should_process(self, name: str, size: int) -> bool:
        """True the first time an upload is seen since the last reset."""
        upload = (normalize_filename(name), size)
        if upload in self._processed:
            return False
        self._processed.add(upload)
        return True

    def reset(self):
        self.nonce += 1
        self._processed.clear()
