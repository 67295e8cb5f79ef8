"""Value objects passed between the reader, the engine and the session."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple


# str.split() does not treat a byte order mark as whitespace
WHITESPACE_RUN = re.compile(r"[\s\ufeff]+")


def split_words(text: str) -> List[str]:
    """Whitespace-delimited tokens, with U+FEFF counted as whitespace."""
    return [token for token in WHITESPACE_RUN.split(text) if token]


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens, no filtering."""
    return len(split_words(text))


@dataclass(frozen=True)
class Document:
    """A previously submitted document as seen by the similarity engine."""

    name: str
    text: str

    @property
    def word_count(self) -> int:
        return count_words(self.text)


@dataclass(frozen=True)
class SentenceMatch:
    sentence: str
    similarity: int
    source_file: str


@dataclass(frozen=True)
class SimilarityReport:
    """Engine output for one new document checked against a corpus."""

    similarity: int
    matches: Tuple[SentenceMatch, ...]
    word_count: int


@dataclass(frozen=True)
class ExtractedContent:
    text: str
    page_count: Optional[int] = None
    has_images: bool = False


@dataclass(frozen=True)
class DetectionResult:
    """A checked submission, kept by the session as part of the corpus."""

    id: str
    file_name: str
    file_type: str
    content: str
    similarity: int
    matches: Tuple[SentenceMatch, ...]
    word_count: int
    timestamp: datetime = field(default_factory=datetime.now)
    page_count: Optional[int] = None

    def as_document(self) -> Document:
        return Document(name=self.file_name, text=self.content)


def similarity_level(score: int) -> str:
    """Display band for a similarity percentage: low, medium or high."""
    if score < 20:
        return "low"
    if score < 50:
        return "medium"
    return "high"
