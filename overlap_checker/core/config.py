"""
Immutable configuration for the segmenter, the similarity engine and the
document reader.

Defaults can be overridden from the environment (or a ``.env`` file) with
the ``OVERLAP_*`` variables read by ``from_env``.
"""

import os
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from dotenv import load_dotenv

from .validation import ParameterValidator


STOP_WORDS: FrozenSet[str] = frozenset({
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by',
    'is', 'are', 'was', 'were', 'be', 'been', 'being', 'have', 'has', 'had', 'do', 'does', 'did',
    'will', 'would', 'could', 'should', 'may', 'might', 'can', 'this', 'that', 'these', 'those',
})


def _env_int(env: Mapping[str, str], name: str, default: int, min_value: int, max_value: Optional[int] = None) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return ParameterValidator.validate_positive_integer(raw.strip(), name, min_value=min_value, max_value=max_value)


@dataclass(frozen=True)
class DetectorConfig:
    """Thresholds shared by the segmenter and the similarity engine."""

    min_sentence_length: int = 15
    min_word_length: int = 3
    similarity_threshold: int = 75
    max_matches: int = 5
    max_sentence_display: int = 200
    truncation_marker: str = "..."
    stop_words: FrozenSet[str] = field(default=STOP_WORDS)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "DetectorConfig":
        """
        Build a config from ``OVERLAP_*`` environment variables.

        Args:
            env: Mapping to read instead of ``os.environ`` (``.env`` is only
                loaded when reading the real environment)

        Raises:
            ParameterValidationError: If a variable holds an invalid value
        """
        if env is None:
            load_dotenv()
            env = os.environ
        return cls(
            min_sentence_length=_env_int(env, "OVERLAP_MIN_SENTENCE_LENGTH", cls.min_sentence_length, 1),
            min_word_length=_env_int(env, "OVERLAP_MIN_WORD_LENGTH", cls.min_word_length, 1),
            similarity_threshold=_env_int(env, "OVERLAP_SIMILARITY_THRESHOLD", cls.similarity_threshold, 0, 100),
            max_matches=_env_int(env, "OVERLAP_MAX_MATCHES", cls.max_matches, 1),
        )


@dataclass(frozen=True)
class ExtractionConfig:
    """Limits applied before any text reaches the similarity engine."""

    max_file_size_mb: float = 20.0
    min_text_length: int = 10
    min_content_length: int = 50

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ExtractionConfig":
        if env is None:
            load_dotenv()
            env = os.environ
        max_size = env.get("OVERLAP_MAX_FILE_SIZE_MB")
        if max_size is None or max_size.strip() == "":
            max_file_size_mb = cls.max_file_size_mb
        else:
            max_file_size_mb = ParameterValidator.validate_positive_float(
                max_size.strip(), "OVERLAP_MAX_FILE_SIZE_MB", min_value=0.001
            )
        return cls(
            max_file_size_mb=max_file_size_mb,
            min_text_length=_env_int(env, "OVERLAP_MIN_TEXT_LENGTH", cls.min_text_length, 0),
            min_content_length=_env_int(env, "OVERLAP_MIN_CONTENT_LENGTH", cls.min_content_length, 0),
        )


DEFAULT_DETECTOR_CONFIG = DetectorConfig()
DEFAULT_EXTRACTION_CONFIG = ExtractionConfig()
