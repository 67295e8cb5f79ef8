import re
from typing import List

from .config import DetectorConfig, DEFAULT_DETECTOR_CONFIG
from .models import count_words, split_words


SENTENCE_BOUNDARY = re.compile(r'[.!?]+')
ALPHABETIC_WORD = re.compile(r'[a-z]+')


class TextSegmenter:
    """
    Splits raw document text into significant words (for whole-document
    comparison) and candidate sentences (for sentence-level comparison).
    """

    def __init__(self, config: DetectorConfig = DEFAULT_DETECTOR_CONFIG):
        self.config = config

    def _is_significant(self, word: str) -> bool:
        return (
            len(word) >= self.config.min_word_length
            and word not in self.config.stop_words
            and ALPHABETIC_WORD.fullmatch(word) is not None
        )

    def get_significant_words(self, text: str) -> List[str]:
        """
        Lower-cased alphabetic tokens that are long enough and not stop words.

        Tokens are not cleaned: a token carrying punctuation or digits
        (``"runs."``, ``"covid19"``) is dropped as a whole. Order and
        duplicates are preserved.
        """
        return [word for word in split_words(text.lower()) if self._is_significant(word)]

    def extract_sentences(self, text: str) -> List[str]:
        """
        Split on runs of ``.``, ``!`` and ``?`` and keep trimmed fragments
        of at least ``min_sentence_length`` characters, in document order.
        """
        sentences = []
        for fragment in SENTENCE_BOUNDARY.split(text):
            fragment = fragment.strip()
            if len(fragment) >= self.config.min_sentence_length:
                sentences.append(fragment)
        return sentences

    def get_word_count(self, text: str) -> int:
        return count_words(text)
