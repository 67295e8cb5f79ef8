import math
from typing import List, Optional, Sequence, Tuple

from .config import DetectorConfig, DEFAULT_DETECTOR_CONFIG
from .logging_config import LoggerMixin
from .models import Document, SentenceMatch, SimilarityReport
from .text_processing import TextSegmenter


def to_percentage(numerator: int, denominator: int) -> int:
    """Round ``100 * numerator / denominator`` half up; 0 for an empty denominator."""
    if denominator <= 0:
        return 0
    return int(math.floor(numerator / denominator * 100 + 0.5))


class SimilarityEngine(LoggerMixin):
    """
    Scores a new document against a corpus of prior documents.

    Two measures are used:

    * the document score is the Jaccard index of the distinct significant
      words of both texts, which is symmetric and ignores frequency;
    * the sentence score counts the first sentence's significant words
      (with repeats) found in the second and divides by the longer word
      list, which is stricter and flags near-duplicate sentences.

    All methods are pure. Degenerate input (no words, no sentences, empty
    corpus) yields 0 or an empty list rather than an error.
    """

    def __init__(self, config: DetectorConfig = DEFAULT_DETECTOR_CONFIG,
                 segmenter: Optional[TextSegmenter] = None):
        self.config = config
        self.segmenter = segmenter or TextSegmenter(config)

    def calculate_similarity(self, text_a: str, text_b: str) -> int:
        """
        Jaccard similarity of the significant-word sets of two texts.

        Returns:
            Integer percentage in [0, 100]
        """
        words_a = set(self.segmenter.get_significant_words(text_a))
        words_b = set(self.segmenter.get_significant_words(text_b))

        if not words_a or not words_b:
            return 0

        return to_percentage(len(words_a & words_b), len(words_a | words_b))

    def calculate_sentence_similarity(self, sentence_a: str, sentence_b: str) -> int:
        """Containment-style overlap of two sentences, see the class docstring."""
        return self._word_list_similarity(
            self.segmenter.get_significant_words(sentence_a),
            self.segmenter.get_significant_words(sentence_b),
        )

    @staticmethod
    def _word_list_similarity(words_a: List[str], words_b: List[str]) -> int:
        if not words_a or not words_b:
            return 0
        lookup = set(words_b)
        common = sum(1 for word in words_a if word in lookup)
        return to_percentage(common, max(len(words_a), len(words_b)))

    def _display_sentence(self, sentence: str) -> str:
        limit = self.config.max_sentence_display
        if len(sentence) > limit:
            return sentence[:limit] + self.config.truncation_marker
        return sentence

    def _segment(self, text: str) -> List[Tuple[str, List[str]]]:
        return [
            (sentence, self.segmenter.get_significant_words(sentence))
            for sentence in self.segmenter.extract_sentences(text)
        ]

    def find_detailed_matches(self, new_text: str, corpus: Sequence[Document]) -> List[SentenceMatch]:
        """
        Compare every sentence of ``new_text`` with every sentence of every
        corpus document.

        A pair is kept when its sentence similarity reaches the threshold.
        The reported sentence is the new document's sentence, truncated for
        display; the score always uses the full sentence.

        Args:
            new_text: Text of the submitted document
            corpus: Prior documents, in the order ties should be broken

        Returns:
            At most ``max_matches`` matches, highest similarity first
        """
        new_sentences = self._segment(new_text)
        if not new_sentences or not corpus:
            return []

        prior_sentences = [(document.name, self._segment(document.text)) for document in corpus]

        matches = []
        for sentence, words in new_sentences:
            for source_name, sentences in prior_sentences:
                for _, prior_words in sentences:
                    similarity = self._word_list_similarity(words, prior_words)
                    if similarity >= self.config.similarity_threshold:
                        matches.append(SentenceMatch(
                            sentence=self._display_sentence(sentence),
                            similarity=similarity,
                            source_file=source_name,
                        ))

        # sorted() is stable, so ties keep encounter order
        ranked = sorted(matches, key=lambda match: match.similarity, reverse=True)
        self.logger.debug(f"Found {len(matches)} sentence matches above {self.config.similarity_threshold}%")
        return ranked[:self.config.max_matches]

    def get_word_count(self, text: str) -> int:
        return self.segmenter.get_word_count(text)

    def analyze(self, new_text: str, corpus: Sequence[Document]) -> SimilarityReport:
        """
        Score ``new_text`` against ``corpus``.

        Returns:
            SimilarityReport with the highest document similarity over the
            corpus (0 when it is empty), the top sentence matches and the raw
            word count of ``new_text``
        """
        snapshot = tuple(corpus)
        with self.log_operation("analyze_document", corpus_size=len(snapshot)) as op:
            similarity = max(
                (self.calculate_similarity(new_text, document.text) for document in snapshot),
                default=0,
            )
            matches = tuple(self.find_detailed_matches(new_text, snapshot))
            op.extra.update(similarity=similarity, match_count=len(matches))

        return SimilarityReport(
            similarity=similarity,
            matches=matches,
            word_count=self.get_word_count(new_text),
        )
