"""Document-level validators."""

import logging
from collections import Counter
from typing import Dict, List

from ..interfaces.validator import DocumentValidator
from ..models.document import Document, Sentence
from ..models.validation import ValidationError
from ..tokenizers import WhiteSpaceTokenizer


logger = logging.getLogger(__name__)


class FrequentSentenceStartValidator(DocumentValidator):
    """
    Reports word sequences that start too many sentences of a document.

    For every sentence the leading sequences of 1 to ``leading_word_limit``
    words are counted. A sequence is reported when it starts more than
    ``percentage_threshold`` percent of the sentences. Documents with fewer
    than ``min_sentence_count`` sentences are not checked.
    """

    DEFAULT_ATTRIBUTES = {
        "leading_word_limit": 3,
        "percentage_threshold": 25,
        "min_sentence_count": 5,
    }
    MESSAGES = {
        "": "\"{0}\" starts {1}% of the sentences (threshold {2:g}%).",
    }

    def init(self) -> None:
        self.leading_word_limit = self.get_int("leading_word_limit")
        self.percentage_threshold = self.get_float("percentage_threshold")
        self.min_sentence_count = self.get_int("min_sentence_count")
        self._tokenizer = WhiteSpaceTokenizer()

    def validate(self, document: Document) -> List[ValidationError]:
        sentences = [s for s in document.iter_sentences() if s.content.strip()]
        if len(sentences) < self.min_sentence_count:
            logger.debug(
                f"{self.name}: {len(sentences)} sentences, below "
                f"{self.min_sentence_count}; skipped"
            )
            return []

        counts: Counter = Counter()
        first_use: Dict[str, Sentence] = {}
        for sentence in sentences:
            words = [
                t.surface
                for t in (sentence.tokens or self._tokenizer.tokenize(sentence.content))
                if "symbol" not in t.tags
            ]
            for length in range(1, min(self.leading_word_limit, len(words)) + 1):
                start = " ".join(words[:length])
                counts[start] += 1
                first_use.setdefault(start, sentence)

        errors = []
        for start, count in counts.items():
            percentage = count * 100 / len(sentences)
            if percentage > self.percentage_threshold:
                errors.append(self.create_error(
                    first_use[start], start, round(percentage), self.percentage_threshold
                ))
        return errors
