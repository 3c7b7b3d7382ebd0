"""Sentence boundary detection.

``EndOfSentenceDetector`` finds where the first complete sentence of a text
ends; ``SentenceExtractor`` builds the detector from a symbol table and
splits text into sentence ranges. Every format parser uses the same
extractor, so boundary rules live only here.
"""

import logging
import re
from typing import Iterable, List, Optional, Pattern, Sequence, Tuple

from ..config.symbols import SymbolTable


logger = logging.getLogger(__name__)

DEFAULT_WHITE_WORDS: Tuple[str, ...] = (
    "Mr.", "Mrs.", "Dr.", "genn.ai", "Co., Ltd.", "Miss.", "a.m.",
    "U.S.A.", "Jan.", "Feb.", "Mar.", "Apr.",
    "May.", "Jun.", "Jul.", "Aug.", "Sep.", "Oct.",
    "Nov.", "Dec.", "B.C", "A.D.",
)


def _is_basic_latin(ch: str) -> bool:
    return ord(ch) < 0x80


class EndOfSentenceDetector:
    """
    Stateless detector of sentence end positions.

    A match of the end pattern is not a boundary when it lies inside an
    occurrence of a white word (case-sensitive), or when it is a Latin
    symbol directly followed by a non-space character ("3.14").
    """

    def __init__(self, pattern: Pattern, white_words: Iterable[str] = ()):
        self._pattern = pattern
        self._white_words = [w for w in white_words if w]

    def get_sentence_end_position(self, text: str, start: int = 0) -> int:
        """
        Return the index of the last end symbol of the first sentence.

        Args:
            text: Text to scan.
            start: Index to start scanning from.

        Returns:
            Index of the final end-of-sentence character, or -1 when the
            text holds no complete sentence.
        """
        protected = self._white_word_ranges(text)
        offset = start
        while offset < len(text):
            match = self._pattern.search(text, offset)
            if match is None:
                return -1
            if any(s <= match.start() and match.end() <= e for s, e in protected):
                offset = match.end()
                continue

            end = match.end()
            while end < len(text):
                following = self._pattern.match(text, end)
                if following is None:
                    break
                end = following.end()

            last = end - 1
            if end >= len(text):
                return last
            if not _is_basic_latin(text[last]) or text[end].isspace():
                return last
            offset = end
        return -1

    def _white_word_ranges(self, text: str) -> List[Tuple[int, int]]:
        ranges = []
        for word in self._white_words:
            position = text.find(word)
            while position >= 0:
                ranges.append((position, position + len(word)))
                position = text.find(word, position + 1)
        return ranges


def build_end_pattern(
    end_symbols: Sequence[str], right_quotations: Sequence[str] = ()
) -> Pattern:
    """
    Build the end-of-sentence pattern.

    Quoted combinations (``."``) come before the bare symbols so that a
    closing quotation stays inside the sentence.

    Raises:
        ValueError: If no end symbol is given.
    """
    if not end_symbols:
        raise ValueError("No end character is specified")
    alternatives = [
        re.escape(symbol) + re.escape(quote)
        for quote in right_quotations
        for symbol in end_symbols
    ]
    alternatives.extend(re.escape(symbol) for symbol in end_symbols)
    return re.compile("|".join(alternatives))


def find_sentence_end(
    text: str,
    end_symbols: Sequence[str] = (".",),
    white_words: Iterable[str] = (),
) -> int:
    """Convenience wrapper: end index of the first sentence in ``text`` or -1."""
    detector = EndOfSentenceDetector(build_end_pattern(end_symbols), white_words)
    return detector.get_sentence_end_position(text)


class SentenceExtractor:
    """
    Splits text into sentences using the configured end symbols.

    Attributes:
        end_symbols: Characters that end a sentence.
        right_quotations: Closing quotations that may follow an end symbol.
        broken_line_separator: Inserted where a sentence continues on the
            next source line; a space for Latin scripts, nothing for CJK.
    """

    def __init__(
        self,
        end_symbols: Sequence[str] = (".", "?", "!"),
        right_quotations: Sequence[str] = ("'", '"'),
        white_words: Optional[Iterable[str]] = None,
    ):
        self.end_symbols = list(end_symbols)
        self.right_quotations = [q for q in right_quotations if q]
        self.white_words = list(DEFAULT_WHITE_WORDS if white_words is None else white_words)
        self._detector = EndOfSentenceDetector(
            build_end_pattern(self.end_symbols, self.right_quotations),
            self.white_words,
        )
        full_stop = self.end_symbols[0]
        self.broken_line_separator = " " if _is_basic_latin(full_stop) else ""

    @classmethod
    def from_symbol_table(cls, symbol_table: SymbolTable) -> "SentenceExtractor":
        """Create an extractor from the full stop, question and exclamation marks."""
        end_symbols = [
            symbol_table.get_value(name)
            for name in ("FULL_STOP", "QUESTION_MARK", "EXCLAMATION_MARK")
            if symbol_table.get_value(name)
        ]
        right_quotations = [
            symbol_table.get_value(name)
            for name in ("RIGHT_SINGLE_QUOTATION_MARK", "RIGHT_DOUBLE_QUOTATION_MARK")
            if symbol_table.get_value(name)
        ]
        logger.debug(f"End of sentence characters: {end_symbols}")
        return cls(end_symbols, right_quotations)

    def get_sentence_end_position(self, text: str, start: int = 0) -> int:
        return self._detector.get_sentence_end_position(text, start)

    def extract(self, text: str) -> Tuple[List[Tuple[int, int]], int]:
        """
        Split ``text`` into complete sentences.

        Returns:
            ``(ranges, remainder)`` where ``ranges`` holds ``(start, end)``
            pairs (end exclusive) of complete sentences and ``remainder``
            is the index where the unfinished rest of the text begins.
        """
        ranges: List[Tuple[int, int]] = []
        position = 0
        end = self._detector.get_sentence_end_position(text, position)
        while end >= 0:
            ranges.append((position, end + 1))
            position = end + 1
            end = self._detector.get_sentence_end_position(text, position)
        return ranges, position
