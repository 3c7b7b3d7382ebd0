"""Sentence-level validators.

Each validator here is invoked once per sentence: header sentences first,
then paragraph sentences, then list element sentences.
"""

import re
from typing import List

from ..interfaces.validator import SentenceValidator
from ..models.document import Sentence
from ..models.validation import ValidationError
from ..tokenizers import WhiteSpaceTokenizer


DEFAULT_SKIP_WORDS = frozenset({
    "a", "an", "the", "of", "to", "in", "on", "at", "by", "for", "with",
    "and", "or", "but", "is", "are", "was", "were", "be", "it", "that",
    "this", "as", "from", "not", "no", "do", "does", "can", "will",
})

LATIN_LETTER = re.compile(r"[A-Za-z]")


class SentenceLengthValidator(SentenceValidator):
    """Reports sentences longer than ``max_len`` characters."""

    DEFAULT_ATTRIBUTES = {"max_len": 30}
    MESSAGES = {
        "": "The length of the sentence ({0}) exceeds the maximum of {1}.",
    }

    def init(self) -> None:
        self.max_len = self.get_int("max_len")

    def validate(self, sentence: Sentence) -> List[ValidationError]:
        length = len(sentence.content)
        if length > self.max_len:
            return [self.create_error(sentence, length, self.max_len)]
        return []


class CommaNumberValidator(SentenceValidator):
    """Reports sentences with more than ``max_num`` commas."""

    DEFAULT_ATTRIBUTES = {"max_num": 3}
    MESSAGES = {
        "": "The number of commas ({0}) exceeds the maximum of {1}.",
    }

    def init(self) -> None:
        self.max_num = self.get_int("max_num")
        self.comma = self.symbol_table.get_value("COMMA", ",")

    def validate(self, sentence: Sentence) -> List[ValidationError]:
        count = sentence.content.count(self.comma)
        if count > self.max_num:
            return [self.create_error(sentence, count, self.max_num)]
        return []


class InvalidSymbolValidator(SentenceValidator):
    """
    Reports characters listed as invalid variants of a symbol.

    Each invalid character is reported once per sentence, at its first
    occurrence.
    """

    MESSAGES = {
        "": "Found invalid symbol \"{0}\" (use \"{1}\" instead).",
    }

    def validate(self, sentence: Sentence) -> List[ValidationError]:
        errors = []
        reported = set()
        for symbol in self.symbol_table:
            for invalid in symbol.invalid_chars:
                if invalid in reported or invalid == symbol.value:
                    continue
                position = sentence.content.find(invalid)
                if position < 0:
                    continue
                reported.add(invalid)
                errors.append(self.create_error_with_position(
                    sentence, position, position + len(invalid), invalid, symbol.value
                ))
        return errors


class InvalidExpressionValidator(SentenceValidator):
    """Reports expressions from the ``list`` attribute found in a sentence."""

    DEFAULT_ATTRIBUTES = {"list": ""}
    MESSAGES = {
        "": "Found invalid expression \"{0}\".",
    }

    def init(self) -> None:
        self.expressions = sorted(self.get_set("list"))

    def validate(self, sentence: Sentence) -> List[ValidationError]:
        errors = []
        for expression in self.expressions:
            position = sentence.content.find(expression)
            while position >= 0:
                errors.append(self.create_error_with_position(
                    sentence, position, position + len(expression), expression
                ))
                position = sentence.content.find(expression, position + len(expression))
        return errors


class DoubledWordValidator(SentenceValidator):
    """
    Reports words used more than once in the same sentence.

    Common function words are skipped; ``list`` adds more words to skip.
    Comparison is case-insensitive and uses the sentence tokens.
    """

    DEFAULT_ATTRIBUTES = {"list": ""}
    MESSAGES = {
        "": "Found repeated word \"{0}\".",
    }

    def init(self) -> None:
        self.skip_words = DEFAULT_SKIP_WORDS | {w.lower() for w in self.get_set("list")}
        self._tokenizer = WhiteSpaceTokenizer()

    def validate(self, sentence: Sentence) -> List[ValidationError]:
        tokens = sentence.tokens or self._tokenizer.tokenize(sentence.content)
        seen = set()
        errors = []
        for token in tokens:
            if "symbol" in token.tags:
                continue
            word = token.surface.lower()
            if word in self.skip_words or word.isdigit():
                continue
            if word in seen:
                errors.append(self.create_error_with_position(
                    sentence, token.offset, token.offset + len(token.surface), token.surface
                ))
            else:
                seen.add(word)
        return errors


class StartWithCapitalLetterValidator(SentenceValidator):
    """
    Reports sentences starting with a lowercase Latin letter.

    Words in ``list`` (for example ``iPhone``) may start a sentence in
    lowercase.
    """

    DEFAULT_ATTRIBUTES = {"list": ""}
    MESSAGES = {
        "": "Sentence starts with a lowercase character \"{0}\".",
    }

    def init(self) -> None:
        self.whitelist = self.get_set("list")

    def validate(self, sentence: Sentence) -> List[ValidationError]:
        content = sentence.content
        stripped = content.lstrip()
        if not stripped:
            return []
        first = stripped[0]
        if not ("a" <= first <= "z"):
            return []
        if any(stripped.startswith(word) for word in self.whitelist):
            return []
        position = len(content) - len(stripped)
        return [self.create_error_with_position(sentence, position, position + 1, first)]


def _is_cjk(ch: str) -> bool:
    return (
        "\u3040" <= ch <= "\u30ff"  # kana
        or "\u3400" <= ch <= "\u4dbf"
        or "\u4e00" <= ch <= "\u9fff"  # ideographs
    )


class SpaceBetweenAlphabeticalWordValidator(SentenceValidator):
    """
    Checks spacing around Latin words embedded in CJK text.

    By default a space is required between a Latin word and adjacent CJK
    characters. With ``no_space`` set, such spaces are reported instead.
    """

    DEFAULT_ATTRIBUTES = {"no_space": False}
    MESSAGES = {
        "before": "Space is needed before the alphabetical word.",
        "after": "Space is needed after the alphabetical word.",
        "forbidden": "Space between an alphabetical word and CJK text is not allowed.",
    }

    def init(self) -> None:
        self.no_space = self.get_bool("no_space")

    def validate(self, sentence: Sentence) -> List[ValidationError]:
        content = sentence.content
        errors = []
        for i in range(len(content) - 1):
            left, right = content[i], content[i + 1]
            if self.no_space:
                errors.extend(self._check_forbidden(sentence, i))
            elif _is_cjk(left) and LATIN_LETTER.match(right):
                errors.append(self.create_error_with_position(
                    sentence, i, i + 2, message_key="before"
                ))
            elif LATIN_LETTER.match(left) and _is_cjk(right):
                errors.append(self.create_error_with_position(
                    sentence, i, i + 2, message_key="after"
                ))
        return errors

    def _check_forbidden(self, sentence: Sentence, i: int) -> List[ValidationError]:
        content = sentence.content
        if content[i + 1] != " " or i + 2 >= len(content):
            return []
        left, right = content[i], content[i + 2]
        if (_is_cjk(left) and LATIN_LETTER.match(right)) or (
            LATIN_LETTER.match(left) and _is_cjk(right)
        ):
            return [self.create_error_with_position(
                sentence, i + 1, i + 2, message_key="forbidden"
            )]
        return []
