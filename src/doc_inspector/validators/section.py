"""Section-level validators."""

from typing import List, Optional

from ..interfaces.validator import SectionValidator
from ..models.document import Section, Sentence
from ..models.validation import ValidationError


def _first_sentence(section: Section) -> Optional[Sentence]:
    """Header sentence of the section, or its first sentence of any kind."""
    return next(section.iter_sentences(), None)


class SectionLengthValidator(SectionValidator):
    """Reports sections whose paragraphs hold more than ``max_num`` characters."""

    DEFAULT_ATTRIBUTES = {"max_num": 1000}
    MESSAGES = {
        "": "The number of characters in the section ({0}) exceeds the maximum of {1}.",
    }

    def init(self) -> None:
        self.max_num = self.get_int("max_num")

    def validate(self, section: Section) -> List[ValidationError]:
        length = sum(
            len(sentence.content)
            for paragraph in section.paragraphs
            for sentence in paragraph.sentences
        )
        if length > self.max_num:
            return [self.create_error(_first_sentence(section), length, self.max_num)]
        return []


class ParagraphNumberValidator(SectionValidator):
    """Reports sections with more than ``max_num`` paragraphs."""

    DEFAULT_ATTRIBUTES = {"max_num": 5}
    MESSAGES = {
        "": "The number of paragraphs in the section ({0}) exceeds the maximum of {1}.",
    }

    def init(self) -> None:
        self.max_num = self.get_int("max_num")

    def validate(self, section: Section) -> List[ValidationError]:
        count = len(section.paragraphs)
        if count > self.max_num:
            return [self.create_error(_first_sentence(section), count, self.max_num)]
        return []


class ParagraphStartWithValidator(SectionValidator):
    """Reports paragraphs whose first sentence does not start with ``start_from``."""

    DEFAULT_ATTRIBUTES = {"start_from": ""}
    MESSAGES = {
        "": "Paragraph does not start with \"{0}\".",
    }

    def init(self) -> None:
        self.start_from = self.get_str("start_from")

    def validate(self, section: Section) -> List[ValidationError]:
        errors = []
        for paragraph in section.paragraphs:
            if not paragraph.sentences:
                continue
            first = paragraph.sentences[0]
            if not first.content.startswith(self.start_from):
                errors.append(self.create_error(first, self.start_from))
        return errors
