"""Built-in validators and the validator factory."""

from .document import FrequentSentenceStartValidator
from .factory import BUILTIN_VALIDATORS, ValidatorFactory, get_validator_factory
from .section import (
    ParagraphNumberValidator,
    ParagraphStartWithValidator,
    SectionLengthValidator,
)
from .sentence import (
    CommaNumberValidator,
    DoubledWordValidator,
    InvalidExpressionValidator,
    InvalidSymbolValidator,
    SentenceLengthValidator,
    SpaceBetweenAlphabeticalWordValidator,
    StartWithCapitalLetterValidator,
)

__all__ = [
    "ValidatorFactory",
    "get_validator_factory",
    "BUILTIN_VALIDATORS",
    # Sentence validators
    "SentenceLengthValidator",
    "CommaNumberValidator",
    "InvalidSymbolValidator",
    "InvalidExpressionValidator",
    "DoubledWordValidator",
    "StartWithCapitalLetterValidator",
    "SpaceBetweenAlphabeticalWordValidator",
    # Section validators
    "SectionLengthValidator",
    "ParagraphNumberValidator",
    "ParagraphStartWithValidator",
    # Document validators
    "FrequentSentenceStartValidator",
]
