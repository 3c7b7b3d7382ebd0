"""Enumerations for the document inspector."""

from enum import Enum


class DocumentFormat(Enum):
    """Markup formats supported by the parsers."""
    PLAIN = "plain"
    WIKI = "wiki"
    MARKDOWN = "markdown"
    REST = "rest"
    REVIEW = "review"


class EraseStyle(Enum):
    """How an enclosure of inline markup is removed from a line."""
    MARKERS = "markers"  # delimiters only
    ALL = "all"  # delimiters and enclosed text
    INLINE_MARKUP = "inline_markup"  # delimiters, enclosed text tagged


class ValidatorScope(Enum):
    """Granularity at which a validator is invoked by the pipeline."""
    SENTENCE = "sentence"
    SECTION = "section"
    DOCUMENT = "document"


class Severity(Enum):
    """Severity of a reported validation error."""
    ERROR = "error"
    WARNING = "warning"
