"""Data models and enums for the document inspector."""

from .enums import DocumentFormat, EraseStyle, Severity, ValidatorScope
from .document import (
    Document,
    DocumentBuilder,
    DocumentCollection,
    LineOffset,
    ListBlock,
    ListElement,
    Paragraph,
    Section,
    Sentence,
    SuppressRule,
)
from .token import TokenElement
from .validation import ValidationError

__all__ = [
    # Enums
    "DocumentFormat",
    "EraseStyle",
    "Severity",
    "ValidatorScope",
    # Document tree
    "Document",
    "DocumentBuilder",
    "DocumentCollection",
    "LineOffset",
    "ListBlock",
    "ListElement",
    "Paragraph",
    "Section",
    "Sentence",
    "SuppressRule",
    "TokenElement",
    # Validation
    "ValidationError",
]
