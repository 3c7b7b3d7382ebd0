"""Abstract interfaces for the document inspector components."""

from .parser import IDocumentParser
from .tokenizer import ITokenizer
from .validator import (
    DocumentValidator,
    SectionValidator,
    SentenceValidator,
    Validator,
)

__all__ = [
    "IDocumentParser",
    "ITokenizer",
    "Validator",
    "SentenceValidator",
    "SectionValidator",
    "DocumentValidator",
]
