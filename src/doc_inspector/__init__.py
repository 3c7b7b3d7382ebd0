"""
Doc Inspector

A prose linter for plain text, wiki, Markdown, reStructuredText and Re:VIEW
documents.
"""

__version__ = "0.1.0"

from .config import (
    Configuration,
    ConfigurationError,
    ConfigurationManager,
    SymbolTable,
    ValidatorConfiguration,
)
from .formatters import create_formatter
from .models.document import (
    Document,
    DocumentBuilder,
    DocumentCollection,
    ListBlock,
    Paragraph,
    Section,
    Sentence,
    SuppressRule,
)
from .models.enums import DocumentFormat, Severity, ValidatorScope
from .models.validation import ValidationError
from .parsers import DocumentParser, SentenceExtractor
from .pipeline import PipelineStats, ValidationPipeline
from .validators import ValidatorFactory, get_validator_factory

__all__ = [
    "Configuration",
    "ConfigurationError",
    "ConfigurationManager",
    "SymbolTable",
    "ValidatorConfiguration",
    "create_formatter",
    "Document",
    "DocumentBuilder",
    "DocumentCollection",
    "ListBlock",
    "Paragraph",
    "Section",
    "Sentence",
    "SuppressRule",
    "DocumentFormat",
    "Severity",
    "ValidatorScope",
    "ValidationError",
    "DocumentParser",
    "SentenceExtractor",
    "PipelineStats",
    "ValidationPipeline",
    "ValidatorFactory",
    "get_validator_factory",
]
