"""Document parsers for the document inspector."""

from .base import DocumentParser
from .exceptions import DocumentReadError, ParseError, UnsupportedFormatError
from .line import Line
from .line_parser import LineParser
from .markdown_parser import MarkdownParser
from .plain_parser import PlainTextParser
from .rest_parser import ReSTParser
from .review_parser import ReVIEWParser
from .sentence_extractor import (
    EndOfSentenceDetector,
    SentenceExtractor,
    find_sentence_end,
)
from .serialization import DocumentSerializer, deserialize_document, serialize_document
from .wiki_parser import WikiParser

__all__ = [
    "DocumentParser",
    "Line",
    "LineParser",
    "PlainTextParser",
    "WikiParser",
    "MarkdownParser",
    "ReSTParser",
    "ReVIEWParser",
    "EndOfSentenceDetector",
    "SentenceExtractor",
    "find_sentence_end",
    "DocumentSerializer",
    "serialize_document",
    "deserialize_document",
    "ParseError",
    "DocumentReadError",
    "UnsupportedFormatError",
]
