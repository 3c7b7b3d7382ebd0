"""Document parser facade."""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..interfaces.parser import IDocumentParser
from ..interfaces.tokenizer import ITokenizer
from ..models.document import Document
from ..models.enums import DocumentFormat
from .exceptions import DocumentReadError, UnsupportedFormatError
from .markdown_parser import MarkdownParser
from .plain_parser import PlainTextParser
from .rest_parser import ReSTParser
from .review_parser import ReVIEWParser
from .sentence_extractor import SentenceExtractor
from .serialization import DocumentSerializer
from .wiki_parser import WikiParser


logger = logging.getLogger(__name__)

EXTENSIONS: Dict[str, DocumentFormat] = {
    ".txt": DocumentFormat.PLAIN,
    ".text": DocumentFormat.PLAIN,
    ".wiki": DocumentFormat.WIKI,
    ".md": DocumentFormat.MARKDOWN,
    ".markdown": DocumentFormat.MARKDOWN,
    ".rst": DocumentFormat.REST,
    ".rest": DocumentFormat.REST,
    ".re": DocumentFormat.REVIEW,
}


class DocumentParser:
    """
    Main document parser that delegates to format-specific parsers.

    Provides a unified API for parsing text in any supported markup
    format, from a string or from a file.
    """

    def __init__(self):
        self._parsers: Dict[DocumentFormat, IDocumentParser] = {
            DocumentFormat.PLAIN: PlainTextParser(),
            DocumentFormat.WIKI: WikiParser(),
            DocumentFormat.MARKDOWN: MarkdownParser(),
            DocumentFormat.REST: ReSTParser(),
            DocumentFormat.REVIEW: ReVIEWParser(),
        }
        self._serializer = DocumentSerializer()

    def get_parser(self, document_format: Union[str, DocumentFormat]) -> IDocumentParser:
        """
        Get the parser for a format.

        Raises:
            UnsupportedFormatError: If the format is not supported.
        """
        return self._parsers[self.resolve_format(document_format)]

    def resolve_format(self, document_format: Union[str, DocumentFormat]) -> DocumentFormat:
        if isinstance(document_format, DocumentFormat):
            return document_format
        try:
            return DocumentFormat(str(document_format).lower())
        except ValueError:
            raise UnsupportedFormatError(
                message=f"Unsupported document format: {document_format}",
                location="format",
                details={"supported_formats": self.get_supported_formats()},
            )

    def parse(
        self,
        text: str,
        document_format: Union[str, DocumentFormat] = DocumentFormat.PLAIN,
        sentence_extractor: Optional[SentenceExtractor] = None,
        file_name: Optional[str] = None,
        tokenizer: Optional[ITokenizer] = None,
    ) -> Document:
        """
        Parse text in the given format.

        Args:
            text: Document text.
            document_format: Format name or DocumentFormat.
            sentence_extractor: Extractor splitting text into sentences.
            file_name: Name recorded on the document.
            tokenizer: Tokenizer used to fill sentence tokens.

        Returns:
            The parsed Document.

        Raises:
            UnsupportedFormatError: If the format is not supported.
        """
        parser = self.get_parser(document_format)
        return parser.parse(
            text,
            sentence_extractor=sentence_extractor,
            file_name=file_name,
            tokenizer=tokenizer,
        )

    def parse_file(
        self,
        file_path: Union[str, Path],
        document_format: Optional[Union[str, DocumentFormat]] = None,
        sentence_extractor: Optional[SentenceExtractor] = None,
        tokenizer: Optional[ITokenizer] = None,
    ) -> Document:
        """
        Read and parse a UTF-8 document.

        The format is detected from the file extension unless given.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the format is not supported.
            DocumentReadError: If the file is not valid UTF-8.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if document_format is None:
            document_format = self.detect_document_format(str(path))

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentReadError(
                message="Document is not valid UTF-8",
                file_path=str(path),
                location=f"byte {e.start}",
                details={"reason": e.reason},
            )

        logger.info(f"Parsing {path} as {self.resolve_format(document_format).value}")
        return self.parse(
            text,
            document_format,
            sentence_extractor=sentence_extractor,
            file_name=str(path),
            tokenizer=tokenizer,
        )

    def serialize(self, doc: Document) -> str:
        """Serialize a Document to a JSON string."""
        return self._serializer.serialize(doc)

    def deserialize(self, json_str: str) -> Document:
        """
        Deserialize a JSON string to a Document.

        Raises:
            ValueError: If the JSON is invalid or malformed.
        """
        return self._serializer.deserialize(json_str)

    def get_supported_formats(self) -> list[str]:
        """Return list of supported format names."""
        return [f.value for f in DocumentFormat]

    def detect_document_format(self, file_path: str) -> DocumentFormat:
        """
        Detect the document format from the file extension.

        Raises:
            UnsupportedFormatError: If the extension is not recognized.
        """
        suffix = Path(file_path).suffix.lower()
        if suffix in EXTENSIONS:
            return EXTENSIONS[suffix]
        raise UnsupportedFormatError(
            message=f"Unsupported file extension: {suffix}",
            file_path=file_path,
            location="file extension",
            details={"supported_formats": sorted(EXTENSIONS)},
        )
