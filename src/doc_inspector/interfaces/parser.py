"""Document parser interface for the document inspector."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from ..models.document import Document

if TYPE_CHECKING:
    from ..parsers.sentence_extractor import SentenceExtractor
    from .tokenizer import ITokenizer


class IDocumentParser(ABC):
    """
    Abstract interface for document parsing.

    Implementations of this interface handle one markup format each and
    turn raw text into a Document tree.
    """

    @abstractmethod
    def parse(
        self,
        text: str,
        sentence_extractor: Optional["SentenceExtractor"] = None,
        file_name: Optional[str] = None,
        tokenizer: Optional["ITokenizer"] = None,
    ) -> Document:
        """
        Parse raw text and return its document tree.

        Args:
            text: Content of the input.
            sentence_extractor: Splits text into sentences; a default
                Latin extractor is used when omitted.
            file_name: Name recorded on the resulting Document.
            tokenizer: Optional tokenizer filling ``Sentence.tokens``.

        Returns:
            Document containing the parsed sections.
        """
        pass
