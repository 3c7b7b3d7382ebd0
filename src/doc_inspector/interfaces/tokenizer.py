"""Tokenizer interface for the document inspector."""

from abc import ABC, abstractmethod
from typing import List

from ..models.token import TokenElement


class ITokenizer(ABC):
    """
    Abstract interface for word tokenizers.

    Tokenizers are pluggable; language-specific analyzers implement this
    interface and are selected by the configuration.
    """

    @abstractmethod
    def tokenize(self, text: str) -> List[TokenElement]:
        """
        Split text into tokens.

        Args:
            text: Sentence content.

        Returns:
            Tokens in order of appearance, each with its offset in ``text``.
        """
        pass
