"""Tokenizers and the tokenizer factory."""

from typing import Dict, Type

from ..interfaces.tokenizer import ITokenizer
from .whitespace import WhiteSpaceTokenizer

TOKENIZERS: Dict[str, Type[ITokenizer]] = {
    "whitespace": WhiteSpaceTokenizer,
}


def create_tokenizer(name: str = "whitespace") -> ITokenizer:
    """
    Create a tokenizer by configuration name.

    Raises:
        ValueError: If no tokenizer is registered under ``name``.
    """
    try:
        return TOKENIZERS[name]()
    except KeyError:
        raise ValueError(f"Unknown tokenizer '{name}', expected one of {sorted(TOKENIZERS)}")


__all__ = [
    "WhiteSpaceTokenizer",
    "TOKENIZERS",
    "create_tokenizer",
]
