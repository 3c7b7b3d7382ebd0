"""Result formatters."""

from typing import Dict, Type

from .base import Formatter, SentenceErrors, group_by_sentence
from .json_formatter import JsonFormatter
from .plain import PlainFormatter
from .xml_formatter import XmlFormatter

FORMATTERS: Dict[str, Type[Formatter]] = {
    "plain": PlainFormatter,
    "json": JsonFormatter,
    "xml": XmlFormatter,
}


def create_formatter(name: str = "plain") -> Formatter:
    """
    Create a formatter by name.

    Raises:
        ValueError: If no formatter is registered under ``name``.
    """
    try:
        return FORMATTERS[name]()
    except KeyError:
        raise ValueError(f"Unknown result format '{name}', expected one of {sorted(FORMATTERS)}")


__all__ = [
    "Formatter",
    "SentenceErrors",
    "group_by_sentence",
    "PlainFormatter",
    "JsonFormatter",
    "XmlFormatter",
    "FORMATTERS",
    "create_formatter",
]
