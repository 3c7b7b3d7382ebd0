"""Errors raised while turning input text into a document tree."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ParseError(Exception):
    """
    Base class for input errors.

    Parsers never raise on malformed markup; they log and recover. Only
    problems reaching the text at all (unknown format, undecodable file)
    end up here.

    Attributes:
        message: What went wrong.
        file_path: Input file, when the text came from one.
        location: Where the problem was found ("byte 12", "file extension").
        details: Machine-readable context.
    """
    message: str
    file_path: Optional[str] = None
    location: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        text = f"{self.file_path}: {self.message}" if self.file_path else self.message
        if self.location:
            text += f" ({self.location})"
        return text

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "error_type": type(self).__name__,
            "message": self.message,
        }
        if self.file_path:
            data["file_path"] = self.file_path
        if self.location:
            data["location"] = self.location
        if self.details:
            data["details"] = dict(self.details)
        return data


@dataclass
class DocumentReadError(ParseError):
    """The file exists but its bytes are not valid UTF-8 text."""


@dataclass
class UnsupportedFormatError(ParseError):
    """Unknown format name or file extension."""

    def get_supported_formats(self) -> List[str]:
        return list(self.details.get("supported_formats", []))
