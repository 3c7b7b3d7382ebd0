"""Validation error model reported by validators."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .document import LineOffset, Sentence
from .enums import Severity


@dataclass
class ValidationError:
    """
    A problem found by a validator.

    Validators never set ``file_name``; the pipeline stamps it when the
    error is collected.

    Attributes:
        validator_name: Name of the validator that reported the error.
        message: Human-readable description.
        line_number: Source line the error refers to.
        sentence: Offending sentence, when there is one.
        file_name: Name of the checked document.
        severity: Error or warning.
        start_position: Optional start of the offending span.
        end_position: Optional end of the offending span.
    """
    validator_name: str
    message: str
    line_number: int
    sentence: Optional[Sentence] = None
    file_name: Optional[str] = None
    severity: Severity = Severity.ERROR
    start_position: Optional[LineOffset] = None
    end_position: Optional[LineOffset] = None

    @property
    def offset(self) -> int:
        """Offset of the error start in its line."""
        if self.start_position is not None:
            return self.start_position.offset
        if self.sentence is not None:
            return self.sentence.start_position_offset
        return 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a JSON-friendly dictionary."""
        data: Dict[str, Any] = {
            "validator": self.validator_name,
            "message": self.message,
            "line_number": self.line_number,
            "offset": self.offset,
            "file_name": self.file_name,
            "severity": self.severity.value,
            "sentence": self.sentence.content if self.sentence else None,
        }
        if self.start_position is not None:
            data["start_position"] = {
                "line": self.start_position.line_num,
                "offset": self.start_position.offset,
            }
        if self.end_position is not None:
            data["end_position"] = {
                "line": self.end_position.line_num,
                "offset": self.end_position.offset,
            }
        return data
