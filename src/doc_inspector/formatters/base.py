"""Base class of the result formatters."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.document import Document, Sentence
from ..models.validation import ValidationError


ValidationResults = Sequence[Tuple[Document, List[ValidationError]]]


@dataclass
class SentenceErrors:
    """Errors reported on one sentence (or on no sentence at all)."""
    sentence: Optional[Sentence]
    line: int
    offset: int
    errors: List[ValidationError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sentence": self.sentence.content if self.sentence else None,
            "position": {"line": self.line, "offset": self.offset},
            "errors": [
                {
                    key: value
                    for key, value in error.to_dict().items()
                    if key not in ("sentence", "file_name")
                }
                for error in self.errors
            ],
        }


def _sort_key(error: ValidationError) -> Tuple[int, int, str]:
    content = error.sentence.content if error.sentence else ""
    if error.sentence is not None:
        return error.sentence.line_number, error.sentence.start_position_offset, content
    return error.line_number, error.offset, content


def group_by_sentence(errors: List[ValidationError]) -> List[SentenceErrors]:
    """
    Group errors per sentence, ordered by line, offset and content.

    Errors of the same sentence keep the order in which they were reported.
    """
    groups: List[SentenceErrors] = []
    index: Dict[int, SentenceErrors] = {}
    for error in sorted(errors, key=_sort_key):
        key = id(error.sentence) if error.sentence is not None else -error.line_number - 1
        group = index.get(key)
        if group is None:
            line, offset, _ = _sort_key(error)
            group = SentenceErrors(sentence=error.sentence, line=line, offset=offset)
            index[key] = group
            groups.append(group)
        group.errors.append(error)
    return groups


def document_name(document: Document) -> str:
    return document.file_name or "<input>"


class Formatter(ABC):
    """Renders validation results as text."""

    @abstractmethod
    def format(self, results: ValidationResults) -> str:
        """
        Render the errors of every document.

        Args:
            results: ``(document, errors)`` pairs in document order.

        Returns:
            The rendered report.
        """
        pass
