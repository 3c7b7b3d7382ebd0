"""Plain text formatter."""

from typing import List

from .base import Formatter, ValidationResults, document_name, group_by_sentence


class PlainFormatter(Formatter):
    """
    Human-readable report.

    Example::

        doc.md
          2:0 "This is a long sentence."
            SentenceLength: The length of the sentence (24) exceeds the maximum of 5.
    """

    def format(self, results: ValidationResults) -> str:
        lines: List[str] = []
        for document, errors in results:
            if not errors:
                lines.append(f"{document_name(document)}: no errors")
                continue
            lines.append(f"{document_name(document)}: {len(errors)} errors")
            for group in group_by_sentence(errors):
                content = group.sentence.content if group.sentence else ""
                lines.append(f"  {group.line}:{group.offset} \"{content}\"")
                for error in group.errors:
                    lines.append(f"    {error.validator_name}: {error.message}")
        return "\n".join(lines) + "\n"
