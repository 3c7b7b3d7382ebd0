"""Parser for plain text without markup."""

from typing import List

from .line import Line
from .line_parser import LineParser


class PlainTextParser(LineParser):
    """
    Plain text parser.

    Produces a single untitled section; blank lines separate paragraphs.
    Backslashes are ordinary characters in plain text.
    """

    handle_escapes = False

    def populate(self, text: str, lines: List[Line]) -> None:
        return None
