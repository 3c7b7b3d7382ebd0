"""Parser for wiki markup.

Recognized syntax:

- headers ``h1. Title`` to ``h6. Title``
- lists ``- item`` / ``-- nested`` and numbered ``# item`` / ``## nested``
- comment blocks ``[!-- ... --]``
- links ``[[label|url]]`` and ``[[url]]``
- inline markup ``**bold**``, ``//italic//``, ``__underline__``, ``--strike--``
"""

import logging
import re
from dataclasses import dataclass
from typing import List

from ..models.enums import EraseStyle
from .line import Line
from .line_parser import LineParser


logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^h([1-6])\.\s+")
LIST_PATTERN = re.compile(r"^([-#]+)\s+")
BEGIN_COMMENT_PATTERN = re.compile(r"^\s*\[!--")
END_COMMENT_PATTERN = re.compile(r"--\]\s*$")

INLINE_MARKUP = (
    ("**", "**"),
    ("//", "//"),
    ("__", "__"),
    ("--", "--"),
)


@dataclass
class WikiState:
    """Parse state carried from line to line."""
    in_comment: bool = False


class WikiParser(LineParser):
    """Line parser for wiki markup."""

    def populate(self, text: str, lines: List[Line]) -> None:
        state = WikiState()
        for line in lines:
            state = self.process_line(line, state)
        if state.in_comment:
            logger.warning("Unterminated wiki comment block; closed at end of input")

    def process_line(self, line: Line, state: WikiState) -> WikiState:
        text = line.text
        if state.in_comment:
            if END_COMMENT_PATTERN.search(text):
                state.in_comment = False
            line.erase_all()
            return state
        if BEGIN_COMMENT_PATTERN.match(text):
            begin = text.find("[!--")
            state.in_comment = END_COMMENT_PATTERN.search(text, begin + 4) is None
            line.erase_all()
            return state

        line.erase_enclosure("[!--", "--]", EraseStyle.ALL)

        header = HEADER_PATTERN.match(text)
        list_item = LIST_PATTERN.match(text)
        if header:
            line.erase(0, header.end())
            line.section_level = int(header.group(1))
        elif list_item and not line.is_escaped(0):
            line.erase(0, list_item.end())
            line.list_level = len(list_item.group(1))
            line.list_start = True

        self.erase_links(line)
        for open_delim, close_delim in INLINE_MARKUP:
            line.erase_enclosure(open_delim, close_delim, EraseStyle.MARKERS)
        return state

    @staticmethod
    def erase_links(line: Line) -> None:
        """Keep the label of ``[[label|url]]`` links and record their URL."""
        start = 0
        while True:
            begin = line.find("[[", start)
            if begin < 0:
                return
            end = line.find("]]", begin + 2)
            if end < 0:
                logger.debug(f"Line {line.line_no}: unterminated wiki link")
                return
            separator = line.find("|", begin + 2)
            text = line.text
            if 0 <= separator < end:
                url = text[separator + 1:end].strip()
                line.erase(begin, 2)
                line.erase(separator, end + 2 - separator)
            else:
                url = text[begin + 2:end].strip()
                line.erase(begin, 2)
                line.erase(end, 2)
            line.add_link(begin + 2, url)
            start = end + 2
