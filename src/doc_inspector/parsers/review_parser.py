"""Parser for Re:VIEW.

Recognized syntax:

- headers ``=`` to ``=====`` with optional ``[tag]`` and ``{label}``
- bullet lists `` * item`` / `` ** nested``, numbered lists `` 1. item``
- definition lists: `` : term`` followed by the description line
- block commands ``//name[arg]{ ... //}`` and single-line ``//name[arg]``
- ``#@`` preprocessor comments and ``//@Suppress@ [Validator ...]`` suppress comments
- inline commands ``@<name>{...}``
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List

from .line import Line
from .line_parser import LineParser


logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r"^(={1,5})(\[[^\]]*\])?(\{[^}]*\})?(\s+|$)")
BULLET_PATTERN = re.compile(r"^\s+(\*+)\s+")
NUMBERED_PATTERN = re.compile(r"^\s+\d+\.\s+")
DEFINITION_PATTERN = re.compile(r"^\s+:\s+")
BLOCK_PATTERN = re.compile(r"^//(\w+)")
BLOCK_END = "//}"
INLINE_COMMAND_PATTERN = re.compile(r"@<(\w+)>\{")

# inline commands whose whole content is dropped
ERASED_COMMANDS = frozenset({"fn", "comment", "m", "balloon"})
# inline commands of the form {main, secondary}; only the main part is kept
PAIRED_COMMANDS = frozenset({"kw", "ruby"})


@dataclass
class ReviewBlock:
    """A ``//name[arg1][arg2]{`` block command."""
    type: str = ""
    properties: List[str] = field(default_factory=list)
    is_open: bool = False


@dataclass
class ReviewState:
    """Parse state carried from line to line."""
    in_block: bool = False
    block_type: str = ""
    in_definition: bool = False


def parse_block(text: str) -> ReviewBlock:
    """Parse the header of a ``//`` block command."""
    block = ReviewBlock()
    match = BLOCK_PATTERN.match(text)
    if match is None:
        return block
    block.type = match.group(1)
    rest = text[match.end():]
    while rest.startswith("["):
        close = rest.find("]")
        if close < 0:
            break
        block.properties.append(rest[1:close])
        rest = rest[close + 1:]
    block.is_open = rest.rstrip().endswith("{")
    return block


class ReVIEWParser(LineParser):
    """Line parser for Re:VIEW."""

    suppress_comments = True

    def populate(self, text: str, lines: List[Line]) -> None:
        state = ReviewState()
        for line in lines:
            if line.erased:
                continue
            state = self.process_line(line, state)
        if state.in_block:
            logger.warning(f"Unterminated //{state.block_type} block; closed at end of input")

    def process_line(self, line: Line, state: ReviewState) -> ReviewState:
        text = line.text

        if state.in_block:
            if text.strip() == BLOCK_END:
                state.in_block = False
                state.block_type = ""
            line.erase_all()
            return state

        if text.startswith("//"):
            block = parse_block(text)
            line.erase_all()
            if block.is_open:
                logger.debug(f"Line {line.line_no}: start of //{block.type} block")
                state.in_block = True
                state.block_type = block.type
            return state

        if text.startswith("#@"):
            line.erase_all()
            return state

        header = HEADER_PATTERN.match(text)
        if header:
            if header.group(2) and header.group(2).startswith("[/"):
                # closing tag such as "===[/column]"
                line.erase_all()
                return state
            line.erase(0, header.end())
            line.section_level = len(header.group(1))
            state.in_definition = False
        elif self.classify_list(line, state):
            pass
        elif state.in_definition and not line.is_empty():
            line.list_start = True
            line.list_level = 1
            state.in_definition = False

        self.erase_inline_commands(line)
        return state

    @staticmethod
    def classify_list(line: Line, state: ReviewState) -> bool:
        """Mark list items; returns True when the line belongs to a list."""
        text = line.text
        bullet = BULLET_PATTERN.match(text)
        if bullet:
            line.erase(0, bullet.end())
            line.list_start = True
            line.list_level = len(bullet.group(1))
            return True
        numbered = NUMBERED_PATTERN.match(text)
        if numbered:
            line.erase(0, numbered.end())
            line.list_start = True
            line.list_level = 1
            return True
        if DEFINITION_PATTERN.match(text):
            # the term is dropped; the next line is the list element
            line.erase_all()
            state.in_definition = True
            return True
        return False

    @staticmethod
    def erase_inline_commands(line: Line) -> None:
        """Reduce ``@<name>{...}`` commands to the text they display."""
        text = line.text
        for match in INLINE_COMMAND_PATTERN.finditer(text):
            begin = match.start()
            if line.char_at(begin) != "@":
                continue
            close = line.find("}", match.end())
            if close < 0:
                logger.debug(f"Line {line.line_no}: unterminated @<{match.group(1)}>")
                continue
            name = match.group(1)
            content_start = match.end()
            line.erase(begin, content_start - begin)
            line.erase(close, 1)

            if name in ERASED_COMMANDS:
                line.erase(content_start, close - content_start)
            elif name == "href":
                ReVIEWParser._erase_href(line, text, content_start, close)
            elif name in PAIRED_COMMANDS:
                comma = line.find(",", content_start)
                if 0 <= comma < close:
                    line.erase(comma, close - comma)
            elif name == "raw":
                bar = line.find("|", content_start)
                if 0 <= bar < close:
                    line.erase(content_start, bar + 1 - content_start)

    @staticmethod
    def _erase_href(line: Line, text: str, start: int, close: int) -> None:
        """``@<href>{url, label}`` keeps the label, ``@<href>{url}`` the URL."""
        comma = line.find(",", start)
        if 0 <= comma < close:
            url = text[start:comma].strip()
            label_start = comma + 1
            while line.char_at(label_start) == " ":
                label_start += 1
            line.erase(start, label_start - start)
            line.add_link(label_start, url)
        else:
            line.add_link(start, text[start:close].strip())
