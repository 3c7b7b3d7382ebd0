"""Parser for Markdown.

Block structure comes from markdown-it-py: its block tokens carry the
source line range of every heading, list item, quote, code block and
table. That structure is transferred onto the position-tracked lines.
Inline markup is then erased by walking the children of each ``inline``
token, so only delimiters markdown-it actually recognized are removed and
sentence offsets still point into the original text.
"""

import logging
import re
from typing import List, Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..models.document import SuppressRule
from .line import Line
from .line_parser import LineParser


logger = logging.getLogger(__name__)

ERASED_BLOCKS = frozenset({"fence", "code_block", "html_block", "hr", "table_open"})

SUPPRESS_PATTERN = re.compile(r"^\s*<!--\s*@suppress\b(.*?)-->\s*$")


class InlineCursor:
    """
    Forward-only walk over the surviving characters of one inline token.

    The lines of the token are flattened into ``(line, position)`` entries;
    a ``(None, -1)`` entry stands for each line break. Markup located
    through the cursor is erased on the owning lines.
    """

    def __init__(self, lines: List[Line]):
        self.entries: List[Tuple[Optional[Line], int]] = []
        for index, line in enumerate(lines):
            if index > 0:
                self.entries.append((None, -1))
            self.entries.extend(
                (line, position) for position in range(len(line)) if line.is_valid(position)
            )
        self.index = 0

    def char(self, index: int, markup: bool = True) -> str:
        """Character at ``index``; with ``markup`` escaped characters never match."""
        if not 0 <= index < len(self.entries):
            return ""
        line, position = self.entries[index]
        if line is None:
            return "\n"
        return line.char_at(position) if markup else line.raw_char_at(position)

    def _match(self, start: int, needle: str) -> int:
        index = start
        for ch in needle:
            if ch == "\n":
                if self.char(index) != "\n":
                    return -1
                index += 1
                # continuation lines lose their indentation in token content
                while self.char(index) in (" ", "\t"):
                    index += 1
            elif self.char(index) != ch:
                return -1
            else:
                index += 1
        return index

    def find(self, needle: str, exact_run: bool = False) -> Optional[Tuple[int, int]]:
        """
        Locate ``needle`` at or after the cursor.

        Args:
            needle: Markup to find.
            exact_run: Reject matches that are part of a longer run of the
                same character (code span backticks).

        Returns:
            ``(start, end)`` entry indices, or None.
        """
        for start in range(self.index, len(self.entries)):
            end = self._match(start, needle)
            if end < 0:
                continue
            if exact_run and needle[0] in (self.char(start - 1), self.char(end)):
                continue
            return start, end
        return None

    def skip(self, text: str) -> None:
        """Move past literal ``text``; characters absent from the source are ignored."""
        for ch in text:
            for index in range(self.index, len(self.entries)):
                if self.char(index, markup=False) == ch:
                    self.index = index + 1
                    break

    def erase(self, start: int, end: int) -> None:
        for line, position in self.entries[start:end]:
            if line is not None:
                line.erase(position, 1)

    def consume(self, needle: str) -> bool:
        """Erase the next ``needle`` and move past it."""
        found = self.find(needle)
        if found is None:
            return False
        self.erase(*found)
        self.index = found[1]
        return True

    def add_link(self, index: int, url: str) -> None:
        line, position = self.entries[index]
        if line is not None:
            line.add_link(position + 1, url)

    def bracket_tail(self, close: int) -> int:
        """End index of the ``(destination)`` or ``[label]`` following ``]``."""
        index = close + 1
        opener = self.char(index)
        if opener == "(":
            depth = 0
            while index < len(self.entries):
                ch = self.char(index)
                if ch == "(":
                    depth += 1
                elif ch == ")":
                    depth -= 1
                    if depth == 0:
                        return index + 1
                index += 1
        elif opener == "[":
            for index in range(close + 2, len(self.entries)):
                if self.char(index) == "]":
                    return index + 1
        return close + 1


class MarkdownParser(LineParser):
    """Markdown parser built on the markdown-it-py token stream."""

    def __init__(self, markdown: Optional[MarkdownIt] = None):
        self._markdown = markdown or MarkdownIt("commonmark").enable(
            ["table", "strikethrough"]
        )

    def find_suppress_rules(self, lines: List[Line]) -> List[SuppressRule]:
        """Collect ``<!-- @suppress [Validator ...] -->`` comments."""
        rules = []
        for line in lines:
            match = SUPPRESS_PATTERN.match(line.raw_text)
            if match:
                rules.append(SuppressRule.from_comment(line.line_no, match.group(1).split()))
        return rules

    def populate(self, text: str, lines: List[Line]) -> None:
        tokens = self._markdown.parse(text)

        covered = [False] * len(lines)
        depth = 0
        for token in tokens:
            if token.map:
                for number in range(token.map[0], min(token.map[1], len(lines))):
                    covered[number] = True

            if token.type in ("bullet_list_open", "ordered_list_open"):
                depth += 1
            elif token.type in ("bullet_list_close", "ordered_list_close"):
                depth -= 1
            elif token.type == "list_item_open":
                self._mark_list_item(lines, token, depth)
            elif token.type == "heading_open":
                self._mark_heading(lines, token)
            elif token.type == "blockquote_open":
                for line in self._lines_of(lines, token):
                    self._erase_quote_marker(line)
            elif token.type in ERASED_BLOCKS:
                for line in self._lines_of(lines, token):
                    line.erase_all()
            elif token.type == "inline":
                self.erase_inline_markup(self._lines_of(lines, token), token)

        # reference definitions and other lines outside every block
        for number, line in enumerate(lines):
            if not covered[number]:
                line.erase_all()

    @staticmethod
    def _lines_of(lines: List[Line], token: Token) -> List[Line]:
        if not token.map:
            return []
        return lines[token.map[0]:token.map[1]]

    @staticmethod
    def _first_visible(line: Line) -> int:
        for position in range(len(line)):
            ch = line.char_at(position)
            if ch and not ch.isspace():
                return position
        return -1

    @staticmethod
    def _erase_spaces(line: Line, position: int) -> int:
        while line.char_at(position) in (" ", "\t"):
            line.erase(position, 1)
            position += 1
        return position

    def _mark_heading(self, lines: List[Line], token: Token) -> None:
        heading_lines = self._lines_of(lines, token)
        if not heading_lines:
            return
        level = int(token.tag[1])
        title = heading_lines[0]

        if token.markup and token.markup[0] == "#":
            start = self._first_visible(title)
            end = start
            while title.char_at(end) == "#":
                end += 1
            title.erase(start, end - start)
            self._erase_spaces(title, end)
            # optional closing sequence
            last = len(title) - 1
            if title.char_at(last) == "#":
                position = last
                while title.char_at(position) == "#":
                    position -= 1
                if title.char_at(position) in (" ", "\t", ""):
                    title.erase(position + 1, last - position)
                    while title.char_at(position) in (" ", "\t"):
                        title.erase(position, 1)
                        position -= 1
        else:
            heading_lines[-1].erase_all()
        title.section_level = level

    def _mark_list_item(self, lines: List[Line], token: Token, depth: int) -> None:
        item_lines = self._lines_of(lines, token)
        if not item_lines:
            return
        first = item_lines[0]
        start = self._first_visible(first)
        if start < 0:
            return
        end = start
        if token.markup in ("-", "*", "+"):
            end = start + 1
        else:
            while first.char_at(end).isdigit():
                end += 1
            end += 1
        first.erase(start, end - start)
        self._erase_spaces(first, end)
        first.list_start = True
        first.list_level = depth

        # nested items are marked later and override these values
        for line in item_lines[1:]:
            if line.list_start:
                continue
            line.list_level = depth
            self._erase_spaces(line, 0)

    def _erase_quote_marker(self, line: Line) -> None:
        position = self._first_visible(line)
        if position >= 0 and line.char_at(position) == ">":
            line.erase(position, 1)
            if line.char_at(position + 1) == " ":
                line.erase(position + 1, 1)

    # =========================================================================
    # Inline markup
    # =========================================================================

    def erase_inline_markup(self, lines: List[Line], token: Token) -> None:
        """
        Erase the markup of one ``inline`` token from its lines.

        Code span contents are skipped as a whole, so delimiters inside them
        stay in the text. Images are dropped, links keep their label and
        record their destination, inline HTML tags are removed.
        """
        cursor = InlineCursor(lines)
        open_links: List[str] = []
        for child in token.children or []:
            kind = child.type
            if kind in ("text", "text_special"):
                cursor.skip(child.content)
            elif kind == "code_inline":
                self._erase_code_span(cursor, child.markup)
            elif kind in ("softbreak", "hardbreak"):
                self._pass_line_break(cursor, kind == "hardbreak")
            elif kind == "html_inline":
                cursor.consume(child.content)
            elif kind == "image":
                self._erase_image(cursor, child)
            elif kind == "link_open":
                opener = "<" if child.markup == "autolink" else "["
                open_links.append(opener)
                found = cursor.find(opener)
                if found is not None:
                    cursor.erase(*found)
                    cursor.add_link(found[0], child.attrGet("href") or "")
                    cursor.index = found[1]
            elif kind == "link_close":
                opener = open_links.pop() if open_links else "["
                if opener == "<":
                    cursor.consume(">")
                else:
                    self._erase_link_tail(cursor)
            elif child.markup and kind.endswith(("_open", "_close")):
                # emphasis, strong emphasis and strikethrough delimiters
                if not cursor.consume(child.markup):
                    logger.debug(f"Delimiter {child.markup!r} of {kind} not found in source")

    @staticmethod
    def _erase_code_span(cursor: InlineCursor, markup: str) -> None:
        opening = cursor.find(markup, exact_run=True)
        if opening is None:
            return
        cursor.erase(*opening)
        cursor.index = opening[1]
        closing = cursor.find(markup, exact_run=True)
        if closing is None:
            return
        cursor.erase(*closing)
        cursor.index = closing[1]

    @staticmethod
    def _pass_line_break(cursor: InlineCursor, hard: bool) -> None:
        found = cursor.find("\n")
        if found is None:
            return
        start, end = found
        if hard and cursor.char(start - 1) == "\\":
            cursor.erase(start - 1, start)
        cursor.index = end

    @staticmethod
    def _erase_link_tail(cursor: InlineCursor) -> None:
        found = cursor.find("]")
        if found is None:
            return
        end = cursor.bracket_tail(found[0])
        cursor.erase(found[0], end)
        cursor.index = end

    @staticmethod
    def _erase_image(cursor: InlineCursor, token: Token) -> None:
        found = cursor.find("![")
        if found is None:
            return
        start = found[0]
        cursor.index = found[1]
        # token content is the raw alt text
        cursor.skip(token.content)
        close = cursor.find("]")
        if close is None:
            return
        end = cursor.bracket_tail(close[0])
        cursor.erase(start, end)
        cursor.index = end
