"""Position-tracked source line.

A ``Line`` keeps every character of one physical input line together with
its original offset, a validity flag and an escape flag. Parsers erase
markup in place; the surviving characters are later folded into sentences
while their offsets still point into the unmodified source line.
"""

import logging
from typing import List, Tuple

from ..models.enums import EraseStyle


logger = logging.getLogger(__name__)

# Returned by char_at for escaped characters so they never match markup.
ESCAPED_CHARACTER = "\ufffe"

BOUNDARY_PUNCTUATION = frozenset("-.,:;!?\\/'\"()[]{}<>")


class Line:
    """
    One line of source text with per-character bookkeeping.

    Attributes:
        line_no: 1-based line number in the source.
        raw_text: The line exactly as read.
        section_level: Header level, 0 when the line is not a header.
        list_level: List nesting level, 0 when the line is not in a list.
        list_start: True when the line opens a list element.
        erased: True when the whole line was erased.
        links: ``(position, url)`` pairs found on the line.
    """

    def __init__(self, text: str, line_no: int, handle_escapes: bool = True):
        self.line_no = line_no
        self.raw_text = text
        self.section_level = 0
        self.list_level = 0
        self.list_start = False
        self.erased = False
        self.links: List[Tuple[int, str]] = []

        self._chars: List[str] = []
        self._offsets: List[int] = []
        self._valid: List[bool] = []
        self._escaped: List[bool] = []
        self._inline_markup: List[bool] = []

        i = 0
        while i < len(text):
            ch = text[i]
            escaped = False
            if handle_escapes and ch == "\\" and i + 1 < len(text):
                i += 1
                ch = text[i]
                escaped = True
            self._chars.append(ch)
            self._offsets.append(i)
            self._valid.append(True)
            self._escaped.append(escaped)
            self._inline_markup.append(False)
            i += 1

        while self._chars and self._chars[-1].isspace() and not self._escaped[-1]:
            for seq in (self._chars, self._offsets, self._valid, self._escaped,
                        self._inline_markup):
                seq.pop()

    def __len__(self) -> int:
        return len(self._chars)

    def __repr__(self) -> str:
        return f"Line({self.line_no}: {self.valid_text!r})"

    @property
    def text(self) -> str:
        """All characters after escape processing, erased ones included."""
        return "".join(self._chars)

    @property
    def valid_text(self) -> str:
        """Characters that survived erasure."""
        return "".join(c for c, v in zip(self._chars, self._valid) if v)

    def char_at(self, position: int, include_invalid: bool = False) -> str:
        """
        Return the character at ``position`` for markup matching.

        Out-of-range positions and erased characters yield an empty string;
        escaped characters yield ``ESCAPED_CHARACTER``.
        """
        if position < 0 or position >= len(self._chars):
            return ""
        if not self._valid[position] and not include_invalid:
            return ""
        if self._escaped[position]:
            return ESCAPED_CHARACTER
        return self._chars[position]

    def raw_char_at(self, position: int) -> str:
        if 0 <= position < len(self._chars):
            return self._chars[position]
        return ""

    def is_valid(self, position: int) -> bool:
        return 0 <= position < len(self._valid) and self._valid[position]

    def is_escaped(self, position: int) -> bool:
        return 0 <= position < len(self._escaped) and self._escaped[position]

    def is_inline_markup(self, position: int) -> bool:
        return 0 <= position < len(self._inline_markup) and self._inline_markup[position]

    def get_offset(self, position: int) -> int:
        """Original offset of ``position``; one past the end for ``len(line)``."""
        if 0 <= position < len(self._offsets):
            return self._offsets[position]
        if self._offsets:
            return self._offsets[-1] + 1
        return 0

    def is_empty(self) -> bool:
        """True when no visible character survived erasure."""
        return not any(
            v and not c.isspace() for c, v in zip(self._chars, self._valid)
        )

    def indentation(self) -> int:
        """Number of leading whitespace characters."""
        count = 0
        for ch in self._chars:
            if ch not in (" ", "\t"):
                break
            count += 1
        return count

    def starts_with(self, prefix: str, start: int = 0) -> bool:
        return all(self.char_at(start + i) == ch for i, ch in enumerate(prefix))

    def find(self, needle: str, start: int = 0) -> int:
        """Find ``needle`` among the valid, unescaped characters."""
        if not needle:
            return -1
        for i in range(max(start, 0), len(self._chars) - len(needle) + 1):
            if self.starts_with(needle, i):
                return i
        return -1

    # =========================================================================
    # Erasure
    # =========================================================================

    def erase(self, start: int, length: int) -> None:
        """Mark ``length`` characters from ``start`` as erased."""
        for i in range(max(start, 0), min(start + length, len(self._valid))):
            self._valid[i] = False

    def erase_all(self) -> None:
        self.erase(0, len(self._valid))
        self.erased = True

    def erase_segment(self, segment: str) -> int:
        """Erase every occurrence of ``segment``; return the number erased."""
        count = 0
        position = self.find(segment)
        while position >= 0:
            self.erase(position, len(segment))
            count += 1
            position = self.find(segment, position + len(segment))
        return count

    def mark_inline_markup(self, start: int, end: int) -> None:
        for i in range(max(start, 0), min(end, len(self._inline_markup))):
            self._inline_markup[i] = True

    def add_link(self, position: int, url: str) -> None:
        self.links.append((position, url))

    def erase_enclosure(
        self,
        open_delim: str,
        close_delim: str,
        style: EraseStyle,
        boundary: bool = False,
    ) -> int:
        """
        Erase every ``open_delim ... close_delim`` enclosure on the line.

        Args:
            open_delim: Opening delimiter.
            close_delim: Closing delimiter.
            style: What to erase (markers only, everything, or markers with
                the enclosed text tagged as inline markup).
            boundary: Require the delimiters to sit on word boundaries.

        Returns:
            Number of enclosures handled. Unterminated enclosures are left
            untouched.
        """
        count = 0
        start = 0
        while True:
            begin = self._find_delimiter(open_delim, start, True, boundary)
            if begin < 0:
                break
            content_start = begin + len(open_delim)
            end = self._find_delimiter(close_delim, content_start + 1, False, boundary)
            if end < 0:
                logger.debug(
                    f"Line {self.line_no}: unterminated '{open_delim}' at {begin}"
                )
                break
            self.erase(begin, len(open_delim))
            self.erase(end, len(close_delim))
            if style is EraseStyle.ALL:
                self.erase(content_start, end - content_start)
            elif style is EraseStyle.INLINE_MARKUP:
                self.mark_inline_markup(content_start, end)
            count += 1
            start = end + len(close_delim)
        return count

    def _find_delimiter(
        self, delim: str, start: int, opening: bool, boundary: bool
    ) -> int:
        position = self.find(delim, start)
        while position >= 0:
            if self._accepts_delimiter(delim, position, opening, boundary):
                return position
            position = self.find(delim, position + 1)
        return -1

    def _accepts_delimiter(
        self,
        delim: str,
        position: int,
        opening: bool,
        boundary: bool,
    ) -> bool:
        before = self.char_at(position - 1)
        after = self.char_at(position + len(delim))

        # "*" must not match one half of "**"
        if len(set(delim)) == 1 and (before == delim[0] or after == delim[0]):
            return False
        if not boundary:
            return True
        neighbour = after if opening else before
        if neighbour == "" or neighbour.isspace():
            return False
        return _is_boundary(before) if opening else _is_boundary(after)


def _is_boundary(ch: str) -> bool:
    return ch == "" or ch.isspace() or ch in BOUNDARY_PUNCTUATION
