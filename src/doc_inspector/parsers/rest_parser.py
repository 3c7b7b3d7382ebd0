"""Parser for reStructuredText.

Sections are found in a first pass over the lines, since a title depends
on the adornment lines around it. A second pass folds a :class:`RestState`
through the remaining lines to classify lists and to erase blocks that are
not prose (directives, comments, tables, literal blocks).
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..models.enums import EraseStyle
from .line import Line
from .line_parser import LineParser


logger = logging.getLogger(__name__)

# (adornment character, has overline, section level)
ADORNMENT_LEVELS = (
    ("#", True, 1),
    ("*", True, 2),
    ("=", True, 3),
    ("=", False, 4),
    ("-", True, 0),  # subtitle
    ("-", False, 5),
    ("~", True, 6),
    ("~", False, 7),
    ("^", True, 8),
    ("^", False, 9),
)
ADORNMENT_CHARACTERS = frozenset("#*=-~^\"'`+_")

BULLET_PATTERN = re.compile(r"^(\s*)([*+-])(\s+|$)")
ENUMERATED_PATTERN = re.compile(r"^(\s*)(?:\d+|#|[a-zA-Z])[.)](\s+|$)|^(\s*)\((?:\d+|#)\)(\s+|$)")
FIELD_PATTERN = re.compile(r"^:([^:`]+):(\s+|$)")
GRID_TABLE_PATTERN = re.compile(r"^\s*\+[-=+]+\+\s*$")
SIMPLE_TABLE_PATTERN = re.compile(r"^\s*=+(?: +=+)+\s*$")
DIRECTIVE_PATTERN = re.compile(r"^\s*\.\.\s+[\w:+-]+::")
FOOTNOTE_PATTERN = re.compile(r"^\s*\.\.\s+\[[^\]]+\]")
TARGET_PATTERN = re.compile(r"^\s*(?:\.\.\s+_|__\s)")
COMMENT_PATTERN = re.compile(r"^\s*\.\.(?:\s|$)")
LINE_BLOCK_PATTERN = re.compile(r"^\s*\|(?: |$)")
PHRASE_LINK_PATTERN = re.compile(r"`([^`<]+?)(\s*<([^<>`]+)>)?`__?")
REFERENCE_PATTERN = re.compile(r"(?<=\w)(__?)(?=$|[\s.,;:!?)\]])")

INLINE_MARKUP = (
    (":ref:`", "`"),  # cross reference
    ("`", "`:sup:"),  # superscript
    ("`", "`:sub:"),  # subscript
    ("*", "*"),  # emphasis
    ("**", "**"),  # strong emphasis
    ("`", "`"),  # interpreted text
    ("``", "``"),  # inline literal
    ("`", "`_"),  # phrase reference
    ("_`", "`"),  # inline target
    ("[", "]_"),  # footnote reference
    ("|", "|"),  # substitution
)


@dataclass
class RestState:
    """
    Parse state carried from line to line.

    Attributes:
        in_block: Inside a directive, comment, literal or doctest block.
        block_type: Kind of block being skipped.
        in_list: Inside a bullet, enumerated, definition or field list.
        in_table: Inside a grid or simple table.
        list_indents: Indentation of the open list levels, outermost first.
    """
    in_block: bool = False
    block_type: str = ""
    in_list: bool = False
    in_table: bool = False
    list_indents: List[int] = field(default_factory=list)

    def reset(self) -> None:
        self.in_block = False
        self.block_type = ""
        self.in_list = False
        self.in_table = False
        self.list_indents = []


def _is_blank(line: Optional[Line]) -> bool:
    return line is None or line.erased or not line.text.strip()


def _is_indented(line: Optional[Line]) -> bool:
    return not _is_blank(line) and line.indentation() > 0


def _adornment_character(line: Optional[Line]) -> str:
    """Return the repeated punctuation character of an adornment line."""
    if _is_blank(line) or line.indentation() > 0:
        return ""
    text = line.text
    if len(text) < 2 or text[0] not in ADORNMENT_CHARACTERS:
        return ""
    if text != text[0] * len(text):
        return ""
    return text[0]


class ReSTParser(LineParser):
    """Line parser for reStructuredText."""

    suppress_comments = True

    def populate(self, text: str, lines: List[Line]) -> None:
        self.mark_sections(lines)
        state = RestState()
        for index, line in enumerate(lines):
            if line.erased:
                continue
            previous = lines[index - 1] if index > 0 else None
            following = lines[index + 1] if index + 1 < len(lines) else None
            state = self.process_line(line, previous, following, state)

    # =========================================================================
    # Sections
    # =========================================================================

    def mark_sections(self, lines: List[Line]) -> None:
        """Find section titles and erase their adornment lines."""
        index = 0
        while index < len(lines):
            line = lines[index]
            previous = lines[index - 1] if index > 0 else None
            following = lines[index + 1] if index + 1 < len(lines) else None
            if _is_blank(line) or _adornment_character(line):
                if _adornment_character(line) and _is_blank(previous) and _is_blank(following):
                    # transition
                    line.erase_all()
                index += 1
                continue

            level = self.extract_section_level(previous, following)
            if level is None:
                index += 1
                continue
            if level > 0:
                line.section_level = level
            else:
                logger.debug(f"Line {line.line_no}: document subtitle")
            over = _adornment_character(previous)
            under = _adornment_character(following)
            if over:
                if over != under:
                    logger.warning(
                        f"Line {line.line_no}: overline '{over}' does not match "
                        f"underline '{under}'"
                    )
                previous.erase_all()
            following.erase_all()
            index += 2

    @staticmethod
    def extract_section_level(
        previous: Optional[Line], following: Optional[Line]
    ) -> Optional[int]:
        """
        Level of a title line given its neighbours, None when it is no title.

        Returns 0 for a subtitle (``-`` overline and underline).
        """
        under = _adornment_character(following)
        if not under:
            return None
        over = _adornment_character(previous)
        for character, has_overline, level in ADORNMENT_LEVELS:
            if character != under:
                continue
            if has_overline == (over == character):
                return level
        return None

    # =========================================================================
    # Blocks and lists
    # =========================================================================

    def process_line(
        self,
        line: Line,
        previous: Optional[Line],
        following: Optional[Line],
        state: RestState,
    ) -> RestState:
        text = line.text

        if line.section_level > 0:
            state.reset()
            self.erase_inline_markup(line)
            return state

        if _is_blank(line):
            if not _is_indented(following):
                state.reset()
            return state

        if state.in_block:
            if state.block_type == "doctest" or line.indentation() > 0:
                line.erase_all()
                return state
            state.in_block = False
            state.block_type = ""

        if state.in_table:
            line.erase_all()
            return state

        if GRID_TABLE_PATTERN.match(text) or SIMPLE_TABLE_PATTERN.match(text):
            state.in_table = True
            line.erase_all()
            return state

        block_type = self._block_type(text)
        if block_type:
            logger.debug(f"Line {line.line_no}: start of {block_type} block")
            state.in_block = True
            state.block_type = block_type
            line.erase_all()
            return state

        if LINE_BLOCK_PATTERN.match(text):
            line.erase_all()
            return state

        if text.strip() == "::":
            state.in_block = True
            state.block_type = "literal"
            line.erase_all()
            return state

        if text.endswith("::") and not line.is_escaped(len(line) - 1):
            # "Paragraph::" reads "Paragraph:", "Paragraph ::" loses both colons
            last = len(line) - 1
            if line.char_at(last - 2) in (" ", "\t"):
                line.erase(last - 2, 3)
            else:
                line.erase(last, 1)
            state.in_block = True
            state.block_type = "literal"

        self.classify_list(line, previous, following, state)
        self.erase_inline_markup(line)
        return state

    @staticmethod
    def _block_type(text: str) -> str:
        if DIRECTIVE_PATTERN.match(text):
            return "directive"
        if FOOTNOTE_PATTERN.match(text):
            return "footnote"
        if TARGET_PATTERN.match(text):
            return "target"
        if COMMENT_PATTERN.match(text):
            return "comment"
        if text.lstrip().startswith(">>>"):
            return "doctest"
        return ""

    def classify_list(
        self,
        line: Line,
        previous: Optional[Line],
        following: Optional[Line],
        state: RestState,
    ) -> None:
        """Mark list items, definition lists and field lists."""
        text = line.text
        indent = line.indentation()

        marker = BULLET_PATTERN.match(text)
        if marker is None and (_is_blank(previous) or state.in_list):
            # "b) what." inside a paragraph is text, not an enumerated item
            marker = ENUMERATED_PATTERN.match(text)
        if marker:
            while state.list_indents and state.list_indents[-1] > indent:
                state.list_indents.pop()
            if not state.list_indents or state.list_indents[-1] < indent:
                state.list_indents.append(indent)
            line.erase(0, marker.end())
            line.list_start = True
            line.list_level = len(state.list_indents)
            state.in_list = True
            return

        field_name = FIELD_PATTERN.match(text)
        if field_name and indent == 0:
            line.erase(0, field_name.end())
            state.list_indents = [0]
            line.list_start = True
            line.list_level = 1
            state.in_list = True
            return

        if indent == 0 and _is_indented(following) and not text.endswith(":") and (
            _is_blank(previous) or state.in_list
        ):
            # definition list term
            line.erase_all()
            state.list_indents = [0]
            state.in_list = True
            return

        if indent > 0:
            line.erase(0, indent)
            if state.in_list:
                line.list_level = max(len(state.list_indents), 1)
                line.list_start = _is_blank(previous)
            return

        if state.in_list:
            state.in_list = False
            state.list_indents = []

    # =========================================================================
    # Inline markup
    # =========================================================================

    def erase_inline_markup(self, line: Line) -> None:
        self.erase_phrase_links(line)
        for open_delim, close_delim in INLINE_MARKUP:
            line.erase_enclosure(
                open_delim, close_delim, EraseStyle.INLINE_MARKUP, boundary=True
            )
        for match in REFERENCE_PATTERN.finditer(line.text):
            if line.is_valid(match.start()) and not line.is_escaped(match.start()):
                line.erase(match.start(), len(match.group(1)))

    @staticmethod
    def erase_phrase_links(line: Line) -> None:
        """Keep the label of `` `label <url>`_ `` and `` `label`_ `` references."""
        for match in PHRASE_LINK_PATTERN.finditer(line.text):
            begin = match.start()
            if line.char_at(begin) != "`" or line.char_at(match.end(1)) == "":
                continue
            label_end = match.end(1)
            line.erase(begin, 1)
            line.erase(label_end, match.end() - label_end)
            if match.group(3):
                line.add_link(begin + 1, match.group(3).strip())
