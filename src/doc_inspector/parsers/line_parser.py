"""Shared machinery of the line-oriented parsers.

A line parser works in three steps:

1. every physical line becomes a :class:`Line`;
2. ``populate`` classifies the lines (headers, list items, blocks) and
   erases markup in place, threading a per-parse state through the lines;
3. ``convert`` folds the classified lines into a Document, joining the
   surviving characters of consecutive lines and splitting them into
   sentences that keep their original positions.
"""

import logging
import re
from abc import abstractmethod
from typing import Dict, List, Optional, Tuple

from ..interfaces.parser import IDocumentParser
from ..interfaces.tokenizer import ITokenizer
from ..models.document import (
    Document,
    DocumentBuilder,
    LineOffset,
    Sentence,
    SuppressRule,
)
from .line import Line
from .sentence_extractor import SentenceExtractor


logger = logging.getLogger(__name__)

NEWLINE_PATTERN = re.compile(r"\r\n|\r|\n")
SUPPRESS_COMMENT = "//@Suppress@"


class LineParser(IDocumentParser):
    """Base class of the parsers that classify input line by line."""

    handle_escapes = True
    # formats where a "//@Suppress@ [Validator ...]" line hides errors
    suppress_comments = False

    def parse(
        self,
        text: str,
        sentence_extractor: Optional[SentenceExtractor] = None,
        file_name: Optional[str] = None,
        tokenizer: Optional[ITokenizer] = None,
    ) -> Document:
        extractor = sentence_extractor or SentenceExtractor()
        lines = self.create_lines(text)
        rules = self.find_suppress_rules(lines)
        self.populate(text, lines)
        builder = DocumentBuilder(tokenizer).set_file_name(file_name)
        for rule in rules:
            builder.add_suppress_rule(rule)
        self.convert(lines, builder, extractor)
        document = builder.build()
        logger.debug(
            f"Parsed {file_name or '<text>'}: {len(lines)} lines, "
            f"{len(document)} sections"
        )
        return document

    def create_lines(self, text: str) -> List[Line]:
        raw_lines = NEWLINE_PATTERN.split(text)
        if raw_lines and raw_lines[-1] == "":
            raw_lines.pop()
        return [
            Line(raw, number, self.handle_escapes)
            for number, raw in enumerate(raw_lines, start=1)
        ]

    def find_suppress_rules(self, lines: List[Line]) -> List[SuppressRule]:
        """
        Collect suppress comments and erase their lines.

        The names following the marker select the validators to silence:
        ``//@Suppress@ SentenceLength CommaNumber``.
        """
        if not self.suppress_comments:
            return []
        rules = []
        for line in lines:
            if not line.raw_text.startswith(SUPPRESS_COMMENT):
                continue
            names = line.raw_text[len(SUPPRESS_COMMENT):].split()
            rules.append(SuppressRule.from_comment(line.line_no, names))
            line.erase_all()
            logger.debug(f"Line {line.line_no}: suppress {names or 'all validators'}")
        return rules

    @abstractmethod
    def populate(self, text: str, lines: List[Line]) -> None:
        """Classify ``lines`` and erase markup in place."""
        pass

    # =========================================================================
    # Conversion to the document tree
    # =========================================================================

    def convert(
        self,
        lines: List[Line],
        builder: DocumentBuilder,
        extractor: SentenceExtractor,
    ) -> None:
        """Fold classified lines into sections, paragraphs and list elements."""
        first = next((line for line in lines if not line.is_empty()), None)
        if first is None or first.section_level == 0:
            builder.add_section(0)

        i = 0
        count = len(lines)
        while i < count:
            line = lines[i]
            if line.is_empty():
                i += 1
                continue

            if line.section_level > 0:
                builder.add_section(
                    line.section_level, self.to_sentences([line], extractor)
                )
                i += 1
            elif line.list_start:
                level = max(line.list_level, 1)
                group = [line]
                i += 1
                while i < count and self._continues_list(lines[i], level):
                    group.append(lines[i])
                    i += 1
                builder.add_list_element(level, self.to_sentences(group, extractor))
            elif line.list_level > 0 and builder.in_list:
                # later paragraph of a list item
                group = [line]
                i += 1
                while i < count and self._continues_list(lines[i], line.list_level):
                    group.append(lines[i])
                    i += 1
                builder.extend_list_element(
                    line.list_level, self.to_sentences(group, extractor)
                )
            else:
                group = [line]
                i += 1
                while i < count and self._continues_paragraph(lines[i]):
                    group.append(lines[i])
                    i += 1
                builder.add_paragraph()
                for sentence in self.to_sentences(group, extractor):
                    builder.add_sentence(sentence)

    @staticmethod
    def _continues_list(line: Line, level: int) -> bool:
        return (
            not line.is_empty()
            and not line.list_start
            and line.section_level == 0
            and line.list_level == level
        )

    @staticmethod
    def _continues_paragraph(line: Line) -> bool:
        return not line.is_empty() and line.section_level == 0 and not line.list_start

    def to_sentences(
        self, lines: List[Line], extractor: SentenceExtractor
    ) -> List[Sentence]:
        """
        Join the surviving text of ``lines`` and split it into sentences.

        Each character keeps its original line and offset. Lines are joined
        with the extractor's broken-line separator, which is located just
        past the end of the previous line.
        """
        chars: List[str] = []
        offsets: List[LineOffset] = []
        markup: List[bool] = []
        links: List[Tuple[int, str]] = []

        for index, line in enumerate(lines):
            if index > 0 and chars and extractor.broken_line_separator:
                previous = lines[index - 1]
                chars.append(extractor.broken_line_separator)
                offsets.append(LineOffset(previous.line_no, previous.get_offset(len(previous))))
                markup.append(False)

            pending: Dict[int, List[str]] = {}
            for position, url in line.links:
                pending.setdefault(position, []).append(url)

            for position in range(len(line)):
                for url in pending.pop(position, []):
                    links.append((len(chars), url))
                if not line.is_valid(position):
                    continue
                chars.append(line.raw_char_at(position))
                offsets.append(LineOffset(line.line_no, line.get_offset(position)))
                markup.append(line.is_inline_markup(position))
            for position in sorted(pending):
                for url in pending[position]:
                    links.append((len(chars), url))

        content = "".join(chars)
        ranges, remainder = extractor.extract(content)
        if remainder < len(content):
            ranges.append((remainder, len(content)))

        placed: List[Tuple[int, int, Sentence]] = []
        for start, end in ranges:
            if not content[start:end].strip():
                continue
            sentence = Sentence.from_offsets(
                content[start:end],
                offsets[start:end],
                inline_markup=_markup_ranges(markup[start:end]),
            )
            placed.append((start, end, sentence))
        if not placed:
            return []

        for position, url in links:
            target = next(
                (s for start, end, s in placed if start <= position < end),
                placed[-1][2],
            )
            target.links.append(url)
        placed[0][2].is_first_sentence = True
        return [sentence for _, _, sentence in placed]


def _markup_ranges(flags: List[bool]) -> List[Tuple[int, int]]:
    ranges = []
    start = None
    for i, flag in enumerate(flags):
        if flag and start is None:
            start = i
        elif not flag and start is not None:
            ranges.append((start, i))
            start = None
    if start is not None:
        ranges.append((start, len(flags)))
    return ranges
