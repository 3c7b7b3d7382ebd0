"""Document tree models.

A parsed input becomes a Document holding Sections. Each Section owns its
header sentences, paragraphs, list blocks and subsections. Sentences keep
the original line/offset of every character so that validators can report
positions in the unmodified source.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from .token import TokenElement


logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class LineOffset:
    """Position in the source: 1-based line number and 0-based offset."""
    line_num: int
    offset: int


@dataclass
class Sentence:
    """
    A sentence extracted from the source text.

    Attributes:
        content: Sentence text with markup removed.
        line_number: Line of the first character.
        start_position_offset: Offset of the first character in that line.
        is_first_sentence: True for the first sentence of a paragraph,
            list element or header.
        links: URLs found inside the sentence.
        offset_map: Original position of every character of ``content``.
        tokens: Tokens filled in by the configured tokenizer.
        inline_markup: ``(start, end)`` ranges of ``content`` that came
            from inline markup.
    """
    content: str
    line_number: int
    start_position_offset: int = 0
    is_first_sentence: bool = False
    links: List[str] = field(default_factory=list)
    offset_map: List[LineOffset] = field(default_factory=list, repr=False)
    tokens: List[TokenElement] = field(default_factory=list, repr=False)
    inline_markup: List[Tuple[int, int]] = field(default_factory=list, repr=False)

    def __post_init__(self):
        if not self.offset_map:
            self.offset_map = [
                LineOffset(self.line_number, self.start_position_offset + i)
                for i in range(len(self.content))
            ]

    @classmethod
    def from_offsets(
        cls,
        content: str,
        offset_map: List[LineOffset],
        links: Optional[List[str]] = None,
        inline_markup: Optional[List[Tuple[int, int]]] = None,
    ) -> "Sentence":
        """Create a sentence whose position is taken from its first offset."""
        if offset_map:
            line_number = offset_map[0].line_num
            start = offset_map[0].offset
        else:
            line_number, start = 0, 0
        return cls(
            content=content,
            line_number=line_number,
            start_position_offset=start,
            links=list(links or []),
            offset_map=list(offset_map),
            inline_markup=list(inline_markup or []),
        )

    @property
    def position(self) -> LineOffset:
        """Original position of the first character."""
        return LineOffset(self.line_number, self.start_position_offset)

    def get_offset(self, position: int) -> Optional[LineOffset]:
        """Return the original position of ``content[position]``."""
        if 0 <= position < len(self.offset_map):
            return self.offset_map[position]
        return None

    def get_offset_position(self, line_offset: LineOffset) -> int:
        """Return the content index for an original position, or -1."""
        try:
            return self.offset_map.index(line_offset)
        except ValueError:
            return -1

    def is_inline_markup(self, position: int) -> bool:
        """Check whether ``content[position]`` came from inline markup."""
        return any(start <= position < end for start, end in self.inline_markup)

    def __len__(self) -> int:
        return len(self.content)


@dataclass
class Paragraph:
    """An ordered run of sentences."""
    sentences: List[Sentence] = field(default_factory=list)

    def append_sentence(self, sentence: Sentence) -> None:
        self.sentences.append(sentence)

    def __iter__(self) -> Iterator[Sentence]:
        return iter(self.sentences)

    def __len__(self) -> int:
        return len(self.sentences)


@dataclass
class ListElement:
    """One list item; ``level`` starts at 1 for top-level items."""
    level: int
    sentences: List[Sentence] = field(default_factory=list)


@dataclass
class ListBlock:
    """A run of list elements appearing together in a section."""
    elements: List[ListElement] = field(default_factory=list)

    def append_element(self, level: int, sentences: List[Sentence]) -> ListElement:
        element = ListElement(level=level, sentences=list(sentences))
        self.elements.append(element)
        return element

    def __iter__(self) -> Iterator[ListElement]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)


@dataclass
class Section:
    """
    Section of a document.

    Level 0 is the untitled document root. Subsections always have a
    greater level than their parent. ``parent`` is a back-reference used
    for nesting resolution; it is excluded from comparison and repr.
    """
    level: int
    header_contents: List[Sentence] = field(default_factory=list)
    paragraphs: List[Paragraph] = field(default_factory=list)
    list_blocks: List[ListBlock] = field(default_factory=list)
    subsections: List["Section"] = field(default_factory=list, repr=False)
    parent: Optional["Section"] = field(default=None, repr=False, compare=False)

    def append_header_content(self, sentence: Sentence) -> None:
        self.header_contents.append(sentence)

    def append_paragraph(self, paragraph: Optional[Paragraph] = None) -> Paragraph:
        paragraph = paragraph if paragraph is not None else Paragraph()
        self.paragraphs.append(paragraph)
        return paragraph

    def append_list_block(self) -> ListBlock:
        block = ListBlock()
        self.list_blocks.append(block)
        return block

    def append_subsection(self, section: "Section") -> None:
        """Attach ``section`` as a child of this section."""
        section.parent = self
        self.subsections.append(section)

    def get_joined_header_contents(self) -> Sentence:
        """
        Merge header sentences into one sentence.

        Returns an empty sentence at line 0 when the section has no header.
        """
        if not self.header_contents:
            return Sentence(content="", line_number=0)
        content = " ".join(s.content for s in self.header_contents)
        offsets: List[LineOffset] = []
        for i, sentence in enumerate(self.header_contents):
            if i > 0:
                # the joining space points just past the previous sentence
                last = offsets[-1] if offsets else sentence.position
                offsets.append(LineOffset(last.line_num, last.offset + 1))
            offsets.extend(sentence.offset_map)
        joined = Sentence.from_offsets(content, offsets)
        joined.line_number = self.header_contents[0].line_number
        joined.start_position_offset = self.header_contents[0].start_position_offset
        joined.is_first_sentence = True
        for sentence in self.header_contents:
            joined.links.extend(sentence.links)
        return joined

    def iter_sentences(self) -> Iterator[Sentence]:
        """Yield header sentences, then paragraph sentences, then list sentences."""
        yield from self.header_contents
        for paragraph in self.paragraphs:
            yield from paragraph.sentences
        for block in self.list_blocks:
            for element in block.elements:
                yield from element.sentences


@dataclass
class SuppressRule:
    """
    Inline instruction that hides validation errors.

    A suppress comment applies from the line that follows it to the last
    sentence of the section containing that line. Without validator names
    every validator is silenced; names are compared case-insensitively.
    """
    line_number: int
    validator_names: List[str] = field(default_factory=list)

    @classmethod
    def from_comment(cls, comment_line: int, names: Iterable[str]) -> "SuppressRule":
        return cls(
            line_number=comment_line + 1,
            validator_names=[name.strip().lower() for name in names if name.strip()],
        )

    def applies_to(self, validator_name: str) -> bool:
        return not self.validator_names or validator_name.lower() in self.validator_names

    def is_triggered_by(
        self, document: "Document", line_number: int, validator_name: str
    ) -> bool:
        """Check whether an error of ``validator_name`` at ``line_number`` is hidden."""
        if line_number < self.line_number or not self.applies_to(validator_name):
            return False
        for section in document.sections:
            lines = [s.line_number for s in section.iter_sentences()]
            if not lines:
                continue
            first, last = min(lines), max(lines)
            if first <= self.line_number <= last and first <= line_number <= last:
                return True
        return False


@dataclass
class Document:
    """
    A parsed input file.

    ``sections`` lists every section in document order; the nesting is
    recorded through ``Section.parent`` and ``Section.subsections``.
    ``suppress_rules`` come from suppress comments in the source.
    """
    sections: List[Section] = field(default_factory=list)
    file_name: Optional[str] = None
    suppress_rules: List[SuppressRule] = field(default_factory=list)

    def is_suppressed(self, line_number: int, validator_name: str) -> bool:
        return any(
            rule.is_triggered_by(self, line_number, validator_name)
            for rule in self.suppress_rules
        )

    @property
    def root_sections(self) -> List[Section]:
        """Sections that are not attached to any parent."""
        return [s for s in self.sections if s.parent is None]

    def get_section(self, index: int) -> Section:
        return self.sections[index]

    def iter_sentences(self) -> Iterator[Sentence]:
        for section in self.sections:
            yield from section.iter_sentences()

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)


@dataclass
class DocumentCollection:
    """Ordered set of documents checked together."""
    documents: List[Document] = field(default_factory=list)

    def add_document(self, document: Document) -> None:
        self.documents.append(document)

    def get_document(self, index: int) -> Document:
        return self.documents[index]

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)


class DocumentBuilder:
    """
    Incremental builder used by the parsers.

    Sections are nested on insertion. Paragraphs and list elements always go
    to the most recently added section. When a tokenizer is given, every
    sentence is tokenized on ``build``.
    """

    def __init__(self, tokenizer=None):
        self._tokenizer = tokenizer
        self._file_name: Optional[str] = None
        self._sections: List[Section] = []
        self._current: Optional[Section] = None
        self._in_list = False
        self._suppress_rules: List[SuppressRule] = []

    def set_file_name(self, file_name: Optional[str]) -> "DocumentBuilder":
        self._file_name = file_name
        return self

    def add_suppress_rule(self, rule: SuppressRule) -> "DocumentBuilder":
        self._suppress_rules.append(rule)
        return self

    @property
    def in_list(self) -> bool:
        """True while list elements go to an open list block."""
        return self._in_list

    def add_section(
        self, level: int, header_contents: Optional[List[Sentence]] = None
    ) -> Section:
        """
        Add a section and attach it to the closest ancestor with a lower level.

        Args:
            level: Header level of the new section (0 for the root).
            header_contents: Sentences of the header text.

        Returns:
            The new section, which becomes the current one.
        """
        section = Section(level=level, header_contents=list(header_contents or []))
        self._attach(section)
        self._sections.append(section)
        self._current = section
        self._in_list = False
        return section

    def _attach(self, section: Section) -> None:
        current = self._current
        if current is None:
            return
        if section.level > current.level:
            current.append_subsection(section)
            return
        ancestor = current.parent
        while ancestor is not None and ancestor.level >= section.level:
            ancestor = ancestor.parent
        if ancestor is None:
            logger.warning(
                f"No enclosing section with a level lower than {section.level}; "
                f"keeping the section at the top level"
            )
            return
        ancestor.append_subsection(section)

    def add_paragraph(self) -> Paragraph:
        self._in_list = False
        return self._require_section().append_paragraph()

    def add_sentence(self, sentence: Sentence) -> Sentence:
        """Append ``sentence`` to the last paragraph, opening one if needed."""
        section = self._require_section()
        if not section.paragraphs or self._in_list:
            self.add_paragraph()
        section.paragraphs[-1].append_sentence(sentence)
        return sentence

    def add_list_block(self) -> ListBlock:
        self._in_list = True
        return self._require_section().append_list_block()

    def add_list_element(self, level: int, sentences: List[Sentence]) -> ListElement:
        """
        Append a list element, opening a list block after non-list content.

        Blank lines between list elements do not close the block; a
        paragraph or a new section does.
        """
        section = self._require_section()
        if not self._in_list or not section.list_blocks:
            self.add_list_block()
        return section.list_blocks[-1].append_element(level, sentences)

    def extend_list_element(self, level: int, sentences: List[Sentence]) -> ListElement:
        """
        Append continuation sentences to the last element at ``level``.

        Used for the later paragraphs of a list item. A new element is added
        when the open list block has no element at that level.
        """
        section = self._require_section()
        if self._in_list and section.list_blocks:
            for element in reversed(section.list_blocks[-1].elements):
                if element.level == level:
                    element.sentences.extend(sentences)
                    return element
        return self.add_list_element(level, sentences)

    def _require_section(self) -> Section:
        if self._current is None:
            self.add_section(0)
        return self._current

    def build(self) -> Document:
        """Return the built document, tokenizing sentences when configured."""
        document = Document(
            sections=list(self._sections),
            file_name=self._file_name,
            suppress_rules=list(self._suppress_rules),
        )
        if self._tokenizer is not None:
            for sentence in document.iter_sentences():
                sentence.tokens = self._tokenizer.tokenize(sentence.content)
        return document
