"""Unit tests for the Markdown parser."""

import pytest

from doc_inspector.models.document import LineOffset, SuppressRule
from doc_inspector.parsers import MarkdownParser


@pytest.fixture
def parser():
    """Create a Markdown parser."""
    return MarkdownParser()


def _contents(document):
    return [s.content for s in document.iter_sentences()]


class TestMarkdownStructure:
    """Tests for headings, lists and blocks."""

    def test_heading_and_paragraph(self, parser):
        """Test an ATX heading followed by a paragraph."""
        document = parser.parse("# Title\nHello world.\n")

        assert len(document) == 1
        section = document.get_section(0)
        assert section.level == 1
        assert section.header_contents[0].content == "Title"
        assert section.header_contents[0].start_position_offset == 2
        sentence = section.paragraphs[0].sentences[0]
        assert sentence.content == "Hello world."
        assert sentence.line_number == 2

    def test_closing_hashes(self, parser):
        """Test that the closing sequence of an ATX heading is dropped."""
        document = parser.parse("## Usage ##\n")

        assert document.get_section(0).header_contents[0].content == "Usage"
        assert document.get_section(0).level == 2

    def test_setext_heading(self, parser):
        """Test a heading underlined with '='."""
        document = parser.parse("Title\n=====\n\nBody.\n")

        assert len(document) == 1
        assert document.get_section(0).level == 1
        assert _contents(document) == ["Title", "Body."]

    def test_nested_sections(self, parser):
        """Test heading nesting."""
        document = parser.parse("# A\n## B\n### C\n## D\n")

        a, b, c, d = document.sections
        assert a.subsections == [b, d]
        assert c.parent is b

    def test_nested_lists(self, parser):
        """Test list levels taken from list nesting."""
        text = "- one\n- two\n  - nested\n- three\n"
        document = parser.parse(text)

        block = document.get_section(0).list_blocks[0]
        assert [e.level for e in block] == [1, 1, 2, 1]
        assert [e.sentences[0].content for e in block] == ["one", "two", "nested", "three"]
        assert block.elements[2].sentences[0].position == LineOffset(3, 4)

    def test_ordered_list(self, parser):
        """Test that ordered list markers are erased."""
        document = parser.parse("1. first\n2. second\n")

        block = document.get_section(0).list_blocks[0]
        assert [e.sentences[0].content for e in block] == ["first", "second"]
        assert block.elements[0].sentences[0].start_position_offset == 3

    def test_fenced_code_is_dropped(self, parser):
        """Test that code blocks produce no sentences."""
        document = parser.parse("Text.\n\n```\ncode here.\n```\n")

        assert _contents(document) == ["Text."]

    def test_block_quote(self, parser):
        """Test that quote markers are erased."""
        document = parser.parse("> Quoted text.\n")

        sentence = next(document.iter_sentences())
        assert sentence.content == "Quoted text."
        assert sentence.start_position_offset == 2

    def test_table_is_dropped(self, parser):
        """Test that tables produce no sentences."""
        text = "Intro.\n\n| a | b |\n|---|---|\n| 1 | 2 |\n"
        document = parser.parse(text)

        assert _contents(document) == ["Intro."]


class TestMarkdownInline:
    """Tests for inline markup erasure."""

    def test_emphasis(self, parser):
        """Test that emphasis markers are erased and offsets kept."""
        document = parser.parse("Some **bold** and *italic* text.\n")
        sentence = next(document.iter_sentences())

        assert sentence.content == "Some bold and italic text."
        assert sentence.get_offset(21) == LineOffset(1, 27)

    def test_offsets_point_into_source(self, parser):
        """Test that every character maps back to the same source character."""
        source = "A `code` span, a [link](http://example.com) and __strong__ text."
        sentence = next(parser.parse(source).iter_sentences())

        for index, char in enumerate(sentence.content):
            offset = sentence.get_offset(index)
            assert source[offset.offset] == char

    def test_inline_link(self, parser):
        """Test that a link keeps its label and records its URL."""
        document = parser.parse("This is [a link](http://example.com) here.\n")
        sentence = next(document.iter_sentences())

        assert sentence.content == "This is a link here."
        assert sentence.links == ["http://example.com"]
        assert sentence.get_offset(15) == LineOffset(1, 37)

    def test_reference_link(self, parser):
        """Test a reference link resolved from its definition."""
        text = "See [docs][ref].\n\n[ref]: http://example.com/docs\n"
        document = parser.parse(text)

        assert _contents(document) == ["See docs."]
        assert next(document.iter_sentences()).links == ["http://example.com/docs"]

    def test_image_is_dropped(self, parser):
        """Test that images disappear from the text."""
        document = parser.parse("Logo ![alt](logo.png) here.\n")

        assert next(document.iter_sentences()).content == "Logo  here."

    def test_autolink(self, parser):
        """Test that autolink brackets are erased."""
        document = parser.parse("Visit <http://example.com> today.\n")
        sentence = next(document.iter_sentences())

        assert sentence.content == "Visit http://example.com today."
        assert sentence.links == ["http://example.com"]

    def test_intraword_underscore(self, parser):
        """Test that underscores inside words are kept."""
        document = parser.parse("Call snake_case_name now.\n")

        assert next(document.iter_sentences()).content == "Call snake_case_name now."

    def test_escaped_asterisk(self, parser):
        """Test that escaped markers are not treated as emphasis."""
        document = parser.parse("Use \\*args\\* here.\n")
        sentence = next(document.iter_sentences())

        assert sentence.content == "Use *args* here."

    def test_code_span_keeps_underscores(self, parser):
        """Test that underscores inside a code span are not emphasis."""
        document = parser.parse("Call `__init__` first.\n")

        assert _contents(document) == ["Call __init__ first."]

    def test_code_span_keeps_asterisks(self, parser):
        """Test that asterisks inside a code span survive with their offsets."""
        source = "Run `a*b*c` now."
        sentence = next(parser.parse(source).iter_sentences())

        assert sentence.content == "Run a*b*c now."
        for index, char in enumerate(sentence.content):
            assert source[sentence.get_offset(index).offset] == char

    def test_double_backtick_code_span(self, parser):
        """Test a code span delimited by two backticks."""
        document = parser.parse("Type ``a ` b`` here.\n")

        assert _contents(document) == ["Type a ` b here."]

    def test_strong_emphasis_run(self, parser):
        """Test that a run of three asterisks is erased."""
        document = parser.parse("***both*** here.\n")

        assert _contents(document) == ["both here."]

    def test_inline_html_is_erased(self, parser):
        """Test that inline HTML tags disappear and their text stays."""
        document = parser.parse("Some <b>bold</b> text.\n")

        assert _contents(document) == ["Some bold text."]

    def test_strikethrough(self, parser):
        """Test that strikethrough markers are erased."""
        document = parser.parse("This is ~~old~~ text.\n")

        assert _contents(document) == ["This is old text."]

    def test_unmatched_asterisk_is_text(self, parser):
        """Test that a lone asterisk stays in the sentence."""
        document = parser.parse("Rate 5 * 3 now.\n")

        assert _contents(document) == ["Rate 5 * 3 now."]

    def test_emphasis_across_lines(self, parser):
        """Test emphasis that opens and closes on different lines."""
        document = parser.parse("An *emphasis\nover lines* here.\n")
        sentence = next(document.iter_sentences())

        assert "*" not in sentence.content
        assert sentence.content.endswith("over lines here.")

    def test_hard_break_backslash(self, parser):
        """Test that the backslash of a hard line break is erased."""
        document = parser.parse("First line\\\nsecond line.\n")
        sentence = next(document.iter_sentences())

        assert "\\" not in sentence.content
        assert sentence.content.startswith("First line")


class TestMarkdownListContinuation:
    """Tests for list items spread over several paragraphs."""

    def test_loose_item_keeps_later_paragraph(self, parser):
        """Test that a later paragraph stays in its list item."""
        document = parser.parse("- A\n  - B\n\n  more A.\n")

        section = document.get_section(0)
        block = section.list_blocks[0]
        assert [e.level for e in block] == [1, 2]
        assert [s.content for s in block.elements[0].sentences] == ["A", "more A."]
        assert [s.content for s in block.elements[1].sentences] == ["B"]
        assert section.paragraphs == []

    def test_paragraph_after_list(self, parser):
        """Test that an unindented paragraph leaves the list."""
        document = parser.parse("- A\n\nAfter.\n")

        section = document.get_section(0)
        assert [s.content for s in section.list_blocks[0].elements[0].sentences] == ["A"]
        assert [s.content for s in section.paragraphs[0].sentences] == ["After."]


class TestMarkdownSuppressComments:
    """Tests for HTML suppress comments."""

    def test_suppress_comment(self, parser):
        """Test that a suppress comment becomes a rule and no sentence."""
        text = "<!-- @suppress SentenceLength -->\nA sentence.\n"
        document = parser.parse(text)

        assert document.suppress_rules == [SuppressRule(2, ["sentencelength"])]
        assert _contents(document) == ["A sentence."]

    def test_plain_comment_is_ignored(self, parser):
        """Test that other HTML comments create no rule."""
        document = parser.parse("<!-- a note -->\nA sentence.\n")

        assert document.suppress_rules == []
