"""Unit tests for the plain text and wiki parsers."""

import pytest

from doc_inspector.models.document import LineOffset
from doc_inspector.parsers import PlainTextParser, WikiParser


class TestPlainTextParser:
    """Tests for plain text input."""

    def test_single_section(self):
        """Test that plain text becomes one level-0 section."""
        text = "This is a pen. That is a cat.\nThis is a dog.\n\nAnother paragraph."
        document = PlainTextParser().parse(text)

        assert len(document) == 1
        section = document.get_section(0)
        assert section.level == 0
        assert len(section.paragraphs) == 2
        contents = [s.content for s in section.paragraphs[0].sentences]
        assert contents == ["This is a pen.", " That is a cat.", " This is a dog."]
        assert section.paragraphs[1].sentences[0].content == "Another paragraph."

    def test_line_numbers_do_not_decrease(self):
        """Test that sentences come in source order."""
        text = "One. Two.\nThree.\nFour. Five.\n\nSix."
        document = PlainTextParser().parse(text)

        numbers = [s.line_number for s in document.iter_sentences()]
        assert numbers == sorted(numbers)
        assert numbers[-1] == 5

    def test_first_sentence_flag(self):
        """Test that only the first sentence of a paragraph is flagged."""
        document = PlainTextParser().parse("One. Two.")

        flags = [s.is_first_sentence for s in document.iter_sentences()]
        assert flags == [True, False]

    def test_backslash_is_plain_character(self):
        """Test that plain text does not process escapes."""
        document = PlainTextParser().parse(r"Use C:\path\to.")

        assert next(document.iter_sentences()).content == r"Use C:\path\to."

    def test_sentence_across_lines(self):
        """Test offsets of a sentence continued on the next line."""
        document = PlainTextParser().parse("Tokyu is\na railway company.")
        sentence = next(document.iter_sentences())

        assert sentence.content == "Tokyu is a railway company."
        assert sentence.get_offset(8) == LineOffset(1, 8)
        assert sentence.get_offset(9) == LineOffset(2, 0)

    def test_empty_input(self):
        """Test that empty input gives one empty section."""
        document = PlainTextParser().parse("")

        assert len(document) == 1
        assert list(document.iter_sentences()) == []

    @pytest.mark.parametrize(
        "text",
        [
            "One. Two? Three! Four... five.",
            "One. Two?\nThree!",
            "This is a pen.  That is a cat.",
            "No end symbol here",
        ],
    )
    def test_reparse_paragraph(self, text):
        """Test that parsing the extracted sentences again gives the same sentences."""
        first = [s.content for s in PlainTextParser().parse(text).iter_sentences()]
        second = [s.content for s in PlainTextParser().parse("".join(first)).iter_sentences()]

        assert second == first

    def test_reparse_paragraphs(self):
        """Test reparsing when paragraphs are rejoined with a blank line."""
        document = PlainTextParser().parse("One. Two? Three!\n\nFour... five.")
        paragraphs = [
            "".join(s.content for s in paragraph.sentences)
            for paragraph in document.get_section(0).paragraphs
        ]
        again = PlainTextParser().parse("\n\n".join(paragraphs))

        assert [s.content for s in again.iter_sentences()] == [
            s.content for s in document.iter_sentences()
        ]


class TestWikiParser:
    """Tests for wiki markup."""

    def test_list_levels(self):
        """Test nested list levels in a single block."""
        document = WikiParser().parse("- A\n-- B\n-- C\n- D\n")

        section = document.get_section(0)
        assert len(section.list_blocks) == 1
        block = section.list_blocks[0]
        assert [e.level for e in block] == [1, 2, 2, 1]
        assert [e.sentences[0].content for e in block] == ["A", "B", "C", "D"]
        assert block.elements[1].sentences[0].start_position_offset == 3

    def test_headers(self):
        """Test header levels and nesting."""
        text = "h1. About\nIntro.\n\nh2. Details\nMore."
        document = WikiParser().parse(text)

        assert [s.level for s in document] == [1, 2]
        assert document.get_section(0).header_contents[0].content == "About"
        assert document.get_section(1).parent is document.get_section(0)
        assert document.get_section(1).paragraphs[0].sentences[0].content == "More."

    def test_paragraph_before_header_gets_root_section(self):
        """Test that text before the first header goes to a level-0 section."""
        document = WikiParser().parse("Preface.\n\nh1. Title\nBody.")

        assert [s.level for s in document] == [0, 1]

    def test_inline_markup_offsets(self):
        """Test that erased markup keeps the original offsets."""
        document = WikiParser().parse("It is **very** good.")
        sentence = next(document.iter_sentences())

        assert sentence.content == "It is very good."
        assert sentence.get_offset(6) == LineOffset(1, 8)
        assert sentence.get_offset(11) == LineOffset(1, 15)

    def test_links(self):
        """Test that a link keeps its label and records its URL."""
        document = WikiParser().parse("See [[the site|http://example.com]] now.")
        sentence = next(document.iter_sentences())

        assert sentence.content == "See the site now."
        assert sentence.links == ["http://example.com"]

    def test_comment_block(self):
        """Test that comment blocks are dropped."""
        text = "Before.\n[!--\nhidden text.\n--]\nAfter."
        document = WikiParser().parse(text)

        contents = [s.content.strip() for s in document.iter_sentences()]
        assert contents == ["Before.", "After."]
