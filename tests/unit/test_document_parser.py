"""Unit tests for the parser facade and document serialization."""

import tempfile
from pathlib import Path

import pytest

from doc_inspector.models.document import LineOffset
from doc_inspector.models.enums import DocumentFormat
from doc_inspector.parsers import (
    DocumentParser,
    DocumentReadError,
    UnsupportedFormatError,
    deserialize_document,
    serialize_document,
)
from doc_inspector.tokenizers import WhiteSpaceTokenizer


@pytest.fixture
def parser():
    """Create the parser facade."""
    return DocumentParser()


class TestDocumentParser:
    """Tests for format selection and file input."""

    def test_supported_formats(self, parser):
        """Test the list of format names."""
        assert parser.get_supported_formats() == ["plain", "wiki", "markdown", "rest", "review"]

    def test_parse_by_name(self, parser):
        """Test selecting a parser by format name."""
        document = parser.parse("# Title\n", "Markdown")

        assert document.get_section(0).level == 1

    def test_unsupported_format(self, parser):
        """Test that unknown formats are rejected with the supported list."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            parser.parse("text", "asciidoc")

        assert "markdown" in exc_info.value.get_supported_formats()

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("notes.txt", DocumentFormat.PLAIN),
            ("README.md", DocumentFormat.MARKDOWN),
            ("index.rst", DocumentFormat.REST),
            ("chapter.re", DocumentFormat.REVIEW),
            ("page.wiki", DocumentFormat.WIKI),
        ],
    )
    def test_detect_format(self, parser, name, expected):
        """Test format detection from file extensions."""
        assert parser.detect_document_format(name) == expected

    def test_detect_unknown_extension(self, parser):
        """Test that unknown extensions are rejected."""
        with pytest.raises(UnsupportedFormatError):
            parser.detect_document_format("report.docx")

    def test_parse_file(self, parser):
        """Test parsing a file with a detected format."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "doc.md"
            path.write_text("# Title\n\nBody text.\n", encoding="utf-8")

            document = parser.parse_file(path, tokenizer=WhiteSpaceTokenizer())

        assert document.file_name == str(path)
        sentence = document.get_section(0).paragraphs[0].sentences[0]
        assert sentence.content == "Body text."
        assert [t.surface for t in sentence.tokens] == ["Body", "text", "."]

    def test_parse_missing_file(self, parser):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            parser.parse_file("/nonexistent/doc.md")

    def test_parse_undecodable_file(self, parser):
        """Test that non UTF-8 input raises DocumentReadError."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "doc.txt"
            path.write_bytes(b"caf\xe9 au lait.")

            with pytest.raises(DocumentReadError) as exc_info:
                parser.parse_file(path)

        assert exc_info.value.to_dict()["error_type"] == "DocumentReadError"


class TestSerialization:
    """Tests for the JSON form of documents."""

    def test_round_trip(self, parser):
        """Test that the tree and positions survive serialization."""
        text = "h1. Title\nIt is **very** good.\n- item [[label|http://example.com]]\nh2. Sub\nMore."
        document = parser.parse(text, DocumentFormat.WIKI, file_name="doc.wiki")

        restored = deserialize_document(serialize_document(document))

        assert restored.file_name == "doc.wiki"
        assert [s.level for s in restored] == [1, 2]
        assert restored.get_section(1).parent is restored.get_section(0)
        original = list(document.iter_sentences())
        copied = list(restored.iter_sentences())
        assert [s.content for s in copied] == [s.content for s in original]
        assert copied[1].get_offset(6) == LineOffset(2, 8)
        assert copied[2].links == ["http://example.com"]
        assert restored.get_section(0).list_blocks[0].elements[0].level == 1

    def test_round_trip_suppress_rules(self, parser):
        """Test that suppress rules survive serialization."""
        document = parser.parse("//@Suppress@ SentenceLength\nText.\n", DocumentFormat.REST)

        restored = deserialize_document(serialize_document(document))

        assert restored.suppress_rules == document.suppress_rules
        assert restored.is_suppressed(2, "SentenceLength")

    def test_invalid_json(self, parser):
        """Test that malformed JSON is rejected."""
        with pytest.raises(ValueError):
            parser.deserialize("{broken")

    def test_missing_sentence_field(self, parser):
        """Test that sentences need their content."""
        data = '{"sections": [{"level": 0, "paragraphs": [[{"line_number": 1}]]}]}'

        with pytest.raises(ValueError):
            parser.deserialize(data)
