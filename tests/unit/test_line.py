"""Unit tests for the position-tracked Line."""

from doc_inspector.models.enums import EraseStyle
from doc_inspector.parsers.line import ESCAPED_CHARACTER, Line


class TestLineConstruction:
    """Tests for building a Line from raw text."""

    def test_trailing_whitespace_is_dropped(self):
        """Test that trailing spaces are not part of the line."""
        line = Line("abc   ", 1)

        assert len(line) == 3
        assert line.text == "abc"

    def test_escaped_characters(self):
        """Test that backslash escapes keep the original offsets."""
        line = Line(r"a \*b\* c", 1)

        assert line.text == "a *b* c"
        assert line.char_at(2) == ESCAPED_CHARACTER
        assert line.get_offset(2) == 3
        assert line.find("*") == -1

    def test_escapes_disabled(self):
        """Test that backslashes stay ordinary characters when escapes are off."""
        line = Line(r"a \*b", 1, handle_escapes=False)

        assert line.text == r"a \*b"
        assert line.char_at(3) == "*"

    def test_indentation(self):
        """Test counting leading whitespace."""
        assert Line("    code", 1).indentation() == 4
        assert Line("code", 1).indentation() == 0


class TestErasure:
    """Tests for erasing characters from a line."""

    def test_erase_keeps_offsets(self):
        """Test that erased characters are skipped but offsets are kept."""
        line = Line("# Title", 1)
        line.erase(0, 2)

        assert line.valid_text == "Title"
        assert line.get_offset(2) == 2
        assert line.char_at(0) == ""

    def test_erase_all(self):
        """Test erasing a whole line."""
        line = Line("some text", 3)
        line.erase_all()

        assert line.erased
        assert line.is_empty()

    def test_erase_enclosure_markers(self):
        """Test removing only the delimiters of an enclosure."""
        line = Line("This is **bold** text", 1)

        assert line.erase_enclosure("**", "**", EraseStyle.MARKERS) == 1
        assert line.valid_text == "This is bold text"
        assert line.get_offset(10) == 10
        assert not line.is_valid(8)

    def test_erase_enclosure_all(self):
        """Test removing the delimiters and the enclosed text."""
        line = Line("keep [!--drop--] keep", 1)

        line.erase_enclosure("[!--", "--]", EraseStyle.ALL)

        assert line.valid_text == "keep  keep"

    def test_erase_enclosure_inline_markup(self):
        """Test that inline markup keeps its text but is tagged."""
        line = Line("use `code` here", 1)

        line.erase_enclosure("`", "`", EraseStyle.INLINE_MARKUP)

        assert line.valid_text == "use code here"
        assert line.is_inline_markup(5)
        assert not line.is_inline_markup(0)

    def test_single_delimiter_does_not_match_double(self):
        """Test that '*' never matches one half of '**'."""
        line = Line("a **b** c", 1)

        assert line.erase_enclosure("*", "*", EraseStyle.MARKERS) == 0
        assert line.valid_text == "a **b** c"

    def test_boundary_rule(self):
        """Test that word-internal delimiters are ignored."""
        line = Line("snake_case_name and _emph_", 1)

        count = line.erase_enclosure("_", "_", EraseStyle.MARKERS, boundary=True)

        assert count == 1
        assert line.valid_text == "snake_case_name and emph"

    def test_unterminated_enclosure_is_noop(self):
        """Test that an unterminated enclosure leaves the line untouched."""
        line = Line("a *b", 1)

        assert line.erase_enclosure("*", "*", EraseStyle.MARKERS) == 0
        assert line.valid_text == "a *b"

    def test_erase_segment(self):
        """Test erasing every occurrence of a segment."""
        line = Line("a--b--c", 1)

        assert line.erase_segment("--") == 2
        assert line.valid_text == "abc"
