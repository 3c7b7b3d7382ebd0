"""Unit tests for the document tree and its builder."""

from doc_inspector.models.document import (
    DocumentBuilder,
    LineOffset,
    Section,
    Sentence,
    SuppressRule,
)
from doc_inspector.tokenizers import WhiteSpaceTokenizer


def _sentence(content, line=1, offset=0):
    return Sentence(content=content, line_number=line, start_position_offset=offset)


class TestSentence:
    """Tests for sentence positions."""

    def test_default_offset_map(self):
        """Test that a sentence without an offset map gets a contiguous one."""
        sentence = _sentence("abc", line=2, offset=4)

        assert sentence.get_offset(0) == LineOffset(2, 4)
        assert sentence.get_offset(2) == LineOffset(2, 6)
        assert sentence.get_offset(3) is None

    def test_from_offsets(self):
        """Test that the position comes from the first offset."""
        offsets = [LineOffset(3, 7), LineOffset(3, 8), LineOffset(4, 0)]
        sentence = Sentence.from_offsets("a b", offsets)

        assert sentence.line_number == 3
        assert sentence.start_position_offset == 7
        assert sentence.get_offset_position(LineOffset(4, 0)) == 2
        assert sentence.get_offset_position(LineOffset(9, 9)) == -1

    def test_inline_markup_ranges(self):
        """Test looking up inline markup positions."""
        sentence = Sentence(content="use code", line_number=1, inline_markup=[(4, 8)])

        assert sentence.is_inline_markup(5)
        assert not sentence.is_inline_markup(1)


class TestSectionNesting:
    """Tests for attaching sections by level."""

    def test_header_levels_1_2_3_2(self):
        """Test that a later level-2 section is a sibling of the first one."""
        builder = DocumentBuilder()
        for level in (1, 2, 3, 2):
            builder.add_section(level, [_sentence(f"level {level}")])
        document = builder.build()

        root, first, third, fourth = document.sections
        assert document.root_sections == [root]
        assert root.subsections == [first, fourth]
        assert first.subsections == [third]
        assert fourth.parent is root
        assert third.parent is first

    def test_orphan_section_stays_at_top_level(self, caplog):
        """Test that a section with no lower-level ancestor is kept at the top."""
        builder = DocumentBuilder()
        builder.add_section(2)
        builder.add_section(1)
        document = builder.build()

        assert len(document.root_sections) == 2
        assert "top level" in caplog.text

    def test_joined_header_contents(self):
        """Test merging several header sentences."""
        section = Section(level=1)
        section.append_header_content(_sentence("First.", line=1, offset=2))
        section.append_header_content(_sentence("Second.", line=1, offset=9))

        joined = section.get_joined_header_contents()

        assert joined.content == "First. Second."
        assert joined.line_number == 1
        assert joined.start_position_offset == 2
        assert joined.get_offset(7) == LineOffset(1, 9)

    def test_joined_header_contents_empty(self):
        """Test merging a section without header."""
        joined = Section(level=0).get_joined_header_contents()

        assert joined.content == ""
        assert joined.line_number == 0


class TestDocumentBuilder:
    """Tests for the incremental builder."""

    def test_paragraphs_and_lists(self):
        """Test that list elements share a block until a paragraph starts."""
        builder = DocumentBuilder()
        builder.add_section(0)
        builder.add_paragraph()
        builder.add_sentence(_sentence("Intro."))
        builder.add_list_element(1, [_sentence("one")])
        builder.add_list_element(2, [_sentence("two")])
        builder.add_sentence(_sentence("After."))
        builder.add_list_element(1, [_sentence("three")])
        section = builder.build().get_section(0)

        assert len(section.paragraphs) == 2
        assert len(section.list_blocks) == 2
        assert [e.level for e in section.list_blocks[0]] == [1, 2]

    def test_sentence_order(self):
        """Test that headers come first, then paragraphs, then lists."""
        builder = DocumentBuilder()
        builder.add_section(1, [_sentence("Title")])
        builder.add_list_element(1, [_sentence("item")])
        builder.add_sentence(_sentence("Body."))
        document = builder.build()

        assert [s.content for s in document.iter_sentences()] == ["Title", "Body.", "item"]

    def test_implicit_root_section(self):
        """Test that content without a section opens a level-0 section."""
        builder = DocumentBuilder()
        builder.add_sentence(_sentence("Text."))
        document = builder.build()

        assert len(document) == 1
        assert document.get_section(0).level == 0

    def test_tokenizer_fills_tokens(self):
        """Test that sentences are tokenized on build."""
        builder = DocumentBuilder(WhiteSpaceTokenizer())
        builder.add_sentence(_sentence("Hello world."))
        sentence = next(builder.build().iter_sentences())

        assert [t.surface for t in sentence.tokens] == ["Hello", "world", "."]

    def test_extend_list_element(self):
        """Test that a later paragraph joins the last element at its level."""
        builder = DocumentBuilder()
        builder.add_list_element(1, [_sentence("A")])
        builder.add_list_element(2, [_sentence("B")])
        builder.extend_list_element(1, [_sentence("more A.", line=4)])
        block = builder.build().get_section(0).list_blocks[0]

        assert [e.level for e in block] == [1, 2]
        assert [s.content for s in block.elements[0].sentences] == ["A", "more A."]

    def test_extend_list_element_without_list(self):
        """Test that extending outside a list opens a new element."""
        builder = DocumentBuilder()
        builder.add_sentence(_sentence("Text."))
        builder.extend_list_element(1, [_sentence("item")])
        section = builder.build().get_section(0)

        assert len(section.list_blocks) == 1
        assert section.list_blocks[0].elements[0].sentences[0].content == "item"


class TestSuppressRule:
    """Tests for suppress rules attached to a document."""

    @staticmethod
    def _document(rule):
        builder = DocumentBuilder()
        builder.add_section(1, [_sentence("One", line=1)])
        builder.add_sentence(_sentence("First.", line=2))
        builder.add_sentence(_sentence("Second.", line=4))
        builder.add_section(1, [_sentence("Two", line=6)])
        builder.add_sentence(_sentence("Third.", line=7))
        builder.add_suppress_rule(rule)
        return builder.build()

    def test_from_comment(self):
        """Test that the rule starts on the line after the comment."""
        rule = SuppressRule.from_comment(3, ["SentenceLength", " ", "CommaNumber"])

        assert rule.line_number == 4
        assert rule.validator_names == ["sentencelength", "commanumber"]

    def test_applies_to(self):
        """Test validator name matching."""
        assert SuppressRule(1).applies_to("Anything")
        assert SuppressRule(1, ["sentencelength"]).applies_to("SentenceLength")
        assert not SuppressRule(1, ["sentencelength"]).applies_to("CommaNumber")

    def test_triggered_inside_section(self):
        """Test that errors from the rule line to the section end are hidden."""
        document = self._document(SuppressRule(4))

        assert document.is_suppressed(4, "SentenceLength")
        assert not document.is_suppressed(2, "SentenceLength")
        assert not document.is_suppressed(7, "SentenceLength")

    def test_named_rule(self):
        """Test that a rule with names hides only those validators."""
        document = self._document(SuppressRule(2, ["commanumber"]))

        assert document.is_suppressed(4, "CommaNumber")
        assert not document.is_suppressed(4, "SentenceLength")

    def test_rule_in_second_section(self):
        """Test that a rule does not reach back into an earlier section."""
        document = self._document(SuppressRule(7))

        assert document.is_suppressed(7, "SentenceLength")
        assert not document.is_suppressed(4, "SentenceLength")
