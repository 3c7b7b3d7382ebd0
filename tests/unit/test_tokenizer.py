"""Unit tests for the tokenizers."""

import pytest

from doc_inspector.tokenizers import WhiteSpaceTokenizer, create_tokenizer


class TestWhiteSpaceTokenizer:
    """Tests for the whitespace tokenizer."""

    def test_words_and_symbols(self):
        """Test that punctuation is split from words."""
        tokens = WhiteSpaceTokenizer().tokenize("Hello, world.")

        assert [t.surface for t in tokens] == ["Hello", ",", "world", "."]
        assert [t.tags[0] for t in tokens] == ["word", "symbol", "word", "symbol"]
        assert [t.offset for t in tokens] == [0, 5, 7, 12]

    def test_inner_apostrophe_and_hyphen(self):
        """Test that contractions and hyphenated words stay whole."""
        tokens = WhiteSpaceTokenizer().tokenize("It's a well-known fact")

        assert [t.surface for t in tokens] == ["It's", "a", "well-known", "fact"]

    def test_empty_text(self):
        """Test tokenizing empty text."""
        assert WhiteSpaceTokenizer().tokenize("") == []


class TestCreateTokenizer:
    """Tests for the tokenizer factory."""

    def test_default(self):
        """Test the default tokenizer name."""
        assert isinstance(create_tokenizer(), WhiteSpaceTokenizer)

    def test_unknown(self):
        """Test that unknown names are rejected."""
        with pytest.raises(ValueError):
            create_tokenizer("mecab")
