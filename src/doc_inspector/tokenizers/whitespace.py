"""Whitespace tokenizer for space-separated languages."""

import re
from typing import List

from ..interfaces.tokenizer import ITokenizer
from ..models.token import TokenElement


# words (with inner apostrophes or hyphens), numbers, or single punctuation
TOKEN_PATTERN = re.compile(r"\w+(?:['’-]\w+)*|[^\w\s]")


class WhiteSpaceTokenizer(ITokenizer):
    """
    Tokenizer splitting on whitespace and punctuation.

    Words are tagged ``"word"``, punctuation ``"symbol"``. Offsets point into
    the tokenized text.
    """

    def tokenize(self, text: str) -> List[TokenElement]:
        tokens = []
        for match in TOKEN_PATTERN.finditer(text):
            surface = match.group()
            tag = "word" if surface[0].isalnum() or surface[0] == "_" else "symbol"
            tokens.append(
                TokenElement(surface=surface, tags=[tag], offset=match.start())
            )
        return tokens
