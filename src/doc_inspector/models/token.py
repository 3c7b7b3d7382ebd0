"""Word-level token model produced by tokenizers."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class TokenElement:
    """
    A single token of a sentence.

    Attributes:
        surface: The token text as it appears in the sentence.
        tags: Part-of-speech style tags supplied by the tokenizer.
        offset: Character offset of the token inside the sentence content.
        reading: Optional reading (used by CJK tokenizers).
        base_form: Optional dictionary form of the token.
    """
    surface: str
    tags: List[str] = field(default_factory=list)
    offset: int = 0
    reading: Optional[str] = None
    base_form: Optional[str] = None
