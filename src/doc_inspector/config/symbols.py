"""Symbol tables describing the characters a language uses.

The default (Latin) and Japanese tables are read-only mappings. A
``SymbolTable`` is an immutable value built once from one of them plus the
overrides found in the configuration, then handed to every parser and
validator that needs it.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Symbol:
    """
    A named symbol and the characters that must not be used in its place.

    Attributes:
        name: Symbol name, e.g. ``FULL_STOP``.
        value: Character used for the symbol.
        invalid_chars: Characters reported as invalid variants of it.
        need_before_space: Whether a space is required before the symbol.
        need_after_space: Whether a space is required after the symbol.
    """
    name: str
    value: str
    invalid_chars: Tuple[str, ...] = ()
    need_before_space: bool = False
    need_after_space: bool = False

    @classmethod
    def of(
        cls,
        name: str,
        value: str,
        invalid_chars: str = "",
        need_before_space: bool = False,
        need_after_space: bool = False,
    ) -> "Symbol":
        """Create a symbol from a string of invalid characters."""
        return cls(name, value, tuple(invalid_chars), need_before_space, need_after_space)


def _table(*symbols: Symbol) -> Mapping[str, Symbol]:
    return MappingProxyType({s.name: s for s in symbols})


_DIGITS = [
    Symbol.of(f"DIGIT_{name}", str(i))
    for i, name in enumerate(
        ["ZERO", "ONE", "TWO", "THREE", "FOUR", "FIVE", "SIX", "SEVEN", "EIGHT", "NINE"]
    )
]

DEFAULT_SYMBOLS: Mapping[str, Symbol] = _table(
    Symbol.of("SPACE", " ", "　"),
    Symbol.of("EXCLAMATION_MARK", "!", "！"),
    Symbol.of("NUMBER_SIGN", "#", "＃"),
    Symbol.of("DOLLAR_SIGN", "$", "＄"),
    Symbol.of("PERCENT_SIGN", "%", "％"),
    Symbol.of("QUESTION_MARK", "?", "？"),
    Symbol.of("AMPERSAND", "&", "＆"),
    Symbol.of("LEFT_PARENTHESIS", "(", "（"),
    Symbol.of("RIGHT_PARENTHESIS", ")", "）"),
    Symbol.of("ASTERISK", "*", "＊"),
    Symbol.of("COMMA", ",", "，、"),
    Symbol.of("FULL_STOP", ".", "．。"),
    Symbol.of("PLUS_SIGN", "+", "＋"),
    Symbol.of("HYPHEN_SIGN", "-", "ー"),
    Symbol.of("SLASH", "/", "／"),
    Symbol.of("COLON", ":", "："),
    Symbol.of("SEMICOLON", ";", "；"),
    Symbol.of("LESS_THAN_SIGN", "<", "＜"),
    Symbol.of("EQUAL_SIGN", "=", "＝"),
    Symbol.of("GREATER_THAN_SIGN", ">", "＞"),
    Symbol.of("AT_MARK", "@", "＠"),
    Symbol.of("LEFT_SQUARE_BRACKET", "["),
    Symbol.of("RIGHT_SQUARE_BRACKET", "]"),
    Symbol.of("BACKSLASH", "\\"),
    Symbol.of("CIRCUMFLEX_ACCENT", "^"),
    Symbol.of("LOW_LINE", "_"),
    Symbol.of("LEFT_CURLY_BRACKET", "{", "｛"),
    Symbol.of("RIGHT_CURLY_BRACKET", "}", "｝"),
    Symbol.of("VERTICAL_BAR", "|", "｜"),
    Symbol.of("TILDE", "~", "〜"),
    Symbol.of("LEFT_SINGLE_QUOTATION_MARK", "'"),
    Symbol.of("RIGHT_SINGLE_QUOTATION_MARK", "'"),
    Symbol.of("LEFT_DOUBLE_QUOTATION_MARK", '"'),
    Symbol.of("RIGHT_DOUBLE_QUOTATION_MARK", '"'),
    *_DIGITS,
)

JAPANESE_SYMBOLS: Mapping[str, Symbol] = _table(
    Symbol.of("SPACE", "　", " "),
    Symbol.of("EXCLAMATION_MARK", "！", "!"),
    Symbol.of("NUMBER_SIGN", "＃", "#"),
    Symbol.of("DOLLAR_SIGN", "$", "＄"),
    Symbol.of("PERCENT_SIGN", "％", "%"),
    Symbol.of("QUESTION_MARK", "？", "?"),
    Symbol.of("AMPERSAND", "＆", "&"),
    Symbol.of("LEFT_PARENTHESIS", "（", "("),
    Symbol.of("RIGHT_PARENTHESIS", "）", ")"),
    Symbol.of("ASTERISK", "＊", "*"),
    Symbol.of("COMMA", "、", ",，"),
    Symbol.of("FULL_STOP", "。", ".．"),
    Symbol.of("PLUS_SIGN", "＋", "+"),
    Symbol.of("HYPHEN_SIGN", "ー", "-"),
    Symbol.of("SLASH", "／", "/"),
    Symbol.of("COLON", "：", ":"),
    Symbol.of("SEMICOLON", "；", ";"),
    Symbol.of("LESS_THAN_SIGN", "＜", "<"),
    Symbol.of("EQUAL_SIGN", "＝", "="),
    Symbol.of("GREATER_THAN_SIGN", "＞", ">"),
    Symbol.of("AT_MARK", "＠", "@"),
    Symbol.of("LEFT_SQUARE_BRACKET", "「"),
    Symbol.of("RIGHT_SQUARE_BRACKET", "」"),
    Symbol.of("BACKSLASH", "¥", "\\"),
    Symbol.of("CIRCUMFLEX_ACCENT", "＾", "^"),
    Symbol.of("LOW_LINE", "＿", "_"),
    Symbol.of("LEFT_CURLY_BRACKET", "｛"),
    Symbol.of("RIGHT_CURLY_BRACKET", "｝"),
    Symbol.of("VERTICAL_BAR", "｜", "|"),
    Symbol.of("TILDE", "〜", "~"),
    Symbol.of("LEFT_SINGLE_QUOTATION_MARK", "‘"),
    Symbol.of("RIGHT_SINGLE_QUOTATION_MARK", "’"),
    Symbol.of("LEFT_DOUBLE_QUOTATION_MARK", "“"),
    Symbol.of("RIGHT_DOUBLE_QUOTATION_MARK", "”"),
    *_DIGITS,
)

SUPPORTED_LANGUAGES = ("en", "ja")


@dataclass(frozen=True)
class SymbolTable:
    """
    Resolved symbols for one language.

    Use ``SymbolTable.create`` to build a table from the base table of a
    language plus user overrides.
    """
    lang: str = "en"
    variant: str = ""
    symbols: Mapping[str, Symbol] = field(default_factory=lambda: DEFAULT_SYMBOLS, repr=False)

    @classmethod
    def create(
        cls, lang: str = "en", variant: str = "", overrides: Iterable[Symbol] = ()
    ) -> "SymbolTable":
        base = JAPANESE_SYMBOLS if lang == "ja" else DEFAULT_SYMBOLS
        table = cls(lang=lang, variant=variant, symbols=base)
        overrides = list(overrides)
        return table.with_overrides(overrides) if overrides else table

    def with_overrides(self, overrides: Iterable[Symbol]) -> "SymbolTable":
        """Return a copy where the given symbols replace the existing ones."""
        merged: Dict[str, Symbol] = dict(self.symbols)
        for symbol in overrides:
            merged[symbol.name] = symbol
        return replace(self, symbols=MappingProxyType(merged))

    def get_symbol(self, name: str) -> Symbol:
        """
        Look up a symbol by name.

        Raises:
            KeyError: If the symbol is not defined.
        """
        return self.symbols[name]

    def get_value(self, name: str, default: Optional[str] = None) -> Optional[str]:
        symbol = self.symbols.get(name)
        return symbol.value if symbol is not None else default

    def contains_symbol(self, name: str) -> bool:
        return name in self.symbols

    def __iter__(self):
        return iter(self.symbols.values())
