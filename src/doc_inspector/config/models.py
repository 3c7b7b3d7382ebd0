"""Data models for lint configuration."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .symbols import SymbolTable


@dataclass
class ValidatorConfiguration:
    """
    Descriptor of one configured validator.

    Attribute values are kept as given in the configuration source; the
    validator converts them to the types it needs.
    """
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    def get_attribute(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def add_attribute(self, key: str, value: Any) -> "ValidatorConfiguration":
        self.attributes[key] = value
        return self


@dataclass
class Configuration:
    """
    Resolved configuration handed to parsers and the validation pipeline.

    Validators run in the order of ``validator_configs``.
    """
    validator_configs: List[ValidatorConfiguration] = field(default_factory=list)
    symbol_table: SymbolTable = field(default_factory=SymbolTable)
    lang: str = "en"
    tokenizer: str = "whitespace"
    metadata: Dict[str, Any] = field(default_factory=dict)

    def get_validator_config(self, name: str) -> Optional[ValidatorConfiguration]:
        """Get the first validator descriptor with the given name."""
        for config in self.validator_configs:
            if config.name == name:
                return config
        return None

    def get_validator_names(self) -> List[str]:
        return [c.name for c in self.validator_configs]

    def create_sentence_extractor(self):
        """Build the sentence extractor for this configuration's symbols."""
        from ..parsers.sentence_extractor import SentenceExtractor

        return SentenceExtractor.from_symbol_table(self.symbol_table)

    def create_tokenizer(self):
        """Build the configured tokenizer."""
        from ..tokenizers import create_tokenizer

        return create_tokenizer(self.tokenizer)


@dataclass
class ValidationResult:
    """
    Outcome of checking a configuration source.

    Errors make the source unusable; warnings (a disabled validator, an
    unknown attribute) are reported and the source is still loaded.
    """
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Combine two results; the merged result is valid only if both are."""
        merged = ValidationResult(is_valid=self.is_valid and other.is_valid)
        merged.errors = [*self.errors, *other.errors]
        merged.warnings = [*self.warnings, *other.warnings]
        return merged


class ConfigurationError(Exception):
    """
    A configuration source that cannot be turned into a Configuration.

    Raised for unreadable files, malformed JSON, unknown validator or
    symbol names, and attribute values a validator cannot convert.
    """

    def __init__(self, message: str, validation_result: Optional[ValidationResult] = None):
        super().__init__(message)
        self.message = message
        self.validation_result = validation_result

    @property
    def problems(self) -> List[str]:
        return list(self.validation_result.errors) if self.validation_result else []

    def __str__(self) -> str:
        if not self.problems:
            return self.message
        return f"{self.message}: {'; '.join(self.problems)}"
