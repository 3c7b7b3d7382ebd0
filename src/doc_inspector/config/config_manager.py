"""Configuration Manager for the document inspector.

This module loads, validates, and exports the lint configuration: the
language and its symbol table, the tokenizer name and the ordered list of
validator descriptors.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from .models import (
    Configuration,
    ConfigurationError,
    ValidationResult,
    ValidatorConfiguration,
)
from .symbols import DEFAULT_SYMBOLS, SUPPORTED_LANGUAGES, Symbol, SymbolTable


logger = logging.getLogger(__name__)

SUPPORTED_TOKENIZERS = ("whitespace",)

DEFAULT_VALIDATORS: List[Dict[str, Any]] = [
    {"name": "SentenceLength", "attributes": {"max_len": 120}},
    {"name": "CommaNumber"},
    {"name": "InvalidSymbol"},
    {"name": "DoubledWord"},
    {"name": "SectionLength", "attributes": {"max_num": 2000}},
    {"name": "ParagraphNumber"},
]


class ConfigurationManager:
    """
    Manager for lint configuration.

    Handles loading from JSON files or dictionaries, validation, and
    export of the configuration.
    """

    def __init__(self):
        self._configuration = Configuration()
        self._is_loaded = False

    @property
    def configuration(self) -> Configuration:
        """Get the current configuration."""
        return self._configuration

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._is_loaded

    @classmethod
    def default(cls, lang: str = "en") -> Configuration:
        """Build the configuration used when no configuration file is given."""
        manager = cls()
        manager.load({"lang": lang, "validators": DEFAULT_VALIDATORS})
        return manager.configuration

    def load(
        self,
        source: Union[str, Path, Dict[str, Any]],
        validator_names: Optional[Iterable[str]] = None,
    ) -> ValidationResult:
        """
        Load and validate a configuration.

        Args:
            source: JSON file path or dictionary.
            validator_names: Known validator names. When given, unknown
                names in the configuration are reported as errors.

        Returns:
            ValidationResult with any warnings.

        Raises:
            ConfigurationError: If the configuration is missing required
                blocks or contains invalid entries.
        """
        raw_data = self._parse_source(source)
        if not isinstance(raw_data, dict):
            raise ConfigurationError("Configuration root must be an object")

        result = ValidationResult(is_valid=True)
        known = set(validator_names) if validator_names is not None else None

        lang = raw_data.get("lang", "en")
        if lang not in SUPPORTED_LANGUAGES:
            result.add_error(f"'lang' must be one of {list(SUPPORTED_LANGUAGES)}")

        tokenizer = raw_data.get("tokenizer", "whitespace")
        if tokenizer not in SUPPORTED_TOKENIZERS:
            result.add_error(f"'tokenizer' must be one of {list(SUPPORTED_TOKENIZERS)}")

        validator_configs: List[ValidatorConfiguration] = []
        if "validators" not in raw_data:
            result.add_error("Missing required block 'validators'")
        elif not isinstance(raw_data["validators"], list):
            result.add_error("'validators' must be a list")
        else:
            for i, validator_dict in enumerate(raw_data["validators"]):
                validator_result, config = self._validate_validator(
                    validator_dict, index=i, known=known
                )
                result = result.merge(validator_result)
                if config:
                    validator_configs.append(config)

        symbols: List[Symbol] = []
        for i, symbol_dict in enumerate(raw_data.get("symbols", [])):
            symbol_result, symbol = self._validate_symbol(symbol_dict, index=i)
            result = result.merge(symbol_result)
            if symbol:
                symbols.append(symbol)

        if not result.is_valid:
            raise ConfigurationError(
                "Configuration validation failed",
                validation_result=result
            )

        for warning in result.warnings:
            logger.warning(warning)

        self._configuration = Configuration(
            validator_configs=validator_configs,
            symbol_table=SymbolTable.create(
                lang=lang, variant=raw_data.get("variant", ""), overrides=symbols
            ),
            lang=lang,
            tokenizer=tokenizer,
            metadata=raw_data.get("metadata", {}),
        )
        self._is_loaded = True
        logger.info(
            f"Loaded configuration with {len(validator_configs)} validators (lang={lang})"
        )
        return result

    def _validate_validator(
        self,
        data: Any,
        index: int = 0,
        known: Optional[set] = None,
    ) -> tuple[ValidationResult, Optional[ValidatorConfiguration]]:
        """Validate a single validator descriptor."""
        result = ValidationResult(is_valid=True)
        prefix = f"Validator [{index}]"

        if isinstance(data, str):
            data = {"name": data}
        if not isinstance(data, dict):
            result.add_error(f"{prefix}: must be an object or a name")
            return result, None

        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            result.add_error(f"{prefix}: 'name' must be a non-empty string")
            return result, None
        name = name.strip()
        if known is not None and name not in known:
            result.add_error(f"{prefix}: Unknown validator '{name}'")

        attributes = data.get("attributes", {})
        if not isinstance(attributes, dict):
            result.add_error(f"{prefix}: 'attributes' must be an object")
        else:
            for key, value in attributes.items():
                if isinstance(value, dict):
                    result.add_error(
                        f"{prefix}: attribute '{key}' must be a scalar or a list"
                    )

        if not result.is_valid:
            return result, None

        if data.get("enabled", True) is False:
            result.add_warning(f"{prefix}: '{name}' is disabled")
            return result, None

        return result, ValidatorConfiguration(name=name, attributes=dict(attributes))

    def _validate_symbol(
        self, data: Any, index: int = 0
    ) -> tuple[ValidationResult, Optional[Symbol]]:
        """Validate a single symbol override."""
        result = ValidationResult(is_valid=True)
        prefix = f"Symbol [{index}]"

        if not isinstance(data, dict):
            result.add_error(f"{prefix}: must be an object")
            return result, None

        for required in ("name", "value"):
            if required not in data:
                result.add_error(f"{prefix}: Missing required field '{required}'")
        if not result.is_valid:
            return result, None

        if data["name"] not in DEFAULT_SYMBOLS:
            result.add_error(f"{prefix}: Unknown symbol '{data['name']}'")
        if not isinstance(data["value"], str) or len(data["value"]) != 1:
            result.add_error(f"{prefix}: 'value' must be a single character")
        if not isinstance(data.get("invalid_chars", ""), str):
            result.add_error(f"{prefix}: 'invalid_chars' must be a string")
        if not result.is_valid:
            return result, None

        symbol = Symbol.of(
            data["name"],
            data["value"],
            data.get("invalid_chars", ""),
            bool(data.get("before_space", False)),
            bool(data.get("after_space", False)),
        )
        return result, symbol

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _parse_source(
        self,
        source: Union[str, Path, Dict[str, Any]]
    ) -> Any:
        """Parse configuration source to raw data."""
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")

            try:
                with open(path, "r", encoding="utf-8") as f:
                    return json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Malformed configuration file {path}: {e}")

        return source

    def save(self, path: Union[str, Path]) -> None:
        """Write the current configuration as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def reset(self) -> None:
        """Reset configuration to empty state."""
        self._configuration = Configuration()
        self._is_loaded = False

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as a dictionary."""
        table = self._configuration.symbol_table
        base = SymbolTable.create(lang=table.lang)
        return {
            "lang": self._configuration.lang,
            "variant": table.variant,
            "tokenizer": self._configuration.tokenizer,
            "validators": [
                {"name": v.name, "attributes": dict(v.attributes)}
                for v in self._configuration.validator_configs
            ],
            "symbols": [
                {
                    "name": s.name,
                    "value": s.value,
                    "invalid_chars": "".join(s.invalid_chars),
                    "before_space": s.need_before_space,
                    "after_space": s.need_after_space,
                }
                for s in table
                if base.symbols.get(s.name) != s
            ],
            "metadata": self._configuration.metadata,
        }
