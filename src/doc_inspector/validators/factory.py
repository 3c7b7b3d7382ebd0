"""Registry of the built-in validators."""

import logging
from typing import Dict, List, Optional, Type

from ..config.models import ConfigurationError, ValidatorConfiguration
from ..config.symbols import SymbolTable
from ..interfaces.validator import Validator
from .document import FrequentSentenceStartValidator
from .section import (
    ParagraphNumberValidator,
    ParagraphStartWithValidator,
    SectionLengthValidator,
)
from .sentence import (
    CommaNumberValidator,
    DoubledWordValidator,
    InvalidExpressionValidator,
    InvalidSymbolValidator,
    SentenceLengthValidator,
    SpaceBetweenAlphabeticalWordValidator,
    StartWithCapitalLetterValidator,
)


logger = logging.getLogger(__name__)

BUILTIN_VALIDATORS: List[Type[Validator]] = [
    SentenceLengthValidator,
    CommaNumberValidator,
    InvalidSymbolValidator,
    InvalidExpressionValidator,
    DoubledWordValidator,
    StartWithCapitalLetterValidator,
    SpaceBetweenAlphabeticalWordValidator,
    SectionLengthValidator,
    ParagraphNumberValidator,
    ParagraphStartWithValidator,
    FrequentSentenceStartValidator,
]


class ValidatorFactory:
    """
    Creates validators from their configuration descriptors.

    Validators are looked up by registry name, which is the class name
    without the ``Validator`` suffix. Additional validators can be
    registered at runtime.
    """

    def __init__(self):
        self._registry: Dict[str, Type[Validator]] = {
            cls.validator_name(): cls for cls in BUILTIN_VALIDATORS
        }

    def register(self, validator_class: Type[Validator]) -> None:
        """Register a validator class under its registry name."""
        name = validator_class.validator_name()
        if name in self._registry:
            logger.warning(f"Replacing registered validator '{name}'")
        self._registry[name] = validator_class

    def get_validator_names(self) -> List[str]:
        return list(self._registry)

    def create_validator(
        self,
        config: ValidatorConfiguration,
        symbol_table: Optional[SymbolTable] = None,
    ) -> Validator:
        """
        Instantiate the validator described by ``config``.

        Raises:
            ConfigurationError: If the name is unknown or an attribute is
                invalid.
        """
        validator_class = self._registry.get(config.name)
        if validator_class is None:
            raise ConfigurationError(
                f"Unknown validator '{config.name}', expected one of {sorted(self._registry)}"
            )
        return validator_class(config, symbol_table)


_default_factory = ValidatorFactory()


def get_validator_factory() -> ValidatorFactory:
    """Return the process-wide factory holding the built-in validators."""
    return _default_factory
