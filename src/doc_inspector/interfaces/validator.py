"""Validator interfaces for the document inspector.

Validators come in three kinds, distinguished by ``scope``: sentence
validators see one sentence at a time, section validators one section, and
document validators a whole document. The pipeline picks the traversal
granularity from the scope.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Set

from ..config.models import ConfigurationError, ValidatorConfiguration
from ..config.symbols import SymbolTable
from ..models.document import Document, LineOffset, Section, Sentence
from ..models.enums import Severity, ValidatorScope
from ..models.validation import ValidationError


logger = logging.getLogger(__name__)


class Validator(ABC):
    """
    Base class of all validators.

    Subclasses declare their attributes with defaults in
    ``DEFAULT_ATTRIBUTES`` and their message templates in ``MESSAGES``
    (``str.format`` templates keyed by message key; ``""`` is the default
    key). Configuration values override the defaults; unknown keys are
    kept but logged.
    """

    scope: ValidatorScope
    DEFAULT_ATTRIBUTES: Dict[str, Any] = {}
    MESSAGES: Dict[str, str] = {}

    def __init__(
        self,
        config: Optional[ValidatorConfiguration] = None,
        symbol_table: Optional[SymbolTable] = None,
    ):
        self.config = config or ValidatorConfiguration(name=self.name)
        self.symbol_table = symbol_table or SymbolTable()
        self._attributes: Dict[str, Any] = dict(self.DEFAULT_ATTRIBUTES)
        for key, value in self.config.attributes.items():
            if key not in self._attributes and key != "severity":
                logger.warning(f"{self.name}: unknown attribute '{key}'")
            self._attributes[key] = value
        self.severity = self._parse_severity(self.config.get_attribute("severity", "error"))
        self.init()

    @classmethod
    def validator_name(cls) -> str:
        """Registry name: the class name without the ``Validator`` suffix."""
        name = cls.__name__
        return name[: -len("Validator")] if name.endswith("Validator") else name

    @property
    def name(self) -> str:
        return self.validator_name()

    def init(self) -> None:
        """Hook for reading attributes once after construction."""

    # =========================================================================
    # Attribute access
    # =========================================================================

    def get_attribute(self, key: str) -> Any:
        return self._attributes.get(key)

    def get_int(self, key: str) -> int:
        value = self._attributes.get(key)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{self.name}: '{key}' must be an integer, got {value!r}")

    def get_float(self, key: str) -> float:
        value = self._attributes.get(key)
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{self.name}: '{key}' must be a number, got {value!r}")

    def get_bool(self, key: str) -> bool:
        value = self._attributes.get(key)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "y"}
        return bool(value)

    def get_str(self, key: str) -> str:
        value = self._attributes.get(key)
        return "" if value is None else str(value)

    def get_set(self, key: str) -> Set[str]:
        """Read a list attribute given either as a list or a comma-separated string."""
        value = self._attributes.get(key)
        if not value:
            return set()
        if isinstance(value, str):
            value = value.split(",")
        return {str(v).strip() for v in value if str(v).strip()}

    def _parse_severity(self, value: Any) -> Severity:
        if isinstance(value, Severity):
            return value
        text = str(value).strip().lower()
        if text in ("warn", "warning"):
            return Severity.WARNING
        if text == "error":
            return Severity.ERROR
        raise ConfigurationError(f"{self.name}: unknown severity {value!r}")

    # =========================================================================
    # Error creation
    # =========================================================================

    def create_error(
        self,
        sentence: Optional[Sentence],
        *args: Any,
        message_key: str = "",
        start_position: Optional[LineOffset] = None,
        end_position: Optional[LineOffset] = None,
    ) -> ValidationError:
        """Build an error from the message template ``message_key``."""
        template = self.MESSAGES.get(message_key, message_key or self.name)
        return ValidationError(
            validator_name=self.name,
            message=template.format(*args),
            line_number=sentence.line_number if sentence is not None else 0,
            sentence=sentence,
            severity=self.severity,
            start_position=start_position,
            end_position=end_position,
        )

    def create_error_with_position(
        self,
        sentence: Sentence,
        start: int,
        end: int,
        *args: Any,
        message_key: str = "",
    ) -> ValidationError:
        """Build an error covering ``sentence.content[start:end]``."""
        return self.create_error(
            sentence,
            *args,
            message_key=message_key,
            start_position=sentence.get_offset(start),
            end_position=sentence.get_offset(end - 1),
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._attributes})"


class SentenceValidator(Validator):
    """Validator invoked once per sentence."""

    scope = ValidatorScope.SENTENCE

    @abstractmethod
    def validate(self, sentence: Sentence) -> List[ValidationError]:
        """Check one sentence and return the errors found."""
        pass


class SectionValidator(Validator):
    """Validator invoked once per section."""

    scope = ValidatorScope.SECTION

    @abstractmethod
    def validate(self, section: Section) -> List[ValidationError]:
        """Check one section and return the errors found."""
        pass


class DocumentValidator(Validator):
    """Validator invoked once per document."""

    scope = ValidatorScope.DOCUMENT

    @abstractmethod
    def validate(self, document: Document) -> List[ValidationError]:
        """Check one document and return the errors found."""
        pass
