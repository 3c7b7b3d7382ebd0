"""Configuration management for the document inspector."""

from .config_manager import ConfigurationManager
from .models import (
    Configuration,
    ConfigurationError,
    ValidationResult,
    ValidatorConfiguration,
)
from .symbols import DEFAULT_SYMBOLS, JAPANESE_SYMBOLS, Symbol, SymbolTable

__all__ = [
    "ConfigurationManager",
    "Configuration",
    "ConfigurationError",
    "ValidationResult",
    "ValidatorConfiguration",
    "DEFAULT_SYMBOLS",
    "JAPANESE_SYMBOLS",
    "Symbol",
    "SymbolTable",
]
