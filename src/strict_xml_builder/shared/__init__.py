"""Shared utilities for XML tree construction.

This module provides the configuration objects, exception hierarchy,
diagnostic types and logging helpers used across all layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    StringOptions,
)
from .errors import (
    DuplicateAttributeError,
    InvalidArgumentError,
    InvalidCharacterDataError,
    InvalidIndexError,
    InvalidNameError,
    UnsupportedOperationError,
    XmlBuilderError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "StringOptions",
    "DuplicateAttributeError",
    "InvalidArgumentError",
    "InvalidCharacterDataError",
    "InvalidIndexError",
    "InvalidNameError",
    "UnsupportedOperationError",
    "XmlBuilderError",
    "CorrelationLogger",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
]
