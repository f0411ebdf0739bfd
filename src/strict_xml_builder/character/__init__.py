"""Character layer for XML tree construction.

This module provides the XML 1.0 lexical checks (``Char`` and ``Name``
productions) applied by every payload-bearing node, and the escaping helpers
used when character data is rendered.
"""

from .validation import (
    XML10Validator,
    escape_attribute_text,
    escape_text,
    validate_char,
    validate_name,
)

__all__ = [
    "XML10Validator",
    "escape_attribute_text",
    "escape_text",
    "validate_char",
    "validate_name",
]
