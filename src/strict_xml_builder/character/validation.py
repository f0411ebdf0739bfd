"""Lexical validation and escaping for XML character data and names.

This module implements the XML 1.0 (Fifth Edition) ``Char`` and ``Name``
productions as compiled regular expressions, plus the escaping helpers used
when text is rendered inside element content or attribute values.
"""

import re
from typing import ClassVar, Dict, List, Pattern, Tuple

# XML 1.0 [2] Char
XML_VALID_RANGES: List[Tuple[int, int]] = [
    (0x0009, 0x0009),  # Tab
    (0x000A, 0x000A),  # Line Feed
    (0x000D, 0x000D),  # Carriage Return
    (0x0020, 0xD7FF),  # Basic Multilingual Plane excluding surrogates
    (0xE000, 0xFFFD),  # Private Use and extended characters
    (0x10000, 0x10FFFF),  # Supplementary planes
]

# XML 1.0 [4] NameStartChar
NAME_START_RANGES: List[Tuple[int, int]] = [
    (ord(":"), ord(":")),
    (ord("A"), ord("Z")),
    (ord("_"), ord("_")),
    (ord("a"), ord("z")),
    (0x00C0, 0x00D6),
    (0x00D8, 0x00F6),
    (0x00F8, 0x02FF),
    (0x0370, 0x037D),
    (0x037F, 0x1FFF),
    (0x200C, 0x200D),  # Zero width non-joiner, zero width joiner
    (0x2070, 0x218F),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
]

# XML 1.0 [4a] NameChar, in addition to NameStartChar
NAME_CHAR_EXTRA_RANGES: List[Tuple[int, int]] = [
    (ord("-"), ord("-")),
    (ord("."), ord(".")),
    (ord("0"), ord("9")),
    (0x00B7, 0x00B7),  # Middle dot
    (0x0300, 0x036F),  # Combining diacritical marks
    (0x203F, 0x2040),  # Undertie and character tie
]

CACHE_SIZE_LIMIT = 1000


def _ranges_to_class(ranges: List[Tuple[int, int]]) -> str:
    """Build the body of a regex character class from code point ranges."""
    parts = []
    for start, end in ranges:
        if start == end:
            parts.append(re.escape(chr(start)))
        else:
            parts.append(f"{re.escape(chr(start))}-{re.escape(chr(end))}")
    return "".join(parts)


_CHAR_CLASS = _ranges_to_class(XML_VALID_RANGES)
_NAME_START_CLASS = _ranges_to_class(NAME_START_RANGES)
_NAME_CHAR_CLASS = _NAME_START_CLASS + _ranges_to_class(NAME_CHAR_EXTRA_RANGES)

CHAR_DATA_PATTERN: Pattern[str] = re.compile(f"[{_CHAR_CLASS}]*")
NAME_PATTERN: Pattern[str] = re.compile(
    f"[{_NAME_START_CLASS}][{_NAME_CHAR_CLASS}]*"
)


class XML10Validator:
    """XML 1.0 character and name checks with a small result cache."""

    _name_cache: ClassVar[Dict[str, bool]] = {}

    @staticmethod
    def is_valid_xml_char(char_code: int) -> bool:
        """Check if a single code point is allowed by the ``Char`` production.

        Args:
            char_code: Unicode code point

        Returns:
            True if the code point is valid in XML 1.0
        """
        return any(start <= char_code <= end for start, end in XML_VALID_RANGES)

    @staticmethod
    def is_valid_char_data(value: str) -> bool:
        """Check that every code point of ``value`` is a legal XML character."""
        return CHAR_DATA_PATTERN.fullmatch(value) is not None

    @classmethod
    def is_valid_name(cls, value: str) -> bool:
        """Check that ``value`` matches the XML ``Name`` production."""
        if value in cls._name_cache:
            return cls._name_cache[value]

        is_valid = NAME_PATTERN.fullmatch(value) is not None

        # Element and attribute names repeat heavily within a document
        if len(cls._name_cache) < CACHE_SIZE_LIMIT:
            cls._name_cache[value] = is_valid

        return is_valid

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the name validation cache."""
        cls._name_cache.clear()


def validate_name(value: str) -> bool:
    """Return True if ``value`` is a legal XML name.

    Names start with a letter, underscore or colon, followed by name
    characters (letters, digits, ``.``, ``-``, ``_``, ``:``, combining marks
    and extenders).

    Examples:
        >>> validate_name("xsl:template")
        True
        >>> validate_name("1st")
        False
    """
    return XML10Validator.is_valid_name(value)


def validate_char(value: str) -> bool:
    """Return True if every code point of ``value`` is a legal XML ``Char``.

    The empty string contains no illegal characters and is therefore valid.
    """
    return XML10Validator.is_valid_char_data(value)


def escape_ampersands(value: str) -> str:
    return value.replace("&", "&amp;")


def escape_left_angle_brackets(value: str) -> str:
    return value.replace("<", "&lt;")


def escape_cdata_terminators(value: str) -> str:
    """Escape ``>`` where it would close a CDATA section (``]]>``)."""
    return value.replace("]]>", "]]&gt;")


def escape_double_quotes(value: str) -> str:
    return value.replace('"', "&quot;")


def escape_text(value: str) -> str:
    """Escape character data for use as element content."""
    value = escape_ampersands(value)
    value = escape_left_angle_brackets(value)
    return escape_cdata_terminators(value)


def escape_attribute_text(value: str) -> str:
    """Escape character data for use inside a double-quoted attribute value."""
    return escape_double_quotes(escape_text(value))
