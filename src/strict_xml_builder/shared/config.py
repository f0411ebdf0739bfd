"""Configuration classes for XML string rendering.

This module provides the formatting options consumed by every node's
``to_string`` operation, together with the helpers that resolve loosely
specified options (``None``, mappings, or option objects) into a validated,
immutable configuration.
"""

import json
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional, Union


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class StringOptions:
    """Formatting options for XML string rendering.

    Immutable, so a single instance can be shared by every node rendered in
    one ``to_string`` call.

    Attributes:
        pretty: Whether to insert line breaks and indentation
        indent: Unit of indentation inserted per nesting level when pretty
        newline: Line terminator inserted when pretty
    """

    pretty: bool = False
    indent: str = "  "
    newline: str = os.linesep

    def __post_init__(self) -> None:
        """Validate string options."""
        if not isinstance(self.pretty, bool):
            raise ValueError("pretty must be a bool")
        if not isinstance(self.indent, str):
            raise ValueError("indent must be a string")
        if not isinstance(self.newline, str) or not self.newline:
            raise ValueError("newline must be a non-empty string")

    @classmethod
    def resolve(
        cls, options: Union["StringOptions", Mapping[str, Any], None] = None
    ) -> "StringOptions":
        """Resolve caller-supplied options into a validated instance.

        Args:
            options: ``None`` for defaults, an existing ``StringOptions``, or a
                mapping whose unrecognized keys are ignored

        Returns:
            StringOptions instance

        Raises:
            ConfigValidationError: If a recognized option has an invalid value
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_dict(options)
        raise ConfigValidationError(
            f"options must be a StringOptions or a mapping, "
            f"not {type(options).__name__}",
            suggestions=["Pass StringOptions(pretty=True)", "Pass {'pretty': True}"],
        )

    def override(self, **kwargs: Any) -> "StringOptions":
        """Create a new configuration with specific overrides.

        Example:
            >>> StringOptions().override(pretty=True).pretty
            True
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown option(s): {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=[f"Use one of: {', '.join(sorted(known))}"],
            )
        try:
            return replace(self, **kwargs)
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StringOptions":
        """Create configuration from a mapping.

        Unrecognized keys are ignored and keys set to ``None`` fall back to
        their defaults.
        """
        known = {f.name for f in fields(cls)}
        values = {
            key: value for key, value in data.items()
            if key in known and value is not None
        }
        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "StringOptions":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def compact(cls) -> "StringOptions":
        """Single-line output with no added whitespace."""
        return cls(pretty=False)

    @classmethod
    def pretty_printed(cls, indent: str = "  ", newline: str = "\n") -> "StringOptions":
        """Indented, one-structural-child-per-line output."""
        return cls(pretty=True, indent=indent, newline=newline)
