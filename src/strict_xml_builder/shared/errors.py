"""Exception hierarchy for XML tree construction.

Every error derives from :class:`XmlBuilderError` and from the closest builtin
exception, so callers may catch either the library-specific class or the
standard one (``TypeError``, ``IndexError``, ``ValueError``...).
"""


class XmlBuilderError(Exception):
    """Base exception for all tree construction errors."""


class InvalidArgumentError(XmlBuilderError, TypeError):
    """Argument has the wrong type, or a node of a disallowed variant."""


class InvalidIndexError(XmlBuilderError, IndexError):
    """Index outside the valid insertion or removal bounds."""


class InvalidNameError(XmlBuilderError, ValueError):
    """String does not match the XML ``Name`` production."""


class InvalidCharacterDataError(XmlBuilderError, ValueError):
    """String contains characters or sequences not allowed in this context."""


class DuplicateAttributeError(XmlBuilderError, ValueError):
    """Element already holds an attribute with the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"element already contains an attribute named {name!r}")
        self.name = name


class UnsupportedOperationError(XmlBuilderError, NotImplementedError):
    """Operation is structurally impossible for this node variant."""
