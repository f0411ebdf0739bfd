"""Strict XML Builder.

Builds XML node trees in memory and serializes them to strings, validating
every name and every piece of character data when it is set so that any tree
which exists renders as well-formed XML.

Progressive API Disclosure:
- Level 1: Simple functions - element(), document(), to_string()
- Level 2: Node classes - XmlElement, XmlText, XmlAttribute, ...
- Level 3: Rendering configuration - StringOptions
- Level 4: Integration adapters - get_adapter("lxml"), get_adapter("elementtree")
"""

__version__ = "0.1.0"
__author__ = "Strict XML Builder Team"

# Progressive API disclosure - Level 1: Simple functions
from .api import document, element, get_adapter, to_string

# Error hierarchy and configuration
from .shared import (
    DuplicateAttributeError,
    InvalidArgumentError,
    InvalidCharacterDataError,
    InvalidIndexError,
    InvalidNameError,
    StringOptions,
    UnsupportedOperationError,
    XmlBuilderError,
)

# Level 2: Node classes
from .tree import (
    NodeType,
    XmlAttribute,
    XmlCdata,
    XmlCharRef,
    XmlComment,
    XmlDecl,
    XmlDocument,
    XmlDtd,
    XmlDtdEntity,
    XmlElement,
    XmlEntityRef,
    XmlNode,
    XmlProcInst,
    XmlText,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple building functions
    "document",
    "element",
    "to_string",

    # Level 2: Node classes
    "NodeType",
    "XmlAttribute",
    "XmlCdata",
    "XmlCharRef",
    "XmlComment",
    "XmlDecl",
    "XmlDocument",
    "XmlDtd",
    "XmlDtdEntity",
    "XmlElement",
    "XmlEntityRef",
    "XmlNode",
    "XmlProcInst",
    "XmlText",

    # Level 3: Configuration
    "StringOptions",

    # Level 4: Integration adapters
    "get_adapter",

    # Errors
    "DuplicateAttributeError",
    "InvalidArgumentError",
    "InvalidCharacterDataError",
    "InvalidIndexError",
    "InvalidNameError",
    "UnsupportedOperationError",
    "XmlBuilderError",
]
