"""Module-level entry points for building XML trees.

These functions are the simplest way into the library: create a root
element or a document, grow it with the element's factory methods, and
render it with :func:`to_string`.
"""

from typing import Any, Optional

from strict_xml_builder.shared import StringOptions, get_logger
from strict_xml_builder.tree import XmlDocument, XmlElement, XmlNode
from strict_xml_builder.tree.node import OptionsType


def element(name: str) -> XmlElement:
    """Create a detached element to use as the root of a tree.

    Examples:
        >>> root = element("note")
        >>> _ = root.attribute("lang", "en")
        >>> _ = root.text("hi")
        >>> root.to_string()
        '<note lang="en">hi</note>'
    """
    return XmlElement(name)


def document(
    root_name: str,
    version: Optional[str] = "1.0",
    encoding: Optional[str] = None,
    standalone: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> XmlDocument:
    """Create a document with a root element and, by default, an XML declaration.

    Args:
        root_name: Name of the root element
        version: XML version for the declaration; None to omit the declaration
        encoding: Optional encoding name for the declaration
        standalone: Optional ``"yes"``/``"no"`` for the declaration
        correlation_id: Optional correlation ID attached to document log records

    Returns:
        XmlDocument whose root element is available through ``root()``
    """
    logger = get_logger(__name__, correlation_id, "document")
    doc = XmlDocument(root_name, correlation_id)
    if version is not None:
        doc.decl(version, encoding, standalone)
    logger.debug(
        "Created document",
        extra={"root": root_name, "has_decl": version is not None},
    )
    return doc


def to_string(node: XmlNode, options: OptionsType = None, **overrides: Any) -> str:
    """Render ``node`` with ``options`` adjusted by keyword overrides.

    Examples:
        >>> root = element("a")
        >>> _ = root.element("b")
        >>> to_string(root, pretty=True, newline="\\n")
        '<a>\\n  <b/>\\n</a>'
    """
    opts = StringOptions.resolve(options)
    if overrides:
        opts = opts.override(**overrides)
    return node.to_string(opts)
