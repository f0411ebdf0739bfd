"""Node hierarchy for building well-formed XML trees.

Key Components:
    XmlNode: Base class with single-parent ownership and child navigation
    XmlElement: Container node with attribute handling and pretty-printing
    XmlAttribute, XmlText, XmlCdata, XmlComment, XmlProcInst, XmlCharRef,
    XmlEntityRef, XmlDtdEntity: Leaf variants with validated payloads
    XmlDocument, XmlDecl, XmlDtd: Document assembly around a root element
"""

from .document import XmlDecl, XmlDocument, XmlDtd
from .element import XmlElement
from .leaves import (
    XmlAttribute,
    XmlCdata,
    XmlCharRef,
    XmlComment,
    XmlDtdEntity,
    XmlEntityRef,
    XmlProcInst,
    XmlText,
)
from .node import NodeType, XmlNode

__all__ = [
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
]
