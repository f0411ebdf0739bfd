"""Base node of the XML tree hierarchy.

Every node owns an ordered list of children and holds a weak, non-owning
reference to its parent. Ownership flows strictly from parent to children:
a node appears in at most one parent's child list at a time, and inserting it
elsewhere moves the same instance.
"""

import weakref
from enum import Enum, auto
from typing import Any, ClassVar, List, Mapping, Optional, Union

from strict_xml_builder.shared import (
    InvalidArgumentError,
    InvalidIndexError,
    StringOptions,
    UnsupportedOperationError,
    get_logger,
)

OptionsType = Union[StringOptions, Mapping[str, Any], None]

_logger = get_logger(__name__, component="tree")


class NodeType(Enum):
    """Closed set of node variants."""

    ATTRIBUTE = auto()
    CDATA = auto()
    CHAR_REF = auto()
    COMMENT = auto()
    DECL = auto()
    DOCUMENT = auto()
    DTD = auto()
    DTD_ENTITY = auto()
    ELEMENT = auto()
    ENTITY_REF = auto()
    PROC_INST = auto()
    TEXT = auto()


class XmlNode:
    """Represents an XML node.

    This class is the root of the node hierarchy and should not be
    instantiated directly; use one of its subclasses instead.
    """

    node_type: ClassVar[Optional[NodeType]] = None

    def __init__(self) -> None:
        self._parent_ref: Optional["weakref.ReferenceType[XmlNode]"] = None
        self._children: List[XmlNode] = []

    @property
    def parent(self) -> Optional["XmlNode"]:
        """The node that owns this one, or None for roots and detached nodes."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def up(self) -> Optional["XmlNode"]:
        """Return this node's parent."""
        return self.parent

    def children(self) -> List["XmlNode"]:
        """Return a copy of this node's children.

        Raises:
            UnsupportedOperationError: If this node cannot have children
        """
        return list(self._children)

    def insert_child(
        self, node: "XmlNode", index: Optional[int] = None
    ) -> Optional["XmlNode"]:
        """Insert ``node`` into this node's children.

        If ``node`` already has another parent it is removed from that parent
        first. Nothing happens if ``node`` is already a child of this node.

        Args:
            node: The node to insert
            index: Position of the new child. Children at or after ``index``
                shift right. Defaults to the end.

        Returns:
            The inserted node, or None if nothing was inserted

        Raises:
            InvalidArgumentError: If ``node`` is not a node, ``index`` is not
                an integer, or ``node`` is this node or one of its ancestors
            InvalidIndexError: If ``index`` is outside ``[0, len(children)]``
        """
        if not isinstance(node, XmlNode):
            raise InvalidArgumentError("node should be an instance of XmlNode")

        if index is None:
            index = len(self._children)
        else:
            check_index_type(index)
        if index < 0 or index > len(self._children):
            raise InvalidIndexError("index should respect children array bounds")

        if node in self._children:
            return None

        ancestor: Optional[XmlNode] = self
        while ancestor is not None:
            if ancestor is node:
                raise InvalidArgumentError(
                    "node should not be this node or one of its ancestors"
                )
            ancestor = ancestor.parent

        old_parent = node.parent
        if old_parent is not None:
            old_parent._detach(node)
            if _logger.is_debug_enabled():
                _logger.debug(
                    "Moved node to new parent",
                    extra={
                        "node_type": _type_name(node),
                        "old_parent_type": _type_name(old_parent),
                        "new_parent_type": _type_name(self),
                    },
                )

        node._parent_ref = weakref.ref(self)
        self._children.insert(index, node)
        return node

    def remove_child(self, node: "XmlNode") -> bool:
        """Remove ``node`` from this node's children.

        Returns:
            Whether a node was removed

        Raises:
            InvalidArgumentError: If ``node`` is not a node
        """
        if not isinstance(node, XmlNode):
            raise InvalidArgumentError("node should be an instance of XmlNode")
        return self._detach(node)

    def remove_child_at_index(self, index: int) -> "XmlNode":
        """Remove and return the child at ``index``.

        Raises:
            InvalidArgumentError: If ``index`` is not an integer
            InvalidIndexError: If ``index`` is outside ``[0, len(children))``
        """
        check_index_type(index)
        if index < 0 or index >= len(self._children):
            raise InvalidIndexError("index should respect children array bounds")

        node = self._children.pop(index)
        node._parent_ref = None
        return node

    def _detach(self, node: "XmlNode") -> bool:
        for position, child in enumerate(self._children):
            if child is node:
                del self._children[position]
                node._parent_ref = None
                return True
        return False

    def _position(self) -> int:
        """Index of this node in its parent's children, or -1 without a parent."""
        parent = self.parent
        if parent is None:
            return -1
        for position, child in enumerate(parent._children):
            if child is self:
                return position
        return -1

    def next(self) -> Optional["XmlNode"]:
        """Return the following sibling, or None."""
        position = self._position()
        parent = self.parent
        if parent is None or position == len(parent._children) - 1:
            return None
        return parent._children[position + 1]

    def prev(self) -> Optional["XmlNode"]:
        """Return the preceding sibling, or None."""
        position = self._position()
        parent = self.parent
        if parent is None or position <= 0:
            return None
        return parent._children[position - 1]

    def remove(self) -> Optional["XmlNode"]:
        """Detach this node from its parent.

        Returns:
            The former parent, or None if this node had no parent
        """
        parent = self.parent
        if parent is not None:
            parent._detach(self)
        return parent

    def top(self) -> "XmlNode":
        """Return the root of the hierarchy containing this node."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def to_string(self, options: OptionsType = None) -> str:
        """Return the XML string representation of this node.

        Args:
            options: ``StringOptions`` or a mapping with ``pretty``, ``indent``
                and ``newline`` keys; None for defaults
        """
        raise UnsupportedOperationError(
            f"to_string is not implemented for {type(self).__name__}"
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} at {id(self):#x}>"


class ChildlessNode(XmlNode):
    """Base for variants that structurally cannot hold children."""

    def _no_children(self) -> UnsupportedOperationError:
        return UnsupportedOperationError(
            f"{type(self).__name__} nodes cannot have children"
        )

    def children(self) -> List[XmlNode]:
        raise self._no_children()

    def insert_child(
        self, node: XmlNode, index: Optional[int] = None
    ) -> Optional[XmlNode]:
        raise self._no_children()

    def remove_child(self, node: XmlNode) -> bool:
        raise self._no_children()

    def remove_child_at_index(self, index: int) -> XmlNode:
        raise self._no_children()


def is_node_type(node: Any, *node_types: NodeType) -> bool:
    """Check whether ``node`` is an XmlNode of one of ``node_types``."""
    return isinstance(node, XmlNode) and node.node_type in node_types


def require_string(value: Any, description: str) -> str:
    """Return ``value`` unchanged, or raise if it is not a string."""
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"{description} should be a string, not {type(value).__name__}"
        )
    return value


def check_index_type(index: Any) -> None:
    # bool is an int subclass but never a meaningful position
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidArgumentError("index should be an integer")


def _type_name(node: XmlNode) -> str:
    return node.node_type.name if node.node_type else type(node).__name__
