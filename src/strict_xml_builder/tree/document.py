"""Document assembly on top of the node hierarchy.

An :class:`XmlDocument` arranges an optional XML declaration, an optional
document type declaration, comments and processing instructions around a
single root element. These classes only arrange nodes; all validation of
names and character data is delegated to the node layer.
"""

import re
from typing import Optional

from strict_xml_builder.character import validate_char
from strict_xml_builder.shared import (
    InvalidArgumentError,
    InvalidCharacterDataError,
    StringOptions,
    UnsupportedOperationError,
    get_logger,
)
from strict_xml_builder.tree.element import XmlElement
from strict_xml_builder.tree.leaves import (
    XmlComment,
    XmlDtdEntity,
    XmlProcInst,
    check_name,
)
from strict_xml_builder.tree.node import (
    ChildlessNode,
    NodeType,
    OptionsType,
    XmlNode,
    check_index_type,
    is_node_type,
    require_string,
)

VERSION_PATTERN = re.compile(r"1\.[0-9]+")
ENCODING_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9._-]*")
PUBID_PATTERN = re.compile(r"[ \r\na-zA-Z0-9\-'()+,./:=?;!*#@$_%]*")
STANDALONE_VALUES = ("yes", "no")

DOCUMENT_CHILD_TYPES = (
    NodeType.COMMENT,
    NodeType.DECL,
    NodeType.DTD,
    NodeType.ELEMENT,
    NodeType.PROC_INST,
)
DTD_CHILD_TYPES = (NodeType.COMMENT, NodeType.DTD_ENTITY, NodeType.PROC_INST)


class XmlDecl(ChildlessNode):
    """The XML declaration, ``<?xml version="1.0" encoding="..."?>``."""

    node_type = NodeType.DECL

    def __init__(
        self,
        version: str = "1.0",
        encoding: Optional[str] = None,
        standalone: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.version = version
        self.encoding = encoding
        self.standalone = standalone

    @property
    def version(self) -> str:
        return self._version

    @version.setter
    def version(self, version: str) -> None:
        version = require_string(version, "version")
        if not VERSION_PATTERN.fullmatch(version):
            raise InvalidCharacterDataError(
                f"version should match '1.[0-9]+', got {version!r}"
            )
        self._version = version

    @property
    def encoding(self) -> Optional[str]:
        return self._encoding

    @encoding.setter
    def encoding(self, encoding: Optional[str]) -> None:
        if encoding is not None:
            encoding = require_string(encoding, "encoding")
            if not ENCODING_PATTERN.fullmatch(encoding):
                raise InvalidCharacterDataError(
                    f"encoding should be a valid encoding name, got {encoding!r}"
                )
        self._encoding = encoding

    @property
    def standalone(self) -> Optional[str]:
        return self._standalone

    @standalone.setter
    def standalone(self, standalone: Optional[str]) -> None:
        if standalone is not None and standalone not in STANDALONE_VALUES:
            raise InvalidCharacterDataError("standalone should be 'yes' or 'no'")
        self._standalone = standalone

    def to_string(self, options: OptionsType = None) -> str:
        parts = [f'<?xml version="{self._version}"']
        if self._encoding is not None:
            parts.append(f' encoding="{self._encoding}"')
        if self._standalone is not None:
            parts.append(f' standalone="{self._standalone}"')
        parts.append("?>")
        return "".join(parts)


class XmlDtd(XmlNode):
    """A document type declaration with an optional internal subset.

    Rendered as ``<!DOCTYPE name PUBLIC "pub_id" "sys_id" [...]>``; the
    external identifier and the internal subset are both optional. Children
    are limited to XmlComment, XmlDtdEntity and XmlProcInst nodes.
    """

    node_type = NodeType.DTD

    def __init__(
        self,
        name: str,
        sys_id: Optional[str] = None,
        pub_id: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._pub_id: Optional[str] = None
        self.name = name
        self.sys_id = sys_id
        self.pub_id = pub_id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = check_name(name, "name")

    @property
    def sys_id(self) -> Optional[str]:
        return self._sys_id

    @sys_id.setter
    def sys_id(self, sys_id: Optional[str]) -> None:
        if sys_id is None:
            if self._pub_id is not None:
                raise InvalidArgumentError(
                    "system identifier is required while a public identifier is set"
                )
        else:
            sys_id = require_string(sys_id, "system identifier")
            if not validate_char(sys_id):
                raise InvalidCharacterDataError(
                    "system identifier should not contain characters not allowed in XML"
                )
            if '"' in sys_id and "'" in sys_id:
                raise InvalidCharacterDataError(
                    "system identifier should not contain both single and double quotes"
                )
        self._sys_id = sys_id

    @property
    def pub_id(self) -> Optional[str]:
        return self._pub_id

    @pub_id.setter
    def pub_id(self, pub_id: Optional[str]) -> None:
        if pub_id is not None:
            pub_id = require_string(pub_id, "public identifier")
            if not PUBID_PATTERN.fullmatch(pub_id):
                raise InvalidCharacterDataError(
                    "public identifier should not contain characters not allowed"
                    " in public identifiers"
                )
            if self._sys_id is None:
                raise InvalidArgumentError(
                    "public identifier requires a system identifier"
                )
        self._pub_id = pub_id

    def comment(self, content: str, index: Optional[int] = None) -> XmlComment:
        """Insert a new comment into the internal subset."""
        comment = XmlComment(content)
        self.insert_child(comment, index)
        return comment

    def entity(self, text: str, index: Optional[int] = None) -> XmlDtdEntity:
        """Insert a new entity declaration into the internal subset."""
        entity = XmlDtdEntity(text)
        self.insert_child(entity, index)
        return entity

    def proc_inst(
        self, target: str, content: Optional[str] = None, index: Optional[int] = None
    ) -> XmlProcInst:
        """Insert a new processing instruction into the internal subset."""
        proc_inst = XmlProcInst(target, content)
        self.insert_child(proc_inst, index)
        return proc_inst

    def insert_child(
        self, node: XmlNode, index: Optional[int] = None
    ) -> Optional[XmlNode]:
        if not is_node_type(node, *DTD_CHILD_TYPES):
            raise InvalidArgumentError(
                "node should be an instance of XmlComment, XmlDtdEntity,"
                " or XmlProcInst"
            )
        return super().insert_child(node, index)

    def to_string(self, options: OptionsType = None) -> str:
        opts = StringOptions.resolve(options)

        parts = [f"<!DOCTYPE {self._name}"]
        if self._pub_id is not None:
            parts.append(f' PUBLIC "{self._pub_id}" {_quote(self._sys_id)}')
        elif self._sys_id is not None:
            parts.append(f" SYSTEM {_quote(self._sys_id)}")

        if self._children:
            parts.append(" [")
            for child in self._children:
                if opts.pretty:
                    parts.append(opts.newline + opts.indent)
                parts.append(child.to_string(opts))
            if opts.pretty:
                parts.append(opts.newline)
            parts.append("]")

        parts.append(">")
        return "".join(parts)


class XmlDocument(XmlNode):
    """Represents an XML document.

    Children appear in document order: an optional XmlDecl (always first),
    an optional XmlDtd (before the root element), exactly one root
    XmlElement, and any number of XmlComment and XmlProcInst nodes.
    """

    node_type = NodeType.DOCUMENT

    def __init__(self, root_name: str, correlation_id: Optional[str] = None) -> None:
        super().__init__()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "document")
        self._root = XmlElement(root_name)
        super().insert_child(self._root)

    def root(self) -> XmlElement:
        """Return the root element."""
        return self._root

    def decl(
        self,
        version: str = "1.0",
        encoding: Optional[str] = None,
        standalone: Optional[str] = None,
    ) -> XmlDecl:
        """Insert an XML declaration at the start of the document."""
        decl = XmlDecl(version, encoding, standalone)
        self.insert_child(decl, 0)
        return decl

    def dtd(
        self,
        name: Optional[str] = None,
        sys_id: Optional[str] = None,
        pub_id: Optional[str] = None,
    ) -> XmlDtd:
        """Insert a document type declaration just after any XML declaration.

        Args:
            name: Declared root element name; defaults to the root's name
        """
        dtd = XmlDtd(self._root.name if name is None else name, sys_id, pub_id)
        index = 1 if self._find(NodeType.DECL) is not None else 0
        self.insert_child(dtd, index)
        return dtd

    def comment(self, content: str, index: Optional[int] = None) -> XmlComment:
        """Insert a new comment."""
        comment = XmlComment(content)
        self.insert_child(comment, index)
        return comment

    def proc_inst(
        self, target: str, content: Optional[str] = None, index: Optional[int] = None
    ) -> XmlProcInst:
        """Insert a new processing instruction."""
        proc_inst = XmlProcInst(target, content)
        self.insert_child(proc_inst, index)
        return proc_inst

    def insert_child(
        self, node: XmlNode, index: Optional[int] = None
    ) -> Optional[XmlNode]:
        """Insert ``node`` while preserving document order rules.

        Raises:
            InvalidArgumentError: If ``node`` is of a disallowed variant, is a
                second declaration, DTD or root element, or would be placed
                out of document order
        """
        if not is_node_type(node, *DOCUMENT_CHILD_TYPES):
            raise InvalidArgumentError(
                "node should be an instance of XmlComment, XmlDecl, XmlDtd,"
                " XmlElement, or XmlProcInst"
            )
        if index is not None:
            check_index_type(index)
        if node in self._children:
            return None

        position = len(self._children) if index is None else index
        decl = self._find(NodeType.DECL)

        if node.node_type is NodeType.ELEMENT:
            raise InvalidArgumentError("document already has a root element")

        if node.node_type is NodeType.DECL:
            if decl is not None:
                raise InvalidArgumentError("document already has an XML declaration")
            if position != 0:
                raise InvalidArgumentError("XML declaration should be the first child")
        elif decl is not None and position == 0:
            raise InvalidArgumentError("XML declaration should be the first child")

        if node.node_type is NodeType.DTD:
            if self._find(NodeType.DTD) is not None:
                raise InvalidArgumentError("document already has a DTD")
            if position > self._children.index(self._root):
                raise InvalidArgumentError(
                    "DTD should be placed before the root element"
                )

        inserted = super().insert_child(node, index)
        self.logger.debug(
            "Inserted document node",
            extra={"node_type": node.node_type.name, "index": position},
        )
        return inserted

    def _detach(self, node: XmlNode) -> bool:
        if node is self._root:
            raise UnsupportedOperationError("root element cannot be removed")
        return super()._detach(node)

    def remove_child_at_index(self, index: int) -> XmlNode:
        check_index_type(index)
        if 0 <= index < len(self._children) and self._children[index] is self._root:
            raise UnsupportedOperationError("root element cannot be removed")
        return super().remove_child_at_index(index)

    def to_string(self, options: OptionsType = None) -> str:
        """Return the document as a string, one top-level node per line when pretty."""
        opts = StringOptions.resolve(options)
        separator = opts.newline if opts.pretty else ""
        rendered = separator.join(child.to_string(opts) for child in self._children)
        self.logger.info(
            "Rendered document",
            extra={
                "root": self._root.name,
                "pretty": opts.pretty,
                "length": len(rendered),
            },
        )
        return rendered

    def _find(self, node_type: NodeType) -> Optional[XmlNode]:
        for child in self._children:
            if child.node_type is node_type:
                return child
        return None


def _quote(value: Optional[str]) -> str:
    if value is not None and '"' in value:
        return f"'{value}'"
    return f'"{value}"'
