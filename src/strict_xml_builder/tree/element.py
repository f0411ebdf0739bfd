"""XML element node and its serialization algorithm.

An element is the only general-purpose container in the tree. Its children
are attributes (rendered inside the opening tag) and content nodes (rendered
between the tags). The pretty-printing pass keeps runs of text and references
on one line while giving structural children their own indented lines.
"""

from typing import List, Optional, Sequence, Union

from strict_xml_builder.shared import (
    DuplicateAttributeError,
    InvalidArgumentError,
    StringOptions,
)
from strict_xml_builder.tree.leaves import (
    AttributeValue,
    XmlAttribute,
    XmlCdata,
    XmlCharRef,
    XmlComment,
    XmlEntityRef,
    XmlProcInst,
    XmlText,
    check_name,
)
from strict_xml_builder.tree.node import NodeType, OptionsType, XmlNode, is_node_type

# Variants an element accepts as children
ELEMENT_CHILD_TYPES = (
    NodeType.ATTRIBUTE,
    NodeType.CDATA,
    NodeType.CHAR_REF,
    NodeType.COMMENT,
    NodeType.ELEMENT,
    NodeType.ENTITY_REF,
    NodeType.PROC_INST,
    NodeType.TEXT,
)

# Variants that may share a line with their neighbours when pretty-printing
INLINE_TYPES = frozenset({NodeType.CHAR_REF, NodeType.ENTITY_REF, NodeType.TEXT})


class XmlElement(XmlNode):
    """Represents an XML element.

    A sample element, where ``{name}`` is the element name::

        <{name} attname="attvalue">
            <subelem/>
            <?pitarget picontent?>
            text
        </{name}>

    The name is a property of the node; attributes, sub-elements, processing
    instructions and text are all children of the node. Children are limited
    to XmlAttribute, XmlCdata, XmlCharRef, XmlComment, XmlElement,
    XmlEntityRef, XmlProcInst and XmlText nodes, and at most one attribute
    per name.
    """

    node_type = NodeType.ELEMENT

    def __init__(self, name: str) -> None:
        super().__init__()
        self.name = name

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = check_name(name, "name")

    def attribute(
        self, name: str, value: AttributeValue, index: Optional[int] = None
    ) -> XmlAttribute:
        """Insert a new attribute.

        Args:
            name: The attribute name
            value: A string (converted to an XmlText node), a value node, or
                a sequence of strings and value nodes
            index: Position among this element's children; defaults to the end

        Returns:
            The new attribute

        Raises:
            DuplicateAttributeError: If an attribute named ``name`` exists
        """
        attribute = XmlAttribute(name, value)
        self.insert_child(attribute, index)
        return attribute

    def attributes(self) -> List[XmlAttribute]:
        """Return the attribute children of this element, in order."""
        return [
            node for node in self._children
            if node.node_type is NodeType.ATTRIBUTE
        ]

    def cdata(self, data: str, index: Optional[int] = None) -> XmlCdata:
        """Insert a new CDATA section."""
        cdata = XmlCdata(data)
        self.insert_child(cdata, index)
        return cdata

    def char_ref(
        self, char: Union[str, int], hex: bool = False, index: Optional[int] = None
    ) -> XmlCharRef:
        """Insert a new character reference.

        Args:
            char: The referenced character, or its code point
            hex: Use the hexadecimal form (``&#x...;``) instead of decimal
            index: Position among this element's children; defaults to the end
        """
        char_ref = XmlCharRef(char, hex)
        self.insert_child(char_ref, index)
        return char_ref

    def comment(self, content: str, index: Optional[int] = None) -> XmlComment:
        """Insert a new comment."""
        comment = XmlComment(content)
        self.insert_child(comment, index)
        return comment

    def element(self, name: str, index: Optional[int] = None) -> "XmlElement":
        """Insert a new child element."""
        element = XmlElement(name)
        self.insert_child(element, index)
        return element

    def entity_ref(self, entity: str, index: Optional[int] = None) -> XmlEntityRef:
        """Insert a new entity reference."""
        entity_ref = XmlEntityRef(entity)
        self.insert_child(entity_ref, index)
        return entity_ref

    def proc_inst(
        self, target: str, content: Optional[str] = None, index: Optional[int] = None
    ) -> XmlProcInst:
        """Insert a new processing instruction."""
        proc_inst = XmlProcInst(target, content)
        self.insert_child(proc_inst, index)
        return proc_inst

    def text(self, text: str, index: Optional[int] = None) -> XmlText:
        """Insert new character data."""
        txt = XmlText(text)
        self.insert_child(txt, index)
        return txt

    def insert_child(
        self, node: XmlNode, index: Optional[int] = None
    ) -> Optional[XmlNode]:
        """Insert ``node`` into this element's children.

        Raises:
            InvalidArgumentError: If ``node`` is not one of the variants an
                element accepts
            DuplicateAttributeError: If ``node`` is an attribute whose name is
                already used by another attribute of this element
        """
        if not is_node_type(node, *ELEMENT_CHILD_TYPES):
            raise InvalidArgumentError(
                "node should be an instance of XmlAttribute, XmlCdata,"
                " XmlCharRef, XmlComment, XmlElement, XmlEntityRef,"
                " XmlProcInst, or XmlText"
            )

        if node.node_type is NodeType.ATTRIBUTE:
            for attribute in self.attributes():
                if attribute is not node and attribute.name == node.name:
                    raise DuplicateAttributeError(node.name)

        return super().insert_child(node, index)

    def to_string(self, options: OptionsType = None) -> str:
        """Return the XML string representation of this element.

        Attributes are rendered inside the opening tag in child order. An
        element without content nodes is rendered as an empty-element tag.

        When pretty-printing, each content node starts on its own line and is
        indented by one unit, except that adjacent text and reference nodes
        stay on the same line. If every content node is text or a reference,
        the whole element stays on one line.
        """
        opts = StringOptions.resolve(options)

        attributes = self.attributes()
        nodes = [
            node for node in self._children
            if node.node_type is not NodeType.ATTRIBUTE
        ]

        parts = ["<", self._name]
        for attribute in attributes:
            parts.append(" " + attribute.to_string(opts))

        if not nodes:
            parts.append("/>")
            return "".join(parts)

        parts.append(">")

        break_lines = opts.pretty and not _all_inline(nodes)
        for i, node in enumerate(nodes):
            rendered = node.to_string(opts)
            if break_lines and not (i > 0 and _on_same_line(nodes[i - 1], node)):
                parts.append(opts.newline)
                rendered = opts.newline.join(
                    opts.indent + line for line in rendered.split(opts.newline)
                )
            parts.append(rendered)

        if break_lines:
            parts.append(opts.newline)

        parts.append(f"</{self._name}>")
        return "".join(parts)


def _is_inline(node: XmlNode) -> bool:
    return node.node_type in INLINE_TYPES


def _all_inline(nodes: Sequence[XmlNode]) -> bool:
    return all(_is_inline(node) for node in nodes)


def _on_same_line(prev: XmlNode, node: XmlNode) -> bool:
    return _is_inline(prev) and _is_inline(node)
