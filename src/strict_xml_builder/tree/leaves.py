"""Leaf node variants and attributes.

Each variant stores its payload through a validating property setter and
renders a fixed markup shape. All variants except :class:`XmlAttribute`
refuse children; an attribute holds its value as text, character reference
and entity reference children.
"""

from typing import Iterable, List, Optional, Union

from strict_xml_builder.character import (
    escape_attribute_text,
    escape_text,
    validate_char,
    validate_name,
)
from strict_xml_builder.shared import (
    DuplicateAttributeError,
    InvalidArgumentError,
    InvalidCharacterDataError,
    InvalidNameError,
)
from strict_xml_builder.tree.node import (
    ChildlessNode,
    NodeType,
    OptionsType,
    XmlNode,
    is_node_type,
    require_string,
)

# Variants allowed as attribute value children
ATTRIBUTE_VALUE_TYPES = (NodeType.TEXT, NodeType.CHAR_REF, NodeType.ENTITY_REF)

AttributeValue = Union[str, XmlNode, Iterable[Union[str, XmlNode]]]


def check_char_data(value: object, description: str) -> str:
    """Validate a character data payload and return it."""
    text = require_string(value, description)
    if not validate_char(text):
        raise InvalidCharacterDataError(
            f"{description} should not contain characters not allowed in XML"
        )
    return text


def check_name(value: object, description: str) -> str:
    """Validate an XML name payload and return it."""
    name = require_string(value, description)
    if not validate_name(name):
        raise InvalidNameError(
            f"{description} should not contain characters not allowed in"
            f" XML names: {name!r}"
        )
    return name


class XmlText(ChildlessNode):
    """Character data in an element or attribute value.

    Markup-significant characters are escaped on output: ``&`` and ``<``
    always, ``>`` when it would form ``]]>``, and ``"`` inside an attribute
    value. Use :class:`XmlCharRef` or :class:`XmlEntityRef` for references.
    """

    node_type = NodeType.TEXT

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, text: str) -> None:
        self._text = check_char_data(text, "text")

    def to_string(self, options: OptionsType = None) -> str:
        if is_node_type(self.parent, NodeType.ATTRIBUTE):
            return escape_attribute_text(self._text)
        return escape_text(self._text)


class XmlCdata(ChildlessNode):
    """A CDATA section, rendered as ``<![CDATA[data]]>``."""

    node_type = NodeType.CDATA

    def __init__(self, data: str) -> None:
        super().__init__()
        self.data = data

    @property
    def data(self) -> str:
        return self._data

    @data.setter
    def data(self, data: str) -> None:
        data = check_char_data(data, "character data")
        if "]]>" in data:
            raise InvalidCharacterDataError("data should not contain the string ']]>'")
        self._data = data

    def to_string(self, options: OptionsType = None) -> str:
        return f"<![CDATA[{self._data}]]>"


class XmlComment(ChildlessNode):
    """A comment, rendered as ``<!--content-->``."""

    node_type = NodeType.COMMENT

    def __init__(self, content: str) -> None:
        super().__init__()
        self.content = content

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, content: str) -> None:
        content = check_char_data(content, "comment content")
        if "--" in content:
            raise InvalidCharacterDataError(
                "comment content should not contain the string '--'"
            )
        if content.endswith("-"):
            raise InvalidCharacterDataError(
                "comment content should not end with the '-' character"
            )
        self._content = content

    def to_string(self, options: OptionsType = None) -> str:
        return f"<!--{self._content}-->"


class XmlProcInst(ChildlessNode):
    """A processing instruction, rendered as ``<?target content?>``."""

    node_type = NodeType.PROC_INST

    def __init__(self, target: str, content: Optional[str] = None) -> None:
        super().__init__()
        self.target = target
        self.content = content

    @property
    def target(self) -> str:
        return self._target

    @target.setter
    def target(self, target: str) -> None:
        target = check_name(target, "target")
        if target.lower() == "xml":
            raise InvalidCharacterDataError(
                "target should not be the string 'xml' (case-insensitive)"
            )
        self._target = target

    @property
    def content(self) -> Optional[str]:
        return self._content

    @content.setter
    def content(self, content: Optional[str]) -> None:
        if content is not None:
            content = check_char_data(content, "processing instruction content")
            if "?>" in content:
                raise InvalidCharacterDataError(
                    "processing instruction content should not contain the"
                    " string '?>'"
                )
        self._content = content

    def to_string(self, options: OptionsType = None) -> str:
        if self._content is None:
            return f"<?{self._target}?>"
        return f"<?{self._target} {self._content}?>"


class XmlCharRef(ChildlessNode):
    """A character reference such as ``&#955;`` or ``&#x3bb;``."""

    node_type = NodeType.CHAR_REF

    def __init__(self, char: Union[str, int], hex: bool = False) -> None:
        super().__init__()
        self.char = char
        self.hex = hex

    @property
    def char(self) -> str:
        return self._char

    @char.setter
    def char(self, char: Union[str, int]) -> None:
        if isinstance(char, int) and not isinstance(char, bool):
            try:
                char = chr(char)
            except (ValueError, OverflowError) as e:
                raise InvalidCharacterDataError(
                    f"code point {char!r} is outside the Unicode range"
                ) from e
        char = require_string(char, "char")
        if len(char) != 1:
            raise InvalidArgumentError("char should contain exactly one character")
        if not validate_char(char):
            raise InvalidCharacterDataError(
                "char should not contain characters not allowed in XML"
            )
        self._char = char

    @property
    def hex(self) -> bool:
        return self._hex

    @hex.setter
    def hex(self, hex: bool) -> None:
        if not isinstance(hex, bool):
            raise InvalidArgumentError("hex should be a bool")
        self._hex = hex

    @property
    def code_point(self) -> int:
        return ord(self._char)

    def to_string(self, options: OptionsType = None) -> str:
        if self._hex:
            return f"&#x{self.code_point:x};"
        return f"&#{self.code_point};"


class XmlEntityRef(ChildlessNode):
    """An entity reference, rendered as ``&entity;``."""

    node_type = NodeType.ENTITY_REF

    def __init__(self, entity: str) -> None:
        super().__init__()
        self.entity = entity

    @property
    def entity(self) -> str:
        return self._entity

    @entity.setter
    def entity(self, entity: str) -> None:
        self._entity = check_name(entity, "entity")

    def to_string(self, options: OptionsType = None) -> str:
        return f"&{self._entity};"


class XmlDtdEntity(ChildlessNode):
    """An entity declaration in a DTD, rendered as ``<!ENTITY text>``.

    ``text`` holds everything between the keyword and the closing bracket,
    for example ``copy "&#169;"``.
    """

    node_type = NodeType.DTD_ENTITY

    def __init__(self, text: str) -> None:
        super().__init__()
        self.text = text

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, text: str) -> None:
        self._text = check_char_data(text, "text")

    def to_string(self, options: OptionsType = None) -> str:
        return f"<!ENTITY {self._text}>"


class XmlAttribute(XmlNode):
    """An attribute of an element, rendered as ``name="value"``.

    The value is held as children of the attribute, limited to
    :class:`XmlText`, :class:`XmlCharRef` and :class:`XmlEntityRef` nodes, so
    references can appear inside attribute values.
    """

    node_type = NodeType.ATTRIBUTE

    def __init__(self, name: str, value: AttributeValue) -> None:
        super().__init__()
        self.name = name

        nodes = value_nodes(value)
        if not nodes:
            raise InvalidArgumentError("attribute value should contain at least one node")
        for node in nodes:
            self.insert_child(node)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        name = check_name(name, "name")
        owner = self.parent
        if owner is not None:
            for sibling in owner._children:
                if (sibling is not self
                        and sibling.node_type is NodeType.ATTRIBUTE
                        and sibling.name == name):
                    raise DuplicateAttributeError(name)
        self._name = name

    def insert_child(
        self, node: XmlNode, index: Optional[int] = None
    ) -> Optional[XmlNode]:
        """Insert a value node.

        Raises:
            InvalidArgumentError: If ``node`` is not an XmlText, XmlCharRef or
                XmlEntityRef
        """
        if not is_node_type(node, *ATTRIBUTE_VALUE_TYPES):
            raise InvalidArgumentError(
                "node should be an instance of XmlCharRef, XmlEntityRef,"
                " or XmlText"
            )
        return super().insert_child(node, index)

    def to_string(self, options: OptionsType = None) -> str:
        value = "".join(child.to_string(options) for child in self._children)
        return f'{self._name}="{value}"'


def value_nodes(value: AttributeValue) -> List[XmlNode]:
    """Normalize an attribute value into a list of nodes.

    Strings become :class:`XmlText` nodes; nodes are kept as they are.
    """
    if isinstance(value, str):
        return [XmlText(value)]
    if isinstance(value, XmlNode):
        return [value]
    try:
        items = list(value)
    except TypeError as e:
        raise InvalidArgumentError(
            "value should be a string, a node, or a sequence of strings and nodes"
        ) from e
    return [XmlText(item) if isinstance(item, str) else item for item in items]
