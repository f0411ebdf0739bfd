"""Tests for leaf node variants and attributes."""

import pytest

from strict_xml_builder.shared import (
    DuplicateAttributeError,
    InvalidArgumentError,
    InvalidCharacterDataError,
    InvalidNameError,
)
from strict_xml_builder.tree import (
    NodeType,
    XmlAttribute,
    XmlCdata,
    XmlCharRef,
    XmlComment,
    XmlDtdEntity,
    XmlElement,
    XmlEntityRef,
    XmlProcInst,
    XmlText,
)


class TestXmlText:
    """Test suite for XmlText."""

    def test_render_escapes_markup(self) -> None:
        """Test escaping of ampersands and angle brackets."""
        assert XmlText("a & b < c > d").to_string() == "a &amp; b &lt; c > d"

    def test_render_escapes_cdata_terminator(self) -> None:
        """Test that ']]>' cannot appear literally in output."""
        assert XmlText("]]>").to_string() == "]]&gt;"

    def test_empty_text(self) -> None:
        """Test that empty text is allowed."""
        assert XmlText("").to_string() == ""

    def test_invalid_characters(self) -> None:
        """Test that illegal XML characters are rejected."""
        with pytest.raises(InvalidCharacterDataError):
            XmlText("bad\x00")

    def test_non_string(self) -> None:
        """Test that non-string payloads are rejected."""
        with pytest.raises(InvalidArgumentError):
            XmlText(42)  # type: ignore[arg-type]

    def test_failed_update_keeps_value(self) -> None:
        """Test that a rejected update leaves the previous value."""
        text = XmlText("ok")

        with pytest.raises(InvalidCharacterDataError):
            text.text = "\x01"

        assert text.text == "ok"


class TestXmlCdata:
    """Test suite for XmlCdata."""

    def test_render(self) -> None:
        """Test CDATA section rendering with raw markup."""
        assert XmlCdata("<a> & b").to_string() == "<![CDATA[<a> & b]]>"

    def test_terminator_rejected(self) -> None:
        """Test that ']]>' is not allowed in the data."""
        with pytest.raises(InvalidCharacterDataError, match=r"\]\]>"):
            XmlCdata("a]]>b")

    def test_partial_terminator_allowed(self) -> None:
        """Test that ']]' alone is fine."""
        assert XmlCdata("a]]b").data == "a]]b"


class TestXmlComment:
    """Test suite for XmlComment."""

    def test_render(self) -> None:
        """Test comment rendering."""
        assert XmlComment(" note ").to_string() == "<!-- note -->"

    def test_double_hyphen_rejected(self) -> None:
        """Test that '--' is not allowed in the content."""
        with pytest.raises(InvalidCharacterDataError, match="--"):
            XmlComment("a--b")

    def test_trailing_hyphen_rejected(self) -> None:
        """Test that the content cannot end with '-'."""
        with pytest.raises(InvalidCharacterDataError, match="end with"):
            XmlComment("abc-")

    def test_single_hyphens_allowed(self) -> None:
        """Test that isolated hyphens are fine."""
        assert XmlComment("-a-b").content == "-a-b"


class TestXmlProcInst:
    """Test suite for XmlProcInst."""

    def test_render_without_content(self) -> None:
        """Test rendering a target-only instruction."""
        assert XmlProcInst("target").to_string() == "<?target?>"

    def test_render_with_content(self) -> None:
        """Test rendering with content."""
        pi = XmlProcInst("xml-stylesheet", 'href="a.xsl"')

        assert pi.to_string() == '<?xml-stylesheet href="a.xsl"?>'

    @pytest.mark.parametrize("target", ["xml", "XML", "xMl"])
    def test_reserved_target(self, target: str) -> None:
        """Test that 'xml' in any case is reserved."""
        with pytest.raises(InvalidCharacterDataError, match="xml"):
            XmlProcInst(target)

    def test_invalid_target_name(self) -> None:
        """Test that the target must be a name."""
        with pytest.raises(InvalidNameError):
            XmlProcInst("1target")

    def test_content_terminator_rejected(self) -> None:
        """Test that '?>' cannot appear in the content."""
        with pytest.raises(InvalidCharacterDataError, match=r"\?>"):
            XmlProcInst("pi", "a?>b")

    def test_content_can_be_cleared(self) -> None:
        """Test that content may be reset to None."""
        pi = XmlProcInst("pi", "x")
        pi.content = None

        assert pi.to_string() == "<?pi?>"


class TestXmlCharRef:
    """Test suite for XmlCharRef."""

    def test_decimal(self) -> None:
        """Test the decimal form."""
        assert XmlCharRef("a").to_string() == "&#97;"

    def test_hex_is_lowercase(self) -> None:
        """Test the hexadecimal form."""
        assert XmlCharRef("\xff", hex=True).to_string() == "&#xff;"

    def test_code_point_argument(self) -> None:
        """Test that an integer code point is accepted."""
        ref = XmlCharRef(0x3BB, hex=True)

        assert ref.char == "\u03bb"
        assert ref.code_point == 0x3BB
        assert ref.to_string() == "&#x3bb;"

    def test_supplementary_character(self) -> None:
        """Test a character outside the Basic Multilingual Plane."""
        assert XmlCharRef("\U0001f600").to_string() == "&#128512;"

    @pytest.mark.parametrize("char", ["", "ab"])
    def test_wrong_length(self, char: str) -> None:
        """Test that exactly one character is required."""
        with pytest.raises(InvalidArgumentError, match="exactly one character"):
            XmlCharRef(char)

    @pytest.mark.parametrize("char", ["\x00", 0xFFFE, "\ud800"])
    def test_illegal_character(self, char: object) -> None:
        """Test that illegal XML characters are rejected."""
        with pytest.raises(InvalidCharacterDataError):
            XmlCharRef(char)  # type: ignore[arg-type]

    def test_code_point_out_of_range(self) -> None:
        """Test that code points beyond Unicode are rejected."""
        with pytest.raises(InvalidCharacterDataError, match="outside the Unicode range"):
            XmlCharRef(0x110000)

    def test_hex_must_be_bool(self) -> None:
        """Test that the hex flag is type checked."""
        with pytest.raises(InvalidArgumentError, match="hex should be a bool"):
            XmlCharRef("a", hex=1)  # type: ignore[arg-type]


class TestXmlEntityRef:
    """Test suite for XmlEntityRef."""

    def test_render(self) -> None:
        """Test entity reference rendering."""
        assert XmlEntityRef("copy").to_string() == "&copy;"

    def test_invalid_name(self) -> None:
        """Test that the entity must be a name."""
        with pytest.raises(InvalidNameError):
            XmlEntityRef("not valid")


class TestXmlDtdEntity:
    """Test suite for XmlDtdEntity."""

    def test_render(self) -> None:
        """Test entity declaration rendering."""
        assert XmlDtdEntity("abc").to_string() == "<!ENTITY abc>"

    def test_declaration_body(self) -> None:
        """Test that a full declaration body is accepted as character data."""
        entity = XmlDtdEntity('copy "&#169;"')

        assert entity.to_string() == '<!ENTITY copy "&#169;">'

    def test_numeric_text_accepted(self) -> None:
        """Test that the text is character data rather than a name."""
        assert XmlDtdEntity("123").text == "123"

    def test_invalid_characters(self) -> None:
        """Test that illegal XML characters are rejected."""
        with pytest.raises(InvalidCharacterDataError):
            XmlDtdEntity("a\x0c")


class TestXmlAttribute:
    """Test suite for XmlAttribute."""

    def test_string_value(self) -> None:
        """Test rendering a plain string value."""
        attribute = XmlAttribute("id", "x1")

        assert attribute.to_string() == 'id="x1"'
        assert [c.node_type for c in attribute.children()] == [NodeType.TEXT]

    def test_quotes_escaped_in_value(self) -> None:
        """Test that double quotes cannot end the value early."""
        attribute = XmlAttribute("title", 'say "hi" & <bye>')

        assert attribute.to_string() == 'title="say &quot;hi&quot; &amp; &lt;bye>"'

    def test_mixed_value_nodes(self) -> None:
        """Test a value built from strings and references."""
        attribute = XmlAttribute(
            "v", ["a", XmlEntityRef("amp"), XmlCharRef("b", hex=True), "c"]
        )

        assert attribute.to_string() == 'v="a&amp;&#x62;c"'

    def test_single_node_value(self) -> None:
        """Test a value given as a single node."""
        assert XmlAttribute("e", XmlEntityRef("lt")).to_string() == 'e="&lt;"'

    def test_empty_string_value(self) -> None:
        """Test that an empty string is a valid value."""
        assert XmlAttribute("empty", "").to_string() == 'empty=""'

    def test_empty_sequence_rejected(self) -> None:
        """Test that at least one value node is required."""
        with pytest.raises(InvalidArgumentError, match="at least one node"):
            XmlAttribute("a", [])

    def test_invalid_value_type(self) -> None:
        """Test that unsupported value types are rejected."""
        with pytest.raises(InvalidArgumentError):
            XmlAttribute("a", 5)  # type: ignore[arg-type]

    def test_disallowed_value_node(self) -> None:
        """Test that markup nodes cannot be attribute values."""
        with pytest.raises(InvalidArgumentError, match="XmlCharRef, XmlEntityRef"):
            XmlAttribute("a", XmlComment("no"))

    def test_invalid_name(self) -> None:
        """Test that the attribute name is validated."""
        with pytest.raises(InvalidNameError):
            XmlAttribute("1a", "v")

    def test_value_children_can_be_edited(self) -> None:
        """Test inserting and removing value nodes."""
        attribute = XmlAttribute("a", "x")
        attribute.insert_child(XmlCharRef("y"), 0)

        assert attribute.to_string() == 'a="&#121;x"'

        attribute.remove_child_at_index(0)
        attribute.remove_child_at_index(0)
        assert attribute.to_string() == 'a=""'

    def test_rename_to_duplicate_sibling(self) -> None:
        """Test that renaming checks the other attributes of the element."""
        element = XmlElement("e")
        element.attribute("a", "1")
        b = element.attribute("b", "2")

        with pytest.raises(DuplicateAttributeError):
            b.name = "a"

        assert b.name == "b"

    def test_rename_detached(self) -> None:
        """Test renaming an attribute without a parent."""
        attribute = XmlAttribute("a", "1")
        attribute.name = "b"

        assert attribute.to_string() == 'b="1"'
