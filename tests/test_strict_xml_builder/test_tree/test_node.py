"""Tests for the base node: ownership, insertion, removal and navigation."""

import logging

import pytest

from strict_xml_builder.shared import (
    InvalidArgumentError,
    InvalidIndexError,
    UnsupportedOperationError,
)
from strict_xml_builder.tree import XmlComment, XmlElement, XmlNode, XmlText


@pytest.fixture
def root() -> XmlElement:
    """Element with three element children a, b and c."""
    element = XmlElement("root")
    element.element("a")
    element.element("b")
    element.element("c")
    return element


def names(element: XmlElement) -> list:
    return [child.name for child in element.children()]


class TestInsertChild:
    """Test insert_child on container nodes."""

    def test_append_by_default(self, root: XmlElement) -> None:
        """Test that nodes are appended when no index is given."""
        d = XmlElement("d")

        assert root.insert_child(d) is d
        assert names(root) == ["a", "b", "c", "d"]
        assert d.parent is root

    def test_insert_at_index_shifts_right(self, root: XmlElement) -> None:
        """Test that children at or after the index shift right."""
        x = XmlElement("x")

        root.insert_child(x, 1)

        assert names(root) == ["a", "x", "b", "c"]

    def test_insert_at_end_index(self, root: XmlElement) -> None:
        """Test that len(children) is a valid insertion index."""
        root.insert_child(XmlElement("z"), 3)

        assert names(root) == ["a", "b", "c", "z"]

    def test_already_a_child_is_a_no_op(self, root: XmlElement) -> None:
        """Test that reinserting an existing child changes nothing."""
        b = root.children()[1]

        assert root.insert_child(b, 0) is None
        assert names(root) == ["a", "b", "c"]

    def test_move_between_parents(self, root: XmlElement) -> None:
        """Test that inserting into a new parent detaches from the old one."""
        other = XmlElement("other")
        b = root.children()[1]

        other.insert_child(b)

        assert names(root) == ["a", "c"]
        assert other.children() == [b]
        assert b.parent is other

    def test_move_logs_at_debug(
        self, root: XmlElement, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that re-parenting is logged at debug level."""
        other = XmlElement("other")

        with caplog.at_level(logging.DEBUG, logger="strict_xml_builder.tree.node"):
            other.insert_child(root.children()[0])

        assert any(r.message == "Moved node to new parent" for r in caplog.records)

    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_out_of_bounds_index(self, root: XmlElement, index: int) -> None:
        """Test that indices outside [0, len] are rejected."""
        with pytest.raises(InvalidIndexError):
            root.insert_child(XmlElement("x"), index)

        assert names(root) == ["a", "b", "c"]

    @pytest.mark.parametrize("index", ["1", 1.0, True])
    def test_non_integer_index(self, root: XmlElement, index: object) -> None:
        """Test that non-integer indices are rejected."""
        with pytest.raises(InvalidArgumentError, match="index should be an integer"):
            root.insert_child(XmlElement("x"), index)  # type: ignore[arg-type]

    def test_non_node_argument(self, root: XmlElement) -> None:
        """Test that non-nodes are rejected."""
        with pytest.raises(InvalidArgumentError):
            root.insert_child("text")  # type: ignore[arg-type]

    def test_insert_into_itself(self, root: XmlElement) -> None:
        """Test that a node cannot become its own child."""
        with pytest.raises(InvalidArgumentError, match="ancestors"):
            root.insert_child(root)

    def test_insert_ancestor_into_descendant(self, root: XmlElement) -> None:
        """Test that a cycle cannot be created."""
        a = root.children()[0]
        deep = a.element("deep")

        with pytest.raises(InvalidArgumentError, match="ancestors"):
            deep.insert_child(root)

        assert root.parent is None
        assert deep.parent is a


class TestRemoval:
    """Test removal operations."""

    def test_remove_child(self, root: XmlElement) -> None:
        """Test removing a child by reference."""
        b = root.children()[1]

        assert root.remove_child(b) is True
        assert names(root) == ["a", "c"]
        assert b.parent is None

    def test_remove_child_not_present(self, root: XmlElement) -> None:
        """Test that removing a non-child returns False."""
        assert root.remove_child(XmlElement("x")) is False
        assert names(root) == ["a", "b", "c"]

    def test_remove_child_non_node(self, root: XmlElement) -> None:
        """Test that non-nodes are rejected."""
        with pytest.raises(InvalidArgumentError):
            root.remove_child(None)  # type: ignore[arg-type]

    def test_remove_child_at_index(self, root: XmlElement) -> None:
        """Test removing a child by position."""
        removed = root.remove_child_at_index(0)

        assert removed.name == "a"
        assert removed.parent is None
        assert names(root) == ["b", "c"]

    @pytest.mark.parametrize("index", [-1, 3])
    def test_remove_child_at_invalid_index(self, root: XmlElement, index: int) -> None:
        """Test that removal indices must be within [0, len)."""
        with pytest.raises(InvalidIndexError):
            root.remove_child_at_index(index)

    def test_remove_self(self, root: XmlElement) -> None:
        """Test detaching a node from its parent."""
        c = root.children()[2]

        assert c.remove() is root
        assert c.parent is None
        assert names(root) == ["a", "b"]

    def test_remove_without_parent(self) -> None:
        """Test that removing a parentless node returns None."""
        assert XmlElement("lonely").remove() is None


class TestNavigation:
    """Test sibling and ancestor navigation."""

    def test_next_and_prev(self, root: XmlElement) -> None:
        """Test sibling lookup."""
        a, b, c = root.children()

        assert a.next() is b
        assert c.prev() is b
        assert a.prev() is None
        assert c.next() is None

    def test_siblings_of_parentless_node(self) -> None:
        """Test sibling lookup without a parent."""
        node = XmlElement("x")

        assert node.next() is None
        assert node.prev() is None

    def test_up_and_top(self, root: XmlElement) -> None:
        """Test parent and root lookup."""
        a = root.children()[0]
        leaf = a.element("leaf").text("t")

        assert leaf.up().up() is a
        assert leaf.top() is root
        assert root.top() is root

    def test_children_returns_copy(self, root: XmlElement) -> None:
        """Test that mutating the returned list does not affect the node."""
        children = root.children()
        children.clear()

        assert len(root.children()) == 3


class TestParentReference:
    """Test the weak back-reference to the parent."""

    def test_parent_reference_does_not_own_parent(self) -> None:
        """Test that a child does not keep its parent alive."""
        parent = XmlElement("parent")
        child = parent.element("child")

        del parent

        assert child.parent is None


class TestChildlessNodes:
    """Test that leaf variants refuse child operations."""

    @pytest.mark.parametrize("node", [XmlText("t"), XmlComment("c")])
    def test_child_operations_raise(self, node: XmlNode) -> None:
        """Test every child operation on a leaf."""
        with pytest.raises(UnsupportedOperationError, match="cannot have children"):
            node.children()
        with pytest.raises(UnsupportedOperationError):
            node.insert_child(XmlText("x"))
        with pytest.raises(UnsupportedOperationError):
            node.remove_child(XmlText("x"))
        with pytest.raises(UnsupportedOperationError):
            node.remove_child_at_index(0)

    def test_base_to_string_is_abstract(self) -> None:
        """Test that the base class cannot be rendered."""
        with pytest.raises(UnsupportedOperationError):
            XmlNode().to_string()

    def test_str_uses_to_string(self) -> None:
        """Test that str() renders with default options."""
        root = XmlElement("a")
        root.text("x")

        assert str(root) == "<a>x</a>"
