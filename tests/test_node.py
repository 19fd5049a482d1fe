# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Unit tests for node.py."""

from xmptree.namespaces import DC_NS, RDF_NS, XML_NS
from xmptree.node import Node, NodeKind


def _bag() -> Node:
    subject = Node(DC_NS, "subject", kind=NodeKind.BAG)
    subject.add_child(Node(RDF_NS, "li", "a"))
    subject.add_child(Node(RDF_NS, "li", "b"))
    return subject


class TestNode:
    """Tests for the Node model."""

    def test_defaults(self) -> None:
        """New nodes are simple, valueless and empty."""
        node = Node(DC_NS, "creator")
        assert node.kind is NodeKind.SIMPLE
        assert node.value is None
        assert node.qualifiers == []
        assert node.children == []

    def test_children_keep_order(self) -> None:
        """Children are kept in insertion order."""
        subject = _bag()
        assert [child.value for child in subject.children] == ["a", "b"]

    def test_get_qualifier(self) -> None:
        """Qualifiers are looked up by namespace and name."""
        node = Node(RDF_NS, "li", "Sunset")
        node.add_qualifier(Node(XML_NS, "lang", "x-default"))
        assert node.get_qualifier(XML_NS, "lang").value == "x-default"
        assert node.get_qualifier(RDF_NS, "datatype") is None

    def test_is_list_item(self) -> None:
        """rdf:li nodes are list items."""
        assert Node(RDF_NS, "li").is_list_item
        assert not Node(DC_NS, "li").is_list_item

    def test_is_simple_leaf(self) -> None:
        """Simple nodes without children are leaves."""
        assert Node(DC_NS, "format", "image/jpeg").is_simple_leaf
        assert not _bag().is_simple_leaf

    def test_array_kinds(self) -> None:
        """Seq, Alt and Bag are arrays; Struct and Simple are not."""
        assert NodeKind.SEQ.is_array
        assert NodeKind.ALT.is_array
        assert NodeKind.BAG.is_array
        assert not NodeKind.STRUCT.is_array
        assert not NodeKind.SIMPLE.is_array

    def test_iter_nodes_preorder(self) -> None:
        """Traversal is pre-order and skips qualifiers."""
        root = Node("", "")
        subject = root.add_child(_bag())
        subject.add_qualifier(Node(XML_NS, "lang", "en"))
        names = [(node.name, node.value) for node in root.iter_nodes()]
        assert names == [("", None), ("subject", None), ("li", "a"), ("li", "b")]

    def test_equality(self) -> None:
        """Nodes compare by content."""
        assert _bag() == _bag()
        other = _bag()
        other.children[1].value = "c"
        assert _bag() != other

    def test_dump(self) -> None:
        """dump() outlines kinds, values and qualifiers."""
        root = Node("", "uuid:1", kind=NodeKind.STRUCT)
        subject = root.add_child(_bag())
        subject.children[0].add_qualifier(Node(XML_NS, "lang", "en"))
        text = root.dump()
        assert "(root 'uuid:1') [Struct]" in text
        assert f"  {{{DC_NS}}}subject [Bag]" in text
        assert f"    {{{RDF_NS}}}li [Simple] = 'a'" in text
        assert f"? {{{XML_NS}}}lang = 'en'" in text

    def test_dump_namespaceless_child(self) -> None:
        """Only the node dump() starts from is labelled as the root."""
        root = Node("", "uuid:1", kind=NodeKind.STRUCT)
        root.add_child(Node("", "foo", "bar"))
        lines = root.dump().splitlines()
        assert lines[0] == "(root 'uuid:1') [Struct]"
        assert lines[1] == "  foo [Simple] = 'bar'"
