# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Node tree model for parsed XMP metadata."""

import sys
from collections.abc import Iterator
from enum import Enum

from .namespaces import RDF_NS


class NodeKind(Enum):
    """Structural kind of an XMP node."""

    SIMPLE = "Simple"
    STRUCT = "Struct"
    SEQ = "Seq"
    ALT = "Alt"
    BAG = "Bag"

    @property
    def is_array(self) -> bool:
        return self in (NodeKind.SEQ, NodeKind.ALT, NodeKind.BAG)


class Node:
    """A property, struct field, array item or qualifier in an XMP tree.

    A node exclusively owns its qualifiers and children; both lists keep
    document order.  For array kinds the child order is the item order.

    Attributes:
        namespace: Interned namespace URI (empty for the root node).
        name: Interned local name.
        value: Scalar value of simple leaves, otherwise None.
        kind: Structural kind, SIMPLE until a node element says otherwise.
        qualifiers: Annotations such as ``xml:lang``.
        children: Fields, array items or attribute-children.
    """

    __slots__ = ("namespace", "name", "value", "kind", "qualifiers", "children")

    def __init__(
        self,
        namespace: str,
        name: str,
        value: str | None = None,
        kind: NodeKind = NodeKind.SIMPLE,
    ) -> None:
        self.namespace = sys.intern(namespace)
        self.name = sys.intern(name)
        self.value = value
        self.kind = kind
        self.qualifiers: list[Node] = []
        self.children: list[Node] = []

    def __repr__(self) -> str:
        return (
            f"Node({self.namespace!r}, {self.name!r}, value={self.value!r}, "
            f"kind={self.kind.name})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.namespace == other.namespace
            and self.name == other.name
            and self.value == other.value
            and self.kind is other.kind
            and self.qualifiers == other.qualifiers
            and self.children == other.children
        )

    __hash__ = None  # type: ignore[assignment]

    @property
    def is_list_item(self) -> bool:
        return self.namespace == RDF_NS and self.name == "li"

    @property
    def is_simple_leaf(self) -> bool:
        """True for SIMPLE nodes without children."""
        return self.kind is NodeKind.SIMPLE and not self.children

    def add_child(self, node: "Node") -> "Node":
        self.children.append(node)
        return node

    def add_qualifier(self, node: "Node") -> "Node":
        self.qualifiers.append(node)
        return node

    def get_qualifier(self, namespace: str, name: str) -> "Node | None":
        """Return the first qualifier with the given name, if any."""
        for qualifier in self.qualifiers:
            if qualifier.namespace == namespace and qualifier.name == name:
                return qualifier
        return None

    def iter_nodes(self) -> Iterator["Node"]:
        """Yield this node and all descendants in pre-order.

        Qualifiers are not part of the traversal.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def dump(self, indent: int = 0) -> str:
        """Return an indented, human readable outline of the subtree."""
        pad = "  " * indent
        if indent == 0 and not self.namespace:
            label = f"(root {self.name!r})"
        elif self.namespace:
            label = f"{{{self.namespace}}}{self.name}"
        else:
            label = self.name
        line = f"{pad}{label} [{self.kind.value}]"
        if self.value is not None:
            line += f" = {self.value!r}"
        lines = [line]
        for qualifier in self.qualifiers:
            lines.append(
                f"{pad}  ? {{{qualifier.namespace}}}{qualifier.name}"
                f" = {qualifier.value!r}"
            )
        for child in self.children:
            lines.append(child.dump(indent + 1))
        return "\n".join(lines)
