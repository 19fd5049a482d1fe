# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Namespace/name lookup table over an XMP node tree."""

from .node import Node

NodeIndex = dict[str, dict[str, Node]]


def build_index(root: Node) -> NodeIndex:
    """Index every named node of a tree by namespace URI and local name.

    The root and ``rdf:li`` array items are skipped since items are
    positional; their descendants are still indexed.  When a name occurs
    more than once the last node in document order wins.

    Args:
        root: Root node of the tree.

    Returns:
        Mapping of namespace URI -> local name -> node.
    """
    index: NodeIndex = {}
    stack = list(reversed(root.children))
    while stack:
        node = stack.pop()
        if not node.is_list_item:
            index.setdefault(node.namespace, {})[node.name] = node
        stack.extend(reversed(node.children))
    return index


def lookup(index: NodeIndex, namespace: str, name: str) -> Node | None:
    """Return the indexed node for a namespace and name, or None."""
    names = index.get(namespace)
    if names is None:
        return None
    return names.get(name)
