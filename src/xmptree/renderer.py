# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Serialize an XMP node tree back to RDF/XML.

The output always has the shape ``x:xmpmeta > rdf:RDF > rdf:Description``
and uses element forms only, so the result re-parses into the same tree
without reproducing the original attribute/element choices.
"""

import logging

from lxml import etree

from .namespaces import ADOBE_X_NS, RDF_NS, XML_NS, NamespaceRegistry
from .node import Node, NodeKind
from .utils import clark, sanitize_xml_text

logger = logging.getLogger(__name__)

_RDF_PARSE_TYPE = clark(RDF_NS, "parseType")
_RDF_VALUE = clark(RDF_NS, "value")
_RDF_ABOUT = clark(RDF_NS, "about")

# Attributes that leave a property element classified by its content
_NEUTRAL_QUALIFIERS = frozenset({(XML_NS, "lang"), (RDF_NS, "ID")})


def _collect_namespaces(root: Node) -> list[str]:
    """Return the namespace URIs used below the root, first seen first."""
    seen: dict[str, None] = {}
    for node in root.iter_nodes():
        if node is root:
            continue
        seen[node.namespace] = None
        for qualifier in node.qualifiers:
            seen[qualifier.namespace] = None
    return list(seen)


def _set_attr(elem: etree._Element, node: Node) -> None:
    elem.set(clark(node.namespace, node.name), sanitize_xml_text(node.value or ""))


def _is_attribute_child(node: Node) -> bool:
    return node.is_simple_leaf and node.value is not None and not node.qualifiers


def render_tree(
    root: Node,
    namespaces: NamespaceRegistry | None = None,
    pretty_print: bool = False,
) -> str:
    """Render a node tree as an XMP document.

    Args:
        root: Root node of the tree; its name becomes ``rdf:about``.
        namespaces: Registry supplying prefixes.  Unknown namespaces are
            added to it with anonymous ``ns<N>`` prefixes.  A fresh
            registry is used when omitted.
        pretty_print: Indent the output.

    Returns:
        The serialized ``x:xmpmeta`` document.
    """
    if namespaces is None:
        namespaces = NamespaceRegistry()

    meta = etree.Element(
        clark(ADOBE_X_NS, "xmpmeta"), nsmap=namespaces.as_nsmap([ADOBE_X_NS])
    )
    rdf = etree.SubElement(
        meta, clark(RDF_NS, "RDF"), nsmap=namespaces.as_nsmap([RDF_NS])
    )
    used = [
        uri for uri in _collect_namespaces(root) if uri not in (ADOBE_X_NS, RDF_NS)
    ]
    description = etree.SubElement(
        rdf, clark(RDF_NS, "Description"), nsmap=namespaces.as_nsmap(used)
    )
    description.set(_RDF_ABOUT, root.name)

    for child in root.children:
        render_node(child, description)

    return etree.tostring(meta, encoding="unicode", pretty_print=pretty_print)


def render_node(node: Node, parent: etree._Element) -> etree._Element:
    """Append the property element for ``node`` to ``parent``."""
    elem = etree.SubElement(parent, clark(node.namespace, node.name))

    if node.kind.is_array:
        _render_lang(node, elem)
        collection = etree.SubElement(elem, clark(RDF_NS, node.kind.value))
        for child in node.children:
            render_node(child, collection)
    elif node.kind is NodeKind.STRUCT:
        _render_struct(node, elem)
    elif node.value is not None:
        _render_simple_value(node, elem)
    elif all(_is_attribute_child(child) for child in node.children):
        # Children first: their order decides how the element re-parses
        for child in node.children:
            _set_attr(elem, child)
        for qualifier in node.qualifiers:
            _set_attr(elem, qualifier)
    else:
        _render_struct(node, elem)
    return elem


def _render_lang(node: Node, elem: etree._Element) -> None:
    lang = node.get_qualifier(XML_NS, "lang")
    if lang is not None:
        _set_attr(elem, lang)


def _render_struct(node: Node, elem: etree._Element) -> None:
    elem.set(_RDF_PARSE_TYPE, "Resource")
    _render_lang(node, elem)
    for child in node.children:
        render_node(child, elem)


def _reparses_as_literal(node: Node, value: str) -> bool:
    """True if text content plus qualifier attributes reads back as a literal.

    A property element with more than three attributes is always empty.
    Otherwise the first attribute besides ``xml:lang``/``rdf:ID`` decides,
    and only ``rdf:datatype`` keeps the text.  With no such attribute the
    text itself must be non-blank.
    """
    if len(node.qualifiers) > 3:
        return False
    for qualifier in node.qualifiers:
        if (qualifier.namespace, qualifier.name) in _NEUTRAL_QUALIFIERS:
            continue
        return qualifier.namespace == RDF_NS and qualifier.name == "datatype"
    return bool(value.strip())


def _render_simple_value(node: Node, elem: etree._Element) -> None:
    value = sanitize_xml_text(node.value or "")
    if _reparses_as_literal(node, value):
        for qualifier in node.qualifiers:
            _set_attr(elem, qualifier)
        elem.text = value
        return

    # rdf:value first, so the element re-parses as an empty property element
    elem.set(_RDF_VALUE, value)
    for qualifier in node.qualifiers:
        if qualifier.namespace == RDF_NS and qualifier.name == "value":
            logger.warning(
                "Dropping rdf:value qualifier of {%s}%s, it clashes with the value",
                node.namespace,
                node.name,
            )
            continue
        _set_attr(elem, qualifier)
