# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""RDF/XML grammar parser building an XMP node tree.

Implements the subset of the W3C RDF/XML grammar (section 7.2) that real
XMP packets use.  Every production works on an lxml element; the first
grammar violation raises an :class:`~xmptree.exceptions.XmpParseError`
subclass and no tree is returned.
"""

import logging
from collections.abc import Iterator
from enum import Enum

from lxml import etree

from .exceptions import (
    ContentNotAllowedInEmptyElementError,
    DisallowedQualifierHereError,
    InconsistentAboutError,
    InvalidPropertyAttributeError,
    InvalidPropertyElementError,
    MissingRdfRootError,
    MissingRequiredChildrenError,
    TextNotAllowedHereError,
    UnexpectedTopLevelElementError,
    UnknownCollectionTypeError,
    UnsupportedParseTypeError,
)
from .namespaces import ADOBE_X_NS, RDF_NS, XML_NS
from .node import Node, NodeKind
from .utils import clark, split_clark

logger = logging.getLogger(__name__)

# Clark-notation names of the wrapper elements
_XMPMETA = clark(ADOBE_X_NS, "xmpmeta")
_XAPMETA = clark(ADOBE_X_NS, "xapmeta")

# RDF syntax names
_RDF_RDF = clark(RDF_NS, "RDF")
_RDF_DESCRIPTION = clark(RDF_NS, "Description")
_RDF_ABOUT = clark(RDF_NS, "about")
_RDF_ID = clark(RDF_NS, "ID")
_RDF_NODE_ID = clark(RDF_NS, "nodeID")
_RDF_DATATYPE = clark(RDF_NS, "datatype")
_RDF_PARSE_TYPE = clark(RDF_NS, "parseType")
_RDF_RESOURCE = clark(RDF_NS, "resource")
_RDF_VALUE = clark(RDF_NS, "value")
_XML_LANG = clark(XML_NS, "lang")

# Node element tag -> collection kind
_NODE_ELEMENT_KINDS = {
    clark(RDF_NS, "Seq"): NodeKind.SEQ,
    clark(RDF_NS, "Alt"): NodeKind.ALT,
    clark(RDF_NS, "Bag"): NodeKind.BAG,
    _RDF_DESCRIPTION: NodeKind.STRUCT,
}

# Core syntax terms, rdf:Description and the old terms never name a property
_NON_PROPERTY_ELEMENTS = frozenset(
    clark(RDF_NS, term)
    for term in (
        "RDF",
        "Description",
        "ID",
        "about",
        "parseType",
        "resource",
        "nodeID",
        "datatype",
        "aboutEach",
        "aboutEachPrefix",
        "bagID",
    )
)

# Attributes a node element consumes without producing a child
_NODE_ELEMENT_SKIPPED_ATTRS = frozenset({_RDF_ID, _RDF_NODE_ID, _RDF_ABOUT})

# Attributes that do not make a property element "have other attributes"
_NEUTRAL_PROPERTY_ATTRS = frozenset({_XML_LANG, _RDF_ID})


class PropertyElementKind(Enum):
    """Production a property element is parsed with."""

    RESOURCE = "resourcePropertyElt"
    LITERAL = "literalPropertyElt"
    PARSE_TYPE_RESOURCE = "parseTypeResourcePropertyElt"
    EMPTY = "emptyPropertyElt"


def _is_element(item: object) -> bool:
    """True for lxml elements; False for comments, PIs and entities."""
    return isinstance(item, etree._Element) and isinstance(item.tag, str)


def _iter_content(elem: etree._Element) -> Iterator[etree._Element | str]:
    """Yield the significant content of an element in document order.

    Element children are yielded as elements, non-whitespace text segments
    as strings.  Comments and processing instructions are skipped, but text
    following them is still reported.
    """
    if elem.text and elem.text.strip():
        yield elem.text
    for child in elem:
        if _is_element(child):
            yield child
        if child.tail and child.tail.strip():
            yield child.tail


def _element_children(elem: etree._Element) -> list[etree._Element]:
    return [child for child in elem if _is_element(child)]


def _has_text(elem: etree._Element) -> bool:
    return any(isinstance(item, str) for item in _iter_content(elem))


def _text_content(elem: etree._Element) -> str:
    return str(elem.xpath("string()"))


def find_rdf_root(document: etree._Element) -> etree._Element:
    """Locate the rdf:RDF element of an XMP document.

    The document element must be ``x:xmpmeta``, or ``x:xapmeta`` as written
    by old XAP-era producers, with ``rdf:RDF`` as a child.

    Args:
        document: Root element of the parsed XMP document.

    Returns:
        The rdf:RDF element.

    Raises:
        MissingRdfRootError: If no such element exists.
    """
    if document.tag in (_XMPMETA, _XAPMETA):
        if document.tag == _XAPMETA:
            logger.debug("Falling back to legacy x:xapmeta wrapper")
        for child in document:
            if child.tag == _RDF_RDF:
                return child
    raise MissingRdfRootError(
        "No x:xmpmeta/rdf:RDF or x:xapmeta/rdf:RDF element found", document
    )


def parse_rdf(rdf_element: etree._Element) -> Node:
    """Build a node tree from an rdf:RDF element.

    All direct children must be rdf:Description elements.  Their rdf:about
    values are unified into the root's name, then each description's
    properties are parsed into the root.

    Args:
        rdf_element: The rdf:RDF element.

    Returns:
        The root node of the tree.

    Raises:
        XmpParseError: On the first grammar violation.
    """
    top = Node("", "", kind=NodeKind.STRUCT)
    descriptions = []
    for item in _iter_content(rdf_element):
        if isinstance(item, str):
            raise TextNotAllowedHereError(
                f"Text {item.strip()!r} is not allowed inside rdf:RDF", rdf_element
            )
        if item.tag != _RDF_DESCRIPTION:
            raise UnexpectedTopLevelElementError(
                "Cannot have anything other than rdf:Description at the top level",
                item,
            )
        about = item.get(_RDF_ABOUT)
        if about:
            if top.name and top.name != about:
                raise InconsistentAboutError(
                    f"Multiple inconsistent rdf:about values: "
                    f"{top.name!r} and {about!r}",
                    item,
                )
            top.name = about
        descriptions.append(item)

    for description in descriptions:
        parse_node_element(top, description)

    logger.debug(
        "Parsed %d top-level description(s) into %d properties",
        len(descriptions),
        len(top.children),
    )
    return top


def parse_node_element(parent: Node, elem: etree._Element) -> None:
    """Parse a node element (7.2.11) into ``parent``.

    The element's tag decides the parent's kind; its attributes become
    attribute-children and its child elements are property elements.
    RDF syntax terms such as ``rdf:resource`` are not property attributes
    and raise :class:`InvalidPropertyAttributeError`.
    """
    kind = _NODE_ELEMENT_KINDS.get(elem.tag)
    if kind is None:
        raise UnknownCollectionTypeError(
            "Unknown node element found, perhaps an unimplemented collection",
            elem,
        )
    parent.kind = kind

    for name, value in elem.attrib.items():
        if name in _NODE_ELEMENT_SKIPPED_ATTRS:
            continue
        if name == _XML_LANG:
            raise DisallowedQualifierHereError(
                "xml:lang is not allowed on a node element", elem
            )
        if name in _NON_PROPERTY_ELEMENTS:
            raise InvalidPropertyAttributeError(
                f"RDF syntax term {name} cannot be a property attribute", elem
            )
        namespace, local = split_clark(name)
        parent.add_child(Node(namespace, local, value))

    for item in _iter_content(elem):
        if isinstance(item, str):
            raise TextNotAllowedHereError(
                f"Text {item.strip()!r} is not allowed in a node element", elem
            )
        parse_property_element(parent, item)


def classify_property_element(elem: etree._Element) -> PropertyElementKind:
    """Decide which production a property element (7.2.14) belongs to.

    Attribute count and content shape decide, in this order:

    1. More than three attributes: always an empty property element.
    2. Only ``xml:lang``/``rdf:ID`` attributes: empty without content,
       literal with text only, resource with element children.
    3. Otherwise the first attribute besides ``xml:lang``/``rdf:ID``
       decides: ``rdf:datatype`` is literal, ``rdf:parseType="Resource"``
       is parseType-resource, any other attribute is empty.

    Raises:
        UnsupportedParseTypeError: For any rdf:parseType except Resource.
    """
    attrib = elem.attrib
    has_other = any(name not in _NEUTRAL_PROPERTY_ATTRS for name in attrib)

    if len(attrib) > 3:
        return PropertyElementKind.EMPTY

    if not has_other:
        if _element_children(elem):
            return PropertyElementKind.RESOURCE
        if _has_text(elem):
            return PropertyElementKind.LITERAL
        return PropertyElementKind.EMPTY

    for name, value in attrib.items():
        if name in _NEUTRAL_PROPERTY_ATTRS:
            continue
        if name == _RDF_DATATYPE:
            return PropertyElementKind.LITERAL
        if name != _RDF_PARSE_TYPE:
            return PropertyElementKind.EMPTY
        if value == "Resource":
            return PropertyElementKind.PARSE_TYPE_RESOURCE
        raise UnsupportedParseTypeError(
            f'rdf:parseType="{value}" is not allowed in XMP', elem
        )

    # Unreachable: has_other guarantees a deciding attribute
    raise AssertionError("property element without a deciding attribute")


def parse_property_element(parent: Node, elem: etree._Element) -> None:
    """Parse a property element (7.2.14) and append the result to ``parent``."""
    if elem.tag in _NON_PROPERTY_ELEMENTS:
        raise InvalidPropertyElementError(
            "RDF syntax term cannot be used as a property", elem
        )

    kind = classify_property_element(elem)
    if kind is PropertyElementKind.RESOURCE:
        node = _parse_resource_property(elem)
    elif kind is PropertyElementKind.LITERAL:
        node = _parse_literal_property(elem)
    elif kind is PropertyElementKind.PARSE_TYPE_RESOURCE:
        node = _parse_type_resource_property(elem)
    else:
        node = _parse_empty_property(elem)
    parent.add_child(node)


def _new_property_node(elem: etree._Element, value: str | None = None) -> Node:
    namespace, local = split_clark(elem.tag)
    return Node(namespace, local, value)


def _lang_qualifier(value: str) -> Node:
    return Node(XML_NS, "lang", value)


def _text_property_with_qualifiers(
    elem: etree._Element, value: str, skip: str | None = None
) -> Node:
    """Create a simple node whose attributes all become qualifiers."""
    node = _new_property_node(elem, value)
    for name, attr_value in elem.attrib.items():
        if name == skip:
            continue
        namespace, local = split_clark(name)
        node.add_qualifier(Node(namespace, local, attr_value))
    return node


# 7.2.15 resourcePropertyElt
def _parse_resource_property(elem: etree._Element) -> Node:
    node = _new_property_node(elem)
    for name, value in elem.attrib.items():
        if name == _XML_LANG:
            node.add_qualifier(_lang_qualifier(value))
        elif name != _RDF_ID:
            raise InvalidPropertyAttributeError(
                f"Invalid attribute {name} on resource property element", elem
            )

    has_children = False
    for item in _iter_content(elem):
        if isinstance(item, str):
            raise TextNotAllowedHereError(
                f"Can't have text {item.strip()!r} here", elem
            )
        has_children = True
        parse_node_element(node, item)

    if not has_children:
        raise MissingRequiredChildrenError(
            "Missing children for resource property element", elem
        )
    return node


# 7.2.16 literalPropertyElt
def _parse_literal_property(elem: etree._Element) -> Node:
    return _text_property_with_qualifiers(elem, _text_content(elem))


# 7.2.18 parseTypeResourcePropertyElt
def _parse_type_resource_property(elem: etree._Element) -> Node:
    node = _new_property_node(elem)
    node.kind = NodeKind.STRUCT
    lang = elem.get(_XML_LANG)
    if lang is not None:
        node.add_qualifier(_lang_qualifier(lang))

    for item in _iter_content(elem):
        if isinstance(item, str):
            raise TextNotAllowedHereError(
                f"Can't have text {item.strip()!r} in a parseType Resource element",
                elem,
            )
        parse_property_element(node, item)
    return node


# 7.2.21 emptyPropertyElt
def _parse_empty_property(elem: etree._Element) -> Node:
    if next(_iter_content(elem), None) is not None:
        raise ContentNotAllowedInEmptyElementError(
            "Can't have content in an empty property element", elem
        )

    # rdf:value or rdf:resource carries the value and is not a qualifier
    for value_attr in (_RDF_VALUE, _RDF_RESOURCE):
        value = elem.get(value_attr)
        if value is not None:
            return _text_property_with_qualifiers(elem, value, skip=value_attr)

    node = _new_property_node(elem)
    for name, value in elem.attrib.items():
        if name in (_RDF_ID, _RDF_NODE_ID):
            continue
        if name == _XML_LANG:
            # xml:lang is kept both as qualifier and as attribute-child
            node.add_qualifier(_lang_qualifier(value))
        namespace, local = split_clark(name)
        node.add_child(Node(namespace, local, value))
    return node
