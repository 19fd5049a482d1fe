# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for xmptree."""

from enum import Enum
from typing import Any


class XmpErrorKind(Enum):
    """Tag identifying why an XMP payload was rejected."""

    MALFORMED_XML = "malformed_xml"
    MISSING_RDF_ROOT = "missing_rdf_root"
    UNEXPECTED_TOP_LEVEL_ELEMENT = "unexpected_top_level_element"
    INCONSISTENT_ABOUT = "inconsistent_about"
    UNKNOWN_COLLECTION_TYPE = "unknown_collection_type"
    DISALLOWED_QUALIFIER_HERE = "disallowed_qualifier_here"
    UNSUPPORTED_PARSE_TYPE = "unsupported_parse_type"
    INVALID_PROPERTY_ATTRIBUTE = "invalid_property_attribute"
    INVALID_PROPERTY_ELEMENT = "invalid_property_element"
    TEXT_NOT_ALLOWED_HERE = "text_not_allowed_here"
    MISSING_REQUIRED_CHILDREN = "missing_required_children"
    CONTENT_NOT_ALLOWED_IN_EMPTY_ELEMENT = "content_not_allowed_in_empty_element"


class XmpError(Exception):
    """Base exception for all xmptree errors."""


class NamespaceError(XmpError):
    """Conflicting namespace prefix registration."""


class UnsupportedOperationError(XmpError):
    """Operation is not supported on XMP tags."""


class XmpParseError(XmpError):
    """XMP payload could not be turned into a node tree.

    Attributes:
        kind: Tag identifying the violated rule.
        element: Clark-notation tag of the offending element, if known.
        line: Source line of the offending element, if known.
    """

    kind = XmpErrorKind.MALFORMED_XML

    def __init__(self, message: str, element: Any = None) -> None:
        self.element: str | None = None
        self.line: int | None = None
        if element is not None:
            tag = getattr(element, "tag", element)
            self.element = tag if isinstance(tag, str) else None
            self.line = getattr(element, "sourceline", None)
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.element is None:
            return message
        if self.line is None:
            return f"{message} (element {self.element})"
        return f"{message} (element {self.element}, line {self.line})"


class MalformedXmpError(XmpParseError):
    """Payload is not well-formed XML."""

    kind = XmpErrorKind.MALFORMED_XML


class MissingRdfRootError(XmpParseError):
    """No x:xmpmeta/rdf:RDF (or x:xapmeta/rdf:RDF) element found."""

    kind = XmpErrorKind.MISSING_RDF_ROOT


class UnexpectedTopLevelElementError(XmpParseError):
    """A child of rdf:RDF is not an rdf:Description."""

    kind = XmpErrorKind.UNEXPECTED_TOP_LEVEL_ELEMENT


class InconsistentAboutError(XmpParseError):
    """Top-level descriptions declare conflicting rdf:about values."""

    kind = XmpErrorKind.INCONSISTENT_ABOUT


class UnknownCollectionTypeError(XmpParseError):
    """Node element is not rdf:Seq, rdf:Alt, rdf:Bag or rdf:Description."""

    kind = XmpErrorKind.UNKNOWN_COLLECTION_TYPE


class DisallowedQualifierHereError(XmpParseError):
    """xml:lang used on a node element."""

    kind = XmpErrorKind.DISALLOWED_QUALIFIER_HERE


class UnsupportedParseTypeError(XmpParseError):
    """rdf:parseType other than Resource."""

    kind = XmpErrorKind.UNSUPPORTED_PARSE_TYPE


class InvalidPropertyAttributeError(XmpParseError):
    """Attribute not allowed on a resource property element."""

    kind = XmpErrorKind.INVALID_PROPERTY_ATTRIBUTE


class InvalidPropertyElementError(XmpParseError):
    """Element name is an RDF syntax term and cannot name a property."""

    kind = XmpErrorKind.INVALID_PROPERTY_ELEMENT


class TextNotAllowedHereError(XmpParseError):
    """Text found where only element children are permitted."""

    kind = XmpErrorKind.TEXT_NOT_ALLOWED_HERE


class MissingRequiredChildrenError(XmpParseError):
    """Resource property element has no node element child."""

    kind = XmpErrorKind.MISSING_REQUIRED_CHILDREN


class ContentNotAllowedInEmptyElementError(XmpParseError):
    """Empty property element has child content."""

    kind = XmpErrorKind.CONTENT_NOT_ALLOWED_IN_EMPTY_ELEMENT
