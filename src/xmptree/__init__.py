# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""xmptree - Parse, query and render XMP metadata node trees."""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    ContentNotAllowedInEmptyElementError,
    DisallowedQualifierHereError,
    InconsistentAboutError,
    InvalidPropertyAttributeError,
    InvalidPropertyElementError,
    MalformedXmpError,
    MissingRdfRootError,
    MissingRequiredChildrenError,
    NamespaceError,
    TextNotAllowedHereError,
    UnexpectedTopLevelElementError,
    UnknownCollectionTypeError,
    UnsupportedOperationError,
    UnsupportedParseTypeError,
    XmpError,
    XmpErrorKind,
    XmpParseError,
)
from .namespaces import NamespaceRegistry
from .node import Node, NodeKind
from .tag import XmpTag

try:
    __version__ = version("xmptree")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "XmpTag",
    "Node",
    "NodeKind",
    "NamespaceRegistry",
    "XmpError",
    "XmpErrorKind",
    "XmpParseError",
    "NamespaceError",
    "UnsupportedOperationError",
    "MalformedXmpError",
    "MissingRdfRootError",
    "UnexpectedTopLevelElementError",
    "InconsistentAboutError",
    "UnknownCollectionTypeError",
    "DisallowedQualifierHereError",
    "UnsupportedParseTypeError",
    "InvalidPropertyAttributeError",
    "InvalidPropertyElementError",
    "TextNotAllowedHereError",
    "MissingRequiredChildrenError",
    "ContentNotAllowedInEmptyElementError",
]
