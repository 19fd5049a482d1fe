# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Namespace URIs and the prefix registry used when rendering XMP."""

import logging
import sys
from collections.abc import Iterable

from .exceptions import NamespaceError

logger = logging.getLogger(__name__)

# Namespace URIs are interned so that the parser can compare them cheaply.
ADOBE_X_NS = sys.intern("adobe:ns:meta/")
AUX_NS = sys.intern("http://ns.adobe.com/exif/1.0/aux/")
CRS_NS = sys.intern("http://ns.adobe.com/camera-raw-settings/1.0/")
DC_NS = sys.intern("http://purl.org/dc/elements/1.1/")
EXIF_NS = sys.intern("http://ns.adobe.com/exif/1.0/")
PDF_NS = sys.intern("http://ns.adobe.com/pdf/1.3/")
PHOTOSHOP_NS = sys.intern("http://ns.adobe.com/photoshop/1.0/")
RDF_NS = sys.intern("http://www.w3.org/1999/02/22-rdf-syntax-ns#")
STDIM_NS = sys.intern("http://ns.adobe.com/xap/1.0/sType/Dimensions#")
STEVT_NS = sys.intern("http://ns.adobe.com/xap/1.0/sType/ResourceEvent#")
STREF_NS = sys.intern("http://ns.adobe.com/xap/1.0/sType/ResourceRef#")
TIFF_NS = sys.intern("http://ns.adobe.com/tiff/1.0/")
XAP_NS = sys.intern("http://ns.adobe.com/xap/1.0/")
XML_NS = sys.intern("http://www.w3.org/XML/1998/namespace")
XMLNS_NS = sys.intern("http://www.w3.org/2000/xmlns/")
XMPMM_NS = sys.intern("http://ns.adobe.com/xap/1.0/mm/")
XMPRIGHTS_NS = sys.intern("http://ns.adobe.com/xap/1.0/rights/")
XMPTG_NS = sys.intern("http://ns.adobe.com/xap/1.0/t/pg/")

# Preferred prefixes of the well-known XMP namespaces
NAMESPACES = {
    "x": ADOBE_X_NS,
    "aux": AUX_NS,
    "crs": CRS_NS,
    "dc": DC_NS,
    "exif": EXIF_NS,
    "pdf": PDF_NS,
    "photoshop": PHOTOSHOP_NS,
    "rdf": RDF_NS,
    "stDim": STDIM_NS,
    "stEvt": STEVT_NS,
    "stRef": STREF_NS,
    "tiff": TIFF_NS,
    "xmp": XAP_NS,
    "xml": XML_NS,
    "xmlns": XMLNS_NS,
    "xmpMM": XMPMM_NS,
    "xmpRights": XMPRIGHTS_NS,
    "xmpTPg": XMPTG_NS,
}

# Bound implicitly by every XML document; never declared in an nsmap
_RESERVED_NS_URIS = frozenset({XML_NS, XMLNS_NS})

_ANONYMOUS_PREFIX = "ns"


class NamespaceRegistry:
    """Maps namespace URIs to prefixes for one parse/render lifetime.

    Every registry starts out with the well-known XMP namespaces.  Unknown
    URIs get an anonymous ``ns<N>`` prefix the first time they are
    interned; later lookups of the same URI return the same prefix.
    """

    def __init__(self, prefixes: dict[str, str] | None = None) -> None:
        self._prefixes: dict[str, str] = {}
        self._uris: dict[str, str] = {}
        self._anon_count = 0
        for prefix, uri in NAMESPACES.items():
            self.register(prefix, uri)
        for prefix, uri in (prefixes or {}).items():
            self.register(prefix, uri)

    def __contains__(self, uri: object) -> bool:
        return uri in self._prefixes

    def __len__(self) -> int:
        return len(self._prefixes)

    def register(self, prefix: str, uri: str) -> None:
        """Bind a preferred prefix to a namespace URI.

        Raises:
            NamespaceError: If the prefix is already bound to another URI.
        """
        bound = self._uris.get(prefix)
        if bound is not None and bound != uri:
            raise NamespaceError(
                f"Prefix {prefix!r} is already bound to {bound!r}, not {uri!r}"
            )
        uri = sys.intern(uri)
        self._prefixes[uri] = prefix
        self._uris[prefix] = uri

    def intern(self, uri: str) -> str:
        """Return the prefix for a URI, allocating ``ns<N>`` if unseen."""
        prefix = self._prefixes.get(uri)
        if prefix is not None:
            return prefix

        prefix = self._next_anonymous_prefix()
        self.register(prefix, uri)
        logger.debug("Added %s prefix for %s namespace", prefix, uri)
        return prefix

    def prefix_of(self, uri: str) -> str | None:
        """Return the prefix bound to a URI without allocating one."""
        return self._prefixes.get(uri)

    def uri_of(self, prefix: str) -> str | None:
        """Return the URI bound to a prefix."""
        return self._uris.get(prefix)

    def as_nsmap(self, uris: Iterable[str]) -> dict[str, str]:
        """Build an lxml ``nsmap`` for the given URIs.

        Empty URIs and the implicit xml/xmlns namespaces are skipped.
        """
        nsmap: dict[str, str] = {}
        for uri in uris:
            if not uri or uri in _RESERVED_NS_URIS:
                continue
            nsmap[self.intern(uri)] = uri
        return nsmap

    def copy(self) -> "NamespaceRegistry":
        """Return an independent registry with the same bindings."""
        clone = NamespaceRegistry()
        clone._prefixes = dict(self._prefixes)
        clone._uris = dict(self._uris)
        clone._anon_count = self._anon_count
        return clone

    def _next_anonymous_prefix(self) -> str:
        while True:
            self._anon_count += 1
            prefix = f"{_ANONYMOUS_PREFIX}{self._anon_count}"
            if prefix not in self._uris:
                return prefix
