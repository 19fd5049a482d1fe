# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""XMP tag: parsed node tree plus typed accessors."""

import logging

from lxml import etree

from .exceptions import UnsupportedOperationError
from .index import NodeIndex, build_index, lookup
from .namespaces import DC_NS, TIFF_NS, XAP_NS, XML_NS, NamespaceRegistry
from .node import Node
from .packet import parse_xmp_document, wrap_packet
from .parser import find_rdf_root, parse_rdf
from .renderer import render_tree

logger = logging.getLogger(__name__)

DEFAULT_LANG = "x-default"


class XmpTag:
    """Holds XMP (Extensible Metadata Platform) metadata.

    The node tree is built once from the XMP payload, then indexed by
    namespace and local name.  The index is a snapshot: after mutating
    ``node_tree`` call :meth:`reindex` to make lookups see the change.

    Args:
        data: XMP document as text or UTF-8 bytes, optionally wrapped in
            an xpacket header/trailer.
        namespaces: Prefix registry used for rendering.  Each tag gets its
            own registry when omitted.

    Raises:
        XmpParseError: If the payload is not valid XMP.
    """

    tag_types = "XMP"

    def __init__(
        self,
        data: str | bytes,
        namespaces: NamespaceRegistry | None = None,
    ) -> None:
        document = parse_xmp_document(data)
        self._init_tree(parse_rdf(find_rdf_root(document)), namespaces)

    @classmethod
    def from_element(
        cls,
        document: etree._Element,
        namespaces: NamespaceRegistry | None = None,
    ) -> "XmpTag":
        """Build a tag from an already parsed ``x:xmpmeta`` element."""
        tag = cls.__new__(cls)
        tag._init_tree(parse_rdf(find_rdf_root(document)), namespaces)
        return tag

    @classmethod
    def from_tree(
        cls,
        root: Node,
        namespaces: NamespaceRegistry | None = None,
    ) -> "XmpTag":
        """Wrap an existing node tree."""
        tag = cls.__new__(cls)
        tag._init_tree(root, namespaces)
        return tag

    def _init_tree(self, root: Node, namespaces: NamespaceRegistry | None) -> None:
        self.node_tree = root
        if namespaces is None:
            namespaces = NamespaceRegistry()
        self.namespaces = namespaces
        self._index: NodeIndex = build_index(root)
        logger.debug(
            "Indexed %d namespace(s) for rdf:about=%r", len(self._index), root.name
        )

    def __repr__(self) -> str:
        count = len(self.node_tree.children)
        return f"<XmpTag about={self.about!r} properties={count}>"

    @property
    def about(self) -> str:
        """The rdf:about value of the top-level description."""
        return self.node_tree.name

    def reindex(self) -> None:
        """Rebuild the lookup index from the current node tree."""
        self._index = build_index(self.node_tree)

    def clear(self) -> None:
        """Not supported for XMP tags.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError("Clearing an XMP tag is not supported")

    def find(self, namespace: str, name: str) -> Node | None:
        """Return the node for a namespace URI and local name, or None."""
        return lookup(self._index, namespace, name)

    def get_text(self, namespace: str, name: str) -> str | None:
        """Return the scalar value of a property, or None."""
        node = self.find(namespace, name)
        return None if node is None else node.value

    def get_list(self, namespace: str, name: str) -> list[str]:
        """Return the item values of an array property.

        Items without a scalar value are skipped.  A missing property
        yields an empty list.
        """
        node = self.find(namespace, name)
        if node is None:
            return []
        return [child.value for child in node.children if child.value is not None]

    def get_lang_alt(
        self, namespace: str, name: str, lang: str = DEFAULT_LANG
    ) -> str | None:
        """Return one alternative of a language alternative property.

        The item qualified with ``xml:lang`` equal to ``lang`` wins, then
        the first item.  A simple property returns its own value.
        """
        node = self.find(namespace, name)
        if node is None:
            return None
        if not node.children:
            return node.value
        for child in node.children:
            qualifier = child.get_qualifier(XML_NS, "lang")
            if qualifier is not None and qualifier.value == lang:
                return child.value
        return node.children[0].value

    @property
    def make(self) -> str | None:
        """Manufacturer of the recording equipment (tiff:Make)."""
        return self.get_text(TIFF_NS, "Make")

    @property
    def model(self) -> str | None:
        """Model name of the recording equipment (tiff:Model)."""
        return self.get_text(TIFF_NS, "Model")

    @property
    def software(self) -> str | None:
        return self.get_text(TIFF_NS, "Software")

    @property
    def keywords(self) -> list[str]:
        """Keywords of the asset (dc:subject), empty if none."""
        return self.get_list(DC_NS, "subject")

    @property
    def creators(self) -> list[str]:
        return self.get_list(DC_NS, "creator")

    @property
    def title(self) -> str | None:
        return self.get_lang_alt(DC_NS, "title")

    @property
    def comment(self) -> str | None:
        return self.get_lang_alt(DC_NS, "description")

    @property
    def rights(self) -> str | None:
        return self.get_lang_alt(DC_NS, "rights")

    @property
    def rating(self) -> str | None:
        """Rating as written (xmp:Rating), not converted to a number."""
        return self.get_text(XAP_NS, "Rating")

    def render(self, pretty_print: bool = False) -> str:
        """Serialize the node tree as an ``x:xmpmeta`` document."""
        return render_tree(self.node_tree, self.namespaces, pretty_print)

    def to_packet(self) -> bytes:
        """Serialize the node tree wrapped in an xpacket header/trailer."""
        return wrap_packet(self.render(pretty_print=True))
