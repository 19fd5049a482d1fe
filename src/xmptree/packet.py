# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""XMP packet wrapper handling and hardened XML parsing."""

import logging

from lxml import etree

from .exceptions import MalformedXmpError

logger = logging.getLogger(__name__)

_SECURE_XML_PARSER = etree.XMLParser(
    resolve_entities=False, no_network=True, huge_tree=False
)

# XMP packet header and trailer
XMP_HEADER = b'<?xpacket begin="\xef\xbb\xbf" id="W5M0MpCehiHzreSzNTczkc9d"?>\n'
XMP_TRAILER = b'\n<?xpacket end="w"?>'


def strip_xpacket_wrapper(content: bytes) -> bytes:
    """Strip XMP xpacket processing instructions and return inner content.

    Removes the ``<?xpacket begin=...?>`` header and ``<?xpacket end=...?>``
    trailer if present, returning the stripped and trimmed payload.
    """
    begin_idx = content.find(b"<?xpacket")
    if begin_idx != -1:
        start_idx = content.find(b"?>", begin_idx)
        if start_idx != -1:
            content = content[start_idx + 2 :]
        end_idx = content.rfind(b"<?xpacket")
        if end_idx != -1:
            content = content[:end_idx]
    return content.strip()


def wrap_packet(xml: str | bytes) -> bytes:
    """Wrap a serialized XMP document in an xpacket header and trailer."""
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    return XMP_HEADER + xml.strip() + XMP_TRAILER


def parse_xmp_document(data: str | bytes) -> etree._Element:
    """Parse an XMP payload into an lxml element tree.

    Args:
        data: XMP XML as text or UTF-8 bytes, with or without the xpacket
            wrapper.

    Returns:
        The document element.

    Raises:
        MalformedXmpError: If the payload is empty or not well-formed XML.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    content = strip_xpacket_wrapper(data)
    if not content:
        raise MalformedXmpError("Empty XMP payload")

    try:
        return etree.fromstring(content, _SECURE_XML_PARSER)
    except etree.XMLSyntaxError as e:
        logger.debug("XMP XML parsing error: %s", e)
        raise MalformedXmpError(f"XMP payload is not well-formed XML: {e}") from e
