# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Utility functions for xmptree."""

import logging
import re
import sys

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Regex matching control characters forbidden in XML 1.0
# (U+0000-U+0008, U+000B-U+000C, U+000E-U+001F)
_XML_ILLEGAL_CTRL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configures logging for xmptree.

    Args:
        verbose: If True, DEBUG level is used.
        quiet: If True, only ERROR and higher are output.
            Takes precedence over verbose.

    Returns:
        Configured logger for xmptree.
    """
    # Determine log level (quiet takes precedence)
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    xmptree_logger = logging.getLogger("xmptree")
    xmptree_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    xmptree_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    xmptree_logger.addHandler(handler)

    logger.debug("Logging configured with level: %s", logging.getLevelName(level))
    return xmptree_logger


def split_clark(tag: str) -> tuple[str, str]:
    """Split a Clark-notation name into interned (namespace, local name).

    Names without a namespace yield an empty namespace.

    Args:
        tag: Name such as ``{http://purl.org/dc/elements/1.1/}creator``.

    Returns:
        Tuple of namespace URI and local name.
    """
    if tag.startswith("{"):
        uri, local = tag[1:].split("}", 1)
        return sys.intern(uri), sys.intern(local)
    return "", sys.intern(tag)


def clark(namespace: str, name: str) -> str:
    """Build a Clark-notation name from a namespace URI and local name."""
    if not namespace:
        return name
    return f"{{{namespace}}}{name}"


def sanitize_xml_text(text: str) -> str:
    """Remove control characters that are illegal in XML 1.0."""
    return _XML_ILLEGAL_CTRL_RE.sub("", text)
