# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the xmptree test suite."""

from pathlib import Path

import pytest
from lxml import etree

NS_DECLS = (
    'xmlns:x="adobe:ns:meta/" '
    'xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" '
    'xmlns:dc="http://purl.org/dc/elements/1.1/" '
    'xmlns:tiff="http://ns.adobe.com/tiff/1.0/" '
    'xmlns:exif="http://ns.adobe.com/exif/1.0/" '
    'xmlns:xmp="http://ns.adobe.com/xap/1.0/" '
    'xmlns:ex="http://example.com/ns/"'
)

EX_NS = "http://example.com/ns/"


def make_xmp(body: str, about: str | None = "") -> str:
    """Wrap property elements in x:xmpmeta/rdf:RDF/rdf:Description."""
    about_attr = "" if about is None else f' rdf:about="{about}"'
    return (
        f"<x:xmpmeta {NS_DECLS}><rdf:RDF>"
        f"<rdf:Description{about_attr}>{body}</rdf:Description>"
        f"</rdf:RDF></x:xmpmeta>"
    )


def make_rdf(descriptions: str) -> str:
    """Wrap raw top-level content in x:xmpmeta/rdf:RDF."""
    return f"<x:xmpmeta {NS_DECLS}><rdf:RDF>{descriptions}</rdf:RDF></x:xmpmeta>"


def element(xml: str) -> etree._Element:
    """Parse a single element snippet that uses the test prefixes."""
    wrapper = etree.fromstring(f"<wrapper {NS_DECLS}>{xml}</wrapper>")
    return wrapper[0]


SAMPLE_XMP = f"""<?xpacket begin="\ufeff" id="W5M0MpCehiHzreSzNTczkc9d"?>
<x:xmpmeta {NS_DECLS}>
  <rdf:RDF>
    <rdf:Description rdf:about="uuid:faf5bdd5-ba3d-11da-ad31-d33d75182f1b"
        tiff:Make="Canon" tiff:Model="Canon EOS 5D">
      <dc:creator>
        <rdf:Seq>
          <rdf:li>Jane Doe</rdf:li>
          <rdf:li>John Roe</rdf:li>
        </rdf:Seq>
      </dc:creator>
      <dc:title>
        <rdf:Alt>
          <rdf:li xml:lang="x-default">Sunset</rdf:li>
          <rdf:li xml:lang="de-DE">Sonnenuntergang</rdf:li>
        </rdf:Alt>
      </dc:title>
      <dc:subject>
        <rdf:Bag>
          <rdf:li>beach</rdf:li>
          <rdf:li>sea</rdf:li>
        </rdf:Bag>
      </dc:subject>
    </rdf:Description>
    <rdf:Description rdf:about="uuid:faf5bdd5-ba3d-11da-ad31-d33d75182f1b">
      <!-- exposure settings -->
      <exif:Flash rdf:parseType="Resource">
        <exif:Fired>False</exif:Fired>
        <exif:Mode>2</exif:Mode>
      </exif:Flash>
      <xmp:Rating>4</xmp:Rating>
      <ex:Lens rdf:value="35" ex:unit="mm"/>
    </rdf:Description>
  </rdf:RDF>
</x:xmpmeta>
<?xpacket end="w"?>"""


@pytest.fixture
def sample_xmp() -> str:
    """Realistic XMP packet with arrays, structs and attribute properties.

    Returns:
        XMP packet as text.
    """
    return SAMPLE_XMP


@pytest.fixture
def sample_xmp_file(tmp_path: Path) -> Path:
    """Sample XMP packet on disk.

    Args:
        tmp_path: Pytest-provided temporary directory.

    Returns:
        Path to the sidecar file.
    """
    path = tmp_path / "sample.xmp"
    path.write_text(SAMPLE_XMP, encoding="utf-8")
    return path
