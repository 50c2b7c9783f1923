"""Shared test fixtures for the braille_converter test suite.

WHY: The EPUB reader, the commands, the CLI and the HTTP API all need
real EPUB archives to work on. Building them in code keeps the fixtures
small, readable and free of binary test data in the repository.

HOW: write_epub() writes a minimal but valid EPUB (container.xml, an OPF
package document and XHTML chapters) with zipfile. Fixtures wrap it for
the common cases; tests that need an unusual or broken archive take
the build_epub fixture and call it with the pieces they need.

RULES:
- All archives are written under tmp_path.
- The sample book has two chapters whose spine order differs from their
  manifest order, plus a non-XHTML manifest item.
- The sample_text fixture is exactly what extract_text() returns for the
  sample book.
"""

import zipfile
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:uuid:0000</dc:identifier>
    <dc:title>Libro de prueba</dc:title>
    <dc:language>es</dc:language>
  </metadata>
  <manifest>
{items}
  </manifest>
  <spine>
{itemrefs}
  </spine>
</package>
"""

XHTML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Capítulo</title></head>
<body>
<h1>Título que no es párrafo</h1>
{body}
</body>
</html>
"""

# (id, href, media-type)
ManifestItem = Tuple[str, str, str]

XHTML = "application/xhtml+xml"


def xhtml_document(*paragraphs: str) -> str:
    """An XHTML document with one <p> per argument (markup allowed)."""
    body = "\n".join("<p>{}</p>".format(p) for p in paragraphs)
    return XHTML_TEMPLATE.format(body=body)


def write_epub(
    path: Path,
    documents: Dict[str, str],
    manifest: List[ManifestItem],
    spine: List[str],
    opf_path: str = "OEBPS/content.opf",
    include_container: bool = True,
    include_opf: bool = True,
    opf_text: Optional[str] = None,
) -> Path:
    """Write an EPUB archive to ``path``.

    Args:
        documents: Archive entry name -> file content.
        manifest: Manifest items, written in the given order.
        spine: idrefs in reading order.
        opf_text: Raw OPF content, overriding the generated one.
    """
    items = "\n".join(
        '    <item id="{}" href="{}" media-type="{}"/>'.format(item_id, href, media_type)
        for item_id, href, media_type in manifest
    )
    itemrefs = "\n".join('    <itemref idref="{}"/>'.format(idref) for idref in spine)

    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("mimetype", "application/epub+zip")
        if include_container:
            archive.writestr("META-INF/container.xml", CONTAINER_XML.format(opf_path=opf_path))
        if include_opf:
            content = opf_text if opf_text is not None else OPF_TEMPLATE.format(
                items=items, itemrefs=itemrefs,
            )
            archive.writestr(opf_path, content)
        for name, content in documents.items():
            archive.writestr(name, content)
    return path


SAMPLE_TEXT = "Hola mundo.\nEl 12 de mayo.\n\nCapítulo dos.\n\n"


@pytest.fixture
def sample_epub(tmp_path):
    """Two-chapter book; chapter one is listed second in the manifest."""
    return write_epub(
        tmp_path / "libro.epub",
        documents={
            "OEBPS/text/cap2.xhtml": xhtml_document("Capítulo dos."),
            "OEBPS/text/cap1.xhtml": xhtml_document("Hola <em>mundo</em>.", "El 12 de mayo."),
            "OEBPS/style.css": "p { margin: 0; }",
        },
        manifest=[
            ("cap2", "text/cap2.xhtml", XHTML),
            ("css", "style.css", "text/css"),
            ("cap1", "text/cap1.xhtml", XHTML),
        ],
        spine=["cap1", "cap2"],
    )


@pytest.fixture
def sample_epub_bytes(sample_epub):
    return sample_epub.read_bytes()


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT


@pytest.fixture
def build_epub():
    """The archive writer, for tests that need a custom or broken EPUB."""
    return write_epub


@pytest.fixture
def xhtml():
    """Builder for an XHTML chapter with one <p> per argument."""
    return xhtml_document
