"""EPUB plain-text extraction: container, package document, spine, paragraphs.

WHY: Books arrive as EPUB packages, but the braille core consumes plain
text. This module finds the book's reading order and pulls the paragraph
text out of every content document, in order, so the core never needs to
know about archives or markup.

HOW: An EPUB is a zip archive.
  1. META-INF/container.xml names the package document (the OPF) through
     the full-path attribute of its rootfile element.
  2. The OPF manifest maps item ids to hrefs (relative to the OPF); the
     spine lists item ids in reading order.
  3. Each XHTML document in the spine is scanned for <p> elements; their
     text is joined with newlines, and documents are separated by a
     blank line.
Container and OPF are parsed with xml.etree.ElementTree (namespace
agnostic). Content documents go through a lenient html.parser subclass
so that HTML entities and sloppy markup do not abort a whole book.

RULES:
- Only manifest items whose media-type starts with "application/xhtml"
  are readable spine entries; unknown idrefs are skipped
- hrefs lose any "#fragment" and are URL-unquoted before lookup
- Spine documents missing from the archive are skipped (logged)
- Every document contributes its paragraphs plus "\\n\\n"
- EpubOpenError: not readable / not a zip; EpubFormatError: container,
  OPF or XML problems
"""

from __future__ import annotations

import logging
import posixpath
import xml.etree.ElementTree as ET
import zipfile
from html.parser import HTMLParser
from pathlib import Path
from typing import BinaryIO, Dict, List, Union
from urllib.parse import unquote

from braille_converter.errors import EpubFormatError, EpubOpenError

logger = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"
XHTML_MEDIA_TYPE_PREFIX = "application/xhtml"
DOCUMENT_SEPARATOR = "\n\n"

EpubSource = Union[str, Path, BinaryIO]


def strip_namespace(tag: str) -> str:
    """Local name of an ElementTree tag ("{ns}rootfile" -> "rootfile")."""
    return tag.rsplit("}", 1)[-1]


def _parse_xml(archive: zipfile.ZipFile, name: str) -> ET.Element:
    try:
        data = archive.read(name)
    except KeyError:
        raise EpubFormatError("Missing '{}' in EPUB archive".format(name))
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        raise EpubFormatError("Could not parse '{}': {}".format(name, exc))


def open_epub(source: EpubSource) -> zipfile.ZipFile:
    """Open an EPUB archive from a path or a binary file object.

    Raises:
        EpubOpenError: If the source cannot be read or is not a zip archive.
    """
    try:
        return zipfile.ZipFile(source)
    except zipfile.BadZipFile as exc:
        raise EpubOpenError("Not a valid EPUB: {}".format(exc))
    except OSError as exc:
        raise EpubOpenError("Could not open: {}".format(exc))


def read_package_path(archive: zipfile.ZipFile) -> str:
    """Return the archive path of the package document (OPF).

    Raises:
        EpubFormatError: If container.xml is missing or names no rootfile.
    """
    root = _parse_xml(archive, CONTAINER_PATH)
    for element in root.iter():
        if strip_namespace(element.tag) == "rootfile":
            full_path = element.attrib.get("full-path", "").strip()
            if full_path:
                return full_path
    raise EpubFormatError("No full-path found in {}".format(CONTAINER_PATH))


def resolve_href(base_dir: str, href: str) -> str:
    """Turn a manifest href into an archive entry name.

    RULES:
    - The "#fragment" suffix is removed and %-escapes are decoded
    - A leading "/" means archive root; otherwise href is relative to
      the package document's directory
    - "." and ".." segments are normalized away
    """
    path = unquote(href.split("#", 1)[0])
    if path.startswith("/"):
        path = path.lstrip("/")
    elif base_dir:
        path = posixpath.join(base_dir, path)
    return posixpath.normpath(path)


def read_spine(archive: zipfile.ZipFile, opf_path: str) -> List[str]:
    """Return the archive entry names of the spine documents, in reading order.

    Raises:
        EpubFormatError: If the package document is missing or unparsable.
    """
    root = _parse_xml(archive, opf_path)
    base_dir = posixpath.dirname(opf_path)

    manifest: Dict[str, str] = {}
    for element in root.iter():
        if strip_namespace(element.tag) != "item":
            continue
        media_type = element.attrib.get("media-type", "")
        item_id = element.attrib.get("id", "")
        href = element.attrib.get("href", "")
        if media_type.startswith(XHTML_MEDIA_TYPE_PREFIX) and item_id and href:
            manifest[item_id] = href

    paths: List[str] = []
    for element in root.iter():
        if strip_namespace(element.tag) != "itemref":
            continue
        idref = element.attrib.get("idref", "")
        href = manifest.get(idref)
        if href is None:
            logger.debug("Spine itemref '%s' has no XHTML manifest item", idref)
            continue
        paths.append(resolve_href(base_dir, href))
    return paths


def _is_paragraph(tag: str) -> bool:
    # html.parser lowercases names but keeps prefixes such as "xhtml:p"
    return tag.rsplit(":", 1)[-1] == "p"


class _ParagraphCollector(HTMLParser):
    """Collect the text content of every <p> element, in document order."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.paragraphs: List[str] = []
        self._depth = 0
        self._parts: List[str] = []

    def handle_starttag(self, tag, attrs):
        if _is_paragraph(tag):
            self._depth += 1

    def handle_endtag(self, tag):
        if not _is_paragraph(tag) or self._depth == 0:
            return
        self._depth -= 1
        if self._depth == 0:
            self.paragraphs.append("".join(self._parts))
            self._parts = []

    def handle_data(self, data):
        if self._depth:
            self._parts.append(data)

    def close(self):
        super().close()
        # Unterminated paragraph at end of document
        if self._depth:
            self.paragraphs.append("".join(self._parts))
            self._parts = []
            self._depth = 0


def extract_paragraphs(markup: str) -> str:
    """Return the text of every <p> element in ``markup``, one per line."""
    collector = _ParagraphCollector()
    collector.feed(markup)
    collector.close()
    return "\n".join(collector.paragraphs)


def extract_text(source: EpubSource) -> str:
    """Extract the plain text of an EPUB in reading order.

    Args:
        source: Path to the .epub file, or a binary file object.

    Returns:
        Paragraph text of every spine document, each document followed
        by a blank-line separator.

    Raises:
        EpubOpenError: If the source cannot be opened as a zip archive.
        EpubFormatError: If the container or package document is invalid.
    """
    with open_epub(source) as archive:
        opf_path = read_package_path(archive)
        spine = read_spine(archive, opf_path)
        names = set(archive.namelist())

        chunks: List[str] = []
        for path in spine:
            if path not in names:
                logger.debug("Spine document '%s' not found in archive", path)
                continue
            markup = archive.read(path).decode("utf-8", errors="replace")
            chunks.append(extract_paragraphs(markup) + DOCUMENT_SEPARATOR)

    logger.info("Extracted %d of %d spine documents", len(chunks), len(spine))
    return "".join(chunks)
