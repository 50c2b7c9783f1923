"""EPUB document extraction.

WHY: The braille core only understands plain text; EPUB is the format
books arrive in. This package is the only place that knows about zip
archives, OPF package documents and XHTML.

HOW: reader.py implements container lookup, spine resolution and
paragraph extraction; extract_text() is the entry point.
"""

from braille_converter.epub.reader import extract_text

__all__ = ["extract_text"]
