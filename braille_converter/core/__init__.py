"""Core braille transcription: character tables, syllables, encoding, layout.

WHY: The core package is the engineering heart of the converter. It turns
Spanish text into the fixed-width braille byte stream and knows nothing
about EPUB files, disks or HTTP.

HOW: charmap.py holds the dot tables, syllables.py the Spanish
syllabifier, encoder.py turns text into annotated BrailleCell objects
(ir.py), and layout.py packs those cells into 30-cell lines.
encode_and_format() chains the two stages.

RULES:
- No I/O and no logging in this package
- Every function is total: unsupported input is dropped, never raised on
- Same text in, same bytes out
"""

from __future__ import annotations

from braille_converter.core.encoder import encode
from braille_converter.core.ir import BrailleCell
from braille_converter.core.layout import (
    LINE_TERMINATOR,
    LINE_WIDTH,
    RECORD_SIZE,
    format_lines,
    split_lines,
)
from braille_converter.core.syllables import syllable_boundaries

__all__ = [
    "BrailleCell",
    "LINE_TERMINATOR",
    "LINE_WIDTH",
    "RECORD_SIZE",
    "encode",
    "encode_and_format",
    "format_lines",
    "split_lines",
    "syllable_boundaries",
]


def encode_and_format(text: str) -> bytes:
    """Full pipeline: text -> annotated cells -> line-delimited byte stream."""
    return format_lines(encode(text))
