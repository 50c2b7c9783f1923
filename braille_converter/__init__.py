"""Braille converter: Spanish text and EPUB books to Grade 1 braille.

WHY: Braille readers need books transcribed into the fixed-width cell
streams that displays and embossers consume, with words divided only at
legal Spanish syllable boundaries. This package performs that
transcription end to end.

HOW: Four-stage pipeline: extract (EPUB reader), encode (text to
annotated cells), lay out (30-cell lines with syllable hyphenation),
format (pluggable output formatters). Each stage is independently
testable; only the outer stages touch files.

RULES:
- The core (braille_converter.core) is pure and never raises
- All formatters consume the same annotated cell sequence
- Adding a new output format = one new formatter module, no core changes
"""

from braille_converter.core import encode_and_format

__version__ = "0.1.0"

__all__ = ["encode_and_format", "__version__"]
