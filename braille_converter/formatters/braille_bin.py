"""Binary braille stream formatter.

WHY: This is the primary output of the converter: the byte stream sent
to a braille display or embosser, laid out in 30-cell lines with
syllable-aware hyphenation.

HOW: Delegates entirely to core.layout.format_lines().

RULES:
- Output suffix: OUTPUT_SUFFIX ("_braille.bin" by default)
- Media type: "application/octet-stream"
- Content length is always a multiple of 31
"""

from __future__ import annotations

from typing import List, Sequence

from braille_converter.config import OUTPUT_SUFFIX
from braille_converter.core.ir import BrailleCell
from braille_converter.core.layout import format_lines
from braille_converter.formatters.base import BaseFormatter, FormatterOutput


class BrailleBinFormatter(BaseFormatter):
    """Formatter that produces the fixed-width binary braille stream."""

    @property
    def name(self) -> str:
        return "Braille binary"

    def format(self, cells: Sequence[BrailleCell]) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=OUTPUT_SUFFIX,
                content=format_lines(cells),
                media_type="application/octet-stream",
            )
        ]
