"""Unicode braille text preview of the binary stream.

WHY: The binary stream is unreadable in a text editor. Sighted
transcribers proofreading a conversion need to see the same lines the
embosser will produce. Unicode has a braille block (U+2800–U+28FF)
whose low six bits are exactly our dot pattern, so each cell maps to
one character.

HOW: Format the cells with core.layout.format_lines(), split the stream
into its 30-byte lines, and render every data byte as chr(0x2800 + value).

RULES:
- One text line per braille line, terminators dropped
- Padding blanks are kept (U+2800), so every line is 30 characters
- Output suffix: PREVIEW_SUFFIX ("_braille.txt" by default)
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List, Sequence

from braille_converter.config import PREVIEW_SUFFIX
from braille_converter.core.ir import BrailleCell
from braille_converter.core.layout import format_lines, split_lines
from braille_converter.formatters.base import BaseFormatter, FormatterOutput

BRAILLE_RANGE_START = 0x2800


def render_line(data: bytes) -> str:
    return "".join(chr(BRAILLE_RANGE_START + value) for value in data)


def render_stream(stream: bytes) -> str:
    """Render a formatted braille stream as Unicode braille text."""
    lines = [render_line(data) for data in split_lines(stream)]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


class UnicodePreviewFormatter(BaseFormatter):
    """Formatter that produces a Unicode braille proof of the line layout."""

    @property
    def name(self) -> str:
        return "Unicode braille preview"

    def format(self, cells: Sequence[BrailleCell]) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=PREVIEW_SUFFIX,
                content=render_stream(format_lines(cells)),
                media_type="text/plain",
            )
        ]
