"""Greedy line packing of annotated braille cells into fixed-width lines.

WHY: Braille displays and embossers consume the output line by line, 30
cells per line. A naive cut every 30 cells would separate capital and
numeric indicators from the letters they modify and split words at
arbitrary points. The formatter packs whole words greedily and breaks a
word only at a syllable boundary, marking the break with the braille
division mark.

HOW: format_lines() walks the cells and groups them into units: blank
cells, word runs (consecutive cells carrying a syllable index), numeric
indicator + digit pairs, and single punctuation/digit cells. Words go
through _place_word(), which loops until the remaining part of the word
is placed:
  1. The rest of the word fits the line: append it.
  2. A syllable break fits (leaving one cell for the division mark):
     append the head plus the mark, start a new line, continue with the
     tail.
  3. No break fits: move the word to a fresh line.
  4. The word is longer than a whole line: cut it into line-sized
     chunks with no division mark.
LineLayout owns the current line and the finished byte stream.

RULES:
- Every line is LINE_WIDTH data bytes (blank-padded) plus 0xFF
- A prefix cell never ends a line apart from its base cell
- Breaks never fall before a prefix or directly after one
- The last partial line is padded and terminated like any other
- Never raises for any cell sequence produced by encode()
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from braille_converter.core.charmap import DIVISION_MARK, dots_to_byte
from braille_converter.core.ir import BLANK, BrailleCell

LINE_WIDTH = 30
LINE_TERMINATOR = 0xFF
RECORD_SIZE = LINE_WIDTH + 1
DIVISION_MARK_VALUE = dots_to_byte(DIVISION_MARK)


class LineLayout:
    """The line being filled plus every line already finished."""

    def __init__(self) -> None:
        self._line: List[int] = []
        self._out = bytearray()

    @property
    def remaining(self) -> int:
        return LINE_WIDTH - len(self._line)

    @property
    def is_empty(self) -> bool:
        return not self._line

    @property
    def is_full(self) -> bool:
        return len(self._line) >= LINE_WIDTH

    def append(self, value: int) -> None:
        self._line.append(value)

    def extend(self, cells: Iterable[BrailleCell]) -> None:
        self._line.extend(cell.value for cell in cells)

    def flush(self) -> None:
        """Pad the current line with blanks, terminate it and start a new one."""
        self._line.extend([BLANK] * (LINE_WIDTH - len(self._line)))
        self._out.extend(self._line)
        self._out.append(LINE_TERMINATOR)
        self._line = []

    def finish(self) -> bytes:
        if self._line:
            self.flush()
        return bytes(self._out)


def _last_break(run: Sequence[BrailleCell], limit: int) -> Optional[int]:
    """Latest syllable break k with k <= limit, or None.

    k is legal when run[k] starts a syllable and neither run[k] nor
    run[k - 1] is a prefix.
    """
    for k in range(min(limit, len(run) - 1), 0, -1):
        cell = run[k]
        if cell.is_syllable_start and not cell.is_prefix and not run[k - 1].is_prefix:
            return k
    return None


def _force_split(run: Sequence[BrailleCell], layout: LineLayout) -> None:
    """Cut an over-long word into line-sized chunks, no division mark."""
    start = 0
    while start < len(run):
        end = min(start + LINE_WIDTH, len(run))
        if end < len(run) and run[end - 1].is_prefix:
            end -= 1
        layout.extend(run[start:end])
        start = end
        if start < len(run):
            layout.flush()


def _place_word(run: Sequence[BrailleCell], layout: LineLayout) -> None:
    while True:
        if len(run) <= layout.remaining:
            layout.extend(run)
            return

        # One cell is reserved for the division mark.
        k = _last_break(run, layout.remaining - 1)
        if k is not None:
            layout.extend(run[:k])
            layout.append(DIVISION_MARK_VALUE)
            layout.flush()
            run = run[k:]
            continue

        if not layout.is_empty:
            layout.flush()
        if len(run) <= LINE_WIDTH:
            layout.extend(run)
        else:
            _force_split(run, layout)
        return


def format_lines(cells: Sequence[BrailleCell]) -> bytes:
    """Pack annotated cells into the fixed-width, 0xFF-terminated stream.

    Args:
        cells: Cells as produced by encode().

    Returns:
        Bytes whose length is a multiple of RECORD_SIZE (empty for no cells).
    """
    layout = LineLayout()
    n = len(cells)
    i = 0

    while i < n:
        cell = cells[i]

        if cell.is_blank:
            if layout.is_full:
                layout.flush()
            layout.append(BLANK)
            i += 1
            continue

        if cell.in_word:
            end = i
            while end < n and cells[end].in_word:
                end += 1
            _place_word(cells[i:end], layout)
            i = end
            continue

        if cell.is_prefix:
            unit = cells[i:i + 2]
            if len(unit) > layout.remaining:
                layout.flush()
            layout.extend(unit)
            i += len(unit)
            continue

        if layout.is_full:
            layout.flush()
        layout.append(cell.value)
        i += 1

    return layout.finish()


def split_lines(stream: bytes) -> List[bytes]:
    """Return the data bytes of each line in a formatted stream.

    Terminators are dropped; a trailing incomplete record is ignored.
    """
    return [
        stream[start:start + LINE_WIDTH]
        for start in range(0, len(stream) - RECORD_SIZE + 1, RECORD_SIZE)
    ]
