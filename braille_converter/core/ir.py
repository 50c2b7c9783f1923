"""Intermediate representation for encoded braille text.

WHY: The encoder knows things about each cell that the byte stream
cannot carry: whether it is a prefix that must stay glued to the next
cell, which syllable of which word it belongs to, and where words and
syllables start. The line formatter needs exactly that knowledge to
choose legal line breaks. BrailleCell is the contract between the two.

HOW: One dataclass per emitted cell, produced in reading order by
encode() and consumed by format_lines() and the output formatters.

RULES:
- value is a 6-bit dot pattern in [0, 63]; 0 is the blank cell
- is_prefix marks capital and numeric indicators
- syllable_index is None for every cell outside an alphabetic word
- is_syllable_start is never set on the first cell of a word
- Within one word, syllable_index starts at 0 and never decreases
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

BLANK = 0
"""Cell value of an empty cell (space, newline, line padding)."""


@dataclass(frozen=True)
class BrailleCell:
    """A single braille cell annotated with its layout metadata.

    Attributes:
        value: Dot pattern, bit (dot - 1) set for each raised dot.
        is_prefix: True for capital/numeric indicators, which must never
                   end a line apart from the cell they modify.
        syllable_index: Index of the syllable within its word, or None
                        when the cell is not part of an alphabetic word.
        is_syllable_start: True when a line may be broken before this cell.
        is_word_start: True for the first cell emitted for a word.
    """

    value: int
    is_prefix: bool = False
    syllable_index: Optional[int] = None
    is_syllable_start: bool = False
    is_word_start: bool = False

    @property
    def in_word(self) -> bool:
        return self.syllable_index is not None

    @property
    def is_blank(self) -> bool:
        return self.value == BLANK and not self.is_prefix
