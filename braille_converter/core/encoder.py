"""Text to annotated braille cells (Spanish Grade 1).

WHY: The line formatter cannot work on raw bytes: it has to know which
cells are prefixes and where syllables start. The encoder is the single
place that turns text into cells and attaches that knowledge.

HOW: One left-to-right scan over the text. Whitespace, digits,
punctuation and letters are handled by separate branches. A whole
alphabetic word is processed at once when its first letter is seen: the
syllabifier runs over the complete word, and each letter is tagged with
its syllable index before cells are emitted.

RULES:
- Space, \\n and \\r produce one blank cell and end numeric mode
- The numeric indicator is emitted before the first digit of a run
- A literal "." ends numeric mode, so "123.45" carries two indicators
- An all-uppercase word gets one capital indicator before the word;
  otherwise every uppercase letter gets its own indicator
- Letters, digits and punctuation outside the tables are dropped
- encode() is pure: no state survives between calls
"""

from __future__ import annotations

from typing import List, Tuple

from braille_converter.core.charmap import (
    CAPITAL_PREFIX,
    NUMERIC_PREFIX,
    digit_dots,
    dots_to_byte,
    letter_dots,
    punctuation_dots,
)
from braille_converter.core.ir import BLANK, BrailleCell
from braille_converter.core.syllables import syllable_boundaries

_CAPITAL = dots_to_byte(CAPITAL_PREFIX)
_NUMERIC = dots_to_byte(NUMERIC_PREFIX)

_BREAKING_WHITESPACE = frozenset(" \n\r")


def is_all_caps(word: str) -> bool:
    """True if the word has letters and every one of them is uppercase."""
    letters = [c for c in word if c.isalpha()]
    return bool(letters) and all(c.isupper() for c in letters)


def _syllable_map(word: str) -> Tuple[List[int], List[bool]]:
    """Per-letter (syllable index, syllable start) lists for ``word``."""
    starts = set(syllable_boundaries(word))
    indices: List[int] = []
    flags: List[bool] = []
    current = 0
    for k in range(len(word)):
        is_start = k > 0 and k in starts
        if is_start:
            current += 1
        indices.append(current)
        flags.append(is_start)
    return indices, flags


def _encode_word(word: str, out: List[BrailleCell]) -> None:
    """Append the cells for one alphabetic word to ``out``."""
    indices, flags = _syllable_map(word)

    if is_all_caps(word):
        if not any(letter_dots(letter) is not None for letter in word):
            return
        out.append(BrailleCell(
            value=_CAPITAL,
            is_prefix=True,
            syllable_index=indices[0],
            is_word_start=True,
        ))
        for k, letter in enumerate(word):
            dots = letter_dots(letter)
            if dots is None:
                continue
            out.append(BrailleCell(
                value=dots_to_byte(dots),
                syllable_index=indices[k],
                is_syllable_start=flags[k],
                is_word_start=k == 0,
            ))
        return

    for k, letter in enumerate(word):
        dots = letter_dots(letter)
        if dots is None:
            continue
        if letter.isupper():
            # The prefix takes the break point; the letter stays attached.
            out.append(BrailleCell(
                value=_CAPITAL,
                is_prefix=True,
                syllable_index=indices[k],
                is_syllable_start=flags[k],
                is_word_start=k == 0,
            ))
            out.append(BrailleCell(
                value=dots_to_byte(dots),
                syllable_index=indices[k],
            ))
        else:
            out.append(BrailleCell(
                value=dots_to_byte(dots),
                syllable_index=indices[k],
                is_syllable_start=flags[k],
                is_word_start=k == 0,
            ))


def encode(text: str) -> List[BrailleCell]:
    """Encode text into annotated braille cells.

    Args:
        text: Any Unicode string. Unsupported characters are skipped.

    Returns:
        Cells in reading order, ready for format_lines().
    """
    cells: List[BrailleCell] = []
    numeric_mode = False
    n = len(text)
    i = 0

    while i < n:
        char = text[i]

        if char in _BREAKING_WHITESPACE:
            cells.append(BrailleCell(value=BLANK))
            numeric_mode = False
            i += 1
            continue

        dots = digit_dots(char)
        if dots is not None:
            if not numeric_mode:
                cells.append(BrailleCell(value=_NUMERIC, is_prefix=True))
                numeric_mode = True
            cells.append(BrailleCell(value=dots_to_byte(dots)))
            i += 1
            continue

        if char.isalpha():
            numeric_mode = False
            end = i
            while end < n and text[end].isalpha():
                end += 1
            _encode_word(text[i:end], cells)
            i = end
            continue

        dots = punctuation_dots(char)
        if dots is not None:
            if char == ".":
                numeric_mode = False
            cells.append(BrailleCell(value=dots_to_byte(dots)))
            i += 1
            continue

        i += 1

    return cells
