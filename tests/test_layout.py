"""Unit tests for the line formatter.

WHY: The byte stream is consumed by hardware that expects exactly 30
cells plus 0xFF per line. Framing errors shift every following line,
and a bad break strands a prefix or divides a word where the reader
cannot follow it.

HOW: Hand-built inputs put a word at a known column so the expected
lines can be written out cell by cell. A second group checks the
stream-wide properties (framing, prefix atomicity, determinism) over a
mixed Spanish corpus.

RULES:
- Line contents are written as literal byte lists, padded with zeros.
- Division mark is 36, capital indicator 40, numeric indicator 60.
- "x" (45) has no vowel, so a run of x's is a single unbreakable word.
"""

import pytest

from braille_converter.core import encode_and_format
from braille_converter.core.encoder import encode
from braille_converter.core.ir import BrailleCell
from braille_converter.core.layout import (
    DIVISION_MARK_VALUE,
    LINE_TERMINATOR,
    LINE_WIDTH,
    RECORD_SIZE,
    LineLayout,
    format_lines,
    split_lines,
)

X = 45
MARK = 36
CAPITAL = 40
NUMERIC = 60


def _line(*values):
    """One framed line: the data values, zero padding, then 0xFF."""
    data = list(values)
    assert len(data) <= LINE_WIDTH
    return bytes(data + [0] * (LINE_WIDTH - len(data)) + [LINE_TERMINATOR])


CORPUS = (
    "En un lugar de la Mancha, de cuyo nombre no quiero acordarme, no ha "
    "mucho tiempo que vivía un hidalgo de los de lanza en astillero.\n"
    "El 12 de mayo de 1605 se publicó la PRIMERA parte; costaba 290,5 "
    "maravedíes. ¿Quién lo diría? ¡Extraordinariamente desafortunadamente!\n"
    "Otorrinolaringólogo, electroencefalografista, MacDonald y McDONALD. "
    "xxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx 1234567890123456789012345678901234"
)


class TestConstants:
    def test_values(self):
        assert LINE_WIDTH == 30
        assert LINE_TERMINATOR == 0xFF
        assert RECORD_SIZE == 31
        assert DIVISION_MARK_VALUE == MARK


class TestFraming:
    def test_empty_input_gives_empty_stream(self):
        assert format_lines([]) == b""
        assert encode_and_format("") == b""

    def test_short_text_is_one_padded_line(self):
        assert encode_and_format("sol") == _line(14, 21, 7)

    def test_exact_line_needs_no_extra_record(self):
        stream = encode_and_format("x" * LINE_WIDTH)
        assert stream == _line(*[X] * LINE_WIDTH)

    def test_blank_cells_are_kept(self):
        assert encode_and_format("a b") == _line(1, 0, 3)

    def test_blank_after_full_line_starts_the_next_line(self):
        stream = encode_and_format("x" * LINE_WIDTH + " a")
        assert stream == _line(*[X] * LINE_WIDTH) + _line(0, 1)

    def test_newline_is_a_blank_cell_not_a_line_break(self):
        assert encode_and_format("a\nb") == _line(1, 0, 3)


class TestWordPlacement:
    """Words fit, break at a syllable, move to a new line, or get cut."""

    def test_word_breaks_at_last_syllable_that_fits(self):
        # 27 cells used; "or" + division mark fill the line exactly
        stream = encode_and_format("x" * 26 + " ordenador")
        assert split_lines(stream) == [
            bytes([X] * 26 + [0, 21, 23, MARK]),
            bytes([25, 17, 29, 1, 25, 21, 23] + [0] * 23),
        ]

    def test_break_uses_latest_syllable(self):
        # 35 cells; the last legal break before column 30 is "...ca-sa"
        word = "ordenador" * 3 + "casa" * 2
        lines = split_lines(encode_and_format(word))
        assert len(lines) == 2
        assert lines[0][LINE_WIDTH - 1] == MARK
        assert lines[1] == bytes([14, 1, 9, 1, 14, 1] + [0] * 24)

    def test_word_can_break_more_than_once(self):
        # ca-sa-ca-sa...: every line takes 28 cells plus the mark
        lines = split_lines(encode_and_format("casa" * 20))
        assert lines == [
            bytes([9, 1, 14, 1] * 7 + [MARK, 0]),
            bytes([9, 1, 14, 1] * 7 + [MARK, 0]),
            bytes([9, 1, 14, 1] * 6 + [0] * 6),
        ]

    def test_word_moves_when_no_break_fits(self):
        # 29 cells used; "casa" cannot leave room for a mark after "ca"
        stream = encode_and_format("x" * 28 + " casa")
        assert stream == _line(*([X] * 28 + [0])) + _line(9, 1, 14, 1)

    def test_moved_word_has_no_division_mark(self):
        stream = encode_and_format("x" * 28 + " casa")
        assert MARK not in stream

    def test_long_unbreakable_word_is_cut_without_mark(self):
        stream = encode_and_format("x" * 40)
        assert stream == _line(*[X] * 30) + _line(*[X] * 10)
        assert MARK not in stream

    def test_long_word_after_text_starts_on_a_new_line(self):
        stream = encode_and_format("a " + "x" * 35)
        assert split_lines(stream) == [
            bytes([1, 0] + [0] * 28),
            bytes([X] * 30),
            bytes([X] * 5 + [0] * 25),
        ]

    def test_mark_never_exceeds_line_width(self):
        for used in range(20, 30):
            stream = encode_and_format("x" * used + " desafortunadamente")
            assert len(stream) % RECORD_SIZE == 0
            for data in split_lines(stream):
                assert len(data) == LINE_WIDTH


class TestPrefixAtomicity:
    def test_capital_stays_with_its_letter(self):
        # "caMa" has a syllable start on the prefix; the break is refused
        stream = encode_and_format("x" * 26 + " caMa")
        assert stream == _line(*([X] * 26 + [0])) + _line(9, 1, CAPITAL, 13, 1)

    def test_numeric_pair_moves_together(self):
        stream = encode_and_format("x" * 29 + "1")
        assert stream == _line(*[X] * 29) + _line(NUMERIC, 1)

    def test_all_caps_word_moves_with_its_prefix(self):
        stream = encode_and_format("x" * 28 + " SOL")
        assert stream == _line(*([X] * 28 + [0])) + _line(CAPITAL, 14, 21, 7)

    def test_trailing_prefix_alone(self):
        cells = [BrailleCell(value=NUMERIC, is_prefix=True)]
        assert format_lines(cells) == _line(NUMERIC)

    def test_force_split_never_ends_a_chunk_on_a_prefix(self):
        # Mixed-case 31-letter word with a capital at position 29
        word = "x" * 29 + "Xx"
        stream = encode_and_format(word)
        lines = split_lines(stream)
        assert lines[0] == bytes([X] * 29 + [0])
        assert lines[1][:3] == bytes([CAPITAL, X, X])


class TestStreamProperties:
    """Properties that hold for any input text."""

    @pytest.fixture
    def stream(self):
        return encode_and_format(CORPUS)

    def test_length_is_a_multiple_of_the_record_size(self, stream):
        assert len(stream) % RECORD_SIZE == 0

    def test_terminators_only_at_line_ends(self, stream):
        for index, value in enumerate(stream):
            if index % RECORD_SIZE == LINE_WIDTH:
                assert value == LINE_TERMINATOR
            else:
                assert value <= 63

    def test_prefixes_are_followed_by_their_cell_on_the_same_line(self, stream):
        for data in split_lines(stream):
            for index, value in enumerate(data):
                if value in (CAPITAL, NUMERIC):
                    assert index < LINE_WIDTH - 1
                    assert data[index + 1] not in (0, CAPITAL, NUMERIC)

    def test_division_marks_only_at_line_ends(self):
        # The corpus has no hyphens, so every 36 is a division mark
        for data in split_lines(encode_and_format(CORPUS)):
            stripped = data.rstrip(b"\x00")
            if MARK in stripped:
                assert stripped.index(MARK) == len(stripped) - 1

    def test_deterministic(self):
        assert encode_and_format(CORPUS) == encode_and_format(CORPUS)

    def test_cells_are_not_lost(self):
        cells = encode(CORPUS)
        stream = encode_and_format(CORPUS)
        non_blank = sum(1 for cell in cells if cell.value != 0)
        marks = sum(data.count(MARK) for data in split_lines(stream))
        written = sum(1 for value in stream if value not in (0, LINE_TERMINATOR))
        assert written == non_blank + marks


class TestLineLayout:
    def test_flush_pads_and_terminates(self):
        layout = LineLayout()
        layout.append(1)
        layout.flush()
        assert layout.is_empty
        assert layout.finish() == _line(1)

    def test_remaining_and_full(self):
        layout = LineLayout()
        assert layout.remaining == LINE_WIDTH
        for _ in range(LINE_WIDTH):
            layout.append(X)
        assert layout.is_full
        assert layout.remaining == 0

    def test_finish_without_content(self):
        assert LineLayout().finish() == b""


class TestSplitLines:
    def test_drops_terminators(self):
        stream = _line(1, 2) + _line(3)
        assert split_lines(stream) == [
            bytes([1, 2] + [0] * 28),
            bytes([3] + [0] * 29),
        ]

    def test_ignores_trailing_partial_record(self):
        assert split_lines(_line(1) + b"\x01\x02") == [bytes([1] + [0] * 29)]

    def test_empty(self):
        assert split_lines(b"") == []
