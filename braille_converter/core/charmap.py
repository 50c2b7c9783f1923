"""Character tables: Spanish letters, digits and punctuation to braille dots.

WHY: Every other stage of the converter needs to know which dots a
character raises, whether a letter is a vowel, and which structural
prefix cells exist. Keeping those facts as plain tables makes them easy
to audit against the Spanish braille code (CBE/ONCE) and to change
without touching any algorithm.

HOW: Dot numbers (1..6) are stored as tuples in module-level dicts.
Lookups return None for anything outside the tables. dots_to_byte()
packs a dot tuple into the 6-bit cell value used on the wire.

RULES:
- Lookups never raise; unsupported characters yield None
- Uppercase letters are case-folded before lookup (to_lower)
- Digits reuse the dots of letters a..j (0 uses j)
- Prefix cells (capital, numeric) and the division mark are constants,
  not character mappings
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

Dots = Tuple[int, ...]

# ---------------------------------------------------------------------------
# Letters
# ---------------------------------------------------------------------------

LETTER_DOTS: Dict[str, Dots] = {
    "a": (1,),
    "b": (1, 2),
    "c": (1, 4),
    "d": (1, 4, 5),
    "e": (1, 5),
    "f": (1, 2, 4),
    "g": (1, 2, 4, 5),
    "h": (1, 2, 5),
    "i": (2, 4),
    "j": (2, 4, 5),
    "k": (1, 3),
    "l": (1, 2, 3),
    "m": (1, 3, 4),
    "n": (1, 3, 4, 5),
    "o": (1, 3, 5),
    "p": (1, 2, 3, 4),
    "q": (1, 2, 3, 4, 5),
    "r": (1, 2, 3, 5),
    "s": (2, 3, 4),
    "t": (2, 3, 4, 5),
    "u": (1, 3, 6),
    "v": (1, 2, 3, 6),
    "w": (2, 4, 5, 6),
    "x": (1, 3, 4, 6),
    "y": (1, 3, 4, 5, 6),
    "z": (1, 3, 5, 6),
    "á": (1, 2, 3, 5, 6),
    "é": (2, 3, 4, 6),
    "í": (3, 4),
    "ó": (3, 4, 6),
    "ú": (2, 3, 4, 5, 6),
    "ü": (1, 2, 5, 6),
    "ñ": (1, 2, 4, 5, 6),
}

# Accented capitals fold explicitly; everything else goes through str.lower().
_ACCENTED_LOWER: Dict[str, str] = {
    "Á": "á",
    "É": "é",
    "Í": "í",
    "Ó": "ó",
    "Ú": "ú",
    "Ü": "ü",
    "Ñ": "ñ",
}

# ---------------------------------------------------------------------------
# Digits and punctuation
# ---------------------------------------------------------------------------

DIGIT_DOTS: Dict[str, Dots] = {
    digit: LETTER_DOTS[letter]
    for digit, letter in zip("1234567890", "abcdefghij")
}

PUNCTUATION_DOTS: Dict[str, Dots] = {
    ".": (3,),
    ",": (2,),
    ";": (2, 3),
    ":": (2, 5),
    # Typographic hyphen; the braille division mark shares its dots.
    "-": (3, 6),
    "?": (2, 6),
    "¿": (2, 6),
    "!": (2, 3, 5),
    "¡": (2, 3, 5),
    '"': (2, 3, 6),
    "“": (2, 3, 6),
    "”": (2, 3, 6),
    "(": (1, 2, 6),
    ")": (3, 4, 5),
}

# ---------------------------------------------------------------------------
# Structural cells
# ---------------------------------------------------------------------------

CAPITAL_PREFIX: Dots = (4, 6)
NUMERIC_PREFIX: Dots = (3, 4, 5, 6)
DIVISION_MARK: Dots = (3, 6)

# ---------------------------------------------------------------------------
# Vowel classes
# ---------------------------------------------------------------------------

VOWELS = frozenset("aeiouáéíóúü")
STRONG_VOWELS = frozenset("aeoáéó")
STRESSED_WEAK_VOWELS = frozenset("íú")


def dots_to_byte(dots: Dots) -> int:
    """Pack dot numbers into a cell value: bit (dot - 1) set per raised dot."""
    value = 0
    for dot in dots:
        value |= 1 << (dot - 1)
    return value


def to_lower(char: str) -> str:
    """Case-fold a single letter, keeping it a single character.

    Accented Spanish capitals use an explicit table; any other character
    takes the first character of str.lower() (some scalars lower to more
    than one code point).
    """
    folded = _ACCENTED_LOWER.get(char)
    if folded is not None:
        return folded
    lowered = char.lower()
    return lowered[0] if lowered else char


def letter_dots(char: str) -> Optional[Dots]:
    """Dots for a letter of either case, or None if not a Spanish letter."""
    return LETTER_DOTS.get(to_lower(char))


def digit_dots(char: str) -> Optional[Dots]:
    return DIGIT_DOTS.get(char)


def punctuation_dots(char: str) -> Optional[Dots]:
    return PUNCTUATION_DOTS.get(char)


def dots_for(char: str) -> Optional[Dots]:
    """Look up any supported character: letter, digit, then punctuation.

    Returns None for unsupported scalars (emoji, foreign letters, unlisted
    punctuation, whitespace). Callers drop those silently.
    """
    found = letter_dots(char)
    if found is not None:
        return found
    found = digit_dots(char)
    if found is not None:
        return found
    return punctuation_dots(char)


def is_vowel(char: str) -> bool:
    return to_lower(char) in VOWELS


def is_strong_vowel(char: str) -> bool:
    return to_lower(char) in STRONG_VOWELS


def is_stressed_weak_vowel(char: str) -> bool:
    """True for í and ú (either case): they always break vowel pairing."""
    return to_lower(char) in STRESSED_WEAK_VOWELS
