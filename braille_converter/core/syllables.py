"""Spanish syllabification for line-break hyphenation.

WHY: Braille transcription rules only allow a word to be divided across
lines at a syllable boundary. The line formatter therefore needs, for
every word, the list of positions where a new syllable starts.

HOW: A single left-to-right scan following the RAE phonological rules.
Each step skips the onset consonants, consumes the vowel nucleus
(absorbing diphthongs and triphthongs), then looks at the consonant run
up to the next vowel to decide where the next syllable starts.

RULES:
- Strong vowels: a e o á é ó. Weak vowels: i u ü.
- í and ú always break a vowel pair into a hiatus; accented strong
  vowels do not force a break.
- Two strong vowels never form a diphthong.
- Inseparable onsets (bl br cl cr dr fl fr gl gr pl pr tr ch ll rr)
  move together to the following syllable.
- 4+ consonants between vowels split at the midpoint of the run.
- Trailing consonants stay in the last syllable.
- Offsets are positions in the Python string; the first is always 0.
"""

from __future__ import annotations

from typing import List

from braille_converter.core.charmap import (
    is_strong_vowel,
    is_stressed_weak_vowel,
    is_vowel,
    to_lower,
)

INSEPARABLE_ONSETS = frozenset({
    "bl", "br", "cl", "cr", "dr",
    "fl", "fr", "gl", "gr", "pl",
    "pr", "tr", "ch", "ll", "rr",
})


def forms_diphthong(first: str, second: str) -> bool:
    """True if two adjacent vowels belong to the same syllable."""
    if is_strong_vowel(first) and is_strong_vowel(second):
        return False
    if is_stressed_weak_vowel(first) or is_stressed_weak_vowel(second):
        return False
    return True


def is_inseparable_onset(first: str, second: str) -> bool:
    return to_lower(first) + to_lower(second) in INSEPARABLE_ONSETS


def syllable_boundaries(word: str) -> List[int]:
    """Return the offsets at which each syllable of ``word`` starts.

    Args:
        word: A run of letters (case is irrelevant).

    Returns:
        Ordered offsets into ``word``; [0] for a single syllable and []
        for an empty word.
    """
    n = len(word)
    if n == 0:
        return []

    starts = [0]
    i = 0

    while i < n:
        # Onset
        while i < n and not is_vowel(word[i]):
            i += 1
        if i >= n:
            break

        # Nucleus, with at most two absorbed vowels (triphthong)
        i += 1
        for _ in range(2):
            if i < n and is_vowel(word[i]) and forms_diphthong(word[i - 1], word[i]):
                i += 1
            else:
                break
        if i >= n:
            break

        cons_start = i
        while i < n and not is_vowel(word[i]):
            i += 1
        num_cons = i - cons_start

        if i >= n:
            # Coda of the last syllable
            break

        if num_cons == 0:
            if not forms_diphthong(word[i - 1], word[i]):
                starts.append(i)
        elif num_cons == 1:
            starts.append(cons_start)
        elif num_cons == 2:
            if is_inseparable_onset(word[cons_start], word[cons_start + 1]):
                starts.append(cons_start)
            else:
                starts.append(cons_start + 1)
        elif num_cons == 3:
            if is_inseparable_onset(word[cons_start + 1], word[cons_start + 2]):
                starts.append(cons_start + 1)
            else:
                starts.append(cons_start + 2)
        else:
            # Loanwords only; no phonotactic rule applies.
            starts.append(cons_start + num_cons // 2)

    return starts


def split_syllables(word: str) -> List[str]:
    """Split ``word`` into its syllables (convenience for display and tests)."""
    starts = syllable_boundaries(word)
    ends = starts[1:] + [len(word)]
    return [word[start:end] for start, end in zip(starts, ends)]
