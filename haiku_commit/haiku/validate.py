"""Haiku normalization and strict 5-7-5 validation."""

import re

from haiku_commit.haiku.syllables import SyllableCounter, count_syllables

HAIKU_PATTERN = (5, 7, 5)

_LINE_BREAK = re.compile(r'\r?\n')


def normalize(text: str) -> str:
    """Trim outer whitespace, keep the first 3 lines, strip trailing whitespace per line."""
    lines = _LINE_BREAK.split((text or '').strip())[:3]
    # Blank trailing lines kept by the 3-line cut are stripped again
    return '\n'.join(line.rstrip() for line in lines).strip()


def syllable_counts(text: str, counter: SyllableCounter | None = None) -> tuple[int, int, int] | None:
    """Syllable counts of the first three lines, or None if there are fewer than three."""
    lines = _LINE_BREAK.split((text or '').strip())
    if len(lines) < 3:
        return None
    a, b, c = (count_syllables(line, counter) for line in lines[:3])
    return a, b, c


def is_strict_575(text: str, counter: SyllableCounter | None = None) -> bool:
    """True only for exactly three lines counting 5, 7, 5."""
    if len(_LINE_BREAK.split((text or '').strip())) != 3:
        return False
    return syllable_counts(text, counter) == HAIKU_PATTERN
