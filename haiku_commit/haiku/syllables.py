"""Syllable counters: CMU pronouncing dictionary with a vowel-run heuristic."""

import logging
import re
from functools import lru_cache
from typing import Protocol

import cmudict

log = logging.getLogger(__name__)

_NON_LETTERS = re.compile(r'[^a-z\s]')
_VOWEL_RUNS = re.compile(r'[aeiouy]+')


class SyllableCounter(Protocol):
    def count(self, text: str) -> int: ...


def _words(text: str) -> list[str]:
    return _NON_LETTERS.sub('', (text or '').lower()).split()


def heuristic_word_syllables(word: str) -> int:
    count = len(_VOWEL_RUNS.findall(word))
    if word.endswith('e'):
        count = max(1, count - 1)
    return max(1, count)


def heuristic_syllables(text: str) -> int:
    """Rough English syllable count: vowel runs per word, silent final 'e', at least 1 per word.

    Miscounts plenty of words; strict validation retries on mismatch anyway.
    """
    return sum(heuristic_word_syllables(w) for w in _words(text))


class HeuristicCounter:
    """Deterministic, dependency-free counter."""

    name = "heuristic"

    def count(self, text: str) -> int:
        return heuristic_syllables(text)


@lru_cache(maxsize=1)
def _pronunciations() -> dict[str, list[list[str]]]:
    log.debug("Loading CMU pronouncing dictionary")
    return cmudict.dict()


class CmuDictCounter:
    """Dictionary counter. Words missing from CMUdict use the heuristic."""

    name = "cmudict"

    def word_syllables(self, word: str) -> int:
        phones = _pronunciations().get(word)
        if not phones:
            return heuristic_word_syllables(word)
        # Vowel phonemes carry a stress digit; first pronunciation wins
        return sum(1 for phone in phones[0] if phone[-1].isdigit())

    def count(self, text: str) -> int:
        return sum(self.word_syllables(w) for w in _words(text))


COUNTERS: dict[str, type] = {
    "cmudict": CmuDictCounter,
    "heuristic": HeuristicCounter,
}

_default_counter: SyllableCounter = CmuDictCounter()


def get_default_counter() -> SyllableCounter:
    return _default_counter


def set_default_counter(counter: SyllableCounter | str) -> SyllableCounter:
    """Select the process-wide counter, by instance or by name ('cmudict', 'heuristic')."""
    global _default_counter
    if isinstance(counter, str):
        if counter not in COUNTERS:
            raise ValueError(f"Unknown syllable counter '{counter}'. Use one of: {', '.join(COUNTERS)}")
        counter = COUNTERS[counter]()
    _default_counter = counter
    return counter


def count_syllables(text: str, counter: SyllableCounter | None = None) -> int:
    """Count syllables with `counter` (default: process-wide), falling back to the heuristic if it fails."""
    counter = counter or _default_counter
    try:
        return counter.count(text)
    except Exception as e:
        log.debug(f"Syllable counter {getattr(counter, 'name', counter)!r} failed ({e}); using heuristic")
        return heuristic_syllables(text)
