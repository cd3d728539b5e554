#!/usr/bin/env python3
"""
Phonetic Primitives
===================
Small, total helpers shared by the compatibility and harmony scorers.
None of them raise; empty or non-string input degrades to a neutral value.
"""

import re
from typing import Any

VOWELS = "aeiouy"

_VOWEL_RUN = re.compile(r"[aeiouy]+")
_ENDS_VOWEL = re.compile(r"[aeiouy]$", re.IGNORECASE)
_STARTS_VOWEL = re.compile(r"^[aeiouy]", re.IGNORECASE)

# Vowel pairs spoken as two syllables (O-li-vi-a, Li-am, Le-o-nie).
HIATUS_PAIRS = frozenset({"ia", "io", "iu", "eo"})


def _text(word: Any) -> str:
    if word is None:
        return ""
    return str(word).strip()


def syllable_count(word: Any) -> int:
    """
    Estimate syllables as the number of vowel groups.

    A group containing a hiatus pair counts once per pair on top of the
    group itself. Never returns less than 1.
    """
    text = _text(word).lower()
    if not text:
        return 1
    count = 0
    for run in _VOWEL_RUN.findall(text):
        count += 1
        count += sum(1 for i in range(len(run) - 1) if run[i:i + 2] in HIATUS_PAIRS)
    return max(1, count)


def ends_with_vowel(word: Any) -> bool:
    return bool(_ENDS_VOWEL.search(_text(word)))


def starts_with_vowel(word: Any) -> bool:
    return bool(_STARTS_VOWEL.search(_text(word)))


def first_char(word: Any) -> str:
    text = _text(word).lower()
    return text[0] if text else ""


def last_char(word: Any) -> str:
    text = _text(word).lower()
    return text[-1] if text else ""


def is_consonant(char: str) -> bool:
    """True for a single a-z letter outside the vowel set."""
    return len(char) == 1 and "a" <= char <= "z" and char not in VOWELS


def record_syllables(record: Any) -> int:
    """Use a record's stored syllable count, falling back to the estimate."""
    stored = getattr(record, "syllables", None)
    if stored is not None:
        return stored
    return syllable_count(getattr(record, "name", record if isinstance(record, str) else ""))
