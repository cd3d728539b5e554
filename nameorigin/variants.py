#!/usr/bin/env python3
"""
Deterministic Variant Rendering
===============================
Picks one template per slot from a library of interchangeable prose, keyed
by a seed string (a surname, a name, a name pair). The same seed always
selects the same template, so rebuilding the site reproduces every page
byte for byte while similar pages still read differently.

Independent choices on one page append a short salt to the seed
(``'p'``, ``'r'``, ``'c'`` ...) so they do not all flip together.

Usage:
    from nameorigin.variants import load_variant_library

    library = load_variant_library("data/compatibility-explanation-variants.json")
    text = library.render("rhythm_explanation_variants", "Smith" + "r",
                          {"SURNAME": "Smith"})
"""

import json
import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{([A-Za-z0-9_]+)\}")

PHONETIC_ORDER_1 = ("transition", "syllable", "rhythm", "consonant")
PHONETIC_ORDER_2 = ("syllable", "transition", "consonant", "rhythm")


# =============================================================================
# Primitives
# =============================================================================

def string_hash(seed: Any) -> int:
    """
    Stable non-negative 32-bit string hash.

    Rolling ``h * 31 + unit`` over UTF-16 code units with signed 32-bit
    wraparound, then the absolute value. Non-strings and the empty string
    hash to 0.
    """
    if not isinstance(seed, str) or not seed:
        return 0
    data = seed.encode('utf-16-le', 'surrogatepass')
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    return abs(h)


def pick_variant(templates: Optional[Sequence[str]], seed: Any) -> str:
    """``templates[hash(seed) % len(templates)]``; empty input gives ``""``."""
    if not templates:
        return ''
    choice = templates[string_hash(seed) % len(templates)]
    return choice or templates[0] or ''


def render(template: Optional[str], context: Optional[Mapping[str, Any]] = None) -> str:
    """
    Replace every ``{KEY}`` with ``context[KEY]``.

    Unknown keys and ``None`` values become empty strings. Substitution is a
    single pass, so values are never themselves expanded.
    """
    if not template:
        return ''
    context = context or {}

    def substitute(match: "re.Match") -> str:
        value = context.get(match.group(1))
        return '' if value is None else str(value)

    return _PLACEHOLDER.sub(substitute, str(template))


def block_order(seed: str) -> str:
    """
    Main section order for a page: ``'A'`` or ``'B'``.

    A: score, scoring logic, phonetic breakdown, why it matters
    B: score, phonetic breakdown, scoring logic, why it matters
    """
    return 'A' if string_hash(seed) % 2 == 0 else 'B'


def phonetic_block_order(seed: str) -> Tuple[str, ...]:
    """Order of the four phonetic breakdown paragraphs."""
    if string_hash(seed + 'p') % 2 == 0:
        return PHONETIC_ORDER_1
    return PHONETIC_ORDER_2


# =============================================================================
# Libraries
# =============================================================================

class VariantLibrary:
    """Read-only mapping of slot name to its ordered templates."""

    def __init__(self, slots: Optional[Mapping[str, Sequence[str]]] = None, source: str = ''):
        self._slots: Dict[str, Tuple[str, ...]] = {}
        for slot, templates in (slots or {}).items():
            if isinstance(templates, (list, tuple)):
                self._slots[slot] = tuple(str(t) for t in templates)
        self.source = source

    def __contains__(self, slot: str) -> bool:
        return slot in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> List[str]:
        return sorted(self._slots)

    def templates(self, slot: str) -> Tuple[str, ...]:
        return self._slots.get(slot, ())

    def pick(self, slot: str, seed: str) -> str:
        return pick_variant(self.templates(slot), seed)

    def render(self, slot: str, seed: str, context: Optional[Mapping[str, Any]] = None) -> str:
        return render(self.pick(slot, seed), context)


@lru_cache(maxsize=8)
def load_variant_library(path) -> VariantLibrary:
    """
    Load a variant library JSON file once per process.

    A missing file yields an empty library; pages then fall back to blank
    (or built-in) prose instead of failing.
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Variant library not found: {path}")
        return VariantLibrary(source=str(path))
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Variant library must be a JSON object of slot -> templates: {path}")
    library = VariantLibrary(data, source=str(path))
    logger.debug(f"Loaded {len(library)} variant slots from {path}")
    return library
