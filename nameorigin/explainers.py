#!/usr/bin/env python3
"""
Explanation Renderers
=====================
Slot-level prose for surname compatibility and sibling harmony pages.
Each getter picks a variant from its slot with a seed derived from the page
key (plus a per-slot salt) and fills in computed values. Output is plain
text; the page layer escapes it.
"""

from typing import Any, Dict, Optional

from .compatibility import TIER_DESCRIPTION
from .phonetics import record_syllables
from .settings import get_setting, resolve_path
from .variants import VariantLibrary, load_variant_library


def _library(setting: str, default: str) -> VariantLibrary:
    return load_variant_library(resolve_path(get_setting(setting, default)))


def _syllable_context(count: int) -> Dict[str, str]:
    return {
        'SYL': str(count),
        'SYL_PLURAL': 's' if count != 1 else '',
        'SYL_ADJ': str(2 if count == 1 else count - 1),
    }


# =============================================================================
# Surname Compatibility
# =============================================================================

class CompatibilityExplainer:
    """
    Prose blocks for a surname page.

    ``hash_key`` lets a caller rotate per first+last pair instead of per
    surname.
    """

    def __init__(self, library: Optional[VariantLibrary] = None):
        if library is None:
            library = _library("paths.variants.compatibility",
                               "data/compatibility-explanation-variants.json")
        self.library = library

    def tier_block(self, surname: str) -> str:
        text = self.library.render('tier_block_variants', surname, {'SURNAME': surname})
        return text or TIER_DESCRIPTION

    def intro(self, surname: str, syllables: int) -> str:
        context = {'SURNAME': surname}
        context.update(_syllable_context(syllables))
        return self.library.render('surname_intro_variants', surname, context)

    def scoring_logic(self, surname: str) -> str:
        return self.library.render('scoring_logic_variants', surname, {'SURNAME': surname})

    def transition(self, surname: str, last_starts_vowel: bool,
                   hash_key: Optional[str] = None) -> str:
        slot = ('consonant_vowel_transition_variants' if last_starts_vowel
                else 'vowel_consonant_transition_variants')
        seed = hash_key if hash_key is not None else surname
        return self.library.render(slot, seed, {'SURNAME': surname})

    def syllable(self, surname: str, syllables: int, hash_key: Optional[str] = None) -> str:
        seed = (hash_key if hash_key is not None else surname) + 'syl'
        context = {'SURNAME': surname}
        context.update(_syllable_context(syllables))
        return self.library.render('syllable_analysis_variants', seed, context)

    def rhythm(self, surname: str, hash_key: Optional[str] = None) -> str:
        seed = (hash_key if hash_key is not None else surname) + 'r'
        return self.library.render('rhythm_explanation_variants', seed, {'SURNAME': surname})

    def consonant_collision(self, surname: str, hash_key: Optional[str] = None) -> str:
        seed = (hash_key if hash_key is not None else surname) + 'c'
        return self.library.render('consonant_collision_variants', seed, {'SURNAME': surname})

    def why_it_matters(self, surname: str) -> str:
        return self.library.render('why_it_matters_variants', surname, {'SURNAME': surname})

    def how_to_choose(self, surname: str) -> str:
        return self.library.render('how_to_choose_variants', surname + 'h', {'SURNAME': surname})

    def closing(self, surname: str) -> str:
        return self.library.render('closing_variants', surname + 'x', {'SURNAME': surname})

    def why_name_flow(self, surname: str) -> str:
        """Filler block used only when a page is under its word floor."""
        return self.library.render('why_name_flow_variants', surname + 'f', {'SURNAME': surname})

    def phonetic_block(self, key: str, surname: str, syllables: int,
                       last_starts_vowel: bool) -> str:
        """Dispatch one phonetic breakdown paragraph by its block key."""
        if key == 'transition':
            return self.transition(surname, last_starts_vowel)
        if key == 'syllable':
            return self.syllable(surname, syllables)
        if key == 'rhythm':
            return self.rhythm(surname)
        if key == 'consonant':
            return self.consonant_collision(surname)
        raise ValueError(f"Unknown phonetic block: {key}")


# =============================================================================
# Sibling Harmony
# =============================================================================

def build_sibling_context(base: Any, dataset: Any = None) -> Dict[str, str]:
    """
    Placeholder values for a sibling page.

    Provides BASE_NAME, BASE_SYL, BASE_SYL_PLURAL, BASE_SYL_ADJ,
    BASE_ORIGIN, BASE_POP_BAND and BASE_FIRST_LETTER. Without a dataset the
    popularity band reads ``other``.
    """
    name = getattr(base, 'name', '') or ''
    syllables = max(1, record_syllables(base))
    origin = ((getattr(base, 'origin_country', None) or getattr(base, 'language', None) or '').strip()
              or 'various origins')
    band = 'other'
    if dataset is not None:
        band = dataset.popularity_band(getattr(base, 'id', None))
    letter = (getattr(base, 'first_letter', None) or name[:1]).upper()
    syl = _syllable_context(syllables)
    return {
        'BASE_NAME': name,
        'BASE_SYL': syl['SYL'],
        'BASE_SYL_PLURAL': syl['SYL_PLURAL'],
        'BASE_SYL_ADJ': syl['SYL_ADJ'],
        'BASE_ORIGIN': origin,
        'BASE_POP_BAND': band_label(band),
        'BASE_FIRST_LETTER': letter,
    }


def band_label(band: str) -> str:
    """'top100' -> 'top 100' for prose."""
    if band.startswith('top'):
        return 'top ' + band[3:]
    return band


class SiblingExplainer:
    """Prose blocks for a sibling harmony page, keyed by the base name."""

    SLOTS = {
        'summary_intro': ('summary_intro_variants', ''),
        'origin': ('origin_based_explanation_variants', 'o'),
        'popularity': ('popularity_parity_variants', 'p'),
        'rhythm': ('rhythm_similarity_variants', 'r'),
        'length_style': ('length_style_variants', 'l'),
        'contrast': ('contrast_explanation_variants', 'c'),
        'why_harmony': ('why_harmony_variants', 'w'),
        'how_harmony_intro': ('how_harmony_intro_variants', 'h'),
        'deterministic_close': ('deterministic_close_variants', 'd'),
        'tips': ('tips_variants', 't'),
    }

    def __init__(self, library: Optional[VariantLibrary] = None):
        if library is None:
            library = _library("paths.variants.sibling",
                               "data/sibling-explanation-variants.json")
        self.library = library

    def block(self, block: str, base_name: str, context: Dict[str, str]) -> str:
        slot, salt = self.SLOTS[block]
        return self.library.render(slot, base_name + salt, context)

    def summary_intro(self, base_name, context):
        return self.block('summary_intro', base_name, context)

    def origin(self, base_name, context):
        return self.block('origin', base_name, context)

    def popularity(self, base_name, context):
        return self.block('popularity', base_name, context)

    def rhythm(self, base_name, context):
        return self.block('rhythm', base_name, context)

    def length_style(self, base_name, context):
        return self.block('length_style', base_name, context)

    def contrast(self, base_name, context):
        return self.block('contrast', base_name, context)

    def why_harmony(self, base_name, context):
        return self.block('why_harmony', base_name, context)

    def how_harmony_intro(self, base_name, context):
        return self.block('how_harmony_intro', base_name, context)

    def deterministic_close(self, base_name, context):
        return self.block('deterministic_close', base_name, context)

    def tips(self, base_name, context):
        return self.block('tips', base_name, context)
