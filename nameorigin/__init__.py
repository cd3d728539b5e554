#!/usr/bin/env python3
"""
Nameorigin - Name Compatibility Scoring & Page Generator
========================================================

Deterministic scoring and content-variant engine for a baby-name site:
first name x surname compatibility, sibling name harmony, seeded prose
variants, and content-floor guards for the generated pages.

Quick Start
-----------
    from nameorigin import Dataset, score_compatibility, SiblingHarmonyScorer

    data = Dataset.load()

    # First name with a surname
    result = score_compatibility("Emma", "Smith")
    result.reasons          # ['syllable_contrast', 'vowel_consonant']

    # Sibling names
    scorer = SiblingHarmonyScorer.from_dataset(data)
    matches = scorer.top_matches(data.find("Olivia"), data.names)

Modules
-------
    nameorigin.compatibility - First name x surname scoring, smoothness tiers
    nameorigin.harmony       - Sibling harmony scoring
    nameorigin.variants      - Seeded variant selection and rendering
    nameorigin.guards        - Content-floor checks
    nameorigin.pages         - Surname and sibling page assembly
    nameorigin.audit         - Content-floor scan and duplication audit

CLI Usage
---------
    python -m nameorigin score Emma Smith
    python -m nameorigin build surname --batch 20
    python -m nameorigin audit duplication
"""

__version__ = "0.4.0"
__author__ = "nameorigin"

# =============================================================================
# Records & Data
# =============================================================================

from .records import CategoryRow, NameRecord, PopularityRow, SurnameRecord
from .dataset import Dataset

# =============================================================================
# Scoring
# =============================================================================

from .phonetics import ends_with_vowel, starts_with_vowel, syllable_count
from .compatibility import (
    CompatibilityResult,
    RankedName,
    SmoothnessResult,
    compatibility_score,
    compute_smoothness,
    explain_pairing,
    rank_first_names,
    score_compatibility,
    tier_for_score,
)
from .harmony import (
    HarmonyResult,
    SiblingHarmonyScorer,
    SiblingMatch,
    clashing_names,
    compute_sibling_harmony,
    top_sibling_matches,
)

# =============================================================================
# Content
# =============================================================================

from .variants import (
    VariantLibrary,
    block_order,
    load_variant_library,
    phonetic_block_order,
    pick_variant,
    render,
    string_hash,
)
from .explainers import CompatibilityExplainer, SiblingExplainer, build_sibling_context
from .guards import (
    PageThresholds,
    ThinContentError,
    assert_page_thresholds,
    count_internal_links,
    count_words,
    has_meta_description,
    thresholds_for,
    write_html_with_guard,
)

__all__ = [
    '__version__',
    # Records
    'NameRecord',
    'SurnameRecord',
    'PopularityRow',
    'CategoryRow',
    'Dataset',
    # Phonetics
    'syllable_count',
    'ends_with_vowel',
    'starts_with_vowel',
    # Compatibility
    'CompatibilityResult',
    'RankedName',
    'SmoothnessResult',
    'score_compatibility',
    'compatibility_score',
    'rank_first_names',
    'explain_pairing',
    'compute_smoothness',
    'tier_for_score',
    # Harmony
    'HarmonyResult',
    'SiblingMatch',
    'SiblingHarmonyScorer',
    'compute_sibling_harmony',
    'top_sibling_matches',
    'clashing_names',
    # Variants
    'string_hash',
    'pick_variant',
    'render',
    'block_order',
    'phonetic_block_order',
    'VariantLibrary',
    'load_variant_library',
    'CompatibilityExplainer',
    'SiblingExplainer',
    'build_sibling_context',
    # Guards
    'PageThresholds',
    'ThinContentError',
    'count_words',
    'count_internal_links',
    'has_meta_description',
    'assert_page_thresholds',
    'thresholds_for',
    'write_html_with_guard',
]
