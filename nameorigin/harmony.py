#!/usr/bin/env python3
"""
Sibling Harmony
===============
How well two given names work together as sibling names.

Five components, each scored 0-100, are combined with fixed integer
weights (percent) that must sum to 100:

    origin            30   shared origin country or language
    phonetic          25   syllable similarity + shared first letter
    popularity_band   20   same or adjacent usage tier
    length_balance    15   similar character length
    style_cluster     10   same primary style category

Every component is symmetric, so score(a, b) == score(b, a). The weighted
sum is taken in integers and rounded half up, so results never depend on
float accumulation order.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Sequence

from .dataset import BAND_ORDER, band_for_rank, best_ranks, primary_styles
from .phonetics import record_syllables
from .records import CategoryRow, NameRecord, PopularityRow
from .settings import get_setting, require_setting

COMPONENTS = ("origin", "phonetic", "popularity_band", "length_balance", "style_cluster")


@dataclass
class HarmonyResult:
    """Harmony between two names."""
    score: int
    shared_origin: Optional[str] = None
    style_match: Optional[str] = None


@dataclass
class SiblingMatch:
    """A candidate sibling name and its harmony with the base name."""
    record: NameRecord
    score: int
    shared_origin: Optional[str] = None
    style_match: Optional[str] = None


@lru_cache(maxsize=1)
def harmony_weights() -> Dict[str, int]:
    """Component weights from app.yaml, validated to sum to 100."""
    cfg = require_setting("harmony.weights")
    weights = {}
    for key in COMPONENTS:
        if key not in cfg:
            raise ValueError(f"harmony.weights.{key} must be set in app.yaml")
        weights[key] = int(cfg[key])
    total = sum(weights.values())
    if total != 100:
        raise ValueError(f"harmony.weights must sum to 100 (got {total})")
    return weights


# =============================================================================
# Components
# =============================================================================

def origin_key(record) -> str:
    """Lower-cased, whitespace-free origin country, else language."""
    country = ''.join((getattr(record, 'origin_country', None) or '').split()).lower()
    language = ''.join((getattr(record, 'language', None) or '').split()).lower()
    return country or language


def origin_score(base, candidate) -> int:
    base_key = origin_key(base)
    if base_key and base_key == origin_key(candidate):
        return 100
    return 0


def _initial(record) -> str:
    letter = getattr(record, 'first_letter', None) or (getattr(record, 'name', '') or '')[:1]
    return letter.lower()


def phonetic_score(base, candidate) -> int:
    gap = abs(record_syllables(base) - record_syllables(candidate))
    if gap == 0:
        score = 100
    elif gap == 1:
        score = 70
    elif gap == 2:
        score = 40
    else:
        score = 10
    base_initial = _initial(base)
    if base_initial and base_initial == _initial(candidate):
        score += 20
    return min(100, score)


def popularity_band_score(base_band: str, candidate_band: str) -> int:
    if base_band == candidate_band:
        return 100
    if base_band not in BAND_ORDER or candidate_band not in BAND_ORDER:
        return 0
    if abs(BAND_ORDER.index(base_band) - BAND_ORDER.index(candidate_band)) == 1:
        return 50
    return 0


def length_balance_score(base, candidate) -> int:
    diff = abs(len(getattr(base, 'name', '') or '') - len(getattr(candidate, 'name', '') or ''))
    if diff <= 1:
        return 100
    if diff <= 2:
        return 80
    if diff <= 3:
        return 60
    if diff <= 4:
        return 40
    return 20


def style_cluster_score(base_style: str, candidate_style: str) -> int:
    if base_style and base_style == candidate_style:
        return 100
    return 0


# =============================================================================
# Scorer
# =============================================================================

class SiblingHarmonyScorer:
    """
    Scores name pairs against one build's popularity and category data.

    Bands and primary styles are indexed once so that scoring every name
    against every other name stays a plain nested loop.

    Example:
        scorer = SiblingHarmonyScorer(dataset.popularity, dataset.categories)
        result = scorer.score(olivia, amelia)
        matches = scorer.top_matches(olivia, dataset.names)
    """

    def __init__(self, popularity: Iterable[PopularityRow] = (),
                 categories: Iterable[CategoryRow] = ()):
        self._ranks = best_ranks(popularity)
        self._styles = primary_styles(categories)
        self._weights = harmony_weights()

    @classmethod
    def from_dataset(cls, dataset) -> "SiblingHarmonyScorer":
        return cls(dataset.popularity, dataset.categories)

    def band(self, record) -> str:
        return band_for_rank(self._ranks.get(getattr(record, 'id', None)))

    def style(self, record) -> str:
        return self._styles.get(getattr(record, 'id', None), '')

    def components(self, base, candidate) -> Dict[str, int]:
        return {
            'origin': origin_score(base, candidate),
            'phonetic': phonetic_score(base, candidate),
            'popularity_band': popularity_band_score(self.band(base), self.band(candidate)),
            'length_balance': length_balance_score(base, candidate),
            'style_cluster': style_cluster_score(self.style(base), self.style(candidate)),
        }

    def score(self, base, candidate) -> HarmonyResult:
        """Harmony score (0-100) for an ordered pair of names."""
        if not getattr(base, 'name', '') or not getattr(candidate, 'name', ''):
            return HarmonyResult(score=0)
        parts = self.components(base, candidate)
        weighted = sum(parts[k] * self._weights[k] for k in COMPONENTS)
        score = max(0, min(100, (weighted + 50) // 100))

        shared_origin = None
        if parts['origin'] == 100:
            shared_origin = (getattr(base, 'origin_country', None)
                             or getattr(base, 'language', None)
                             or origin_key(base))
        style_match = self.style(candidate) if parts['style_cluster'] == 100 else None
        return HarmonyResult(score=score, shared_origin=shared_origin, style_match=style_match)

    def top_matches(self, base, names: Sequence[NameRecord],
                    limit: Optional[int] = None) -> List[SiblingMatch]:
        """
        Best sibling candidates for ``base``.

        The base name itself is excluded. Ties are broken by name,
        case-insensitively, so the list is stable across builds.
        """
        if limit is None:
            limit = int(get_setting("harmony.top_matches", 12))
        base_id = getattr(base, 'id', None)
        scored = []
        for candidate in names:
            if candidate is base or (base_id is not None and candidate.id == base_id):
                continue
            result = self.score(base, candidate)
            scored.append(SiblingMatch(
                record=candidate,
                score=result.score,
                shared_origin=result.shared_origin,
                style_match=result.style_match,
            ))
        scored.sort(key=lambda m: (-m.score, (m.record.name or '').lower(), m.record.name or ''))
        return scored[:limit]

    def clashing(self, base, names: Sequence[NameRecord],
                 limit: Optional[int] = None) -> List[NameRecord]:
        """
        Names that contrast with ``base`` as siblings.

        Only candidates below the clash ceiling are considered. They are
        ranked by inverted harmony plus a fixed penalty for each origin,
        style or syllable (gap of two or more) mismatch.
        """
        if limit is None:
            limit = int(get_setting("harmony.clashing_limit", 6))
        ceiling = int(get_setting("harmony.clash_max_score", 50))
        mismatch_weight = int(get_setting("harmony.clash_mismatch_weight", 30))

        base_id = getattr(base, 'id', None)
        base_origin = origin_key(base)
        base_style = self.style(base)
        base_syl = record_syllables(base)
        ranked = []
        for candidate in names:
            if candidate is base or (base_id is not None and candidate.id == base_id):
                continue
            score = self.score(base, candidate).score
            if score >= ceiling:
                continue
            cand_origin = origin_key(candidate)
            origin_diff = 0 if cand_origin == base_origin else 1
            style_diff = 0 if self.style(candidate) == base_style else 1
            syl_diff = 1 if abs(base_syl - record_syllables(candidate)) >= 2 else 0
            clash = -score + (origin_diff + style_diff + syl_diff) * mismatch_weight
            ranked.append((clash, candidate))
        ranked.sort(key=lambda pair: pair[0], reverse=True)
        return [candidate for _, candidate in ranked[:limit]]


# =============================================================================
# Convenience Functions
# =============================================================================

def compute_sibling_harmony(base: NameRecord, candidate: NameRecord,
                            popularity: Iterable[PopularityRow] = (),
                            categories: Iterable[CategoryRow] = ()) -> HarmonyResult:
    """One-off harmony score. Build a SiblingHarmonyScorer for batches."""
    return SiblingHarmonyScorer(popularity, categories).score(base, candidate)


def top_sibling_matches(base: NameRecord, names: Sequence[NameRecord],
                        popularity: Iterable[PopularityRow] = (),
                        categories: Iterable[CategoryRow] = (),
                        limit: Optional[int] = None) -> List[SiblingMatch]:
    return SiblingHarmonyScorer(popularity, categories).top_matches(base, names, limit)


def clashing_names(base: NameRecord, names: Sequence[NameRecord],
                   popularity: Iterable[PopularityRow] = (),
                   categories: Iterable[CategoryRow] = (),
                   limit: Optional[int] = None) -> List[NameRecord]:
    return SiblingHarmonyScorer(popularity, categories).clashing(base, names, limit)
