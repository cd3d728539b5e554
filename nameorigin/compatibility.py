#!/usr/bin/env python3
"""
First Name x Surname Compatibility
==================================
Deterministic phonetic scoring of how a first name flows into a surname.

Two scoring profiles:

    explained   Surname pages. Fired rules are returned as reason tags so the
                page can explain each suggestion. Repeated boundary sound
                costs -1.0.
    global      Hub listings. Plain float, repeated boundary sound costs
                -0.5, plus a first/last length-ratio term.

The 0-100 smoothness score is a separate presentation layer with its own
component weights, mapped onto five fixed tiers.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .phonetics import (
    ends_with_vowel,
    first_char,
    is_consonant,
    last_char,
    record_syllables,
    starts_with_vowel,
)
from .settings import get_setting, require_setting

# =============================================================================
# Constants
# =============================================================================

EXPLAINED = "explained"
GLOBAL = "global"
PROFILES = (EXPLAINED, GLOBAL)

SYLLABLE_CONTRAST = "syllable_contrast"
SYLLABLE_BALANCE = "syllable_balance"
VOWEL_CONSONANT = "vowel_consonant"
CONSONANT_VOWEL = "consonant_vowel"
REPEATED_SOUND = "repeated_sound"

# Fixed taxonomy surfaced to readers; boundaries are inclusive lower bounds.
TIER_DESCRIPTION = (
    "Tiers: Excellent Flow (85–100), Strong Flow (70–84), Neutral (50–69), "
    "Slight Friction (30–49), High Friction (0–29). Higher scores indicate "
    "smoother phonetic flow when the first and last names are said together."
)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class ScoringProfile:
    """Penalty/bonus magnitudes that differ between call sites."""
    name: str
    repeated_sound_penalty: float
    length_ratio: bool = False
    length_ratio_bonus: float = 0.0
    length_ratio_penalty: float = 0.0


@dataclass
class CompatibilityResult:
    """Score plus the rule tags that fired."""
    score: float
    reasons: List[str] = field(default_factory=list)


@dataclass
class RankedName:
    """A candidate first name with its compatibility result."""
    record: Any
    score: float
    reasons: List[str] = field(default_factory=list)


@dataclass
class SmoothnessComponent:
    id: str
    label: str
    effect: int


@dataclass
class SmoothnessResult:
    """0-100 smoothness score with its tier and the components behind it."""
    score: int
    tier: str
    components: List[SmoothnessComponent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'tier': self.tier,
            'explanation_components': [
                {'id': c.id, 'label': c.label, 'effect': c.effect}
                for c in self.components
            ],
        }


# =============================================================================
# Profiles
# =============================================================================

@lru_cache(maxsize=None)
def get_profile(name: str = EXPLAINED) -> ScoringProfile:
    """Load a named scoring profile from app.yaml."""
    if name not in PROFILES:
        raise ValueError(f"Unknown scoring profile '{name}'. Available: {', '.join(PROFILES)}")
    cfg = require_setting(f"compatibility.profiles.{name}")
    penalty = cfg.get('repeated_sound_penalty')
    if penalty is None:
        raise ValueError(f"compatibility.profiles.{name}.repeated_sound_penalty must be set in app.yaml")
    return ScoringProfile(
        name=name,
        repeated_sound_penalty=float(penalty),
        length_ratio=bool(cfg.get('length_ratio', False)),
        length_ratio_bonus=float(cfg.get('length_ratio_bonus', 0.0)),
        length_ratio_penalty=float(cfg.get('length_ratio_penalty', 0.0)),
    )


def _hard_consonants() -> frozenset:
    return frozenset(get_setting("compatibility.hard_consonants", "tkpbdg"))


# =============================================================================
# Scoring
# =============================================================================

def _name_of(record: Any) -> str:
    if isinstance(record, str):
        return record.strip()
    return str(getattr(record, 'name', '') or '').strip()


def score_compatibility(first_name: Any, surname: Any,
                        profile: Optional[str] = EXPLAINED) -> CompatibilityResult:
    """
    Score a first name against a surname.

    Parameters
    ----------
    first_name : NameRecord, SurnameRecord-like or str
        Anything with ``name`` and optional ``syllables``.
    surname : SurnameRecord or str
        The family name.
    profile : str
        ``"explained"`` or ``"global"``.

    Returns
    -------
    CompatibilityResult
        Additive score and fired reason tags. Missing names give a zero
        score with no reasons.
    """
    prof = get_profile(profile or EXPLAINED)
    first = _name_of(first_name)
    last = _name_of(surname)
    if not first or not last:
        return CompatibilityResult(score=0.0)

    first_syl = record_syllables(first_name)
    last_syl = record_syllables(surname)
    reasons = []
    score = 0.0

    # Syllable relationship
    syl_gap = abs(first_syl - last_syl)
    if last_syl == 1 and 2 <= first_syl <= 3:
        score += 1.5
        reasons.append(SYLLABLE_CONTRAST)
    elif last_syl == 2 and 1 <= first_syl <= 3:
        score += 1.0
        reasons.append(SYLLABLE_BALANCE)
    elif syl_gap <= 1:
        score += 0.5
    if syl_gap >= 3:
        score -= 0.5

    # Vowel/consonant boundary
    first_ends_v = ends_with_vowel(first)
    last_starts_v = starts_with_vowel(last)
    if first_ends_v and not last_starts_v:
        score += 1.0
        reasons.append(VOWEL_CONSONANT)
    elif not first_ends_v and last_starts_v:
        score += 1.0
        reasons.append(CONSONANT_VOWEL)

    # Repeated boundary sound (Jack Cooper)
    tail = last_char(first)
    head = first_char(last)
    if tail and head and tail == head:
        score += prof.repeated_sound_penalty
        reasons.append(REPEATED_SOUND)

    # Hard consonant stacking (Brett Thompson)
    hard = _hard_consonants()
    if tail in hard and head in hard:
        score -= 0.5

    if prof.length_ratio:
        ratio = len(first) / len(last)
        if 0.5 <= ratio <= 2:
            score += prof.length_ratio_bonus
        elif ratio > 3 or ratio < 0.33:
            score += prof.length_ratio_penalty

    return CompatibilityResult(score=score, reasons=reasons)


def compatibility_score(first_name: Any, surname: Any) -> float:
    """Global-profile score as a bare float."""
    return score_compatibility(first_name, surname, profile=GLOBAL).score


def rank_first_names(names: Iterable[Any], surname: Any, limit: Optional[int] = None,
                     gender: Optional[str] = None,
                     profile: str = EXPLAINED) -> List[RankedName]:
    """
    Rank candidate first names for a fixed surname.

    Sorted by score descending; candidates with equal scores keep their
    input order. ``gender`` filters on the record's gender (case-insensitive).
    """
    target = (gender or '').strip().lower()
    scored = []
    for record in names:
        if target and (getattr(record, 'gender', '') or '').lower() != target:
            continue
        result = score_compatibility(record, surname, profile=profile)
        scored.append(RankedName(record=record, score=result.score, reasons=result.reasons))
    scored.sort(key=lambda r: r.score, reverse=True)
    if limit is None:
        limit = int(get_setting("compatibility.list_size", 12))
    return scored[:limit]


def explain_pairing(first_name: Any, surname: Any, reasons: Sequence[str]) -> str:
    """One or two plain sentences on why a first name suits the surname."""
    first = _name_of(first_name)
    last = _name_of(surname)
    first_syl = record_syllables(first_name)
    last_syl = record_syllables(surname)
    sentences = []
    if SYLLABLE_CONTRAST in reasons or SYLLABLE_BALANCE in reasons:
        plural = 's' if first_syl != 1 else ''
        if last_syl == 1:
            relation = f"contrasts well with {last}'s one syllable"
        else:
            last_plural = 's' if last_syl != 1 else ''
            relation = f"balances {last}'s {last_syl} syllable{last_plural}"
        sentences.append(f"{first} has {first_syl} syllable{plural}, which {relation}.")
    if VOWEL_CONSONANT in reasons:
        sentences.append(f"It ends in a vowel, so it flows cleanly into the consonant start of {last}.")
    if CONSONANT_VOWEL in reasons:
        sentences.append(
            f"It ends in a consonant, creating a clear break before the vowel at the start of {last}."
        )
    if not sentences:
        sentences.append(f"The syllable count and vowel-consonant boundary work well with {last}.")
    return ' '.join(sentences[:2])


# =============================================================================
# Smoothness Score
# =============================================================================

@lru_cache(maxsize=1)
def smoothness_tiers() -> Tuple[Tuple[int, str], ...]:
    """(lower bound, label) pairs, highest band first."""
    tiers = require_setting("smoothness.tiers")
    bands = sorted(((int(t['min']), str(t['label'])) for t in tiers), reverse=True)
    if not bands or bands[-1][0] != 0:
        raise ValueError("smoothness.tiers must include a band starting at 0")
    return tuple(bands)


def tier_for_score(score: float) -> str:
    """Map a 0-100 score onto its smoothness tier label."""
    for lower, label in smoothness_tiers():
        if score >= lower:
            return label
    return smoothness_tiers()[-1][1]


def compute_smoothness(first_name: Any, surname: Any) -> SmoothnessResult:
    """
    Surname compatibility smoothness score (0-100).

    Starts from a neutral 50 and applies syllable balance, boundary
    transition, consonant clash, total rhythm and length symmetry terms.
    """
    first = _name_of(first_name)
    last = _name_of(surname)
    if not first or not last:
        return SmoothnessResult(
            score=50,
            tier=tier_for_score(50),
            components=[SmoothnessComponent('missing', 'Missing name', 0)],
        )

    first_syl = record_syllables(first_name)
    last_syl = record_syllables(surname)
    components = []

    def apply(cid: str, label: str, effect: int):
        components.append(SmoothnessComponent(cid, label, effect))

    syl_gap = abs(first_syl - last_syl)
    if syl_gap <= 1:
        apply('syllable_balance', 'Syllable balance (within one)', 12)
    elif syl_gap == 2:
        apply('syllable_moderate', 'Moderate syllable difference', 4)
    else:
        apply('syllable_imbalance', 'Large syllable difference', -8)

    first_ends_v = ends_with_vowel(first)
    last_starts_v = starts_with_vowel(last)
    if first_ends_v and not last_starts_v:
        apply('vowel_consonant', 'Vowel-consonant transition (smooth)', 14)
    elif not first_ends_v and last_starts_v:
        apply('consonant_vowel', 'Consonant-vowel transition (smooth)', 14)
    elif first_ends_v and last_starts_v:
        apply('vowel_vowel', 'Vowel-vowel run-together risk', -6)
    else:
        apply('consonant_consonant', 'Consonant-consonant boundary', -4)

    tail = last_char(first)
    head = first_char(last)
    if tail and tail == head and is_consonant(tail):
        apply('consonant_clash', 'Same consonant at boundary (clash)', -15)

    total_syl = first_syl + last_syl
    if 2 <= total_syl <= 5:
        apply('rhythm_balanced', 'Total syllable count in balanced range', 8)
    elif total_syl > 7:
        apply('rhythm_long', 'Combined name very long (>7 syllables)', -10)
    elif total_syl > 5:
        apply('rhythm_moderate', 'Moderate total length', 2)

    ratio = len(first) / max(len(last), 1)
    if 0.5 <= ratio <= 2:
        apply('length_symmetry', 'Length symmetry (balanced)', 8)
    elif ratio > 3 or ratio < 0.33:
        apply('length_asymmetry', 'Length asymmetry', -8)

    raw = 50 + sum(c.effect for c in components)
    score = max(0, min(100, raw))
    return SmoothnessResult(score=score, tier=tier_for_score(score), components=components)
