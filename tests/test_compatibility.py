"""
Tests for Compatibility Scoring
===============================
Tests for first name x surname scoring, ranking and smoothness tiers in
nameorigin/compatibility.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nameorigin.compatibility import (
    EXPLAINED,
    GLOBAL,
    TIER_DESCRIPTION,
    score_compatibility,
    compatibility_score,
    rank_first_names,
    explain_pairing,
    compute_smoothness,
    tier_for_score,
    smoothness_tiers,
    get_profile,
)
from nameorigin.records import NameRecord, SurnameRecord


class TestScoreCompatibility:
    """Tests for score_compatibility."""

    def test_vowel_consonant_bonus(self):
        """Emma + Smith fires the vowel_consonant rule."""
        result = score_compatibility("Emma", "Smith")
        assert "vowel_consonant" in result.reasons

    def test_emma_smith_total(self):
        """Two-syllable first name with one-syllable surname adds contrast."""
        result = score_compatibility("Emma", "Smith")
        assert result.reasons == ["syllable_contrast", "vowel_consonant"]
        assert result.score == pytest.approx(2.5)

    def test_consonant_vowel_bonus(self):
        """Consonant-final first name before a vowel-initial surname."""
        result = score_compatibility("Jack", "Anderson")
        assert "consonant_vowel" in result.reasons

    def test_repeated_sound_explained(self):
        """Same boundary letter costs -1.0 in the explained profile."""
        result = score_compatibility("Jack", "Kelly", profile=EXPLAINED)
        assert "repeated_sound" in result.reasons
        # balance +1.0, repeated -1.0, hard stack -0.5
        assert result.score == pytest.approx(-0.5)

    def test_repeated_sound_global(self):
        """Global profile uses -0.5 and adds the length-ratio term."""
        result = score_compatibility("Jack", "Kelly", profile=GLOBAL)
        # balance +1.0, repeated -0.5, hard stack -0.5, length ratio 4/5 +0.5
        assert result.score == pytest.approx(0.5)
        assert compatibility_score("Jack", "Kelly") == pytest.approx(0.5)

    def test_large_syllable_gap_penalty(self):
        """A gap of three or more syllables subtracts 0.5."""
        result = score_compatibility("Anastasia", "Smith")
        assert result.reasons == ["vowel_consonant"]
        assert result.score == pytest.approx(0.5)

    def test_stored_syllables_used(self):
        """Record syllable counts override the estimate."""
        first = NameRecord(id=1, name="Noah", syllables=2)
        result = score_compatibility(first, SurnameRecord(name="Smith", syllables=1))
        assert "syllable_contrast" in result.reasons

    @pytest.mark.parametrize("first,last", [("", "Smith"), ("Emma", ""), (None, None), ("  ", "Smith")])
    def test_missing_names_score_zero(self, first, last):
        """Malformed input degrades to a zero score with no reasons."""
        result = score_compatibility(first, last)
        assert result.score == 0.0
        assert result.reasons == []

    def test_unknown_profile_raises(self):
        """Only the two named profiles exist."""
        with pytest.raises(ValueError):
            get_profile("lenient")


class TestRankFirstNames:
    """Tests for rank_first_names."""

    @pytest.fixture
    def names(self):
        return [
            NameRecord(id=1, name="Emma", gender="girl"),
            NameRecord(id=2, name="Ella", gender="girl"),
            NameRecord(id=3, name="Jack", gender="boy"),
            NameRecord(id=4, name="Sam", gender="girl"),
        ]

    def test_sorted_descending(self, names):
        """Higher scores come first."""
        ranked = rank_first_names(names, "Smith")
        scores = [r.score for r in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_ties_keep_input_order(self, names):
        """Emma and Ella tie; input order decides."""
        ranked = rank_first_names(names, "Smith", gender="girl")
        assert [r.record.name for r in ranked[:2]] == ["Emma", "Ella"]
        ranked = rank_first_names([names[1], names[0]], "Smith", gender="girl")
        assert [r.record.name for r in ranked[:2]] == ["Ella", "Emma"]

    def test_gender_filter(self, names):
        """Gender filtering is case-insensitive."""
        ranked = rank_first_names(names, "Smith", gender="BOY")
        assert [r.record.name for r in ranked] == ["Jack"]

    def test_limit(self, names):
        """Limit truncates the list."""
        assert len(rank_first_names(names, "Smith", limit=2)) == 2

    def test_reasons_attached(self, names):
        """Each ranked name carries its fired reasons."""
        ranked = rank_first_names(names, "Smith", gender="girl")
        assert "vowel_consonant" in ranked[0].reasons


class TestExplainPairing:
    """Tests for explain_pairing."""

    def test_contrast_sentence(self):
        """Syllable contrast is described against a one-syllable surname."""
        text = explain_pairing("Emma", "Smith", ["syllable_contrast", "vowel_consonant"])
        assert "Emma has 2 syllables, which contrasts well with Smith's one syllable." in text
        assert "flows cleanly" in text

    def test_at_most_two_sentences(self):
        """Only the first two explanations are kept."""
        text = explain_pairing("Emma", "Johnson",
                               ["syllable_balance", "vowel_consonant", "consonant_vowel"])
        assert "clear break" not in text

    def test_fallback_sentence(self):
        """No reasons gives the generic sentence."""
        text = explain_pairing("Jack", "Kelly", [])
        assert text == "The syllable count and vowel-consonant boundary work well with Kelly."


class TestSmoothness:
    """Tests for compute_smoothness and tiers."""

    def test_emma_smith(self):
        """Balanced, vowel-consonant pairing lands in Excellent Flow."""
        result = compute_smoothness("Emma", "Smith")
        assert result.score == 92
        assert result.tier == "Excellent Flow"
        ids = [c.id for c in result.components]
        assert ids == ["syllable_balance", "vowel_consonant", "rhythm_balanced", "length_symmetry"]

    def test_consonant_clash(self):
        """Same consonant at the boundary costs 15."""
        result = compute_smoothness("Jack", "Kelly")
        assert "consonant_clash" in [c.id for c in result.components]
        assert result.score == 59
        assert result.tier == "Neutral"

    def test_missing_name(self):
        """Missing names give a neutral 50."""
        result = compute_smoothness("", "Smith")
        assert result.score == 50
        assert result.tier == "Neutral"
        assert result.components[0].id == "missing"

    def test_bounded(self):
        """Scores stay within 0-100."""
        for first, last in [("Bob", "Bbbbbbbbbbbbbbbbbbbbbb"), ("Anastasiaoliviamia", "Ed")]:
            assert 0 <= compute_smoothness(first, last).score <= 100

    def test_to_dict(self):
        """Serialised form carries the explanation components."""
        data = compute_smoothness("Emma", "Smith").to_dict()
        assert set(data) == {"score", "tier", "explanation_components"}
        assert data["explanation_components"][0] == {
            "id": "syllable_balance", "label": "Syllable balance (within one)", "effect": 12,
        }

    @pytest.mark.parametrize("score,tier", [
        (100, "Excellent Flow"), (85, "Excellent Flow"), (84, "Strong Flow"), (70, "Strong Flow"),
        (69, "Neutral"), (50, "Neutral"), (49, "Slight Friction"), (30, "Slight Friction"),
        (29, "High Friction"), (0, "High Friction"),
    ])
    def test_tier_boundaries(self, score, tier):
        """Tier lower bounds are inclusive."""
        assert tier_for_score(score) == tier

    def test_five_tiers(self):
        """The taxonomy has exactly five fixed bands."""
        assert len(smoothness_tiers()) == 5
        assert "0–29" in TIER_DESCRIPTION
