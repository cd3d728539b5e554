"""
Tests for Sibling Harmony
=========================
Tests for component scores, weighting, top matches and clashing names in
nameorigin/harmony.py.
"""

import pytest
import sys
from pathlib import Path

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nameorigin.harmony import (
    SiblingHarmonyScorer,
    harmony_weights,
    origin_score,
    phonetic_score,
    popularity_band_score,
    length_balance_score,
    style_cluster_score,
    compute_sibling_harmony,
    top_sibling_matches,
    clashing_names,
)
from nameorigin.records import CategoryRow, NameRecord, PopularityRow


class TestComponents:
    """Tests for the individual harmony components."""

    def test_shared_origin_beats_missing_origin(self):
        """Two Irish names score higher on origin than two names without origin data."""
        irish_a = NameRecord(id=1, name="Liam", origin_country="Ireland")
        irish_b = NameRecord(id=2, name="Aoife", origin_country="Ireland")
        blank_a = NameRecord(id=3, name="Sam")
        blank_b = NameRecord(id=4, name="Alex")
        assert origin_score(irish_a, irish_b) > origin_score(blank_a, blank_b)
        assert origin_score(blank_a, blank_b) == 0

    def test_origin_normalised(self):
        """Origin comparison ignores case and whitespace."""
        a = NameRecord(id=1, name="A", origin_country="New Zealand")
        b = NameRecord(id=2, name="B", origin_country="newzealand")
        assert origin_score(a, b) == 100

    def test_origin_falls_back_to_language(self):
        """Language is used when the country is missing."""
        a = NameRecord(id=1, name="A", language="Hebrew")
        b = NameRecord(id=2, name="B", language="hebrew")
        assert origin_score(a, b) == 100

    def test_phonetic_score(self):
        """Syllable gap steps down; a shared initial adds 20, capped at 100."""
        base = NameRecord(id=1, name="Liam", syllables=2)
        assert phonetic_score(base, NameRecord(id=2, name="Lucas", syllables=2)) == 100
        assert phonetic_score(base, NameRecord(id=3, name="Noah", syllables=2)) == 100
        assert phonetic_score(base, NameRecord(id=4, name="Finn", syllables=1)) == 70
        assert phonetic_score(base, NameRecord(id=5, name="Lou", syllables=1)) == 90
        assert phonetic_score(base, NameRecord(id=6, name="Theodora", syllables=4)) == 40
        assert phonetic_score(base, NameRecord(id=7, name="Anastasia", syllables=5)) == 10

    def test_popularity_band_score(self):
        """Same band 100, adjacent band 50, otherwise 0."""
        assert popularity_band_score("top100", "top100") == 100
        assert popularity_band_score("top100", "top500") == 50
        assert popularity_band_score("top1000", "other") == 50
        assert popularity_band_score("top100", "top1000") == 0
        assert popularity_band_score("top100", "other") == 0

    def test_length_balance_score(self):
        """Character length difference maps onto fixed steps."""
        liam = NameRecord(id=1, name="Liam")
        assert length_balance_score(liam, NameRecord(id=2, name="Noah")) == 100
        assert length_balance_score(liam, NameRecord(id=3, name="Oliver")) == 80
        assert length_balance_score(liam, NameRecord(id=4, name="Theodore")) == 40
        assert length_balance_score(liam, NameRecord(id=5, name="Maximilian")) == 20

    def test_style_cluster_score(self):
        """Only a shared, known style scores."""
        assert style_cluster_score("irish", "irish") == 100
        assert style_cluster_score("irish", "classic") == 0
        assert style_cluster_score("", "") == 0


class TestWeights:
    """Tests for harmony_weights."""

    def test_weights_sum_to_100(self):
        """The documented weights add up to 100."""
        weights = harmony_weights()
        assert sum(weights.values()) == 100
        assert weights == {
            "origin": 30, "phonetic": 25, "popularity_band": 20,
            "length_balance": 15, "style_cluster": 10,
        }


class TestScorer:
    """Tests for SiblingHarmonyScorer."""

    @pytest.fixture
    def names(self):
        return [
            NameRecord(id=1, name="Liam", gender="boy", origin_country="Ireland", syllables=2, first_letter="L"),
            NameRecord(id=2, name="Finn", gender="boy", origin_country="Ireland", syllables=1, first_letter="F"),
            NameRecord(id=3, name="Aoife", gender="girl", origin_country="Ireland", syllables=2, first_letter="A"),
            NameRecord(id=4, name="Maximilian", gender="boy", origin_country="Germany", syllables=4),
            NameRecord(id=5, name="Priya", gender="girl", origin_country="India", syllables=2),
            NameRecord(id=6, name="Anastasia", gender="girl", origin_country="Greece", syllables=5),
        ]

    @pytest.fixture
    def popularity(self):
        return [
            PopularityRow(name_id=1, country="USA", year=2024, rank=1),
            PopularityRow(name_id=1, country="USA", year=2020, rank=15),
            PopularityRow(name_id=2, country="USA", year=2024, rank=154),
            PopularityRow(name_id=3, country="Ireland", year=2023, rank=12),
            PopularityRow(name_id=4, country="USA", year=2024, rank=900),
        ]

    @pytest.fixture
    def categories(self):
        return [
            CategoryRow(name_id=1, category="Irish"),
            CategoryRow(name_id=2, category="Irish"),
            CategoryRow(name_id=3, category="Irish"),
            CategoryRow(name_id=4, category="Classic"),
            CategoryRow(name_id=5, category="Modern"),
            CategoryRow(name_id=6, category="Classic"),
        ]

    @pytest.fixture
    def scorer(self, popularity, categories):
        return SiblingHarmonyScorer(popularity, categories)

    def test_weighted_score(self, scorer, names):
        """Liam/Finn: origin 100, rhythm 70, band 50, length 100, style 100."""
        result = scorer.score(names[0], names[1])
        # (3000 + 1750 + 1000 + 1500 + 1000 + 50) // 100
        assert result.score == 83
        assert result.shared_origin == "Ireland"
        assert result.style_match == "irish"

    def test_symmetric(self, scorer, names):
        """score(a, b) == score(b, a) for every pair."""
        for a in names:
            for b in names:
                assert scorer.score(a, b).score == scorer.score(b, a).score

    def test_bounded(self, scorer, names):
        """Every score is within 0-100."""
        for a in names:
            for b in names:
                assert 0 <= scorer.score(a, b).score <= 100

    def test_deterministic(self, scorer, names):
        """Repeated scoring gives the same result."""
        assert scorer.score(names[0], names[2]) == scorer.score(names[0], names[2])

    def test_missing_name_scores_zero(self, scorer, names):
        """A record without a name scores 0."""
        assert scorer.score(names[0], NameRecord(id=99, name="")).score == 0

    def test_band_lookup(self, scorer, names):
        """Bands use the best rank across all rows."""
        assert scorer.band(names[0]) == "top100"
        assert scorer.band(names[1]) == "top500"
        assert scorer.band(names[3]) == "top1000"
        assert scorer.band(names[4]) == "other"

    def test_top_matches_exclude_base(self, scorer, names):
        """The base name never appears in its own matches."""
        matches = scorer.top_matches(names[0], names)
        assert "Liam" not in [m.record.name for m in matches]
        assert len(matches) == len(names) - 1

    def test_top_matches_sorted(self, scorer, names):
        """Matches are sorted by score, then name."""
        matches = scorer.top_matches(names[0], names)
        keys = [(-m.score, m.record.name.lower()) for m in matches]
        assert keys == sorted(keys)
        assert matches[0].record.name == "Aoife"
        assert matches[0].score == 100

    def test_top_matches_limit(self, scorer, names):
        """Limit truncates the match list."""
        assert len(scorer.top_matches(names[0], names, limit=2)) == 2

    def test_clashing_below_ceiling(self, scorer, names):
        """Clashing names all score under 50 with the base."""
        clashing = scorer.clashing(names[0], names)
        assert clashing
        for record in clashing:
            assert scorer.score(names[0], record).score < 50
        assert "Finn" not in [n.name for n in clashing]

    def test_clashing_prefers_mismatches(self, scorer, names):
        """The most contrasting name comes first."""
        clashing = scorer.clashing(names[0], names)
        assert clashing[0].name in ("Anastasia", "Maximilian")


class TestConvenienceFunctions:
    """Tests for the module-level wrappers."""

    def test_wrappers_match_scorer(self):
        """Wrappers agree with a scorer built on the same data."""
        base = NameRecord(id=1, name="Liam", origin_country="Ireland", syllables=2)
        other = NameRecord(id=2, name="Aoife", origin_country="Ireland", syllables=2)
        names = [base, other]
        result = compute_sibling_harmony(base, other)
        assert result.score == SiblingHarmonyScorer().score(base, other).score
        assert [m.record.name for m in top_sibling_matches(base, names)] == ["Aoife"]
        assert clashing_names(base, names) == []
