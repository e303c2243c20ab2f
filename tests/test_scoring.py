"""
Tests for name match scoring, decision bands and candidate ranking.
"""

import uuid

import pytest

from resolution.schemas import ArtistCandidate
from resolution.scoring import (
    DEFAULT_BANDS,
    MatchBand,
    MatchBands,
    MatchRule,
    best_match,
    compare,
    rank_candidates,
    score,
)


def candidate(name: str, slug: str) -> ArtistCandidate:
    return ArtistCandidate(artist_id=uuid.uuid4(), canonical_name=name, slug=slug)


class TestScore:
    """Tests for the three scoring rules."""

    def test_exact_after_normalization(self) -> None:
        """Names equal after normalization score 1.0."""
        assert score("A-Ha", "aha") == 1.0
        assert compare("Jeff Mills", "JEFF  MILLS").rule is MatchRule.EXACT

    def test_containment(self) -> None:
        """One normalized name inside the other scores 0.85."""
        result = compare("The Jeff Mills", "Jeff Mills")
        assert result.score == 0.85
        assert result.rule is MatchRule.CONTAINMENT

    def test_character_overlap(self) -> None:
        """Overlap counts shorter-name characters found in the longer name."""
        result = compare("Lena Fakes", "Len Faki")
        assert result.rule is MatchRule.CHARACTER_OVERLAP
        assert result.score == pytest.approx(0.7)

    def test_empty_against_non_empty(self) -> None:
        """An empty key is contained in every name, so it lands on the containment score."""
        result = compare("", "Surgeon")
        assert result.rule is MatchRule.CONTAINMENT
        assert result.score == 0.85
        assert score("!!!", "Surgeon") == 0.85
        assert score("Surgeon", "") == 0.85

    @pytest.mark.parametrize("name", ["Jeff Mills", "Surgeon", "DJ Nobu"])
    def test_self_score(self, name: str) -> None:
        """Any non-empty name scores 1.0 against itself."""
        assert score(name, name) == 1.0

    @pytest.mark.parametrize("a,b", [
        ("Lena Fakes", "Len Faki"),
        ("abcd", "abce"),
        ("Surgeon", "Regis"),
        ("Rrose", "Rose"),
        ("", "Perc"),
    ])
    def test_symmetric(self, a: str, b: str) -> None:
        """score(a, b) == score(b, a)."""
        assert score(a, b) == score(b, a)

    def test_score_in_unit_interval(self) -> None:
        """Scores stay within [0, 1]."""
        for a, b in [("aaaa", "a"), ("Jeff Mills", "Mills Jeff"), ("xyz", "abc")]:
            assert 0.0 <= score(a, b) <= 1.0


class TestMatchBands:
    """Tests for decision band classification."""

    def test_default_thresholds(self) -> None:
        """0.85 and up links, 0.60 and up reviews, lower is no match."""
        assert DEFAULT_BANDS.classify(1.0) is MatchBand.AUTO_LINK
        assert DEFAULT_BANDS.classify(0.85) is MatchBand.AUTO_LINK
        assert DEFAULT_BANDS.classify(0.84) is MatchBand.REVIEW
        assert DEFAULT_BANDS.classify(0.60) is MatchBand.REVIEW
        assert DEFAULT_BANDS.classify(0.59) is MatchBand.NO_MATCH

    def test_custom_thresholds(self) -> None:
        """Bands can be tightened."""
        strict = MatchBands(auto_link=0.95, review=0.8)
        assert strict.classify(0.9) is MatchBand.REVIEW
        assert strict.classify(0.7) is MatchBand.NO_MATCH


class TestRanking:
    """Tests for best-candidate selection."""

    def test_best_score_wins(self) -> None:
        """The highest-scoring candidate is returned."""
        mills = candidate("Jeff Mills", "jeff-mills")
        hood = candidate("Robert Hood", "robert-hood")
        match = best_match("Jeff Mills", [hood, mills])
        assert match.candidate == mills
        assert match.score == 1.0

    def test_ties_break_on_slug_then_id(self) -> None:
        """Equal scores fall back to slug order, independent of input order."""
        first = candidate("Jeff Mills", "jeff-mills")
        second = candidate("Jeff Mills", "jeff-mills-2")
        assert best_match("jeff mills", [second, first]).candidate == first
        assert best_match("jeff mills", [first, second]).candidate == first

        a = ArtistCandidate(artist_id=uuid.UUID(int=1), canonical_name="Perc", slug="perc")
        b = ArtistCandidate(artist_id=uuid.UUID(int=2), canonical_name="Perc", slug="perc")
        assert best_match("Perc", [b, a]).candidate == a

    def test_rank_orders_all_candidates(self) -> None:
        """rank_candidates returns every candidate, best first."""
        ranked = rank_candidates("Surgeon", [
            candidate("Jeff Mills", "jeff-mills"),
            candidate("Surgeon", "surgeon"),
        ])
        assert [m.candidate.slug for m in ranked] == ["surgeon", "jeff-mills"]

    def test_no_candidates(self) -> None:
        """An empty catalog has no best match."""
        assert best_match("Surgeon", []) is None
