"""
Name match scoring.

The character-overlap rule is a bag-of-characters heuristic, not an edit
distance. It is permissive and only safe together with the review
band: anything between ``REVIEW_THRESHOLD`` and ``AUTO_LINK_THRESHOLD`` goes to
a human instead of being merged.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from resolution.normalizer import normalize
from resolution.schemas import ArtistCandidate

AUTO_LINK_THRESHOLD = 0.85
REVIEW_THRESHOLD = 0.60
CONTAINMENT_SCORE = 0.85


class MatchRule(str, Enum):
    EXACT = "exact"
    CONTAINMENT = "containment"
    CHARACTER_OVERLAP = "character-overlap"


class MatchBand(str, Enum):
    AUTO_LINK = "auto-link"
    REVIEW = "review"
    NO_MATCH = "no-match"


@dataclass(frozen=True)
class NameMatch:
    score: float
    rule: MatchRule


@dataclass(frozen=True)
class MatchBands:
    auto_link: float = AUTO_LINK_THRESHOLD
    review: float = REVIEW_THRESHOLD

    def classify(self, score: float) -> MatchBand:
        if score >= self.auto_link:
            return MatchBand.AUTO_LINK
        if score >= self.review:
            return MatchBand.REVIEW
        return MatchBand.NO_MATCH


DEFAULT_BANDS = MatchBands()


@dataclass(frozen=True)
class CandidateMatch:
    candidate: ArtistCandidate
    score: float
    rule: MatchRule


def compare(name_a: str, name_b: str) -> NameMatch:
    """Score two display names and report which rule decided the score"""
    norm_a = normalize(name_a)
    norm_b = normalize(name_b)

    if norm_a == norm_b:
        return NameMatch(1.0, MatchRule.EXACT)

    if norm_a in norm_b or norm_b in norm_a:
        return NameMatch(CONTAINMENT_SCORE, MatchRule.CONTAINMENT)

    # (length, text) ordering keeps the score symmetric for equal lengths
    shorter, longer = sorted((norm_a, norm_b), key=lambda s: (len(s), s))
    matches = sum(1 for char in shorter if char in longer)
    return NameMatch(matches / len(longer), MatchRule.CHARACTER_OVERLAP)


def score(name_a: str, name_b: str) -> float:
    return compare(name_a, name_b).score


def rank_candidates(name: str, candidates: Iterable[ArtistCandidate]) -> list[CandidateMatch]:
    """All candidates, best first; ties go to the lower slug, then the lower id"""
    matches = []
    for candidate in candidates:
        result = compare(name, candidate.canonical_name)
        matches.append(CandidateMatch(candidate, result.score, result.rule))
    matches.sort(key=lambda m: (-m.score, m.candidate.slug, str(m.candidate.artist_id)))
    return matches


def best_match(name: str, candidates: Iterable[ArtistCandidate]) -> Optional[CandidateMatch]:
    ranked = rank_candidates(name, candidates)
    return ranked[0] if ranked else None
