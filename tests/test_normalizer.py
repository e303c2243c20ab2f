"""
Tests for identity normalization: normalize, slugify and sort_key.
"""

import re

import pytest

from resolution.normalizer import normalize, slugify, sort_key


class TestNormalize:
    """Tests for the comparable name form."""

    def test_lowercases_and_drops_punctuation(self) -> None:
        """Punctuation disappears and letters are lowercased."""
        assert normalize("A-Ha!") == "aha"
        assert normalize("DJ Nobu") == "dj nobu"

    def test_collapses_whitespace(self) -> None:
        """Whitespace runs become single spaces and edges are trimmed."""
        assert normalize("  Jeff \t  Mills \n") == "jeff mills"

    def test_non_ascii_letters_are_dropped(self) -> None:
        """Characters outside a-z and 0-9 are removed, not transliterated."""
        assert normalize("Âme") == "me"

    def test_empty_input(self) -> None:
        """Empty and punctuation-only names normalize to the empty string."""
        assert normalize("") == ""
        assert normalize("!!!") == ""

    @pytest.mark.parametrize("name", ["Jeff Mills", "  Ø  (Phase Fatale) ", "I Hate Models", ""])
    def test_idempotent(self, name: str) -> None:
        """Normalizing twice gives the same result as once."""
        assert normalize(normalize(name)) == normalize(name)


class TestSlugify:
    """Tests for URL slugs."""

    def test_simple_name(self) -> None:
        """Spaces become hyphens."""
        assert slugify("Jeff Mills") == "jeff-mills"

    def test_keeps_existing_hyphens_and_collapses_runs(self) -> None:
        """Hyphen runs collapse into one."""
        assert slugify("Planetary -- Assault Systems") == "planetary-assault-systems"

    def test_trims_edge_hyphens(self) -> None:
        """No leading or trailing hyphens survive."""
        assert slugify(" -Surgeon- ") == "surgeon"

    @pytest.mark.parametrize("name", ["Jeff Mills", "A-Ha", "Ø [Phase]", " -- ", "Charlotte de Witte!"])
    def test_only_slug_characters(self, name: str) -> None:
        """Slugs contain only a-z, 0-9 and inner hyphens."""
        slug = slugify(name)
        assert re.fullmatch(r"[a-z0-9-]*", slug)
        assert not slug.startswith("-")
        assert not slug.endswith("-")


class TestSortKey:
    """Tests for sortable names."""

    def test_two_tokens(self) -> None:
        """Last token moves to the front."""
        assert sort_key("Jeff Mills") == "Mills, Jeff"

    def test_many_tokens(self) -> None:
        """Only the last token moves."""
        assert sort_key("Charlotte de Witte") == "Witte, Charlotte de"

    def test_single_token_unchanged(self) -> None:
        """Single names and empty strings come back untouched."""
        assert sort_key("Surgeon") == "Surgeon"
        assert sort_key("") == ""
