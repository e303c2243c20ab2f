"""
Tests for free-text nationality parsing.
"""

import pytest

from resolution.location import Location, parse_location


class TestParseLocation:
    """Tests for parse_location."""

    @pytest.mark.parametrize("raw,expected", [
        ("British (Birmingham)", Location("Birmingham", "UK", "Europe")),
        ("American (NYC)", Location("New York", "USA", "North America")),
        ("German", Location("Berlin", "Germany", "Europe")),
        ("Japanese", Location("Tokyo", "Japan", "Asia")),
        ("Dutch (Rotterdam)", Location("Rotterdam", "Netherlands", "Europe")),
    ])
    def test_known_nationalities(self, raw: str, expected: Location) -> None:
        """Nationality keywords map to country and region, cities come from parentheses."""
        assert parse_location(raw) == expected

    def test_detroit_anywhere(self) -> None:
        """Any mention of Detroit resolves to Detroit, USA."""
        assert parse_location("Detroit, Michigan, United States") == Location("Detroit", "USA", "North America")

    def test_city_in_free_text(self) -> None:
        """Known cities are picked out of the text without parentheses."""
        assert parse_location("German, based in Cologne").city == "Cologne"

    def test_dual_nationality_uses_first(self) -> None:
        """"British/German" is treated as British."""
        assert parse_location("British/German").country == "UK"

    def test_short_keywords_need_word_boundaries(self) -> None:
        """"uk" inside another word does not mean the United Kingdom."""
        assert parse_location("Ukrainian").country != "UK"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing(self, raw) -> None:
        """Missing nationality is Unknown everywhere."""
        assert parse_location(raw) == Location("Unknown", "Unknown", "Unknown")

    def test_unrecognised_text_is_kept(self) -> None:
        """Unmatched text becomes city and country, region Unknown."""
        assert parse_location("Martian") == Location("Martian", "Martian", "Unknown")
