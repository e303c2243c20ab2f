"""
Tests for the source priority table.
"""

import pytest

from resolution.errors import ResolutionError, UnknownSourceSystemError
from resolution.priority import DEFAULT_PRIORITY_TABLE, SourcePriorityTable
from resolution.schemas import ProfileView


def profile(system: str, record_id: str, priority: int) -> ProfileView:
    return ProfileView(source_system=system, source_record_id=record_id, source_priority=priority)


class TestSourcePriorityTable:
    """Tests for lookups and primary selection."""

    def test_default_order(self) -> None:
        """manual > legacy > content_sync > rag > scraped."""
        table = DEFAULT_PRIORITY_TABLE
        assert table["manual"] == 100
        assert table["legacy"] == 80
        assert table["content_sync"] == 70
        assert table["rag"] == 60
        assert table["scraped"] == 40

    def test_unknown_system_raises(self) -> None:
        """Unknown source systems are a resolution error."""
        with pytest.raises(UnknownSourceSystemError) as exc_info:
            DEFAULT_PRIORITY_TABLE.priority_for("myspace")
        assert isinstance(exc_info.value, ResolutionError)
        assert exc_info.value.source_system == "myspace"

    def test_immutable(self) -> None:
        """The table cannot be modified after construction."""
        with pytest.raises(TypeError):
            DEFAULT_PRIORITY_TABLE["rag"] = 99

    def test_injected_table(self) -> None:
        """Alternate tables replace the defaults entirely."""
        table = SourcePriorityTable({"rag": 90, "legacy": 10})
        assert table.priority_for("rag") == 90
        assert "manual" not in table
        assert len(table) == 2

    def test_primary_is_highest_priority(self) -> None:
        """The profile with the highest stamped priority is primary."""
        profiles = [profile("rag", "1", 60), profile("legacy", "jeff-mills", 80), profile("scraped", "x", 40)]
        assert DEFAULT_PRIORITY_TABLE.primary(profiles).source_system == "legacy"

    def test_primary_is_stable_on_ties(self) -> None:
        """Equal priorities keep input order."""
        profiles = [profile("rag", "1", 60), profile("rag", "2", 60)]
        assert DEFAULT_PRIORITY_TABLE.primary(profiles).source_record_id == "1"

    def test_primary_of_nothing(self) -> None:
        """No profiles, no primary."""
        assert DEFAULT_PRIORITY_TABLE.primary([]) is None
