"""
Tests for the canonical schema mappings.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.orm import configure_mappers

from models import CanonicalArtist


@pytest.fixture(scope="module", autouse=True)
def mappers() -> None:
    configure_mappers()


class TestCanonicalArtistRelationships:
    """Child collections load in a stable order."""

    @pytest.mark.parametrize("name,table", [
        ("profiles", "artist_profiles"),
        ("assets", "artist_assets"),
        ("gear", "artist_gear"),
        ("aliases", "artist_aliases"),
    ])
    def test_ordered_by_creation(self, name: str, table: str) -> None:
        """Equal-priority profiles and photos resolve to the oldest row first."""
        relationship = inspect(CanonicalArtist).relationships[name]

        assert [(column.table.name, column.name) for column in relationship.order_by] == [(table, "created_at")]
