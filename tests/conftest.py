"""
Pytest configuration and fixtures for reconciliation tests.
"""

import pytest

from resolution.engine import ResolutionEngine
from tests.fakes import InMemoryArtistStore


@pytest.fixture
def store() -> InMemoryArtistStore:
    """Empty in-memory canonical store."""
    return InMemoryArtistStore()


@pytest.fixture
def engine(store: InMemoryArtistStore) -> ResolutionEngine:
    """Resolution engine over the in-memory store with default priorities."""
    return ResolutionEngine(store)
