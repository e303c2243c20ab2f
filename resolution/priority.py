"""
Source priority table: how much each source system is trusted when profiles
from several sources describe the same canonical artist.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterator, Optional, Sequence, TypeVar

from resolution.errors import UnknownSourceSystemError

MANUAL = "manual"
LEGACY = "legacy"
CONTENT_SYNC = "content_sync"
RAG = "rag"
SCRAPED = "scraped"

DEFAULT_PRIORITIES = MappingProxyType({
    MANUAL: 100,
    LEGACY: 80,
    CONTENT_SYNC: 70,
    RAG: 60,
    SCRAPED: 40,
})

P = TypeVar("P")


class SourcePriorityTable(Mapping):
    """Immutable source-system -> priority lookup (higher is more trusted)"""

    def __init__(self, priorities: Optional[Mapping] = None):
        self._priorities = MappingProxyType(dict(priorities if priorities is not None else DEFAULT_PRIORITIES))

    def __getitem__(self, source_system: str) -> int:
        return self._priorities[source_system]

    def __iter__(self) -> Iterator[str]:
        return iter(self._priorities)

    def __len__(self) -> int:
        return len(self._priorities)

    def priority_for(self, source_system: str) -> int:
        try:
            return self._priorities[source_system]
        except KeyError:
            raise UnknownSourceSystemError(source_system) from None

    def primary(self, items: Sequence[P]) -> Optional[P]:
        """Highest stamped ``source_priority`` wins; equal priorities keep input order"""
        ordered = sorted(items, key=lambda item: getattr(item, "source_priority", None) or 0, reverse=True)
        return ordered[0] if ordered else None

    def __repr__(self) -> str:
        return f"SourcePriorityTable({dict(self._priorities)!r})"


DEFAULT_PRIORITY_TABLE = SourcePriorityTable()
