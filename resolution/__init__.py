# resolution/__init__.py
from resolution.engine import ResolutionEngine
from resolution.normalizer import normalize, slugify, sort_key
from resolution.priority import DEFAULT_PRIORITY_TABLE, SourcePriorityTable
from resolution.projector import FlatArtist, LegacyArtistProjector
from resolution.schemas import ResolutionAction, ResolutionOutcome, SourceRecord
from resolution.scoring import best_match, score
from resolution.store import ArtistStore, DryRunArtistStore, SqlAlchemyArtistStore

__all__ = [
    "ResolutionEngine",
    "normalize",
    "slugify",
    "sort_key",
    "score",
    "best_match",
    "SourcePriorityTable",
    "DEFAULT_PRIORITY_TABLE",
    "LegacyArtistProjector",
    "FlatArtist",
    "SourceRecord",
    "ResolutionAction",
    "ResolutionOutcome",
    "ArtistStore",
    "SqlAlchemyArtistStore",
    "DryRunArtistStore",
]
