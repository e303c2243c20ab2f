"""
In-memory stand-ins for the canonical store and the source readers.
"""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Optional
from uuid import UUID

from resolution.errors import SlugConflictError, SourceFetchError, StoreError, TransientStoreError
from resolution.schemas import (
    AliasView,
    ArtistAggregate,
    ArtistCandidate,
    ArtistFields,
    AssetData,
    AssetView,
    GearData,
    GearView,
    MergeCandidateDraft,
    MergeCandidateView,
    MigrationLogEntry,
    NewArtist,
    PrimaryAsset,
    ProfileData,
    ProfileView,
    SourceLink,
    SourceRecord,
)


@dataclass
class _State:
    artists: dict[UUID, dict[str, Any]] = field(default_factory=dict)
    mappings: dict[tuple[str, str], tuple[SourceLink, str]] = field(default_factory=dict)
    profiles: dict[tuple[UUID, str, str], ProfileView] = field(default_factory=dict)
    assets: dict[tuple[UUID, str, str], AssetView] = field(default_factory=dict)
    asset_records: dict[tuple[UUID, str, str], str] = field(default_factory=dict)
    gear: dict[tuple[UUID, str, str], GearView] = field(default_factory=dict)
    aliases: list[tuple[UUID, AliasView]] = field(default_factory=list)
    candidates: dict[UUID, MergeCandidateView] = field(default_factory=dict)
    logs: list[MigrationLogEntry] = field(default_factory=list)


class InMemoryArtistStore:
    """
    ArtistStore kept in dictionaries, with commit/rollback snapshots.

    ``transient_failures`` makes the next N profile writes raise
    TransientStoreError; ``broken_records`` makes profile writes for those
    source record ids raise StoreError every time.
    """

    def __init__(self) -> None:
        self.state = _State()
        self._committed = _State()
        self.commits = 0
        self.rollbacks = 0
        self.transient_failures = 0
        self.broken_records: set[str] = set()
        self.ping_error: Optional[StoreError] = None

    # -- helpers for tests -------------------------------------------------

    def seed_artist(self, name: str, slug: str, **fields: Any) -> UUID:
        artist_id = uuid.uuid4()
        self.state.artists[artist_id] = {
            "canonical_name": name,
            "sort_name": name,
            "slug": slug,
            "needs_review": False,
            **fields,
        }
        self._commit_state()
        return artist_id

    def artist_by_slug(self, slug: str) -> Optional[dict[str, Any]]:
        for artist_id, artist in self.state.artists.items():
            if artist["slug"] == slug:
                return {"artist_id": artist_id, **artist}
        return None

    def _commit_state(self) -> None:
        self._committed = copy.deepcopy(self.state)

    # -- identity graph ----------------------------------------------------

    async def find_mapping(self, source_system: str, source_record_id: str) -> Optional[SourceLink]:
        entry = self.state.mappings.get((source_system, source_record_id))
        return entry[0] if entry else None

    async def link_source(self, link: SourceLink, source_table: str) -> None:
        self.state.mappings[(link.source_system, link.source_record_id)] = (link, source_table)

    # -- canonical artists -------------------------------------------------

    async def find_artist_by_slug(self, slug: str) -> Optional[ArtistCandidate]:
        artist = self.artist_by_slug(slug)
        if not artist:
            return None
        return ArtistCandidate(artist_id=artist["artist_id"], canonical_name=artist["canonical_name"], slug=slug)

    async def list_candidates(self) -> list[ArtistCandidate]:
        return [
            ArtistCandidate(artist_id=artist_id, canonical_name=a["canonical_name"], slug=a["slug"])
            for artist_id, a in self.state.artists.items()
        ]

    async def create_artist(self, artist: NewArtist) -> UUID:
        if self.artist_by_slug(artist.slug):
            raise SlugConflictError(artist.slug)
        artist_id = uuid.uuid4()
        self.state.artists[artist_id] = {**artist.model_dump(), "needs_review": False}
        return artist_id

    async def mark_needs_review(self, artist_id: UUID, needs_review: bool) -> None:
        self.state.artists[artist_id]["needs_review"] = needs_review

    async def add_alias(self, artist_id: UUID, alias_name: str, alias_type: str, source_system: str) -> None:
        self.state.aliases.append((artist_id, AliasView(alias_name=alias_name, alias_type=alias_type)))

    # -- per-source data ---------------------------------------------------

    async def upsert_profile(
        self,
        artist_id: UUID,
        source_system: str,
        source_record_id: str,
        profile: ProfileData,
        source_priority: int,
        confidence_score: float,
        payload: dict[str, Any],
    ) -> None:
        if source_record_id in self.broken_records:
            raise StoreError(f"upsert_profile: constraint violated for {source_record_id}")
        if self.transient_failures > 0:
            self.transient_failures -= 1
            raise TransientStoreError("upsert_profile: connection reset")
        self.state.profiles[(artist_id, source_system, source_record_id)] = ProfileView(
            **profile.model_dump(),
            source_system=source_system,
            source_record_id=source_record_id,
            source_priority=source_priority,
            confidence_score=confidence_score,
        )

    async def find_primary_asset(self, artist_id: UUID, asset_type: str) -> Optional[PrimaryAsset]:
        for (owner, system, record_id), asset in self.state.assets.items():
            if owner == artist_id and asset.asset_type == asset_type and asset.is_primary:
                return PrimaryAsset(source_system=system, source_record_id=record_id)
        return None

    async def clear_primary_asset(self, artist_id: UUID, asset_type: str) -> None:
        for key, asset in self.state.assets.items():
            if key[0] == artist_id and asset.asset_type == asset_type:
                self.state.assets[key] = asset.model_copy(update={"is_primary": False})

    async def upsert_asset(
        self, artist_id: UUID, source_system: str, source_record_id: str, asset: AssetData, is_primary: bool
    ) -> None:
        self.state.assets[(artist_id, source_system, source_record_id)] = AssetView(
            **asset.model_dump(), is_primary=is_primary, source_system=source_system
        )

    async def upsert_gear(self, artist_id: UUID, source_system: str, gear: GearData) -> None:
        self.state.gear[(artist_id, gear.category, source_system)] = GearView(
            gear_category=gear.category, gear_items=gear.items, rider_notes=gear.rider_notes
        )

    # -- review queue ------------------------------------------------------

    async def find_pending_candidate(self, source_system: str, source_record_id: str) -> Optional[MergeCandidateView]:
        for candidate in self.state.candidates.values():
            if (candidate.source_system, candidate.source_record_id, candidate.status) == (
                source_system, source_record_id, "pending"
            ):
                return candidate
        return None

    async def add_merge_candidate(self, draft: MergeCandidateDraft) -> UUID:
        candidate_id = uuid.uuid4()
        self.state.candidates[candidate_id] = MergeCandidateView(candidate_id=candidate_id, **draft.model_dump())
        return candidate_id

    async def refresh_merge_candidate(self, candidate_id: UUID, draft: MergeCandidateDraft) -> None:
        current = self.state.candidates[candidate_id]
        self.state.candidates[candidate_id] = current.model_copy(update=draft.model_dump())

    async def get_merge_candidate(self, candidate_id: UUID) -> Optional[MergeCandidateView]:
        return self.state.candidates.get(candidate_id)

    async def set_candidate_status(self, candidate_id: UUID, status: str, reviewed_by: Optional[str]) -> None:
        self.state.candidates[candidate_id] = self.state.candidates[candidate_id].model_copy(
            update={"status": status, "reviewed_by": reviewed_by, "reviewed_at": datetime.now(timezone.utc)}
        )

    # -- audit -------------------------------------------------------------

    async def append_log(self, entry: MigrationLogEntry) -> None:
        self.state.logs.append(entry)

    # -- read side and reporting -------------------------------------------

    async def load_artist(self, slug: str) -> Optional[ArtistAggregate]:
        artist = self.artist_by_slug(slug)
        if not artist:
            return None
        artist_id = artist["artist_id"]
        return ArtistAggregate(
            **{k: v for k, v in artist.items() if k in ArtistAggregate.model_fields},
            profiles=[p for (owner, _, _), p in self.state.profiles.items() if owner == artist_id],
            assets=[a for (owner, _, _), a in self.state.assets.items() if owner == artist_id],
            gear=[g for (owner, _, _), g in self.state.gear.items() if owner == artist_id],
            aliases=[alias for owner, alias in self.state.aliases if owner == artist_id],
        )

    async def list_artist_summaries(self) -> list[ArtistAggregate]:
        summaries = []
        for artist in self.state.artists.values():
            aggregate = await self.load_artist(artist["slug"])
            summaries.append(aggregate.model_copy(update={"gear": [], "aliases": []}))
        return sorted(summaries, key=lambda a: (a.rank is None, a.rank or 0, a.canonical_name, a.slug))

    async def count_summary(self) -> dict[str, Any]:
        by_source: dict[str, int] = {}
        for source_system, _ in self.state.mappings:
            by_source[source_system] = by_source.get(source_system, 0) + 1
        return {
            "artists": len(self.state.artists),
            "profiles": len(self.state.profiles),
            "sourceMappings": len(self.state.mappings),
            "pendingReviews": sum(1 for c in self.state.candidates.values() if c.status == "pending"),
            "mappingsBySource": dict(sorted(by_source.items())),
        }

    async def find_orphan_mappings(self) -> list[str]:
        return [
            f"{system}:{record_id}"
            for (system, record_id), (link, _) in self.state.mappings.items()
            if link.artist_id not in self.state.artists
        ]

    async def find_artists_without_profiles(self) -> list[str]:
        with_profiles = {owner for owner, _, _ in self.state.profiles}
        return sorted(a["slug"] for artist_id, a in self.state.artists.items() if artist_id not in with_profiles)

    async def find_duplicate_primary_assets(self) -> list[str]:
        counts: dict[tuple[str, str], int] = {}
        for (owner, _, _), asset in self.state.assets.items():
            if asset.is_primary:
                key = (self.state.artists[owner]["slug"], asset.asset_type)
                counts[key] = counts.get(key, 0) + 1
        return [f"{slug}:{asset_type}" for (slug, asset_type), n in counts.items() if n > 1]

    async def ping(self) -> None:
        if self.ping_error:
            raise self.ping_error

    # -- transactions ------------------------------------------------------

    async def commit(self) -> None:
        self.commits += 1
        self._commit_state()

    async def rollback(self) -> None:
        self.rollbacks += 1
        self.state = copy.deepcopy(self._committed)


class ListReader:
    """SourceReader over a list of prepared records"""

    def __init__(
        self,
        source_system: str,
        records: list[SourceRecord],
        fail_at_offset: Optional[int] = None,
        on_fetch: Optional[Callable[[int], None]] = None,
    ) -> None:
        self.source_system = source_system
        self.source_table = f"{source_system}_fixture"
        self.records = records
        self.fail_at_offset = fail_at_offset
        self.on_fetch = on_fetch
        self.fetched_offsets: list[int] = []

    async def fetch_page(self, offset: int, limit: int) -> list[SourceRecord]:
        self.fetched_offsets.append(offset)
        if self.on_fetch:
            self.on_fetch(offset)
        if offset == self.fail_at_offset:
            raise SourceFetchError(self.source_system, offset, ConnectionError("source unavailable"))
        return self.records[offset:offset + limit]

    def to_record(self, row: SourceRecord) -> SourceRecord:
        return row

    async def count(self) -> int:
        return len(self.records)


def make_record(
    source_system: str,
    source_record_id: str,
    name: str,
    *,
    bio: Optional[str] = None,
    known_for: Optional[str] = None,
    real_name: Optional[str] = None,
    photo_url: Optional[str] = None,
    gear: Optional[list[GearData]] = None,
    with_profile: bool = True,
) -> SourceRecord:
    """Small SourceRecord builder for engine and runner tests"""
    return SourceRecord(
        source_system=source_system,
        source_table=f"{source_system}_fixture",
        source_record_id=source_record_id,
        candidate_name=name,
        payload={"id": source_record_id, "name": name},
        artist=ArtistFields(real_name=real_name),
        profile=ProfileData(bio_long=bio, known_for=known_for) if with_profile else None,
        asset=AssetData(url=photo_url) if photo_url else None,
        gear=gear or [],
    )
