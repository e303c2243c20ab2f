"""
Canonical store accessor.

``ArtistStore`` is the only I/O boundary of the reconciliation core. The
resolution engine talks to it through narrow read/write methods so it can run
against PostgreSQL (``SqlAlchemyArtistStore``), against an in-memory overlay
during dry runs (``DryRunArtistStore``), or against a test fake.
"""

import copy
import functools
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, Tuple
from uuid import UUID

from sqlalchemy import exists, func, select, text, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models.artist import ArtistAlias, CanonicalArtist
from models.artist_asset import ArtistAsset, ArtistGear
from models.artist_profile import ArtistProfile
from models.identity import ArtistMergeCandidate, ArtistMigrationLog, ArtistSourceMap
from resolution.errors import SlugConflictError, StoreError, TransientStoreError
from resolution.schemas import (
    AliasView,
    ArtistAggregate,
    ArtistCandidate,
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
)

logger = logging.getLogger(__name__)


class ArtistStore(Protocol):
    # Identity graph
    async def find_mapping(self, source_system: str, source_record_id: str) -> Optional[SourceLink]: ...
    async def link_source(self, link: SourceLink, source_table: str) -> None: ...

    # Canonical artists
    async def find_artist_by_slug(self, slug: str) -> Optional[ArtistCandidate]: ...
    async def list_candidates(self) -> List[ArtistCandidate]: ...
    async def create_artist(self, artist: NewArtist) -> UUID: ...
    async def mark_needs_review(self, artist_id: UUID, needs_review: bool) -> None: ...
    async def add_alias(self, artist_id: UUID, alias_name: str, alias_type: str, source_system: str) -> None: ...

    # Per-source data
    async def upsert_profile(
        self,
        artist_id: UUID,
        source_system: str,
        source_record_id: str,
        profile: ProfileData,
        source_priority: int,
        confidence_score: float,
        payload: Dict[str, Any],
    ) -> None: ...
    async def find_primary_asset(self, artist_id: UUID, asset_type: str) -> Optional[PrimaryAsset]: ...
    async def clear_primary_asset(self, artist_id: UUID, asset_type: str) -> None: ...
    async def upsert_asset(
        self, artist_id: UUID, source_system: str, source_record_id: str, asset: AssetData, is_primary: bool
    ) -> None: ...
    async def upsert_gear(self, artist_id: UUID, source_system: str, gear: GearData) -> None: ...

    # Review queue
    async def find_pending_candidate(self, source_system: str, source_record_id: str) -> Optional[MergeCandidateView]: ...
    async def add_merge_candidate(self, draft: MergeCandidateDraft) -> UUID: ...
    async def refresh_merge_candidate(self, candidate_id: UUID, draft: MergeCandidateDraft) -> None: ...
    async def get_merge_candidate(self, candidate_id: UUID) -> Optional[MergeCandidateView]: ...
    async def set_candidate_status(self, candidate_id: UUID, status: str, reviewed_by: Optional[str]) -> None: ...

    # Audit
    async def append_log(self, entry: MigrationLogEntry) -> None: ...

    # Read side and reporting
    async def load_artist(self, slug: str) -> Optional[ArtistAggregate]: ...
    async def list_artist_summaries(self) -> List[ArtistAggregate]: ...
    async def count_summary(self) -> Dict[str, Any]: ...
    async def find_orphan_mappings(self) -> List[str]: ...
    async def find_artists_without_profiles(self) -> List[str]: ...
    async def find_duplicate_primary_assets(self) -> List[str]: ...
    async def ping(self) -> None: ...

    # Transactions
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


# =============================================================================
# SQLALCHEMY STORE
# =============================================================================

def _store_call(func):
    """Translate SQLAlchemy failures into store errors"""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except StoreError:
            raise
        except OperationalError as e:
            raise TransientStoreError(f"{func.__name__}: {e}") from e
        except DBAPIError as e:
            if e.connection_invalidated:
                raise TransientStoreError(f"{func.__name__}: {e}") from e
            raise StoreError(f"{func.__name__}: {e}") from e
        except SQLAlchemyError as e:
            raise StoreError(f"{func.__name__}: {e}") from e

    return wrapper


def _candidate_view(row: ArtistMergeCandidate) -> MergeCandidateView:
    return MergeCandidateView(
        candidate_id=row.candidate_id,
        artist_a_id=row.artist_a_id,
        artist_b_id=row.artist_b_id,
        source_system=row.source_system,
        source_record_id=row.source_record_id,
        candidate_name=row.candidate_name,
        match_score=row.match_score,
        match_reasons=row.match_reasons or [],
        source_payload=row.source_payload or {},
        status=row.status,
        reviewed_at=row.reviewed_at,
        reviewed_by=row.reviewed_by,
    )


class SqlAlchemyArtistStore:
    """ArtistStore over the PostgreSQL canonical schema"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @_store_call
    async def find_mapping(self, source_system: str, source_record_id: str) -> Optional[SourceLink]:
        stmt = select(ArtistSourceMap).where(
            ArtistSourceMap.source_system == source_system,
            ArtistSourceMap.source_record_id == source_record_id,
            ArtistSourceMap.artist_id.is_not(None),
        )
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        if not row:
            return None
        return SourceLink(
            source_system=row.source_system,
            source_record_id=row.source_record_id,
            artist_id=row.artist_id,
            match_confidence=row.match_confidence,
            match_method=row.match_method,
        )

    @_store_call
    async def link_source(self, link: SourceLink, source_table: str) -> None:
        stmt = pg_insert(ArtistSourceMap).values(
            source_system=link.source_system,
            source_table=source_table,
            source_record_id=link.source_record_id,
            artist_id=link.artist_id,
            match_confidence=link.match_confidence,
            match_method=link.match_method.value,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_source_record",
            set_={
                "artist_id": stmt.excluded.artist_id,
                "match_confidence": stmt.excluded.match_confidence,
                "match_method": stmt.excluded.match_method,
                "updated_at": func.now(),
            },
        )
        await self.session.execute(stmt)

    @_store_call
    async def find_artist_by_slug(self, slug: str) -> Optional[ArtistCandidate]:
        stmt = select(CanonicalArtist.artist_id, CanonicalArtist.canonical_name, CanonicalArtist.slug).where(
            CanonicalArtist.slug == slug
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if not row:
            return None
        return ArtistCandidate(artist_id=row.artist_id, canonical_name=row.canonical_name, slug=row.slug)

    @_store_call
    async def list_candidates(self) -> List[ArtistCandidate]:
        stmt = select(CanonicalArtist.artist_id, CanonicalArtist.canonical_name, CanonicalArtist.slug)
        result = await self.session.execute(stmt)
        return [
            ArtistCandidate(artist_id=row.artist_id, canonical_name=row.canonical_name, slug=row.slug)
            for row in result
        ]

    @_store_call
    async def create_artist(self, artist: NewArtist) -> UUID:
        row = CanonicalArtist(**artist.model_dump())
        try:
            # SAVEPOINT so a lost slug race does not poison the record's transaction
            async with self.session.begin_nested():
                self.session.add(row)
                await self.session.flush()
        except IntegrityError as e:
            logger.warning(f"Slug already taken on create: {artist.slug}")
            raise SlugConflictError(artist.slug) from e
        return row.artist_id

    @_store_call
    async def mark_needs_review(self, artist_id: UUID, needs_review: bool) -> None:
        await self.session.execute(
            update(CanonicalArtist).where(CanonicalArtist.artist_id == artist_id).values(needs_review=needs_review)
        )

    @_store_call
    async def add_alias(self, artist_id: UUID, alias_name: str, alias_type: str, source_system: str) -> None:
        self.session.add(ArtistAlias(
            artist_id=artist_id,
            alias_name=alias_name,
            alias_type=alias_type,
            source_system=source_system,
        ))
        await self.session.flush()

    @_store_call
    async def upsert_profile(
        self,
        artist_id: UUID,
        source_system: str,
        source_record_id: str,
        profile: ProfileData,
        source_priority: int,
        confidence_score: float,
        payload: Dict[str, Any],
    ) -> None:
        values = profile.model_dump(mode="json")
        values.update(
            artist_id=artist_id,
            source_system=source_system,
            source_record_id=source_record_id,
            source_priority=source_priority,
            confidence_score=confidence_score,
            source_payload=payload,
        )
        stmt = pg_insert(ArtistProfile).values(**values)
        updates = {key: stmt.excluded[key] for key in values if key not in ("artist_id", "source_system", "source_record_id")}
        updates["last_synced_at"] = func.now()
        updates["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(constraint="uq_profile_source_record", set_=updates)
        await self.session.execute(stmt)

    @_store_call
    async def find_primary_asset(self, artist_id: UUID, asset_type: str) -> Optional[PrimaryAsset]:
        stmt = (
            select(ArtistAsset.source_system, ArtistAsset.source_record_id)
            .where(
                ArtistAsset.artist_id == artist_id,
                ArtistAsset.asset_type == asset_type,
                ArtistAsset.is_primary.is_(True),
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        if not row:
            return None
        return PrimaryAsset(source_system=row.source_system, source_record_id=row.source_record_id)

    @_store_call
    async def clear_primary_asset(self, artist_id: UUID, asset_type: str) -> None:
        await self.session.execute(
            update(ArtistAsset)
            .where(ArtistAsset.artist_id == artist_id, ArtistAsset.asset_type == asset_type)
            .values(is_primary=False)
        )

    @_store_call
    async def upsert_asset(
        self, artist_id: UUID, source_system: str, source_record_id: str, asset: AssetData, is_primary: bool
    ) -> None:
        values = asset.model_dump()
        values.update(
            artist_id=artist_id,
            source_system=source_system,
            source_record_id=source_record_id,
            is_primary=is_primary,
        )
        stmt = pg_insert(ArtistAsset).values(**values)
        updates = {key: stmt.excluded[key] for key in values if key not in ("artist_id", "source_system", "source_record_id")}
        updates["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(constraint="uq_asset_source_record", set_=updates)
        await self.session.execute(stmt)

    @_store_call
    async def upsert_gear(self, artist_id: UUID, source_system: str, gear: GearData) -> None:
        stmt = pg_insert(ArtistGear).values(
            artist_id=artist_id,
            gear_category=gear.category,
            gear_items=gear.items,
            rider_notes=gear.rider_notes,
            source_system=source_system,
        )
        stmt = stmt.on_conflict_do_update(
            constraint="uq_gear_category_source",
            set_={
                "gear_items": stmt.excluded.gear_items,
                "rider_notes": stmt.excluded.rider_notes,
                "updated_at": func.now(),
            },
        )
        await self.session.execute(stmt)

    @_store_call
    async def find_pending_candidate(self, source_system: str, source_record_id: str) -> Optional[MergeCandidateView]:
        stmt = select(ArtistMergeCandidate).where(
            ArtistMergeCandidate.source_system == source_system,
            ArtistMergeCandidate.source_record_id == source_record_id,
            ArtistMergeCandidate.status == "pending",
        )
        result = await self.session.execute(stmt)
        row = result.scalars().first()
        return _candidate_view(row) if row else None

    @_store_call
    async def add_merge_candidate(self, draft: MergeCandidateDraft) -> UUID:
        row = ArtistMergeCandidate(status="pending", **draft.model_dump())
        self.session.add(row)
        await self.session.flush()
        return row.candidate_id

    @_store_call
    async def refresh_merge_candidate(self, candidate_id: UUID, draft: MergeCandidateDraft) -> None:
        await self.session.execute(
            update(ArtistMergeCandidate)
            .where(ArtistMergeCandidate.candidate_id == candidate_id)
            .values(
                artist_a_id=draft.artist_a_id,
                candidate_name=draft.candidate_name,
                match_score=draft.match_score,
                match_reasons=draft.match_reasons,
                source_payload=draft.source_payload,
            )
        )

    @_store_call
    async def get_merge_candidate(self, candidate_id: UUID) -> Optional[MergeCandidateView]:
        row = await self.session.get(ArtistMergeCandidate, candidate_id)
        return _candidate_view(row) if row else None

    @_store_call
    async def set_candidate_status(self, candidate_id: UUID, status: str, reviewed_by: Optional[str]) -> None:
        await self.session.execute(
            update(ArtistMergeCandidate)
            .where(ArtistMergeCandidate.candidate_id == candidate_id)
            .values(status=status, reviewed_by=reviewed_by, reviewed_at=datetime.now(timezone.utc))
        )

    @_store_call
    async def append_log(self, entry: MigrationLogEntry) -> None:
        self.session.add(ArtistMigrationLog(**entry.model_dump()))
        await self.session.flush()

    @_store_call
    async def load_artist(self, slug: str) -> Optional[ArtistAggregate]:
        stmt = (
            select(CanonicalArtist)
            .where(CanonicalArtist.slug == slug)
            .options(
                selectinload(CanonicalArtist.profiles),
                selectinload(CanonicalArtist.assets),
                selectinload(CanonicalArtist.gear),
                selectinload(CanonicalArtist.aliases),
            )
        )
        result = await self.session.execute(stmt)
        artist = result.scalar_one_or_none()
        if not artist:
            return None
        return self._aggregate(artist)

    @_store_call
    async def list_artist_summaries(self) -> List[ArtistAggregate]:
        stmt = (
            select(CanonicalArtist)
            .options(selectinload(CanonicalArtist.profiles), selectinload(CanonicalArtist.assets))
            .order_by(CanonicalArtist.rank.asc().nulls_last(), CanonicalArtist.canonical_name, CanonicalArtist.slug)
        )
        result = await self.session.execute(stmt)
        return [self._aggregate(artist, details=False) for artist in result.scalars().all()]

    @staticmethod
    def _aggregate(artist: CanonicalArtist, details: bool = True) -> ArtistAggregate:
        # gear and aliases are only loaded for the single-artist read
        return ArtistAggregate(
            artist_id=artist.artist_id,
            canonical_name=artist.canonical_name,
            sort_name=artist.sort_name,
            slug=artist.slug,
            real_name=artist.real_name,
            city=artist.city,
            country=artist.country,
            region=artist.region,
            active_years=artist.active_years,
            rank=artist.rank,
            is_active=bool(artist.is_active),
            needs_review=bool(artist.needs_review),
            profiles=[
                ProfileView(
                    bio_long=p.bio_long,
                    bio_short=p.bio_short,
                    press_notes=p.press_notes,
                    known_for=p.known_for,
                    labels=p.labels or [],
                    collaborators=p.collaborators or [],
                    influences=p.influences or [],
                    crews=p.crews or [],
                    subgenres=p.subgenres or [],
                    tags=p.tags or [],
                    top_tracks=p.top_tracks or [],
                    career_highlights=p.career_highlights or [],
                    key_releases=p.key_releases or [],
                    social_links=p.social_links or {},
                    source_system=p.source_system,
                    source_record_id=p.source_record_id,
                    source_priority=p.source_priority or 0,
                    confidence_score=p.confidence_score or 0.0,
                )
                for p in artist.profiles
            ],
            assets=[
                AssetView(
                    url=a.url,
                    asset_type=a.asset_type,
                    alt_text=a.alt_text,
                    author=a.author,
                    license=a.license,
                    license_url=a.license_url,
                    source_url=a.source_url,
                    source_name=a.source_name,
                    copyright_status=a.copyright_status or "unknown",
                    is_primary=bool(a.is_primary),
                    source_system=a.source_system,
                )
                for a in artist.assets
            ],
            gear=[
                GearView(gear_category=g.gear_category, gear_items=g.gear_items or [], rider_notes=g.rider_notes)
                for g in artist.gear
            ] if details else [],
            aliases=[
                AliasView(alias_name=a.alias_name, alias_type=a.alias_type) for a in artist.aliases
            ] if details else [],
        )

    @_store_call
    async def count_summary(self) -> Dict[str, Any]:
        async def count(model, *criteria) -> int:
            stmt = select(func.count()).select_from(model)
            if criteria:
                stmt = stmt.where(*criteria)
            return await self.session.scalar(stmt) or 0

        per_source = await self.session.execute(
            select(ArtistSourceMap.source_system, func.count())
            .group_by(ArtistSourceMap.source_system)
            .order_by(ArtistSourceMap.source_system)
        )
        return {
            "artists": await count(CanonicalArtist),
            "profiles": await count(ArtistProfile),
            "sourceMappings": await count(ArtistSourceMap),
            "pendingReviews": await count(ArtistMergeCandidate, ArtistMergeCandidate.status == "pending"),
            "mappingsBySource": {system: total for system, total in per_source},
        }

    @_store_call
    async def find_orphan_mappings(self) -> List[str]:
        stmt = (
            select(ArtistSourceMap.source_system, ArtistSourceMap.source_record_id)
            .outerjoin(CanonicalArtist, CanonicalArtist.artist_id == ArtistSourceMap.artist_id)
            .where(CanonicalArtist.artist_id.is_(None))
        )
        result = await self.session.execute(stmt)
        return [f"{row.source_system}:{row.source_record_id}" for row in result]

    @_store_call
    async def find_artists_without_profiles(self) -> List[str]:
        has_profile = exists().where(ArtistProfile.artist_id == CanonicalArtist.artist_id)
        stmt = select(CanonicalArtist.slug).where(~has_profile).order_by(CanonicalArtist.slug)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    @_store_call
    async def find_duplicate_primary_assets(self) -> List[str]:
        stmt = (
            select(CanonicalArtist.slug, ArtistAsset.asset_type)
            .join(ArtistAsset, ArtistAsset.artist_id == CanonicalArtist.artist_id)
            .where(ArtistAsset.is_primary.is_(True))
            .group_by(CanonicalArtist.slug, ArtistAsset.asset_type)
            .having(func.count() > 1)
        )
        result = await self.session.execute(stmt)
        return [f"{row.slug}:{row.asset_type}" for row in result]

    @_store_call
    async def ping(self) -> None:
        await self.session.execute(text("SELECT 1"))

    @_store_call
    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


# =============================================================================
# DRY-RUN OVERLAY
# =============================================================================

@dataclass
class _Overlay:
    artists: Dict[str, ArtistCandidate] = field(default_factory=dict)
    mappings: Dict[Tuple[str, str], SourceLink] = field(default_factory=dict)
    # None marks a primary cleared during this run
    primaries: Dict[Tuple[UUID, str], Optional[PrimaryAsset]] = field(default_factory=dict)
    candidates: Dict[UUID, MergeCandidateView] = field(default_factory=dict)
    needs_review: Dict[UUID, bool] = field(default_factory=dict)
    writes: int = 0


class DryRunArtistStore:
    """Keeps every write in memory on top of a real store.

    Reads see the overlay first, so later records in a dry run observe the
    decisions of earlier ones exactly as a committing run would. Only
    migration-log appends reach the wrapped store.
    """

    def __init__(self, inner: ArtistStore):
        self.inner = inner
        self._overlay = _Overlay()
        self._checkpoint = copy.deepcopy(self._overlay)

    @property
    def suppressed_writes(self) -> int:
        return self._overlay.writes

    async def find_mapping(self, source_system: str, source_record_id: str) -> Optional[SourceLink]:
        staged = self._overlay.mappings.get((source_system, source_record_id))
        if staged:
            return staged
        return await self.inner.find_mapping(source_system, source_record_id)

    async def link_source(self, link: SourceLink, source_table: str) -> None:
        self._overlay.mappings[(link.source_system, link.source_record_id)] = link
        self._overlay.writes += 1

    async def find_artist_by_slug(self, slug: str) -> Optional[ArtistCandidate]:
        staged = self._overlay.artists.get(slug)
        if staged:
            return staged
        return await self.inner.find_artist_by_slug(slug)

    async def list_candidates(self) -> List[ArtistCandidate]:
        return [*await self.inner.list_candidates(), *self._overlay.artists.values()]

    async def create_artist(self, artist: NewArtist) -> UUID:
        if await self.find_artist_by_slug(artist.slug):
            raise SlugConflictError(artist.slug)
        artist_id = uuid.uuid4()
        self._overlay.artists[artist.slug] = ArtistCandidate(
            artist_id=artist_id, canonical_name=artist.canonical_name, slug=artist.slug
        )
        self._overlay.writes += 1
        return artist_id

    async def mark_needs_review(self, artist_id: UUID, needs_review: bool) -> None:
        self._overlay.needs_review[artist_id] = needs_review
        self._overlay.writes += 1

    async def add_alias(self, artist_id: UUID, alias_name: str, alias_type: str, source_system: str) -> None:
        self._overlay.writes += 1

    async def upsert_profile(self, artist_id, source_system, source_record_id, profile, source_priority,
                             confidence_score, payload) -> None:
        self._overlay.writes += 1

    async def find_primary_asset(self, artist_id: UUID, asset_type: str) -> Optional[PrimaryAsset]:
        key = (artist_id, asset_type)
        if key in self._overlay.primaries:
            return self._overlay.primaries[key]
        return await self.inner.find_primary_asset(artist_id, asset_type)

    async def clear_primary_asset(self, artist_id: UUID, asset_type: str) -> None:
        self._overlay.primaries[(artist_id, asset_type)] = None
        self._overlay.writes += 1

    async def upsert_asset(self, artist_id, source_system, source_record_id, asset: AssetData, is_primary: bool) -> None:
        if is_primary:
            self._overlay.primaries[(artist_id, asset.asset_type)] = PrimaryAsset(
                source_system=source_system, source_record_id=source_record_id
            )
        self._overlay.writes += 1

    async def upsert_gear(self, artist_id: UUID, source_system: str, gear: GearData) -> None:
        self._overlay.writes += 1

    async def find_pending_candidate(self, source_system: str, source_record_id: str) -> Optional[MergeCandidateView]:
        for candidate in self._overlay.candidates.values():
            if (candidate.source_system, candidate.source_record_id) == (source_system, source_record_id) \
                    and candidate.status == "pending":
                return candidate
        return await self.inner.find_pending_candidate(source_system, source_record_id)

    async def add_merge_candidate(self, draft: MergeCandidateDraft) -> UUID:
        candidate_id = uuid.uuid4()
        self._overlay.candidates[candidate_id] = MergeCandidateView(candidate_id=candidate_id, **draft.model_dump())
        self._overlay.writes += 1
        return candidate_id

    async def refresh_merge_candidate(self, candidate_id: UUID, draft: MergeCandidateDraft) -> None:
        self._overlay.candidates[candidate_id] = MergeCandidateView(candidate_id=candidate_id, **draft.model_dump())
        self._overlay.writes += 1

    async def get_merge_candidate(self, candidate_id: UUID) -> Optional[MergeCandidateView]:
        staged = self._overlay.candidates.get(candidate_id)
        if staged:
            return staged
        return await self.inner.get_merge_candidate(candidate_id)

    async def set_candidate_status(self, candidate_id: UUID, status: str, reviewed_by: Optional[str]) -> None:
        candidate = await self.get_merge_candidate(candidate_id)
        if candidate:
            self._overlay.candidates[candidate_id] = candidate.model_copy(
                update={"status": status, "reviewed_by": reviewed_by, "reviewed_at": datetime.now(timezone.utc)}
            )
        self._overlay.writes += 1

    async def append_log(self, entry: MigrationLogEntry) -> None:
        details = {**entry.details, "dry_run": True}
        await self.inner.append_log(entry.model_copy(update={"details": details}))

    async def load_artist(self, slug: str) -> Optional[ArtistAggregate]:
        return await self.inner.load_artist(slug)

    async def list_artist_summaries(self) -> List[ArtistAggregate]:
        return await self.inner.list_artist_summaries()

    async def count_summary(self) -> Dict[str, Any]:
        return await self.inner.count_summary()

    async def find_orphan_mappings(self) -> List[str]:
        return await self.inner.find_orphan_mappings()

    async def find_artists_without_profiles(self) -> List[str]:
        return await self.inner.find_artists_without_profiles()

    async def find_duplicate_primary_assets(self) -> List[str]:
        return await self.inner.find_duplicate_primary_assets()

    async def ping(self) -> None:
        await self.inner.ping()

    async def commit(self) -> None:
        await self.inner.commit()
        self._checkpoint = copy.deepcopy(self._overlay)

    async def rollback(self) -> None:
        await self.inner.rollback()
        self._overlay = copy.deepcopy(self._checkpoint)
