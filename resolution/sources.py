"""
Source adapters.

Each reader pages one upstream system as raw rows and turns a single row
into a ``SourceRecord`` with ``to_record``. A malformed row raises
``InvalidSourceRecordError`` there, so it fails alone instead of taking its
page down. These converters are the only code that knows what a legacy
catalog entry, a knowledge-base row or a content-sync row looks like.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol

from pydantic_core import to_jsonable_python
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.sources import ContentSync, DjArtist
from resolution.errors import InvalidSourceRecordError, SourceFetchError
from resolution.location import UNKNOWN, parse_location
from resolution.priority import CONTENT_SYNC, LEGACY, RAG
from resolution.schemas import (
    ArtistFields,
    AssetData,
    GearData,
    KeyRelease,
    ProfileData,
    SourceRecord,
)

logger = logging.getLogger(__name__)

_YEAR = re.compile(r"\b\d{4}\b")


class SourceReader(Protocol):
    source_system: str
    source_table: str

    async def fetch_page(self, offset: int, limit: int) -> List[Any]: ...
    def to_record(self, row: Any) -> SourceRecord: ...
    async def count(self) -> int: ...


# =============================================================================
# HELPERS
# =============================================================================

def _str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        raise TypeError(f"expected a list of strings, got {type(value).__name__}")
    return [str(item) for item in value if item not in (None, "")]


def _require_object(row: Any) -> Dict[str, Any]:
    if not isinstance(row, dict):
        raise TypeError(f"expected an object, got {type(row).__name__}")
    return row


def convert_row(source_system: str, converter: Callable[[Any], SourceRecord], row: Any) -> SourceRecord:
    """Run ``converter`` on one raw row; malformed rows raise ``InvalidSourceRecordError``"""
    try:
        return converter(row)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        # pydantic's ValidationError is a ValueError
        record_id = row.get("id") if isinstance(row, dict) else None
        raise InvalidSourceRecordError(source_system, str(record_id or "?"), str(e)) from e


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _year(value: Any) -> Optional[int]:
    # "1992", 1992, "1992/93" and "c. 1995" all appear in the catalog
    if isinstance(value, int):
        return value
    match = _YEAR.search(str(value or ""))
    return int(match.group(0)) if match else None


def _row_dict(row, model) -> Dict[str, Any]:
    return to_jsonable_python({column.name: getattr(row, column.name) for column in model.__table__.columns})


# =============================================================================
# CONVERTERS
# =============================================================================

def _legacy_profile(raw: Dict[str, Any]) -> ProfileData:
    return ProfileData(
        bio_long=_text(raw.get("bio")),
        known_for=_text(raw.get("knownFor")),
        labels=_str_list(raw.get("labels")),
        collaborators=_str_list(raw.get("collaborators")),
        influences=_str_list(raw.get("influences")),
        crews=_str_list(raw.get("crews")),
        subgenres=_str_list(raw.get("subgenres")),
        tags=_str_list(raw.get("tags")),
        top_tracks=_str_list(raw.get("topTracks")),
        career_highlights=_str_list(raw.get("careerHighlights")),
        key_releases=[
            KeyRelease(
                title=str(release["title"]),
                label=_text(release.get("label")),
                year=_year(release.get("year")),
                format=_text(release.get("format")),
            )
            for release in raw.get("keyReleases") or []
            if isinstance(release, dict) and release.get("title")
        ],
    )


def _legacy_gear(raw: Dict[str, Any]) -> List[GearData]:
    gear = []
    for category, key in (("studio", "studioGear"), ("live", "liveSetup"), ("dj", "djSetup")):
        items = _str_list(raw.get(key))
        if items:
            gear.append(GearData(category=category, items=items))

    # The catalog keeps one rider note per artist; it rides on the first gear row
    notes = _text(raw.get("riderNotes"))
    if notes:
        if gear:
            gear[0].rider_notes = notes
        else:
            gear.append(GearData(category="studio", rider_notes=notes))
    return gear


def legacy_to_record(raw: Dict[str, Any], source_table: str = "artists") -> SourceRecord:
    """Legacy catalog entry (camelCase artist object) -> SourceRecord"""
    raw = _require_object(raw)
    active = _text(raw.get("active"))
    image = raw.get("image") or {}

    asset = None
    if isinstance(image, dict) and image.get("url"):
        asset = AssetData(
            url=image["url"],
            alt_text=_text(raw.get("name")),
            author=_text(image.get("author")),
            license=_text(image.get("license")),
            license_url=_text(image.get("licenseUrl")),
            source_url=_text(image.get("sourceUrl")),
            source_name=_text(image.get("sourceName")),
        )

    return SourceRecord(
        source_system=LEGACY,
        source_table=source_table,
        source_record_id=str(raw.get("id") or ""),
        candidate_name=str(raw.get("name") or ""),
        payload=raw,
        artist=ArtistFields(
            real_name=_text(raw.get("realName")),
            city=_text(raw.get("city")),
            country=_text(raw.get("country")),
            region=_text(raw.get("region")),
            active_years=active if active != UNKNOWN else None,
            rank=raw.get("rank") if isinstance(raw.get("rank"), int) else None,
        ),
        profile=_legacy_profile(raw),
        asset=asset,
        gear=_legacy_gear(raw),
    )


def rag_to_record(row: Dict[str, Any]) -> SourceRecord:
    """Knowledge-base ``dj_artists`` row -> SourceRecord"""
    row = _require_object(row)
    location = parse_location(row.get("nationality"))
    known_for = _text(row.get("known_for"))

    return SourceRecord(
        source_system=RAG,
        source_table=DjArtist.__tablename__,
        source_record_id=str(row.get("id") or ""),
        candidate_name=str(row.get("artist_name") or ""),
        payload=row,
        artist=ArtistFields(
            real_name=_text(row.get("real_name")),
            city=location.city if location.city != UNKNOWN else None,
            country=location.country if location.country != UNKNOWN else None,
            region=location.region if location.region != UNKNOWN else None,
            active_years=_text(row.get("years_active")),
            rank=row.get("rank"),
        ),
        profile=ProfileData(
            bio_short=known_for,
            known_for=known_for,
            labels=_str_list(row.get("labels")),
            subgenres=_str_list(row.get("subgenres")),
            top_tracks=_str_list(row.get("top_tracks")),
        ),
    )


def content_sync_to_record(row: Dict[str, Any]) -> SourceRecord:
    """``content_sync`` artist row -> SourceRecord.

    ``entity_id`` is the legacy slug; the synced artist object, when present,
    lives in ``verified_data`` (preferred) or ``original_data``.
    """
    row = _require_object(row)
    data = row.get("verified_data") or row.get("original_data") or {}
    if not isinstance(data, dict):
        data = {}
    entity_id = str(row.get("entity_id") or "")
    name = _text(data.get("name")) or entity_id.replace("-", " ")

    asset = None
    if row.get("photo_url"):
        asset = AssetData(
            url=row["photo_url"],
            alt_text=name,
            source_name=_text(row.get("photo_source")) or UNKNOWN,
            copyright_status="clear" if row.get("status") == "verified" else "unknown",
        )

    profile = _legacy_profile(data) if data else None
    if profile is not None and profile == ProfileData():
        profile = None

    return SourceRecord(
        source_system=CONTENT_SYNC,
        source_table=ContentSync.__tablename__,
        source_record_id=str(row.get("id") or ""),
        candidate_name=name or "",
        payload=row,
        profile=profile,
        asset=asset,
    )


# =============================================================================
# READERS
# =============================================================================

class LegacyCatalogReader:
    """Pages the legacy catalog JSON file"""

    source_system = LEGACY
    source_table = "artists"

    def __init__(self, path: Path):
        self.path = Path(path)
        self._entries: Optional[List[Dict[str, Any]]] = None

    def _load(self, offset: int) -> List[Dict[str, Any]]:
        if self._entries is None:
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                raise SourceFetchError(self.source_system, offset, e) from e
            if isinstance(data, dict):
                data = data.get("artists", [])
            if not isinstance(data, list):
                raise SourceFetchError(self.source_system, offset, TypeError("catalog is not a list of artists"))
            self._entries = data
            logger.info(f"Loaded {len(data)} legacy artists from {self.path}")
        return self._entries

    async def fetch_page(self, offset: int, limit: int) -> List[Any]:
        return self._load(offset)[offset:offset + limit]

    def to_record(self, row: Any) -> SourceRecord:
        return convert_row(self.source_system, lambda entry: legacy_to_record(entry, self.source_table), row)

    async def count(self) -> int:
        return len(self._load(0))


class RagArtistReader:
    """Pages ``dj_artists`` in rank order"""

    source_system = RAG
    source_table = DjArtist.__tablename__

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_page(self, offset: int, limit: int) -> List[Dict[str, Any]]:
        stmt = select(DjArtist).order_by(DjArtist.rank, DjArtist.id).offset(offset).limit(limit)
        try:
            result = await self.session.execute(stmt)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise SourceFetchError(self.source_system, offset, e) from e
        return [_row_dict(row, DjArtist) for row in rows]

    def to_record(self, row: Dict[str, Any]) -> SourceRecord:
        return convert_row(self.source_system, rag_to_record, row)

    async def count(self) -> int:
        try:
            return await self.session.scalar(select(func.count()).select_from(DjArtist)) or 0
        except SQLAlchemyError as e:
            raise SourceFetchError(self.source_system, 0, e) from e


class ContentSyncReader:
    """Pages artist rows of the ``content_sync`` feed"""

    source_system = CONTENT_SYNC
    source_table = ContentSync.__tablename__

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_page(self, offset: int, limit: int) -> List[Dict[str, Any]]:
        stmt = (
            select(ContentSync)
            .where(ContentSync.entity_type == "artist")
            .order_by(ContentSync.entity_id, ContentSync.id)
            .offset(offset)
            .limit(limit)
        )
        try:
            result = await self.session.execute(stmt)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise SourceFetchError(self.source_system, offset, e) from e
        return [_row_dict(row, ContentSync) for row in rows]

    def to_record(self, row: Dict[str, Any]) -> SourceRecord:
        return convert_row(self.source_system, content_sync_to_record, row)

    async def count(self) -> int:
        stmt = select(func.count()).select_from(ContentSync).where(ContentSync.entity_type == "artist")
        try:
            return await self.session.scalar(stmt) or 0
        except SQLAlchemyError as e:
            raise SourceFetchError(self.source_system, 0, e) from e

