"""
Legacy-to-canonical projector.

Read-side adapter that flattens a canonical artist (plus its best profile,
primary asset and gear) back into the artist shape the legacy catalog and its
consumers expect, and lists the whole catalog in a short, rank-ordered
summary form. Never writes.
"""

import re
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from resolution.location import UNKNOWN, parse_location
from resolution.priority import DEFAULT_PRIORITY_TABLE, SourcePriorityTable
from resolution.schemas import ArtistAggregate, AssetView, KeyRelease, ProfileView
from resolution.store import ArtistStore

GEAR_CATEGORIES = ("studio", "live", "dj")

_MARKDOWN_NOISE = re.compile(r"\*\*|\*|##|`|\[|\]")
_WHITESPACE = re.compile(r"\s+")


def clean_text(text: Optional[str]) -> Optional[str]:
    """Strip markdown leftovers and normalise dashes and whitespace"""
    if not text:
        return None
    text = _MARKDOWN_NOISE.sub("", text)
    text = text.replace("—", " – ")
    text = _WHITESPACE.sub(" ", text).strip()
    return text or None


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ImageAttribution(_CamelModel):
    url: str
    author: str = UNKNOWN
    license: str = UNKNOWN
    license_url: str = ""
    source_url: str = ""
    source_name: str = UNKNOWN


class FlatArtist(_CamelModel):
    """Legacy artist shape; dump with ``by_alias=True`` for camelCase keys"""
    id: str
    name: str
    real_name: Optional[str] = None
    city: str = UNKNOWN
    country: str = UNKNOWN
    region: str = UNKNOWN
    active: str = UNKNOWN
    tags: List[str] = Field(default_factory=list)
    bio: str = ""
    photo_url: Optional[str] = None
    image: Optional[ImageAttribution] = None
    labels: List[str] = Field(default_factory=list)
    collaborators: List[str] = Field(default_factory=list)
    influences: List[str] = Field(default_factory=list)
    crews: List[str] = Field(default_factory=list)
    career_highlights: List[str] = Field(default_factory=list)
    key_releases: List[KeyRelease] = Field(default_factory=list)
    studio_gear: List[str] = Field(default_factory=list)
    live_setup: List[str] = Field(default_factory=list)
    dj_setup: List[str] = Field(default_factory=list)
    rider_notes: Optional[str] = None
    known_for: Optional[str] = None
    top_tracks: List[str] = Field(default_factory=list)
    subgenres: List[str] = Field(default_factory=list)
    rank: Optional[int] = None


class ArtistSummary(_CamelModel):
    """Catalog list entry; the short form of ``FlatArtist``"""
    id: str
    name: str
    real_name: Optional[str] = None
    city: str = UNKNOWN
    country: str = UNKNOWN
    region: str = UNKNOWN
    tags: List[str] = Field(default_factory=list)
    photo_url: Optional[str] = None
    photo_source: Optional[str] = None
    rank: Optional[int] = None
    labels: List[str] = Field(default_factory=list)
    subgenres: List[str] = Field(default_factory=list)
    known_for: Optional[str] = None


class LegacyArtistProjector:
    def __init__(self, store: ArtistStore, priorities: SourcePriorityTable = DEFAULT_PRIORITY_TABLE):
        self.store = store
        self.priorities = priorities

    async def project_slug(self, slug: str) -> Optional[FlatArtist]:
        """Flat artist for ``slug``, or None when no canonical artist has it"""
        aggregate = await self.store.load_artist(slug)
        if aggregate is None:
            return None
        return self.project(aggregate)

    async def project_summaries(self) -> List[ArtistSummary]:
        """Every canonical artist, rank order first (unranked last), then by name"""
        return [self.summarize(artist) for artist in await self.store.list_artist_summaries()]

    def summarize(self, artist: ArtistAggregate) -> ArtistSummary:
        profile = self._profile(artist)
        asset = self._primary_asset(artist.assets)
        city, country, region = self._location(artist)

        return ArtistSummary(
            id=artist.slug,
            name=artist.canonical_name,
            real_name=artist.real_name or None,
            city=city,
            country=country,
            region=region,
            tags=profile.tags or profile.subgenres,
            photo_url=asset.url if asset else None,
            photo_source=asset.source_name if asset else None,
            rank=artist.rank or None,
            labels=profile.labels,
            subgenres=profile.subgenres,
            known_for=clean_text(profile.known_for),
        )

    def project(self, artist: ArtistAggregate) -> FlatArtist:
        profile = self._profile(artist)
        asset = self._primary_asset(artist.assets)

        gear = {category: [] for category in GEAR_CATEGORIES}
        notes = []
        for row in artist.gear:
            category = (row.gear_category or "studio").lower()
            if category in gear:
                gear[category].extend(row.gear_items)
            if row.rider_notes:
                notes.append(row.rider_notes)

        city, country, region = self._location(artist)

        # bio_short is often a copy of known_for; do not show it twice
        bio = profile.bio_long
        if not bio and profile.bio_short:
            if profile.bio_short.strip() != (profile.known_for or "").strip():
                bio = profile.bio_short.strip()

        return FlatArtist(
            id=artist.slug,
            name=artist.canonical_name,
            real_name=artist.real_name or None,
            city=city,
            country=country,
            region=region,
            active=artist.active_years or UNKNOWN,
            tags=profile.tags or profile.subgenres,
            bio=clean_text(bio) or "",
            photo_url=asset.url if asset else None,
            image=self._attribution(asset),
            labels=profile.labels,
            collaborators=profile.collaborators,
            influences=profile.influences,
            crews=profile.crews,
            career_highlights=[clean_text(h) or h for h in profile.career_highlights],
            key_releases=profile.key_releases,
            studio_gear=gear["studio"],
            live_setup=gear["live"],
            dj_setup=gear["dj"],
            rider_notes=clean_text(" ".join(notes)),
            known_for=clean_text(profile.known_for),
            top_tracks=profile.top_tracks,
            subgenres=profile.subgenres,
            rank=artist.rank or None,
        )

    def _profile(self, artist: ArtistAggregate) -> ProfileView:
        return self.priorities.primary(artist.profiles) or ProfileView(source_system="", source_record_id="")

    @staticmethod
    def _location(artist: ArtistAggregate) -> Tuple[str, str, str]:
        if artist.city:
            return artist.city, artist.country or UNKNOWN, artist.region or UNKNOWN
        location = parse_location(artist.country)
        return location.city, location.country, location.region

    @staticmethod
    def _primary_asset(assets: List[AssetView]) -> Optional[AssetView]:
        for asset in assets:
            if asset.is_primary:
                return asset
        return assets[0] if assets else None

    @staticmethod
    def _attribution(asset: Optional[AssetView]) -> Optional[ImageAttribution]:
        if asset is None:
            return None
        return ImageAttribution(
            url=asset.url,
            author=asset.author or UNKNOWN,
            license=asset.license or UNKNOWN,
            license_url=asset.license_url or "",
            source_url=asset.source_url or asset.url,
            source_name=asset.source_name or UNKNOWN,
        )
