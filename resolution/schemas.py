"""
Value types passed between source adapters, the resolution engine and the store.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# SOURCE RECORDS
# =============================================================================

class KeyRelease(BaseModel):
    title: str
    label: Optional[str] = None
    year: Optional[int] = None
    format: Optional[str] = None


class ArtistFields(BaseModel):
    """Identity fields copied onto a canonical artist when it is created"""
    real_name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    active_years: Optional[str] = None
    rank: Optional[int] = None


class ProfileData(BaseModel):
    bio_long: Optional[str] = None
    bio_short: Optional[str] = None
    press_notes: Optional[str] = None
    known_for: Optional[str] = None
    labels: List[str] = Field(default_factory=list)
    collaborators: List[str] = Field(default_factory=list)
    influences: List[str] = Field(default_factory=list)
    crews: List[str] = Field(default_factory=list)
    subgenres: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    top_tracks: List[str] = Field(default_factory=list)
    career_highlights: List[str] = Field(default_factory=list)
    key_releases: List[KeyRelease] = Field(default_factory=list)
    social_links: Dict[str, Any] = Field(default_factory=dict)


class AssetData(BaseModel):
    url: str
    asset_type: str = "photo"
    alt_text: Optional[str] = None
    author: Optional[str] = None
    license: Optional[str] = None
    license_url: Optional[str] = None
    source_url: Optional[str] = None
    source_name: Optional[str] = None
    copyright_status: str = "unknown"


class GearData(BaseModel):
    category: str
    items: List[str] = Field(default_factory=list)
    rider_notes: Optional[str] = None


class SourceRecord(BaseModel):
    """One artist entry as a source system holds it, before reconciliation.

    ``payload`` is the verbatim source row; only the source adapters look
    inside it; everything the engine needs is lifted into the typed fields.
    """
    source_system: str
    source_table: str
    source_record_id: str
    candidate_name: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    artist: ArtistFields = Field(default_factory=ArtistFields)
    profile: Optional[ProfileData] = None
    asset: Optional[AssetData] = None
    gear: List[GearData] = Field(default_factory=list)


# =============================================================================
# STORE VIEWS
# =============================================================================

class MatchMethod(str, Enum):
    SLUG = "slug"
    EXACT_NAME = "exact-name"
    FUZZY_NAME = "fuzzy-name"
    NEW_CREATION = "new-creation"
    MANUAL_REVIEW = "manual-review"


class ArtistCandidate(BaseModel):
    model_config = ConfigDict(frozen=True)

    artist_id: UUID
    canonical_name: str
    slug: str


class SourceLink(BaseModel):
    source_system: str
    source_record_id: str
    artist_id: UUID
    match_confidence: float
    match_method: MatchMethod


class NewArtist(BaseModel):
    canonical_name: str
    sort_name: str
    slug: str
    real_name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    active_years: Optional[str] = None
    rank: Optional[int] = None


class PrimaryAsset(BaseModel):
    source_system: str
    source_record_id: str


class MergeCandidateDraft(BaseModel):
    artist_a_id: UUID
    artist_b_id: Optional[UUID] = None
    source_system: str
    source_record_id: str
    candidate_name: str
    match_score: float
    match_reasons: List[Dict[str, Any]] = Field(default_factory=list)
    source_payload: Dict[str, Any] = Field(default_factory=dict)


class MergeCandidateView(MergeCandidateDraft):
    candidate_id: UUID
    status: str = "pending"
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None


class MigrationLogEntry(BaseModel):
    operation: str
    source_system: Optional[str] = None
    source_record_id: Optional[str] = None
    target_artist_id: Optional[UUID] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    success: bool = True
    error_message: Optional[str] = None


# =============================================================================
# READ-SIDE AGGREGATE
# =============================================================================

class ProfileView(ProfileData):
    source_system: str
    source_record_id: str
    source_priority: int = 0
    confidence_score: float = 0.0


class AssetView(AssetData):
    is_primary: bool = False
    source_system: Optional[str] = None


class GearView(BaseModel):
    gear_category: Optional[str] = None
    gear_items: List[str] = Field(default_factory=list)
    rider_notes: Optional[str] = None


class AliasView(BaseModel):
    alias_name: str
    alias_type: Optional[str] = None


class ArtistAggregate(BaseModel):
    """A canonical artist with everything hanging off it"""
    artist_id: UUID
    canonical_name: str
    sort_name: str
    slug: str
    real_name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    active_years: Optional[str] = None
    rank: Optional[int] = None
    is_active: bool = True
    needs_review: bool = False
    profiles: List[ProfileView] = Field(default_factory=list)
    assets: List[AssetView] = Field(default_factory=list)
    gear: List[GearView] = Field(default_factory=list)
    aliases: List[AliasView] = Field(default_factory=list)


# =============================================================================
# OUTCOMES
# =============================================================================

class ResolutionAction(str, Enum):
    CREATED = "created"
    MERGED = "merged"
    UPDATED = "updated"
    FLAGGED = "flagged"


class ResolutionOutcome(BaseModel):
    action: ResolutionAction
    source_system: str
    source_record_id: str
    artist_id: Optional[UUID] = None
    match_method: Optional[MatchMethod] = None
    confidence: float = 0.0
    candidate_id: Optional[UUID] = None
