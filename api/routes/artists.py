# api/routes/artists.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from api.deps import get_artist_store
from resolution.engine import ResolutionEngine
from resolution.errors import ReviewStateError
from resolution.projector import LegacyArtistProjector
from resolution.store import ArtistStore

router = APIRouter()


class ReviewDecision(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    approve: bool
    reviewed_by: Optional[str] = None


@router.get("/artists")
async def list_artists(store: ArtistStore = Depends(get_artist_store)):
    """Catalog summaries in rank order, unranked artists last"""
    summaries = await LegacyArtistProjector(store).project_summaries()
    return [summary.model_dump(mode="json", by_alias=True) for summary in summaries]


@router.get("/artists/{slug}")
async def get_artist(slug: str, store: ArtistStore = Depends(get_artist_store)):
    """Canonical artist in the legacy flat shape"""
    artist = await LegacyArtistProjector(store).project_slug(slug)
    if artist is None:
        raise HTTPException(status_code=404, detail=f"Artist not found: {slug}")
    return artist.model_dump(mode="json", by_alias=True)


@router.post("/merge-candidates/{candidate_id}/review")
async def review_merge_candidate(
    candidate_id: UUID,
    decision: ReviewDecision,
    store: ArtistStore = Depends(get_artist_store),
):
    """Approve or reject a pending merge candidate"""
    engine = ResolutionEngine(store)
    try:
        outcome = await engine.review_candidate(candidate_id, decision.approve, decision.reviewed_by)
    except ReviewStateError as e:
        await store.rollback()
        raise HTTPException(status_code=409, detail=str(e))
    await store.commit()

    return {
        "candidateId": str(candidate_id),
        "status": "approved" if decision.approve else "rejected",
        "linked": outcome is not None,
    }
