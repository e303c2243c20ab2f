# api/routes/health.py
from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from api.deps import get_artist_store
from resolution.errors import StoreError
from resolution.store import ArtistStore

router = APIRouter()

@router.get("/health")
async def health_check(store: ArtistStore = Depends(get_artist_store)):
    """
    Health check endpoint for load balancers and monitoring.
    """
    checks = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {}
    }

    # Check canonical store
    try:
        await store.ping()
        checks["services"]["database"] = "ok"
    except StoreError as e:
        checks["services"]["database"] = f"error: {str(e)}"
        checks["status"] = "unhealthy"

    return checks
