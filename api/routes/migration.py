# api/routes/migration.py
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from agents.migrator.agent import MigrationAction, MigrationRequest, MigratorAgent
from api.deps import get_migrator

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/migration")
async def trigger_migration(
    payload: Dict[str, Any] = Body(...),
    migrator: MigratorAgent = Depends(get_migrator),
):
    """
    Run one batch action: status, validate or a migrate_* action.
    """
    action = payload.get("action")
    if not isinstance(action, str) or action not in {a.value for a in MigrationAction}:
        return JSONResponse(status_code=400, content={"error": f"Unknown action: {action}"})

    try:
        request = MigrationRequest.model_validate(payload)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    result = await migrator.run(request)
    if result.aborted:
        logger.error(f"Migration {request.action.value} aborted: {result.errors}")
        return JSONResponse(status_code=500, content=result.to_response())
    return result.to_response()
