"""
SimpleNote: Health Check Route
==============================

What:  GET /health for container and load balancer probes.
How:   Runs `SELECT 1` through the store. The service is unusable without
       its database, so a failed ping is reported as 503.
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from simplenote import __version__
from simplenote.dependencies import get_note_store
from simplenote.schemas.note import HealthResponse
from simplenote.services.note_store import NoteStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(store: NoteStore = Depends(get_note_store)) -> JSONResponse:
    connected = await store.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    health = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(
        status_code=200 if connected else 503,
        content=health.model_dump(),
    )
