"""Liveness and readiness endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from evidence_tracker.core.database import get_session
from evidence_tracker.core.errors import PersistenceError
from evidence_tracker.services.evidence import ping

LIVENESS_MESSAGE = "Evidence Tracker backend is running"

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root():
    return LIVENESS_MESSAGE


@router.get("/health")
async def health_check():
    """Health check endpoint for liveness probes."""
    return {"status": "ok"}


@router.get("/ready")
async def readiness_check(session: AsyncSession = Depends(get_session)):
    """Readiness check: the store must answer a trivial query."""
    try:
        await ping(session)
    except PersistenceError:
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
