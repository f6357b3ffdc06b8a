"""
HTTP routers.

- system: liveness root, health and readiness probes
- evidence: list, submit, validate, request correction
"""

from fastapi import APIRouter

from . import evidence, system

router = APIRouter()

router.include_router(system.router, tags=["System"])
router.include_router(evidence.router, prefix="/evidence", tags=["Evidence"])
