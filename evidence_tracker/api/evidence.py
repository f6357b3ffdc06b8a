"""
Evidence endpoints.

Review workflow: submitted → validated, or submitted/validated → needs correction.
Resubmitting the same (team, teamClass, level) always re-opens review.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from evidence_tracker.core.database import get_session
from evidence_tracker.schemas.evidence import (
    CorrectionRequest,
    EvidenceRead,
    EvidenceSubmission,
)
from evidence_tracker.services import evidence as service

router = APIRouter()


@router.get("", response_model=List[EvidenceRead])
async def list_evidence_endpoint(session: AsyncSession = Depends(get_session)):
    """All evidence, newest first."""
    records = await service.list_evidence(session)
    return [EvidenceRead.model_validate(r) for r in records]


@router.post("", response_model=EvidenceRead, status_code=201)
async def submit_evidence_endpoint(
    submission: EvidenceSubmission,
    session: AsyncSession = Depends(get_session),
):
    """Create or overwrite the submission for its (team, teamClass, level)."""
    record = await service.submit_evidence(session, submission)
    return EvidenceRead.model_validate(record)


@router.put("/{evidence_id}/validate", response_model=EvidenceRead)
async def validate_evidence_endpoint(
    evidence_id: str,
    session: AsyncSession = Depends(get_session),
):
    record = await service.validate_evidence(session, evidence_id)
    return EvidenceRead.model_validate(record)


@router.put("/{evidence_id}/correct", response_model=EvidenceRead)
async def request_correction_endpoint(
    evidence_id: str,
    body: Optional[CorrectionRequest] = None,
    session: AsyncSession = Depends(get_session),
):
    """Send a submission back with reviewer feedback."""
    record = await service.request_correction(session, evidence_id, body)
    return EvidenceRead.model_validate(record)
