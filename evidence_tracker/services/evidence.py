"""
Evidence service: persistence access for the review workflow.

Handles:
- Listing submissions, newest first
- Upsert by natural key (team, team class, level); resubmission re-opens review
- Validation and correction requests by record id

Every write is a single statement or a single-row update, so the record
either changes completely or not at all. Store failures become
PersistenceError with a generic message and are logged here.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog
from sqlalchemy import select, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from evidence_tracker.core.errors import NotFoundError, PersistenceError, ValidationError
from evidence_tracker.models.base import utcnow
from evidence_tracker.models.evidence import Evidence, class_key_for
from evidence_tracker.schemas.evidence import CorrectionRequest, EvidenceSubmission

log = structlog.get_logger()

STORE_ERRORS = (SQLAlchemyError, OSError)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_id(evidence_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(evidence_id))
    except ValueError:
        # Nothing is stored under an id that is not a UUID.
        raise NotFoundError("Evidence not found") from None


async def _fail(session: AsyncSession, event: str, message: str, exc: Exception, **context):
    log.error(event, error=str(exc), exc_info=exc, **context)
    try:
        await session.rollback()
    except STORE_ERRORS:
        log.warning("evidence.rollback_failed", **context)
    raise PersistenceError(message) from exc


async def _get_evidence_or_404(session: AsyncSession, evidence_id: uuid.UUID) -> Evidence:
    evidence = await session.get(Evidence, evidence_id)
    if not evidence:
        raise NotFoundError("Evidence not found")
    return evidence


def _natural_key_filter(team: str, team_class: Optional[str], level: int):
    return (
        (Evidence.team == team)
        & (Evidence.class_key == class_key_for(team_class))
        & (Evidence.level == level)
    )


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


async def list_evidence(session: AsyncSession) -> list[Evidence]:
    try:
        result = await session.execute(
            select(Evidence).order_by(Evidence.created_at.desc())
        )
        return list(result.scalars().all())
    except STORE_ERRORS as exc:
        await _fail(session, "evidence.list_failed", "Failed to retrieve evidence", exc)


async def ping(session: AsyncSession) -> None:
    """Round-trip to the store; raises PersistenceError when unreachable."""
    try:
        await session.execute(text("SELECT 1"))
    except STORE_ERRORS as exc:
        await _fail(session, "store.unreachable", "Store unavailable", exc)


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------


async def submit_evidence(session: AsyncSession, submission: EvidenceSubmission) -> Evidence:
    """
    Create or overwrite the record for the submission's natural key.

    The review state always resets: validated=False, correction_note=None.
    """
    missing = submission.missing_fields()
    if missing:
        raise ValidationError("Missing required fields", fields=missing)

    team_class = submission.team_class or None
    note = submission.note or None
    key = {"team": submission.team, "team_class": team_class, "level": submission.level}

    try:
        insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
        if insert is None:
            raise PersistenceError("Failed to save evidence")

        now = utcnow()
        stmt = insert(Evidence).values(
            id=uuid.uuid4(),
            team=submission.team,
            team_class=team_class,
            class_key=class_key_for(team_class),
            level=submission.level,
            points=submission.points,
            link=submission.link,
            note=note,
            validated=False,
            correction_note=None,
            created_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["team", "class_key", "level"],
            set_={
                "points": stmt.excluded.points,
                "link": stmt.excluded.link,
                "note": stmt.excluded.note,
                "validated": False,
                "correction_note": None,
                "updated_at": now,
            },
        )
        await session.execute(stmt)

        result = await session.execute(
            select(Evidence)
            .where(_natural_key_filter(submission.team, team_class, submission.level))
            .execution_options(populate_existing=True)
        )
        evidence = result.scalar_one()
        await session.commit()
    except STORE_ERRORS as exc:
        await _fail(session, "evidence.save_failed", "Failed to save evidence", exc, **key)

    log.info("evidence.saved", evidence_id=str(evidence.id), points=evidence.points, **key)
    return evidence


async def validate_evidence(session: AsyncSession, evidence_id: str) -> Evidence:
    record_id = _parse_id(evidence_id)
    try:
        evidence = await _get_evidence_or_404(session, record_id)
        evidence.validated = True
        evidence.correction_note = None
        session.add(evidence)
        await session.commit()
        await session.refresh(evidence)
    except STORE_ERRORS as exc:
        await _fail(
            session, "evidence.validate_failed", "Failed to validate evidence", exc,
            evidence_id=str(record_id),
        )

    log.info("evidence.validated", evidence_id=str(evidence.id), team=evidence.team, level=evidence.level)
    return evidence


async def request_correction(
    session: AsyncSession,
    evidence_id: str,
    request: Optional[CorrectionRequest],
) -> Evidence:
    """Send a record back to its team. An empty note is allowed; a missing one is not."""
    if request is None or not request.has_note:
        raise ValidationError("Missing correction note (correctionNote)")

    record_id = _parse_id(evidence_id)
    try:
        evidence = await _get_evidence_or_404(session, record_id)
        evidence.validated = False
        evidence.correction_note = request.correction_note
        session.add(evidence)
        await session.commit()
        await session.refresh(evidence)
    except STORE_ERRORS as exc:
        await _fail(
            session, "evidence.correct_failed", "Failed to mark evidence for correction", exc,
            evidence_id=str(record_id),
        )

    log.info(
        "evidence.correction_requested",
        evidence_id=str(evidence.id),
        team=evidence.team,
        level=evidence.level,
    )
    return evidence
