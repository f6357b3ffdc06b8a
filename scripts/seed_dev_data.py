#!/usr/bin/env python3
"""Seed a development database with evidence in each review state.

Usage:
    uv run python scripts/seed_dev_data.py

Uses DATABASE_URL (or the default from settings). Safe to re-run: every
submission is an upsert on (team, teamClass, level).
"""

import asyncio

from evidence_tracker.core.database import async_session_factory, close_db, init_db
from evidence_tracker.schemas.evidence import CorrectionRequest, EvidenceSubmission
from evidence_tracker.services.evidence import (
    request_correction,
    submit_evidence,
    validate_evidence,
)

SUBMISSIONS = [
    {"team": "Alpha", "teamClass": "1A", "level": 1, "points": 10, "link": "https://example.com/alpha/1"},
    {"team": "Alpha", "teamClass": "1A", "level": 2, "points": 20, "link": "https://example.com/alpha/2"},
    {"team": "Beta", "teamClass": "1B", "level": 1, "points": 10, "link": "https://example.com/beta/1",
     "note": "Video is in the second tab"},
    {"team": "Gamma", "level": 1, "points": 15, "link": "https://example.com/gamma/1"},
]


async def seed():
    await init_db()

    async with async_session_factory() as session:
        records = [
            await submit_evidence(session, EvidenceSubmission.model_validate(data))
            for data in SUBMISSIONS
        ]

        # Alpha L1 validated, Beta L1 sent back, the rest left submitted.
        await validate_evidence(session, str(records[0].id))
        await request_correction(
            session,
            str(records[2].id),
            CorrectionRequest(correction_note="Link does not open, please re-upload"),
        )

    print(f"Seeded {len(records)} evidence records")
    await close_db()


if __name__ == "__main__":
    asyncio.run(seed())
