"""
Liveness and readiness endpoint tests.
"""

import pytest
from httpx import AsyncClient

from evidence_tracker.api.system import LIVENESS_MESSAGE


@pytest.mark.asyncio
async def test_root_is_plain_text(client: AsyncClient):
    """Root should answer with a plain-text liveness message."""
    response = await client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == LIVENESS_MESSAGE


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Health endpoint should return status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_ready_check(client: AsyncClient):
    """Ready endpoint should return status ready when the store answers."""
    response = await client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


@pytest.mark.asyncio
async def test_ready_check_store_down(broken_client: AsyncClient):
    response = await broken_client.get("/ready")
    assert response.status_code == 503
    assert response.json() == {"status": "unavailable"}


@pytest.mark.asyncio
async def test_root_stays_up_when_store_down(broken_client: AsyncClient):
    response = await broken_client.get("/")
    assert response.status_code == 200
