"""Tests for the health endpoint and request id middleware."""
import pytest
from httpx import AsyncClient, ASGITransport

from assetdesk.main import app


@pytest.mark.asyncio
async def test_health_returns_ok_status():
    """GET /health should return HTTP 200 with status == ok."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_request_id_is_echoed():
    """A caller-supplied X-Request-ID is returned unchanged."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_request_id_is_generated_when_missing():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/health")
    assert len(response.headers["X-Request-ID"]) == 32
