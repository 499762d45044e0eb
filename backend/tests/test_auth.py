"""Tests for authentication endpoints."""
import uuid

import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock, patch, MagicMock

from assetdesk.main import app
from assetdesk.core.security import create_access_token
from assetdesk.db.session import get_session


# ─── Fixtures ─────────────────────────────────────────────────────────────────

class FakeUser:
    """Minimal user stub returned by DB mock."""

    def __init__(self, user_id: uuid.UUID | None = None, is_active: bool = True):
        self.id = user_id or uuid.UUID("f96955d0-752f-4e0c-b1dc-d26d8dd1460e")
        self.tenant_id = uuid.UUID("0b6b2a52-39a8-4a43-9a4f-7e0b2c3b9d11")
        self.email = "admin@example.com"
        self.first_name = "Ada"
        self.last_name = "Admin"
        self.role = "ADMIN"
        self.is_super_admin = False
        self.is_active = is_active
        self.password_hash = "$2b$12$placeholder"  # will be mocked


def _session_returning(obj):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = obj

    mock_session = AsyncMock()
    mock_session.execute = AsyncMock(return_value=mock_result)

    async def override_get_session():
        yield mock_session
    return override_get_session


# ─── Login Tests ──────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_login_valid_credentials_returns_jwt():
    """POST /api/v1/auth/login with valid credentials should return access_token."""
    with patch("assetdesk.api.v1.auth.verify_password", return_value=True):
        app.dependency_overrides[get_session] = _session_returning(FakeUser())
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
                response = await client.post(
                    "/api/v1/auth/login",
                    data={"username": "admin@example.com", "password": "changeme123"},
                )
        finally:
            app.dependency_overrides.clear()

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"


@pytest.mark.asyncio
async def test_login_unknown_user_returns_401():
    app.dependency_overrides[get_session] = _session_returning(None)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.post(
                "/api/v1/auth/login",
                data={"username": "wrong@example.com", "password": "badpass"},
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_disabled_account_returns_403():
    with patch("assetdesk.api.v1.auth.verify_password", return_value=True):
        app.dependency_overrides[get_session] = _session_returning(FakeUser(is_active=False))
        try:
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
                response = await client.post(
                    "/api/v1/auth/login",
                    data={"username": "admin@example.com", "password": "changeme123"},
                )
        finally:
            app.dependency_overrides.clear()

    assert response.status_code == 403


# ─── /me Tests ────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_me_with_valid_token_returns_user_without_hash():
    """GET /api/v1/auth/me returns the user and never the password hash."""
    fake_user = FakeUser(user_id=uuid.uuid4())
    token = create_access_token(subject=str(fake_user.id), tenant_id=str(fake_user.tenant_id), role="ADMIN")

    app.dependency_overrides[get_session] = _session_returning(fake_user)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get(
                "/api/v1/auth/me",
                headers={"Authorization": f"Bearer {token}"},
            )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "admin@example.com"
    assert data["role"] == "ADMIN"
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_me_without_token_returns_401():
    """GET /api/v1/auth/me without Authorization header should return 401."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_with_garbage_token_returns_401():
    app.dependency_overrides[get_session] = _session_returning(None)
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 401
