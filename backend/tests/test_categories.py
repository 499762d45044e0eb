"""Tests for the category listing endpoint."""
import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient, ASGITransport

from assetdesk.core.deps import TenantContext, get_tenant_context
from assetdesk.db.session import get_session
from assetdesk.main import app

TENANT_ID = uuid.uuid4()


class FakeTenant:
    id = TENANT_ID
    slug = "acme"
    name = "Acme"


class FakeUser:
    id = uuid.uuid4()
    tenant_id = TENANT_ID
    first_name = "Uma"
    last_name = None
    role = "USER"
    is_super_admin = False


class FakeCategory:
    def __init__(self, name, field_schema):
        self.id = uuid.uuid4()
        self.name = name
        self.description = None
        self.icon = "laptop"
        self.field_schema = field_schema
        self.is_active = True
        self.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_list_categories_includes_field_schema():
    categories = [
        FakeCategory("Laptops", [
            {"key": "ram_gb", "label": "RAM (GB)", "type": "number", "required": True},
            {"key": "broken"},
        ]),
        FakeCategory("Monitors", None),
    ]
    result = MagicMock()
    result.scalars.return_value.all.return_value = categories
    session = AsyncMock()
    session.execute = AsyncMock(return_value=result)

    async def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_tenant_context] = lambda: TenantContext(user=FakeUser(), tenant=FakeTenant())
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/api/v1/tenants/acme/categories")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    body = response.json()
    assert [c["name"] for c in body] == ["Laptops", "Monitors"]
    assert body[0]["fieldSchema"] == [
        {"key": "ram_gb", "label": "RAM (GB)", "type": "number", "required": True, "options": None}
    ]
    assert body[0]["isActive"] is True
    assert body[1]["fieldSchema"] == []
