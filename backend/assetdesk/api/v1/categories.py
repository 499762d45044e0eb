from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.deps import TenantContext, get_tenant_context
from assetdesk.db.session import get_session
from assetdesk.models.category import AssetCategory
from assetdesk.schemas.category import CategoryOut
from assetdesk.services.field_schema import load_field_schema

router = APIRouter()


@router.get("", response_model=list[CategoryOut], summary="List active categories with their field schemas")
async def list_categories(
    db: Annotated[AsyncSession, Depends(get_session)],
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
):
    stmt = (
        select(AssetCategory)
        .where(AssetCategory.tenant_id == ctx.tenant.id, AssetCategory.is_active.is_(True))
        .order_by(AssetCategory.name.asc())
    )
    categories = (await db.execute(stmt)).scalars().all()
    return [
        CategoryOut(
            id=c.id,
            name=c.name,
            description=c.description,
            icon=c.icon,
            field_schema=load_field_schema(c.field_schema),
            is_active=c.is_active,
            created_at=c.created_at,
        )
        for c in categories
    ]
