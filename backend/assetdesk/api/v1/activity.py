"""Tenant-wide asset activity feed."""
import math
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.config import settings
from assetdesk.core.deps import TenantContext, get_tenant_context
from assetdesk.db.session import get_session
from assetdesk.models.activity import AssetAction
from assetdesk.schemas.activity import ActivityOut, ActivityPage
from assetdesk.services import activity_log

router = APIRouter()

VALID_ACTIONS = {a.value for a in AssetAction}


@router.get("", response_model=ActivityPage, summary="Paginated activity log for every asset in the tenant")
async def tenant_activity(
    db: Annotated[AsyncSession, Depends(get_session)],
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=settings.ACTIVITY_PAGE_SIZE_DEFAULT, ge=1, alias="pageSize"),
    action: str | None = Query(default=None),
):
    page_size = min(page_size, settings.ACTIVITY_PAGE_SIZE_MAX)
    # Unknown action filters are ignored rather than rejected
    action_filter = action if action in VALID_ACTIONS else None

    activities, total = await activity_log.list_activities(
        db, ctx.tenant.id, page, page_size, action=action_filter
    )
    return ActivityPage(
        activities=[ActivityOut.model_validate(a) for a in activities],
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
    )
