"""Asset collection endpoints: CSV export, bulk actions, per-asset history."""
import logging
import math
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.config import settings
from assetdesk.core.deps import TenantContext, get_tenant_context, require_tenant_role
from assetdesk.db.session import get_session
from assetdesk.models.asset import Asset
from assetdesk.schemas.activity import ActivityOut, ActivityPage
from assetdesk.schemas.asset import BulkActionRequest, BulkActionResponse
from assetdesk.services import activity_log
from assetdesk.services.asset_export import (
    build_export_csv,
    export_filename,
    fetch_assets_for_export,
    parse_id_list,
)
from assetdesk.services.bulk_actions import BulkActionError, perform_bulk_action

logger = logging.getLogger(__name__)

router = APIRouter()


# ─── GET /assets/export ───

@router.get("/export", summary="Export the tenant's assets as CSV")
async def export_assets(
    db: Annotated[AsyncSession, Depends(get_session)],
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
    ids: Annotated[str | None, Query(description="Comma-separated asset ids; all assets when omitted")] = None,
):
    try:
        asset_ids = parse_id_list(ids)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ids must be comma-separated UUIDs")

    assets = await fetch_assets_for_export(db, ctx.tenant.id, asset_ids)
    content = build_export_csv(assets)
    logger.info(
        "Export by user %s on tenant %s: %d assets exported",
        ctx.user.id, ctx.tenant.slug, len(assets),
    )
    return StreamingResponse(
        iter([content]),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


# ─── POST /assets/bulk ───

@router.post("/bulk", response_model=BulkActionResponse, summary="Bulk update, assign, unassign or delete assets (MANAGER+)")
async def bulk_action(
    body: BulkActionRequest,
    db: Annotated[AsyncSession, Depends(get_session)],
    ctx: Annotated[TenantContext, Depends(require_tenant_role("MANAGER"))],
):
    data = body.data
    try:
        count = await perform_bulk_action(
            db,
            ctx.tenant.id,
            ctx.user,
            body.action,
            body.asset_ids,
            status=data.status if data else None,
            assigned_to_id=data.assigned_to_id if data else None,
            max_assets=settings.BULK_ACTION_MAX_ASSETS,
        )
    except BulkActionError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc))

    return BulkActionResponse(action=body.action, count=count)


# ─── GET /assets/{asset_id}/activity ───

@router.get("/{asset_id}/activity", response_model=ActivityPage, summary="Activity history of one asset")
async def asset_activity(
    asset_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_session)],
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
    page: int = Query(default=1, ge=1),
):
    asset = (
        await db.execute(select(Asset.id).where(Asset.id == asset_id, Asset.tenant_id == ctx.tenant.id))
    ).scalar_one_or_none()
    if asset is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Asset not found")

    page_size = settings.ASSET_ACTIVITY_PAGE_SIZE
    activities, total = await activity_log.list_activities(
        db, ctx.tenant.id, page, page_size, asset_id=asset_id
    )
    return ActivityPage(
        activities=[ActivityOut.model_validate(a) for a in activities],
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
    )
