"""Asset activity log helper, append-only writes to asset_activities."""
import logging
import uuid
from typing import Any

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.models.activity import AssetActivity, AssetAction

logger = logging.getLogger(__name__)


def get_user_display_name(user) -> str:
    return f"{user.first_name} {user.last_name}" if user.last_name else user.first_name


async def log_asset_activity(
    db: AsyncSession,
    action: AssetAction | str,
    asset_id: uuid.UUID,
    user_id: uuid.UUID,
    user_name: str,
    tenant_id: uuid.UUID,
    details: dict[str, Any] | None = None,
) -> AssetActivity:
    """Write a single activity entry.

    Args:
        db: Async session; flushed but not committed, the caller owns the transaction.
        action: One of AssetAction.
        asset_id: The asset the action touched.
        user_id: Acting user.
        user_name: Display name, denormalised into ``details.performedBy``.
        tenant_id: Owning tenant.
        details: Extra JSON-serialisable context merged after ``performedBy``.
    """
    entry = AssetActivity(
        action=AssetAction(action).value,
        asset_id=asset_id,
        user_id=user_id,
        tenant_id=tenant_id,
        details={"performedBy": user_name, **(details or {})},
    )
    db.add(entry)
    await db.flush()
    logger.debug("Activity: %s asset/%s by %s", entry.action, asset_id, user_id)
    return entry


async def log_bulk_asset_activity(
    db: AsyncSession,
    action: AssetAction | str,
    asset_ids: list[uuid.UUID],
    user_id: uuid.UUID,
    user_name: str,
    tenant_id: uuid.UUID,
    details: dict[str, Any] | None = None,
) -> int:
    """Write one entry per asset in a single INSERT. Returns the number written."""
    if not asset_ids:
        return 0

    action_value = AssetAction(action).value
    payload = {"performedBy": user_name, **(details or {})}
    await db.execute(
        insert(AssetActivity),
        [
            {
                "action": action_value,
                "asset_id": asset_id,
                "user_id": user_id,
                "tenant_id": tenant_id,
                "details": payload,
            }
            for asset_id in asset_ids
        ],
    )
    logger.info("Activity: %s x%d in tenant %s by %s", action_value, len(asset_ids), tenant_id, user_id)
    return len(asset_ids)


async def list_activities(
    db: AsyncSession,
    tenant_id: uuid.UUID,
    page: int,
    page_size: int,
    action: str | None = None,
    asset_id: uuid.UUID | None = None,
) -> tuple[list[AssetActivity], int]:
    """Newest-first page of activity entries plus the unpaginated total."""
    filters = [AssetActivity.tenant_id == tenant_id]
    if action:
        filters.append(AssetActivity.action == action)
    if asset_id is not None:
        filters.append(AssetActivity.asset_id == asset_id)

    total = (
        await db.execute(select(func.count()).select_from(AssetActivity).where(*filters))
    ).scalar_one()

    stmt = (
        select(AssetActivity)
        .where(*filters)
        .options(selectinload(AssetActivity.asset))
        .order_by(AssetActivity.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    activities = list((await db.execute(stmt)).scalars().all())
    return activities, total
