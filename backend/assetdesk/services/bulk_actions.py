"""Bulk asset actions: status change, assign, unassign, soft delete."""
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.models.activity import AssetAction
from assetdesk.models.asset import Asset, AssetStatus
from assetdesk.models.user import User
from assetdesk.services import activity_log

logger = logging.getLogger(__name__)

VALID_STATUSES = [s.value for s in AssetStatus]


class BulkActionError(ValueError):
    def __init__(self, message: str, status_code: int = 400):
        self.status_code = status_code
        super().__init__(message)


async def _count_assets(db: AsyncSession, tenant_id: uuid.UUID, asset_ids: list[uuid.UUID], *criteria) -> int:
    stmt = select(func.count()).select_from(Asset).where(
        Asset.id.in_(asset_ids), Asset.tenant_id == tenant_id, *criteria
    )
    return (await db.execute(stmt)).scalar_one()


async def _update_assets(db: AsyncSession, tenant_id: uuid.UUID, asset_ids: list[uuid.UUID], **values) -> int:
    stmt = (
        update(Asset)
        .where(Asset.id.in_(asset_ids), Asset.tenant_id == tenant_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    return result.rowcount


async def perform_bulk_action(
    db: AsyncSession,
    tenant_id: uuid.UUID,
    user,
    action: str,
    asset_ids: list[uuid.UUID],
    status: str | None = None,
    assigned_to_id: uuid.UUID | None = None,
    max_assets: int = 1000,
) -> int:
    """Apply ``action`` to every asset and log one activity entry per asset.

    Returns the number of rows updated. Raises BulkActionError (400/404) for
    rejected requests; nothing is written in that case.
    """
    asset_ids = list(dict.fromkeys(asset_ids))
    if not asset_ids:
        raise BulkActionError("action and assetIds are required")
    if len(asset_ids) > max_assets:
        raise BulkActionError(f"Cannot process more than {max_assets} assets at once")

    found = await _count_assets(db, tenant_id, asset_ids)
    if found != len(asset_ids):
        raise BulkActionError("Some assets not found or do not belong to this tenant", status_code=404)

    user_name = activity_log.get_user_display_name(user)

    if action == "update_status":
        if not status or status not in VALID_STATUSES:
            raise BulkActionError(f"Invalid status. Must be one of: {', '.join(VALID_STATUSES)}")
        count = await _update_assets(db, tenant_id, asset_ids, status=status)
        activity = (AssetAction.STATUS_CHANGED, {"to": status})

    elif action == "assign":
        if assigned_to_id is None:
            raise BulkActionError("assignedToId is required for assign action")
        assignee = (
            await db.execute(select(User).where(User.id == assigned_to_id, User.tenant_id == tenant_id))
        ).scalar_one_or_none()
        if assignee is None:
            raise BulkActionError("Assignee not found", status_code=404)
        count = await _update_assets(
            db, tenant_id, asset_ids, assigned_to_id=assignee.id, status=AssetStatus.ASSIGNED.value
        )
        activity = (AssetAction.ASSIGNED, {"assignedTo": activity_log.get_user_display_name(assignee)})

    elif action == "unassign":
        count = await _update_assets(
            db, tenant_id, asset_ids, assigned_to_id=None, status=AssetStatus.AVAILABLE.value
        )
        activity = (AssetAction.UNASSIGNED, None)

    elif action == "delete":
        assigned = await _count_assets(
            db, tenant_id, asset_ids, Asset.status == AssetStatus.ASSIGNED.value
        )
        if assigned:
            raise BulkActionError(f"Cannot delete {assigned} assigned assets. Unassign them first.")
        count = await _update_assets(
            db, tenant_id, asset_ids,
            status=AssetStatus.RETIRED.value,
            archived_at=datetime.now(timezone.utc),
        )
        activity = (AssetAction.DELETED, {"reason": "bulk_delete"})

    else:
        raise BulkActionError(f"Unknown action: {action}")

    activity_action, details = activity
    await activity_log.log_bulk_asset_activity(
        db, activity_action, asset_ids, user.id, user_name, tenant_id, details
    )
    await db.commit()
    logger.info("Bulk %s on %d assets in tenant %s by user %s", action, count, tenant_id, user.id)
    return count
