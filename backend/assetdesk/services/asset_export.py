"""CSV export of a tenant's assets."""
import json
import uuid
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from assetdesk.models.asset import Asset
from assetdesk.services.csv_utils import generate_csv

EXPORT_COLUMNS = [
    "ID",
    "Name",
    "Category",
    "Serial Number",
    "Asset Tag",
    "Status",
    "Condition",
    "Location",
    "Purchase Price",
    "Purchase Date",
    "Warranty End",
    "Assigned To",
    "Notes",
    "Custom Fields",
    "Created At",
]


def parse_id_list(ids_param: str | None) -> list[uuid.UUID]:
    """Comma separated UUIDs; blanks ignored. Raises ValueError on a bad id."""
    if not ids_param:
        return []
    return [uuid.UUID(part.strip()) for part in ids_param.split(",") if part.strip()]


async def fetch_assets_for_export(
    db: AsyncSession, tenant_id: uuid.UUID, asset_ids: list[uuid.UUID] | None = None
) -> list[Asset]:
    stmt = (
        select(Asset)
        .where(Asset.tenant_id == tenant_id, Asset.archived_at.is_(None))
        .options(selectinload(Asset.category), selectinload(Asset.assigned_to))
        .order_by(Asset.created_at.desc())
    )
    if asset_ids:
        stmt = stmt.where(Asset.id.in_(asset_ids))
    return list((await db.execute(stmt)).scalars().all())


def _labelled_custom_fields(asset: Asset) -> str:
    if not asset.custom_fields:
        return ""
    key_to_label = {
        f.get("key"): f.get("label")
        for f in (asset.category.field_schema or [])
        if isinstance(f, dict)
    }
    return json.dumps(
        {key_to_label.get(key) or key: value for key, value in asset.custom_fields.items()},
        default=str,
    )


def _iso_day(value: date | datetime | None) -> str:
    return value.date().isoformat() if isinstance(value, datetime) else (value.isoformat() if value else "")


def asset_to_row(asset: Asset) -> list[str]:
    assignee = ""
    if asset.assigned_to is not None:
        assignee = f"{asset.assigned_to.first_name} {asset.assigned_to.last_name or ''}".strip()
    return [
        str(asset.id),
        asset.name,
        asset.category.name,
        asset.serial_number or "",
        asset.asset_tag or "",
        asset.status,
        asset.condition or "",
        asset.location or "",
        f"{asset.purchase_price:.2f}" if asset.purchase_price is not None else "",
        _iso_day(asset.purchase_date),
        _iso_day(asset.warranty_end),
        assignee,
        asset.notes or "",
        _labelled_custom_fields(asset),
        asset.created_at.isoformat() if asset.created_at else "",
    ]


def build_export_csv(assets: list[Asset]) -> str:
    return generate_csv(EXPORT_COLUMNS, (asset_to_row(a) for a in assets))


def export_filename(today: date | None = None) -> str:
    return f"assets-export-{(today or date.today()).isoformat()}.csv"
