"""Bulk import executor: turns validated CSV rows into asset records.

Runs after the wizard's validate step. The category schema is re-read from
the database and every row re-validated, so nothing the client sends can
override field keys or types. Serial number / asset tag uniqueness is left
to the table constraints: a clash fails the whole batch.
"""
import logging
import re
import uuid
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.models.activity import AssetAction
from assetdesk.models.asset import Asset, AssetCondition, AssetStatus
from assetdesk.models.category import AssetCategory
from assetdesk.schemas.category import FieldDefinition
from assetdesk.services import activity_log
from assetdesk.services.field_schema import build_label_to_key_map, load_field_schema
from assetdesk.services.import_validation import (
    parse_bool,
    parse_date,
    parse_decimal,
    parse_number,
    validate_rows,
)

logger = logging.getLogger(__name__)

IMPORT_SOURCE = "bulk_import"

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class ImportRowsInvalid(Exception):
    """Raised when submitted rows no longer pass validation."""

    def __init__(self, invalid_rows: list[dict]):
        self.invalid_rows = invalid_rows
        super().__init__(f"{len(invalid_rows)} row(s) failed validation")


@dataclass
class ImportExecution:
    created: int
    asset_ids: list[uuid.UUID] = field(default_factory=list)


def _text_or_none(row: dict[str, str], key: str) -> str | None:
    return (row.get(key) or "").strip() or None


def coerce_number(value: str) -> int | float | None:
    value = value.strip()
    # Integer-shaped cells skip float so large values keep every digit
    if _INTEGER_RE.match(value):
        return int(value)
    return parse_number(value)


def extract_custom_fields(
    row: dict[str, str],
    field_schema: list[FieldDefinition],
    label_to_key: dict[str, str],
) -> dict[str, Any]:
    """Map label-keyed cells onto storage keys, converting by declared type."""
    custom_fields: dict[str, Any] = {}
    for f in field_schema:
        value = (row.get(f.label) or "").strip()
        if not value:
            continue
        key = label_to_key.get(f.label, f.key)
        if f.type == "number":
            custom_fields[key] = coerce_number(value)
        elif f.type == "boolean":
            custom_fields[key] = parse_bool(value)
        elif f.type == "date":
            custom_fields[key] = parse_date(value).date().isoformat()
        else:
            custom_fields[key] = value
    return custom_fields


def build_asset_record(
    row: dict[str, str],
    field_schema: list[FieldDefinition],
    label_to_key: dict[str, str],
    tenant_id: uuid.UUID,
    category_id: uuid.UUID,
) -> dict[str, Any]:
    status = _text_or_none(row, "status")
    condition = _text_or_none(row, "condition")
    price = _text_or_none(row, "purchasePrice")
    purchase_date = _text_or_none(row, "purchaseDate")
    warranty_end = _text_or_none(row, "warrantyEnd")
    return {
        "tenant_id": tenant_id,
        "category_id": category_id,
        "name": row["name"].strip(),
        "serial_number": _text_or_none(row, "serialNumber"),
        "asset_tag": _text_or_none(row, "assetTag"),
        "status": status.upper() if status else AssetStatus.AVAILABLE.value,
        "condition": condition.upper() if condition else AssetCondition.GOOD.value,
        "location": _text_or_none(row, "location"),
        "purchase_price": parse_decimal(price) if price else None,
        "purchase_date": parse_date(purchase_date) if purchase_date else None,
        "warranty_end": parse_date(warranty_end) if warranty_end else None,
        "notes": _text_or_none(row, "notes"),
        "custom_fields": extract_custom_fields(row, field_schema, label_to_key),
    }


async def execute_import(
    db: AsyncSession,
    category: AssetCategory,
    rows: list[dict[str, str]],
    user,
) -> ImportExecution:
    """Create one asset per row, then write the CREATED activity batch.

    The asset insert is committed before the activity insert. If the second
    write fails the assets stay and the error propagates to the caller.
    """
    field_schema = load_field_schema(category.field_schema)
    check = validate_rows(rows, field_schema, first_row_number=1)
    if check.invalid_rows:
        raise ImportRowsInvalid(check.invalid_rows)

    label_to_key = build_label_to_key_map(field_schema)
    records = [
        build_asset_record(row, field_schema, label_to_key, category.tenant_id, category.id)
        for row in rows
    ]

    result = await db.execute(insert(Asset).returning(Asset.id), records)
    asset_ids = list(result.scalars().all())
    await db.commit()
    logger.info(
        "Bulk import created %d assets in category %s (tenant %s) by user %s",
        len(asset_ids), category.id, category.tenant_id, user.id,
    )

    await activity_log.log_bulk_asset_activity(
        db,
        AssetAction.CREATED,
        asset_ids,
        user.id,
        activity_log.get_user_display_name(user),
        category.tenant_id,
        {"category": category.name, "source": IMPORT_SOURCE},
    )
    await db.commit()

    return ImportExecution(created=len(asset_ids), asset_ids=asset_ids)
