"""CSV bulk import endpoints: template download, validation preview, execution."""
import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile, status
from fastapi.responses import Response
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.config import settings
from assetdesk.core.deps import TenantContext, get_tenant_context, require_tenant_role
from assetdesk.core.limiter import limiter
from assetdesk.db.session import get_session
from assetdesk.models.category import AssetCategory
from assetdesk.schemas.imports import (
    ImportExecuteRequest,
    ImportExecuteResponse,
    ImportValidateResponse,
)
from assetdesk.services.asset_import import ImportRowsInvalid, execute_import
from assetdesk.services.csv_utils import parse_csv
from assetdesk.services.field_schema import build_import_template, load_field_schema, template_filename
from assetdesk.services.import_validation import validate_rows

logger = logging.getLogger(__name__)

router = APIRouter()

# Invalid rows echoed back to the client on execute rejection
EXECUTE_ERROR_PREVIEW = 20


# ─── Helpers ───

async def _get_category(db: AsyncSession, tenant_id: uuid.UUID, category_id: str | uuid.UUID) -> AssetCategory:
    """Category scoped to the tenant, or 404 (also for ids that are not UUIDs)."""
    try:
        category_uuid = category_id if isinstance(category_id, uuid.UUID) else uuid.UUID(str(category_id))
    except ValueError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")

    result = await db.execute(
        select(AssetCategory).where(
            AssetCategory.id == category_uuid,
            AssetCategory.tenant_id == tenant_id,
        )
    )
    category = result.scalar_one_or_none()
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


def _enforce_row_limit(count: int) -> None:
    if count > settings.IMPORT_MAX_ROWS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Maximum {settings.IMPORT_MAX_ROWS} rows allowed per import",
        )


# ─── GET /import/template ───

@router.get("/template", summary="Download a CSV import template for a category")
async def download_template(
    db: Annotated[AsyncSession, Depends(get_session)],
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
    category_id: Annotated[str | None, Query(alias="categoryId")] = None,
):
    if not category_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="categoryId is required")

    category = await _get_category(db, ctx.tenant.id, category_id)
    content = build_import_template(load_field_schema(category.field_schema))
    filename = template_filename(category.name)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ─── POST /import/validate ───

@router.post(
    "/validate",
    response_model=ImportValidateResponse,
    summary="Validate an uploaded CSV against a category schema",
)
@limiter.limit(settings.IMPORT_RATE_LIMIT)
async def validate_import(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_session)],
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
    file: Annotated[UploadFile | None, File()] = None,
    category_id: Annotated[str | None, Form(alias="categoryId")] = None,
):
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File is required")
    if not category_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="categoryId is required")

    category = await _get_category(db, ctx.tenant.id, category_id)

    content = await file.read()
    rows = parse_csv(content.decode("utf-8", errors="replace"))
    if not rows:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CSV file is empty or invalid")
    _enforce_row_limit(len(rows))

    result = validate_rows(rows, load_field_schema(category.field_schema))
    logger.info(
        "Import validation for category %s (tenant %s): %d valid, %d invalid",
        category.id, ctx.tenant.id, len(result.valid_rows), len(result.invalid_rows),
    )

    return ImportValidateResponse(
        total_rows=result.total_rows,
        valid_count=len(result.valid_rows),
        invalid_count=len(result.invalid_rows),
        valid_rows=result.valid_rows,
        invalid_rows=result.invalid_rows[: settings.IMPORT_INVALID_PREVIEW_LIMIT],
        category_id=category.id,
        category_name=category.name,
    )


# ─── POST /import/execute ───

@router.post(
    "/execute",
    response_model=ImportExecuteResponse,
    summary="Create assets from validated import rows (MANAGER+)",
)
@limiter.limit(settings.IMPORT_RATE_LIMIT)
async def execute_import_route(
    request: Request,
    body: ImportExecuteRequest,
    db: Annotated[AsyncSession, Depends(get_session)],
    ctx: Annotated[TenantContext, Depends(require_tenant_role("MANAGER"))],
):
    _enforce_row_limit(len(body.rows))
    category = await _get_category(db, ctx.tenant.id, body.category_id)

    try:
        execution = await execute_import(db, category, body.rows, ctx.user)
    except ImportRowsInvalid as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": str(exc),
                "invalidRows": exc.invalid_rows[:EXECUTE_ERROR_PREVIEW],
            },
        )

    return ImportExecuteResponse(created=execution.created, category_name=category.name)
