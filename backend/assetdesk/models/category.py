from sqlalchemy import Boolean, String, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from assetdesk.db.base import Base, TenantScopedMixin, TimestampMixin, UUIDMixin


class AssetCategory(Base, UUIDMixin, TimestampMixin, TenantScopedMixin):
    """Tenant-defined grouping of assets carrying a custom field schema."""

    __tablename__ = "asset_categories"
    __table_args__ = (UniqueConstraint("tenant_id", "name", name="uq_asset_categories_tenant_name"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # Ordered list of {key, label, type, required, options}
    field_schema: Mapped[list] = mapped_column(
        JSONB, nullable=False, default=list, server_default=text("'[]'::jsonb")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
