import enum
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Numeric, String, Text, UniqueConstraint, text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assetdesk.db.base import Base, TenantScopedMixin, TimestampMixin, UUIDMixin


class AssetStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    ASSIGNED = "ASSIGNED"
    MAINTENANCE = "MAINTENANCE"
    RETIRED = "RETIRED"


class AssetCondition(str, enum.Enum):
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


class Asset(Base, UUIDMixin, TimestampMixin, TenantScopedMixin):
    __tablename__ = "assets"
    __table_args__ = (
        # NULLs never collide, so both columns stay optional
        UniqueConstraint("tenant_id", "serial_number", name="uq_assets_tenant_serial"),
        UniqueConstraint("tenant_id", "asset_tag", name="uq_assets_tenant_tag"),
        Index("ix_assets_tenant_status", "tenant_id", "status"),
    )

    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("asset_categories.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    serial_number: Mapped[str | None] = mapped_column(String(255), nullable=True)
    asset_tag: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=AssetStatus.AVAILABLE.value)
    condition: Mapped[str] = mapped_column(String(20), nullable=False, default=AssetCondition.GOOD.value)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    purchase_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    purchase_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    warranty_end: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    custom_fields: Mapped[dict] = mapped_column(
        JSONB, nullable=False, default=dict, server_default=text("'{}'::jsonb")
    )  # keyed by field key, never by label
    assigned_to_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)  # soft delete

    category: Mapped["AssetCategory"] = relationship("AssetCategory", lazy="raise")
    assigned_to: Mapped["User"] = relationship("User", lazy="raise")
