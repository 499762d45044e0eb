import enum
import uuid

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from assetdesk.db.base import Base, CreatedAtMixin, TenantScopedMixin, UUIDMixin


class AssetAction(str, enum.Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    ASSIGNED = "ASSIGNED"
    UNASSIGNED = "UNASSIGNED"
    STATUS_CHANGED = "STATUS_CHANGED"
    DELETED = "DELETED"
    RESTORED = "RESTORED"
    IMAGE_ADDED = "IMAGE_ADDED"
    IMAGE_REMOVED = "IMAGE_REMOVED"


class AssetActivity(Base, UUIDMixin, CreatedAtMixin, TenantScopedMixin):
    """Append-only audit trail of asset mutations.

    The acting user's display name is copied into ``details`` so history
    stays readable after the user is removed.
    """

    __tablename__ = "asset_activities"
    __table_args__ = (
        Index("ix_asset_activities_tenant_created", "tenant_id", "created_at"),
        Index("ix_asset_activities_tenant_action", "tenant_id", "action"),
    )

    action: Mapped[str] = mapped_column(String(30), nullable=False)
    details: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    asset_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False)

    asset: Mapped["Asset"] = relationship("Asset", lazy="raise")
