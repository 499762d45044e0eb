from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from assetdesk.db.base import Base, TimestampMixin, UUIDMixin

PLANS = ("FREE", "STARTER", "PROFESSIONAL", "ENTERPRISE")


class Tenant(Base, UUIDMixin, TimestampMixin):
    """An isolated organization; every asset and user row is partitioned by tenant."""

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    plan: Mapped[str] = mapped_column(String(20), nullable=False, default="FREE")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
