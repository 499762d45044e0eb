from sqlalchemy import Boolean, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from assetdesk.db.base import Base, TenantScopedMixin, TimestampMixin, UUIDMixin

# Higher number = more permissions
ROLE_HIERARCHY = {
    "SUPER_ADMIN": 4,
    "ADMIN": 3,
    "MANAGER": 2,
    "USER": 1,
}
ROLES = tuple(ROLE_HIERARCHY)


class User(Base, UUIDMixin, TimestampMixin, TenantScopedMixin):
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", "tenant_id", name="uq_users_email_tenant"),)

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="USER")
    is_super_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
