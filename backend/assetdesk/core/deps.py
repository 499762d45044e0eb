from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.security import decode_token
from assetdesk.db.session import get_session
from assetdesk.models.tenant import Tenant
from assetdesk.models.user import ROLE_HIERARCHY, User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


@dataclass
class TenantContext:
    """The authenticated caller and the tenant addressed by the request path."""

    user: User
    tenant: Tenant


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> User:
    """Validate JWT and return the User ORM object."""
    credentials_exc = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token)
        if payload.get("type") != "access":
            raise credentials_exc
        user_id: str | None = payload.get("sub")
        if not user_id:
            raise credentials_exc
        user_uuid = UUID(user_id)
    except (JWTError, ValueError):
        raise credentials_exc

    result = await db.execute(select(User).where(User.id == user_uuid))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        raise credentials_exc
    return user


async def get_tenant_context(
    slug: str,
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> TenantContext:
    """Resolve the tenant from the URL slug and check the caller may act in it.

    Super admins may access any tenant; everyone else only their own.
    """
    result = await db.execute(select(Tenant).where(Tenant.slug == slug))
    tenant = result.scalar_one_or_none()
    if tenant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

    if not user.is_super_admin and user.tenant_id != tenant.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")

    return TenantContext(user=user, tenant=tenant)


def has_role(user, required_role: str) -> bool:
    """True if the user holds ``required_role`` or higher. Super admins always pass."""
    if user.is_super_admin:
        return True
    user_level = ROLE_HIERARCHY.get(user.role, 0)
    return user_level >= ROLE_HIERARCHY[required_role]


def require_tenant_role(required_role: str):
    """Dependency factory that raises 403 unless the caller holds ``required_role`` or higher."""
    if required_role not in ROLE_HIERARCHY:
        raise ValueError(f"Unknown role: {required_role}")

    async def check(ctx: Annotated[TenantContext, Depends(get_tenant_context)]) -> TenantContext:
        if not has_role(ctx.user, required_role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This action requires {required_role} role or higher",
            )
        return ctx
    return check
