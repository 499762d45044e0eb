import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from assetdesk.core.deps import get_current_user
from assetdesk.core.security import create_access_token, verify_password
from assetdesk.db.session import get_session
from assetdesk.models.user import User
from assetdesk.schemas.auth import Token, UserOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=Token)
async def login(
    form: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
):
    # Emails are unique per tenant only; the first active match wins
    result = await db.execute(
        select(User).where(User.email == form.username).order_by(User.is_active.desc()).limit(1)
    )
    user = result.scalar_one_or_none()
    if not user or not verify_password(form.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account disabled")

    token = create_access_token(subject=str(user.id), tenant_id=str(user.tenant_id), role=user.role)
    logger.info("User %s logged in", user.id)
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=UserOut)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
