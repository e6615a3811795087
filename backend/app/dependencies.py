"""FastAPI dependency injection for database sessions, authentication, and roles."""

import uuid
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.config import settings
from app.db.session import AsyncSessionLocal
from app.ai.llm_base import CompletionGateway
from app.ai.llm_gateway import get_completion_gateway
from app.models.role import AppRole
from app.services.auth_service import decode_token
from app.services.role_service import require_role, resolve_role
from app.models.user import User

security = HTTPBearer()


async def get_db():
    """Yield a database session."""
    async with AsyncSessionLocal() as session:
        yield session


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Extract and validate JWT, then load and return the user."""
    token = credentials.credentials
    try:
        payload = decode_token(token)
        if payload.get("token_type") != "access":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token type",
            )
        user_id = payload.get("sub")
        if user_id is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token payload",
            )
        user_uuid = uuid.UUID(user_id)
    except (ValueError, TypeError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from exc

    result = await db.execute(select(User).where(User.id == user_uuid))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


async def get_current_role(
    user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AppRole:
    return await resolve_role(db, user.id)


async def get_admin_user(
    user: Annotated[User, Depends(get_current_user)],
    role: Annotated[AppRole, Depends(get_current_role)],
) -> User:
    """Require admin or head admin privileges."""
    require_role(role, AppRole.ADMIN)
    return user


async def get_head_admin_user(
    user: Annotated[User, Depends(get_current_user)],
    role: Annotated[AppRole, Depends(get_current_role)],
) -> User:
    """Require head admin privileges."""
    require_role(role, AppRole.HEAD_ADMIN)
    return user


def get_gateway() -> CompletionGateway:
    """Return the configured AI completion gateway."""
    return get_completion_gateway(settings)
