"""Online presence heartbeat."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.dependencies import get_current_user, get_db
from app.models.user import User
from app.services import presence_service

router = APIRouter(prefix="/api/presence", tags=["presence"])


@router.put("")
async def heartbeat(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Mark the caller online; clients repeat this every heartbeat interval."""
    online_at = await presence_service.heartbeat(db, current_user)
    await db.commit()
    return {
        "online_at": online_at.isoformat(),
        "heartbeat_seconds": settings.presence_heartbeat_seconds,
    }


@router.delete("")
async def go_offline(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return {"offline": await presence_service.mark_offline(db, current_user)}
