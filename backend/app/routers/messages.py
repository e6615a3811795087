"""Private messages: send (audited) and read the inbox."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_current_user, get_db
from app.models.user import User
from app.schemas.admin import AdminActionOut, SendMessageIn
from app.services import admin_action_service, message_service
from app.services.admin_action_service import SendMessage

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("", response_model=AdminActionOut, status_code=status.HTTP_201_CREATED)
async def send_message(
    body: SendMessageIn,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Send a private message to the user with the given email."""
    action = SendMessage(recipient_email=body.recipient_email, body=body.message)
    return await admin_action_service.execute(db, action, current_user)


@router.get("")
async def list_inbox(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: int = Query(default=50, ge=1, le=200),
):
    return await message_service.list_inbox(db, current_user.id, limit)


@router.put("/{message_id}/read")
async def mark_message_read(
    message_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if not await message_service.mark_read(db, current_user.id, message_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    await db.commit()
    return {"message": "Message marked as read"}
