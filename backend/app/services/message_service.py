"""Private message inbox."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.message import PrivateMessage
from app.models.user import User


async def list_inbox(db: AsyncSession, user_id: uuid.UUID, limit: int = 50) -> list[dict]:
    """Return messages addressed to the user, newest first, with sender email."""
    result = await db.execute(
        select(PrivateMessage, User.email)
        .outerjoin(User, User.id == PrivateMessage.sender_id)
        .where(PrivateMessage.recipient_id == user_id)
        .order_by(PrivateMessage.created_at.desc())
        .limit(limit)
    )
    return [
        {
            "id": str(message.id),
            "sender_id": str(message.sender_id),
            "sender_email": sender_email,
            "message": message.message,
            "read": message.read,
            "created_at": message.created_at.isoformat() if message.created_at else None,
        }
        for message, sender_email in result.all()
    ]


async def mark_read(db: AsyncSession, user_id: uuid.UUID, message_id: uuid.UUID) -> bool:
    result = await db.execute(
        select(PrivateMessage).where(
            PrivateMessage.id == message_id,
            PrivateMessage.recipient_id == user_id,
        )
    )
    message = result.scalar_one_or_none()
    if message is None:
        return False
    message.read = True
    await db.flush()
    return True
