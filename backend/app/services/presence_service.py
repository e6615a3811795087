"""Online-status heartbeat bookkeeping."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import User, utcnow

logger = logging.getLogger(__name__)


async def heartbeat(db: AsyncSession, user: User, now: datetime | None = None) -> datetime:
    """Stamp the user as online now."""
    user.online_at = now or utcnow()
    await db.flush()
    return user.online_at


async def mark_offline(db: AsyncSession, user: User) -> bool:
    """Clear the online stamp; failures are logged and not retried."""
    user.online_at = None
    try:
        await db.commit()
    except SQLAlchemyError:
        logger.warning("Could not mark user %s offline", user.id, exc_info=True)
        await db.rollback()
        return False
    return True


def is_online(user: User, now: datetime | None = None) -> bool:
    if user.online_at is None:
        return False
    window = timedelta(seconds=settings.presence_online_window_seconds)
    return (now or utcnow()) - user.online_at <= window
