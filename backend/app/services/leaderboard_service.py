"""Per-course quiz leaderboard."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.leaderboard import LeaderboardEntry
from app.models.user import User


async def get_top_entries(db: AsyncSession, course_id: str) -> list[LeaderboardEntry]:
    """Return the highest scores for a course, best first."""
    result = await db.execute(
        select(LeaderboardEntry)
        .where(LeaderboardEntry.course_id == course_id)
        .order_by(LeaderboardEntry.score.desc(), LeaderboardEntry.updated_at.asc())
        .limit(settings.leaderboard_size)
    )
    return list(result.scalars().all())


async def record_score(
    db: AsyncSession,
    course_id: str,
    user: User,
    score: int,
) -> LeaderboardEntry:
    """Keep the user's best score for the course."""
    result = await db.execute(
        select(LeaderboardEntry).where(
            LeaderboardEntry.course_id == course_id,
            LeaderboardEntry.user_id == user.id,
        )
    )
    entry = result.scalar_one_or_none()
    name = user.full_name or user.username
    if entry is None:
        entry = LeaderboardEntry(
            course_id=course_id,
            user_id=user.id,
            name=name,
            avatar=user.avatar_url,
            score=score,
        )
        db.add(entry)
    else:
        entry.name = name
        entry.avatar = user.avatar_url
        entry.score = max(entry.score, score)
    await db.flush()
    return entry


async def get_user_rank(db: AsyncSession, course_id: str, user_id: uuid.UUID) -> int | None:
    """Return the 1-based position of the user on the full course board."""
    result = await db.execute(
        select(LeaderboardEntry.user_id)
        .where(LeaderboardEntry.course_id == course_id)
        .order_by(LeaderboardEntry.score.desc(), LeaderboardEntry.updated_at.asc())
    )
    for position, entry_user_id in enumerate(result.scalars().all(), start=1):
        if entry_user_id == user_id:
            return position
    return None
