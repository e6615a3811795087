"""Per-course quiz leaderboard."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_current_user, get_db
from app.models.user import User
from app.schemas.leaderboard import LeaderboardEntryOut, ScoreSubmit
from app.services import leaderboard_service

router = APIRouter(prefix="/api/courses", tags=["leaderboard"])

CourseId = Annotated[str, Path(min_length=1, max_length=100)]


@router.get("/{course_id}/leaderboard", response_model=list[LeaderboardEntryOut])
async def get_leaderboard(
    course_id: CourseId,
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await leaderboard_service.get_top_entries(db, course_id)


@router.post("/{course_id}/leaderboard")
async def submit_score(
    course_id: CourseId,
    body: ScoreSubmit,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Record a quiz score, keeping the user's best for the course."""
    entry = await leaderboard_service.record_score(db, course_id, current_user, body.score)
    await db.commit()
    rank = await leaderboard_service.get_user_rank(db, course_id, current_user.id)
    return {
        "entry": LeaderboardEntryOut.model_validate(entry),
        "rank": rank,
    }
