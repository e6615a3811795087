"""Two-stage watch-then-unlock ad gate.

Progress lives in ``ad_views``. Dwell time is enforced on the server: starting
a stage issues a signed token stamped with the server clock, and completing
the stage is only accepted once ``ad_dwell_seconds`` have elapsed since then.
"""

import enum
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import Unauthorized, ValidationError
from app.models.ad_view import AdView
from app.models.user import utcnow
from app.services.auth_service import create_token, decode_token

AD_STAGE_TOKEN_TYPE = "ad_stage"
STAGES = (1, 2)


class AdGateState(str, enum.Enum):
    NOT_STARTED = "not_started"
    WATCHING_2 = "watching_2"
    UNLOCKED = "unlocked"


class AccessStatus(str, enum.Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"


def state_of(view: AdView | None) -> AdGateState:
    if view is None or not view.video_1_watched:
        return AdGateState.NOT_STARTED
    if not view.video_2_watched:
        return AdGateState.WATCHING_2
    return AdGateState.UNLOCKED


async def get_ad_view(db: AsyncSession, user_id: uuid.UUID) -> AdView | None:
    result = await db.execute(select(AdView).where(AdView.user_id == user_id))
    return result.scalar_one_or_none()


async def record_progress(
    db: AsyncSession,
    user_id: uuid.UUID,
    stage1_done: bool,
    stage2_done: bool,
) -> AdView:
    """Create or update the user's ad-view row in place."""
    view = await get_ad_view(db, user_id)
    if view is None:
        view = AdView(user_id=user_id)
        db.add(view)
    view.video_1_watched = stage1_done
    view.video_2_watched = stage2_done
    view.last_watched_at = utcnow()
    await db.flush()
    return view


async def check_status(db: AsyncSession, user_id: uuid.UUID) -> AccessStatus:
    view = await get_ad_view(db, user_id)
    if view is not None and view.unlocked:
        return AccessStatus.UNLOCKED
    return AccessStatus.LOCKED


def _validate_stage(stage: int) -> None:
    if stage not in STAGES:
        raise ValidationError(f"Unknown ad stage {stage}")


def start_stage(user_id: uuid.UUID, stage: int, now: datetime | None = None) -> dict:
    """Issue a stage token recording when the server started the dwell timer."""
    _validate_stage(stage)
    started_at = now or datetime.now(timezone.utc)
    token = create_token(
        str(user_id),
        AD_STAGE_TOKEN_TYPE,
        timedelta(minutes=settings.ad_stage_token_ttl_minutes),
        stage=stage,
        started_at=started_at.timestamp(),
    )
    return {
        "stage": stage,
        "token": token,
        "dwell_seconds": settings.ad_dwell_seconds,
        "started_at": started_at.isoformat(),
    }


def _elapsed_seconds(payload: dict, now: datetime) -> float:
    try:
        started_at = float(payload["started_at"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValidationError("Invalid ad stage token") from exc
    return now.timestamp() - started_at


async def complete_stage(
    db: AsyncSession,
    user_id: uuid.UUID,
    stage: int,
    token: str,
    now: datetime | None = None,
) -> AdView:
    """Accept a finished stage once its dwell time has elapsed on the server clock."""
    _validate_stage(stage)
    try:
        payload = decode_token(token)
    except ValueError as exc:
        raise ValidationError("Invalid or expired ad stage token") from exc

    if payload.get("token_type") != AD_STAGE_TOKEN_TYPE or payload.get("stage") != stage:
        raise ValidationError("Invalid ad stage token")
    if payload.get("sub") != str(user_id):
        raise Unauthorized("Ad stage token was issued to another user")

    elapsed = _elapsed_seconds(payload, now or datetime.now(timezone.utc))
    if elapsed < settings.ad_dwell_seconds:
        remaining = int(settings.ad_dwell_seconds - elapsed) + 1
        raise ValidationError(f"Please keep watching for {remaining} more seconds")

    view = await get_ad_view(db, user_id)
    if stage == 2:
        if state_of(view) == AdGateState.NOT_STARTED:
            raise ValidationError("Finish the first video before the second")
        return await record_progress(db, user_id, True, True)

    # Replaying stage 1 never re-locks an already unlocked user.
    already_done = view is not None and view.video_2_watched
    return await record_progress(db, user_id, True, already_done)
