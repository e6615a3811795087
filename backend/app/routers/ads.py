"""Ad gate endpoints: status plus server-timed stage start and completion."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.dependencies import get_current_user, get_db
from app.models.ad_view import AdView
from app.models.user import User
from app.schemas.ad import AdStageCompleteIn, AdStageStartOut, AdStatusOut
from app.services import ad_gate_service
from app.services.ad_gate_service import AccessStatus

router = APIRouter(prefix="/api/ads", tags=["ads"])


def _status_out(view: AdView | None) -> AdStatusOut:
    access = AccessStatus.UNLOCKED if view is not None and view.unlocked else AccessStatus.LOCKED
    return AdStatusOut(
        status=access.value,
        state=ad_gate_service.state_of(view).value,
        video_1_watched=bool(view and view.video_1_watched),
        video_2_watched=bool(view and view.video_2_watched),
        dwell_seconds=settings.ad_dwell_seconds,
    )


@router.get("/status", response_model=AdStatusOut)
async def get_status(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    view = await ad_gate_service.get_ad_view(db, current_user.id)
    return _status_out(view)


@router.post("/stages/{stage}/start", response_model=AdStageStartOut)
async def start_stage(
    current_user: Annotated[User, Depends(get_current_user)],
    stage: int = Path(),
):
    """Start the dwell timer for one ad stage."""
    return ad_gate_service.start_stage(current_user.id, stage)


@router.post("/stages/{stage}/complete", response_model=AdStatusOut)
async def complete_stage(
    body: AdStageCompleteIn,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    stage: int = Path(),
):
    view = await ad_gate_service.complete_stage(db, current_user.id, stage, body.token)
    await db.commit()
    return _status_out(view)
