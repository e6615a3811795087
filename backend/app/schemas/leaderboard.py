from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class LeaderboardEntryOut(BaseModel):
    id: UUID
    course_id: str
    user_id: UUID
    name: str
    avatar: str | None = None
    score: int
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ScoreSubmit(BaseModel):
    score: int = Field(ge=0)
