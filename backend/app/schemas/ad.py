from pydantic import BaseModel, Field


class AdStatusOut(BaseModel):
    status: str
    state: str
    video_1_watched: bool = False
    video_2_watched: bool = False
    dwell_seconds: int


class AdStageStartOut(BaseModel):
    stage: int
    token: str
    dwell_seconds: int
    started_at: str


class AdStageCompleteIn(BaseModel):
    token: str = Field(min_length=1)
