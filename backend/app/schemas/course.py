from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CourseIn(BaseModel):
    code: str = Field(max_length=20)
    title: str = Field(max_length=255)
    level: str = Field(max_length=50)
    semester: str = Field(max_length=50)
    status: str = Field(default="C", max_length=5)
    units: int = Field(default=3, ge=0, le=12)
    department: str | None = Field(default=None, max_length=255)
    description: str | None = None
    overview: str | None = None


class CourseOut(BaseModel):
    id: UUID
    code: str
    title: str
    level: str
    semester: str
    status: str
    units: int
    department: str | None = None
    description: str | None = None
    overview: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DepartmentalCourseIn(BaseModel):
    department: str = Field(max_length=255)
    level: str = Field(max_length=50)
    semester: str = Field(max_length=50)
    session: str = Field(default="2024/2025", max_length=20)
    course_code: str = Field(max_length=20)
    course_title: str = Field(max_length=255)
    units: int = Field(default=3, ge=0, le=12)
    status: str = Field(default="C", max_length=5)


class DepartmentalCourseOut(BaseModel):
    id: UUID
    department: str
    level: str
    semester: str
    session: str
    course_code: str
    course_title: str
    units: int
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommunityPostIn(BaseModel):
    content: str = Field(max_length=5000)
    parent_id: UUID | None = None
    file_name: str | None = Field(default=None, max_length=255)
    file_url: str | None = Field(default=None, max_length=1000)


class CommunityLikeOut(BaseModel):
    liked: bool
    likes: int
