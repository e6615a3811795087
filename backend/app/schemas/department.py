from uuid import UUID

from pydantic import BaseModel, Field

from app.models.department import DepartmentRole


class DepartmentJoinIn(BaseModel):
    school: str = Field(default="", max_length=255)
    department: str = Field(default="", max_length=255)
    level: str = Field(default="", max_length=50)
    code: str = Field(default="", max_length=255)


class DepartmentJoinOut(BaseModel):
    success: bool
    message: str
    space_id: UUID
    is_new: bool


class MemberRoleUpdate(BaseModel):
    role: DepartmentRole


class ClassRepPromotion(BaseModel):
    winner_id: UUID
