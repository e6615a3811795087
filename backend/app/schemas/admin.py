from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RoleOut(BaseModel):
    role: str
    is_admin: bool
    is_head_admin: bool


class AddAdminIn(BaseModel):
    email: str = Field(max_length=255)


class SendMessageIn(BaseModel):
    recipient_email: str = Field(max_length=255)
    message: str = Field(max_length=5000)


class AdminActionOut(BaseModel):
    id: UUID
    admin_id: UUID
    action_type: str
    target_id: UUID | None = None
    target_type: str | None = None
    details: dict | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DirectoryUserOut(BaseModel):
    id: UUID
    email: str
