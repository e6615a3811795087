from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.ai.prompts import AssistantMode


class AssistantMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(max_length=32000)


class CourseContext(BaseModel):
    title: str | None = None
    code: str | None = None


class AssistantRequest(BaseModel):
    """Accepts both camelCase (web client) and snake_case field names."""

    messages: list[AssistantMessage] = Field(default_factory=list)
    course_context: CourseContext | None = Field(default=None, alias="courseContext")
    action: AssistantMode = AssistantMode.NONE
    file_name: str | None = Field(default=None, alias="fileName")
    file_url: str | None = Field(default=None, alias="fileUrl")

    model_config = ConfigDict(populate_by_name=True)
