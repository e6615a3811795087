"""Course AI assistant: streams gateway completions back to the client."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.ai.llm_base import CompletionGateway
from app.ai.prompts import build_system_prompt
from app.dependencies import get_current_user, get_gateway
from app.errors import RateLimited
from app.models.user import User
from app.schemas.assistant import AssistantRequest
from app.services.rate_limiter import rate_limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/course-assistant", tags=["course-assistant"])


@router.post("")
async def course_assistant(
    body: AssistantRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    gateway: Annotated[CompletionGateway, Depends(get_gateway)],
):
    """Relay the gateway's SSE stream for a course-scoped conversation.

    Gateway rejections surface as JSON errors before any bytes are streamed.
    """
    if not rate_limiter.try_acquire(str(current_user.id)):
        raise RateLimited()

    course = body.course_context
    system_prompt = build_system_prompt(
        body.action,
        course_title=course.title if course else None,
        course_code=course.code if course else None,
        file_name=body.file_name,
        file_url=body.file_url,
    )
    messages = [{"role": msg.role, "content": msg.content} for msg in body.messages]

    stream = await gateway.open_stream(system_prompt, messages)
    logger.info(
        "Course assistant stream opened: user=%s mode=%s model=%s",
        current_user.id,
        body.action.value,
        gateway.model_id,
    )
    return StreamingResponse(stream.iter_bytes(), media_type=stream.media_type)
