"""Course assistant tests: prompts, gateway error mapping, SSE relay."""

import json
import uuid

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.ai.llm_gateway import HttpCompletionGateway, get_completion_gateway
from app.ai.prompts import AssistantMode, build_system_prompt
from app.config import settings
from app.dependencies import get_current_user, get_gateway
from app.errors import (
    QuotaExhausted,
    RateLimited,
    UpstreamError,
    UpstreamUnavailable,
    register_error_handlers,
)
from app.models.user import User
from app.routers.assistant import router as assistant_router
from app.services.rate_limiter import RateLimiter
from conftest import MockCompletionGateway

GATEWAY_URL = "https://gateway.test/v1/chat/completions"
SSE_BODY = (
    b'data: {"choices":[{"delta":{"content":"Hi"}}]}\n\n'
    b'data: {"choices":[{"delta":{"content":" there"}}]}\n\n'
    b"data: [DONE]\n\n"
)


def _gateway(handler, api_key: str = "test-key") -> HttpCompletionGateway:
    return HttpCompletionGateway(
        api_key=api_key,
        model_id="google/gemini-2.5-flash",
        url=GATEWAY_URL,
        transport=httpx.MockTransport(handler),
    )


# ── Prompts ─────────────────────────────────────────────────────────


def test_base_prompt_names_course() -> None:
    prompt = build_system_prompt(AssistantMode.NONE, "Data Structures", "CSC 201")
    assert 'for the course "Data Structures" (CSC 201).' in prompt
    assert "QUIZ GENERATION MODE" not in prompt
    assert "EXPLANATION MODE" not in prompt


def test_prompt_defaults_course_title() -> None:
    prompt = build_system_prompt(AssistantMode.NONE)
    assert 'for the course "this course".' in prompt


def test_quiz_and_explain_modes_append_instructions() -> None:
    quiz = build_system_prompt(AssistantMode.QUIZ, "Calculus")
    explain = build_system_prompt(AssistantMode.EXPLAIN, "Calculus")
    assert "QUIZ GENERATION MODE" in quiz
    assert "5-10 multiple choice questions" in quiz
    assert "EXPLANATION MODE" in explain
    assert "QUIZ GENERATION MODE" not in explain


def test_file_context_is_included() -> None:
    prompt = build_system_prompt(
        AssistantMode.NONE,
        "Calculus",
        file_name="week3.pdf",
        file_url="https://files.test/week3.pdf",
    )
    assert '"week3.pdf" available at https://files.test/week3.pdf' in prompt


# ── Gateway client ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_gateway_relays_sse_bytes_verbatim() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["authorization"]
        seen["payload"] = json.loads(request.content)
        return httpx.Response(
            200,
            content=SSE_BODY,
            headers={"content-type": "text/event-stream"},
        )

    gateway = _gateway(handler)
    stream = await gateway.open_stream("system text", [{"role": "user", "content": "Hello"}])
    body = b"".join([chunk async for chunk in stream.iter_bytes()])

    assert body == SSE_BODY
    assert seen["auth"] == "Bearer test-key"
    assert seen["payload"]["stream"] is True
    assert seen["payload"]["model"] == "google/gemini-2.5-flash"
    assert seen["payload"]["messages"] == [
        {"role": "system", "content": "system text"},
        {"role": "user", "content": "Hello"},
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status_code", "error_type"),
    [
        (429, RateLimited),
        (402, QuotaExhausted),
        (500, UpstreamUnavailable),
        (503, UpstreamUnavailable),
    ],
)
async def test_gateway_maps_error_statuses(status_code: int, error_type) -> None:
    gateway = _gateway(lambda _request: httpx.Response(status_code, text="upstream says no"))

    with pytest.raises(error_type):
        await gateway.open_stream("system", [])


@pytest.mark.asyncio
async def test_gateway_transport_failure_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamUnavailable):
        await _gateway(handler).open_stream("system", [])


@pytest.mark.asyncio
async def test_gateway_requires_api_key() -> None:
    gateway = _gateway(lambda _request: httpx.Response(200), api_key="")
    with pytest.raises(UpstreamError):
        await gateway.open_stream("system", [])


def test_get_completion_gateway_reads_settings(monkeypatch) -> None:
    monkeypatch.setattr("app.config.settings.ai_gateway_api_key", "configured-key")
    monkeypatch.setattr("app.config.settings.ai_gateway_model", "custom/model")

    gateway = get_completion_gateway(settings)

    assert isinstance(gateway, HttpCompletionGateway)
    assert gateway.api_key == "configured-key"
    assert gateway.model_id == "custom/model"


# ── Router ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def assistant_app(monkeypatch):
    monkeypatch.setattr("app.routers.assistant.rate_limiter", RateLimiter())
    app = FastAPI(title="assistant-test-app")
    register_error_handlers(app)
    app.include_router(assistant_router)
    user = User(
        id=uuid.uuid4(),
        email="student@example.com",
        username="student",
        password_hash="h",
    )
    app.dependency_overrides[get_current_user] = lambda: user
    yield app
    app.dependency_overrides.clear()


async def _post(app: FastAPI, payload: dict) -> httpx.Response:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        return await client.post("/api/course-assistant", json=payload)


@pytest.mark.asyncio
async def test_assistant_streams_gateway_output(assistant_app: FastAPI) -> None:
    gateway = MockCompletionGateway(chunks=[b"data: one\n\n", b"data: [DONE]\n\n"])
    assistant_app.dependency_overrides[get_gateway] = lambda: gateway

    response = await _post(
        assistant_app,
        {
            "messages": [{"role": "user", "content": "Quiz me"}],
            "courseContext": {"title": "Biology", "code": "BIO 101"},
            "action": "quiz",
            "fileName": "cells.pdf",
        },
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert response.content == b"data: one\n\ndata: [DONE]\n\n"
    system_prompt, messages = gateway.calls[0]
    assert '"Biology" (BIO 101)' in system_prompt
    assert "QUIZ GENERATION MODE" in system_prompt
    assert '"cells.pdf"' in system_prompt
    assert messages == [{"role": "user", "content": "Quiz me"}]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "status_code", "message"),
    [
        (RateLimited(), 429, "Rate limit exceeded. Please try again in a moment."),
        (QuotaExhausted(), 402, "AI credits exhausted. Please add credits to continue."),
        (UpstreamUnavailable(), 500, "AI service temporarily unavailable"),
    ],
)
async def test_assistant_maps_gateway_errors_to_json(
    assistant_app: FastAPI, error: Exception, status_code: int, message: str
) -> None:
    assistant_app.dependency_overrides[get_gateway] = lambda: MockCompletionGateway(error=error)

    response = await _post(assistant_app, {"messages": [{"role": "user", "content": "Hi"}]})

    assert response.status_code == status_code
    assert response.json() == {"error": message}


@pytest.mark.asyncio
async def test_assistant_local_rate_limit(assistant_app: FastAPI, monkeypatch) -> None:
    monkeypatch.setattr("app.services.rate_limiter.settings.rate_limit_user_per_minute", 1)
    gateway = MockCompletionGateway()
    assistant_app.dependency_overrides[get_gateway] = lambda: gateway

    first = await _post(assistant_app, {"messages": []})
    second = await _post(assistant_app, {"messages": []})

    assert first.status_code == 200
    assert second.status_code == 429
    assert len(gateway.calls) == 1
