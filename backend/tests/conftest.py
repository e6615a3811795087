"""Shared test fixtures and mock implementations."""

from typing import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.models  # noqa: F401
from app.ai.llm_base import CompletionGateway, CompletionStream, LLMMessage
from app.models.role import AppRole, RoleAssignment
from app.models.user import Base, User


class MockCompletionStream(CompletionStream):
    """Stream that yields predetermined SSE chunks."""

    def __init__(self, chunks: list[bytes]) -> None:
        self.chunks = chunks
        self.closed = False

    async def iter_bytes(self) -> AsyncIterator[bytes]:
        try:
            for chunk in self.chunks:
                yield chunk
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        self.closed = True


class MockCompletionGateway(CompletionGateway):
    """Gateway that records each request and replays canned chunks.

    When ``error`` is set, ``open_stream`` raises it instead.
    """

    def __init__(
        self,
        chunks: list[bytes] | None = None,
        error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.model_id = "mock-model"
        self.chunks = chunks or [
            b'data: {"choices":[{"delta":{"content":"Hello"}}]}\n\n',
            b"data: [DONE]\n\n",
        ]
        self.error = error
        self.calls: list[tuple[str, list[LLMMessage]]] = []

    async def open_stream(
        self,
        system_prompt: str,
        messages: list[LLMMessage],
    ) -> MockCompletionStream:
        self.calls.append((system_prompt, messages))
        if self.error is not None:
            raise self.error
        return MockCompletionStream(list(self.chunks))


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Isolated SQLite database with the full schema."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def create_user(
    db: AsyncSession,
    email: str,
    username: str | None = None,
    role: AppRole | None = None,
    full_name: str | None = None,
) -> User:
    """Insert a user (and optionally a role row) and commit."""
    user = User(
        email=email.lower(),
        username=username or email.split("@")[0],
        full_name=full_name,
        password_hash="not-a-real-hash",
    )
    db.add(user)
    await db.flush()
    if role is not None and role != AppRole.USER:
        db.add(RoleAssignment(user_id=user.id, role=role.value))
    await db.commit()
    return user


@pytest.fixture
def make_user(db):
    """Bind ``create_user`` to the test session."""

    async def _make(email: str, **kwargs) -> User:
        return await create_user(db, email, **kwargs)

    return _make
