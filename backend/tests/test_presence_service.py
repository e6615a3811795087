"""Presence heartbeat tests."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.models.user import User
from app.services import presence_service


@pytest.mark.asyncio
async def test_heartbeat_marks_online(db, make_user) -> None:
    user = await make_user("online@example.com")
    now = datetime(2026, 3, 1, 9, 0, 0)

    await presence_service.heartbeat(db, user, now=now)
    await db.commit()

    assert user.online_at == now
    assert presence_service.is_online(user, now=now + timedelta(seconds=60))
    assert not presence_service.is_online(user, now=now + timedelta(minutes=5))


@pytest.mark.asyncio
async def test_mark_offline_clears_stamp(db, make_user) -> None:
    user = await make_user("online@example.com")
    await presence_service.heartbeat(db, user)
    await db.commit()

    assert await presence_service.mark_offline(db, user) is True
    assert user.online_at is None
    assert not presence_service.is_online(user)


class _FailingCommitSession:
    def __init__(self) -> None:
        self.rolled_back = False

    async def commit(self) -> None:
        raise OperationalError("UPDATE", {}, Exception("connection lost"))

    async def rollback(self) -> None:
        self.rolled_back = True


@pytest.mark.asyncio
async def test_mark_offline_failure_is_reported_not_raised() -> None:
    session = _FailingCommitSession()
    user = User(email="x@example.com", username="x", password_hash="h")

    assert await presence_service.mark_offline(session, user) is False
    assert session.rolled_back
