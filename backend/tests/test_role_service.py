"""Role resolver and role guard tests."""

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from app.errors import Unauthorized
from app.models.role import AppRole, RoleAssignment
from app.services.role_service import is_admin, is_head_admin, require_role, resolve_role


def test_app_role_ordering() -> None:
    assert AppRole.USER < AppRole.ADMIN < AppRole.HEAD_ADMIN
    assert AppRole.HEAD_ADMIN >= AppRole.ADMIN
    assert not AppRole.ADMIN >= AppRole.HEAD_ADMIN


def test_role_predicates() -> None:
    assert not is_admin(AppRole.USER)
    assert is_admin(AppRole.ADMIN)
    assert is_admin(AppRole.HEAD_ADMIN)
    assert is_head_admin(AppRole.HEAD_ADMIN)
    assert not is_head_admin(AppRole.ADMIN)


def test_require_role_rejects_admin_on_head_admin_path() -> None:
    with pytest.raises(Unauthorized) as exc_info:
        require_role(AppRole.ADMIN, AppRole.HEAD_ADMIN)
    assert exc_info.value.message == "Head admin access required."


def test_require_role_allows_sufficient_role() -> None:
    require_role(AppRole.HEAD_ADMIN, AppRole.ADMIN)
    require_role(AppRole.USER, AppRole.USER)


@pytest.mark.asyncio
async def test_resolve_role_anonymous_is_user(db) -> None:
    assert await resolve_role(db, None) == AppRole.USER


@pytest.mark.asyncio
async def test_resolve_role_without_rows_is_user(db, make_user) -> None:
    user = await make_user("plain@example.com")
    assert await resolve_role(db, user.id) == AppRole.USER


@pytest.mark.asyncio
async def test_resolve_role_uses_newest_assignment(db, make_user) -> None:
    """With several rows, the most recently created one wins."""
    user = await make_user("promoted@example.com", role=AppRole.ADMIN)
    db.add(RoleAssignment(user_id=user.id, role=AppRole.HEAD_ADMIN.value))
    await db.commit()

    assert await resolve_role(db, user.id) == AppRole.HEAD_ADMIN


@pytest.mark.asyncio
async def test_resolve_role_unknown_value_is_user(db, make_user) -> None:
    user = await make_user("odd@example.com")
    db.add(RoleAssignment(user_id=user.id, role="superuser"))
    await db.commit()

    assert await resolve_role(db, user.id) == AppRole.USER


class _FailingSession:
    def __init__(self) -> None:
        self.rolled_back = False

    async def execute(self, _statement):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    async def rollback(self) -> None:
        self.rolled_back = True


@pytest.mark.asyncio
async def test_resolve_role_store_fault_is_user() -> None:
    """A failing lookup never grants privilege."""
    session = _FailingSession()
    assert await resolve_role(session, uuid.uuid4()) == AppRole.USER
    assert session.rolled_back
