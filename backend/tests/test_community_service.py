"""Course community thread tests: posting, replies, likes."""

import uuid
from datetime import datetime, timedelta

import pytest

from app.errors import NotFound, ValidationError
from app.models.role import AppRole
from app.services import community_service


@pytest.mark.asyncio
async def test_posts_list_newest_first_with_replies_oldest_first(db, make_user) -> None:
    author = await make_user("ada@example.com")
    base = datetime(2025, 1, 1, 12, 0, 0)

    first = await community_service.create_post(db, "csc101", author, "First question")
    second = await community_service.create_post(db, "csc101", author, "Second question")
    early = await community_service.create_post(db, "csc101", author, "early", parent_id=first.id)
    late = await community_service.create_post(db, "csc101", author, "late", parent_id=first.id)
    await community_service.create_post(db, "mth101", author, "Other course")
    for offset, post in enumerate([first, early, late, second]):
        post.created_at = base + timedelta(minutes=offset)
    await db.commit()

    threads = await community_service.list_posts(db, "csc101", author.id)

    assert [thread["content"] for thread in threads] == ["Second question", "First question"]
    assert [reply["content"] for reply in threads[1]["replies"]] == ["early", "late"]
    assert threads[0]["replies"] == []
    assert threads[1]["user_name"] == "ada"
    assert threads[1]["user_avatar"] == "A"


@pytest.mark.asyncio
async def test_blank_post_is_rejected(db, make_user) -> None:
    author = await make_user("ada@example.com")

    with pytest.raises(ValidationError):
        await community_service.create_post(db, "csc101", author, "   ")


@pytest.mark.asyncio
async def test_reply_must_target_top_level_post_in_same_course(db, make_user) -> None:
    author = await make_user("ada@example.com")
    post = await community_service.create_post(db, "csc101", author, "Question")
    reply = await community_service.create_post(db, "csc101", author, "Answer", parent_id=post.id)

    with pytest.raises(NotFound):
        await community_service.create_post(db, "mth101", author, "x", parent_id=post.id)
    with pytest.raises(NotFound):
        await community_service.create_post(db, "csc101", author, "x", parent_id=reply.id)
    with pytest.raises(NotFound):
        await community_service.create_post(db, "csc101", author, "x", parent_id=uuid.uuid4())


@pytest.mark.asyncio
async def test_admin_replies_are_flagged(db, make_user) -> None:
    student = await make_user("student@example.com")
    admin = await make_user("admin@example.com", role=AppRole.ADMIN)
    post = await community_service.create_post(db, "csc101", student, "Question")

    student_reply = await community_service.create_post(
        db, "csc101", student, "Me too", parent_id=post.id
    )
    admin_reply = await community_service.create_post(
        db, "csc101", admin, "Answer", parent_id=post.id
    )

    assert post.is_admin_reply is False
    assert student_reply.is_admin_reply is False
    assert admin_reply.is_admin_reply is True


@pytest.mark.asyncio
async def test_like_toggles_and_tracks_viewer(db, make_user) -> None:
    author = await make_user("ada@example.com")
    fan = await make_user("fan@example.com")
    post = await community_service.create_post(db, "csc101", author, "Question")
    await db.commit()

    assert await community_service.toggle_like(db, "csc101", post.id, fan) == (True, 1)
    assert await community_service.toggle_like(db, "csc101", post.id, author) == (True, 2)
    await db.commit()

    fan_view = await community_service.list_posts(db, "csc101", fan.id)
    assert fan_view[0]["likes"] == 2
    assert fan_view[0]["user_liked"] is True

    assert await community_service.toggle_like(db, "csc101", post.id, fan) == (False, 1)
    await db.commit()
    fan_view = await community_service.list_posts(db, "csc101", fan.id)
    assert fan_view[0]["user_liked"] is False


@pytest.mark.asyncio
async def test_like_unknown_post_is_not_found(db, make_user) -> None:
    fan = await make_user("fan@example.com")

    with pytest.raises(NotFound):
        await community_service.toggle_like(db, "csc101", uuid.uuid4(), fan)
