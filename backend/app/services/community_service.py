"""Course community threads: posts, replies, and likes."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound, ValidationError
from app.models.community import CommunityLike, CommunityPost
from app.models.user import User
from app.services.role_service import is_admin, resolve_role

logger = logging.getLogger(__name__)

ANONYMOUS_NAME = "Anonymous"


def _display_name(user: User) -> str:
    return user.email.split("@")[0] or ANONYMOUS_NAME


def _avatar(user: User) -> str:
    return user.avatar_url or (user.email[:1].upper() or "A")


def serialise_post(post: CommunityPost, liked_ids: set[uuid.UUID] | None = None) -> dict:
    liked_ids = liked_ids or set()
    return {
        "id": str(post.id),
        "course_id": post.course_id,
        "user_id": str(post.user_id),
        "user_name": post.user_name,
        "user_avatar": post.user_avatar or post.user_name[:1].upper() or "A",
        "content": post.content,
        "parent_id": str(post.parent_id) if post.parent_id else None,
        "file_url": post.file_url,
        "file_name": post.file_name,
        "likes": post.likes,
        "is_admin_reply": post.is_admin_reply,
        "user_liked": post.id in liked_ids,
        "created_at": post.created_at.isoformat() if post.created_at else None,
    }


async def list_posts(
    db: AsyncSession, course_id: str, viewer_id: uuid.UUID | None = None
) -> list[dict]:
    """Return top-level posts newest first, each with its replies oldest first."""
    result = await db.execute(
        select(CommunityPost)
        .where(CommunityPost.course_id == course_id)
        .order_by(CommunityPost.created_at.asc())
    )
    posts = list(result.scalars().all())

    liked_ids: set[uuid.UUID] = set()
    if viewer_id is not None and posts:
        liked = await db.execute(
            select(CommunityLike.post_id).where(
                CommunityLike.user_id == viewer_id,
                CommunityLike.post_id.in_([post.id for post in posts]),
            )
        )
        liked_ids = set(liked.scalars().all())

    replies: dict[uuid.UUID, list[dict]] = {}
    threads: list[dict] = []
    for post in posts:
        if post.parent_id is None:
            threads.append(serialise_post(post, liked_ids))
        else:
            replies.setdefault(post.parent_id, []).append(serialise_post(post, liked_ids))

    for thread in threads:
        thread["replies"] = replies.get(uuid.UUID(thread["id"]), [])
    threads.reverse()
    return threads


async def create_post(
    db: AsyncSession,
    course_id: str,
    author: User,
    content: str,
    *,
    parent_id: uuid.UUID | None = None,
    file_name: str | None = None,
    file_url: str | None = None,
) -> CommunityPost:
    """Add a post or a reply. Replies from admins are flagged as such."""
    if not content.strip():
        raise ValidationError("Post content cannot be empty")

    is_admin_reply = False
    if parent_id is not None:
        parent = await db.get(CommunityPost, parent_id)
        if parent is None or parent.course_id != course_id or parent.parent_id is not None:
            raise NotFound("Post not found")
        is_admin_reply = is_admin(await resolve_role(db, author.id))

    post = CommunityPost(
        course_id=course_id,
        user_id=author.id,
        user_name=_display_name(author),
        user_avatar=_avatar(author),
        content=content,
        parent_id=parent_id,
        file_name=file_name,
        file_url=file_url,
        is_admin_reply=is_admin_reply,
    )
    db.add(post)
    await db.flush()
    return post


async def toggle_like(
    db: AsyncSession, course_id: str, post_id: uuid.UUID, user: User
) -> tuple[bool, int]:
    """Like the post, or unlike it if the user already did.

    Returns the new liked flag and like count.
    """
    post = await db.get(CommunityPost, post_id)
    if post is None or post.course_id != course_id:
        raise NotFound("Post not found")

    result = await db.execute(
        select(CommunityLike).where(
            CommunityLike.post_id == post_id,
            CommunityLike.user_id == user.id,
        )
    )
    existing = result.scalar_one_or_none()
    if existing is None:
        db.add(CommunityLike(post_id=post_id, user_id=user.id))
        post.likes += 1
        liked = True
    else:
        await db.delete(existing)
        post.likes = max(0, post.likes - 1)
        liked = False

    await db.flush()
    logger.debug("User %s %s post %s", user.id, "liked" if liked else "unliked", post_id)
    return liked, post.likes
