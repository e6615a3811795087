"""Identity directory lookups used by admin tooling."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound
from app.models.role import ASSIGNABLE_ROLES, AppRole, RoleAssignment
from app.models.user import User
from app.services.presence_service import is_online

MISSING_VALUE = "N/A"


def normalise_email(email: str) -> str:
    return email.strip().lower()


async def find_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == normalise_email(email)))
    return result.scalar_one_or_none()


async def require_user_by_email(
    db: AsyncSession, email: str, *, label: str = "User"
) -> User:
    user = await find_user_by_email(db, email)
    if user is None:
        raise NotFound(f"{label} not found")
    return user


async def _users_by_id(db: AsyncSession, user_ids: set[uuid.UUID]) -> dict[uuid.UUID, User]:
    if not user_ids:
        return {}
    result = await db.execute(select(User).where(User.id.in_(user_ids)))
    return {user.id: user for user in result.scalars().all()}


async def list_admins(db: AsyncSession) -> list[dict]:
    """Return every admin/head_admin assignment merged with user details."""
    result = await db.execute(
        select(RoleAssignment)
        .where(RoleAssignment.role.in_(ASSIGNABLE_ROLES))
        .order_by(RoleAssignment.created_at.desc())
    )
    assignments = result.scalars().all()
    users = await _users_by_id(db, {item.user_id for item in assignments})

    admins = []
    for item in assignments:
        user = users.get(item.user_id)
        admins.append(
            {
                "id": str(item.id),
                "user_id": str(item.user_id),
                "role": item.role,
                "created_by": str(item.created_by) if item.created_by else None,
                "created_at": item.created_at.isoformat() if item.created_at else None,
                "email": user.email if user else MISSING_VALUE,
                "username": user.username if user else MISSING_VALUE,
                # Head admin rows are never offered for removal.
                "removable": item.role != AppRole.HEAD_ADMIN.value,
            }
        )
    return admins


async def list_users_with_roles(db: AsyncSession) -> list[dict]:
    """Return all users, newest first, with email and current role."""
    result = await db.execute(select(User).order_by(User.created_at.desc()))
    users = result.scalars().all()

    roles_result = await db.execute(
        select(RoleAssignment.user_id, RoleAssignment.role)
        .order_by(RoleAssignment.created_at.asc())
    )
    # Later rows overwrite earlier ones, leaving the newest role per user.
    latest_roles: dict[uuid.UUID, str] = {}
    for user_id, role in roles_result.all():
        latest_roles[user_id] = role

    return [
        {
            "id": str(user.id),
            "email": user.email or MISSING_VALUE,
            "username": user.username,
            "full_name": user.full_name,
            "avatar_url": user.avatar_url,
            "online_at": user.online_at.isoformat() if user.online_at else None,
            "online": is_online(user),
            "created_at": user.created_at.isoformat() if user.created_at else None,
            "role": latest_roles.get(user.id, AppRole.USER.value),
        }
        for user in users
    ]
