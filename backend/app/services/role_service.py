"""Resolve a user's application role and guard privileged operations."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import Unauthorized
from app.models.role import AppRole, RoleAssignment

logger = logging.getLogger(__name__)


async def resolve_role(db: AsyncSession, user_id: uuid.UUID | None) -> AppRole:
    """Return the role from the user's most recent assignment.

    Anonymous callers, users without assignments, and store faults all
    resolve to ``AppRole.USER`` so an unreadable role never grants privilege.
    """
    if user_id is None:
        return AppRole.USER

    try:
        result = await db.execute(
            select(RoleAssignment.role)
            .where(RoleAssignment.user_id == user_id)
            .order_by(RoleAssignment.created_at.desc())
            .limit(1)
        )
        stored = result.scalar_one_or_none()
    except SQLAlchemyError:
        logger.exception("Role lookup failed for user %s; defaulting to user", user_id)
        await db.rollback()
        return AppRole.USER

    if stored is None:
        return AppRole.USER
    try:
        return AppRole(stored)
    except ValueError:
        logger.warning("Unknown role %r stored for user %s", stored, user_id)
        return AppRole.USER


def is_admin(role: AppRole) -> bool:
    return role >= AppRole.ADMIN


def is_head_admin(role: AppRole) -> bool:
    return role == AppRole.HEAD_ADMIN


def require_role(role: AppRole, minimum: AppRole) -> None:
    """Raise Unauthorized unless ``role`` is at least ``minimum``."""
    if role < minimum:
        label = "Head admin" if minimum == AppRole.HEAD_ADMIN else "Admin"
        raise Unauthorized(f"{label} access required.")
