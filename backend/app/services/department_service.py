"""Department space membership: join or create, roles, leaving."""

import hashlib
import logging
import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound, PersistenceError, Unauthorized, ValidationError
from app.models.department import (
    MANAGER_ROLES,
    DepartmentMember,
    DepartmentRole,
    DepartmentSpace,
)

logger = logging.getLogger(__name__)


def hash_code(code: str) -> str:
    """SHA-256 hex digest of the trimmed, lower-cased join code."""
    return hashlib.sha256(code.strip().lower().encode("utf-8")).hexdigest()


def display_tag(school: str, department: str, level: str) -> str:
    return f"{school} {department} {level}"


def serialise_membership(member: DepartmentMember) -> dict:
    space = member.space
    return {
        "id": str(member.id),
        "role": member.role,
        "joined_at": member.joined_at.isoformat() if member.joined_at else None,
        "department_space": {
            "id": str(space.id),
            "school": space.school,
            "department": space.department,
            "level": space.level,
            "display_tag": space.display_tag,
        },
    }


async def get_user_spaces(db: AsyncSession, user_id: uuid.UUID) -> list[DepartmentMember]:
    result = await db.execute(
        select(DepartmentMember)
        .where(DepartmentMember.user_id == user_id)
        .order_by(DepartmentMember.joined_at.asc())
    )
    return list(result.scalars().unique().all())


async def _get_membership(
    db: AsyncSession, user_id: uuid.UUID, space_id: uuid.UUID
) -> DepartmentMember | None:
    result = await db.execute(
        select(DepartmentMember).where(
            DepartmentMember.user_id == user_id,
            DepartmentMember.department_space_id == space_id,
        )
    )
    return result.scalars().unique().one_or_none()


async def create_or_join(
    db: AsyncSession,
    user_id: uuid.UUID,
    school: str,
    department: str,
    level: str,
    code: str,
) -> dict:
    """Join the matching space with its code, or create it as dept_admin.

    A user may belong to one department space only.
    """
    school, department, level = school.strip(), department.strip(), level.strip()
    if not school or not department or not level or not code.strip():
        raise ValidationError("All fields are required")

    existing = await get_user_spaces(db, user_id)
    if existing:
        tag = existing[0].space.display_tag or "a department"
        raise ValidationError(
            f"You are already a member of {tag}. You can only join one department space."
        )

    code_hash = hash_code(code)
    result = await db.execute(
        select(DepartmentSpace).where(
            DepartmentSpace.school == school,
            DepartmentSpace.department == department,
            DepartmentSpace.level == level,
        )
    )
    space = result.scalar_one_or_none()

    if space is not None:
        if space.code_hash != code_hash:
            raise Unauthorized("Invalid department code. Please check with your classmates.")
        db.add(
            DepartmentMember(
                user_id=user_id,
                department_space_id=space.id,
                role=DepartmentRole.STUDENT.value,
            )
        )
        is_new = False
        message = "Successfully joined department space"
    else:
        space = DepartmentSpace(
            school=school,
            department=department,
            level=level,
            display_tag=display_tag(school, department, level),
            code_hash=code_hash,
            created_by=user_id,
        )
        db.add(space)
        await db.flush()
        db.add(
            DepartmentMember(
                user_id=user_id,
                department_space_id=space.id,
                role=DepartmentRole.DEPT_ADMIN.value,
            )
        )
        is_new = True
        message = "Department space created! You are now the admin."

    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("Department join conflict for user %s: %s", user_id, exc)
        raise PersistenceError("Failed to join department space") from exc

    return {
        "success": True,
        "message": message,
        "space_id": str(space.id),
        "is_new": is_new,
    }


async def _require_manager(
    db: AsyncSession, user_id: uuid.UUID, space_id: uuid.UUID, detail: str
) -> DepartmentMember:
    member = await _get_membership(db, user_id, space_id)
    if member is None or member.role not in MANAGER_ROLES:
        raise Unauthorized(detail)
    return member


async def update_member_role(
    db: AsyncSession,
    actor_id: uuid.UUID,
    space_id: uuid.UUID,
    member_id: uuid.UUID,
    new_role: DepartmentRole,
) -> DepartmentMember:
    """Change a member's role. Class reps outrank dept admins."""
    actor = await _require_manager(db, actor_id, space_id, "Unauthorized to manage roles")

    result = await db.execute(
        select(DepartmentMember).where(
            DepartmentMember.id == member_id,
            DepartmentMember.department_space_id == space_id,
        )
    )
    target = result.scalars().unique().one_or_none()
    if target is None:
        raise NotFound("Member not found")

    if (
        actor.role == DepartmentRole.DEPT_ADMIN.value
        and target.role == DepartmentRole.CLASS_REP.value
    ):
        raise Unauthorized("Admins cannot modify class representative roles")

    target.role = new_role.value
    await db.flush()
    return target


async def promote_class_rep(
    db: AsyncSession,
    actor_id: uuid.UUID,
    space_id: uuid.UUID,
    winner_id: uuid.UUID,
) -> DepartmentMember:
    """Make ``winner_id`` the space's only class rep."""
    await _require_manager(
        db, actor_id, space_id, "Unauthorized to promote class representative"
    )
    winner = await _get_membership(db, winner_id, space_id)
    if winner is None:
        raise NotFound("Member not found")

    await db.execute(
        update(DepartmentMember)
        .where(
            DepartmentMember.department_space_id == space_id,
            DepartmentMember.role == DepartmentRole.CLASS_REP.value,
        )
        .values(role=DepartmentRole.STUDENT.value)
        .execution_options(synchronize_session="fetch")
    )
    winner.role = DepartmentRole.CLASS_REP.value
    await db.flush()
    return winner


async def leave_department(
    db: AsyncSession, user_id: uuid.UUID, space_id: uuid.UUID
) -> bool:
    member = await _get_membership(db, user_id, space_id)
    if member is None:
        return False
    await db.delete(member)
    await db.flush()
    return True
