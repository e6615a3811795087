"""Role-gated admin actions with their audit records.

Each action is one variant of ``AdminActionRequest``. ``execute`` checks the
actor's role, applies the primary change, appends the audit record and
commits both together. Any store fault rolls back the whole action.
"""

import enum
import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound, PersistenceError, Unauthorized, ValidationError
from app.models.audit import AdminAction
from app.models.course import Course, DepartmentalCourse
from app.models.message import PrivateMessage
from app.models.role import AppRole, RoleAssignment
from app.models.user import User
from app.services import audit_service, course_service
from app.services.directory_service import require_user_by_email
from app.services.role_service import require_role, resolve_role

logger = logging.getLogger(__name__)

MESSAGE_PREVIEW_CHARS = 100


DEFAULT_SESSION = "2024/2025"


class AuditActionType(str, enum.Enum):
    ADD_ADMIN = "add_admin"
    REMOVE_ADMIN = "remove_admin"
    SEND_MESSAGE = "send_message"
    ADD_COURSE = "add_course"
    DELETE_COURSE = "delete_course"
    ADD_DEPARTMENTAL_COURSE = "add_departmental_course"
    DELETE_DEPARTMENTAL_COURSE = "delete_departmental_course"


@dataclass(frozen=True)
class AddAdmin:
    email: str


@dataclass(frozen=True)
class RemoveAdmin:
    assignment_id: uuid.UUID
    target_user_id: uuid.UUID


@dataclass(frozen=True)
class SendMessage:
    recipient_email: str
    body: str


@dataclass(frozen=True)
class AddCourse:
    code: str
    title: str
    level: str
    semester: str
    status: str = "C"
    units: int = 3
    department: str | None = None
    description: str | None = None
    overview: str | None = None


@dataclass(frozen=True)
class DeleteCourse:
    course_id: uuid.UUID


@dataclass(frozen=True)
class AddDepartmentalCourse:
    department: str
    level: str
    semester: str
    course_code: str
    course_title: str
    session: str = DEFAULT_SESSION
    units: int = 3
    status: str = "C"


@dataclass(frozen=True)
class DeleteDepartmentalCourse:
    course_id: uuid.UUID


AdminActionRequest = (
    AddAdmin
    | RemoveAdmin
    | SendMessage
    | AddCourse
    | DeleteCourse
    | AddDepartmentalCourse
    | DeleteDepartmentalCourse
)


def required_role(action: AdminActionRequest) -> AppRole:
    match action:
        case AddAdmin() | RemoveAdmin():
            return AppRole.HEAD_ADMIN
        case AddCourse() | DeleteCourse() | AddDepartmentalCourse() | DeleteDepartmentalCourse():
            return AppRole.ADMIN
        case SendMessage():
            return AppRole.USER
    raise TypeError(f"Unsupported admin action: {type(action).__name__}")


async def _add_admin(db: AsyncSession, action: AddAdmin, actor: User) -> AdminAction:
    if not action.email.strip():
        raise ValidationError("Please enter an email address")
    target = await require_user_by_email(db, action.email)

    db.add(
        RoleAssignment(
            user_id=target.id,
            role=AppRole.ADMIN.value,
            created_by=actor.id,
        )
    )
    await db.flush()
    return await audit_service.log_action(
        db,
        actor.id,
        AuditActionType.ADD_ADMIN.value,
        target_id=target.id,
        target_type="user",
        details={"email": target.email},
    )


async def _remove_admin(db: AsyncSession, action: RemoveAdmin, actor: User) -> AdminAction:
    result = await db.execute(
        select(RoleAssignment).where(RoleAssignment.id == action.assignment_id)
    )
    assignment = result.scalar_one_or_none()
    if assignment is None:
        raise NotFound("Admin assignment not found")
    if assignment.role == AppRole.HEAD_ADMIN.value:
        raise Unauthorized("Head admin assignments cannot be removed.")

    if assignment.user_id != action.target_user_id:
        logger.warning(
            "RemoveAdmin target %s does not own assignment %s; recording %s",
            action.target_user_id,
            assignment.id,
            assignment.user_id,
        )

    # The audited target is the owner of the deleted row.
    target_user_id = assignment.user_id
    await db.delete(assignment)
    await db.flush()
    return await audit_service.log_action(
        db,
        actor.id,
        AuditActionType.REMOVE_ADMIN.value,
        target_id=target_user_id,
        target_type="user",
    )


async def _send_message(db: AsyncSession, action: SendMessage, actor: User) -> AdminAction:
    if not action.recipient_email.strip() or not action.body.strip():
        raise ValidationError("Please fill in all fields")
    recipient = await require_user_by_email(db, action.recipient_email, label="Recipient")

    db.add(
        PrivateMessage(
            sender_id=actor.id,
            recipient_id=recipient.id,
            message=action.body,
        )
    )
    await db.flush()
    return await audit_service.log_action(
        db,
        actor.id,
        AuditActionType.SEND_MESSAGE.value,
        target_id=recipient.id,
        target_type="user",
        details={"message": action.body[:MESSAGE_PREVIEW_CHARS]},
    )


def _require_fields(*values: str) -> None:
    if any(not value or not value.strip() for value in values):
        raise ValidationError("Please fill in all required fields")


async def _add_course(db: AsyncSession, action: AddCourse, actor: User) -> AdminAction:
    _require_fields(action.code, action.title, action.level, action.semester)
    code = course_service.normalise_code(action.code)
    if await course_service.find_course_by_code(db, code) is not None:
        raise ValidationError(f"Course {code} already exists")

    db.add(
        Course(
            code=code,
            title=action.title.strip(),
            level=action.level,
            semester=action.semester,
            status=action.status,
            units=action.units,
            department=action.department,
            description=action.description,
            overview=action.overview,
        )
    )
    await db.flush()
    return await audit_service.log_action(
        db,
        actor.id,
        AuditActionType.ADD_COURSE.value,
        details={"course_code": code, "course_title": action.title.strip()},
    )


async def _delete_course(db: AsyncSession, action: DeleteCourse, actor: User) -> AdminAction:
    course = await course_service.get_course(db, action.course_id)
    code = course.code

    await db.delete(course)
    await db.flush()
    return await audit_service.log_action(
        db,
        actor.id,
        AuditActionType.DELETE_COURSE.value,
        target_id=action.course_id,
        target_type="course",
        details={"course_code": code},
    )


async def _add_departmental_course(
    db: AsyncSession, action: AddDepartmentalCourse, actor: User
) -> AdminAction:
    _require_fields(
        action.department,
        action.level,
        action.semester,
        action.course_code,
        action.course_title,
    )
    code = course_service.normalise_code(action.course_code)
    semester = action.semester.strip().lower()

    db.add(
        DepartmentalCourse(
            department=action.department,
            level=action.level,
            semester=semester,
            session=action.session,
            course_code=code,
            course_title=action.course_title.strip(),
            units=action.units,
            status=action.status,
            created_by=actor.id,
        )
    )
    await db.flush()
    return await audit_service.log_action(
        db,
        actor.id,
        AuditActionType.ADD_DEPARTMENTAL_COURSE.value,
        details={
            "department": action.department,
            "course_code": code,
            "level": action.level,
            "semester": semester,
        },
    )


async def _delete_departmental_course(
    db: AsyncSession, action: DeleteDepartmentalCourse, actor: User
) -> AdminAction:
    course = await db.get(DepartmentalCourse, action.course_id)
    if course is None:
        raise NotFound("Departmental course not found")
    code = course.course_code

    await db.delete(course)
    await db.flush()
    return await audit_service.log_action(
        db,
        actor.id,
        AuditActionType.DELETE_DEPARTMENTAL_COURSE.value,
        target_id=action.course_id,
        target_type="departmental_course",
        details={"course_code": code},
    )


async def _apply(db: AsyncSession, action: AdminActionRequest, actor: User) -> AdminAction:
    match action:
        case AddAdmin():
            return await _add_admin(db, action, actor)
        case RemoveAdmin():
            return await _remove_admin(db, action, actor)
        case SendMessage():
            return await _send_message(db, action, actor)
        case AddCourse():
            return await _add_course(db, action, actor)
        case DeleteCourse():
            return await _delete_course(db, action, actor)
        case AddDepartmentalCourse():
            return await _add_departmental_course(db, action, actor)
        case DeleteDepartmentalCourse():
            return await _delete_departmental_course(db, action, actor)
    raise TypeError(f"Unsupported admin action: {type(action).__name__}")


async def execute(
    db: AsyncSession,
    action: AdminActionRequest,
    actor: User,
) -> AdminAction:
    """Authorise, apply, audit, and commit one admin action."""
    role = await resolve_role(db, actor.id)
    require_role(role, required_role(action))

    try:
        entry = await _apply(db, action, actor)
        await db.commit()
    except (NotFound, Unauthorized, ValidationError):
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Admin action %s failed", type(action).__name__)
        raise PersistenceError(f"Failed to complete {type(action).__name__}") from exc

    logger.info(
        "Admin action %s by %s on %s",
        entry.action_type,
        actor.id,
        entry.target_id,
    )
    return entry
