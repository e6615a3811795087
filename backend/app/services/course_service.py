"""Course catalogue and departmental curriculum queries."""

import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFound
from app.models.course import Course, DepartmentalCourse


def normalise_code(code: str) -> str:
    return code.strip().upper()


async def list_courses(db: AsyncSession, search: str | None = None) -> list[Course]:
    """Return catalogue courses ordered by code, optionally filtered by a search term."""
    stmt = select(Course).order_by(Course.code.asc())
    term = (search or "").strip()
    if term:
        pattern = f"%{term.lower()}%"
        stmt = stmt.where(
            or_(
                Course.code.ilike(pattern),
                Course.title.ilike(pattern),
                Course.department.ilike(pattern),
            )
        )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_course(db: AsyncSession, course_id: uuid.UUID) -> Course:
    course = await db.get(Course, course_id)
    if course is None:
        raise NotFound("Course not found")
    return course


async def find_course_by_code(db: AsyncSession, code: str) -> Course | None:
    result = await db.execute(select(Course).where(Course.code == normalise_code(code)))
    return result.scalar_one_or_none()


async def list_departmental_courses(
    db: AsyncSession,
    *,
    department: str | None = None,
    level: str | None = None,
    semester: str | None = None,
) -> list[DepartmentalCourse]:
    """Return curriculum rows grouped by department, level, then code.

    Semesters are stored lower-case, so the filter is matched the same way.
    """
    stmt = select(DepartmentalCourse).order_by(
        DepartmentalCourse.department.asc(),
        DepartmentalCourse.level.asc(),
        DepartmentalCourse.course_code.asc(),
    )
    if department:
        stmt = stmt.where(DepartmentalCourse.department == department)
    if level:
        stmt = stmt.where(DepartmentalCourse.level == level)
    if semester:
        stmt = stmt.where(DepartmentalCourse.semester == semester.strip().lower())
    result = await db.execute(stmt)
    return list(result.scalars().all())
