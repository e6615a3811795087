"""Course catalogue, departmental curricula, and course community threads."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_admin_user, get_current_user, get_db
from app.models.user import User
from app.schemas.admin import AdminActionOut
from app.schemas.course import (
    CommunityLikeOut,
    CommunityPostIn,
    CourseIn,
    CourseOut,
    DepartmentalCourseIn,
    DepartmentalCourseOut,
)
from app.services import admin_action_service, community_service, course_service
from app.services.admin_action_service import (
    AddCourse,
    AddDepartmentalCourse,
    DeleteCourse,
    DeleteDepartmentalCourse,
)

router = APIRouter(prefix="/api/courses", tags=["courses"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin"])

CourseKey = Annotated[str, Path(min_length=1, max_length=100)]


@router.get("", response_model=list[CourseOut])
async def list_courses(
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    search: str | None = Query(default=None, max_length=100),
):
    return await course_service.list_courses(db, search)


@router.get("/departmental", response_model=list[DepartmentalCourseOut])
async def list_departmental_courses(
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    department: str | None = Query(default=None, max_length=255),
    level: str | None = Query(default=None, max_length=50),
    semester: str | None = Query(default=None, max_length=50),
):
    """List the curriculum, filtered by any of department, level and semester."""
    return await course_service.list_departmental_courses(
        db, department=department, level=level, semester=semester
    )


@router.get("/{course_id}", response_model=CourseOut)
async def get_course(
    course_id: uuid.UUID,
    _: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await course_service.get_course(db, course_id)


@router.get("/{course_id}/community")
async def list_community_posts(
    course_id: CourseKey,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Return the course's threads with replies and the caller's likes."""
    return await community_service.list_posts(db, course_id, current_user.id)


@router.post("/{course_id}/community", status_code=status.HTTP_201_CREATED)
async def create_community_post(
    course_id: CourseKey,
    body: CommunityPostIn,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    post = await community_service.create_post(
        db,
        course_id,
        current_user,
        body.content,
        parent_id=body.parent_id,
        file_name=body.file_name,
        file_url=body.file_url,
    )
    await db.commit()
    return community_service.serialise_post(post)


@router.post("/{course_id}/community/{post_id}/like", response_model=CommunityLikeOut)
async def toggle_community_like(
    course_id: CourseKey,
    post_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    liked, likes = await community_service.toggle_like(db, course_id, post_id, current_user)
    await db.commit()
    return CommunityLikeOut(liked=liked, likes=likes)


@admin_router.post(
    "/courses", response_model=AdminActionOut, status_code=status.HTTP_201_CREATED
)
async def add_course(
    body: CourseIn,
    current_user: Annotated[User, Depends(get_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await admin_action_service.execute(db, AddCourse(**body.model_dump()), current_user)


@admin_router.delete("/courses/{course_id}", response_model=AdminActionOut)
async def delete_course(
    course_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await admin_action_service.execute(db, DeleteCourse(course_id), current_user)


@admin_router.post(
    "/departmental-courses",
    response_model=AdminActionOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_departmental_course(
    body: DepartmentalCourseIn,
    current_user: Annotated[User, Depends(get_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    action = AddDepartmentalCourse(**body.model_dump())
    return await admin_action_service.execute(db, action, current_user)


@admin_router.delete("/departmental-courses/{course_id}", response_model=AdminActionOut)
async def delete_departmental_course(
    course_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await admin_action_service.execute(
        db, DeleteDepartmentalCourse(course_id), current_user
    )
