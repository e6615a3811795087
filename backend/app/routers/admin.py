"""Admin router: admin management, directory lookups, and audit log."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_admin_user, get_db, get_head_admin_user
from app.models.user import User
from app.schemas.admin import AddAdminIn, AdminActionOut, DirectoryUserOut
from app.services import admin_action_service, audit_service, directory_service
from app.services.admin_action_service import AddAdmin, RemoveAdmin

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/admins")
async def list_admins(
    _: Annotated[User, Depends(get_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Return every admin and head admin assignment with user details."""
    return await directory_service.list_admins(db)


@router.get("/users")
async def list_users(
    _: Annotated[User, Depends(get_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await directory_service.list_users_with_roles(db)


@router.get("/users/lookup", response_model=DirectoryUserOut)
async def lookup_user(
    _: Annotated[User, Depends(get_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    email: str = Query(min_length=1, max_length=255),
):
    """Resolve an email address to a user id."""
    user = await directory_service.require_user_by_email(db, email)
    return DirectoryUserOut(id=user.id, email=user.email)


@router.post("/admins", response_model=AdminActionOut, status_code=status.HTTP_201_CREATED)
async def add_admin(
    body: AddAdminIn,
    current_user: Annotated[User, Depends(get_head_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await admin_action_service.execute(db, AddAdmin(email=body.email), current_user)


@router.delete("/admins/{assignment_id}", response_model=AdminActionOut)
async def remove_admin(
    assignment_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_head_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    target_user_id: uuid.UUID = Query(),
):
    """Delete an admin role assignment and record who it belonged to."""
    action = RemoveAdmin(assignment_id=assignment_id, target_user_id=target_user_id)
    return await admin_action_service.execute(db, action, current_user)


@router.get("/audit-log")
async def get_audit_log(
    _: Annotated[User, Depends(get_admin_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    limit: int = Query(default=100, ge=1),
):
    """Return the most recent admin actions, newest first."""
    return await audit_service.list_recent(db, limit)
