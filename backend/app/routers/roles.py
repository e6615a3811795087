"""Role resolution endpoint for the current user."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import get_current_role
from app.models.role import AppRole
from app.schemas.admin import RoleOut
from app.services.role_service import is_admin, is_head_admin

router = APIRouter(prefix="/api/roles", tags=["roles"])


@router.get("/me", response_model=RoleOut)
async def get_my_role(role: Annotated[AppRole, Depends(get_current_role)]):
    return RoleOut(role=role.value, is_admin=is_admin(role), is_head_admin=is_head_admin(role))
