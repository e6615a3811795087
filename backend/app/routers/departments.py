"""Department spaces: join or create, member roles, class rep, leaving."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_current_user, get_db
from app.models.user import User
from app.schemas.department import (
    ClassRepPromotion,
    DepartmentJoinIn,
    DepartmentJoinOut,
    MemberRoleUpdate,
)
from app.services import department_service

router = APIRouter(prefix="/api/department-spaces", tags=["department-spaces"])


@router.get("/mine")
async def get_my_spaces(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    members = await department_service.get_user_spaces(db, current_user.id)
    return [department_service.serialise_membership(member) for member in members]


@router.post("/join", response_model=DepartmentJoinOut)
async def join_space(
    body: DepartmentJoinIn,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Join an existing space with its code, or create it when none matches."""
    result = await department_service.create_or_join(
        db,
        current_user.id,
        school=body.school,
        department=body.department,
        level=body.level,
        code=body.code,
    )
    await db.commit()
    return result


@router.patch("/{space_id}/members/{member_id}")
async def update_member_role(
    space_id: uuid.UUID,
    member_id: uuid.UUID,
    body: MemberRoleUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    member = await department_service.update_member_role(
        db, current_user.id, space_id, member_id, body.role
    )
    await db.commit()
    return {"id": str(member.id), "role": member.role}


@router.post("/{space_id}/class-rep")
async def promote_class_rep(
    space_id: uuid.UUID,
    body: ClassRepPromotion,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Make the election winner the space's class representative."""
    member = await department_service.promote_class_rep(
        db, current_user.id, space_id, body.winner_id
    )
    await db.commit()
    return {"id": str(member.id), "user_id": str(member.user_id), "role": member.role}


@router.delete("/{space_id}/membership")
async def leave_space(
    space_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if not await department_service.leave_department(db, current_user.id, space_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="You are not a member of this department space",
        )
    await db.commit()
    return {"message": "Left department space"}
