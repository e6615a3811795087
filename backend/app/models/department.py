"""Department space and membership models."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.user import Base, utcnow


class DepartmentRole(str, enum.Enum):
    STUDENT = "student"
    CLASS_REP = "class_rep"
    DEPT_ADMIN = "dept_admin"


MANAGER_ROLES = (DepartmentRole.CLASS_REP.value, DepartmentRole.DEPT_ADMIN.value)


class DepartmentSpace(Base):
    __tablename__ = "department_spaces"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    school: Mapped[str] = mapped_column(String(255), nullable=False)
    department: Mapped[str] = mapped_column(String(255), nullable=False)
    level: Mapped[str] = mapped_column(String(50), nullable=False)
    display_tag: Mapped[str] = mapped_column(String(600), nullable=False)
    code_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, server_default=func.now()
    )

    __table_args__ = (
        UniqueConstraint(
            "school", "department", "level", name="uq_department_spaces_identity"
        ),
    )


class DepartmentMember(Base):
    __tablename__ = "department_members"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    department_space_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("department_spaces.id", ondelete="CASCADE"),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DepartmentRole.STUDENT.value
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, server_default=func.now()
    )

    space: Mapped[DepartmentSpace] = relationship(lazy="joined")

    __table_args__ = (
        UniqueConstraint(
            "user_id", "department_space_id", name="uq_department_members_user_space"
        ),
        Index("ix_department_members_user_id", "user_id"),
    )
