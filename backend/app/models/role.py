"""Role assignment model and the ordered application role enum."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.models.user import Base, utcnow


class AppRole(str, enum.Enum):
    """Closed set of application roles, ordered USER < ADMIN < HEAD_ADMIN."""

    USER = "user"
    ADMIN = "admin"
    HEAD_ADMIN = "head_admin"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def __ge__(self, other):
        if not isinstance(other, AppRole):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other):
        if not isinstance(other, AppRole):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other):
        if not isinstance(other, AppRole):
            return NotImplemented
        return self.rank <= other.rank

    def __lt__(self, other):
        if not isinstance(other, AppRole):
            return NotImplemented
        return self.rank < other.rank


_ROLE_RANK = {AppRole.USER: 0, AppRole.ADMIN: 1, AppRole.HEAD_ADMIN: 2}

# Roles that may be stored in user_roles; plain users have no row.
ASSIGNABLE_ROLES = (AppRole.ADMIN.value, AppRole.HEAD_ADMIN.value)


class RoleAssignment(Base):
    __tablename__ = "user_roles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    created_by: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, server_default=func.now()
    )

    __table_args__ = (
        Index("ix_user_roles_user_created", "user_id", "created_at"),
    )
