"""Database initialisation and migration runner."""

import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import select

from app.config import settings
from app.db.session import AsyncSessionLocal
from app.models.role import AppRole, RoleAssignment
from app.models.user import User

logger = logging.getLogger(__name__)


def _build_alembic_config() -> Config:
    backend_dir = Path(__file__).resolve().parents[2]
    cfg = Config(str(backend_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(backend_dir / "alembic"))
    return cfg


async def init_db() -> None:
    """Run Alembic migrations to keep the schema up to date."""
    cfg = _build_alembic_config()
    await asyncio.to_thread(command.upgrade, cfg, "head")
    await ensure_head_admins()


async def ensure_head_admins(session_factory=AsyncSessionLocal) -> int:
    """Give configured head admin accounts a head_admin row when they lack one."""
    emails = settings.head_admin_email_set
    if not emails:
        return 0

    async with session_factory() as session:
        result = await session.execute(select(User).where(User.email.in_(emails)))
        users = result.scalars().all()
        if not users:
            return 0

        existing = await session.execute(
            select(RoleAssignment.user_id).where(
                RoleAssignment.user_id.in_([user.id for user in users]),
                RoleAssignment.role == AppRole.HEAD_ADMIN.value,
            )
        )
        seeded = set(existing.scalars().all())

        added = 0
        for user in users:
            if user.id in seeded:
                continue
            session.add(RoleAssignment(user_id=user.id, role=AppRole.HEAD_ADMIN.value))
            added += 1

        if not added:
            return 0
        await session.commit()
        logger.info("Seeded %d head admin role(s)", added)
        return added
