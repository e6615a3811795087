"""Record and retrieve admin audit log entries."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.audit import AdminAction
from app.models.user import User

UNKNOWN_ACTOR_LABEL = "Unknown"


async def log_action(
    db: AsyncSession,
    admin_id: uuid.UUID,
    action_type: str,
    target_id: uuid.UUID | None = None,
    target_type: str | None = None,
    details: dict | None = None,
) -> AdminAction:
    """Stage an audit record for a privileged action and flush it."""
    entry = AdminAction(
        admin_id=admin_id,
        action_type=action_type,
        target_id=target_id,
        target_type=target_type,
        details=details,
    )
    db.add(entry)
    await db.flush()
    return entry


def _clamp_limit(limit: int) -> int:
    return max(1, min(int(limit), settings.audit_log_max_limit))


async def list_recent(db: AsyncSession, limit: int = 100) -> list[dict]:
    """Return the newest audit records, each labelled with its actor.

    Actors missing from the directory are labelled ``Unknown`` rather than
    failing the listing.
    """
    result = await db.execute(
        select(AdminAction)
        .order_by(AdminAction.created_at.desc())
        .limit(_clamp_limit(limit))
    )
    entries = result.scalars().all()

    actor_ids = {entry.admin_id for entry in entries}
    actors: dict[uuid.UUID, User] = {}
    if actor_ids:
        users = await db.execute(select(User).where(User.id.in_(actor_ids)))
        actors = {user.id: user for user in users.scalars().all()}

    records = []
    for entry in entries:
        actor = actors.get(entry.admin_id)
        records.append(
            {
                "id": str(entry.id),
                "admin_id": str(entry.admin_id),
                "admin_email": actor.email if actor else None,
                "admin_label": (actor.username or actor.email) if actor else UNKNOWN_ACTOR_LABEL,
                "action_type": entry.action_type,
                "target_id": str(entry.target_id) if entry.target_id else None,
                "target_type": entry.target_type,
                "details": entry.details,
                "created_at": entry.created_at.isoformat() if entry.created_at else None,
            }
        )
    return records
