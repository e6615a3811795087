"""Audit log reader tests."""

import uuid
from datetime import datetime, timedelta

import pytest

from app.models.audit import AdminAction
from app.services import audit_service


def test_admin_action_model_optional_fields() -> None:
    """AdminAction should accept None for target and details."""
    entry = AdminAction(
        admin_id=uuid.uuid4(),
        action_type="remove_admin",
        target_id=None,
        target_type=None,
        details=None,
    )
    assert entry.action_type == "remove_admin"
    assert entry.target_id is None
    assert entry.details is None


@pytest.mark.asyncio
async def test_log_action_flushes_entry(db, make_user) -> None:
    admin = await make_user("admin@example.com")
    target_id = uuid.uuid4()

    entry = await audit_service.log_action(
        db,
        admin.id,
        "add_admin",
        target_id=target_id,
        target_type="user",
        details={"email": "x@example.com"},
    )
    await db.commit()

    assert entry.id is not None
    assert entry.created_at is not None
    records = await audit_service.list_recent(db)
    assert records[0]["target_id"] == str(target_id)
    assert records[0]["details"] == {"email": "x@example.com"}
    assert records[0]["admin_email"] == "admin@example.com"


@pytest.mark.asyncio
async def test_list_recent_orders_newest_first_and_labels_unknown_actors(db, make_user) -> None:
    admin = await make_user("admin@example.com", username="ada")
    base = datetime(2026, 1, 1, 12, 0, 0)
    db.add_all(
        [
            AdminAction(admin_id=admin.id, action_type="add_admin", created_at=base),
            AdminAction(
                admin_id=uuid.uuid4(),
                action_type="send_message",
                created_at=base + timedelta(minutes=5),
            ),
        ]
    )
    await db.commit()

    records = await audit_service.list_recent(db)

    assert [record["action_type"] for record in records] == ["send_message", "add_admin"]
    assert records[0]["admin_label"] == audit_service.UNKNOWN_ACTOR_LABEL
    assert records[0]["admin_email"] is None
    assert records[1]["admin_label"] == "ada"


@pytest.mark.asyncio
async def test_list_recent_respects_limit(db, make_user, monkeypatch) -> None:
    monkeypatch.setattr("app.services.audit_service.settings.audit_log_max_limit", 3)
    admin = await make_user("admin@example.com")
    base = datetime(2026, 1, 1)
    db.add_all(
        [
            AdminAction(
                admin_id=admin.id,
                action_type="send_message",
                created_at=base + timedelta(seconds=i),
            )
            for i in range(5)
        ]
    )
    await db.commit()

    assert len(await audit_service.list_recent(db, limit=2)) == 2
    # Requests above the configured maximum are clamped.
    assert len(await audit_service.list_recent(db, limit=50)) == 3
    assert len(await audit_service.list_recent(db, limit=0)) == 1
