"""Add ad views, private messages, department spaces and leaderboard

Revision ID: 002
Revises: 001

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "ad_views",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("video_1_watched", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("video_2_watched", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("last_watched_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "private_messages",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("sender_id", UUID(as_uuid=True), nullable=False),
        sa.Column("recipient_id", UUID(as_uuid=True), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_private_messages_recipient_created",
        "private_messages",
        ["recipient_id", "created_at"],
    )

    op.create_table(
        "department_spaces",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("school", sa.String(length=255), nullable=False),
        sa.Column("department", sa.String(length=255), nullable=False),
        sa.Column("level", sa.String(length=50), nullable=False),
        sa.Column("display_tag", sa.String(length=600), nullable=False),
        sa.Column("code_hash", sa.String(length=64), nullable=False),
        sa.Column("created_by", UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.UniqueConstraint(
            "school", "department", "level", name="uq_department_spaces_identity"
        ),
    )

    op.create_table(
        "department_members",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("department_space_id", UUID(as_uuid=True), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="student"),
        sa.Column("joined_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["department_space_id"], ["department_spaces.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "user_id", "department_space_id", name="uq_department_members_user_space"
        ),
    )
    op.create_index(
        "ix_department_members_user_id", "department_members", ["user_id"]
    )

    op.create_table(
        "leaderboard",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("course_id", sa.String(length=100), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("avatar", sa.String(length=500), nullable=True),
        sa.Column("score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("course_id", "user_id", name="uq_leaderboard_course_user"),
    )
    op.create_index(
        "ix_leaderboard_course_score", "leaderboard", ["course_id", "score"]
    )


def downgrade() -> None:
    op.drop_index("ix_leaderboard_course_score", table_name="leaderboard")
    op.drop_table("leaderboard")

    op.drop_index("ix_department_members_user_id", table_name="department_members")
    op.drop_table("department_members")
    op.drop_table("department_spaces")

    op.drop_index("ix_private_messages_recipient_created", table_name="private_messages")
    op.drop_table("private_messages")

    op.drop_table("ad_views")
