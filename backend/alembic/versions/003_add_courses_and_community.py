"""Add course catalogue, departmental courses and community posts

Revision ID: 003
Revises: 002

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "courses",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("code", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("level", sa.String(length=50), nullable=False),
        sa.Column("semester", sa.String(length=50), nullable=False),
        sa.Column("status", sa.String(length=5), nullable=False, server_default="C"),
        sa.Column("units", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("department", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("overview", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code"),
    )

    op.create_table(
        "departmental_courses",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("department", sa.String(length=255), nullable=False),
        sa.Column("level", sa.String(length=50), nullable=False),
        sa.Column("semester", sa.String(length=50), nullable=False),
        sa.Column("session", sa.String(length=20), nullable=False),
        sa.Column("course_code", sa.String(length=20), nullable=False),
        sa.Column("course_title", sa.String(length=255), nullable=False),
        sa.Column("units", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("status", sa.String(length=5), nullable=False, server_default="C"),
        sa.Column("created_by", UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(
        "ix_departmental_courses_lookup",
        "departmental_courses",
        ["department", "level", "semester"],
    )

    op.create_table(
        "community_posts",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("course_id", sa.String(length=100), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_name", sa.String(length=255), nullable=False),
        sa.Column("user_avatar", sa.String(length=500), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("parent_id", UUID(as_uuid=True), nullable=True),
        sa.Column("file_url", sa.String(length=1000), nullable=True),
        sa.Column("file_name", sa.String(length=255), nullable=True),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_admin_reply", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["community_posts.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_community_posts_course_created",
        "community_posts",
        ["course_id", "created_at"],
    )
    op.create_index("ix_community_posts_parent_id", "community_posts", ["parent_id"])

    op.create_table(
        "community_likes",
        sa.Column("id", UUID(as_uuid=True), nullable=False),
        sa.Column("post_id", UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["community_posts.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("post_id", "user_id", name="uq_community_likes_post_user"),
    )


def downgrade() -> None:
    op.drop_table("community_likes")
    op.drop_index("ix_community_posts_parent_id", table_name="community_posts")
    op.drop_index("ix_community_posts_course_created", table_name="community_posts")
    op.drop_table("community_posts")

    op.drop_index("ix_departmental_courses_lookup", table_name="departmental_courses")
    op.drop_table("departmental_courses")
    op.drop_table("courses")
