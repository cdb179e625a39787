"""Initial schema — communities, posts, community_posts.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "communities",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "posts",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("creator_id", sa.String(128), nullable=False),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("category", sa.String(200), nullable=False),
        sa.Column("file", sa.Text, nullable=False),
        sa.Column("community_id", UUID(as_uuid=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_posts_category", "posts", ["category"])

    op.create_table(
        "community_posts",
        sa.Column(
            "community_id", UUID(as_uuid=True),
            sa.ForeignKey("communities.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("post_id", UUID(as_uuid=True), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table("community_posts")
    op.drop_index("ix_posts_category", table_name="posts")
    op.drop_table("posts")
    op.drop_table("communities")
