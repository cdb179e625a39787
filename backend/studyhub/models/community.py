"""Community ORM — the slice of the community entity this service touches.

Invariants:
    - Rows are created by the community directory service, never by this core
    - community_posts has a composite primary key: a post appears at most once per community
    - The post set only grows through community linkage
    - post_id carries no foreign key: deleting a post does not touch the sets
      that reference it, same as posts.community_id

Design Decisions:
    - Association table over an array column: duplicate-safe appends are enforced
      by the primary key, so concurrent writers need no application lock
    - posts relationship is viewonly: all writes go through CommunityLinkage
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from studyhub.db.base import Base


community_posts = Table(
    "community_posts",
    Base.metadata,
    Column(
        "community_id", UUID(as_uuid=True),
        ForeignKey("communities.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column("post_id", UUID(as_uuid=True), primary_key=True),
)


class Community(Base):
    """Community entity — owns a set of post references."""
    __tablename__ = "communities"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    posts: Mapped[list["Post"]] = relationship(
        "Post",
        secondary=community_posts,
        primaryjoin="Community.id == community_posts.c.community_id",
        secondaryjoin="Post.id == community_posts.c.post_id",
        viewonly=True,
        lazy="selectin",
    )
