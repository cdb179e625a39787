"""Post ORM — persists one shared study resource.

Invariants:
    - id is UUID primary key (client-side default)
    - creator_id, title, category, file are non-nullable and written once at creation
    - community_id is either NULL or a syntactically valid UUID; existence is not enforced
    - category is indexed: it is the only listing filter

Design Decisions:
    - community_id carries no foreign key: the community directory owns that entity
      and a post must be creatable against a community the core cannot see
    - file stores the full locator, not a path: clients download via the locator
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from studyhub.db.base import Base


class Post(Base):
    """Post entity — one uploaded resource and its metadata."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    creator_id: Mapped[str] = mapped_column(String(128), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(
        String(200), nullable=False, index=True,
    )
    file: Mapped[str] = mapped_column(Text, nullable=False)
    community_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
