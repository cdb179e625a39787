"""Community Linkage — idempotent append of a post reference to a community's post set.

Invariants:
    - Append-if-absent: a (community, post) pair is stored at most once
    - Appending to a community that does not exist is a no-op, never an error
    - Safety under concurrent writers comes from the database, not from locks:
      one INSERT ... SELECT ... ON CONFLICT DO NOTHING statement per append
    - Each append runs in its own engine transaction; a failed append never
      rolls back or expires anything held by the caller's ORM session

Design Decisions:
    - INSERT ... SELECT from communities: existence check and append are one
      atomic statement, so a concurrently deleted community cannot be half-linked
    - Outcome distinguishes already-linked from missing community for logging only
    - Dialect-specific insert(): PostgreSQL in production, SQLite under test
"""

import logging

from sqlalchemy import literal, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.ext.asyncio import AsyncEngine

from studyhub.core.domain_types import CommunityId, LinkOutcome, PostId
from studyhub.models.community import Community, community_posts

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CommunityLinkage:
    """Appends post ids to community post sets."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        dialect = engine.dialect.name
        if dialect not in _UPSERT_INSERTS:
            raise RuntimeError(f"Community linkage unsupported on {dialect}")
        self._insert = _UPSERT_INSERTS[dialect]

    async def append_post(
        self, community_id: CommunityId, post_id: PostId,
    ) -> LinkOutcome:
        stmt = (
            self._insert(community_posts)
            .from_select(
                ["community_id", "post_id"],
                select(
                    Community.id,
                    literal(post_id, type_=UUID(as_uuid=True)),
                ).where(Community.id == community_id),
            )
            .on_conflict_do_nothing(index_elements=["community_id", "post_id"])
        )
        async with self.engine.begin() as conn:
            result = await conn.execute(stmt)
            if result.rowcount:
                return LinkOutcome.LINKED
            exists = await conn.scalar(
                select(Community.id).where(Community.id == community_id),
            )
        return LinkOutcome.ALREADY_LINKED if exists else LinkOutcome.COMMUNITY_MISSING

    async def post_ids(self, community_id: CommunityId) -> list[PostId]:
        """Current post set of a community (unordered)."""
        async with self.engine.connect() as conn:
            result = await conn.execute(
                select(community_posts.c.post_id)
                .where(community_posts.c.community_id == community_id),
            )
            return [PostId(pid) for pid in result.scalars().all()]
