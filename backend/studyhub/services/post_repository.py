"""Post Repository — durable record store for Post entities.

Invariants:
    - insert() commits: a returned Post is durable
    - insert() rolls back its own session on failure before re-raising
    - find_by_category() matches category exactly (case-sensitive, no trimming)
    - find_by_category() orders by created_at, then id: stable across calls

Design Decisions:
    - Repository wraps the AsyncSession so services never build queries
    - Keyword-only insert(): every field is named at the call site
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.core.domain_types import CommunityId, Identity, PostId
from studyhub.models.post import Post

logger = logging.getLogger(__name__)


class PostRepository:
    """Insert, find-by-id, and find-by-category over the posts table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(
        self,
        *,
        creator: Identity,
        title: str,
        category: str,
        file: str,
        community_id: CommunityId | None,
    ) -> Post:
        post = Post(
            creator_id=creator,
            title=title,
            category=category,
            file=file,
            community_id=community_id,
        )
        self.db.add(post)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return post

    async def get(self, post_id: PostId) -> Post | None:
        result = await self.db.execute(select(Post).where(Post.id == post_id))
        return result.scalar_one_or_none()

    async def find_by_category(self, category: str) -> list[Post]:
        result = await self.db.execute(
            select(Post)
            .where(Post.category == category)
            .order_by(Post.created_at, Post.id)
        )
        return list(result.scalars().all())
