"""Boundary Protocols — contracts between the ingestion/retrieval services and storage.

Invariants:
    - Services depend on these Protocols, never on concrete storage classes
    - All IO operations are async; implementations live in infrastructure/ and services/

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import BinaryIO, Protocol

from studyhub.core.domain_types import (
    BlobName, CommunityId, Identity, LinkOutcome, PostId,
)


class PostLike(Protocol):
    """Structural contract for Post objects returned by the repository."""
    id: PostId
    creator_id: str
    title: str
    category: str
    file: str
    community_id: CommunityId | None


class BlobStorage(Protocol):
    """Contract for durable file storage."""
    async def write(self, source: BinaryIO, original_filename: str) -> BlobName: ...
    async def discard(self, name: BlobName) -> bool: ...
    async def exists(self, name: BlobName) -> bool: ...
    def locator_for(self, name: BlobName) -> str: ...


class PostStore(Protocol):
    """Contract for post record persistence."""
    async def insert(
        self,
        *,
        creator: Identity,
        title: str,
        category: str,
        file: str,
        community_id: CommunityId | None,
    ) -> PostLike: ...
    async def get(self, post_id: PostId) -> PostLike | None: ...
    async def find_by_category(self, category: str) -> list[PostLike]: ...


class CommunityLinker(Protocol):
    """Contract for idempotent post-to-community association."""
    async def append_post(
        self, community_id: CommunityId, post_id: PostId,
    ) -> LinkOutcome: ...
