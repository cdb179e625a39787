"""Resource Retrieval — category listing, single post lookup, and download resolution.

Invariants:
    - Identity required for every operation
    - Unknown or malformed post id -> ResourceNotFoundError("Post", ...)
    - Post found but blob absent -> ResourceNotFoundError("File", ...): same status,
      different message, so clients can tell the two apart
    - Download resolution never opens the blob: streaming is the route's job

Design Decisions:
    - Blob name derived from the locator's path component only, so locators built
      with an older public_base_url still resolve
"""

from dataclasses import dataclass
from pathlib import Path

from studyhub.core.domain_types import Identity
from studyhub.core.errors import (
    MissingParameterError, ResourceNotFoundError, UnauthenticatedError,
)
from studyhub.core.repository_protocols import PostLike, PostStore
from studyhub.core.resource_naming import blob_name_from_locator, parse_post_id
from studyhub.infrastructure.blob_store import BlobStore


@dataclass(frozen=True)
class BlobDownload:
    """Resolved download target for one post."""
    filename: str
    path: Path
    media_type: str = "application/pdf"


class ResourceRetrieval:
    """Read side of the resource-post pipeline."""

    def __init__(self, posts: PostStore, blobs: BlobStore):
        self.posts = posts
        self.blobs = blobs

    async def list_posts_by_category(
        self, identity: Identity | None, category: str | None,
    ) -> list[PostLike]:
        if not identity:
            raise UnauthenticatedError()
        if category is None or not category.strip():
            raise MissingParameterError("category")
        return await self.posts.find_by_category(category)

    async def get_post(
        self, identity: Identity | None, post_id: str,
    ) -> PostLike:
        if not identity:
            raise UnauthenticatedError()
        parsed = parse_post_id(post_id)
        post = await self.posts.get(parsed) if parsed else None
        if post is None:
            raise ResourceNotFoundError("Post", str(post_id))
        return post

    async def resolve_download(
        self, identity: Identity | None, post_id: str,
    ) -> BlobDownload:
        post = await self.get_post(identity, post_id)
        filename = blob_name_from_locator(post.file)
        path = self.blobs.path_for(filename)
        if path is None or not await self.blobs.exists(filename):
            raise ResourceNotFoundError("File", filename)
        return BlobDownload(filename=filename, path=path)
