"""Post Schemas — Pydantic response models for the resource-post endpoints.

Invariants:
    - PostResponse exposes creator and community under their public names
    - community is null when the post was created without a (well-formed) community id

Design Decisions:
    - from_model() over from_attributes: ORM column names (creator_id, community_id)
      differ from the public field names
    - Multipart input is not modelled here: FastAPI Form/File parameters carry it
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from studyhub.core.repository_protocols import PostLike


class PostResponse(BaseModel):
    """Post response: public-facing post data."""
    id: UUID
    creator: str
    title: str
    category: str
    file: str
    community: UUID | None = None
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, post: PostLike) -> "PostResponse":
        return cls(
            id=post.id,
            creator=post.creator_id,
            title=post.title,
            category=post.category,
            file=post.file,
            community=post.community_id,
            created_at=getattr(post, "created_at", None),
        )


class PostCreatedResponse(BaseModel):
    message: str = "Post created successfully"
    post: PostResponse


class PostListResponse(BaseModel):
    message: str = "Posts fetched successfully"
    posts: list[PostResponse]
