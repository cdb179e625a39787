"""Post Routes — upload, category listing, lookup, and download of study resources.

Invariants:
    - Routes hold no business logic: preconditions and side effects live in services
    - Every route takes identity from get_identity; services reject a missing one with 401
    - Download streams the blob from disk in chunks (FileResponse), never reads it whole
    - /category/{category:path} registered before /{post_id} so it is never shadowed

Design Decisions:
    - Multipart fields declared optional: missing file/title/category are reported by
      the pipeline with its own 400 messages instead of FastAPI's 422/400 envelope
    - communityId accepted under its client-facing name via Form alias
    - Empty category segment (/posts/category/) matches the path convertor and is
      rejected by the service with 400
"""

import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import FileResponse

from studyhub.api.dependencies import (
    get_identity, get_ingestion_pipeline, get_resource_retrieval,
)
from studyhub.core.domain_types import Identity
from studyhub.schemas.post import (
    PostCreatedResponse, PostListResponse, PostResponse,
)
from studyhub.services.resource_ingestion import ResourceIngestionPipeline
from studyhub.services.resource_retrieval import ResourceRetrieval

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "", response_model=PostCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    title: str | None = Form(None),
    category: str | None = Form(None),
    community_id: str | None = Form(None, alias="communityId"),
    file: UploadFile | None = File(None),
    identity: Identity | None = Depends(get_identity),
    pipeline: ResourceIngestionPipeline = Depends(get_ingestion_pipeline),
):
    """Upload a resource file and create its post."""
    post = await pipeline.create_post(
        identity,
        title,
        category,
        community_id,
        file.file if file else None,
        file.filename if file else None,
    )
    return PostCreatedResponse(post=PostResponse.from_model(post))


@router.get("/category/{category:path}", response_model=PostListResponse)
async def list_posts_by_category(
    category: str,
    identity: Identity | None = Depends(get_identity),
    retrieval: ResourceRetrieval = Depends(get_resource_retrieval),
):
    """List every post filed under exactly this category."""
    posts = await retrieval.list_posts_by_category(identity, category)
    return PostListResponse(
        posts=[PostResponse.from_model(p) for p in posts],
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    identity: Identity | None = Depends(get_identity),
    retrieval: ResourceRetrieval = Depends(get_resource_retrieval),
):
    post = await retrieval.get_post(identity, post_id)
    return PostResponse.from_model(post)


@router.get("/{post_id}/download")
async def download_resource(
    post_id: str,
    identity: Identity | None = Depends(get_identity),
    retrieval: ResourceRetrieval = Depends(get_resource_retrieval),
):
    """Stream the post's file as a PDF attachment."""
    target = await retrieval.resolve_download(identity, post_id)
    logger.info("Serving download", extra={"post_id": post_id, "blob": target.filename})
    return FileResponse(
        target.path,
        media_type=target.media_type,
        headers={
            "Content-Disposition": f"attachment; filename={target.filename}",
        },
    )
