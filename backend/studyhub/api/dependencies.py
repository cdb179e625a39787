"""Request Dependencies — identity extraction and per-request service wiring.

Invariants:
    - Identity is read, never verified: credential checks belong to the identity service
    - request.state.user (set by an upstream middleware) wins over the gateway header
    - Missing identity yields None; services decide to reject with 401
    - Services get a fresh repository bound to the request's DB session; linkage
      is bound to the session's engine and commits independently

Design Decisions:
    - Factories as FastAPI dependencies: tests override get_db / get_blob_store /
      get_identity without touching the services
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.config import Settings, get_settings
from studyhub.core.domain_types import Identity
from studyhub.infrastructure.blob_store import BlobStore, get_blob_store
from studyhub.infrastructure.database import get_db
from studyhub.services.community_linkage import CommunityLinkage
from studyhub.services.post_repository import PostRepository
from studyhub.services.resource_ingestion import ResourceIngestionPipeline
from studyhub.services.resource_retrieval import ResourceRetrieval


def get_identity(
    request: Request, settings: Settings = Depends(get_settings),
) -> Identity | None:
    """Identity supplied by the identity/session service, if any."""
    user = getattr(request.state, "user", None)
    if user:
        return Identity(str(user))
    header = request.headers.get(settings.identity_header, "").strip()
    return Identity(header) if header else None


def get_ingestion_pipeline(
    db: AsyncSession = Depends(get_db),
    blobs: BlobStore = Depends(get_blob_store),
) -> ResourceIngestionPipeline:
    return ResourceIngestionPipeline(
        PostRepository(db), blobs, CommunityLinkage(db.bind),
    )


def get_resource_retrieval(
    db: AsyncSession = Depends(get_db),
    blobs: BlobStore = Depends(get_blob_store),
) -> ResourceRetrieval:
    return ResourceRetrieval(PostRepository(db), blobs)
