"""Resource Ingestion Pipeline — upload validation, blob persistence, post record, community linkage.

Invariants:
    - Preconditions checked in order (identity, file, title, category) before any side effect
    - Stages run strictly in sequence: blob write -> record insert -> community linkage
    - A malformed community id is downgraded to None, never rejected
    - Any failure in blob write or record insert surfaces as InternalFailureError;
      the failing stage is logged, never reported to the caller
    - If the record insert fails, the freshly written blob is discarded
    - Community linkage is enrichment: a missing community or a linkage error is
      logged and the created post is still returned

Design Decisions:
    - Storage injected through Protocols (core/repository_protocols.py): the pipeline
      is testable with in-memory fakes and owns no SQL or file paths
    - Input is (stream, original filename), not a framework upload object
"""

import logging
from typing import BinaryIO

from studyhub.core.domain_types import (
    BlobName, CommunityId, Identity, IngestionStage, LinkOutcome, PostId,
)
from studyhub.core.errors import (
    ErrorContext, InternalFailureError, MissingFileError,
    MissingParameterError, StudyHubError, UnauthenticatedError,
)
from studyhub.core.repository_protocols import (
    BlobStorage, CommunityLinker, PostLike, PostStore,
)
from studyhub.core.resource_naming import parse_community_id

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class ResourceIngestionPipeline:
    """Orchestrates one resource upload from request fields to persisted Post."""

    def __init__(
        self, posts: PostStore, blobs: BlobStorage, linker: CommunityLinker,
    ):
        self.posts = posts
        self.blobs = blobs
        self.linker = linker

    async def create_post(
        self,
        identity: Identity | None,
        title: str | None,
        category: str | None,
        community_id: str | None,
        source: BinaryIO | None,
        original_filename: str | None,
    ) -> PostLike:
        self._check_preconditions(identity, title, category, source, original_filename)
        community = self._resolve_community(community_id)

        stage = IngestionStage.WRITING_BLOB
        blob_name: BlobName | None = None
        try:
            blob_name = await self.blobs.write(source, original_filename)
            stage = IngestionStage.WRITING_RECORD
            post = await self.posts.insert(
                creator=identity,
                title=title,
                category=category,
                file=self.blobs.locator_for(blob_name),
                community_id=community,
            )
        except Exception as e:
            logger.error(
                f"Resource ingestion failed while {stage.value}: {e}",
                exc_info=True, extra={"stage": stage.value, "blob": blob_name},
            )
            if stage is IngestionStage.WRITING_RECORD and blob_name:
                await self._discard_orphan(blob_name)
            raise InternalFailureError(
                context=ErrorContext(stage=IngestionStage.FAILED.value),
            ) from e

        if community is not None:
            await self._link(community, post.id)

        logger.info(
            "Post created",
            extra={
                "post_id": post.id, "community_id": community,
                "category": category, "stage": IngestionStage.DONE.value,
            },
        )
        return post

    def _check_preconditions(
        self,
        identity: Identity | None,
        title: str | None,
        category: str | None,
        source: BinaryIO | None,
        original_filename: str | None,
    ) -> None:
        """Fail fast; the first failing check wins."""
        error: StudyHubError | None = None
        if not identity:
            error = UnauthenticatedError()
        elif source is None or not original_filename:
            error = MissingFileError()
        elif _is_blank(title):
            error = MissingParameterError("title")
        elif _is_blank(category):
            error = MissingParameterError("category")
        if error:
            error.context.stage = IngestionStage.REJECTED.value
            raise error

    @staticmethod
    def _resolve_community(community_id: str | None) -> CommunityId | None:
        community = parse_community_id(community_id)
        if community is None and not _is_blank(community_id):
            logger.warning(
                f"Malformed community id {community_id!r}; posting without community",
            )
        return community

    async def _link(self, community: CommunityId, post_id: PostId) -> None:
        extra = {
            "post_id": post_id, "community_id": community,
            "stage": IngestionStage.LINKING_COMMUNITY.value,
        }
        try:
            outcome = await self.linker.append_post(community, post_id)
        except Exception as e:
            logger.error(
                f"Community linkage failed, post kept unlinked: {e}",
                exc_info=True, extra=extra,
            )
            return
        if outcome is LinkOutcome.COMMUNITY_MISSING:
            logger.warning("Community not found, post left unlinked", extra=extra)
        else:
            logger.debug(f"Community linkage: {outcome.value}", extra=extra)

    async def _discard_orphan(self, blob_name: BlobName) -> None:
        try:
            await self.blobs.discard(blob_name)
        except StudyHubError as e:
            logger.error(
                f"Could not discard orphaned blob: {e.message}",
                extra={"blob": blob_name, "error_code": e.code},
            )
