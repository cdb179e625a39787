"""Resource Retrieval — listing, lookup, and download resolution.

Tests:
    - Identity required for every operation
    - Blank category rejected; unmatched category yields []
    - Unknown/malformed post -> "Post ... not found"; missing blob -> "File ... not found"
"""

import io
from uuid import uuid4

import pytest

from studyhub.core.domain_types import Identity
from studyhub.core.errors import (
    MissingParameterError, ResourceNotFoundError, UnauthenticatedError,
)
from studyhub.services.post_repository import PostRepository
from studyhub.services.resource_retrieval import ResourceRetrieval

ME = Identity("student-1")


@pytest.fixture
async def stored_post(test_db, blob_store):
    name = await blob_store.write(io.BytesIO(b"0123456789"), "resume.pdf")
    return await PostRepository(test_db).insert(
        creator=ME,
        title="Resume",
        category="notes",
        file=blob_store.locator_for(name),
        community_id=None,
    )


@pytest.fixture
def retrieval(test_db, blob_store):
    return ResourceRetrieval(PostRepository(test_db), blob_store)


async def test_list_requires_identity(retrieval):
    with pytest.raises(UnauthenticatedError):
        await retrieval.list_posts_by_category(None, "notes")


@pytest.mark.parametrize("category", [None, "", "  "])
async def test_list_requires_category(retrieval, category):
    with pytest.raises(MissingParameterError):
        await retrieval.list_posts_by_category(ME, category)


async def test_list_returns_matching_posts(retrieval, stored_post):
    posts = await retrieval.list_posts_by_category(ME, "notes")
    assert [p.id for p in posts] == [stored_post.id]


async def test_list_without_match_is_empty(retrieval, stored_post):
    assert await retrieval.list_posts_by_category(ME, "slides") == []


async def test_get_post_unknown_and_malformed(retrieval):
    with pytest.raises(ResourceNotFoundError) as exc:
        await retrieval.get_post(ME, str(uuid4()))
    assert exc.value.resource_type == "Post"
    with pytest.raises(ResourceNotFoundError):
        await retrieval.get_post(ME, "not-a-uuid")


async def test_resolve_download_points_at_blob(retrieval, stored_post, blob_store):
    target = await retrieval.resolve_download(ME, str(stored_post.id))
    assert target.filename == "file-1700000000000.pdf"
    assert target.path == blob_store.root / target.filename
    assert target.media_type == "application/pdf"
    assert target.path.read_bytes() == b"0123456789"


async def test_resolve_download_missing_blob_is_file_not_found(
    retrieval, stored_post, blob_store,
):
    target = await retrieval.resolve_download(ME, str(stored_post.id))
    target.path.unlink()

    with pytest.raises(ResourceNotFoundError) as exc:
        await retrieval.resolve_download(ME, str(stored_post.id))

    assert exc.value.resource_type == "File"
    assert exc.value.message == f"File '{target.filename}' not found"


async def test_resolve_download_requires_identity(retrieval, stored_post):
    with pytest.raises(UnauthenticatedError):
        await retrieval.resolve_download(None, str(stored_post.id))
