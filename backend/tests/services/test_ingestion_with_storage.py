"""Resource Ingestion Pipeline over real storage — SQLAlchemy sessions and the file-system blob store.

Tests:
    - A linkage database error leaves the created post intact and readable
    - Concurrent uploads on the wall clock all succeed with distinct blobs
    - Concurrent uploads into one community: every post id present exactly once

Design Decisions:
    - Concurrency runs against a file-backed SQLite database with one session
      per upload, as the API does per request
"""

import asyncio
import io

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from studyhub.core.domain_types import Identity
from studyhub.db.base import Base
from studyhub.infrastructure.blob_store import BlobStore
from studyhub.models.community import Community, community_posts
from studyhub.services.community_linkage import CommunityLinkage
from studyhub.services.post_repository import PostRepository
from studyhub.services.resource_ingestion import ResourceIngestionPipeline

UPLOADS = 8


@pytest.fixture
async def file_session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'studyhub.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def wall_clock_store(tmp_path):
    store = BlobStore(tmp_path / "uploads", "http://test/pdfs")
    store.initialize()
    return store


async def _ingest(session_factory, store, community_id, n):
    async with session_factory() as db:
        pipeline = ResourceIngestionPipeline(
            PostRepository(db), store, CommunityLinkage(db.bind),
        )
        post = await pipeline.create_post(
            Identity(f"student-{n}"),
            f"Lecture {n}",
            "notes",
            str(community_id) if community_id else None,
            io.BytesIO(f"lecture {n}".encode()),
            "lecture.pdf",
        )
        return post.id, post.file


async def test_linkage_error_keeps_created_post(
    test_db, test_engine, blob_store, seed_community,
):
    async with test_engine.begin() as conn:
        await conn.run_sync(community_posts.drop)
    pipeline = ResourceIngestionPipeline(
        PostRepository(test_db), blob_store, CommunityLinkage(test_engine),
    )

    post = await pipeline.create_post(
        Identity("student-1"), "Resume", "notes", str(seed_community.id),
        io.BytesIO(b"0123456789"), "resume.pdf",
    )

    assert post.community_id == seed_community.id
    assert post.title == "Resume"
    assert await PostRepository(test_db).get(post.id) is not None


async def test_concurrent_uploads_on_wall_clock_all_succeed(
    file_session_factory, wall_clock_store,
):
    results = await asyncio.gather(*(
        _ingest(file_session_factory, wall_clock_store, None, n)
        for n in range(UPLOADS)
    ))

    files = {file for _, file in results}
    assert len({post_id for post_id, _ in results}) == UPLOADS
    assert len(files) == UPLOADS
    assert len(list(wall_clock_store.root.iterdir())) == UPLOADS


async def test_concurrent_uploads_into_one_community(
    file_session_factory, wall_clock_store,
):
    async with file_session_factory() as db:
        community = Community(name="Compilers reading group")
        db.add(community)
        await db.commit()
        community_id = community.id

    results = await asyncio.gather(*(
        _ingest(file_session_factory, wall_clock_store, community_id, n)
        for n in range(UPLOADS)
    ))

    async with file_session_factory() as db:
        linked = await CommunityLinkage(db.bind).post_ids(community_id)
    assert sorted(linked) == sorted(post_id for post_id, _ in results)
    assert len(linked) == UPLOADS
