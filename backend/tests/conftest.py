"""Root conftest — async DB, blob store, and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Every test gets its own blob directory under tmp_path
    - get_db and get_blob_store dependencies overridden for route tests
    - db_manager / blob_store singletons patched for the readiness probe

Design Decisions:
    - SQLite in-memory: fast, no external dependency; linkage uses the SQLite
      ON CONFLICT path, which mirrors the PostgreSQL one
    - Counting clock on the blob store: pins blob names so tests can assert them
"""

import itertools
import os

# Ensure tests never reach a real database or write into the working tree
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient  # noqa: E402

from studyhub.db.base import Base  # noqa: E402
from studyhub.infrastructure.blob_store import BlobStore, get_blob_store  # noqa: E402
from studyhub.infrastructure.database import get_db, DatabaseSessionManager  # noqa: E402
from studyhub.models.community import Community  # noqa: E402
import studyhub.infrastructure.blob_store as blob_module  # noqa: E402
import studyhub.infrastructure.database as db_module  # noqa: E402
from studyhub.main import app  # noqa: E402


@pytest.fixture
def auth_headers():
    """Identity as forwarded by the gateway."""
    return {"X-User-Id": "student-1"}


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def blob_store(tmp_path):
    counter = itertools.count(1_700_000_000_000)
    store = BlobStore(
        tmp_path / "uploads", "http://test/pdfs",
        clock=lambda: next(counter),
    )
    store.initialize()
    return store


@pytest.fixture
async def client(test_engine, test_session_factory, blob_store):
    """FastAPI test client with DB and blob store dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager
    original_store = blob_module.blob_store
    blob_module.blob_store = blob_store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    blob_module.blob_store = original_store


@pytest.fixture
async def seed_community(test_db):
    """Insert a community the way the directory service would."""
    community = Community(name="Algorithms study group")
    test_db.add(community)
    await test_db.commit()
    await test_db.refresh(community)
    return community
