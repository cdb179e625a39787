"""Application lifespan — startup creates the blob directory and wires the singletons."""

import logging

import pytest

import studyhub.infrastructure.blob_store as blob_module
import studyhub.infrastructure.database as db_module
import studyhub.main as main_module
from studyhub.config import Settings


@pytest.fixture
def startup_settings(tmp_path, monkeypatch):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'studyhub.db'}",
        upload_dir=str(tmp_path / "pdf_uploads"),
        log_format="text",
    )
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(blob_module, "blob_store", None)
    monkeypatch.setattr(db_module, "db_manager", None)
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield settings
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


async def test_startup_creates_blob_directory(startup_settings, tmp_path):
    upload_dir = tmp_path / "pdf_uploads"
    assert not upload_dir.exists()

    async with main_module.lifespan(main_module.app):
        assert upload_dir.is_dir()
        assert blob_module.blob_store.root == upload_dir.resolve()
        assert blob_module.blob_store.is_ready()
        assert await db_module.db_manager.health_check()

    assert upload_dir.is_dir()
