"""StudyHub API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StudyHubError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and blob store initialized on startup via lifespan, never at import

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Blob directory served statically at blob_mount_path so stored locators resolve;
      check_dir=False because the directory is created by the lifespan, after mounting
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from studyhub.api.error_handlers import register_error_handlers
from studyhub.api.routes import health, posts
from studyhub.config import get_settings
from studyhub.infrastructure import database as db_module
from studyhub.infrastructure.blob_store import init_blob_store
from studyhub.infrastructure.database import init_db
from studyhub.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_blob_store(
        settings.upload_dir,
        settings.public_base_url,
        settings.upload_field_name,
    )
    logger.info("StudyHub API started")
    yield
    if db_module.db_manager:
        await db_module.db_manager.dispose()
    logger.info("StudyHub API shutting down")


app = FastAPI(
    title="StudyHub API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(posts.router)

app.mount(
    settings.blob_mount_path,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="blobs",
)

register_error_handlers(app)
