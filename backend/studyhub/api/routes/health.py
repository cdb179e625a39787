"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database or the blob directory is unusable

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Module attributes read at call time: both singletons are set during lifespan
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from studyhub.infrastructure import blob_store as blob_module
from studyhub.infrastructure import database as db_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "studyhub-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database connectivity and writable blob directory."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    store = blob_module.blob_store
    blobs_ok = store.is_ready() if store else False
    if not (db_ok and blobs_ok):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "checks": {
                    "database": "healthy" if db_ok else "unavailable",
                    "blob_store": "healthy" if blobs_ok else "unavailable",
                },
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "blob_store": "healthy"},
    }
