"""Blob Store — durable file storage for uploaded resources.

Invariants:
    - Blobs live directly under root; names never contain directory components
    - A blob is written once with exclusive create: an existing name is never overwritten
    - Names are unique per process: the millisecond stamp never repeats, so
      concurrent uploads never collide; a name taken on disk is skipped
    - A failed write leaves no partial file behind
    - Reads never mutate a blob (downloads stream from the path, read-only)
    - initialize() is the only place the root directory is created

Design Decisions:
    - Blocking file IO runs in a worker thread (asyncio.to_thread): the event loop
      keeps serving other requests while a large upload is copied
    - shutil.copyfileobj over read-all: the upload is copied in chunks, never
      buffered whole in memory
    - Clock injected: tests pin the millisecond timestamp used in names
    - Stamp taken synchronously before the worker-thread copy: two requests
      scheduled back to back on the event loop still get distinct names
"""

import asyncio
import logging
import os
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Callable

from studyhub.core.domain_types import BlobName, Locator
from studyhub.core.errors import BlobStoreError
from studyhub.core.resource_naming import build_blob_name, build_locator

logger = logging.getLogger(__name__)

_NAME_ATTEMPTS = 16


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class BlobStore:
    """File-system blob storage rooted at a configured directory."""

    def __init__(
        self,
        root: str | os.PathLike,
        public_base_url: str,
        field_name: str = "file",
        clock: Callable[[], int] = _now_ms,
    ):
        self.root = Path(root).resolve()
        self.public_base_url = public_base_url
        self.field_name = field_name
        self._clock = clock
        self._last_stamp = 0

    def initialize(self) -> None:
        """Create the storage directory. Safe to call repeatedly."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BlobStoreError(str(e), "initialize") from e
        logger.info(f"Blob store ready at {self.root}")

    def is_ready(self) -> bool:
        return self.root.is_dir() and os.access(self.root, os.W_OK)

    def path_for(self, name: str) -> Path | None:
        """Map a blob name to its path, or None if the name is not a plain file name."""
        if not name or name in (".", "..") or "\\" in name:
            return None
        if os.path.basename(name) != name:
            return None
        return self.root / name

    def locator_for(self, name: BlobName) -> Locator:
        return build_locator(self.public_base_url, name)

    async def write(self, source: BinaryIO, original_filename: str) -> BlobName:
        """Persist an upload stream under a freshly generated name.

        A name already on disk (another worker, an earlier run) is skipped by
        moving to the next millisecond; the stream is untouched until a name
        is claimed.
        """
        for _ in range(_NAME_ATTEMPTS):
            name = build_blob_name(self.field_name, self._next_stamp(), original_filename)
            path = self.path_for(name)
            if path is None:
                raise BlobStoreError(f"invalid blob name {name!r}", "write")
            try:
                await asyncio.to_thread(self._copy_exclusive, source, path)
            except FileExistsError:
                logger.warning("Blob name taken, retrying", extra={"blob": name})
                continue
            except OSError as e:
                raise BlobStoreError(str(e), "write") from e
            logger.info("Blob written", extra={"blob": name})
            return name
        raise BlobStoreError("no free blob name", "write")

    def _next_stamp(self) -> int:
        """Clock reading, bumped so no two writes in this process share a millisecond."""
        stamp = max(self._clock(), self._last_stamp + 1)
        self._last_stamp = stamp
        return stamp

    @staticmethod
    def _copy_exclusive(source: BinaryIO, path: Path) -> None:
        with open(path, "xb") as buffer:
            try:
                shutil.copyfileobj(source, buffer)
            except BaseException:
                buffer.close()
                path.unlink(missing_ok=True)
                raise

    async def exists(self, name: str) -> bool:
        path = self.path_for(name)
        if path is None:
            return False
        return await asyncio.to_thread(path.is_file)

    async def discard(self, name: BlobName) -> bool:
        """Delete a blob. Returns False if it was already gone."""
        path = self.path_for(name)
        if path is None:
            return False
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise BlobStoreError(str(e), "discard") from e
        logger.info("Blob discarded", extra={"blob": name})
        return True


# Singleton (initialized on startup)
blob_store: BlobStore | None = None


def init_blob_store(
    root: str | os.PathLike, public_base_url: str, field_name: str = "file",
) -> BlobStore:
    global blob_store
    store = BlobStore(root, public_base_url, field_name)
    store.initialize()
    blob_store = store
    return store


def get_blob_store() -> BlobStore:
    """FastAPI dependency for the blob store."""
    if not blob_store:
        raise RuntimeError("Blob store not initialized")
    return blob_store
