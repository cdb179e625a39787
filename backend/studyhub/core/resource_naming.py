"""Resource Naming — pure helpers for blob names, locators, and identifier parsing.

Invariants:
    - build_blob_name output is <field>-<ms timestamp><original extension>
    - blob_name_from_locator returns a bare file name (no directory components)
    - parse_community_id never raises: malformed input yields None
    - parse_post_id never raises: malformed input yields None

Design Decisions:
    - Timestamp injected by caller: keeps naming deterministic under test
    - Extension taken verbatim from the client filename (case preserved); only
      the last suffix counts, so "notes.tar.gz" keeps ".gz"
"""

import os
from urllib.parse import unquote, urlparse
from uuid import UUID

from studyhub.core.domain_types import BlobName, CommunityId, Locator, PostId


def build_blob_name(
    field_name: str, timestamp_ms: int, original_filename: str,
) -> BlobName:
    """Generate the stored name for an uploaded file."""
    _, ext = os.path.splitext(os.path.basename(original_filename or ""))
    return BlobName(f"{field_name}-{timestamp_ms}{ext}")


def build_locator(public_base_url: str, blob_name: BlobName) -> Locator:
    return Locator(f"{public_base_url.rstrip('/')}/{blob_name}")


def blob_name_from_locator(locator: str) -> BlobName:
    """Resolve a locator (URL or bare path) to the blob name it points at."""
    path = unquote(urlparse(locator).path)
    return BlobName(os.path.basename(path.replace("\\", "/").rstrip("/")))


def _parse_uuid(value: object) -> UUID | None:
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        return None


def parse_community_id(value: object) -> CommunityId | None:
    """Syntactic check only; existence is the directory service's concern."""
    parsed = _parse_uuid(value)
    return CommunityId(parsed) if parsed else None


def parse_post_id(value: object) -> PostId | None:
    parsed = _parse_uuid(value)
    return PostId(parsed) if parsed else None
