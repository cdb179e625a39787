"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PostId and CommunityId wrap UUIDs; never use bare UUID in domain logic
    - Identity is the opaque creator reference handed over by the identity service
    - Ingestion stages encoded as an Enum, no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON log fields without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

PostId = NewType("PostId", UUID)
CommunityId = NewType("CommunityId", UUID)
Identity = NewType("Identity", str)

# ─── Value Types ─────────────────────────────────────────────────

BlobName = NewType("BlobName", str)     # <field>-<ms timestamp><ext>
Locator = NewType("Locator", str)       # <public_base_url>/<blob name>


# ─── Enums ───────────────────────────────────────────────────────

class IngestionStage(str, Enum):
    """Per-request ingestion state machine.

    validating -> writing_blob -> writing_record -> linking_community -> done
    validating -> rejected (precondition failure)
    writing_blob | writing_record | linking_community -> failed
    """
    VALIDATING = "validating"
    WRITING_BLOB = "writing_blob"
    WRITING_RECORD = "writing_record"
    LINKING_COMMUNITY = "linking_community"
    DONE = "done"
    REJECTED = "rejected"
    FAILED = "failed"


class LinkOutcome(str, Enum):
    """Result of a community linkage attempt."""
    LINKED = "linked"
    ALREADY_LINKED = "already_linked"
    COMMUNITY_MISSING = "community_missing"
