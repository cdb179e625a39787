"""Post Schemas — ORM-to-public field mapping."""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

from studyhub.schemas.post import PostCreatedResponse, PostListResponse, PostResponse


def _post(community_id=None):
    return SimpleNamespace(
        id=uuid4(), creator_id="student-1", title="Resume", category="notes",
        file="http://h/pdfs/file-1.pdf", community_id=community_id,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


def test_from_model_renames_creator_and_community():
    cid = uuid4()
    resp = PostResponse.from_model(_post(cid))
    assert resp.creator == "student-1"
    assert resp.community == cid


def test_null_community_serializes_as_null():
    data = PostResponse.from_model(_post()).model_dump(mode="json")
    assert data["community"] is None
    assert data["file"] == "http://h/pdfs/file-1.pdf"


def test_envelopes_carry_messages():
    post = PostResponse.from_model(_post())
    assert PostCreatedResponse(post=post).message == "Post created successfully"
    assert PostListResponse(posts=[]).message == "Posts fetched successfully"
