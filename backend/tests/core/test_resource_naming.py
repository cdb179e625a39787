"""Resource Naming — blob names, locators, and identifier parsing.

Tests:
    - Blob name format <field>-<ms><ext>, extension from the client filename
    - Locator round-trips to the blob name, whatever the base URL
    - Malformed community/post ids parse to None instead of raising
"""

from uuid import uuid4

import pytest

from studyhub.core.resource_naming import (
    blob_name_from_locator, build_blob_name, build_locator,
    parse_community_id, parse_post_id,
)


def test_blob_name_uses_field_timestamp_and_extension():
    assert build_blob_name("file", 1700000000123, "resume.pdf") == "file-1700000000123.pdf"


def test_blob_name_keeps_only_last_suffix():
    assert build_blob_name("file", 5, "notes.tar.gz") == "file-5.gz"


def test_blob_name_without_extension():
    assert build_blob_name("file", 5, "README") == "file-5"


def test_blob_name_ignores_client_directories():
    assert build_blob_name("file", 5, "../../etc/passwd.pdf") == "file-5.pdf"


def test_locator_joins_base_url_and_name():
    assert build_locator("http://localhost:3300/pdfs/", "file-1.pdf") == (
        "http://localhost:3300/pdfs/file-1.pdf"
    )


@pytest.mark.parametrize("locator", [
    "http://localhost:3300/pdfs/file-1.pdf",
    "https://cdn.example.org/static/pdfs/file-1.pdf",
    "/pdfs/file-1.pdf",
    "file-1.pdf",
])
def test_blob_name_from_locator_takes_path_basename(locator):
    assert blob_name_from_locator(locator) == "file-1.pdf"


def test_blob_name_from_locator_drops_query_string():
    assert blob_name_from_locator("http://h/pdfs/file-1.pdf?dl=1") == "file-1.pdf"


def test_parse_community_id_accepts_uuid_string():
    cid = uuid4()
    assert parse_community_id(str(cid)) == cid


@pytest.mark.parametrize("value", [
    None, "", "   ", "not-an-id", "507f1f77bcf86cd799439011", 42,
])
def test_parse_community_id_downgrades_malformed_to_none(value):
    assert parse_community_id(value) is None


def test_parse_post_id_accepts_uuid_instance():
    pid = uuid4()
    assert parse_post_id(pid) == pid


def test_parse_post_id_rejects_garbage():
    assert parse_post_id("../../secret") is None
