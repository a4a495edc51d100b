"""
Unit tests for entry file reference normalization.
"""
import pytest
from pydantic import ValidationError

from daydiary.schemas.entry import (
    EntryUpsert,
    FileReference,
    normalize_file_reference,
    normalize_file_references,
)


def test_bare_url_string_becomes_reference():
    ref = normalize_file_reference("https://res.cloudinary.com/demo/image/upload/v1/beach.jpg")
    assert ref == FileReference(
        name="beach.jpg",
        type="image/jpeg",
        url="https://res.cloudinary.com/demo/image/upload/v1/beach.jpg",
    )


def test_mp4_string_is_video():
    ref = normalize_file_reference("https://example.test/clip.mp4")
    assert ref.type == "video/mp4"


def test_string_without_extension_is_octet_stream():
    ref = normalize_file_reference("https://example.test/files/abc123")
    assert ref.name == "abc123"
    assert ref.type == "application/octet-stream"


def test_object_drops_transfer_state():
    ref = normalize_file_reference({
        "name": "note.pdf",
        "type": "application/pdf",
        "url": "https://example.test/note.pdf",
        "progress": 100,
        "uploading": False,
    })
    assert ref.model_dump() == {
        "name": "note.pdf",
        "type": "application/pdf",
        "url": "https://example.test/note.pdf",
    }


@pytest.mark.parametrize("value", [
    {"name": "pending.jpg", "type": "image/jpeg", "progress": 40, "uploading": True},
    {"name": "broken.jpg", "type": "image/jpeg", "failed": True, "progress": 0},
    {"name": "flagged.jpg", "type": "image/jpeg", "url": "https://example.test/x.jpg", "failed": True},
    "   ",
])
def test_unfinished_or_failed_uploads_are_dropped(value):
    assert normalize_file_reference(value) is None


def test_mixed_list_is_normalized_in_order():
    refs = normalize_file_references([
        "https://example.test/a.png",
        {"name": "b.mp4", "type": "video/mp4", "url": "https://example.test/b.mp4"},
        {"name": "c.jpg", "uploading": True},
    ])
    assert [ref.name for ref in refs] == ["a.png", "b.mp4"]


def test_none_files_become_empty_list():
    assert normalize_file_references(None) == []


def test_unsupported_element_is_rejected():
    with pytest.raises(ValidationError):
        EntryUpsert(date="2025-01-05", title="x", files=[42])


def test_upsert_blank_date_and_mood_become_none():
    payload = EntryUpsert(date="  ", title="Hello", mood="")
    assert payload.date is None
    assert payload.mood is None
