"""
Entry schemas.
"""
import mimetypes
from datetime import datetime
from typing import Any, List, Optional
from urllib.parse import unquote, urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FILE_TYPE = "application/octet-stream"


class FileReference(BaseModel):
    """A file attached to an entry; ``url`` always points at a finished upload."""
    name: str
    type: str
    url: str


def _name_from_url(url: str) -> str:
    path = urlparse(url).path or url
    return unquote(path.rstrip("/").rsplit("/", 1)[-1]) or url


def _guess_type(name: str) -> str:
    if "." in name:
        ext = name.rsplit(".", 1)[-1].lower()
        if ext == "mp4":
            return "video/mp4"
        guessed, _ = mimetypes.guess_type(name)
        if guessed:
            return guessed
        if ext.isalnum():
            return f"image/{ext}"
    return DEFAULT_FILE_TYPE


def normalize_file_reference(value: Any) -> Optional[FileReference]:
    """
    Convert one incoming ``files`` element into a FileReference.

    Older clients sent bare URL strings, newer ones send objects that may
    still carry transfer state (``progress``, ``uploading``, ``failed``).
    Elements without a URL have not finished uploading and yield None.
    """
    if isinstance(value, FileReference):
        return value
    if isinstance(value, str):
        url = value.strip()
        if not url:
            return None
        name = _name_from_url(url)
        return FileReference(name=name, type=_guess_type(name), url=url)
    if isinstance(value, dict):
        url = (value.get("url") or "").strip()
        if not url or value.get("failed") or value.get("uploading"):
            return None
        name = value.get("name") or _name_from_url(url)
        file_type = value.get("type") or _guess_type(name)
        return FileReference(name=name, type=file_type, url=url)
    raise ValueError(f"Unsupported file reference: {value!r}")


def normalize_file_references(value: Any) -> List[FileReference]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError("files must be a list")
    normalized = (normalize_file_reference(item) for item in value)
    return [ref for ref in normalized if ref is not None]


class EntryBase(BaseModel):
    """Base entry schema."""
    title: Optional[str] = None
    mood: Optional[str] = None
    content: Optional[str] = None
    files: List[FileReference] = Field(default_factory=list)

    @field_validator("files", mode="before")
    @classmethod
    def validate_files(cls, v):
        return normalize_file_references(v)


class EntryUpsert(EntryBase):
    """
    Entry save payload.

    ``date`` is optional at the schema level so a missing date is reported
    as a client error by the service instead of a schema failure.
    """
    date: Optional[str] = None

    @field_validator("date", "mood", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class EntryResponse(EntryBase):
    """Entry response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: str
    created_at: datetime
    updated_at: datetime


class EntryDetailResponse(EntryResponse):
    """Entry with its mood-derived display theme."""
    theme: str
