"""
Async client for the diary HTTP API.

Carries the client half of the save protocol: files are uploaded to the
media host first and only finished uploads are committed with an entry or
registered in the gallery.
"""
from daydiary.client.api import DiaryApiClient, DiaryApiError
from daydiary.client.calendar_cache import CalendarCache
from daydiary.client.entry_editor import (
    EditorMode,
    EditorState,
    EntryEditor,
    FileAttachment,
    UploadState,
    UploadsPendingError,
)
from daydiary.client.gallery import GalleryClient
from daydiary.client.state_store import ChatHistoryStore, SiteLock, StateStore
from daydiary.client.sticky_notes import StickyNote, StickyNoteBoard

__all__ = [
    "CalendarCache",
    "ChatHistoryStore",
    "DiaryApiClient",
    "DiaryApiError",
    "EditorMode",
    "EditorState",
    "EntryEditor",
    "FileAttachment",
    "GalleryClient",
    "SiteLock",
    "StateStore",
    "StickyNote",
    "StickyNoteBoard",
    "UploadState",
    "UploadsPendingError",
]
