"""
Add/Edit flow for a single day's entry.

States::

    NO_DATE_SELECTED -> DATE_SELECTED -> MODE_NEW | MODE_EDIT -> SUBMITTING -> DONE

Files are uploaded to the media host as soon as they are attached. The entry
can only be submitted once no upload is in flight, and only files that
finished uploading are sent with it.
"""
import asyncio
import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, Union

from daydiary.client.api import DiaryApiClient
from daydiary.core.calendar_utils import is_valid_date_key
from daydiary.core.exceptions import MediaHostError
from daydiary.core.logging_config import log_error, log_info, log_warning
from daydiary.integrations.media_host import MediaHostClient

SavedCallback = Callable[[Dict[str, Any]], Union[None, Awaitable[None]]]
PendingFile = Tuple[str, bytes, str]


class EditorState(str, Enum):
    NO_DATE_SELECTED = "no_date_selected"
    DATE_SELECTED = "date_selected"
    MODE_NEW = "mode_new"
    MODE_EDIT = "mode_edit"
    SUBMITTING = "submitting"
    DONE = "done"


class EditorMode(str, Enum):
    NEW = "new"
    EDIT = "edit"


class UploadState(str, Enum):
    UPLOADING = "uploading"
    DONE = "done"
    FAILED = "failed"


class UploadsPendingError(Exception):
    """Raised when submitting while at least one file is still uploading."""
    pass


class EditorStateError(Exception):
    """Raised when an operation is not allowed in the current editor state."""
    pass


@dataclass(eq=False)
class FileAttachment:
    """One attached file and its upload progress (0-100)."""
    name: str
    type: str
    url: Optional[str] = None
    progress: int = 0
    state: UploadState = UploadState.UPLOADING
    error: Optional[str] = None

    @classmethod
    def from_reference(cls, reference: Dict[str, Any]) -> "FileAttachment":
        return cls(
            name=reference.get("name") or reference["url"],
            type=reference.get("type") or "application/octet-stream",
            url=reference["url"],
            progress=100,
            state=UploadState.DONE,
        )

    def to_reference(self) -> Dict[str, str]:
        return {"name": self.name, "type": self.type, "url": self.url}


@dataclass
class EntryDraft:
    title: str = ""
    mood: str = ""
    content: str = ""
    files: List[FileAttachment] = field(default_factory=list)


class EntryEditor:
    """
    Client-side state machine for creating or replacing one day's entry.

    ``on_saved`` is called exactly once per successful submit with the saved
    entry; wire it to ``CalendarCache.invalidate`` so the calendar refetches.
    """

    def __init__(
        self,
        api: DiaryApiClient,
        media_host: MediaHostClient,
        on_saved: Optional[SavedCallback] = None,
    ):
        self.api = api
        self.media_host = media_host
        self.on_saved = on_saved
        self.state = EditorState.NO_DATE_SELECTED
        self.selected_date: Optional[str] = None
        self.existing_entry: Optional[Dict[str, Any]] = None
        self.mode: Optional[EditorMode] = None
        self.draft = EntryDraft()

    @property
    def attachments(self) -> List[FileAttachment]:
        return self.draft.files

    @property
    def uploads_pending(self) -> bool:
        return any(item.state is UploadState.UPLOADING for item in self.draft.files)

    def _require_state(self, *allowed: EditorState) -> None:
        if self.state not in allowed:
            names = ", ".join(state.name for state in allowed)
            raise EditorStateError(f"Editor is {self.state.name}, expected one of: {names}")

    async def select_date(self, entry_date: str) -> Optional[Dict[str, Any]]:
        """Pick the day to write about and load its current entry, if any."""
        if not is_valid_date_key(entry_date):
            raise ValueError(f"Invalid date '{entry_date}', expected YYYY-MM-DD")
        if self.state is EditorState.SUBMITTING:
            raise EditorStateError("Cannot change date while submitting")

        self.existing_entry = await self.api.get_entry(entry_date)
        self.selected_date = entry_date
        self.mode = None
        self.draft = EntryDraft()
        self.state = EditorState.DATE_SELECTED
        return self.existing_entry

    def choose_mode(self, mode: EditorMode) -> None:
        """
        Start a fresh entry or edit the existing one.

        NEW on a date that already has an entry replaces it on submit.
        """
        self._require_state(EditorState.DATE_SELECTED, EditorState.MODE_NEW, EditorState.MODE_EDIT)
        mode = EditorMode(mode)
        if mode is EditorMode.EDIT and self.existing_entry is None:
            raise EditorStateError(f"No entry to edit for {self.selected_date}")

        self.mode = mode
        if mode is EditorMode.EDIT:
            entry = self.existing_entry
            self.draft = EntryDraft(
                title=entry.get("title") or "",
                mood=entry.get("mood") or "",
                content=entry.get("content") or "",
                files=[FileAttachment.from_reference(ref) for ref in entry.get("files") or []],
            )
            self.state = EditorState.MODE_EDIT
        else:
            self.draft = EntryDraft()
            self.state = EditorState.MODE_NEW

    def update_fields(self, *, title: Optional[str] = None, mood: Optional[str] = None, content: Optional[str] = None) -> None:
        self._require_state(EditorState.MODE_NEW, EditorState.MODE_EDIT)
        if title is not None:
            self.draft.title = title
        if mood is not None:
            self.draft.mood = mood
        if content is not None:
            self.draft.content = content

    @staticmethod
    def _mark_failed(attachment: FileAttachment, reason: str) -> None:
        attachment.state = UploadState.FAILED
        attachment.progress = 0
        attachment.error = reason

    async def _upload(self, attachment: FileAttachment, content: bytes) -> None:
        def on_progress(sent: int, total: int) -> None:
            if total:
                attachment.progress = min(99, round(sent * 100 / total))

        try:
            asset = await self.media_host.upload(attachment.name, content, attachment.type, on_progress=on_progress)
        except MediaHostError as exc:
            log_warning("Attachment upload failed", filename=attachment.name, error=str(exc))
            self._mark_failed(attachment, str(exc))
            return
        except Exception as exc:
            # Every attachment must leave UPLOADING
            log_error(exc, filename=attachment.name)
            self._mark_failed(attachment, "Upload failed")
            return

        attachment.url = asset.url
        attachment.progress = 100
        attachment.state = UploadState.DONE

    async def attach_files(self, files: Iterable[PendingFile]) -> List[FileAttachment]:
        """
        Upload ``(filename, content, content_type)`` items in parallel.

        Each file gets its own attachment immediately; a failed upload marks
        only that attachment as failed.
        """
        self._require_state(EditorState.MODE_NEW, EditorState.MODE_EDIT)
        pending = []
        for filename, content, content_type in files:
            attachment = FileAttachment(name=filename, type=content_type or "application/octet-stream")
            self.draft.files.append(attachment)
            pending.append((attachment, content))

        await asyncio.gather(*(self._upload(attachment, content) for attachment, content in pending))
        return [attachment for attachment, _ in pending]

    def remove_attachment(self, attachment: FileAttachment) -> None:
        self._require_state(EditorState.MODE_NEW, EditorState.MODE_EDIT)
        self.draft.files = [item for item in self.draft.files if item is not attachment]

    def can_submit(self) -> bool:
        return (
            self.state in (EditorState.MODE_NEW, EditorState.MODE_EDIT)
            and not self.uploads_pending
        )

    def build_payload(self) -> Dict[str, Any]:
        return {
            "date": self.selected_date,
            "title": self.draft.title,
            "mood": self.draft.mood,
            "content": self.draft.content,
            "files": [
                item.to_reference()
                for item in self.draft.files
                if item.state is UploadState.DONE and item.url
            ],
        }

    async def submit(self) -> Dict[str, Any]:
        """
        Save the draft.

        Raises:
            UploadsPendingError: an attachment is still uploading; nothing is sent
            EditorStateError: no date or mode chosen yet
            DiaryApiError: the server rejected the entry; the draft is kept
        """
        if self.state in (EditorState.NO_DATE_SELECTED, EditorState.DATE_SELECTED):
            raise EditorStateError("Select a date and a mode before saving")
        if self.uploads_pending:
            raise UploadsPendingError("Please wait for all uploads to finish")
        self._require_state(EditorState.MODE_NEW, EditorState.MODE_EDIT)

        previous_state = self.state
        self.state = EditorState.SUBMITTING
        try:
            saved = await self.api.upsert_entry(self.build_payload())
        except Exception:
            self.state = previous_state
            raise

        self.state = EditorState.DONE
        self.existing_entry = saved
        log_info("Entry saved", date=self.selected_date, files=len(saved.get("files") or []))

        if self.on_saved is not None:
            result = self.on_saved(saved)
            if inspect.isawaitable(result):
                await result
        return saved
