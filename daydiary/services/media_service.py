"""
Media service for the gallery catalog.
"""
from dataclasses import dataclass
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from daydiary.core.database import get_session_context
from daydiary.core.exceptions import MediaNotFoundError, ValidationError
from daydiary.core.logging_config import log_error, log_media_action, log_warning
from daydiary.models.media import MediaItem
from daydiary.schemas.media import MediaCreate
from daydiary.tasks.media_cleanup_tasks import schedule_remote_cleanup

REQUIRED_MEDIA_FIELDS = ("name", "type", "url")


@dataclass(frozen=True)
class RemovedMedia:
    """What is left of a media row once it is gone: enough to clean up remotely."""
    id: int
    url: str
    type: str


class MediaService:
    """Service class for gallery media operations."""

    def __init__(self, session: Session):
        self.session = session

    def _commit(self) -> None:
        """Commit database changes with proper error handling."""
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc)
            raise

    def list_media(self) -> List[MediaItem]:
        """All media, newest first."""
        statement = select(MediaItem).order_by(
            col(MediaItem.added_at).desc(),
            col(MediaItem.id).desc(),
        )
        return list(self.session.exec(statement).all())

    def get_media(self, media_id: int) -> MediaItem:
        media = self.session.get(MediaItem, media_id)
        if media is None:
            log_warning(f"Media not found: {media_id}")
            raise MediaNotFoundError("Media not found")
        return media

    def create_media(self, media_data: MediaCreate) -> MediaItem:
        """Register an uploaded file.

        The caller must already have finished the upload and hold its URL;
        this only records metadata.

        Raises:
            ValidationError: any of name, type, url missing
        """
        missing = [
            field for field in REQUIRED_MEDIA_FIELDS
            if not (getattr(media_data, field) or "").strip()
        ]
        if missing:
            raise ValidationError(f"Missing fields: {', '.join(missing)}")

        media = MediaItem(
            name=media_data.name.strip(),
            type=media_data.type.strip(),
            url=media_data.url.strip(),
        )
        self.session.add(media)
        self._commit()
        self.session.refresh(media)
        log_media_action("registered", media.id, name=media.name, type=media.type)
        return media

    def update_favorite(self, media_id: int, favorite: bool) -> MediaItem:
        media = self.get_media(media_id)
        media.favorite = favorite
        self.session.add(media)
        self._commit()
        self.session.refresh(media)
        log_media_action("favorite updated", media.id, favorite=favorite)
        return media

    def delete_media_record(self, media_id: int) -> RemovedMedia | None:
        """Delete the row for ``media_id``; None when it is already gone."""
        media = self.session.get(MediaItem, media_id)
        if media is None:
            return None
        removed = RemovedMedia(id=media.id, url=media.url, type=media.type)
        self.session.delete(media)
        self._commit()
        log_media_action("record deleted", removed.id)
        return removed


async def purge_media(media_id: int) -> None:
    """
    Background half of a gallery deletion.

    Runs after the HTTP response has been sent: removes the database row,
    then hands the remote file to best-effort cleanup. Failures are logged
    and never reach the caller.
    """
    try:
        with get_session_context() as session:
            removed = MediaService(session).delete_media_record(media_id)
    except SQLAlchemyError as exc:
        log_error(exc, media_id=media_id)
        return

    if removed is None:
        log_warning("Media already removed before purge", media_id=media_id)
        return

    await schedule_remote_cleanup(removed.url, removed.type)
