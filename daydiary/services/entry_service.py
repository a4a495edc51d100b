"""
Entry service for reading and saving diary entries.
"""
from typing import List, Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from daydiary.core.calendar_utils import parse_date_key
from daydiary.core.config import settings
from daydiary.core.exceptions import EntryNotFoundError, ValidationError
from daydiary.core.logging_config import log_debug, log_entry_action, log_error
from daydiary.core.time_utils import utc_now
from daydiary.models.entry import TITLE_MAX_LENGTH, DiaryEntry
from daydiary.models.enums import Mood
from daydiary.schemas.entry import EntryUpsert

# Columns a save overwrites; ``date`` and ``created_at`` survive replacement
REPLACED_COLUMNS = ("title", "mood", "content", "files", "updated_at")

_MOOD_VALUES = {mood.value for mood in Mood}


class EntryService:
    """Service class for entry operations."""

    def __init__(self, session: Session, *, title_required: Optional[bool] = None):
        self.session = session
        self.title_required = (
            settings.entry_title_required if title_required is None else title_required
        )

    def _commit(self) -> None:
        """Commit database changes with proper error handling."""
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc)
            raise

    @staticmethod
    def _validate_date(entry_date: Optional[str]) -> str:
        if not entry_date:
            raise ValidationError("Date is required")
        try:
            parse_date_key(entry_date)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        return entry_date

    def _validate_payload(self, entry_data: EntryUpsert) -> str:
        entry_date = self._validate_date(entry_data.date)
        if self.title_required and not (entry_data.title and entry_data.title.strip()):
            raise ValidationError("Date and title are required")
        if entry_data.title and len(entry_data.title) > TITLE_MAX_LENGTH:
            raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
        if entry_data.mood is not None and entry_data.mood not in _MOOD_VALUES:
            allowed = ", ".join(sorted(_MOOD_VALUES))
            raise ValidationError(f"Unknown mood '{entry_data.mood}'. Must be one of: {allowed}")
        return entry_date

    def _insert_for_dialect(self):
        """Pick the insert construct that supports ON CONFLICT for the bound database."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert
        if dialect == "sqlite":
            return sqlite.insert
        raise RuntimeError(f"Atomic upsert is not supported for the '{dialect}' dialect")

    def get_entry_by_date(self, entry_date: str) -> Optional[DiaryEntry]:
        """Return the entry for a date, or None when nothing was written that day."""
        entry_date = self._validate_date(entry_date)
        statement = (
            select(DiaryEntry)
            .where(DiaryEntry.date == entry_date)
            .execution_options(populate_existing=True)
        )
        return self.session.exec(statement).first()

    def require_entry_by_date(self, entry_date: str) -> DiaryEntry:
        entry = self.get_entry_by_date(entry_date)
        if entry is None:
            raise EntryNotFoundError(f"No entry for {entry_date}")
        return entry

    def list_entries(self) -> List[DiaryEntry]:
        """All entries, newest date first."""
        statement = select(DiaryEntry).order_by(col(DiaryEntry.date).desc())
        return list(self.session.exec(statement).all())

    def list_entries_between(self, start_date: str, end_date: str) -> List[DiaryEntry]:
        """Entries with ``start_date <= date <= end_date``, newest first.

        Date keys are zero-padded so string comparison matches calendar order.
        """
        statement = (
            select(DiaryEntry)
            .where(col(DiaryEntry.date) >= self._validate_date(start_date))
            .where(col(DiaryEntry.date) <= self._validate_date(end_date))
            .order_by(col(DiaryEntry.date).desc())
        )
        return list(self.session.exec(statement).all())

    def upsert_entry(self, entry_data: EntryUpsert) -> DiaryEntry:
        """Create the entry for ``entry_data.date`` or replace the existing one.

        The write is a single INSERT ... ON CONFLICT (date) DO UPDATE statement,
        so concurrent saves for the same date never produce two rows; the
        last one to commit wins.

        Raises:
            ValidationError: date missing or malformed, title missing while
                required, or unknown mood. Raised before the store is touched.
        """
        entry_date = self._validate_payload(entry_data)
        now = utc_now()
        values = {
            "date": entry_date,
            "title": entry_data.title.strip() if entry_data.title else None,
            "mood": entry_data.mood,
            "content": entry_data.content,
            "files": [file_ref.model_dump() for file_ref in entry_data.files],
            "created_at": now,
            "updated_at": now,
        }

        insert = self._insert_for_dialect()
        insert_stmt = insert(DiaryEntry).values(**values)
        statement = insert_stmt.on_conflict_do_update(
            index_elements=["date"],
            set_={column: insert_stmt.excluded[column] for column in REPLACED_COLUMNS},
        )

        try:
            self.session.connection().execute(statement)
        except SQLAlchemyError as exc:
            self.session.rollback()
            log_error(exc, date=entry_date)
            raise
        self._commit()

        entry = self.get_entry_by_date(entry_date)
        log_entry_action("saved", entry_date, files=len(values["files"]))
        log_debug("Entry upsert completed", date=entry_date, entry_id=entry.id if entry else None)
        return entry
