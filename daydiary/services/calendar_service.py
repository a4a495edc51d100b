"""
Read-side composition for the calendar month grid and the entry detail page.
"""
from typing import Iterable, Mapping, Optional

from sqlmodel import Session

from daydiary.core.calendar_utils import (
    MONTH_NAMES,
    days_in_month,
    first_weekday,
    format_date_key,
    month_cells,
)
from daydiary.core.exceptions import ValidationError
from daydiary.models.entry import DiaryEntry
from daydiary.models.enums import gradient_for_mood
from daydiary.schemas.calendar import CalendarDay, CalendarMonthResponse
from daydiary.schemas.entry import EntryDetailResponse, EntryResponse
from daydiary.services.entry_service import EntryService


def build_month_grid(
    year: int,
    month: int,
    moods_by_date: Mapping[str, Optional[str]],
) -> CalendarMonthResponse:
    """Lay out a month and flag the days present in ``moods_by_date``."""
    if not 1 <= month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {month}")

    cells = []
    for day in month_cells(year, month):
        if day is None:
            cells.append(None)
            continue
        key = format_date_key(year, month, day)
        cells.append(CalendarDay(
            day=day,
            date=key,
            has_entry=key in moods_by_date,
            mood=moods_by_date.get(key),
        ))

    return CalendarMonthResponse(
        year=year,
        month=month,
        month_name=MONTH_NAMES[month - 1],
        days_in_month=days_in_month(year, month),
        first_weekday=first_weekday(year, month),
        cells=cells,
    )


def index_moods(entries: Iterable) -> dict:
    """Map date key to mood for entry objects or dicts."""
    index = {}
    for entry in entries:
        if isinstance(entry, Mapping):
            index[entry["date"]] = entry.get("mood")
        else:
            index[entry.date] = entry.mood
    return index


def build_entry_detail(entry: DiaryEntry) -> EntryDetailResponse:
    base = EntryResponse.model_validate(entry)
    return EntryDetailResponse(**base.model_dump(), theme=gradient_for_mood(entry.mood))


class CalendarService:
    """Service class for calendar views."""

    def __init__(self, session: Session):
        self.entry_service = EntryService(session)

    def get_month(self, year: int, month: int) -> CalendarMonthResponse:
        if not 1 <= month <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}")
        if not 1 <= year <= 9999:
            raise ValidationError(f"Year must be between 1 and 9999, got {year}")
        entries = self.entry_service.list_entries_between(
            format_date_key(year, month, 1),
            format_date_key(year, month, days_in_month(year, month)),
        )
        return build_month_grid(year, month, index_moods(entries))

    def get_entry_detail(self, entry_date: str) -> EntryDetailResponse:
        """Raises EntryNotFoundError when nothing was written on ``entry_date``."""
        return build_entry_detail(self.entry_service.require_entry_by_date(entry_date))
