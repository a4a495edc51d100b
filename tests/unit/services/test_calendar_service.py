"""
Unit tests for the calendar grid and entry detail composition.
"""
import pytest

from daydiary.core.exceptions import EntryNotFoundError, ValidationError
from daydiary.models.enums import DEFAULT_MOOD_GRADIENT, MOOD_GRADIENTS, Mood
from daydiary.schemas.entry import EntryUpsert
from daydiary.services.calendar_service import CalendarService, build_month_grid, index_moods
from daydiary.services.entry_service import EntryService


def test_month_grid_pads_leading_weekdays():
    grid = build_month_grid(2024, 3, {})

    assert grid.month_name == "March"
    assert grid.days_in_month == 31
    assert grid.first_weekday == 5
    assert grid.cells[:5] == [None] * 5
    assert grid.cells[5].date == "2024-03-01"
    assert grid.cells[-1].date == "2024-03-31"


def test_month_grid_marks_days_by_membership():
    grid = build_month_grid(2024, 2, {"2024-02-29": "😊", "2024-03-01": "😔"})
    days = {cell.date: cell for cell in grid.cells if cell is not None}

    assert days["2024-02-29"].has_entry is True
    assert days["2024-02-29"].mood == "😊"
    assert days["2024-02-28"].has_entry is False
    assert "2024-03-01" not in days


def test_month_grid_rejects_invalid_month():
    with pytest.raises(ValidationError):
        build_month_grid(2024, 0, {})


def test_index_moods_accepts_dicts():
    assert index_moods([{"date": "2025-01-05", "mood": "😌"}, {"date": "2025-01-06"}]) == {
        "2025-01-05": "😌",
        "2025-01-06": None,
    }


def test_get_month_only_marks_that_month(db_session):
    entries = EntryService(db_session)
    for entry_date in ("2025-01-31", "2025-02-14", "2025-03-01"):
        entries.upsert_entry(EntryUpsert(date=entry_date, title="Day", mood="😌"))

    grid = CalendarService(db_session).get_month(2025, 2)

    marked = [cell.date for cell in grid.cells if cell is not None and cell.has_entry]
    assert marked == ["2025-02-14"]


def test_entry_detail_carries_mood_theme(db_session):
    EntryService(db_session).upsert_entry(EntryUpsert(
        date="2025-01-05",
        title="Gym",
        mood="💪",
        files=["https://example.test/run.mp4"],
    ))

    detail = CalendarService(db_session).get_entry_detail("2025-01-05")

    assert detail.theme == MOOD_GRADIENTS[Mood.STRONG]
    assert detail.files[0].type == "video/mp4"


def test_entry_detail_without_mood_uses_default_theme(db_session):
    EntryService(db_session).upsert_entry(EntryUpsert(date="2025-01-05", title="Plain"))

    assert CalendarService(db_session).get_entry_detail("2025-01-05").theme == DEFAULT_MOOD_GRADIENT


def test_entry_detail_missing(db_session):
    with pytest.raises(EntryNotFoundError):
        CalendarService(db_session).get_entry_detail("2025-01-05")
