"""
Unit tests for EntryService save and lookup behavior.
"""
import pytest
from sqlmodel import Session, func, select

from daydiary.core.exceptions import EntryNotFoundError, ValidationError
from daydiary.models.entry import DiaryEntry
from daydiary.schemas.entry import EntryUpsert
from daydiary.services.entry_service import EntryService


def _count_entries(session: Session) -> int:
    return session.exec(select(func.count()).select_from(DiaryEntry)).one()


def _save(service: EntryService, **fields) -> DiaryEntry:
    fields.setdefault("title", "A day")
    return service.upsert_entry(EntryUpsert(**fields))


def test_get_entry_for_empty_date_is_none(db_session):
    assert EntryService(db_session).get_entry_by_date("2025-01-05") is None


def test_upsert_creates_entry(db_session):
    service = EntryService(db_session)

    entry = _save(
        service,
        date="2025-01-05",
        title="Beach",
        mood="😊",
        content="Sunny",
        files=["https://example.test/beach.jpg"],
    )

    assert entry.id is not None
    assert entry.date == "2025-01-05"
    assert entry.mood == "😊"
    assert entry.files == [{"name": "beach.jpg", "type": "image/jpeg", "url": "https://example.test/beach.jpg"}]
    assert _count_entries(db_session) == 1


def test_saving_twice_keeps_one_entry_with_second_payload(db_session):
    service = EntryService(db_session)
    payload = dict(date="2025-01-05", title="Same", mood="😌", content="Same text")

    first = _save(service, **payload)
    second = _save(service, **payload)

    assert _count_entries(db_session) == 1
    assert first.id == second.id
    assert second.title == "Same"


def test_second_save_replaces_every_field(db_session):
    service = EntryService(db_session)
    _save(
        service,
        date="2025-01-05",
        title="Draft",
        mood="😔",
        content="First version",
        files=["https://example.test/a.png"],
    )

    replaced = _save(service, date="2025-01-05", title="Final")

    assert replaced.title == "Final"
    assert replaced.mood is None
    assert replaced.content is None
    assert replaced.files == []
    assert _count_entries(db_session) == 1


def test_replacement_keeps_created_at(db_session):
    service = EntryService(db_session)
    first = _save(service, date="2025-01-05")
    created_at = first.created_at

    second = _save(service, date="2025-01-05", title="Later")

    assert second.created_at == created_at
    assert second.updated_at >= created_at


def test_list_entries_is_newest_date_first(db_session):
    service = EntryService(db_session)
    for entry_date in ("2024-12-31", "2025-02-01", "2025-01-15"):
        _save(service, date=entry_date)

    assert [entry.date for entry in service.list_entries()] == ["2025-02-01", "2025-01-15", "2024-12-31"]


def test_list_entries_between_bounds_inclusive(db_session):
    service = EntryService(db_session)
    for entry_date in ("2025-01-31", "2025-02-01", "2025-02-28", "2025-03-01"):
        _save(service, date=entry_date)

    dates = [entry.date for entry in service.list_entries_between("2025-02-01", "2025-02-28")]
    assert dates == ["2025-02-28", "2025-02-01"]


def test_missing_date_is_rejected_before_store_access(db_session):
    service = EntryService(db_session)

    with pytest.raises(ValidationError, match="Date is required"):
        service.upsert_entry(EntryUpsert(title="No date"))

    assert _count_entries(db_session) == 0


def test_malformed_date_is_rejected(db_session):
    with pytest.raises(ValidationError):
        _save(EntryService(db_session), date="2025-02-30")


def test_title_required_by_default(db_session):
    with pytest.raises(ValidationError, match="title"):
        EntryService(db_session).upsert_entry(EntryUpsert(date="2025-01-05"))


def test_title_optional_when_disabled(db_session):
    entry = EntryService(db_session, title_required=False).upsert_entry(EntryUpsert(date="2025-01-05"))
    assert entry.title is None


def test_unknown_mood_is_rejected(db_session):
    with pytest.raises(ValidationError, match="Unknown mood"):
        _save(EntryService(db_session), date="2025-01-05", mood="🙃")


def test_overlong_title_is_rejected(db_session):
    service = EntryService(db_session)

    with pytest.raises(ValidationError, match="at most 300"):
        _save(service, date="2025-01-05", title="x" * 301)
    assert _save(service, date="2025-01-05", title="x" * 300).title == "x" * 300


def test_require_entry_raises_when_absent(db_session):
    with pytest.raises(EntryNotFoundError):
        EntryService(db_session).require_entry_by_date("2025-01-05")
