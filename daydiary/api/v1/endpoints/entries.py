"""
Diary entry endpoints.
"""
from typing import Annotated, List, Optional, Union

from fastapi import APIRouter, Depends, Query

from daydiary.api.dependencies import get_calendar_service, get_entry_service, get_request_id
from daydiary.core.logging_config import log_entry_action
from daydiary.schemas.entry import EntryDetailResponse, EntryResponse, EntryUpsert
from daydiary.services.calendar_service import CalendarService
from daydiary.services.entry_service import EntryService

router = APIRouter(prefix="/entries", tags=["entries"])


@router.get(
    "",
    response_model=Union[List[EntryResponse], Optional[EntryResponse]],
    responses={
        400: {"description": "Malformed date"},
    }
)
async def read_entries(
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
    date: Optional[str] = Query(None, description="Date key YYYY-MM-DD"),
):
    """
    Get the entry for one date, or every entry.

    With ``date`` the response is that day's entry or ``null``; without it the
    response is the full list, newest date first.
    """
    if date is not None:
        return entry_service.get_entry_by_date(date)
    return entry_service.list_entries()


@router.post(
    "",
    response_model=EntryResponse,
    responses={
        400: {"description": "Date missing or invalid entry data"},
    }
)
async def save_entry(
    entry_data: EntryUpsert,
    entry_service: Annotated[EntryService, Depends(get_entry_service)],
    request_id: Annotated[str, Depends(get_request_id)],
):
    """
    Create or replace the entry for ``entry_data.date``.

    Saving twice for the same date leaves a single entry holding the second payload.
    """
    entry = entry_service.upsert_entry(entry_data)
    log_entry_action("saved via api", entry.date, request_id=request_id)
    return entry


@router.get(
    "/{entry_date}/detail",
    response_model=EntryDetailResponse,
    responses={
        400: {"description": "Malformed date"},
        404: {"description": "No entry for this date"},
    }
)
async def read_entry_detail(
    entry_date: str,
    calendar_service: Annotated[CalendarService, Depends(get_calendar_service)],
):
    """Get one day's entry with its mood theme."""
    return calendar_service.get_entry_detail(entry_date)
