"""
Calendar endpoints.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Path

from daydiary.api.dependencies import get_calendar_service
from daydiary.schemas.calendar import CalendarMonthResponse
from daydiary.services.calendar_service import CalendarService

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get(
    "/{year}/{month}",
    response_model=CalendarMonthResponse,
    responses={
        422: {"description": "Year or month out of range"},
    }
)
async def read_month(
    calendar_service: Annotated[CalendarService, Depends(get_calendar_service)],
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
):
    """
    Day grid for one month.

    ``cells`` starts with one ``null`` per weekday before the 1st
    (weeks start on Sunday), followed by one cell per day.
    """
    return calendar_service.get_month(year, month)
