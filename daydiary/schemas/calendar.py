"""
Calendar month grid schemas.
"""
from typing import List, Optional

from pydantic import BaseModel


class CalendarDay(BaseModel):
    day: int
    date: str
    has_entry: bool = False
    mood: Optional[str] = None


class CalendarMonthResponse(BaseModel):
    """A month laid out Sunday-first; leading ``None`` cells pad the first week."""
    year: int
    month: int
    month_name: str
    days_in_month: int
    first_weekday: int
    cells: List[Optional[CalendarDay]]
