"""
Calendar arithmetic for the month grid.

Everything here works on plain year/month/day integers; month numbers are
1-based (1 = January) and weekdays are 0-based starting on Sunday.
"""
import re
from typing import List, Optional, Tuple

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Month offsets for Sakamoto's day-of-week method
_WEEKDAY_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)

DATE_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def is_leap_year(year: int) -> bool:
    """Gregorian rule: divisible by 4 and not by 100, unless divisible by 400."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")


def days_in_month(year: int, month: int) -> int:
    _check_month(month)
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def first_weekday(year: int, month: int) -> int:
    """Weekday of the first day of the month (0 = Sunday ... 6 = Saturday)."""
    return day_of_week(year, month, 1)


def day_of_week(year: int, month: int, day: int) -> int:
    _check_month(month)
    if month < 3:
        year -= 1
    return (year + year // 4 - year // 100 + year // 400 + _WEEKDAY_OFFSETS[month - 1] + day) % 7


def month_cells(year: int, month: int) -> List[Optional[int]]:
    """Leading blanks (None) for the weekdays before the 1st, then 1..N."""
    offset = first_weekday(year, month)
    return [None] * offset + list(range(1, days_in_month(year, month) + 1))


def format_date_key(year: int, month: int, day: int) -> str:
    """Build the zero-padded ``YYYY-MM-DD`` key for a day."""
    _check_month(month)
    return f"{year:04d}-{month:02d}-{day:02d}"


def format_date_key_from_index(year: int, month_index: int, day: int) -> str:
    """Same as :func:`format_date_key` for a 0-based month index."""
    return format_date_key(year, month_index + 1, day)


def parse_date_key(value: str) -> Tuple[int, int, int]:
    """Split and validate a ``YYYY-MM-DD`` key."""
    match = DATE_KEY_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Date must use the YYYY-MM-DD format, got '{value}'")
    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in date '{value}'")
    if not 1 <= day <= days_in_month(year, month):
        raise ValueError(f"Invalid day in date '{value}'")
    return year, month, day


def is_valid_date_key(value: str) -> bool:
    try:
        parse_date_key(value)
    except ValueError:
        return False
    return True


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` months forward (or back) from year/month."""
    _check_month(month)
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
