import pytest

from daydiary.core.calendar_utils import (
    day_of_week,
    days_in_month,
    first_weekday,
    format_date_key,
    format_date_key_from_index,
    is_leap_year,
    is_valid_date_key,
    month_cells,
    parse_date_key,
    shift_month,
)


@pytest.mark.parametrize(
    "year,expected",
    [(2000, True), (1900, False), (2024, True), (2023, False), (2100, False), (2400, True)],
)
def test_is_leap_year(year, expected):
    assert is_leap_year(year) is expected


@pytest.mark.parametrize("year,expected", [(2000, 29), (1900, 28), (2024, 29), (2023, 28)])
def test_february_length_follows_gregorian_rule(year, expected):
    assert days_in_month(year, 2) == expected


def test_days_in_month_for_thirty_and_thirty_one_day_months():
    assert days_in_month(2025, 1) == 31
    assert days_in_month(2025, 4) == 30
    assert days_in_month(2025, 12) == 31


def test_days_in_month_rejects_invalid_month():
    with pytest.raises(ValueError):
        days_in_month(2025, 13)


def test_day_of_week_known_dates():
    # 2000-01-01 was a Saturday, 2024-02-29 a Thursday, 2025-01-05 a Sunday
    assert day_of_week(2000, 1, 1) == 6
    assert day_of_week(2024, 2, 29) == 4
    assert day_of_week(2025, 1, 5) == 0


def test_first_weekday_and_leading_blanks():
    # September 2024 starts on a Sunday, March 2024 on a Friday
    assert first_weekday(2024, 9) == 0
    assert first_weekday(2024, 3) == 5

    cells = month_cells(2024, 3)
    assert cells[:5] == [None] * 5
    assert cells[5] == 1
    assert cells[-1] == 31
    assert len(cells) == 5 + 31


def test_format_date_key_zero_pads():
    assert format_date_key(2025, 1, 5) == "2025-01-05"


def test_format_date_key_from_zero_based_month_index():
    assert format_date_key_from_index(2025, 0, 5) == "2025-01-05"
    assert format_date_key_from_index(2025, 11, 31) == "2025-12-31"


def test_parse_date_key():
    assert parse_date_key("2024-02-29") == (2024, 2, 29)


@pytest.mark.parametrize("value", ["2023-02-29", "2025-13-01", "2025-1-5", "20250105", "", "2025-04-31"])
def test_parse_date_key_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_date_key(value)
    assert is_valid_date_key(value) is False


def test_shift_month_wraps_years():
    assert shift_month(2025, 1, -1) == (2024, 12)
    assert shift_month(2024, 12, 1) == (2025, 1)
    assert shift_month(2025, 6, 0) == (2025, 6)
