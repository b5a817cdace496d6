"""Day-boundary snapping and calendar arithmetic helpers."""

from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime]

# Monday-Friday in the Sunday-first (0=Sunday) numbering used by week_start_index
WEEKDAY_INDICES = frozenset({1, 2, 3, 4, 5})
WEEKEND_INDICES = frozenset({0, 6})

# Grids pad into the neighbouring years, so the outermost years are not navigable
MIN_WINDOW_YEAR = MINYEAR + 1
MAX_WINDOW_YEAR = MAXYEAR - 1


def as_datetime(value: DateLike) -> datetime:
    """Promote a bare date to midnight of that day; datetimes pass through."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def as_date(value: DateLike) -> date:
    """Drop the time-of-day part of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: Optional[DateLike]) -> Optional[datetime]:
    """Snap a value to 00:00:00.000 of its calendar day.

    Returns None when no value is given.
    """
    if value is None:
        return None
    return datetime.combine(as_date(value), time.min)


def end_of_day(value: Optional[DateLike]) -> Optional[datetime]:
    """Snap a value to 23:59:59.999 of its calendar day.

    Millisecond precision is kept so the end matches the 23:59:59.999 boundary
    used by the selection flags. Returns None when no value is given.
    """
    if value is None:
        return None
    return datetime.combine(as_date(value), time(23, 59, 59, 999000))


def first_of_month(value: DateLike) -> date:
    return date(value.year, value.month, 1)


def day_of_week(value: DateLike) -> int:
    """Return the day-of-week index with 0=Sunday through 6=Saturday."""
    return (value.weekday() + 1) % 7


def add_days(value: DateLike, days: int) -> DateLike:
    return value + timedelta(days=days)


def add_months(value: DateLike, months: int) -> DateLike:
    """Shift by calendar months, clamping the day to the target month's length.

    Jan 31 + 1 month is Feb 29 in a leap year and Feb 28 otherwise.
    """
    return value + relativedelta(months=months)


def add_years(value: DateLike, years: int) -> DateLike:
    """Shift by calendar years; Feb 29 clamps to Feb 28 in non-leap years."""
    return value + relativedelta(years=years)


def same_day(left: Optional[DateLike], right: Optional[DateLike]) -> bool:
    if left is None or right is None:
        return False
    return as_date(left) == as_date(right)


def month_key(value: DateLike) -> tuple[int, int]:
    """Return the (year, month) pair of a value for month-level comparisons."""
    return value.year, value.month


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Roll an out-of-range month number into the neighbouring years.

    normalize_month(2024, 13) == (2025, 1) and normalize_month(2024, 0) == (2023, 12).
    """
    offset = month - 1
    return year + offset // 12, offset % 12 + 1
