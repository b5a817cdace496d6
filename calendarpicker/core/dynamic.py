"""Dynamic (time-relative) selection values.

A dynamic value is a named token such as ``"TODAY"`` or ``"LAST_90_DAYS"`` that
stands in for a concrete date or range. Tokens are resolved against the clock
every time they are read, so a stored token drifts forward with wall-clock time.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional, Union

from .dates import add_months, end_of_day, start_of_day
from .models import DateRange, SelectionMode

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class DynamicDate(str, Enum):
    """Tokens accepted in place of a single date."""

    TODAY = "TODAY"
    YESTERDAY = "YESTERDAY"
    TOMORROW = "TOMORROW"


class DynamicDateRange(str, Enum):
    """Tokens accepted in place of a date range."""

    TODAY = "TODAY"
    YESTERDAY = "YESTERDAY"
    THIS_MONTH = "THIS_MONTH"
    LAST_MONTH = "LAST_MONTH"
    LAST_90_DAYS = "LAST_90_DAYS"
    THIS_YEAR = "THIS_YEAR"
    LAST_YEAR = "LAST_YEAR"


def _last_month(now: datetime) -> DateRange:
    first_this_month = now.replace(day=1)
    return DateRange(
        start=start_of_day(add_months(first_this_month, -1)),
        end=end_of_day(first_this_month - timedelta(days=1)),
        name="Last Month",
    )


DYNAMIC_DATES: dict[DynamicDate, Callable[[datetime], datetime]] = {
    DynamicDate.TODAY: lambda now: now,
    DynamicDate.YESTERDAY: lambda now: start_of_day(now - timedelta(days=1)),
    DynamicDate.TOMORROW: lambda now: start_of_day(now + timedelta(days=1)),
}

DYNAMIC_DATE_RANGES: dict[DynamicDateRange, Callable[[datetime], DateRange]] = {
    DynamicDateRange.TODAY: lambda now: DateRange(start_of_day(now), now, name="Today"),
    DynamicDateRange.YESTERDAY: lambda now: DateRange(
        start_of_day(now - timedelta(days=1)),
        end_of_day(now - timedelta(days=1)),
        name="Yesterday",
    ),
    DynamicDateRange.THIS_MONTH: lambda now: DateRange(
        start_of_day(now.replace(day=1)), now, name="This Month"
    ),
    DynamicDateRange.LAST_MONTH: _last_month,
    DynamicDateRange.LAST_90_DAYS: lambda now: DateRange(
        start_of_day(now - timedelta(days=90)), now, name="Last 90 Days"
    ),
    DynamicDateRange.THIS_YEAR: lambda now: DateRange(
        start_of_day(now.replace(month=1, day=1)), now, name="This Year"
    ),
    DynamicDateRange.LAST_YEAR: lambda now: DateRange(
        start_of_day(now.replace(year=now.year - 1, month=1, day=1)),
        end_of_day(now.replace(year=now.year - 1, month=12, day=31)),
        name="Last Year",
    ),
}


def is_dynamic(value: object) -> bool:
    """Check whether a stored value is a token rather than a concrete value."""
    return isinstance(value, str)


def resolve_value(
    value: object, mode: SelectionMode, clock: Clock = datetime.now
) -> Union[datetime, DateRange, None]:
    """Resolve a stored selection value into a concrete one.

    Concrete datetimes and ranges are returned unchanged. Tokens are looked up
    in the table for ``mode`` and computed from ``clock()`` at call time.
    Unknown tokens resolve to None.

    Args:
        value: Stored value (datetime, DateRange, token string or None)
        mode: Selection mode deciding which token table applies
        clock: Source of the current instant

    Returns:
        The concrete selection value, or None
    """
    if not is_dynamic(value):
        return value  # type: ignore[return-value]

    token = str(value.value if isinstance(value, Enum) else value).upper()
    now = clock()

    if mode is SelectionMode.SINGLE:
        resolver: Optional[Callable[[datetime], object]] = None
        if token in DynamicDate.__members__:
            resolver = DYNAMIC_DATES[DynamicDate(token)]
    else:
        resolver = None
        if token in DynamicDateRange.__members__:
            resolver = DYNAMIC_DATE_RANGES[DynamicDateRange(token)]

    if resolver is None:
        logger.warning(f"Unknown dynamic {mode.value} value: {value!r}")
        return None

    resolved = resolver(now)
    logger.debug(f"Resolved dynamic value {token} -> {resolved}")
    return resolved  # type: ignore[return-value]
