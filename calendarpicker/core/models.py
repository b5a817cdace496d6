"""Value types shared by the grid, selection and navigation components."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from .dates import DateLike, add_months, first_of_month, month_key, normalize_month

if TYPE_CHECKING:
    from ..ui.interaction import DateProps


class SelectionMode(str, Enum):
    """Whether the picker selects one date or a start/end range."""

    SINGLE = "single"
    RANGE = "range"


class SelectionPhase(Enum):
    """Observable state of the selection machine."""

    EMPTY = "empty"
    SINGLE_SET = "single_set"
    RANGE_START_ONLY = "range_start_only"
    RANGE_COMPLETE = "range_complete"


@dataclass(frozen=True)
class CalendarWindow:
    """Anchor month currently displayed, always the 1st of a month."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            year, month = normalize_month(self.year, self.month)
            object.__setattr__(self, "year", year)
            object.__setattr__(self, "month", month)

    @classmethod
    def from_date(cls, value: DateLike) -> CalendarWindow:
        anchor = first_of_month(value)
        return cls(anchor.year, anchor.month)

    @property
    def anchor(self) -> date:
        """First day of the window's month."""
        return date(self.year, self.month, 1)

    def shifted(self, months: int) -> CalendarWindow:
        return CalendarWindow.from_date(add_months(self.anchor, months))

    def contains(self, value: DateLike) -> bool:
        """Check whether a date falls inside the anchor month."""
        return month_key(value) == (self.year, self.month)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class DateRange:
    """A start/end pair; either side may be unset.

    Attributes:
        start: Range start, snapped to start of day for committed ranges
        end: Range end, snapped to end of day for committed ranges
        name: Display name, set only for ranges resolved from dynamic tokens
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    name: Optional[str] = field(default=None, compare=False)

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, value: DateLike) -> bool:
        """Check whether a calendar day lies between start and end inclusive."""
        if self.start is None or self.end is None:
            return False
        day = value.date() if isinstance(value, datetime) else value
        return self.start.date() <= day <= self.end.date()

    def with_end(self, end: Optional[datetime]) -> DateRange:
        return replace(self, end=end)


@dataclass(frozen=True)
class CalendarDay:
    """One cell of the month grid.

    Mode-specific flags stay None when they do not apply to the configured
    selection mode: ``is_selected`` in range mode, and the range and preview
    flags in single mode.
    """

    date: date
    is_today: bool
    is_current_month: bool
    is_previous_month: bool
    is_next_month: bool
    is_weekday: bool
    is_weekend: bool
    is_selected: Optional[bool] = None
    is_selected_range: Optional[bool] = None
    is_selected_range_start: Optional[bool] = None
    is_selected_range_end: Optional[bool] = None
    is_previewed_range: Optional[bool] = None
    is_previewed_range_start: Optional[bool] = None
    is_previewed_range_end: Optional[bool] = None
    props_factory: Optional[Callable[[], DateProps]] = field(
        default=None, compare=False, repr=False
    )

    def get_date_props(self) -> DateProps:
        """Build the interaction handler bundle for this day."""
        if self.props_factory is None:
            raise RuntimeError(f"No interaction binder attached to {self.date}")
        return self.props_factory()


@dataclass(frozen=True)
class WeekdayName:
    """Weekday header entry.

    Attributes:
        index: Column position, 0 for the configured first day of the week
        day_of_week: Weekday number in 0=Sunday numbering
    """

    index: int
    day_of_week: int
    long: str
    short: str
    narrow: str


@dataclass(frozen=True)
class MonthName:
    """Month table entry; ``index`` is the 1-based month number."""

    index: int
    long: str
    short: str
    narrow: str
    numeric: str
    two_digit: str
