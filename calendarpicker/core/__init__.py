"""Date arithmetic, month grid and selection state machine."""

from .dynamic import DynamicDate, DynamicDateRange, resolve_value
from .grid import MonthGrid
from .models import (
    CalendarDay,
    CalendarWindow,
    DateRange,
    MonthName,
    SelectionMode,
    SelectionPhase,
    WeekdayName,
)
from .selection import SelectionMachine, SelectionState, transition

__all__ = [
    "CalendarDay",
    "CalendarWindow",
    "DateRange",
    "DynamicDate",
    "DynamicDateRange",
    "MonthGrid",
    "MonthName",
    "SelectionMachine",
    "SelectionMode",
    "SelectionPhase",
    "SelectionState",
    "WeekdayName",
    "resolve_value",
    "transition",
]
