"""
calendarpicker - state and behaviour core of a calendar date picker.

Computes the visible month grid, tracks single-date or range selection with a
hover preview, and derives keyboard and pointer handlers for day cells and a
companion text input. Rendering is left to the host UI.
"""

from .core.dynamic import DynamicDate, DynamicDateRange
from .core.models import CalendarDay, CalendarWindow, DateRange, SelectionMode, SelectionPhase
from .engine import CalendarView, DatePicker, PickerMethods
from .settings import PickerConfig, PickerConfigError, PickerError, PickerSettings, load_settings

__version__ = "1.0.0"

__all__ = [
    "CalendarDay",
    "CalendarView",
    "CalendarWindow",
    "DatePicker",
    "DateRange",
    "DynamicDate",
    "DynamicDateRange",
    "PickerConfig",
    "PickerConfigError",
    "PickerError",
    "PickerMethods",
    "PickerSettings",
    "SelectionMode",
    "SelectionPhase",
    "load_settings",
]
