"""Date picker engine.

``DatePicker`` wires one configuration to a selection machine, a navigation
controller and an interaction binder, and exposes the derived views a UI
renders from: weekday and month tables, the visible calendar window with its
day grid, the current value and the handler bundles.

Example:
    >>> picker = DatePicker(type="range", default_calendar_month=date(2024, 3, 1))
    >>> picker.pick(date(2024, 3, 10))
    >>> picker.pick(date(2024, 3, 5))
    >>> picker.value.start, picker.value.end
    (datetime.datetime(2024, 3, 5, 0, 0), datetime.datetime(2024, 3, 10, 23, 59, 59, 999000))
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional, Union

from .core.dates import add_days, day_of_week
from .core.dynamic import Clock
from .core.grid import MonthGrid
from .core.models import CalendarDay, DateRange, MonthName, SelectionMode, WeekdayName
from .core.selection import ExternalCommit, InternalCommit, SelectionMachine, SelectionValue
from .i18n.formatter import CalendarLocaleFormatter, LocaleFormatter
from .settings.models import PickerConfig
from .ui.interaction import CalendarProps, DateProps, InputProps, InteractionBinder
from .ui.navigation import NavigationController

logger = logging.getLogger(__name__)

# A known Sunday; weekday tables are built from the week starting here
_REFERENCE_SUNDAY = date(2000, 1, 2)


@dataclass(frozen=True)
class CalendarView:
    """Visible calendar: anchor month, year and the day grid."""

    month: int
    year: int
    dates: MonthGrid


@dataclass(frozen=True)
class PickerMethods:
    """Navigation and selection commands bound to one picker."""

    set_calendar_month: Callable[[Any], Any]
    set_previous_calendar_month: Callable[[], Any]
    set_next_calendar_month: Callable[[], Any]
    set_calendar_year: Callable[[Union[int, str]], Any]
    set_previous_calendar_year: Callable[[], Any]
    set_next_calendar_year: Callable[[], Any]
    set_calendar_today: Callable[[], Any]
    select_previous_date: Callable[[], Any]
    select_next_date: Callable[[], Any]
    select_previous_month: Callable[[], Any]
    select_next_month: Callable[[], Any]
    select_previous_year: Callable[[], Any]
    select_next_year: Callable[[], Any]
    clear_selected_range: Callable[[], Any]


class DatePicker:
    """State and behaviour core of a calendar date picker."""

    def __init__(
        self,
        config: Optional[PickerConfig] = None,
        *,
        formatter: Optional[LocaleFormatter] = None,
        clock: Clock = datetime.now,
        focus_target: Optional[Callable[[date], None]] = None,
        **options: Any,
    ) -> None:
        """Initialize the picker.

        Args:
            config: Picker configuration; built from ``options`` when omitted
            formatter: Locale formatting service, defaults to CalendarLocaleFormatter
            clock: Source of the current instant (today, dynamic values)
            focus_target: Called with each date that should receive UI focus
            **options: PickerConfig fields, used when ``config`` is omitted

        Raises:
            PickerConfigError: If the configuration is invalid
            ValueError: If both ``config`` and ``options`` are given
        """
        if config is not None and options:
            raise ValueError("Pass either a PickerConfig or keyword options, not both")
        self.config = config if config is not None else PickerConfig(**options)
        self.formatter = formatter or CalendarLocaleFormatter(self.config.locale)
        self._clock = clock

        commit = (
            ExternalCommit(self.config.on_value_change)
            if self.config.is_controlled
            else InternalCommit()
        )
        self.selection = SelectionMachine(
            self.config.type, self.config.initial_value, commit=commit, clock=clock
        )

        initial_month = (
            self.config.default_calendar_month
            if "default_calendar_month" in self.config.model_fields_set
            else clock()
        )
        self.navigation = NavigationController(self.selection, initial_month, clock=clock)
        self.binder = InteractionBinder(self.selection, self.navigation, self.formatter)

        if focus_target is not None:
            self.navigation.add_focus_callback(focus_target)

        logger.debug(
            f"DatePicker created: type={self.config.type.value}, window={self.navigation.window}, "
            f"months_visible={self.config.months_visible}, "
            f"week_start_index={self.config.week_start_index}"
        )

    # Configuration-derived tables

    @property
    def mode(self) -> SelectionMode:
        return self.config.type

    @property
    def days(self) -> list[WeekdayName]:
        """Weekday header names in display order, starting at the week start."""
        first = add_days(_REFERENCE_SUNDAY, self.config.week_start_index)
        names = []
        for offset in range(7):
            current = add_days(first, offset)
            names.append(
                WeekdayName(
                    index=offset,
                    day_of_week=day_of_week(current),
                    long=self.formatter.format(current, "weekday", "long"),
                    short=self.formatter.format(current, "weekday", "short"),
                    narrow=self.formatter.format(current, "weekday", "narrow"),
                )
            )
        return names

    @property
    def months(self) -> list[MonthName]:
        """Month names for all twelve months."""
        names = []
        for month in range(1, 13):
            current = date(2000, month, 1)
            names.append(
                MonthName(
                    index=month,
                    long=self.formatter.format(current, "month", "long"),
                    short=self.formatter.format(current, "month", "short"),
                    narrow=self.formatter.format(current, "month", "narrow"),
                    numeric=self.formatter.format(current, "month", "numeric"),
                    two_digit=self.formatter.format(current, "month", "2-digit"),
                )
            )
        return names

    # Current state

    @property
    def calendar(self) -> CalendarView:
        """Visible window and its day grid, derived from the current state."""
        window = self.navigation.window
        grid = MonthGrid(
            window,
            months_visible=self.config.months_visible,
            week_start_index=self.config.week_start_index,
            selection=self.selection.state,
            clock=self._clock,
            props_builder=self.binder.props_factory,
        )
        return CalendarView(month=window.month, year=window.year, dates=grid)

    @property
    def value(self) -> Union[datetime, DateRange, None]:
        """Current selection with dynamic tokens resolved now."""
        return self.selection.value

    @property
    def raw_value(self) -> SelectionValue:
        return self.selection.raw_value

    @property
    def preview(self) -> DateRange:
        return self.selection.preview

    @property
    def focused_date(self) -> Optional[date]:
        return self.navigation.focused_date

    # Commands

    def pick(self, day: Union[date, datetime]) -> None:
        """Pick a day as if its cell was clicked."""
        self.binder.pick(day)

    def select_value(self, value: SelectionValue) -> None:
        """Replace the value with a date, range or dynamic token."""
        self.selection.select_value(value)

    def clear_selected_range(self) -> None:
        self.selection.clear()

    def update_value(self, value: SelectionValue) -> None:
        """Feed the externally owned value back in controlled mode."""
        if not self.selection.is_controlled:
            logger.debug("update_value ignored: picker is not controlled")
            return
        self.selection.set_controlled_value(value)

    @property
    def methods(self) -> PickerMethods:
        nav = self.navigation
        return PickerMethods(
            set_calendar_month=nav.set_month,
            set_previous_calendar_month=nav.previous_month,
            set_next_calendar_month=nav.next_month,
            set_calendar_year=nav.set_year,
            set_previous_calendar_year=nav.previous_year,
            set_next_calendar_year=nav.next_year,
            set_calendar_today=nav.jump_to_today,
            select_previous_date=nav.select_previous_day,
            select_next_date=nav.select_next_day,
            select_previous_month=nav.select_previous_month,
            select_next_month=nav.select_next_month,
            select_previous_year=nav.select_previous_year,
            select_next_year=nav.select_next_year,
            clear_selected_range=self.clear_selected_range,
        )

    # Handler bundles

    def get_date_props(self, day: Union[CalendarDay, date]) -> DateProps:
        target = day.date if isinstance(day, CalendarDay) else day
        return self.binder.date_props(target, self.navigation.window)

    def get_calendar_props(self) -> CalendarProps:
        return self.binder.calendar_props()

    def get_input_props(self) -> InputProps:
        return self.binder.input_props()

    def __repr__(self) -> str:
        return (
            f"DatePicker(type={self.config.type.value!r}, window={self.navigation.window}, "
            f"value={self.selection.raw_value!r}, focused_date={self.navigation.focused_date!r})"
        )
