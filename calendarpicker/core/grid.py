"""Month grid generation.

Produces the ordered run of calendar days covering one or more visible months,
padded with days of the neighbouring months so the grid starts on the
configured week start and ends on a completed week.
"""

import logging
from collections.abc import Iterator
from datetime import date, datetime
from typing import Callable, Optional

from .dates import (
    WEEKDAY_INDICES,
    WEEKEND_INDICES,
    add_days,
    add_months,
    day_of_week,
    month_key,
)
from .dynamic import Clock
from .models import CalendarDay, CalendarWindow, SelectionMode
from .selection import SelectionState

logger = logging.getLogger(__name__)

PropsFactoryBuilder = Callable[[date, CalendarWindow], Callable[[], object]]


def grid_bounds(
    window: CalendarWindow, months_visible: int, week_start_index: int
) -> tuple[date, date]:
    """Return the first grid day and the exclusive end of the grid.

    The first day is the latest ``week_start_index`` day on or before the
    anchor. The grid keeps going until it reaches the anchor shifted by
    ``months_visible`` months and is back on ``week_start_index``, so it can
    run past that month boundary to finish the trailing week.
    """
    anchor = window.anchor
    final_month_anchor = add_months(anchor, months_visible)

    first = add_days(anchor, -((day_of_week(anchor) - week_start_index) % 7))
    stop = add_days(
        final_month_anchor, (week_start_index - day_of_week(final_month_anchor)) % 7
    )
    return first, stop


class MonthGrid:
    """Lazy, restartable sequence of ``CalendarDay`` values for a window.

    Each iteration walks the grid again from the current inputs, so two
    passes over the same grid yield equal days. Selection and preview flags
    come from ``SelectionState.day_flags``.

    Example:
        >>> grid = MonthGrid(CalendarWindow(2024, 2), months_visible=1, week_start_index=0)
        >>> days = list(grid)
        >>> days[0].date, days[-1].date
        (datetime.date(2024, 1, 28), datetime.date(2024, 3, 2))
    """

    def __init__(
        self,
        window: CalendarWindow,
        months_visible: int = 1,
        week_start_index: int = 0,
        selection: Optional[SelectionState] = None,
        clock: Clock = datetime.now,
        props_builder: Optional[PropsFactoryBuilder] = None,
    ) -> None:
        self.window = window
        self.months_visible = max(1, int(months_visible))
        self.week_start_index = int(week_start_index) % 7
        self.selection = selection or SelectionState(mode=SelectionMode.SINGLE)
        self._clock = clock
        self._props_builder = props_builder

    @property
    def bounds(self) -> tuple[date, date]:
        return grid_bounds(self.window, self.months_visible, self.week_start_index)

    def __iter__(self) -> Iterator[CalendarDay]:
        first, stop = self.bounds
        today = self._clock().date()
        anchor = self.window.anchor
        previous_month = month_key(add_months(anchor, -1))
        next_month = month_key(add_months(anchor, 1))

        current = first
        while current < stop:
            yield self._build_day(current, today, previous_month, next_month)
            current = add_days(current, 1)

    def __len__(self) -> int:
        first, stop = self.bounds
        return (stop - first).days

    def weeks(self) -> list[list[CalendarDay]]:
        """Group the grid into rows of seven days."""
        days = list(self)
        return [days[i : i + 7] for i in range(0, len(days), 7)]

    def _build_day(
        self,
        current: date,
        today: date,
        previous_month: tuple[int, int],
        next_month: tuple[int, int],
    ) -> CalendarDay:
        weekday = day_of_week(current)
        key = month_key(current)
        props_factory = None
        if self._props_builder is not None:
            props_factory = self._props_builder(current, self.window)

        return CalendarDay(
            date=current,
            is_today=current == today,
            is_current_month=self.window.contains(current),
            is_previous_month=key == previous_month,
            is_next_month=key == next_month,
            is_weekday=weekday in WEEKDAY_INDICES,
            is_weekend=weekday in WEEKEND_INDICES,
            props_factory=props_factory,
            **self.selection.day_flags(current),
        )

    def __repr__(self) -> str:
        return (
            f"MonthGrid(window={self.window}, months_visible={self.months_visible}, "
            f"week_start_index={self.week_start_index})"
        )
