"""Calendar window and focus navigation for the date picker."""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from ..core.dates import (
    MAX_WINDOW_YEAR,
    MIN_WINDOW_YEAR,
    DateLike,
    add_days,
    add_months,
    add_years,
    as_date,
    month_key,
    normalize_month,
)
from ..core.dynamic import Clock
from ..core.models import CalendarWindow, SelectionMode
from ..core.selection import SelectionMachine

logger = logging.getLogger(__name__)

WindowTarget = Union[date, datetime, int, str]


def truncate_year(year: Union[int, str]) -> Optional[int]:
    """Parse a year, keeping only the first four digits of longer numerals.

    Returns None when the value is not a usable year.
    """
    digits = str(year).strip()[:4]
    if not digits.isdigit():
        return None
    value = int(digits)
    if value < 1:
        return None
    return value


class NavigationController:
    """Owns the visible calendar window and the focused date.

    Month and year commands move the window and clear focus.
    ``jump_to_today`` and explicit focus targets are the only operations that
    set focus. Selected-date commands (``select_next_day`` and friends) move
    the single-mode selection itself and then drop focus.
    """

    def __init__(
        self,
        selection: SelectionMachine,
        initial_month: Optional[DateLike] = None,
        clock: Clock = datetime.now,
    ):
        """Initialize navigation state.

        Args:
            selection: Selection machine used for previews and selected-date moves
            initial_month: Any date inside the month to display, defaults to today
            clock: Source of the current instant
        """
        self._selection = selection
        self._clock = clock
        self._window = CalendarWindow.from_date(initial_month or clock())
        self._focused_date: Optional[date] = None
        self._change_callbacks: List[Callable[[CalendarWindow], None]] = []
        self._focus_callbacks: List[Callable[[date], None]] = []

        logger.debug(f"Navigation initialized with window: {self._window}")

    @property
    def window(self) -> CalendarWindow:
        """Get the current anchor month."""
        return self._window

    @property
    def focused_date(self) -> Optional[date]:
        """Get the date that should receive input focus next."""
        return self._focused_date

    @property
    def month(self) -> int:
        return self._window.month

    @property
    def year(self) -> int:
        return self._window.year

    # Window commands

    def set_window(self, target: WindowTarget) -> CalendarWindow:
        """Move the window to the month of a date, or to a bare month number.

        A bare month number (int or numeral string) keeps the current year and
        rolls into the neighbouring year when outside 1..12.

        Args:
            target: Date inside the target month, or a 1-based month number

        Returns:
            The new window, unchanged when the target is invalid or outside
            the navigable years
        """
        new_window = self._window_for(target)
        if new_window is not None:
            self._apply_window(new_window)
        return self._window

    def set_month(self, target: WindowTarget) -> CalendarWindow:
        """Show another month and drop focus; accepts what ``set_window`` does."""
        new_window = self._window_for(target)
        if new_window is None:
            return self._window
        self._apply_window(new_window)
        self._set_focus(None)
        return self._window

    def previous_month(self) -> CalendarWindow:
        return self._shift_window(lambda anchor: add_months(anchor, -1))

    def next_month(self) -> CalendarWindow:
        return self._shift_window(lambda anchor: add_months(anchor, 1))

    def set_year(self, year: Union[int, str]) -> CalendarWindow:
        """Move the window to another year, keeping the month.

        Numerals longer than four digits are cut to their first four.
        """
        new_year = truncate_year(year)
        if new_year is None:
            logger.warning(f"Ignoring invalid year value: {year!r}")
            return self._window
        if str(year).strip() != str(new_year):
            logger.debug(f"Truncated year {year!r} to {new_year}")
        return self._shift_window(lambda anchor: anchor.replace(year=new_year))

    def previous_year(self) -> CalendarWindow:
        return self._shift_window(lambda anchor: add_years(anchor, -1))

    def next_year(self) -> CalendarWindow:
        return self._shift_window(lambda anchor: add_years(anchor, 1))

    def jump_to_today(self) -> date:
        """Show the current month and focus today.

        Returns:
            Today's date
        """
        today = self._clock().date()
        self.set_window(today)
        self.focus_date(today)
        return today

    # Focus commands

    def focus_date(self, target: Optional[DateLike], preview: bool = True) -> Optional[date]:
        """Focus a specific day, following it into its month.

        In range mode the newly focused day also drives the hover preview,
        unless ``preview`` is False (focus that follows a pick).

        Args:
            target: Day to focus, or None to drop focus
            preview: Whether to run the range hover preview for the day

        Returns:
            The focused date
        """
        focused = as_date(target) if target is not None else None
        self._set_focus(focused)

        if focused is None:
            return None

        if preview and self._selection.mode is SelectionMode.RANGE:
            self._selection.hover(focused)

        if month_key(focused) != (self._window.year, self._window.month):
            self.set_window(focused)

        return focused

    def receive_focus(self, target: DateLike) -> bool:
        """Record that a day gained focus from the host.

        Returns:
            True when the focused date changed
        """
        focused = as_date(target)
        if self._focused_date == focused:
            return False
        self._set_focus(focused)
        return True

    def move_focus(self, delta: int, origin: Optional[DateLike] = None) -> Optional[date]:
        """Move focus by a number of days.

        Args:
            delta: Days to move (negative moves backwards)
            origin: Day to move from, defaults to the focused date

        Returns:
            The new focused date, or None when there is nothing to move from
        """
        base = as_date(origin) if origin is not None else self._focused_date
        if base is None:
            logger.debug("move_focus ignored: no focused date")
            return None
        try:
            target = add_days(base, delta)
        except OverflowError as e:
            logger.warning(f"Ignoring focus move from {base}: {e}")
            return self._focused_date
        return self.focus_date(target)

    # Selected-date commands

    def select_previous_day(self) -> Optional[datetime]:
        return self._shift_selection(lambda value: add_days(value, -1))

    def select_next_day(self) -> Optional[datetime]:
        return self._shift_selection(lambda value: add_days(value, 1))

    def select_previous_month(self) -> Optional[datetime]:
        return self._shift_selection(lambda value: add_months(value, -1))

    def select_next_month(self) -> Optional[datetime]:
        return self._shift_selection(lambda value: add_months(value, 1))

    def select_previous_year(self) -> Optional[datetime]:
        return self._shift_selection(lambda value: add_years(value, -1))

    def select_next_year(self) -> Optional[datetime]:
        return self._shift_selection(lambda value: add_years(value, 1))

    def _shift_selection(self, shift: Callable[[datetime], datetime]) -> Optional[datetime]:
        if self._selection.mode is not SelectionMode.SINGLE:
            return None
        current = self._selection.value
        if not isinstance(current, datetime):
            return None

        try:
            new_value = shift(current)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Ignoring selection move from {current}: {e}")
            return None
        self._selection.pick(new_value)
        self.focus_date(new_value)
        self._set_focus(None)

        logger.debug(f"Moved selection: {current} -> {new_value}")
        return new_value

    # Internals

    def _window_for(self, target: WindowTarget) -> Optional[CalendarWindow]:
        if isinstance(target, (date, datetime)):
            new_window = CalendarWindow.from_date(target)
        else:
            try:
                month = int(target)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid month value: {target!r}")
                return None
            new_window = CalendarWindow(*normalize_month(self._window.year, month))

        if not MIN_WINDOW_YEAR <= new_window.year <= MAX_WINDOW_YEAR:
            logger.warning(
                f"Ignoring window {new_window} outside years {MIN_WINDOW_YEAR}..{MAX_WINDOW_YEAR}"
            )
            return None
        return new_window

    def _shift_window(self, shift: Callable[[date], date]) -> CalendarWindow:
        try:
            target = shift(self._window.anchor)
        except (ValueError, OverflowError) as e:
            logger.warning(f"Ignoring window move from {self._window}: {e}")
            return self._window

        new_window = self._window_for(target)
        if new_window is None:
            return self._window
        self._apply_window(new_window)
        self._set_focus(None)
        return self._window

    def _apply_window(self, new_window: CalendarWindow) -> None:
        if new_window == self._window:
            return
        old_window = self._window
        self._window = new_window
        logger.debug(f"Window changed: {old_window} -> {new_window}")
        for callback in self._change_callbacks:
            try:
                callback(new_window)
            except Exception as e:
                logger.error(f"Error in window change callback: {e}")

    def _set_focus(self, focused: Optional[date]) -> None:
        self._focused_date = focused
        if focused is None:
            return
        for callback in self._focus_callbacks:
            try:
                callback(focused)
            except Exception as e:
                logger.error(f"Error in focus callback: {e}")

    def add_change_callback(self, callback: Callable[[CalendarWindow], None]) -> None:
        """Add a callback to be called when the window changes.

        Args:
            callback: Function to call with the new window
        """
        self._change_callbacks.append(callback)
        logger.debug("Added window change callback")

    def remove_change_callback(self, callback: Callable[[CalendarWindow], None]) -> None:
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)
            logger.debug("Removed window change callback")

    def add_focus_callback(self, callback: Callable[[date], None]) -> None:
        """Add a focus target; it is called with each newly focused date."""
        self._focus_callbacks.append(callback)

    def remove_focus_callback(self, callback: Callable[[date], None]) -> None:
        if callback in self._focus_callbacks:
            self._focus_callbacks.remove(callback)

    def __str__(self) -> str:
        return f"NavigationController(window={self._window}, focused={self._focused_date})"

    def __repr__(self) -> str:
        return (
            f"NavigationController(window={self._window!r}, "
            f"focused_date={self._focused_date!r}, mode={self._selection.mode.value!r})"
        )
