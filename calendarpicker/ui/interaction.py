"""Per-day, grid-container and input-box interaction handler bundles.

The binder turns host events (click, focus, key presses, pointer enter and
leave) into calls on the selection machine and the navigation controller.
Handlers are plain callables, so any UI layer can wire them to its widgets.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..core.models import CalendarWindow, SelectionMode
from ..core.selection import SelectionMachine
from ..i18n.formatter import LocaleFormatter
from .keyboard import ARROW_DELTAS, KeyCode, PressedKeys, parse_key
from .navigation import NavigationController

logger = logging.getLogger(__name__)

KeyHandler = Callable[[str], None]


@dataclass(frozen=True)
class DateProps:
    """Handlers and attributes for one day cell.

    Attributes:
        key: Stable identifier of the day (ISO date)
        tab_index: -1 when the day lies outside the anchor month, else None
        on_click: Picks the day
        on_focus: Records the day as focused
        on_key_down: Moves focus by arrow key, called with the key name
        on_mouse_enter: Previews a range up to the day; None in single mode
    """

    key: str
    tab_index: Optional[int]
    on_click: Callable[[], None]
    on_focus: Callable[[], None]
    on_key_down: KeyHandler
    on_mouse_enter: Optional[Callable[[], None]] = None


@dataclass(frozen=True)
class CalendarProps:
    """Handlers for the grid container; ``on_mouse_leave`` only in range mode."""

    on_mouse_leave: Optional[Callable[[], None]] = None


@dataclass(frozen=True)
class InputProps:
    """Display value and key handlers for the companion text input."""

    value: str
    on_change: Callable[[str], None]
    on_key_down: KeyHandler
    on_key_up: KeyHandler


class InteractionBinder:
    """Builds handler bundles bound to one picker's state."""

    def __init__(
        self,
        selection: SelectionMachine,
        navigation: NavigationController,
        formatter: LocaleFormatter,
    ) -> None:
        self._selection = selection
        self._navigation = navigation
        self._formatter = formatter
        self._pressed = PressedKeys()

    @property
    def pressed_keys(self) -> PressedKeys:
        return self._pressed

    def pick(self, day: date) -> None:
        """Pick a day and move focus onto it without re-previewing it."""
        self._selection.pick(day)
        self._navigation.focus_date(day, preview=False)

    def date_props(self, day: date, window: CalendarWindow) -> DateProps:
        """Build the handler bundle for one grid day.

        Args:
            day: The grid day
            window: Anchor month the grid was generated for

        Returns:
            DateProps for the day
        """

        def on_key_down(key_name: str) -> None:
            delta = ARROW_DELTAS.get(parse_key(key_name))
            if delta is None:
                return
            self._navigation.move_focus(delta, origin=day)

        on_mouse_enter = None
        if self._selection.mode is SelectionMode.RANGE:

            def on_mouse_enter() -> None:
                self._selection.hover(day)

        return DateProps(
            key=day.isoformat(),
            tab_index=None if window.contains(day) else -1,
            on_click=lambda: self.pick(day),
            on_focus=lambda: self._navigation.receive_focus(day),
            on_key_down=on_key_down,
            on_mouse_enter=on_mouse_enter,
        )

    def props_factory(self, day: date, window: CalendarWindow) -> Callable[[], DateProps]:
        """Defer building a day's bundle until the caller asks for it."""
        return lambda: self.date_props(day, window)

    def calendar_props(self) -> CalendarProps:
        if self._selection.mode is not SelectionMode.RANGE:
            return CalendarProps()
        return CalendarProps(on_mouse_leave=self._selection.pointer_leave)

    def input_value(self) -> str:
        value = self._selection.value
        if isinstance(value, datetime):
            return self._formatter.format_date(value)
        return ""

    def input_props(self) -> InputProps:
        """Build the bundle for the text input.

        The input is display-only: change events are ignored. Up and Down move
        the selected date by a day, by a month with Shift held, and by a year
        with Shift and Alt held.
        """
        return InputProps(
            value=self.input_value(),
            on_change=self._ignore_change,
            on_key_down=self._input_key_down,
            on_key_up=self._pressed.release,
        )

    def _ignore_change(self, _text: str) -> None:
        logger.debug("Ignoring free-text edit of picker input")

    def _input_key_down(self, key_name: str) -> None:
        self._pressed.press(key_name)

        key = parse_key(key_name)
        if key not in (KeyCode.UP_ARROW, KeyCode.DOWN_ARROW):
            return
        if self._selection.value is None:
            return

        nav = self._navigation
        if self._pressed.shift and self._pressed.alt:
            step = (nav.select_next_year, nav.select_previous_year)
        elif self._pressed.shift:
            step = (nav.select_next_month, nav.select_previous_month)
        else:
            step = (nav.select_next_day, nav.select_previous_day)

        forward, backward = step
        if key is KeyCode.UP_ARROW:
            forward()
        else:
            backward()
