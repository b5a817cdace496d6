"""Selection state machine for single-date and date-range picking.

The machine is split in two layers:

* ``transition(state, event)`` is a pure function from a ``SelectionState``
  and an event to the next state. It encodes every pick, hover-preview,
  pointer-leave and clear rule and can be tested without any engine.
* ``SelectionMachine`` owns the stored value and preview for one picker.
  It resolves dynamic tokens on every read, runs ``transition`` and hands
  value changes to a commit strategy. The strategy either stores the value
  (uncontrolled) or forwards it to an external owner (controlled).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, Optional, Union

from .dates import DateLike, as_datetime, end_of_day, same_day, start_of_day
from .dynamic import Clock, resolve_value
from .models import DateRange, SelectionMode, SelectionPhase

logger = logging.getLogger(__name__)

SelectionValue = Union[datetime, DateRange, str, None]
ValueChangeCallback = Callable[[SelectionValue], None]

EMPTY_PREVIEW = DateRange()


# Events


@dataclass(frozen=True)
class Pick:
    """User picked a day (click or keyboard confirm)."""

    date: DateLike


@dataclass(frozen=True)
class Hover:
    """Pointer or focus moved onto a day."""

    date: DateLike


@dataclass(frozen=True)
class PointerLeave:
    """Pointer left the grid container."""


@dataclass(frozen=True)
class Clear:
    """Drop the selection and preview."""


@dataclass(frozen=True)
class Replace:
    """Replace the value wholesale with a date, range or dynamic token."""

    value: SelectionValue


SelectionEvent = Union[Pick, Hover, PointerLeave, Clear, Replace]


@dataclass(frozen=True)
class SelectionState:
    """Resolved selection value plus the transient preview range."""

    mode: SelectionMode
    value: SelectionValue = None
    preview: DateRange = EMPTY_PREVIEW

    @property
    def phase(self) -> SelectionPhase:
        if self.mode is SelectionMode.SINGLE:
            return SelectionPhase.SINGLE_SET if self.value is not None else SelectionPhase.EMPTY
        if not isinstance(self.value, DateRange) or self.value.start is None:
            return SelectionPhase.EMPTY
        if self.value.end is None:
            return SelectionPhase.RANGE_START_ONLY
        return SelectionPhase.RANGE_COMPLETE

    @property
    def selected_range(self) -> Optional[DateRange]:
        return self.value if isinstance(self.value, DateRange) else None

    def day_flags(self, day: DateLike) -> dict[str, bool]:
        """Selection and preview flags for one grid day.

        The grid takes its flags from here so the grid and the selection
        never disagree.
        """
        if self.mode is SelectionMode.SINGLE:
            selected = self.value if isinstance(self.value, datetime) else None
            return {"is_selected": same_day(day, selected)}

        selection = self.selected_range or EMPTY_PREVIEW
        preview = self.preview
        return {
            "is_selected_range": selection.contains(day),
            "is_selected_range_start": same_day(day, selection.start),
            "is_selected_range_end": same_day(day, selection.end),
            "is_previewed_range": preview.contains(day),
            "is_previewed_range_start": same_day(day, preview.start),
            "is_previewed_range_end": same_day(day, preview.end),
        }


def _pick_range(state: SelectionState, picked: datetime) -> SelectionState:
    current = state.selected_range or EMPTY_PREVIEW
    phase = state.phase

    if phase is SelectionPhase.EMPTY:
        return replace(state, value=DateRange(start=start_of_day(picked)))

    if phase is SelectionPhase.RANGE_START_ONLY:
        start = current.start
        assert start is not None
        if picked <= start:
            completed = DateRange(start=start_of_day(picked), end=end_of_day(start))
        else:
            completed = DateRange(start=start, end=end_of_day(picked))
        return replace(state, value=completed, preview=EMPTY_PREVIEW)

    # Complete range: start over from the picked day
    return replace(state, value=DateRange(start=start_of_day(picked)), preview=EMPTY_PREVIEW)


def _preview(state: SelectionState, hovered: datetime) -> SelectionState:
    if state.mode is not SelectionMode.RANGE:
        return state
    if state.phase is not SelectionPhase.RANGE_START_ONLY:
        return state

    start = state.selected_range.start  # type: ignore[union-attr]
    assert start is not None
    if hovered <= start:
        preview = DateRange(start=hovered, end=start)
    else:
        preview = DateRange(start=start, end=hovered)
    return replace(state, preview=preview)


def transition(state: SelectionState, event: SelectionEvent) -> SelectionState:
    """Compute the next selection state for an event.

    Events that do not apply to the current mode or phase return ``state``
    unchanged.

    Args:
        state: Current resolved selection state
        event: Event to apply

    Returns:
        The next selection state
    """
    if isinstance(event, Pick):
        picked = as_datetime(event.date)
        if state.mode is SelectionMode.SINGLE:
            return replace(state, value=picked)
        return _pick_range(state, picked)

    if isinstance(event, Hover):
        return _preview(state, as_datetime(event.date))

    if isinstance(event, PointerLeave):
        if state.mode is not SelectionMode.RANGE:
            return state
        return replace(state, preview=EMPTY_PREVIEW)

    if isinstance(event, Clear):
        return replace(state, value=None, preview=EMPTY_PREVIEW)

    if isinstance(event, Replace):
        return _replace_value(state, event.value)

    logger.debug(f"Ignoring unknown selection event: {event!r}")
    return state


def _replace_value(state: SelectionState, value: SelectionValue) -> SelectionState:
    if value is None or isinstance(value, str):
        return replace(state, value=value)
    if state.mode is SelectionMode.SINGLE:
        if isinstance(value, DateRange):
            logger.debug("Ignoring range value in single selection mode")
            return state
        return replace(state, value=as_datetime(value))
    if not isinstance(value, DateRange):
        logger.debug("Ignoring bare date value in range selection mode")
        return state
    return replace(state, value=value)


# Commit strategies


class InternalCommit:
    """Uncontrolled mode: the machine stores committed values itself."""

    controlled = False

    def commit(self, machine: SelectionMachine, value: SelectionValue) -> bool:
        machine._stored_value = value
        return True


class ExternalCommit:
    """Controlled mode: committed values are proposed to an external owner.

    The owner is expected to feed the value back through
    ``SelectionMachine.set_controlled_value``.
    """

    controlled = True

    def __init__(self, on_value_change: Optional[ValueChangeCallback]) -> None:
        self.on_value_change = on_value_change

    def commit(self, machine: SelectionMachine, value: SelectionValue) -> bool:
        if not callable(self.on_value_change):
            logger.error(
                "calendarpicker: a controlled value was provided without an "
                "on_value_change handler; selection left unchanged"
            )
            return False
        self.on_value_change(value)
        return True


CommitStrategy = Union[InternalCommit, ExternalCommit]


class SelectionMachine:
    """Owns the selection value and preview range of one picker."""

    def __init__(
        self,
        mode: SelectionMode,
        initial_value: SelectionValue = None,
        commit: Optional[CommitStrategy] = None,
        clock: Clock = datetime.now,
    ) -> None:
        """Initialize the selection machine.

        Args:
            mode: Single date or range selection
            initial_value: Starting value; may be a dynamic token
            commit: Commit strategy, defaults to internal storage
            clock: Source of the current instant for dynamic values
        """
        self.mode = mode
        self._commit = commit or InternalCommit()
        self._clock = clock
        self._stored_value: SelectionValue = self._normalize(initial_value)
        self._preview: DateRange = EMPTY_PREVIEW
        self._change_callbacks: list[Callable[[SelectionState], None]] = []

        logger.debug(
            f"Selection machine initialized: mode={mode.value}, "
            f"controlled={self.is_controlled}, value={self._stored_value!r}"
        )

    def _normalize(self, value: SelectionValue) -> SelectionValue:
        if value is None or isinstance(value, str):
            return value
        return _replace_value(SelectionState(self.mode), value).value

    @property
    def is_controlled(self) -> bool:
        return self._commit.controlled

    @property
    def raw_value(self) -> SelectionValue:
        """Stored value as given, dynamic tokens unresolved."""
        return self._stored_value

    @property
    def value(self) -> Union[datetime, DateRange, None]:
        """Current value with dynamic tokens resolved against the clock now."""
        return resolve_value(self._stored_value, self.mode, self._clock)

    @property
    def preview(self) -> DateRange:
        return self._preview

    @property
    def state(self) -> SelectionState:
        return SelectionState(mode=self.mode, value=self.value, preview=self._preview)

    @property
    def phase(self) -> SelectionPhase:
        return self.state.phase

    def set_controlled_value(self, value: SelectionValue) -> None:
        """Accept the next value from the external owner in controlled mode."""
        self._stored_value = self._normalize(value)
        self._notify_change()

    def dispatch(self, event: SelectionEvent) -> SelectionState:
        """Apply an event and commit the resulting value change.

        In controlled mode without a change handler the whole transition is
        dropped and the state stays as it was.

        Returns:
            The state after the event
        """
        current = self.state
        proposed = transition(current, event)

        if proposed == current:
            logger.debug(f"Selection event {type(event).__name__} had no effect")
            return current

        if proposed.value != current.value or isinstance(event, (Clear, Replace)):
            if not self._commit.commit(self, proposed.value):
                return current

        self._preview = proposed.preview
        logger.debug(f"Selection {type(event).__name__}: {current.phase.name} -> {proposed.phase.name}")
        self._notify_change()
        return self.state

    def pick(self, value: DateLike) -> SelectionState:
        return self.dispatch(Pick(value))

    def hover(self, value: DateLike) -> SelectionState:
        return self.dispatch(Hover(value))

    def pointer_leave(self) -> SelectionState:
        return self.dispatch(PointerLeave())

    def clear(self) -> SelectionState:
        return self.dispatch(Clear())

    def select_value(self, value: SelectionValue) -> SelectionState:
        return self.dispatch(Replace(value))

    def add_change_callback(self, callback: Callable[[SelectionState], None]) -> None:
        self._change_callbacks.append(callback)

    def remove_change_callback(self, callback: Callable[[SelectionState], None]) -> None:
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)

    def _notify_change(self) -> None:
        state = self.state
        for callback in self._change_callbacks:
            try:
                callback(state)
            except Exception as e:
                logger.error(f"Error in selection change callback: {e}")

    def __repr__(self) -> str:
        return (
            f"SelectionMachine(mode={self.mode.value!r}, value={self._stored_value!r}, "
            f"preview={self._preview!r}, controlled={self.is_controlled})"
        )
