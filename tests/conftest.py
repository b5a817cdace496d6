"""Shared fixtures for calendarpicker tests."""

from datetime import date, datetime
from typing import Any, Callable

import pytest

from calendarpicker.core.models import SelectionMode
from calendarpicker.core.selection import SelectionMachine
from calendarpicker.engine import DatePicker
from calendarpicker.i18n.formatter import CalendarLocaleFormatter
from calendarpicker.ui.navigation import NavigationController

FIXED_NOW = datetime(2024, 2, 14, 10, 30, 0)


class MutableClock:
    """Clock stub whose current instant can be moved by tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def clock() -> MutableClock:
    """Clock frozen at Wednesday 2024-02-14 10:30."""
    return MutableClock(FIXED_NOW)


@pytest.fixture
def formatter() -> CalendarLocaleFormatter:
    return CalendarLocaleFormatter("default")


@pytest.fixture
def single_selection(clock: MutableClock) -> SelectionMachine:
    return SelectionMachine(SelectionMode.SINGLE, clock=clock)


@pytest.fixture
def range_selection(clock: MutableClock) -> SelectionMachine:
    return SelectionMachine(SelectionMode.RANGE, clock=clock)


@pytest.fixture
def single_navigation(single_selection: SelectionMachine, clock: MutableClock) -> NavigationController:
    return NavigationController(single_selection, date(2024, 1, 15), clock=clock)


@pytest.fixture
def range_navigation(range_selection: SelectionMachine, clock: MutableClock) -> NavigationController:
    return NavigationController(range_selection, date(2024, 3, 1), clock=clock)


@pytest.fixture
def make_picker(clock: MutableClock) -> Callable[..., DatePicker]:
    """Factory for pickers bound to the frozen clock."""

    def _make(**options: Any) -> DatePicker:
        options.setdefault("default_calendar_month", date(2024, 2, 1))
        focus_target = options.pop("focus_target", None)
        return DatePicker(clock=clock, focus_target=focus_target, **options)

    return _make
