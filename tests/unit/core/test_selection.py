"""Unit tests for calendarpicker.core.selection state machine."""

import logging
from datetime import date, datetime, time
from unittest.mock import Mock

import pytest

from calendarpicker.core.models import DateRange, SelectionMode, SelectionPhase
from calendarpicker.core.selection import (
    EMPTY_PREVIEW,
    Clear,
    ExternalCommit,
    Hover,
    Pick,
    PointerLeave,
    Replace,
    SelectionMachine,
    SelectionState,
    transition,
)

END_OF_DAY = time(23, 59, 59, 999000)


def _eod(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


class TestRangeTransitions:
    """Test the pure range-mode transition function."""

    def test_first_pick_sets_start_only(self):
        state = transition(SelectionState(SelectionMode.RANGE), Pick(datetime(2024, 3, 10, 14, 5)))

        assert state.value == DateRange(start=datetime(2024, 3, 10))
        assert state.phase is SelectionPhase.RANGE_START_ONLY

    def test_second_pick_after_start_completes_range(self):
        state = SelectionState(SelectionMode.RANGE, value=DateRange(start=datetime(2024, 3, 5)))
        state = transition(state, Pick(date(2024, 3, 10)))

        assert state.value == DateRange(start=datetime(2024, 3, 5), end=_eod(date(2024, 3, 10)))
        assert state.phase is SelectionPhase.RANGE_COMPLETE

    def test_second_pick_before_start_swaps(self):
        state = transition(SelectionState(SelectionMode.RANGE), Pick(date(2024, 3, 10)))
        state = transition(state, Pick(date(2024, 3, 5)))

        assert state.value.start == datetime(2024, 3, 5, 0, 0, 0, 0)
        assert state.value.end == datetime(2024, 3, 10, 23, 59, 59, 999000)

    def test_picking_start_day_again_selects_that_whole_day(self):
        state = SelectionState(SelectionMode.RANGE, value=DateRange(start=datetime(2024, 3, 5)))
        state = transition(state, Pick(date(2024, 3, 5)))

        assert state.value == DateRange(start=datetime(2024, 3, 5), end=_eod(date(2024, 3, 5)))

    def test_pick_after_complete_starts_over(self):
        state = SelectionState(
            SelectionMode.RANGE,
            value=DateRange(start=datetime(2024, 3, 5), end=_eod(date(2024, 3, 10))),
        )
        state = transition(state, Pick(date(2024, 4, 1)))

        assert state.value == DateRange(start=datetime(2024, 4, 1))
        assert state.phase is SelectionPhase.RANGE_START_ONLY

    def test_completing_pick_clears_preview(self):
        state = SelectionState(
            SelectionMode.RANGE,
            value=DateRange(start=datetime(2024, 3, 5)),
            preview=DateRange(start=datetime(2024, 3, 5), end=datetime(2024, 3, 8)),
        )
        assert transition(state, Pick(date(2024, 3, 8))).preview == EMPTY_PREVIEW

    @pytest.mark.parametrize(
        "first,second",
        [
            (date(2024, 3, 10), date(2024, 3, 5)),
            (date(2024, 3, 5), date(2024, 3, 10)),
            (date(2024, 12, 31), date(2024, 1, 1)),
            (date(2024, 2, 29), date(2024, 2, 29)),
        ],
    )
    def test_completed_ranges_are_ordered_and_snapped(self, first, second):
        state = transition(SelectionState(SelectionMode.RANGE), Pick(first))
        value = transition(state, Pick(second)).value

        assert value.start <= value.end
        assert value.start.time() == time(0, 0)
        assert value.end.time() == END_OF_DAY


class TestPreviewTransitions:
    """Test hover preview and pointer-leave rules."""

    def test_hover_after_start_previews_forward(self):
        state = SelectionState(SelectionMode.RANGE, value=DateRange(start=datetime(2024, 3, 5)))
        state = transition(state, Hover(date(2024, 3, 9)))

        assert state.preview == DateRange(start=datetime(2024, 3, 5), end=datetime(2024, 3, 9))

    def test_hover_before_start_orders_preview(self):
        state = SelectionState(SelectionMode.RANGE, value=DateRange(start=datetime(2024, 3, 5)))
        state = transition(state, Hover(date(2024, 3, 1)))

        assert state.preview == DateRange(start=datetime(2024, 3, 1), end=datetime(2024, 3, 5))

    def test_hover_after_complete_range_is_noop(self):
        state = SelectionState(
            SelectionMode.RANGE,
            value=DateRange(start=datetime(2024, 3, 5), end=_eod(date(2024, 3, 10))),
        )
        assert transition(state, Hover(date(2024, 3, 20))).preview == EMPTY_PREVIEW

    def test_hover_without_start_is_noop(self):
        state = SelectionState(SelectionMode.RANGE)
        assert transition(state, Hover(date(2024, 3, 20))) == state

    def test_hover_in_single_mode_is_noop(self):
        state = SelectionState(SelectionMode.SINGLE, value=datetime(2024, 3, 5))
        assert transition(state, Hover(date(2024, 3, 20))) == state

    def test_pointer_leave_clears_preview(self):
        state = SelectionState(
            SelectionMode.RANGE,
            value=DateRange(start=datetime(2024, 3, 5)),
            preview=DateRange(start=datetime(2024, 3, 5), end=datetime(2024, 3, 9)),
        )
        assert transition(state, PointerLeave()).preview == EMPTY_PREVIEW


class TestSingleAndClearTransitions:
    """Test single-mode picks, clear and wholesale replacement."""

    def test_single_pick_overwrites(self):
        state = SelectionState(SelectionMode.SINGLE, value=datetime(2024, 3, 5))
        state = transition(state, Pick(date(2024, 3, 9)))

        assert state.value == datetime(2024, 3, 9)
        assert state.phase is SelectionPhase.SINGLE_SET

    def test_clear_from_any_phase(self):
        state = SelectionState(
            SelectionMode.RANGE,
            value=DateRange(start=datetime(2024, 3, 5)),
            preview=DateRange(start=datetime(2024, 3, 5), end=datetime(2024, 3, 9)),
        )
        cleared = transition(state, Clear())

        assert cleared.value is None
        assert cleared.preview == EMPTY_PREVIEW
        assert cleared.phase is SelectionPhase.EMPTY

    def test_replace_with_range_in_single_mode_is_ignored(self):
        state = SelectionState(SelectionMode.SINGLE)
        assert transition(state, Replace(DateRange(start=datetime(2024, 3, 5)))) == state

    def test_replace_with_date_in_range_mode_is_ignored(self):
        state = SelectionState(SelectionMode.RANGE)
        assert transition(state, Replace(date(2024, 3, 5))) == state


class TestSelectionMachine:
    """Test the stateful machine and its commit strategies."""

    def test_range_pick_scenario(self, range_selection):
        range_selection.pick(date(2024, 3, 10))
        range_selection.pick(date(2024, 3, 5))

        assert range_selection.value == DateRange(
            start=datetime(2024, 3, 5), end=datetime(2024, 3, 10, 23, 59, 59, 999000)
        )
        assert range_selection.phase is SelectionPhase.RANGE_COMPLETE

    def test_hover_after_complete_leaves_preview_empty(self, range_selection):
        range_selection.pick(date(2024, 3, 10))
        range_selection.pick(date(2024, 3, 12))
        range_selection.hover(date(2024, 3, 20))

        assert range_selection.preview == EMPTY_PREVIEW

    def test_initial_date_value_is_promoted_to_datetime(self, clock):
        machine = SelectionMachine(SelectionMode.SINGLE, date(2024, 3, 5), clock=clock)
        assert machine.value == datetime(2024, 3, 5)

    def test_change_callbacks_receive_state(self, single_selection):
        callback = Mock()
        single_selection.add_change_callback(callback)
        single_selection.pick(date(2024, 3, 5))

        callback.assert_called_once()
        assert callback.call_args[0][0].value == datetime(2024, 3, 5)

    def test_failing_change_callback_is_logged(self, single_selection, caplog):
        single_selection.add_change_callback(Mock(side_effect=RuntimeError("boom")))

        with caplog.at_level(logging.ERROR, logger="calendarpicker.core.selection"):
            single_selection.pick(date(2024, 3, 5))

        assert single_selection.value == datetime(2024, 3, 5)
        assert "Error in selection change callback" in caplog.text

    def test_removed_callback_is_not_called(self, single_selection):
        callback = Mock()
        single_selection.add_change_callback(callback)
        single_selection.remove_change_callback(callback)
        single_selection.pick(date(2024, 3, 5))

        callback.assert_not_called()

    def test_dynamic_value_is_resolved_on_every_read(self, clock):
        machine = SelectionMachine(SelectionMode.SINGLE, "YESTERDAY", clock=clock)
        assert machine.value == datetime(2024, 2, 13)

        clock.now = datetime(2024, 2, 20, 8, 0)
        assert machine.value == datetime(2024, 2, 19)
        assert machine.raw_value == "YESTERDAY"

    def test_select_value_stores_dynamic_token(self, range_selection):
        range_selection.select_value("THIS_MONTH")

        assert range_selection.raw_value == "THIS_MONTH"
        assert range_selection.value.start == datetime(2024, 2, 1)


class TestControlledSelection:
    """Test controlled mode: values are proposed, not stored."""

    def test_transition_is_forwarded_to_owner(self, clock):
        on_change = Mock()
        machine = SelectionMachine(
            SelectionMode.RANGE, None, commit=ExternalCommit(on_change), clock=clock
        )
        machine.pick(date(2024, 3, 10))

        on_change.assert_called_once_with(DateRange(start=datetime(2024, 3, 10)))
        assert machine.value is None
        assert machine.is_controlled

    def test_owner_feedback_becomes_new_value(self, clock):
        machine = SelectionMachine(
            SelectionMode.RANGE,
            None,
            commit=ExternalCommit(lambda value: machine.set_controlled_value(value)),
            clock=clock,
        )
        machine.pick(date(2024, 3, 10))
        machine.pick(date(2024, 3, 5))

        assert machine.value == DateRange(
            start=datetime(2024, 3, 5), end=datetime(2024, 3, 10, 23, 59, 59, 999000)
        )

    def test_missing_change_handler_is_a_logged_usage_error(self, clock, caplog):
        machine = SelectionMachine(
            SelectionMode.SINGLE, datetime(2024, 3, 1), commit=ExternalCommit(None), clock=clock
        )

        with caplog.at_level(logging.ERROR, logger="calendarpicker.core.selection"):
            state = machine.pick(date(2024, 3, 9))

        assert state.value == datetime(2024, 3, 1)
        assert machine.value == datetime(2024, 3, 1)
        assert "without an on_value_change handler" in caplog.text

    def test_hover_preview_is_kept_locally(self, clock):
        machine = SelectionMachine(
            SelectionMode.RANGE,
            DateRange(start=datetime(2024, 3, 5)),
            commit=ExternalCommit(Mock()),
            clock=clock,
        )
        machine.hover(date(2024, 3, 7))

        assert machine.preview == DateRange(start=datetime(2024, 3, 5), end=datetime(2024, 3, 7))
