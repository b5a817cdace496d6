"""Unit tests for calendarpicker.core.dates helpers."""

from datetime import date, datetime

import pytest

from calendarpicker.core.dates import (
    add_months,
    add_years,
    as_datetime,
    day_of_week,
    end_of_day,
    first_of_month,
    normalize_month,
    same_day,
    start_of_day,
)
from calendarpicker.core.models import CalendarWindow


class TestDayBoundarySnapping:
    """Test start/end of day snapping."""

    def test_start_of_day_drops_time(self):
        assert start_of_day(datetime(2024, 3, 10, 15, 45, 12, 500)) == datetime(2024, 3, 10)

    def test_end_of_day_uses_millisecond_precision(self):
        result = end_of_day(date(2024, 3, 10))
        assert result == datetime(2024, 3, 10, 23, 59, 59, 999000)

    def test_missing_values_short_circuit(self):
        assert start_of_day(None) is None
        assert end_of_day(None) is None

    def test_as_datetime_promotes_dates_to_midnight(self):
        assert as_datetime(date(2024, 1, 1)) == datetime(2024, 1, 1, 0, 0)
        stamp = datetime(2024, 1, 1, 8, 0)
        assert as_datetime(stamp) is stamp


class TestCalendarArithmetic:
    """Test day-of-week and month/year shifting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (date(2024, 1, 28), 0),  # Sunday
            (date(2024, 2, 1), 4),  # Thursday
            (date(2024, 3, 2), 6),  # Saturday
        ],
    )
    def test_day_of_week_is_sunday_based(self, value, expected):
        assert day_of_week(value) == expected

    def test_add_months_clamps_to_leap_february(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_add_months_clamps_to_common_february(self):
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_add_months_crosses_year_boundary(self):
        assert add_months(date(2024, 12, 15), 1) == date(2025, 1, 15)
        assert add_months(date(2024, 1, 15), -1) == date(2023, 12, 15)

    def test_add_years_clamps_leap_day(self):
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)

    def test_first_of_month(self):
        assert first_of_month(datetime(2024, 5, 31, 23, 0)) == date(2024, 5, 1)

    def test_same_day_ignores_time(self):
        assert same_day(datetime(2024, 5, 1, 0, 0), datetime(2024, 5, 1, 23, 59))
        assert not same_day(date(2024, 5, 1), date(2024, 5, 2))
        assert not same_day(date(2024, 5, 1), None)

    @pytest.mark.parametrize(
        "year,month,expected",
        [
            (2024, 1, (2024, 1)),
            (2024, 13, (2025, 1)),
            (2024, 0, (2023, 12)),
            (2024, -11, (2023, 1)),
            (2024, 25, (2026, 1)),
        ],
    )
    def test_normalize_month_rolls_years(self, year, month, expected):
        assert normalize_month(year, month) == expected


class TestCalendarWindow:
    """Test the CalendarWindow value type."""

    def test_from_date_normalizes_to_first_of_month(self):
        window = CalendarWindow.from_date(datetime(2024, 2, 17, 9, 30))
        assert window == CalendarWindow(2024, 2)
        assert window.anchor == date(2024, 2, 1)

    def test_out_of_range_month_is_normalized(self):
        assert CalendarWindow(2024, 13) == CalendarWindow(2025, 1)

    def test_shifted_carries_year(self):
        assert CalendarWindow(2024, 12).shifted(1) == CalendarWindow(2025, 1)
        assert CalendarWindow(2024, 1).shifted(-1) == CalendarWindow(2023, 12)

    def test_contains_checks_year_and_month(self):
        window = CalendarWindow(2024, 2)
        assert window.contains(date(2024, 2, 29))
        assert not window.contains(date(2023, 2, 1))

    def test_str(self):
        assert str(CalendarWindow(2024, 2)) == "2024-02"
