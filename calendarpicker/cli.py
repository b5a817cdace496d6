"""Command-line preview of the picker grid.

Builds a DatePicker from the command line (and an optional YAML settings
file), replays picks and a hover, and prints the month grid as text:

    python -m calendarpicker --month 2024-02 --type range --select 2024-02-10 --hover 2024-02-14
"""

import argparse
import logging
import sys
from datetime import date, datetime
from typing import Optional

from .core.models import CalendarDay
from .engine import DatePicker
from .settings.exceptions import PickerError
from .settings.loader import load_settings
from .utils.logging import configure_logging

logger = logging.getLogger(__name__)

CELL_WIDTH = 5


def parse_month(value: str) -> date:
    """Parse a YYYY-MM argument into the first day of that month."""
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid month {value!r}, expected YYYY-MM") from e


def parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD argument."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="calendarpicker",
        description="Print the date picker grid for a month window",
    )
    parser.add_argument("--month", type=parse_month, help="Anchor month (YYYY-MM), default: today")
    parser.add_argument("--months-visible", type=int, help="Number of months to show")
    parser.add_argument("--week-start", type=int, help="First weekday, 0=Sunday .. 6=Saturday")
    parser.add_argument("--type", choices=["single", "range"], help="Selection mode")
    parser.add_argument("--locale", help="Locale for weekday/month names")
    parser.add_argument(
        "--select",
        type=parse_day,
        action="append",
        default=[],
        metavar="DATE",
        help="Pick a date (repeatable; range mode picks in order)",
    )
    parser.add_argument("--hover", type=parse_day, metavar="DATE", help="Hover over a date")
    parser.add_argument("--config", help="YAML settings file with a 'picker' section")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def format_cell(day: CalendarDay) -> str:
    """Render one day cell.

    ``[d]`` selected, ``(d)`` previewed, ``*`` today, ``~`` outside the anchor month.
    """
    selected = bool(day.is_selected or day.is_selected_range)
    previewed = bool(day.is_previewed_range)
    left, right = " ", " "
    if selected:
        left, right = "[", "]"
    elif previewed:
        left, right = "(", ")"

    marker = "*" if day.is_today else ("~" if not day.is_current_month else " ")
    return f"{left}{day.date.day:>2}{right}{marker}"


def render_grid(picker: DatePicker) -> str:
    """Render the picker's current window as text."""
    view = picker.calendar
    month_name = picker.months[view.month - 1].long
    width = CELL_WIDTH * 7

    lines = [f"{month_name} {view.year}".center(width).rstrip()]
    lines.append("".join(f"{name.short[:3]:>4} " for name in picker.days).rstrip())
    for week in view.dates.weeks():
        lines.append("".join(format_cell(day) for day in week).rstrip())
    return "\n".join(lines)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the grid preview.

    Returns:
        Process exit code
    """
    args = create_parser().parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            locale=args.locale,
            week_start_index=args.week_start,
            months_visible=args.months_visible,
            type=args.type,
        )
        configure_logging(debug_mode=args.debug or settings.debug, level=settings.log_level)

        overrides = {}
        if args.month is not None:
            overrides["default_calendar_month"] = args.month
        picker = DatePicker(settings.to_config(**overrides))
    except PickerError as e:
        logger.error(f"Invalid picker configuration: {e}")
        return 2

    for day in args.select:
        picker.pick(day)
    if args.hover is not None:
        picker.selection.hover(args.hover)

    # Picking moves the window to the picked month; show the requested one
    if args.month is not None:
        picker.navigation.set_window(args.month)

    print(render_grid(picker))
    if picker.value is not None:
        print(f"Selected: {picker.value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
