"""Unit tests for the calendarpicker command-line preview."""

import argparse
from datetime import date
from pathlib import Path

import pytest

from calendarpicker.cli import create_parser, format_cell, main, parse_day, parse_month
from calendarpicker.core.models import CalendarDay


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("CALENDARPICKER_TYPE", "CALENDARPICKER_WEEK_START_INDEX", "CALENDARPICKER_MONTHS_VISIBLE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def _day(**flags) -> CalendarDay:
    values = {
        "date": date(2024, 2, 9),
        "is_today": False,
        "is_current_month": True,
        "is_previous_month": False,
        "is_next_month": False,
        "is_weekday": True,
        "is_weekend": False,
    }
    values.update(flags)
    return CalendarDay(**values)


class TestArgumentParsing:
    """Test CLI argument parsing."""

    def test_parse_month(self) -> None:
        assert parse_month("2024-02") == date(2024, 2, 1)

    def test_parse_month_rejects_bad_value(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_month("Feb 2024")

    def test_parse_day_rejects_bad_value(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_day("2024-02-30")

    def test_select_is_repeatable(self) -> None:
        args = create_parser().parse_args(["--select", "2024-02-10", "--select", "2024-02-05"])
        assert args.select == [date(2024, 2, 10), date(2024, 2, 5)]


class TestFormatCell:
    """Test single-cell rendering."""

    def test_plain_day(self) -> None:
        assert format_cell(_day()) == "  9  "

    def test_selected_today(self) -> None:
        assert format_cell(_day(is_selected=True, is_today=True)) == "[ 9]*"

    def test_previewed_outside_month(self) -> None:
        assert format_cell(_day(is_previewed_range=True, is_current_month=False)) == "( 9)~"


class TestMain:
    """Test the full CLI run."""

    def test_range_selection_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main(
            ["--month", "2024-03", "--type", "range", "--select", "2024-03-10", "--select", "2024-03-05"]
        )

        output = capsys.readouterr().out
        assert exit_code == 0
        assert output.splitlines()[0].strip().startswith("March 2024")
        assert "[ 5]" in output
        assert "[10]" in output
        assert "Selected:" in output

    def test_week_start_changes_header(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--month", "2024-02", "--week-start", "1"]) == 0

        header = capsys.readouterr().out.splitlines()[1]
        assert header.split()[0] == "Mon"

    def test_hover_marks_preview(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--month", "2024-02", "--type", "range", "--select", "2024-02-05", "--hover", "2024-02-08"])
        assert "( 7)" in capsys.readouterr().out

    def test_invalid_settings_file_exits_with_error(self, tmp_path: Path) -> None:
        path = tmp_path / "picker.yaml"
        path.write_text("picker:\n  months_visible: 0\n", encoding="utf-8")

        assert main(["--config", str(path)]) == 2
