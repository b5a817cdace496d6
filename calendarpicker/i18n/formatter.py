"""Locale-aware display strings for weekday and month tables.

The picker never formats names itself; it asks a ``LocaleFormatter`` for a
(date, unit, width) string. ``CalendarLocaleFormatter`` is the default and
reads names from the standard ``calendar`` module under the requested locale.
"""

import calendar
import locale as _locale
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from typing import Protocol, Union

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "default"

WEEKDAY_WIDTHS = ("long", "short", "narrow")
MONTH_WIDTHS = ("long", "short", "narrow", "numeric", "2-digit")


class LocaleFormatter(Protocol):
    """Formatting service consumed by the picker."""

    def format(self, value: date, unit: str, width: str) -> str:
        """Return the display string of ``value``'s weekday or month."""
        ...

    def format_date(self, value: Union[date, datetime]) -> str:
        """Return the short locale date shown in the input box."""
        ...


class CalendarLocaleFormatter:
    """Default formatter backed by ``calendar`` and ``strftime``.

    Args:
        locale_name: POSIX locale name such as "de_DE.UTF-8", or "default"
            for the process locale. Unknown locales fall back to the process
            locale with a warning.
    """

    def __init__(self, locale_name: str = DEFAULT_LOCALE) -> None:
        self.locale_name = locale_name or DEFAULT_LOCALE

    def _check_locale(self) -> bool:
        """Return True when a non-default locale is set and can be activated."""
        if self.locale_name == DEFAULT_LOCALE:
            return False
        try:
            with calendar.different_locale(self.locale_name):
                pass
        except _locale.Error as e:
            logger.warning(f"Locale {self.locale_name!r} unavailable, using default: {e}")
            self.locale_name = DEFAULT_LOCALE
            return False
        return True

    @contextmanager
    def _active_locale(self) -> Iterator[None]:
        if not self._check_locale():
            yield
            return
        with calendar.different_locale(self.locale_name):
            yield

    def format(self, value: date, unit: str, width: str) -> str:
        """Format a weekday or month name.

        Args:
            value: Any date with the wanted weekday or month
            unit: "weekday" or "month"
            width: One of long, short, narrow (plus numeric, 2-digit for months)

        Returns:
            Display string

        Raises:
            ValueError: If the unit/width pair is not supported
        """
        if unit == "weekday" and width in WEEKDAY_WIDTHS:
            with self._active_locale():
                long_name = calendar.day_name[value.weekday()]
                short_name = calendar.day_abbr[value.weekday()]
            return self._by_width(long_name, short_name, width)

        if unit == "month" and width in MONTH_WIDTHS:
            if width == "numeric":
                return str(value.month)
            if width == "2-digit":
                return f"{value.month:02d}"
            with self._active_locale():
                long_name = calendar.month_name[value.month]
                short_name = calendar.month_abbr[value.month]
            return self._by_width(long_name, short_name, width)

        raise ValueError(f"Unsupported format request: unit={unit!r}, width={width!r}")

    @staticmethod
    def _by_width(long_name: str, short_name: str, width: str) -> str:
        if width == "long":
            return long_name
        if width == "short":
            return short_name
        return long_name[:1]

    def format_date(self, value: Union[date, datetime]) -> str:
        with self._active_locale():
            return value.strftime("%x")


def ordinal(number: int) -> str:
    """Return an English ordinal string.

    Example:
        >>> [ordinal(n) for n in (1, 2, 3, 4, 11, 12, 13, 21, 22, 101, 111)]
        ['1st', '2nd', '3rd', '4th', '11th', '12th', '13th', '21st', '22nd', '101st', '111th']
    """
    if 10 <= abs(number) % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(abs(number) % 10, "th")
    return f"{number}{suffix}"
