"""Locale formatting collaborators."""

from .formatter import CalendarLocaleFormatter, LocaleFormatter, ordinal

__all__ = ["CalendarLocaleFormatter", "LocaleFormatter", "ordinal"]
