"""Navigation, keyboard and interaction components for the date picker."""

from .interaction import CalendarProps, DateProps, InputProps, InteractionBinder
from .keyboard import KeyCode, PressedKeys
from .navigation import NavigationController

__all__ = [
    "CalendarProps",
    "DateProps",
    "InputProps",
    "InteractionBinder",
    "KeyCode",
    "NavigationController",
    "PressedKeys",
]
