"""Key-name parsing and modifier tracking for picker key events."""

import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class KeyCode(Enum):
    """Keys the picker reacts to, valued by their host key names."""

    LEFT_ARROW = "ArrowLeft"
    RIGHT_ARROW = "ArrowRight"
    UP_ARROW = "ArrowUp"
    DOWN_ARROW = "ArrowDown"
    SHIFT = "Shift"
    ALT = "Alt"
    UNKNOWN = "unknown"


# Day-cell focus movement per arrow key, in days
ARROW_DELTAS: dict[KeyCode, int] = {
    KeyCode.LEFT_ARROW: -1,
    KeyCode.RIGHT_ARROW: 1,
    KeyCode.UP_ARROW: -7,
    KeyCode.DOWN_ARROW: 7,
}

MODIFIER_KEYS = frozenset({KeyCode.SHIFT, KeyCode.ALT})


def parse_key(key_name: Optional[str]) -> KeyCode:
    """Map a host key name to a KeyCode.

    Accepts the browser-style names ("ArrowUp", "Shift") as well as the short
    aliases "up", "down", "left", "right", "shift" and "alt".

    Args:
        key_name: Key name as delivered by the host event

    Returns:
        Corresponding KeyCode, UNKNOWN for anything else
    """
    if not key_name:
        return KeyCode.UNKNOWN

    try:
        return KeyCode(key_name)
    except ValueError:
        pass

    aliases = {
        "left": KeyCode.LEFT_ARROW,
        "right": KeyCode.RIGHT_ARROW,
        "up": KeyCode.UP_ARROW,
        "down": KeyCode.DOWN_ARROW,
        "shift": KeyCode.SHIFT,
        "alt": KeyCode.ALT,
    }
    return aliases.get(key_name.strip().lower(), KeyCode.UNKNOWN)


class PressedKeys:
    """Set of keys currently held down on the input box.

    Keys are tracked by their raw names so that releases of unrecognised keys
    are handled symmetrically with their presses.
    """

    def __init__(self) -> None:
        self._pressed: set[str] = set()

    def press(self, key_name: str) -> None:
        self._pressed.add(key_name)

    def release(self, key_name: str) -> None:
        self._pressed.discard(key_name)

    def clear(self) -> None:
        self._pressed.clear()

    def is_held(self, key: KeyCode) -> bool:
        return any(parse_key(name) is key for name in self._pressed)

    @property
    def shift(self) -> bool:
        return self.is_held(KeyCode.SHIFT)

    @property
    def alt(self) -> bool:
        return self.is_held(KeyCode.ALT)

    def __contains__(self, key_name: object) -> bool:
        return key_name in self._pressed

    def __len__(self) -> int:
        return len(self._pressed)

    def __repr__(self) -> str:
        return f"PressedKeys({sorted(self._pressed)!r})"
