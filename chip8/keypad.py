"""Hex keypad input latch and the conventional keyboard layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .constants import NUM_KEYS


@dataclass(frozen=True)
class KeyLocation:
    row: int
    column: int


# Physical keypad (left) and the keyboard keys it is usually bound to (right):
#
#   1 2 3 C      1 2 3 4
#   4 5 6 D      Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
KEYPAD_ROWS: Tuple[Tuple[int, ...], ...] = (
    (0x1, 0x2, 0x3, 0xC),
    (0x4, 0x5, 0x6, 0xD),
    (0x7, 0x8, 0x9, 0xE),
    (0xA, 0x0, 0xB, 0xF),
)

KEYBOARD_ROWS: Tuple[str, ...] = ("1234", "QWER", "ASDF", "ZXCV")


def _build_layout() -> Tuple[Dict[str, int], Dict[int, KeyLocation]]:
    by_char: Dict[str, int] = {}
    locations: Dict[int, KeyLocation] = {}
    for row, (keys, chars) in enumerate(zip(KEYPAD_ROWS, KEYBOARD_ROWS)):
        for column, (key, char) in enumerate(zip(keys, chars)):
            by_char[char] = key
            locations[key] = KeyLocation(row=row, column=column)
    return by_char, locations


KEYBOARD_LAYOUT, KEY_LOCATIONS = _build_layout()


def key_for_char(char: str) -> Optional[int]:
    """Return the keypad index bound to keyboard ``char`` (case-insensitive)."""
    return KEYBOARD_LAYOUT.get(char.upper())


class Keypad:
    """Sixteen level-triggered keys written by the host, read by the CPU."""

    def __init__(self) -> None:
        self._pressed: List[bool] = [False] * NUM_KEYS

    def reset(self) -> None:
        self._pressed = [False] * NUM_KEYS

    def set_key(self, index: int, pressed: bool) -> None:
        if not 0 <= index < NUM_KEYS:
            raise ValueError(f"Key index out of range: {index:#x}")
        self._pressed[index] = bool(pressed)

    def is_pressed(self, index: int) -> bool:
        return self._pressed[index & 0xF]

    def first_pressed(self) -> Optional[int]:
        """Lowest pressed key index, or None when no key is down."""
        for index, pressed in enumerate(self._pressed):
            if pressed:
                return index
        return None

    def pressed_keys(self) -> Tuple[int, ...]:
        return tuple(index for index, pressed in enumerate(self._pressed) if pressed)


__all__ = [
    "KEYBOARD_LAYOUT",
    "KEYBOARD_ROWS",
    "KEYPAD_ROWS",
    "KEY_LOCATIONS",
    "KeyLocation",
    "Keypad",
    "key_for_char",
]
