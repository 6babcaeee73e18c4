"""Delay and sound countdown timers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

Beeper = Callable[[], None]


def _silent() -> None:
    return None


@dataclass
class Timers:
    """Two 8-bit counters decremented once per executed step.

    The sound timer drives ``beeper``: the callback fires on the tick that
    takes the counter from 1 to 0 and at no other time.
    """

    delay: int = 0
    sound: int = 0
    beeper: Beeper = _silent

    def __post_init__(self) -> None:
        self.delay = int(self.delay) & 0xFF
        self.sound = int(self.sound) & 0xFF

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0

    def set_beeper(self, beeper: Optional[Beeper]) -> None:
        self.beeper = beeper or _silent

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    def tick(self) -> bool:
        """Advance both timers by one step; return True when the tone fired."""

        fired = False
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            if self.sound == 1:
                self.beeper()
                fired = True
            self.sound -= 1
        return fired


__all__ = ["Beeper", "Timers"]
