"""Headless driver loop for the CHIP-8 interpreter.

The runner groups steps into frames, polls the redraw flag once per frame and
sleeps to hold the configured cadence. Clock and sleep are injectable so the
pacing logic can be exercised deterministically in tests.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional

import numpy as np

from .config import MachineConfig
from .constants import NUM_KEYS
from .interpreter import Chip8
from .timers import Beeper

logger = logging.getLogger(__name__)

FrameCallback = Callable[[np.ndarray], None]


@dataclass(frozen=True)
class KeyEvent:
    """Key state change applied right before step number ``step``."""

    step: int
    key: int
    pressed: bool


class KeyScript:
    """Scheduled key presses for unattended runs."""

    def __init__(self, events: Iterable[KeyEvent] = ()) -> None:
        self._events: List[KeyEvent] = sorted(events, key=lambda e: e.step)
        self._cursor = 0

    @classmethod
    def parse(cls, text: str) -> "KeyScript":
        """Parse ``"step:key:down,step:key:up"`` (key in hex)."""

        events = []
        for chunk in text.split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            try:
                step_text, key_text, state = chunk.split(":")
                state = state.strip().lower()
                if state not in {"down", "up"}:
                    raise ValueError(state)
                key = int(key_text, 16)
                if not 0 <= key < NUM_KEYS:
                    raise ValueError(key_text)
                events.append(KeyEvent(int(step_text), key, state == "down"))
            except ValueError as exc:
                raise ValueError(f"Invalid key event '{chunk}'") from exc
        return cls(events)

    def __len__(self) -> int:
        return len(self._events)

    def apply(self, chip: Chip8, step: int) -> None:
        while self._cursor < len(self._events):
            event = self._events[self._cursor]
            if event.step > step:
                return
            chip.set_key(event.key, event.pressed)
            self._cursor += 1


@dataclass(frozen=True)
class RunStats:
    steps: int
    frames: int
    redraws: int
    beeps: int
    elapsed: float
    stop_reason: str


class Runner:
    """Frame-paced step loop around a ``Chip8`` instance."""

    def __init__(
        self,
        chip: Chip8,
        *,
        throttle: bool = True,
        on_frame: Optional[FrameCallback] = None,
        key_script: Optional[KeyScript] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.chip = chip
        self.config = chip.config
        self.throttle = throttle
        self.on_frame = on_frame
        self.key_script = key_script or KeyScript()
        self._clock = clock
        self._sleep = sleep

    def run(
        self,
        max_steps: Optional[int] = None,
        timeout_secs: Optional[float] = None,
    ) -> RunStats:
        """Run until ``max_steps`` steps or ``timeout_secs`` elapse.

        With neither bound the loop runs until interrupted.
        """

        chip = self.chip
        steps_per_frame = self.config.steps_per_frame
        frame_period = 1.0 / self.config.frames_per_second

        start = self._clock()
        deadline = start
        steps = frames = redraws = beeps = 0
        stop_reason = "steps"

        while True:
            if max_steps is not None and steps >= max_steps:
                stop_reason = "steps"
                break
            if timeout_secs is not None and self._clock() - start >= timeout_secs:
                stop_reason = "timeout"
                break

            for _ in range(steps_per_frame):
                if max_steps is not None and steps >= max_steps:
                    break
                self.key_script.apply(chip, steps)
                result = chip.step()
                steps += 1
                if result.beeped:
                    beeps += 1
            frames += 1

            if chip.should_draw():
                redraws += 1
                if self.on_frame is not None:
                    self.on_frame(chip.get_buffer())

            if self.throttle:
                deadline += frame_period
                delay = deadline - self._clock()
                if delay > 0:
                    self._sleep(delay)

        stats = RunStats(
            steps=steps,
            frames=frames,
            redraws=redraws,
            beeps=beeps,
            elapsed=self._clock() - start,
            stop_reason=stop_reason,
        )
        logger.info(
            "Run stopped (%s): %d steps, %d frames, %d redraws, %d beeps in %.2fs",
            stats.stop_reason,
            stats.steps,
            stats.frames,
            stats.redraws,
            stats.beeps,
            stats.elapsed,
        )
        return stats


def run_program(
    path: str | Path,
    *,
    config: Optional[MachineConfig] = None,
    max_steps: Optional[int] = None,
    timeout_secs: Optional[float] = None,
    throttle: bool = True,
    beeper: Optional[Beeper] = None,
    key_script: Optional[KeyScript] = None,
    on_frame: Optional[FrameCallback] = None,
) -> Chip8:
    """Load ``path`` into a fresh machine, run it and return the machine."""

    chip = Chip8(config, beeper=beeper)
    chip.load_rom(path)
    Runner(
        chip, throttle=throttle, on_frame=on_frame, key_script=key_script
    ).run(max_steps=max_steps, timeout_secs=timeout_secs)
    return chip


__all__ = ["FrameCallback", "KeyEvent", "KeyScript", "RunStats", "Runner", "run_program"]
