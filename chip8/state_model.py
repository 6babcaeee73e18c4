"""Canonical interpreter state snapshots and diff utilities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .interpreter import Chip8


@dataclass(frozen=True)
class CPUState:
    """Register file captured from the interpreter."""

    v: Tuple[int, ...]
    i: int
    pc: int
    sp: int
    stack: Tuple[int, ...]
    instruction_count: int = 0


@dataclass(frozen=True)
class TimerState:
    delay: int
    sound: int


@dataclass(frozen=True)
class DisplayState:
    """Framebuffer rows packed as tuples of 0/1 cells."""

    rows: Tuple[Tuple[int, ...], ...]
    lit: int
    redraw_pending: bool


@dataclass(frozen=True)
class MachineState:
    """Composite immutable snapshot of the machine."""

    cpu: CPUState
    timers: TimerState
    display: DisplayState
    memory: bytes
    pressed_keys: Tuple[int, ...]


@dataclass(frozen=True)
class FieldDiff:
    """Difference for a single named field."""

    name: str
    before: object
    after: object


@dataclass(frozen=True)
class StateDiff:
    """Aggregated differences between two machine states."""

    cpu: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    timers: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    memory: Tuple[FieldDiff, ...] = field(default_factory=tuple)
    display_changed: bool = False

    def is_empty(self) -> bool:
        """Return True when no differences were recorded."""

        return (
            not self.cpu
            and not self.timers
            and not self.memory
            and not self.display_changed
        )

    def changed_names(self) -> Tuple[str, ...]:
        return tuple(d.name for d in (*self.cpu, *self.timers, *self.memory))


def empty_state_diff() -> StateDiff:
    """Return a reusable empty diff instance."""

    return StateDiff()


def capture_state(chip: Chip8) -> MachineState:
    """Capture the current interpreter state as canonical snapshot."""

    regs = chip.regs
    cpu = CPUState(
        v=tuple(regs.v),
        i=regs.i,
        pc=regs.pc,
        sp=regs.sp,
        stack=tuple(regs.stack),
        instruction_count=chip.instruction_count,
    )
    timers = TimerState(delay=chip.timers.delay, sound=chip.timers.sound)
    pixels = chip.framebuffer.pixels
    display = DisplayState(
        rows=tuple(tuple(int(cell) for cell in row) for row in pixels.tolist()),
        lit=chip.framebuffer.lit_count(),
        redraw_pending=chip.framebuffer.redraw_pending,
    )
    return MachineState(
        cpu=cpu,
        timers=timers,
        display=display,
        memory=chip.memory.snapshot(),
        pressed_keys=chip.keypad.pressed_keys(),
    )


def diff_states(before: Optional[MachineState], after: MachineState) -> StateDiff:
    """Compute structured differences between two machine states."""

    if before is None:
        return empty_state_diff()

    return StateDiff(
        cpu=_diff_cpu(before.cpu, after.cpu),
        timers=_diff_timers(before.timers, after.timers),
        memory=_diff_memory(before.memory, after.memory),
        display_changed=before.display.rows != after.display.rows,
    )


def _diff_cpu(before: CPUState, after: CPUState) -> Tuple[FieldDiff, ...]:
    diffs = []
    for index, (old, new) in enumerate(zip(before.v, after.v)):
        if old != new:
            diffs.append(FieldDiff(f"v{index:x}", old, new))
    for name in ("i", "pc", "sp"):
        old = getattr(before, name)
        new = getattr(after, name)
        if old != new:
            diffs.append(FieldDiff(name, old, new))
    for index, (old, new) in enumerate(zip(before.stack, after.stack)):
        if old != new:
            diffs.append(FieldDiff(f"stack[{index}]", old, new))
    return tuple(diffs)


def _diff_timers(before: TimerState, after: TimerState) -> Tuple[FieldDiff, ...]:
    diffs = []
    for name in ("delay", "sound"):
        old = getattr(before, name)
        new = getattr(after, name)
        if old != new:
            diffs.append(FieldDiff(name, old, new))
    return tuple(diffs)


def _diff_memory(before: bytes, after: bytes) -> Tuple[FieldDiff, ...]:
    return tuple(
        FieldDiff(f"mem[0x{address:03X}]", old, new)
        for address, (old, new) in enumerate(zip(before, after))
        if old != new
    )


__all__ = [
    "CPUState",
    "TimerState",
    "DisplayState",
    "MachineState",
    "FieldDiff",
    "StateDiff",
    "capture_state",
    "diff_states",
    "empty_state_diff",
]
