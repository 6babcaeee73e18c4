"""CHIP-8 cycle-stepped interpreter package."""

from .config import MachineConfig, Quirks
from .display import Framebuffer
from .errors import Chip8Error, InvalidOpcodeError, ProgramReadError, SizeError
from .interpreter import Chip8, Flow, StepResult
from .keypad import Keypad
from .runner import KeyEvent, KeyScript, Runner, RunStats, run_program
from .state_model import (
    CPUState,
    DisplayState,
    FieldDiff,
    MachineState,
    StateDiff,
    TimerState,
    capture_state,
    diff_states,
    empty_state_diff,
)

__all__ = [
    "Chip8",
    "Flow",
    "StepResult",
    "MachineConfig",
    "Quirks",
    "Framebuffer",
    "Keypad",
    "Chip8Error",
    "SizeError",
    "ProgramReadError",
    "InvalidOpcodeError",
    "KeyEvent",
    "KeyScript",
    "Runner",
    "RunStats",
    "run_program",
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
