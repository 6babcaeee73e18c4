"""CHIP-8 interpreter: the machine aggregate and its step function."""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from .config import MachineConfig
from .display import Framebuffer
from .errors import InvalidOpcodeError
from .instr import decode, render
from .instr import instructions as ops
from .instr.instructions import Instruction
from .keypad import Keypad
from .loader import load_file, load_program
from .memory import Chip8Memory
from .registers import Registers
from .state_model import MachineState, capture_state, diff_states
from .timers import Beeper, Timers
from .tracing import trace_dispatcher
from .tracing.perfetto_tracing import perf_trace, tracer

logger = logging.getLogger(__name__)


class Flow(enum.Enum):
    """How the program counter moves after an instruction."""

    NEXT = enum.auto()  # pc += 2
    SKIP = enum.auto()  # pc += 4
    JUMP = enum.auto()  # pc already set by the instruction
    STALL = enum.auto()  # pc unchanged, timers still tick
    WAIT = enum.auto()  # pc unchanged, timers frozen


_STALLS = (Flow.STALL, Flow.WAIT)


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of a single ``Chip8.step`` call."""

    pc: int
    word: int
    instruction: Instruction
    next_pc: int
    flow: Flow
    beeped: bool = False

    @property
    def stalled(self) -> bool:
        return self.flow in _STALLS

    @property
    def mnemonic(self) -> str:
        return render(self.instruction)


class Chip8:
    """Complete CHIP-8 machine state plus the fetch-decode-execute step.

    The aggregate owns memory, registers, timers, framebuffer and keypad.
    Drivers call ``step()`` repeatedly, push key state with ``set_key()``
    and poll ``should_draw()`` to decide when to repaint.
    """

    def __init__(
        self,
        config: Optional[MachineConfig] = None,
        *,
        beeper: Optional[Beeper] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or MachineConfig()
        self.memory = Chip8Memory()
        self.regs = Registers()
        self.timers = Timers()
        self.timers.set_beeper(beeper)
        self.framebuffer = Framebuffer()
        self.keypad = Keypad()
        self.rng = rng or random.Random(self.config.seed)
        self.instruction_count = 0
        self.cycle_count = 0
        self.current_opcode = 0

    # ------------------------------------------------------------------ #
    # Host-facing API
    # ------------------------------------------------------------------ #
    def reset(self) -> None:
        """Return to power-on state, keeping the loaded program image."""
        self.regs.reset()
        self.timers.reset()
        self.framebuffer.reset()
        self.keypad.reset()
        self.instruction_count = 0
        self.cycle_count = 0
        self.current_opcode = 0

    def load_program(self, program: bytes) -> int:
        return load_program(self.memory, program)

    def load_rom(self, path: str | Path) -> int:
        return load_file(self.memory, path)

    def set_beeper(self, beeper: Optional[Beeper]) -> None:
        self.timers.set_beeper(beeper)

    def set_key(self, index: int, pressed: bool) -> None:
        self.keypad.set_key(index, pressed)
        if tracer.enabled:
            trace_dispatcher.record_instant(
                "Input", "key_down" if pressed else "key_up", {"key": index}
            )

    def should_draw(self) -> bool:
        """Return and clear the redraw flag."""
        return self.framebuffer.consume_redraw()

    def get_buffer(self) -> np.ndarray:
        return self.framebuffer.get_buffer()

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #
    @perf_trace("Emulation", sample_rate=1, include_op_num=True)
    def step(self) -> StepResult:
        """Execute one instruction and update the timers."""

        pc = self.regs.pc
        word = self.memory.read_word(pc)
        instr = decode(word)

        if isinstance(instr, ops.Unknown) and self.config.strict_opcodes:
            raise InvalidOpcodeError(word, pc)

        before: Optional[MachineState] = capture_state(self) if tracer.enabled else None

        self.current_opcode = word
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("0x%03X: %04X %s", pc, word, render(instr))

        flow = self._execute(instr, pc)
        if flow is Flow.NEXT:
            self.regs.advance(2)
        elif flow is Flow.SKIP:
            self.regs.advance(4)

        beeped = False
        if flow is not Flow.WAIT:
            beeped = self.timers.tick()
        if flow not in _STALLS:
            self.instruction_count += 1
        self.cycle_count += 1

        if before is not None:
            self._trace_step(pc, word, instr, beeped, before)

        return StepResult(
            pc=pc,
            word=word,
            instruction=instr,
            next_pc=self.regs.pc,
            flow=flow,
            beeped=beeped,
        )

    def _execute(self, instr: Instruction, pc: int) -> Flow:
        regs = self.regs
        v = regs.get_v

        match instr:
            case ops.ClearScreen():
                self.framebuffer.clear()
            case ops.Return():
                regs.set_pc(regs.pop() + 2)
                return Flow.JUMP
            case ops.Jump(nnn=nnn):
                regs.set_pc(nnn)
                return Flow.JUMP
            case ops.Call(nnn=nnn):
                regs.push(pc)
                regs.set_pc(nnn)
                return Flow.JUMP
            case ops.SkipEqImm(x=x, kk=kk):
                return _skip_if(v(x) == kk)
            case ops.SkipNeImm(x=x, kk=kk):
                return _skip_if(v(x) != kk)
            case ops.SkipEqReg(x=x, y=y):
                return _skip_if(v(x) == v(y))
            case ops.LoadImm(x=x, kk=kk):
                regs.set_v(x, kk)
            case ops.AddImm(x=x, kk=kk):
                regs.set_v(x, v(x) + kk)
            case ops.LoadReg(x=x, y=y):
                regs.set_v(x, v(y))
            case ops.Or(x=x, y=y):
                regs.set_v(x, v(x) | v(y))
            case ops.And(x=x, y=y):
                regs.set_v(x, v(x) & v(y))
            case ops.Xor(x=x, y=y):
                regs.set_v(x, v(x) ^ v(y))
            case ops.AddReg(x=x, y=y):
                # The flag is written first; when x or y is VF the sum sees it.
                regs.vf = 1 if v(y) > 0xFF - v(x) else 0
                regs.set_v(x, v(x) + v(y))
            case ops.SubReg(x=x, y=y):
                regs.vf = 1 if v(x) > v(y) else 0
                regs.set_v(x, v(x) - v(y))
            case ops.ShiftRight(x=x):
                regs.vf = v(x) & 0x1
                regs.set_v(x, v(x) >> 1)
            case ops.SubnReg(x=x, y=y):
                regs.vf = 1 if v(y) > v(x) else 0
                if self.config.quirks.subn_reverse:
                    regs.set_v(x, v(y) - v(x))
                else:
                    regs.set_v(x, v(x) - v(y))
            case ops.ShiftLeft(x=x):
                regs.vf = v(x) >> 7
                regs.set_v(x, v(x) << 1)
            case ops.SkipNeReg(x=x, y=y):
                return _skip_if(v(x) != v(y))
            case ops.SetIndex(nnn=nnn):
                regs.set_index(nnn)
            case ops.JumpOffset(nnn=nnn):
                regs.set_pc(nnn + v(0))
                return Flow.JUMP
            case ops.Random(x=x, kk=kk):
                regs.set_v(x, self.rng.randrange(256) & kk)
            case ops.Draw(x=x, y=y, n=n):
                sprite = self.memory.read_block(regs.i, n)
                collision = self.framebuffer.draw_sprite(v(x), v(y), sprite)
                regs.vf = 1 if collision else 0
            case ops.SkipKeyPressed(x=x):
                return _skip_if(self.keypad.is_pressed(v(x)))
            case ops.SkipKeyNotPressed(x=x):
                return _skip_if(not self.keypad.is_pressed(v(x)))
            case ops.LoadDelay(x=x):
                regs.set_v(x, self.timers.delay)
            case ops.WaitKey(x=x):
                key = self.keypad.first_pressed()
                if key is None:
                    return Flow.WAIT
                regs.set_v(x, key)
            case ops.SetDelay(x=x):
                self.timers.set_delay(v(x))
            case ops.SetSound(x=x):
                self.timers.set_sound(v(x))
            case ops.AddIndex(x=x):
                regs.vf = 1 if regs.i + v(x) > 0xFFF else 0
                regs.set_index(regs.i + v(x))
            case ops.LoadGlyphAddr(x=x):
                regs.set_index(v(x) * 5)
            case ops.StoreBcd(x=x):
                self.memory.write_block(regs.i, self._bcd_digits(v(x)))
            case ops.StoreRegs(x=x):
                for offset in range(x + 1):
                    self.memory.write_byte(regs.i + offset, v(offset))
                regs.set_index(x + 1)
            case ops.LoadRegs(x=x):
                for offset in range(x + 1):
                    regs.set_v(offset, self.memory.read_byte(regs.i + offset))
                regs.set_index(x + 1)
            case ops.Unknown(word=word):
                logger.warning("Invalid opcode 0x%04X at 0x%03X", word, pc)
                return Flow.STALL
        return Flow.NEXT

    def _bcd_digits(self, value: int) -> tuple[int, int, int]:
        hundreds = value // 100
        if self.config.quirks.bcd_legacy_order:
            # Legacy layout: ones before tens, and the third cell holds
            # value // 10 without reducing it to a single digit.
            return hundreds, value % 10, (value // 10) & 0xFF
        return hundreds, (value // 10) % 10, value % 10

    def _trace_step(
        self,
        pc: int,
        word: int,
        instr: Instruction,
        beeped: bool,
        before: MachineState,
    ) -> None:
        tracer.tick()
        diff = diff_states(before, capture_state(self))
        changes = {
            change.name: f"0x{change.before:X} -> 0x{change.after:X}"
            for change in (*diff.cpu, *diff.memory)
            if change.name != "pc"
        }
        trace_dispatcher.record_step(pc, word, render(instr), changes)
        match instr:
            case ops.Call(nnn=nnn):
                trace_dispatcher.record_call(nnn, pc)
            case ops.Return():
                trace_dispatcher.record_return(pc)
            case ops.ClearScreen() | ops.Draw():
                trace_dispatcher.record_instant(
                    "Display", "redraw", {"lit": self.framebuffer.lit_count()}
                )
        if beeped:
            trace_dispatcher.record_instant("Sound", "beep")
        trace_dispatcher.record_counter("instructions", self.instruction_count)


def _skip_if(condition: bool) -> Flow:
    return Flow.SKIP if condition else Flow.NEXT


__all__ = ["Chip8", "Flow", "StepResult"]
