"""CHIP-8 register file: V0-VF, index register, PC, SP and the return stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .constants import (
    BYTE_MASK,
    FLAG_REGISTER,
    INDEX_MASK,
    NUM_REGISTERS,
    PC_MASK,
    PROGRAM_START,
    STACK_DEPTH,
)


def _zero_stack() -> List[int]:
    return [0] * STACK_DEPTH


@dataclass(slots=True)
class Registers:
    """Mutable register file.

    ``v`` holds the sixteen 8-bit registers; writes through ``set_v`` wrap
    modulo 256. The stack is a fixed 16-entry array addressed by ``sp``;
    overflow is not guarded, matching the hardware model.
    """

    v: bytearray = field(default_factory=lambda: bytearray(NUM_REGISTERS))
    i: int = 0
    pc: int = PROGRAM_START
    sp: int = 0
    stack: List[int] = field(default_factory=_zero_stack)

    def reset(self) -> None:
        self.v[:] = bytes(NUM_REGISTERS)
        self.i = 0
        self.pc = PROGRAM_START
        self.sp = 0
        self.stack[:] = _zero_stack()

    def get_v(self, index: int) -> int:
        return self.v[index & 0xF]

    def set_v(self, index: int, value: int) -> None:
        self.v[index & 0xF] = value & BYTE_MASK

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & BYTE_MASK

    def set_index(self, value: int) -> None:
        self.i = value & INDEX_MASK

    def set_pc(self, value: int) -> None:
        self.pc = value & PC_MASK

    def advance(self, delta: int = 2) -> None:
        self.pc = (self.pc + delta) & PC_MASK

    def push(self, address: int) -> None:
        self.stack[self.sp] = address & PC_MASK
        self.sp += 1

    def pop(self) -> int:
        self.sp -= 1
        return self.stack[self.sp]


__all__ = ["Registers"]
