"""CHIP-8 instruction forms.

Each form is a frozen dataclass carrying only the operands it uses. The
``Instruction`` alias is the closed union the decoder produces and the
executor matches on; ``Unknown`` is the explicit fallback for words that do
not encode any form.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union


@dataclass(frozen=True, slots=True)
class ClearScreen:
    """00E0: clear the framebuffer."""


@dataclass(frozen=True, slots=True)
class Return:
    """00EE: return from subroutine."""


@dataclass(frozen=True, slots=True)
class Jump:
    """1nnn: jump to nnn."""

    nnn: int


@dataclass(frozen=True, slots=True)
class Call:
    """2nnn: call subroutine at nnn."""

    nnn: int


@dataclass(frozen=True, slots=True)
class SkipEqImm:
    """3xkk: skip next if Vx == kk."""

    x: int
    kk: int


@dataclass(frozen=True, slots=True)
class SkipNeImm:
    """4xkk: skip next if Vx != kk."""

    x: int
    kk: int


@dataclass(frozen=True, slots=True)
class SkipEqReg:
    """5xy0: skip next if Vx == Vy."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class LoadImm:
    """6xkk: Vx = kk."""

    x: int
    kk: int


@dataclass(frozen=True, slots=True)
class AddImm:
    """7xkk: Vx += kk, no carry."""

    x: int
    kk: int


@dataclass(frozen=True, slots=True)
class LoadReg:
    """8xy0: Vx = Vy."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Or:
    """8xy1: Vx |= Vy."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class And:
    """8xy2: Vx &= Vy."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Xor:
    """8xy3: Vx ^= Vy."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class AddReg:
    """8xy4: Vx += Vy, VF = carry."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class SubReg:
    """8xy5: Vx -= Vy, VF = Vx > Vy."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class ShiftRight:
    """8xy6: VF = Vx & 1, Vx >>= 1."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class SubnReg:
    """8xy7: VF = Vy > Vx, then subtract."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class ShiftLeft:
    """8xyE: VF = Vx >> 7, Vx <<= 1."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class SkipNeReg:
    """9xy0: skip next if Vx != Vy."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class SetIndex:
    """Annn: I = nnn."""

    nnn: int


@dataclass(frozen=True, slots=True)
class JumpOffset:
    """Bnnn: jump to nnn + V0."""

    nnn: int


@dataclass(frozen=True, slots=True)
class Random:
    """Cxkk: Vx = random byte & kk."""

    x: int
    kk: int


@dataclass(frozen=True, slots=True)
class Draw:
    """Dxyn: draw n-row sprite from I at (Vx, Vy)."""

    x: int
    y: int
    n: int


@dataclass(frozen=True, slots=True)
class SkipKeyPressed:
    """Ex9E: skip next if key Vx is down."""

    x: int


@dataclass(frozen=True, slots=True)
class SkipKeyNotPressed:
    """ExA1: skip next if key Vx is up."""

    x: int


@dataclass(frozen=True, slots=True)
class LoadDelay:
    """Fx07: Vx = delay timer."""

    x: int


@dataclass(frozen=True, slots=True)
class WaitKey:
    """Fx0A: block until a key is down, store it in Vx."""

    x: int


@dataclass(frozen=True, slots=True)
class SetDelay:
    """Fx15: delay timer = Vx."""

    x: int


@dataclass(frozen=True, slots=True)
class SetSound:
    """Fx18: sound timer = Vx."""

    x: int


@dataclass(frozen=True, slots=True)
class AddIndex:
    """Fx1E: I += Vx, VF = overflow past 0xFFF."""

    x: int


@dataclass(frozen=True, slots=True)
class LoadGlyphAddr:
    """Fx29: I = address of glyph Vx."""

    x: int


@dataclass(frozen=True, slots=True)
class StoreBcd:
    """Fx33: store decimal digits of Vx at I."""

    x: int


@dataclass(frozen=True, slots=True)
class StoreRegs:
    """Fx55: store V0..Vx at I."""

    x: int


@dataclass(frozen=True, slots=True)
class LoadRegs:
    """Fx65: load V0..Vx from I."""

    x: int


@dataclass(frozen=True, slots=True)
class Unknown:
    """Word that does not encode any instruction."""

    word: int


Instruction: TypeAlias = Union[
    ClearScreen,
    Return,
    Jump,
    Call,
    SkipEqImm,
    SkipNeImm,
    SkipEqReg,
    LoadImm,
    AddImm,
    LoadReg,
    Or,
    And,
    Xor,
    AddReg,
    SubReg,
    ShiftRight,
    SubnReg,
    ShiftLeft,
    SkipNeReg,
    SetIndex,
    JumpOffset,
    Random,
    Draw,
    SkipKeyPressed,
    SkipKeyNotPressed,
    LoadDelay,
    WaitKey,
    SetDelay,
    SetSound,
    AddIndex,
    LoadGlyphAddr,
    StoreBcd,
    StoreRegs,
    LoadRegs,
    Unknown,
]


__all__ = [
    "Instruction",
    "ClearScreen",
    "Return",
    "Jump",
    "Call",
    "SkipEqImm",
    "SkipNeImm",
    "SkipEqReg",
    "LoadImm",
    "AddImm",
    "LoadReg",
    "Or",
    "And",
    "Xor",
    "AddReg",
    "SubReg",
    "ShiftRight",
    "SubnReg",
    "ShiftLeft",
    "SkipNeReg",
    "SetIndex",
    "JumpOffset",
    "Random",
    "Draw",
    "SkipKeyPressed",
    "SkipKeyNotPressed",
    "LoadDelay",
    "WaitKey",
    "SetDelay",
    "SetSound",
    "AddIndex",
    "LoadGlyphAddr",
    "StoreBcd",
    "StoreRegs",
    "LoadRegs",
    "Unknown",
]
