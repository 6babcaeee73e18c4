"""Instruction word decoder and mnemonic renderer."""

from __future__ import annotations

from functools import lru_cache

from . import instructions as ops
from .instructions import Instruction


@lru_cache(maxsize=None)
def decode(word: int) -> Instruction:
    """Decode a 16-bit instruction word into its instruction form.

    Groups 0x0 and 0x8 are discriminated by the low nibble, groups 0xE and
    0xF by the low byte. Anything else yields ``Unknown``.
    """

    word &= 0xFFFF
    x = (word & 0x0F00) >> 8
    y = (word & 0x00F0) >> 4
    kk = word & 0x00FF
    nnn = word & 0x0FFF
    n = word & 0x000F

    match word >> 12:
        case 0x0:
            match n:
                case 0x0:
                    return ops.ClearScreen()
                case 0xE:
                    return ops.Return()
        case 0x1:
            return ops.Jump(nnn=nnn)
        case 0x2:
            return ops.Call(nnn=nnn)
        case 0x3:
            return ops.SkipEqImm(x=x, kk=kk)
        case 0x4:
            return ops.SkipNeImm(x=x, kk=kk)
        case 0x5:
            return ops.SkipEqReg(x=x, y=y)
        case 0x6:
            return ops.LoadImm(x=x, kk=kk)
        case 0x7:
            return ops.AddImm(x=x, kk=kk)
        case 0x8:
            match n:
                case 0x0:
                    return ops.LoadReg(x=x, y=y)
                case 0x1:
                    return ops.Or(x=x, y=y)
                case 0x2:
                    return ops.And(x=x, y=y)
                case 0x3:
                    return ops.Xor(x=x, y=y)
                case 0x4:
                    return ops.AddReg(x=x, y=y)
                case 0x5:
                    return ops.SubReg(x=x, y=y)
                case 0x6:
                    return ops.ShiftRight(x=x, y=y)
                case 0x7:
                    return ops.SubnReg(x=x, y=y)
                case 0xE:
                    return ops.ShiftLeft(x=x, y=y)
        case 0x9:
            return ops.SkipNeReg(x=x, y=y)
        case 0xA:
            return ops.SetIndex(nnn=nnn)
        case 0xB:
            return ops.JumpOffset(nnn=nnn)
        case 0xC:
            return ops.Random(x=x, kk=kk)
        case 0xD:
            return ops.Draw(x=x, y=y, n=n)
        case 0xE:
            match kk:
                case 0x9E:
                    return ops.SkipKeyPressed(x=x)
                case 0xA1:
                    return ops.SkipKeyNotPressed(x=x)
        case 0xF:
            match kk:
                case 0x07:
                    return ops.LoadDelay(x=x)
                case 0x0A:
                    return ops.WaitKey(x=x)
                case 0x15:
                    return ops.SetDelay(x=x)
                case 0x18:
                    return ops.SetSound(x=x)
                case 0x1E:
                    return ops.AddIndex(x=x)
                case 0x29:
                    return ops.LoadGlyphAddr(x=x)
                case 0x33:
                    return ops.StoreBcd(x=x)
                case 0x55:
                    return ops.StoreRegs(x=x)
                case 0x65:
                    return ops.LoadRegs(x=x)

    return ops.Unknown(word=word)


def render(instr: Instruction) -> str:
    """Return the assembler-style mnemonic for ``instr``."""

    match instr:
        case ops.ClearScreen():
            return "CLS"
        case ops.Return():
            return "RET"
        case ops.Jump(nnn=nnn):
            return f"JP 0x{nnn:03X}"
        case ops.Call(nnn=nnn):
            return f"CALL 0x{nnn:03X}"
        case ops.SkipEqImm(x=x, kk=kk):
            return f"SE V{x:X}, 0x{kk:02X}"
        case ops.SkipNeImm(x=x, kk=kk):
            return f"SNE V{x:X}, 0x{kk:02X}"
        case ops.SkipEqReg(x=x, y=y):
            return f"SE V{x:X}, V{y:X}"
        case ops.LoadImm(x=x, kk=kk):
            return f"LD V{x:X}, 0x{kk:02X}"
        case ops.AddImm(x=x, kk=kk):
            return f"ADD V{x:X}, 0x{kk:02X}"
        case ops.LoadReg(x=x, y=y):
            return f"LD V{x:X}, V{y:X}"
        case ops.Or(x=x, y=y):
            return f"OR V{x:X}, V{y:X}"
        case ops.And(x=x, y=y):
            return f"AND V{x:X}, V{y:X}"
        case ops.Xor(x=x, y=y):
            return f"XOR V{x:X}, V{y:X}"
        case ops.AddReg(x=x, y=y):
            return f"ADD V{x:X}, V{y:X}"
        case ops.SubReg(x=x, y=y):
            return f"SUB V{x:X}, V{y:X}"
        case ops.ShiftRight(x=x):
            return f"SHR V{x:X}"
        case ops.SubnReg(x=x, y=y):
            return f"SUBN V{x:X}, V{y:X}"
        case ops.ShiftLeft(x=x):
            return f"SHL V{x:X}"
        case ops.SkipNeReg(x=x, y=y):
            return f"SNE V{x:X}, V{y:X}"
        case ops.SetIndex(nnn=nnn):
            return f"LD I, 0x{nnn:03X}"
        case ops.JumpOffset(nnn=nnn):
            return f"JP V0, 0x{nnn:03X}"
        case ops.Random(x=x, kk=kk):
            return f"RND V{x:X}, 0x{kk:02X}"
        case ops.Draw(x=x, y=y, n=n):
            return f"DRW V{x:X}, V{y:X}, {n}"
        case ops.SkipKeyPressed(x=x):
            return f"SKP V{x:X}"
        case ops.SkipKeyNotPressed(x=x):
            return f"SKNP V{x:X}"
        case ops.LoadDelay(x=x):
            return f"LD V{x:X}, DT"
        case ops.WaitKey(x=x):
            return f"LD V{x:X}, K"
        case ops.SetDelay(x=x):
            return f"LD DT, V{x:X}"
        case ops.SetSound(x=x):
            return f"LD ST, V{x:X}"
        case ops.AddIndex(x=x):
            return f"ADD I, V{x:X}"
        case ops.LoadGlyphAddr(x=x):
            return f"LD F, V{x:X}"
        case ops.StoreBcd(x=x):
            return f"LD B, V{x:X}"
        case ops.StoreRegs(x=x):
            return f"LD [I], V{x:X}"
        case ops.LoadRegs(x=x):
            return f"LD V{x:X}, [I]"
        case ops.Unknown(word=word):
            return f"DW 0x{word:04X}"
    raise TypeError(f"Not an instruction: {instr!r}")


__all__ = ["decode", "render"]
