"""CHIP-8 instruction forms and decoder."""

from . import instructions
from .decoder import decode, render
from .instructions import Instruction, Unknown

__all__ = ["Instruction", "Unknown", "decode", "instructions", "render"]
