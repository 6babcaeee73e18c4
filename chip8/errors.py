"""Exception hierarchy surfaced by the CHIP-8 interpreter."""

from __future__ import annotations


class Chip8Error(Exception):
    """Base class for interpreter errors."""


class SizeError(Chip8Error, ValueError):
    """Program image does not fit into the program region."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"ROM size ({size}) is larger than available memory ({limit})"
        )
        self.size = size
        self.limit = limit


class ProgramReadError(Chip8Error, IOError):
    """Program source could not be read."""


class InvalidOpcodeError(Chip8Error):
    """Unrecognized instruction word (raised only in strict mode)."""

    def __init__(self, word: int, address: int) -> None:
        super().__init__(f"Invalid opcode 0x{word:04X} at 0x{address:03X}")
        self.word = word
        self.address = address


__all__ = ["Chip8Error", "SizeError", "ProgramReadError", "InvalidOpcodeError"]
