"""CHIP-8 program store: 4 KB of byte memory with the glyph table pre-loaded."""

from __future__ import annotations

import logging
from typing import Iterable

from .constants import (
    ADDRESS_MASK,
    FONT_SET,
    GLYPH_SIZE,
    GLYPH_START,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
)
from .errors import SizeError

logger = logging.getLogger(__name__)


class Chip8Memory:
    """Flat 4096-byte memory image.

    Every address is masked to 12 bits, so reads and writes that run off the
    end of memory wrap to the bottom instead of raising.
    """

    def __init__(self) -> None:
        self.data = bytearray(MEMORY_SIZE)
        self._load_font()

    def _load_font(self) -> None:
        logger.debug("Loading %d glyph bytes at 0x%03X", len(FONT_SET), GLYPH_START)
        self.data[GLYPH_START : GLYPH_START + len(FONT_SET)] = FONT_SET

    def read_byte(self, address: int) -> int:
        return self.data[address & ADDRESS_MASK]

    def write_byte(self, address: int, value: int) -> None:
        self.data[address & ADDRESS_MASK] = value & 0xFF

    def read_word(self, address: int) -> int:
        """Read 16-bit word (big-endian)."""
        high = self.read_byte(address)
        low = self.read_byte(address + 1)
        return (high << 8) | low

    def read_block(self, address: int, length: int) -> bytes:
        return bytes(self.read_byte(address + offset) for offset in range(length))

    def write_block(self, address: int, values: Iterable[int]) -> None:
        for offset, value in enumerate(values):
            self.write_byte(address + offset, value)

    @staticmethod
    def glyph_address(digit: int) -> int:
        """Address of the glyph for hex ``digit`` (low nibble only)."""
        return GLYPH_START + (digit & 0xF) * GLYPH_SIZE

    def load_program(self, program: bytes) -> None:
        """Copy ``program`` to the program region.

        Raises ``SizeError`` before touching memory when the image does not
        fit. Bytes past the end of the image keep their previous value.
        """
        size = len(program)
        if size > MAX_PROGRAM_SIZE:
            raise SizeError(size, MAX_PROGRAM_SIZE)
        self.data[PROGRAM_START : PROGRAM_START + size] = program

    def snapshot(self) -> bytes:
        return bytes(self.data)


__all__ = ["Chip8Memory"]
