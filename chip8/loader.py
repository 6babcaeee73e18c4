"""Program image loading."""

from __future__ import annotations

import logging
from pathlib import Path

from .constants import MAX_PROGRAM_SIZE, PROGRAM_START
from .errors import ProgramReadError, SizeError
from .memory import Chip8Memory

logger = logging.getLogger(__name__)


def read_program(path: str | Path) -> bytes:
    """Read a ROM file, rejecting images larger than the program region.

    The size is checked from ``stat`` before the file is read, so an
    oversize image never reaches memory.
    """

    rom_path = Path(path)
    try:
        size = rom_path.stat().st_size
        if size > MAX_PROGRAM_SIZE:
            raise SizeError(size, MAX_PROGRAM_SIZE)
        data = rom_path.read_bytes()
    except OSError as exc:
        raise ProgramReadError(f"Failed to read ROM file {rom_path}: {exc}") from exc

    # The file may have grown between stat and read.
    if len(data) > MAX_PROGRAM_SIZE:
        raise SizeError(len(data), MAX_PROGRAM_SIZE)
    return data


def load_program(memory: Chip8Memory, program: bytes, *, source: str = "<bytes>") -> int:
    """Copy ``program`` to 0x200 and return the number of bytes loaded."""

    memory.load_program(program)
    logger.info(
        "Loaded %d bytes from %s at 0x%03X", len(program), source, PROGRAM_START
    )
    return len(program)


def load_file(memory: Chip8Memory, path: str | Path) -> int:
    return load_program(memory, read_program(path), source=str(path))


__all__ = ["read_program", "load_program", "load_file"]
