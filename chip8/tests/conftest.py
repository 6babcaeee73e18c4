"""Shared pytest fixtures for CHIP-8 interpreter tests."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

import pytest

from chip8.config import MachineConfig
from chip8.interpreter import Chip8
from chip8.tracing.perfetto_tracing import tracer


def program_bytes(words: Iterable[int]) -> bytes:
    """Pack 16-bit instruction words big-endian."""
    out = bytearray()
    for word in words:
        out += bytes([(word >> 8) & 0xFF, word & 0xFF])
    return bytes(out)


ChipFactory = Callable[..., Chip8]


@pytest.fixture
def make_chip() -> ChipFactory:
    """Build a machine with ``words`` loaded at 0x200."""

    def _factory(
        *words: int,
        config: Optional[MachineConfig] = None,
        beeper=None,
    ) -> Chip8:
        chip = Chip8(config or MachineConfig(seed=1234), beeper=beeper)
        if words:
            chip.load_program(program_bytes(words))
        return chip

    return _factory


@pytest.fixture(autouse=True)
def _stop_tracer():
    yield
    if tracer.enabled:
        tracer.stop()
