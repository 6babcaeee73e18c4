"""Monochrome 64x32 framebuffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from ..constants import DISPLAY_HEIGHT, DISPLAY_WIDTH, SPRITE_WIDTH


class Framebuffer:
    """1-bit pixel grid indexed ``[row, column]``.

    Only ``clear`` and ``draw_sprite`` mutate the grid; both raise the
    redraw flag, which ``consume_redraw`` returns and clears in one call.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint8)
        # The first frame is always drawn.
        self._redraw = True

    def reset(self) -> None:
        self.pixels.fill(0)
        self._redraw = True

    def clear(self) -> None:
        self.pixels.fill(0)
        self._redraw = True

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR an 8-pixel-wide sprite at ``(x, y)``.

        Coordinates wrap around both edges. Returns True when any lit pixel
        was turned off.
        """

        collision = False
        for row_offset, bits in enumerate(rows):
            row = (y + row_offset) % self.height
            for bit in range(SPRITE_WIDTH):
                if not bits & (0x80 >> bit):
                    continue
                column = (x + bit) % self.width
                if self.pixels[row, column]:
                    collision = True
                self.pixels[row, column] ^= 1
        self._redraw = True
        return collision

    def consume_redraw(self) -> bool:
        redraw = self._redraw
        self._redraw = False
        return redraw

    @property
    def redraw_pending(self) -> bool:
        """Peek at the redraw flag without consuming it."""
        return self._redraw

    def get_buffer(self) -> np.ndarray:
        """Read-only copy of the pixel grid."""
        buffer = self.pixels.copy()
        buffer.setflags(write=False)
        return buffer

    def lit_count(self) -> int:
        return int(self.pixels.sum())


__all__ = ["Framebuffer"]
