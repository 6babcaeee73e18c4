"""Framebuffer export helpers (PIL images, PNG files, text dumps)."""

from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

Color = Tuple[int, int, int]

# Yellow on red, the classic SDL front-end palette.
DEFAULT_ON_COLOR: Color = (255, 255, 0)
DEFAULT_OFF_COLOR: Color = (255, 0, 0)


def to_image(
    pixels: np.ndarray,
    on_color: Color = DEFAULT_ON_COLOR,
    off_color: Color = DEFAULT_OFF_COLOR,
) -> Image.Image:
    """Render the pixel grid as a 1:1 RGB image."""
    height, width = pixels.shape
    rgb = np.empty((height, width, 3), dtype=np.uint8)
    rgb[:] = off_color
    rgb[pixels.astype(bool)] = on_color
    return Image.fromarray(rgb)


def save_png(
    pixels: np.ndarray,
    path: str | Path,
    on_color: Color = DEFAULT_ON_COLOR,
    off_color: Color = DEFAULT_OFF_COLOR,
) -> Path:
    target = Path(path)
    to_image(pixels, on_color, off_color).save(target)
    return target


def to_text(pixels: np.ndarray, on: str = "#", off: str = ".") -> str:
    """Render the grid as one line of characters per row."""
    return "\n".join(
        "".join(on if cell else off for cell in row) for row in pixels.tolist()
    )


__all__ = ["Color", "DEFAULT_ON_COLOR", "DEFAULT_OFF_COLOR", "to_image", "save_png", "to_text"]
