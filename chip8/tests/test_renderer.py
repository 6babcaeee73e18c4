from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from chip8.display import Framebuffer, save_png, to_image, to_text
from chip8.display.renderer import DEFAULT_OFF_COLOR, DEFAULT_ON_COLOR


def _checker() -> np.ndarray:
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0b1000_0000, 0b0100_0000])
    return fb.get_buffer()


def test_to_image_uses_palette() -> None:
    image = to_image(_checker())
    assert image.size == (64, 32)
    assert image.mode == "RGB"
    assert image.getpixel((0, 0)) == DEFAULT_ON_COLOR
    assert image.getpixel((1, 1)) == DEFAULT_ON_COLOR
    assert image.getpixel((1, 0)) == DEFAULT_OFF_COLOR


def test_save_png_writes_custom_colors(tmp_path: Path) -> None:
    path = save_png(_checker(), tmp_path / "screen.png", (255, 255, 255), (0, 0, 0))
    with Image.open(path) as image:
        assert image.getpixel((0, 0)) == (255, 255, 255)
        assert image.getpixel((63, 31)) == (0, 0, 0)


def test_to_text_one_line_per_row() -> None:
    lines = to_text(_checker()).splitlines()
    assert len(lines) == 32
    assert lines[0].startswith("#.")
    assert lines[1].startswith(".#")
    assert set(lines[2]) == {"."}
