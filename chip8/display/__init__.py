"""Display components for the CHIP-8 interpreter."""

from .framebuffer import Framebuffer
from .renderer import save_png, to_image, to_text

__all__ = ["Framebuffer", "save_png", "to_image", "to_text"]
