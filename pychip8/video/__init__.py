"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, Framebuffer
from .palette import MONOCHROME, parse_color, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "parse_color",
    "validate_palette",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
