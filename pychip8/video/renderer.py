"""Framebuffer to RGB conversion for the display adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import Framebuffer
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB frame produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        import pygame  # type: ignore

        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB").copy()


class Renderer:
    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        background, foreground = validate_palette(palette)
        self._background = bytes(background)
        self._foreground = bytes(foreground)

    def render(self, framebuffer: Framebuffer, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        on = self._foreground * scale
        off = self._background * scale
        lines: list[bytes] = []
        for row in framebuffer.rows():
            line = b"".join(on if pixel else off for pixel in row)
            lines.append(line * scale)
        return RenderResult(
            width=framebuffer.width * scale,
            height=framebuffer.height * scale,
            pixels=b"".join(lines),
        )
