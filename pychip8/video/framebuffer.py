"""64x32 monochrome framebuffer written by the draw instruction."""

from __future__ import annotations

from typing import Iterator

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


class Framebuffer:
    """On/off pixel grid with XOR sprite compositing.

    Sprite origins wrap around the screen, but sprite pixels that would land
    past the right or bottom edge are clipped.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self._width = width
        self._height = height
        self._pixels = bytearray(width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        self._pixels[:] = bytes(len(self._pixels))

    def get_pixel(self, x: int, y: int) -> bool:
        return bool(self._pixels[self._offset(x, y)])

    def xor_pixel(self, x: int, y: int) -> bool:
        """Toggle a pixel and return True if it was switched off."""

        offset = self._offset(x, y)
        was_on = self._pixels[offset] != 0
        self._pixels[offset] ^= 1
        return was_on

    def draw_sprite(self, x: int, y: int, rows: bytes) -> bool:
        """XOR ``rows`` (MSB on the left) at ``(x, y)`` and report collisions."""

        origin_x = x % self._width
        origin_y = y % self._height
        collision = False
        for row, bits in enumerate(rows):
            py = origin_y + row
            if py >= self._height:
                break
            for col in range(SPRITE_WIDTH):
                if not bits & (0x80 >> col):
                    continue
                px = origin_x + col
                if px >= self._width:
                    break
                if self.xor_pixel(px, py):
                    collision = True
        return collision

    def rows(self) -> Iterator[tuple[bool, ...]]:
        for y in range(self._height):
            start = y * self._width
            yield tuple(bool(value) for value in self._pixels[start : start + self._width])

    def lit_pixels(self) -> int:
        return sum(self._pixels)

    def snapshot(self) -> bytes:
        return bytes(self._pixels)

    def to_text(self, on: str = "#", off: str = " ") -> str:
        """Render the screen as text, one line per pixel row."""

        return "\n".join("".join(on if pixel else off for pixel in row) for row in self.rows())

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} framebuffer")
        return y * self._width + x
