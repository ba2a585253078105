"""Python CHIP-8 interpreter.

The package is split the same way as the emulated machine: the CPU core and
its decoder, the memory bus, the keypad, the framebuffer/renderer, program
loading, machine assembly and the pygame frontend used by ``run.py``.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
