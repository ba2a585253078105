"""Program image loading.

A CHIP-8 program is a raw byte sequence copied verbatim into memory at
``0x200``. The only check is that it fits below the end of memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import Memory
from pychip8.cpu.state import PROGRAM_START_ADDRESS
from pychip8.utils import debug_log


class ProgramLoadError(RuntimeError):
    """Raised when a program image does not fit into memory."""


@dataclass
class ProgramImage:
    """Describes a program image placed into memory."""

    name: str = ""
    start: int = PROGRAM_START_ADDRESS
    length: int = 0

    @property
    def end(self) -> int:
        """Last address occupied by the image (``start - 1`` when empty)."""

        return self.start + self.length - 1


def max_program_size(memory: Memory, start: int = PROGRAM_START_ADDRESS) -> int:
    return len(memory) - start


def load_program(
    data: bytes,
    memory: Memory,
    *,
    name: str = "",
    start: int = PROGRAM_START_ADDRESS,
) -> ProgramImage:
    """Copy ``data`` into ``memory`` at ``start`` and return its metadata."""

    capacity = max_program_size(memory, start)
    if len(data) > capacity:
        raise ProgramLoadError(
            f"program {name or '<memory>'} is {len(data)} bytes; at most {capacity} fit at {start:#05x}")
    memory.store_block(start, data)
    debug_log("loader", "loaded %s bytes=%d start=%03x", name or "<memory>", len(data), start)
    return ProgramImage(name=name, start=start, length=len(data))


def read_program(stream: BinaryIO, memory: Memory, *, name: str = "") -> ProgramImage:
    """Load a program image from a binary ``stream``."""

    return load_program(stream.read(), memory, name=name)


def load_program_from_path(path: Path, memory: Memory) -> ProgramImage:
    """Load a program image from the filesystem."""

    with path.open("rb") as handle:
        return read_program(handle, memory, name=path.name)
