"""Flat CHIP-8 memory.

The interpreter sees a single 4 KiB byte array. Addresses coming from the
index register or the program counter are not bounds checked by the
instructions themselves, so the memory decides what an out-of-range address
means: by default it is masked into the 12-bit address space like the
original hardware, while ``strict`` memories raise :class:`MemoryFault`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

MEMORY_SIZE = 0x1000


class MemoryFault(Exception):
    """Raised when a strict memory is accessed outside its address space."""


@dataclass
class Memory:
    """Byte-addressable memory with a configurable out-of-range policy."""

    size: int = MEMORY_SIZE
    strict: bool = False

    def __post_init__(self) -> None:
        if self.size <= 0 or self.size & (self.size - 1):
            raise ValueError(f"memory size must be a positive power of two, got {self.size}")
        self._data = bytearray(self.size)
        self._mask = self.size - 1

    def __len__(self) -> int:
        return self.size

    def resolve(self, address: int) -> int:
        """Map ``address`` into the valid range or fail in strict mode."""

        if 0 <= address < self.size:
            return address
        if self.strict:
            raise MemoryFault(f"address {address:#06x} outside 0x000-{self._mask:#05x}")
        return address & self._mask

    def load8(self, address: int) -> int:
        return self._data[self.resolve(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self.resolve(address)] = value & 0xFF

    def load16(self, address: int) -> int:
        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def load_block(self, address: int, length: int) -> bytes:
        addresses = [self.resolve(address + offset) for offset in range(length)]
        return bytes(self._data[resolved] for resolved in addresses)

    def store_block(self, address: int, values: Iterable[int]) -> None:
        """Write ``values`` starting at ``address``.

        Every target address is resolved before the first byte is written, so a
        strict memory never ends up with a partially applied block.
        """

        payload = [value & 0xFF for value in values]
        addresses = [self.resolve(address + offset) for offset in range(len(payload))]
        for resolved, value in zip(addresses, payload):
            self._data[resolved] = value

    def clear(self, start: int = 0, end: int | None = None) -> None:
        stop = self.size if end is None else end
        self._data[start:stop] = bytes(stop - start)

    def snapshot(self) -> bytes:
        return bytes(self._data)
