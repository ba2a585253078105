"""Memory bus for the CHIP-8 interpreter."""

from .memory import MEMORY_SIZE, Memory, MemoryFault

__all__ = [
    "MEMORY_SIZE",
    "Memory",
    "MemoryFault",
]
