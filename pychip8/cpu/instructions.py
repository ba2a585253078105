"""Instruction metadata and operand extraction for the CHIP-8 core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .state import MachineState

Handler = Callable[["MachineState", int], None]

_HEX_DIGITS = frozenset("0123456789ABCDEF")


def operand_x(word: int) -> int:
    return (word & 0x0F00) >> 8


def operand_y(word: int) -> int:
    return (word & 0x00F0) >> 4


def operand_n(word: int) -> int:
    return word & 0x000F


def operand_kk(word: int) -> int:
    return word & 0x00FF


def operand_nnn(word: int) -> int:
    return word & 0x0FFF


@dataclass(frozen=True)
class Instruction:
    """Describes one instruction kind.

    ``pattern`` is the conventional four character encoding (``"8xy4"``,
    ``"Fx33"``); upper-case hex digits are fixed opcode bits and lower-case
    letters are operands. The decoder derives the family and sub-opcode from it.
    """

    pattern: str
    mnemonic: str
    handler: Handler
    defined: bool = True

    def __post_init__(self) -> None:
        if len(self.pattern) != 4:
            raise ValueError(f"pattern must have four characters: {self.pattern!r}")
        if self.defined and self.pattern[0] not in _HEX_DIGITS:
            raise ValueError(f"pattern must start with a family digit: {self.pattern!r}")

    @property
    def family(self) -> int:
        return int(self.pattern[0], 16)

    def fixed_bits(self) -> tuple[int, int]:
        """Return ``(mask, value)`` of the opcode bits fixed by the pattern."""

        mask = 0
        value = 0
        for position, char in enumerate(self.pattern):
            shift = (3 - position) * 4
            if char in _HEX_DIGITS:
                mask |= 0xF << shift
                value |= int(char, 16) << shift
        return mask, value


__all__ = [
    "Handler",
    "Instruction",
    "operand_x",
    "operand_y",
    "operand_n",
    "operand_kk",
    "operand_nnn",
]
