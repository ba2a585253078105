"""Two-level opcode decoder.

The high nibble selects one of sixteen families. Families 0, 8 and E pack
several instructions that are told apart by the low nibble, family F by the low
byte. Every slot that nothing registers resolves to ``INVALID_INSTRUCTION``.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from pychip8.utils import debug_log

from .instructions import Instruction
from .opcodes import DEFAULT_INSTRUCTIONS, INVALID_INSTRUCTION

FAMILY_COUNT = 16

# family -> (sub-opcode mask, table size)
NESTED_FAMILIES: Mapping[int, tuple[int, int]] = {
    0x0: (0x000F, 0x10),
    0x8: (0x000F, 0x10),
    0xE: (0x000F, 0x10),
    0xF: (0x00FF, 0x100),
}


class Decoder:
    def __init__(self) -> None:
        self._families: List[Instruction] = [INVALID_INSTRUCTION] * FAMILY_COUNT
        self._nested: Dict[int, List[Instruction]] = {
            family: [INVALID_INSTRUCTION] * size for family, (_, size) in NESTED_FAMILIES.items()
        }

    def register(self, instruction: Instruction) -> None:
        if not instruction.defined:
            raise ValueError("cannot register an undefined instruction")
        family = instruction.family
        nested = self._nested.get(family)
        if nested is None:
            existing = self._families[family]
            if existing.defined:
                raise ValueError(
                    f"family {family:X} already registered as {existing.pattern}")
            self._families[family] = instruction
            return

        variant = self._variant(instruction)
        existing = nested[variant]
        if existing.defined:
            raise ValueError(
                f"{instruction.pattern} collides with {existing.pattern}")
        nested[variant] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def lookup(self, word: int) -> Instruction:
        family = (word >> 12) & 0xF
        nested = self._nested.get(family)
        if nested is None:
            return self._families[family]
        mask, _ = NESTED_FAMILIES[family]
        return nested[word & mask]

    def defined_instructions(self) -> tuple[Instruction, ...]:
        found = [instruction for instruction in self._families if instruction.defined]
        for family in sorted(self._nested):
            found.extend(instruction for instruction in self._nested[family] if instruction.defined)
        return tuple(found)

    @staticmethod
    def _variant(instruction: Instruction) -> int:
        sub_mask, _ = NESTED_FAMILIES[instruction.family]
        mask, value = instruction.fixed_bits()
        if (mask & sub_mask) != sub_mask:
            raise ValueError(
                f"{instruction.pattern} does not fix the sub-opcode of family {instruction.family:X}")
        return value & sub_mask


def build_decoder(instructions: Iterable[Instruction] = DEFAULT_INSTRUCTIONS) -> Decoder:
    """Build a decoder populated with ``instructions``."""

    decoder = Decoder()
    decoder.register_all(instructions)
    debug_log("cpu", "decoder ready with %d instructions", len(decoder.defined_instructions()))
    return decoder


__all__ = ["Decoder", "FAMILY_COUNT", "NESTED_FAMILIES", "build_decoder"]
