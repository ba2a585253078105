"""CHIP-8 machine state."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from pychip8.bus import Memory
from pychip8.io import Keypad
from pychip8.video import Framebuffer

from .errors import StackFault

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
STACK_DEPTH = 16

PROGRAM_START_ADDRESS = 0x200
FONTSET_START_ADDRESS = 0x050
GLYPH_BYTES = 5

FONTSET = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)


class CallStack:
    """Fixed-capacity stack of 16-bit return addresses."""

    def __init__(self, capacity: int = STACK_DEPTH) -> None:
        self._capacity = capacity
        self._entries = [0] * capacity
        self._pointer = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def depth(self) -> int:
        return self._pointer

    def push(self, address: int) -> None:
        if self._pointer >= self._capacity:
            raise StackFault(f"stack overflow pushing {address:#05x} (depth {self._capacity})")
        self._entries[self._pointer] = address & 0xFFFF
        self._pointer += 1

    def pop(self) -> int:
        if self._pointer == 0:
            raise StackFault("stack underflow on return")
        self._pointer -= 1
        return self._entries[self._pointer]

    def clear(self) -> None:
        self._entries = [0] * self._capacity
        self._pointer = 0

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._entries[: self._pointer])


@dataclass
class MachineState:
    """Every piece of mutable interpreter state, handed to each handler."""

    memory: Memory = field(default_factory=Memory)
    framebuffer: Framebuffer = field(default_factory=Framebuffer)
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)
    registers: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    stack: CallStack = field(default_factory=CallStack)
    index_register: int = 0x000
    program_counter: int = PROGRAM_START_ADDRESS
    delay_timer: int = 0
    sound_timer: int = 0
    current_instruction: int = 0x0000
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self.rng.seed(self.seed)
        self.load_font()

    def load_font(self) -> None:
        self.memory.store_block(FONTSET_START_ADDRESS, FONTSET)

    def reset(self, *, keep_program: bool = False) -> None:
        """Return to the post-construction state.

        With ``keep_program`` the program area is left untouched so the loaded
        image can be restarted. The random source is reseeded, so a seeded
        state replays the same ``Cxkk`` values after a reset.
        """

        if keep_program:
            self.memory.clear(0, PROGRAM_START_ADDRESS)
        else:
            self.memory.clear()
        self.load_font()
        self.framebuffer.clear()
        self.keypad.reset()
        self.registers[:] = bytes(REGISTER_COUNT)
        self.stack.clear()
        self.index_register = 0x000
        self.program_counter = PROGRAM_START_ADDRESS
        self.delay_timer = 0
        self.sound_timer = 0
        self.current_instruction = 0x0000
        self.rng.seed(self.seed)

    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0

    def tick_timers(self) -> None:
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
