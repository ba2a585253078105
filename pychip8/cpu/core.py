"""CHIP-8 cycle driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from pychip8.bus import MemoryFault
from pychip8.utils import TraceRecorder, debug_enabled, debug_log

from .decoder import Decoder, build_decoder
from .errors import CPUError, IllegalOpcodeError
from .instructions import Instruction
from .state import MachineState

InvalidOpcodeCallback = Callable[[int, int], None]


@dataclass
class Chip8:
    """Fetch-decode-execute engine operating on a :class:`MachineState`."""

    state: MachineState = field(default_factory=MachineState)
    decoder: Decoder = field(default_factory=build_decoder)
    strict_illegal: bool = False
    trace: Optional[TraceRecorder] = None
    invalid_opcode_callback: Optional[InvalidOpcodeCallback] = None

    cycle_count: int = 0
    invalid_opcode_count: int = 0
    last_invalid_opcode: Optional[int] = None

    def reset(self, *, keep_program: bool = False) -> None:
        """Reset the machine state and the execution counters."""

        self.state.reset(keep_program=keep_program)
        self.cycle_count = 0
        self.invalid_opcode_count = 0
        self.last_invalid_opcode = None
        if self.trace is not None:
            self.trace.clear()

    def step(self) -> Instruction:
        """Execute one cycle and return the instruction that ran.

        A fault raised while executing leaves the program counter pointing at
        the faulting instruction and the timers untouched.
        """

        state = self.state
        pc = state.program_counter
        word = state.memory.load16(pc)
        state.current_instruction = word
        state.program_counter = (pc + 2) & 0xFFFF

        instruction = self.decoder.lookup(word)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%03x word=%04x %s", pc, word, instruction.mnemonic)

        try:
            if not instruction.defined:
                self._report_invalid(word, pc)
            instruction.handler(state, word)
        except (CPUError, MemoryFault):
            state.program_counter = pc
            if self.trace is not None:
                self.trace.record_step(pc, word, state, mnemonic=instruction.mnemonic, note="fault")
            raise

        state.tick_timers()
        self.cycle_count += 1
        if self.trace is not None:
            note = "" if instruction.defined else "invalid"
            self.trace.record_step(pc, word, state, mnemonic=instruction.mnemonic, note=note)
        return instruction

    def run(self, cycles: int) -> int:
        """Execute ``cycles`` cycles and return how many ran."""

        for _ in range(cycles):
            self.step()
        return max(cycles, 0)

    def _report_invalid(self, word: int, pc: int) -> None:
        if self.strict_illegal:
            raise IllegalOpcodeError(f"illegal opcode {word:#06x} at {pc:#05x}")
        self.invalid_opcode_count += 1
        self.last_invalid_opcode = word
        if self.invalid_opcode_callback is not None:
            self.invalid_opcode_callback(word, pc)
