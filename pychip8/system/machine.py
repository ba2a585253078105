"""CHIP-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pychip8.bus import Memory
from pychip8.cpu import Chip8, InvalidOpcodeCallback, MachineState
from pychip8.io import Keypad
from pychip8.loader import ProgramImage, load_program
from pychip8.utils import TraceRecorder
from pychip8.video import Framebuffer


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    program_image: Optional[bytes] = None
    program_name: str = ""
    strict_memory: bool = False
    strict_illegal: bool = False
    seed: Optional[int] = None
    trace: Optional[TraceRecorder] = None
    invalid_opcode_callback: Optional[InvalidOpcodeCallback] = None


@dataclass
class Machine:
    """Aggregates the interpreter core and the state its adapters share."""

    cpu: Chip8
    state: MachineState
    memory: Memory
    framebuffer: Framebuffer
    keypad: Keypad
    program: Optional[ProgramImage] = None

    def restart(self) -> None:
        """Restart the loaded program from ``0x200``."""

        self.cpu.reset(keep_program=True)


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    memory = Memory(strict=config.strict_memory)
    framebuffer = Framebuffer()
    keypad = Keypad()
    state = MachineState(
        memory=memory,
        framebuffer=framebuffer,
        keypad=keypad,
        seed=config.seed,
    )

    program = None
    if config.program_image is not None:
        program = load_program(config.program_image, memory, name=config.program_name)

    cpu = Chip8(
        state=state,
        strict_illegal=config.strict_illegal,
        trace=config.trace,
        invalid_opcode_callback=config.invalid_opcode_callback,
    )

    return Machine(
        cpu=cpu,
        state=state,
        memory=memory,
        framebuffer=framebuffer,
        keypad=keypad,
        program=program,
    )
