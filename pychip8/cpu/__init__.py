"""CPU package for the CHIP-8 interpreter."""

from .core import Chip8, InvalidOpcodeCallback
from .decoder import Decoder, build_decoder
from .errors import CPUError, IllegalOpcodeError, StackFault
from .instructions import Instruction
from .opcodes import DEFAULT_INSTRUCTIONS, INVALID_INSTRUCTION
from .state import CallStack, MachineState
from . import handlers, opcodes

__all__ = [
    "Chip8",
    "CallStack",
    "MachineState",
    "Decoder",
    "build_decoder",
    "Instruction",
    "DEFAULT_INSTRUCTIONS",
    "INVALID_INSTRUCTION",
    "InvalidOpcodeCallback",
    "CPUError",
    "IllegalOpcodeError",
    "StackFault",
    "handlers",
    "opcodes",
]
