"""Memory-touching instructions against a strict memory."""

from __future__ import annotations

import pytest

from pychip8.bus import Memory, MemoryFault
from pychip8.cpu import Chip8, MachineState
from pychip8.cpu.state import PROGRAM_START_ADDRESS
from pychip8.utils import TraceRecorder


def make_cpu(*words: int, strict: bool) -> Chip8:
    state = MachineState(memory=Memory(strict=strict))
    program = b"".join(word.to_bytes(2, "big") for word in words)
    state.memory.store_block(PROGRAM_START_ADDRESS, program)
    return Chip8(state=state, trace=TraceRecorder(8))


def test_bcd_past_end_masks_by_default() -> None:
    cpu = make_cpu(0x60FF, 0xAFFE, 0xF033, strict=False)
    cpu.run(3)
    memory = cpu.state.memory
    assert (memory.load8(0xFFE), memory.load8(0xFFF), memory.load8(0x000)) == (2, 5, 5)


def test_bcd_past_end_faults_when_strict() -> None:
    cpu = make_cpu(0x60FF, 0xAFFE, 0xF033, strict=True)
    cpu.run(2)

    with pytest.raises(MemoryFault):
        cpu.step()

    assert cpu.state.program_counter == 0x204
    assert cpu.state.memory.load8(0xFFE) == 0
    assert cpu.state.memory.load8(0xFFF) == 0
    assert cpu.cycle_count == 2


def test_register_dump_past_end_faults_when_strict() -> None:
    cpu = make_cpu(0xAFFF, 0xF155, strict=True)
    cpu.step()
    with pytest.raises(MemoryFault):
        cpu.step()
    assert cpu.state.program_counter == 0x202


def test_sprite_read_past_end_faults_when_strict() -> None:
    cpu = make_cpu(0xAFFE, 0xD005, strict=True)
    cpu.step()
    with pytest.raises(MemoryFault):
        cpu.step()
    assert cpu.state.framebuffer.lit_pixels() == 0


def test_index_beyond_memory_after_add_is_masked_by_default() -> None:
    cpu = make_cpu(0x6010, 0xAFF8, 0xF01E, 0xF065, strict=False)
    cpu.state.memory.store8(0x008, 0x99)
    cpu.run(4)
    assert cpu.state.index_register == 0x1008
    assert cpu.state.registers[0] == 0x99
