"""Integration test that runs a small score-display program end to end."""

from __future__ import annotations

from pychip8.cpu.state import FONTSET, GLYPH_BYTES
from pychip8.system import MachineConfig, create_machine
from pychip8.video import Framebuffer

SCORE_PROGRAM = bytes(
    (
        0x60, 0x89,  # LD V0, 137
        0xA3, 0x00,  # LD I, 0x300
        0xF0, 0x33,  # LD B, V0
        0xF2, 0x65,  # LD V2, [I]
        0x63, 0x00,  # LD V3, 0
        0x64, 0x00,  # LD V4, 0
        0xF0, 0x29,  # LD F, V0
        0xD3, 0x45,  # DRW V3, V4, 5
        0x73, 0x05,  # ADD V3, 5
        0xF1, 0x29,  # LD F, V1
        0xD3, 0x45,  # DRW V3, V4, 5
        0x73, 0x05,  # ADD V3, 5
        0xF2, 0x29,  # LD F, V2
        0xD3, 0x45,  # DRW V3, V4, 5
        0x12, 0x1C,  # JP 0x21C
    )
)


def _glyph(digit: int) -> bytes:
    return FONTSET[digit * GLYPH_BYTES : (digit + 1) * GLYPH_BYTES]


def test_score_program_draws_decimal_digits() -> None:
    machine = create_machine(MachineConfig(program_image=SCORE_PROGRAM, program_name="score"))

    machine.cpu.run(40)

    assert machine.memory.load_block(0x300, 3) == bytes((1, 3, 7))
    assert bytes(machine.state.registers[:3]) == bytes((1, 3, 7))
    assert machine.state.program_counter == 0x21C
    assert machine.state.registers[0xF] == 0

    expected = Framebuffer()
    for column, digit in enumerate((1, 3, 7)):
        expected.draw_sprite(column * 5, 0, _glyph(digit))
    assert machine.framebuffer.snapshot() == expected.snapshot()


def test_countdown_program_waits_on_delay_timer() -> None:
    program = bytes(
        (
            0x60, 0x08,  # LD V0, 8
            0xF0, 0x15,  # LD DT, V0
            0xF1, 0x07,  # LD V1, DT
            0x31, 0x00,  # SE V1, 0
            0x12, 0x04,  # JP 0x204
            0x62, 0x01,  # LD V2, 1
            0x12, 0x0C,  # JP 0x20C
        )
    )
    machine = create_machine(MachineConfig(program_image=program))

    machine.cpu.run(6)
    assert machine.state.registers[2] == 0

    machine.cpu.run(30)
    assert machine.state.delay_timer == 0
    assert machine.state.registers[2] == 1
    assert machine.state.program_counter == 0x20C
