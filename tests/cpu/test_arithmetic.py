from __future__ import annotations

import random

import pytest

from pychip8.cpu import MachineState, handlers


def make_state(**registers: int) -> MachineState:
    state = MachineState()
    for name, value in registers.items():
        state.registers[int(name[1:], 16)] = value
    return state


def test_add_register_carry_exhaustive() -> None:
    state = MachineState()
    for a in range(256):
        for b in range(256):
            state.registers[1] = a
            state.registers[2] = b
            handlers.op_add_reg(state, 0x8124)
            assert state.registers[1] == (a + b) % 256
            assert state.registers[0xF] == (1 if a + b > 255 else 0)


def test_sub_borrow_exhaustive() -> None:
    state = MachineState()
    for a in range(256):
        for b in range(256):
            state.registers[1] = a
            state.registers[2] = b
            handlers.op_sub(state, 0x8125)
            assert state.registers[1] == (a - b) % 256
            assert state.registers[0xF] == (1 if a > b else 0)


def test_subn_borrow_exhaustive() -> None:
    state = MachineState()
    for a in range(256):
        for b in range(256):
            state.registers[1] = a
            state.registers[2] = b
            handlers.op_subn(state, 0x8127)
            assert state.registers[1] == (b - a) % 256
            assert state.registers[0xF] == (1 if b > a else 0)


def test_sub_equal_operands_clears_flag() -> None:
    state = make_state(V1=0x42, V2=0x42, VF=1)
    handlers.op_sub(state, 0x8125)
    assert state.registers[1] == 0
    assert state.registers[0xF] == 0


@pytest.mark.parametrize("value", range(256))
def test_shift_right_and_left(value: int) -> None:
    state = make_state(V3=value)
    handlers.op_shr(state, 0x8306)
    assert state.registers[3] == value >> 1
    assert state.registers[0xF] == value & 1

    state.registers[3] = value
    handlers.op_shl(state, 0x830E)
    assert state.registers[3] == (value << 1) & 0xFF
    assert state.registers[0xF] == value >> 7


def test_shift_ignores_vy() -> None:
    state = make_state(V1=0x81, V2=0xFF)
    handlers.op_shr(state, 0x8126)
    assert state.registers[1] == 0x40
    assert state.registers[2] == 0xFF


def test_flag_written_after_result_when_vf_is_destination() -> None:
    state = make_state(VF=0xFF, V1=0x01)
    handlers.op_add_reg(state, 0x8F14)
    assert state.registers[0xF] == 1

    state = make_state(VF=0x10, V1=0x20)
    handlers.op_sub(state, 0x8F15)
    assert state.registers[0xF] == 0


def test_add_byte_wraps_without_touching_flag() -> None:
    state = make_state(V4=0xF0, VF=0x07)
    handlers.op_add_byte(state, 0x7420)
    assert state.registers[4] == 0x10
    assert state.registers[0xF] == 0x07


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        (0x8120, 0x3C),  # LD
        (0x8121, 0xFF),  # OR
        (0x8122, 0x00),  # AND
        (0x8123, 0xFF),  # XOR
    ],
)
def test_register_logic(word: int, expected: int) -> None:
    state = make_state(V1=0xC3, V2=0x3C, VF=0x55)
    handler = {0: handlers.op_ld_reg, 1: handlers.op_or, 2: handlers.op_and, 3: handlers.op_xor}[word & 0xF]
    handler(state, word)
    assert state.registers[1] == expected
    assert state.registers[2] == 0x3C
    assert state.registers[0xF] == 0x55


def test_random_is_masked_by_kk() -> None:
    state = MachineState(rng=random.Random(1234))
    for _ in range(200):
        handlers.op_rnd(state, 0xC50F)
        assert state.registers[5] & 0xF0 == 0


def test_random_is_reproducible_with_seed() -> None:
    first = MachineState(rng=random.Random(7))
    second = MachineState(rng=random.Random(7))
    values = []
    for state in (first, second):
        run = []
        for _ in range(16):
            handlers.op_rnd(state, 0xC0FF)
            run.append(state.registers[0])
        values.append(run)
    assert values[0] == values[1]


def test_random_with_zero_mask_is_zero() -> None:
    state = make_state(V2=0x99)
    handlers.op_rnd(state, 0xC200)
    assert state.registers[2] == 0


@pytest.mark.parametrize("value", range(256))
def test_bcd_round_trip(value: int) -> None:
    state = make_state(V6=value)
    state.index_register = 0x300

    handlers.op_ld_bcd(state, 0xF633)

    digits = state.memory.load_block(0x300, 3)
    assert all(digit <= 9 for digit in digits)
    assert 100 * digits[0] + 10 * digits[1] + digits[2] == value
    assert state.index_register == 0x300


def test_store_and_load_registers_leave_index_unchanged() -> None:
    state = MachineState()
    state.registers[:] = bytes(range(0x10, 0x20))
    state.index_register = 0x400

    handlers.op_store_registers(state, 0xF355)

    assert state.memory.load_block(0x400, 5) == bytes((0x10, 0x11, 0x12, 0x13, 0x00))
    assert state.index_register == 0x400

    state.registers[:] = bytes(16)
    handlers.op_load_registers(state, 0xF265)
    assert bytes(state.registers[:4]) == bytes((0x10, 0x11, 0x12, 0x00))
    assert state.index_register == 0x400


def test_add_index_does_not_touch_flag() -> None:
    state = make_state(V1=0x10, VF=0x01)
    state.index_register = 0xFF8
    handlers.op_add_index(state, 0xF11E)
    assert state.index_register == 0x1008
    assert state.registers[0xF] == 0x01


@pytest.mark.parametrize("value", [0x0, 0x9, 0xF, 0x1A])
def test_font_address_uses_low_nibble(value: int) -> None:
    state = make_state(V7=value)
    handlers.op_ld_font(state, 0xF729)
    assert state.index_register == 0x050 + 5 * (value & 0xF)
