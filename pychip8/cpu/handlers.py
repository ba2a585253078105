"""Instruction handlers.

Every handler is a plain function ``handler(state, word)``. The cycle driver
has already advanced the program counter past ``word``; handlers that change
control flow overwrite it.
"""

from __future__ import annotations

from pychip8.utils import debug_log

from .instructions import operand_kk, operand_n, operand_nnn, operand_x, operand_y
from .state import FLAG_REGISTER, FONTSET_START_ADDRESS, GLYPH_BYTES, MachineState

INSTRUCTION_BYTES = 2


def _skip(state: MachineState) -> None:
    state.program_counter = (state.program_counter + INSTRUCTION_BYTES) & 0xFFFF


def _key_index(value: int) -> int:
    # Only the low nibble names a key.
    return value & 0x0F


# ----------------------------------------------------------------------
# Control flow


def op_cls(state: MachineState, word: int) -> None:
    state.framebuffer.clear()


def op_ret(state: MachineState, word: int) -> None:
    state.program_counter = state.stack.pop()


def op_jp(state: MachineState, word: int) -> None:
    state.program_counter = operand_nnn(word)


def op_call(state: MachineState, word: int) -> None:
    state.stack.push(state.program_counter)
    state.program_counter = operand_nnn(word)


def op_se_byte(state: MachineState, word: int) -> None:
    if state.registers[operand_x(word)] == operand_kk(word):
        _skip(state)


def op_sne_byte(state: MachineState, word: int) -> None:
    if state.registers[operand_x(word)] != operand_kk(word):
        _skip(state)


def op_se_reg(state: MachineState, word: int) -> None:
    if state.registers[operand_x(word)] == state.registers[operand_y(word)]:
        _skip(state)


def op_sne_reg(state: MachineState, word: int) -> None:
    if state.registers[operand_x(word)] != state.registers[operand_y(word)]:
        _skip(state)


def op_jp_offset(state: MachineState, word: int) -> None:
    state.program_counter = (state.registers[0] + operand_nnn(word)) & 0xFFFF


# ----------------------------------------------------------------------
# Data movement and arithmetic


def op_ld_byte(state: MachineState, word: int) -> None:
    state.registers[operand_x(word)] = operand_kk(word)


def op_add_byte(state: MachineState, word: int) -> None:
    x = operand_x(word)
    state.registers[x] = (state.registers[x] + operand_kk(word)) & 0xFF


def op_ld_reg(state: MachineState, word: int) -> None:
    state.registers[operand_x(word)] = state.registers[operand_y(word)]


def op_or(state: MachineState, word: int) -> None:
    state.registers[operand_x(word)] |= state.registers[operand_y(word)]


def op_and(state: MachineState, word: int) -> None:
    state.registers[operand_x(word)] &= state.registers[operand_y(word)]


def op_xor(state: MachineState, word: int) -> None:
    state.registers[operand_x(word)] ^= state.registers[operand_y(word)]


# The flag is stored after the result so that VF as a destination ends up
# holding the flag.


def op_add_reg(state: MachineState, word: int) -> None:
    x = operand_x(word)
    total = state.registers[x] + state.registers[operand_y(word)]
    state.registers[x] = total & 0xFF
    state.registers[FLAG_REGISTER] = 1 if total > 0xFF else 0


def op_sub(state: MachineState, word: int) -> None:
    x = operand_x(word)
    minuend = state.registers[x]
    subtrahend = state.registers[operand_y(word)]
    state.registers[x] = (minuend - subtrahend) & 0xFF
    state.registers[FLAG_REGISTER] = 1 if minuend > subtrahend else 0


def op_shr(state: MachineState, word: int) -> None:
    x = operand_x(word)
    value = state.registers[x]
    state.registers[x] = value >> 1
    state.registers[FLAG_REGISTER] = value & 0x01


def op_subn(state: MachineState, word: int) -> None:
    x = operand_x(word)
    subtrahend = state.registers[x]
    minuend = state.registers[operand_y(word)]
    state.registers[x] = (minuend - subtrahend) & 0xFF
    state.registers[FLAG_REGISTER] = 1 if minuend > subtrahend else 0


def op_shl(state: MachineState, word: int) -> None:
    x = operand_x(word)
    value = state.registers[x]
    state.registers[x] = (value << 1) & 0xFF
    state.registers[FLAG_REGISTER] = (value >> 7) & 0x01


def op_rnd(state: MachineState, word: int) -> None:
    state.registers[operand_x(word)] = state.rng.randrange(0x100) & operand_kk(word)


# ----------------------------------------------------------------------
# Index register and memory


def op_ld_index(state: MachineState, word: int) -> None:
    state.index_register = operand_nnn(word)


def op_add_index(state: MachineState, word: int) -> None:
    state.index_register = (state.index_register + state.registers[operand_x(word)]) & 0xFFFF


def op_ld_font(state: MachineState, word: int) -> None:
    digit = state.registers[operand_x(word)] & 0x0F
    state.index_register = FONTSET_START_ADDRESS + GLYPH_BYTES * digit


def op_ld_bcd(state: MachineState, word: int) -> None:
    value = state.registers[operand_x(word)]
    state.memory.store_block(state.index_register, (value // 100, (value // 10) % 10, value % 10))


def op_store_registers(state: MachineState, word: int) -> None:
    last = operand_x(word)
    state.memory.store_block(state.index_register, state.registers[: last + 1])


def op_load_registers(state: MachineState, word: int) -> None:
    last = operand_x(word)
    state.registers[: last + 1] = state.memory.load_block(state.index_register, last + 1)


# ----------------------------------------------------------------------
# Graphics


def op_drw(state: MachineState, word: int) -> None:
    rows = state.memory.load_block(state.index_register, operand_n(word))
    collision = state.framebuffer.draw_sprite(
        state.registers[operand_x(word)],
        state.registers[operand_y(word)],
        rows,
    )
    state.registers[FLAG_REGISTER] = 1 if collision else 0


# ----------------------------------------------------------------------
# Input


def op_skp(state: MachineState, word: int) -> None:
    if state.keypad.is_pressed(_key_index(state.registers[operand_x(word)])):
        _skip(state)


def op_sknp(state: MachineState, word: int) -> None:
    if not state.keypad.is_pressed(_key_index(state.registers[operand_x(word)])):
        _skip(state)


def op_ld_key(state: MachineState, word: int) -> None:
    key = state.keypad.first_pressed()
    if key is None:
        # Run this instruction again on the next cycle.
        state.program_counter = (state.program_counter - INSTRUCTION_BYTES) & 0xFFFF
        return
    state.registers[operand_x(word)] = key


# ----------------------------------------------------------------------
# Timers


def op_ld_vx_dt(state: MachineState, word: int) -> None:
    state.registers[operand_x(word)] = state.delay_timer


def op_ld_dt_vx(state: MachineState, word: int) -> None:
    state.delay_timer = state.registers[operand_x(word)]


def op_ld_st_vx(state: MachineState, word: int) -> None:
    state.sound_timer = state.registers[operand_x(word)]


# ----------------------------------------------------------------------
# Invalid opcodes


def op_invalid(state: MachineState, word: int) -> None:
    """Report an undefined instruction word and leave the state untouched."""

    debug_log(
        "opcode",
        "invalid opcode %04x at pc=%03x",
        word,
        (state.program_counter - INSTRUCTION_BYTES) & 0xFFFF,
    )
