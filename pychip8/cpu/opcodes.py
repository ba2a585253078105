"""Opcode metadata for the CHIP-8 instruction set."""

from __future__ import annotations

from typing import Sequence

from . import handlers
from .instructions import Instruction

INVALID_INSTRUCTION = Instruction("????", "???", handlers.op_invalid, defined=False)


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    # Family 0, selected by the low nibble
    Instruction("00E0", "CLS", handlers.op_cls),
    Instruction("00EE", "RET", handlers.op_ret),
    # Single-instruction families
    Instruction("1nnn", "JP", handlers.op_jp),
    Instruction("2nnn", "CALL", handlers.op_call),
    Instruction("3xkk", "SE", handlers.op_se_byte),
    Instruction("4xkk", "SNE", handlers.op_sne_byte),
    Instruction("5xy0", "SE", handlers.op_se_reg),
    Instruction("6xkk", "LD", handlers.op_ld_byte),
    Instruction("7xkk", "ADD", handlers.op_add_byte),
    # Family 8, selected by the low nibble
    Instruction("8xy0", "LD", handlers.op_ld_reg),
    Instruction("8xy1", "OR", handlers.op_or),
    Instruction("8xy2", "AND", handlers.op_and),
    Instruction("8xy3", "XOR", handlers.op_xor),
    Instruction("8xy4", "ADD", handlers.op_add_reg),
    Instruction("8xy5", "SUB", handlers.op_sub),
    Instruction("8xy6", "SHR", handlers.op_shr),
    Instruction("8xy7", "SUBN", handlers.op_subn),
    Instruction("8xyE", "SHL", handlers.op_shl),
    Instruction("9xy0", "SNE", handlers.op_sne_reg),
    Instruction("Annn", "LD", handlers.op_ld_index),
    Instruction("Bnnn", "JP", handlers.op_jp_offset),
    Instruction("Cxkk", "RND", handlers.op_rnd),
    Instruction("Dxyn", "DRW", handlers.op_drw),
    # Family E, selected by the low nibble
    Instruction("Ex9E", "SKP", handlers.op_skp),
    Instruction("ExA1", "SKNP", handlers.op_sknp),
    # Family F, selected by the low byte
    Instruction("Fx07", "LD", handlers.op_ld_vx_dt),
    Instruction("Fx0A", "LD", handlers.op_ld_key),
    Instruction("Fx15", "LD", handlers.op_ld_dt_vx),
    Instruction("Fx18", "LD", handlers.op_ld_st_vx),
    Instruction("Fx1E", "ADD", handlers.op_add_index),
    Instruction("Fx29", "LD", handlers.op_ld_font),
    Instruction("Fx33", "LD", handlers.op_ld_bcd),
    Instruction("Fx55", "LD", handlers.op_store_registers),
    Instruction("Fx65", "LD", handlers.op_load_registers),
)
