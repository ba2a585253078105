from __future__ import annotations

import pytest

from pychip8.bus import MEMORY_SIZE, Memory, MemoryFault


def test_memory_defaults() -> None:
    memory = Memory()
    assert len(memory) == MEMORY_SIZE == 0x1000
    assert memory.snapshot() == bytes(0x1000)


def test_store_and_load_bytes() -> None:
    memory = Memory()
    memory.store8(0x123, 0x1AB)
    assert memory.load8(0x123) == 0xAB


def test_load16_is_big_endian() -> None:
    memory = Memory()
    memory.store_block(0x200, (0x12, 0x34))
    assert memory.load16(0x200) == 0x1234


def test_addresses_are_masked_by_default() -> None:
    memory = Memory()
    memory.store8(0x1005, 0x77)
    assert memory.load8(0x005) == 0x77
    assert memory.resolve(0xFFF) == 0xFFF
    assert memory.resolve(0x1000) == 0x000


def test_block_wraps_past_end_by_default() -> None:
    memory = Memory()
    memory.store_block(0xFFE, (1, 2, 3))
    assert memory.load8(0xFFE) == 1
    assert memory.load8(0xFFF) == 2
    assert memory.load8(0x000) == 3
    assert memory.load_block(0xFFF, 2) == bytes((2, 3))


def test_strict_memory_accepts_last_byte() -> None:
    memory = Memory(strict=True)
    memory.store8(0xFFF, 0x42)
    assert memory.load8(0xFFF) == 0x42


@pytest.mark.parametrize("address", [0x1000, 0x1FFF, -1])
def test_strict_memory_rejects_out_of_range(address: int) -> None:
    memory = Memory(strict=True)
    with pytest.raises(MemoryFault):
        memory.load8(address)
    with pytest.raises(MemoryFault):
        memory.store8(address, 0)


def test_strict_block_write_is_all_or_nothing() -> None:
    memory = Memory(strict=True)
    with pytest.raises(MemoryFault):
        memory.store_block(0xFFE, (1, 2, 3))
    assert memory.load8(0xFFE) == 0
    assert memory.load8(0xFFF) == 0


def test_strict_fetch_across_end_faults() -> None:
    memory = Memory(strict=True)
    with pytest.raises(MemoryFault):
        memory.load16(0xFFF)


def test_clear_range() -> None:
    memory = Memory()
    memory.store_block(0x1FE, (1, 2, 3, 4))
    memory.clear(0, 0x200)
    assert memory.load_block(0x1FE, 4) == bytes((0, 0, 3, 4))


def test_size_must_be_power_of_two() -> None:
    with pytest.raises(ValueError):
        Memory(size=3000)
