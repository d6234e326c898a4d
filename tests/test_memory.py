import io

import pytest

from rvsim.common import Inst
from rvsim.memory import MEMORY_LATENCY, MEMORY_SIZE, Memory, MemoryUnit
from rvsim.rob import ReorderBuffer


@pytest.mark.parametrize("addr", [0, 0x100, MEMORY_SIZE - 4])
@pytest.mark.parametrize("value", [0, 0xDEADBEEF, 0xFFFFFFFF])
def test_word_round_trip(addr, value):
    mem = Memory()
    mem.store_word(addr, value)
    assert mem.load_word(addr) == value
    assert mem.load_half(addr) | mem.load_half(addr + 2) << 16 == value


def test_little_endian_layout():
    mem = Memory()
    mem.store_word(0, 0x12345678)
    assert mem.load_byte(0) == 0x78


def test_narrow_stores_truncate():
    mem = Memory()
    mem.store_byte(8, 0x1AB)
    mem.store_half(16, 0x12345)
    assert mem.load_byte(8) == 0xAB
    assert mem.load_half(16) == 0x2345
    assert mem.load_byte(9) == 0


@pytest.mark.parametrize("addr", [MEMORY_SIZE - 3, MEMORY_SIZE, -1])
def test_out_of_range_access_raises(addr):
    mem = Memory()
    with pytest.raises(IndexError):
        mem.load_word(addr)
    with pytest.raises(IndexError):
        mem.store_word(addr, 1)


def test_load_hex_stores_low_byte_per_group():
    mem = Memory()
    mem.load_hex(io.StringIO("@00000010\n01 02 03 04 05 06 07 08\n\n"))
    assert mem.load_byte(0x10) == 0x01
    assert mem.load_byte(0x14) == 0x05
    assert mem.load_byte(0x11) == 0


def test_load_hex_drops_incomplete_group():
    mem = Memory()
    mem.load_hex(["@0\n", "AA BB CC DD EE\n", "11 22 33 44\n"])
    assert mem.load_byte(0) == 0xAA
    assert mem.load_byte(4) == 0x11


def test_load_hex_rejects_bad_digits():
    mem = Memory()
    with pytest.raises(ValueError):
        mem.load_hex(["zz 00 00 00\n"])


def run_unit(mem, addr, value, inst, rob_id=7):
    rob = ReorderBuffer()
    mu = MemoryUnit()
    mu.load(addr, rob_id, value, inst)
    mu.update()
    for _ in range(MEMORY_LATENCY):
        assert mu.ready is False
        mu.evaluate(mem, rob)
        mu.update()
    return mu


def test_load_word_completes_after_latency():
    mem = Memory()
    mem.store_word(0x100, 0xDEADBEEF)
    mu = run_unit(mem, 0x100, 0, Inst.LW)
    assert mu.ready is True
    assert mu.value == 0xDEADBEEF
    assert mu.rob_id == 7
    mu.update()
    assert mu.ready is False


def test_store_word_then_load_back():
    mem = Memory()
    run_unit(mem, 0x40, 0xCAFEF00D, Inst.SW)
    mu = run_unit(mem, 0x40, 0, Inst.LW)
    assert mu.value == 0xCAFEF00D


def test_store_byte_keeps_only_lowest_bit():
    mem = Memory()
    run_unit(mem, 0x20, 0xFF, Inst.SB)
    assert mem.load_byte(0x20) == 0x1


def test_reset_clears_pending_operation():
    mem = Memory()
    rob = ReorderBuffer()
    mu = MemoryUnit()
    mu.load(0x10, 3, 0, Inst.LW)
    mu.update()
    rob.reset = True
    mu.evaluate(mem, rob)
    mu.update()
    assert mu.remain == 0
    assert mu.type == Inst.NULL
    assert mu.ready is False


def test_invalid_instruction_raises():
    mem = Memory()
    with pytest.raises(ValueError):
        run_unit(mem, 0, 0, Inst.ADD)