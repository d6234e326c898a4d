import pytest

from rvsim.alu import ALU
from rvsim.common import MASK32, Inst


def run(inst, a, b, rob_id=0):
    alu = ALU()
    alu.load(inst, a, b, rob_id)
    alu.evaluate()
    alu.update()
    return alu


@pytest.mark.parametrize("a,b", [(2, 3), (MASK32, 1), (0x80000000, 0x80000000), (7, 0)])
@pytest.mark.parametrize("add_kind", [Inst.ADD, Inst.ADDI])
def test_add_then_sub_round_trip(a, b, add_kind):
    total = run(add_kind, a, b).value
    assert run(Inst.SUB, total, b).value == a


def test_add_wraps_to_32_bits():
    assert run(Inst.ADD, MASK32, 1).value == 0


@pytest.mark.parametrize("x,y", [(0x1234, 0xFF00), (MASK32, 0x55555555)])
def test_bitwise_identities(x, y):
    assert run(Inst.AND, x, x).value == x
    assert run(Inst.ORI, x, 0).value == x
    once = run(Inst.XOR, x, y).value
    assert run(Inst.XORI, once, y).value == x


def test_signed_and_unsigned_compare_differ():
    signed = run(Inst.SLT, MASK32, 0).value
    unsigned = run(Inst.SLTU, MASK32, 0).value
    assert (signed, unsigned) == (1, 0)


@pytest.mark.parametrize("inst", [Inst.SLL, Inst.SLLI, Inst.SRL, Inst.SRLI, Inst.SRA, Inst.SRAI])
@pytest.mark.parametrize("a,b", [(MASK32, 0), (0x12345678, 3), (0x80000000, 31)])
def test_shift_results_fit_five_bits(inst, a, b):
    assert 0 <= run(inst, a, b).value <= 0x1F


@pytest.mark.parametrize("a,b", [(5, 5), (5, 6), (MASK32, 1)])
def test_branch_conditions_are_complementary(a, b):
    assert run(Inst.BEQ, a, b).value + run(Inst.BNE, a, b).value == 1
    assert run(Inst.BLT, a, b).value + run(Inst.BGE, a, b).value == 1
    assert run(Inst.BLTU, a, b).value + run(Inst.BGEU, a, b).value == 1


def test_non_alu_instruction_yields_zero():
    assert run(Inst.LW, 4, 8).value == 0


def test_ready_follows_instruction_and_clears():
    alu = run(Inst.ADD, 1, 1, rob_id=9)
    assert alu.ready is True
    assert alu.rob_id == 9
    alu.update()
    assert alu.ready is False


def test_null_is_not_ready():
    assert run(Inst.NULL, 1, 2).ready is False