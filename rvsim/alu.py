"""Arithmetic and comparison unit with a one-cycle staged input."""

from __future__ import annotations

from rvsim.common import MASK32, Inst


def _signed(value: int) -> int:
    value &= MASK32
    return value - (1 << 32) if value & 0x80000000 else value


class ALU:
    """Computes one result per cycle from inputs latched on the previous cycle."""

    def __init__(self) -> None:
        self.ready = False
        self.inst = Inst.ADD
        self.in1 = 0
        self.in2 = 0
        self.rob_id = 0
        self.value = 0
        self._ready_next = False
        self._inst_next = Inst.ADD
        self._in1_next = 0
        self._in2_next = 0
        self._rob_id_next = 0

    def load(self, inst: Inst, in1: int, in2: int, rob_id: int) -> None:
        """Stage an operation for the next update."""
        self._inst_next = inst
        self._in1_next = in1 & MASK32
        self._in2_next = in2 & MASK32
        self._ready_next = inst != Inst.NULL
        self._rob_id_next = rob_id

    def evaluate(self) -> None:
        """The unit has no combinational work of its own."""

    def cal(self) -> int:
        """Return the result of the current operation on the current inputs."""
        a, b, inst = self.in1, self.in2, self.inst
        if inst in (Inst.ADDI, Inst.ADD):
            return (a + b) & MASK32
        if inst == Inst.SUB:
            return (a - b) & MASK32
        if inst in (Inst.ANDI, Inst.AND):
            return a & b
        if inst in (Inst.ORI, Inst.OR):
            return a | b
        if inst in (Inst.XORI, Inst.XOR):
            return a ^ b
        # The shift results are masked to five bits after shifting.
        if inst in (Inst.SLLI, Inst.SLL):
            return (a << b) & 0x1F
        if inst in (Inst.SRLI, Inst.SRL):
            return (a >> b) & 0x1F
        if inst in (Inst.SRAI, Inst.SRA):
            return (_signed(a) >> b) & 0x1F
        if inst in (Inst.SLTI, Inst.SLT):
            return int(_signed(a) < _signed(b))
        if inst in (Inst.SLTIU, Inst.SLTU):
            return int(a < b)
        if inst == Inst.BEQ:
            return int(a == b)
        if inst == Inst.BGE:
            return int(_signed(a) >= _signed(b))
        if inst == Inst.BGEU:
            return int(a >= b)
        if inst == Inst.BLT:
            return int(_signed(a) < _signed(b))
        if inst == Inst.BLTU:
            return int(a < b)
        if inst == Inst.BNE:
            return int(a != b)
        return 0

    def update(self) -> None:
        """Latch the staged inputs and compute the result."""
        self.ready = self._ready_next
        self._ready_next = False
        self.inst = self._inst_next
        self.in1 = self._in1_next
        self.in2 = self._in2_next
        self.rob_id = self._rob_id_next
        self.value = self.cal()