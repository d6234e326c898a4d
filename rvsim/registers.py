"""The architectural register file with rename tags."""

from __future__ import annotations

from rvsim.common import MASK32

REGISTER_COUNT = 32


class RegisterFile:
    """Thirty-two registers, each with a value, a busy flag and a producer tag."""

    def __init__(self) -> None:
        self.r = [0] * REGISTER_COUNT
        self.q = [0] * REGISTER_COUNT
        self.b = [False] * REGISTER_COUNT
        self._r_next = [0] * REGISTER_COUNT
        self._q_next = [0] * REGISTER_COUNT
        self._b_next = [False] * REGISTER_COUNT

    def evaluate(self, reset: bool) -> None:
        """On reset, drop every pending rename."""
        if reset:
            self._q_next = [0] * REGISTER_COUNT
            self._b_next = [False] * REGISTER_COUNT

    def set_busy(self, index: int, rob_id: int) -> None:
        """Mark a register as waiting for the given reorder-buffer entry."""
        self._q_next[index] = rob_id
        self._b_next[index] = True

    def set_val(self, index: int, value: int) -> None:
        """Write a value and clear the busy flag."""
        self._r_next[index] = value & MASK32
        self._b_next[index] = False

    def __getitem__(self, index: int) -> int:
        return self.r[index]

    def update(self) -> None:
        """Latch pending writes; register zero always reads as zero."""
        self._b_next[0] = False
        self._q_next[0] = 0
        self._r_next[0] = 0
        self.r = list(self._r_next)
        self.b = list(self._b_next)
        self.q = list(self._q_next)
        self._q_next = [0] * REGISTER_COUNT
        self._b_next = [False] * REGISTER_COUNT