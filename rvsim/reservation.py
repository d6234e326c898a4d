"""The reservation station feeding the arithmetic unit."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from rvsim.alu import ALU
from rvsim.common import CAPACITY, Inst, RSEntry

if TYPE_CHECKING:
    from rvsim.lsb import LoadStoreBuffer
    from rvsim.rob import ReorderBuffer


def _capture(now: RSEntry, nxt: RSEntry, tag: int, value: int) -> None:
    """Copy a broadcast result into operands still waiting for ``tag``."""
    if now.dj and now.qj == tag:
        nxt.dj = False
        nxt.qj = 0
        nxt.vj = value
    if now.dk and now.qk == tag:
        nxt.dk = False
        nxt.qk = 0
        nxt.vk = value


class ReservationStation:
    """Sixteen slots of operations waiting for their operands."""

    def __init__(self, alu: ALU) -> None:
        self.alu = alu
        self.entries = [RSEntry() for _ in range(CAPACITY)]
        self.ready = False
        self.value = 0
        self.rob_id = 0
        self._entries_next = [RSEntry() for _ in range(CAPACITY)]

    def evaluate(self, rob: ReorderBuffer, lsb: LoadStoreBuffer) -> None:
        """Capture broadcast results and send one ready operation to the ALU."""
        if rob.reset:
            for entry in self._entries_next:
                entry.busy = False
            self.alu.load(Inst.NULL, 0, 0, 0)
            return
        mu = lsb.mu
        for now, nxt in zip(self.entries, self._entries_next):
            if not now.busy:
                continue
            if self.alu.ready:
                _capture(now, nxt, self.alu.rob_id, self.alu.value)
            if mu.ready:
                _capture(now, nxt, mu.rob_id, mu.value)
        for entry in self._entries_next:
            if entry.busy and not entry.dj and not entry.dk:
                self.alu.load(entry.inst, entry.vj, entry.vk, entry.dest)
                entry.busy = False
                return

    def update(self) -> None:
        """Latch the staged slots."""
        self.entries = [copy.copy(entry) for entry in self._entries_next]

    def full(self) -> bool:
        """Whether every latched slot is busy."""
        return all(entry.busy for entry in self.entries)

    def load(self, entry: RSEntry) -> None:
        """Stage an entry into the first free slot."""
        for index, slot in enumerate(self._entries_next):
            if not slot.busy:
                self._entries_next[index] = copy.copy(entry)
                return
        raise IndexError("Trying to add into a full list!")