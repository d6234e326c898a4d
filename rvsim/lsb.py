"""The load/store buffer in front of the memory unit."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rvsim.common import CAPACITY, Inst, RingList
from rvsim.memory import MemoryUnit

if TYPE_CHECKING:
    from rvsim.reservation import ReservationStation
    from rvsim.rob import ReorderBuffer


@dataclass
class LSBEntry:
    """A pending memory operation with its address base, data and immediate."""

    busy: bool = False
    wait: bool = False
    inst: Inst = Inst.ADD
    vj: int = 0
    vk: int = 0
    qj: int = 0
    qk: int = 0
    dest: int = 0
    imm: int = 0
    dj: bool = False
    dk: bool = False


def _capture(now: LSBEntry, nxt: LSBEntry, tag: int, value: int) -> None:
    """Copy a broadcast result into operands still waiting for ``tag``."""
    if now.dj and now.qj == tag:
        nxt.dj = False
        nxt.qj = 0
        nxt.vj = value
    if now.dk and now.qk == tag:
        nxt.dk = False
        nxt.qk = 0
        nxt.vk = value


def _filled() -> RingList:
    slots = RingList()
    for index in range(CAPACITY):
        slots[index] = LSBEntry()
    return slots


class LoadStoreBuffer:
    """Sixteen slots of loads and stores waiting for operands and their turn."""

    def __init__(self, mu: MemoryUnit) -> None:
        self.mu = mu
        self.entries = _filled()
        self._entries_next = _filled()

    def full(self) -> bool:
        """Whether every latched slot is busy."""
        return all(entry.busy for entry in self.entries)

    def load(self, entry: LSBEntry) -> None:
        """Stage an entry into the first free slot."""
        for index, slot in enumerate(self._entries_next):
            if not slot.busy:
                self._entries_next[index] = copy.copy(entry)
                return
        raise IndexError("Trying to add into a full list!")

    def evaluate(self, rs: ReservationStation, rob: ReorderBuffer) -> None:
        """Capture broadcast results and release entries at the head of the buffer."""
        if rob.reset:
            for entry in self._entries_next:
                entry.busy = False
            self.mu.load(0, 0, 0, Inst.NULL)
            return
        alu = rs.alu
        head_known = not rob.entries.empty()
        for now, nxt in zip(self.entries, self._entries_next):
            if alu.ready:
                _capture(now, nxt, alu.rob_id, alu.value)
            if self.mu.ready:
                _capture(now, nxt, self.mu.rob_id, self.mu.value)
            if head_known and now.wait and rob.entries.first == now.dest:
                nxt.wait = False

    def update(self) -> None:
        """Latch the staged slots."""
        self.entries = self._entries_next.copy()