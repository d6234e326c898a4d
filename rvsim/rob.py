"""The reorder buffer and its entries."""

from __future__ import annotations

from dataclasses import dataclass, field

from rvsim.common import DecodedInst, RingList


@dataclass
class RoBEntry:
    """An in-flight instruction awaiting commit."""

    inst: DecodedInst = field(default_factory=DecodedInst)
    done: bool = False
    dest: int = 0
    value: int = 0


class ReorderBuffer:
    """Holds in-flight instructions in program order."""

    def __init__(self) -> None:
        self.entries = RingList()
        self.reset = False
        self.pc = 0
        self._entries_next = RingList()
        self._reset_next = False
        self._pc_next = 0

    def full(self) -> bool:
        """Whether the committed view of the buffer has no free slot."""
        return self.entries.full()

    def push(self, entry: RoBEntry) -> int:
        """Stage an entry and return the index after its slot."""
        return self._entries_next.push(entry)