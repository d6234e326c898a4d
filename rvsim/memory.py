"""Byte-addressed main memory and the multi-cycle memory unit."""

from __future__ import annotations

from typing import Iterable, Protocol

from rvsim.common import MASK32, PAGE_SIZE, Inst

MEMORY_SIZE = 128 * PAGE_SIZE
MEMORY_LATENCY = 3


class _ResetSource(Protocol):
    reset: bool


class Memory:
    """Little-endian byte memory of a fixed size."""

    def __init__(self) -> None:
        self._data = bytearray(MEMORY_SIZE)

    def load_hex(self, stream: Iterable[str]) -> None:
        """Read a hex image: '@addr' lines set the address, other lines hold bytes.

        Bytes are taken in groups of four; each group advances the address by
        four and stores the low byte of the assembled word. A trailing group of
        fewer than four bytes on a line is dropped.
        """
        addr = 0
        for raw in stream:
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            if line.startswith("@"):
                addr = int(line[1:].strip(), 16)
                continue
            tokens = iter(line.split())
            for group in zip(tokens, tokens, tokens, tokens):
                word = 0
                for shift, token in enumerate(group):
                    word |= int(token, 16) << (shift * 8)
                self.store_byte(addr, word & 0xFF)
                addr += 4

    def _span(self, addr: int, width: int) -> slice:
        if addr < 0 or addr + width > MEMORY_SIZE:
            raise IndexError(f"address {addr:#x} out of range")
        return slice(addr, addr + width)

    def _load(self, addr: int, width: int) -> int:
        return int.from_bytes(self._data[self._span(addr, width)], "little")

    def _store(self, addr: int, width: int, value: int) -> None:
        span = self._span(addr, width)
        self._data[span] = (value & ((1 << (8 * width)) - 1)).to_bytes(width, "little")

    def load_byte(self, addr: int) -> int:
        return self._load(addr, 1)

    def load_half(self, addr: int) -> int:
        return self._load(addr, 2)

    def load_word(self, addr: int) -> int:
        return self._load(addr, 4)

    def store_byte(self, addr: int, value: int) -> None:
        self._store(addr, 1, value)

    def store_half(self, addr: int, value: int) -> None:
        self._store(addr, 2, value)

    def store_word(self, addr: int, value: int) -> None:
        self._store(addr, 4, value)


_LOADS = (Inst.LB, Inst.LBU, Inst.LH, Inst.LHU, Inst.LW)


class MemoryUnit:
    """Performs one load or store, finishing a fixed number of cycles after issue."""

    def __init__(self) -> None:
        self.remain = 0
        self.addr = 0
        self.value = 0
        self.type = Inst.ADD
        self.rob_id = 0
        self.ready = False
        self._remain_next = 0
        self._addr_next = 0
        self._value_next = 0
        self._type_next = Inst.ADD
        self._rob_id_next = 0
        self._ready_next = False

    def load(self, addr: int, rob_id: int, value: int, inst: Inst) -> None:
        """Stage a memory operation."""
        self._remain_next = MEMORY_LATENCY
        self._addr_next = addr
        self._rob_id_next = rob_id
        self._type_next = inst
        self._value_next = value & MASK32
        self._ready_next = False

    def evaluate(self, mem: Memory, rob: _ResetSource) -> None:
        """Count down the pending operation and carry it out when it is due."""
        if rob.reset:
            self._ready_next = False
            self._remain_next = 0
            self._addr_next = 0
            self._rob_id_next = 0
            self._value_next = 0
            self._type_next = Inst.NULL
            return
        if self.remain <= 0:
            return
        self._remain_next = self.remain - 1
        if self._remain_next != 0 or self.type == Inst.NULL:
            return
        self._ready_next = True
        addr = self._addr_next
        kind = self.type
        if kind in (Inst.LB, Inst.LBU):
            self._value_next = mem.load_byte(addr)
        elif kind in (Inst.LH, Inst.LHU):
            self._value_next = mem.load_half(addr)
        elif kind == Inst.LW:
            self._value_next = mem.load_word(addr)
        elif kind == Inst.SB:
            mem.store_byte(addr, self._value_next & 0x1)
        elif kind == Inst.SH:
            mem.store_half(addr, self._value_next & 0xFF)
        elif kind == Inst.SW:
            mem.store_word(addr, self._value_next)
        else:
            raise ValueError(f"memory unit meets invalid instruction {kind.name}")

    def update(self) -> None:
        """Latch the staged state."""
        self.remain = self._remain_next
        self.addr = self._addr_next
        self.value = self._value_next
        self.type = self._type_next
        self.rob_id = self._rob_id_next
        self.ready = self._ready_next
        self._ready_next = False