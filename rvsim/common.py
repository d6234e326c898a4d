"""Shared instruction kinds, entries and the fixed-capacity ring list."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass
from typing import Any

PAGE_SIZE = 4096
CAPACITY = 16
MASK32 = 0xFFFFFFFF


class Inst(enum.IntEnum):
    """Every instruction kind the simulator knows, plus NULL for 'none'."""

    ADD = 0
    SUB = enum.auto()
    AND = enum.auto()
    OR = enum.auto()
    XOR = enum.auto()
    SLL = enum.auto()
    SRL = enum.auto()
    SRA = enum.auto()
    SLT = enum.auto()
    SLTU = enum.auto()
    ADDI = enum.auto()
    ANDI = enum.auto()
    ORI = enum.auto()
    XORI = enum.auto()
    SLLI = enum.auto()
    SRLI = enum.auto()
    SRAI = enum.auto()
    SLTI = enum.auto()
    SLTIU = enum.auto()
    LB = enum.auto()
    LBU = enum.auto()
    LH = enum.auto()
    LHU = enum.auto()
    LW = enum.auto()
    SB = enum.auto()
    SH = enum.auto()
    SW = enum.auto()
    BEQ = enum.auto()
    BGE = enum.auto()
    BGEU = enum.auto()
    BLT = enum.auto()
    BLTU = enum.auto()
    BNE = enum.auto()
    JAL = enum.auto()
    JALR = enum.auto()
    AUIPC = enum.auto()
    LUI = enum.auto()
    NULL = enum.auto()


@dataclass
class DecodedInst:
    """An instruction split into its kind, register numbers and immediate."""

    inst: Inst = Inst.ADD
    rs1: int = 0
    rs2: int = 0
    rd: int = 0
    imm: int = 0


@dataclass
class RSEntry:
    """A reservation-station slot: operands are values (V) or producer tags (Q)."""

    busy: bool = False
    inst: Inst = Inst.ADD
    vj: int = 0
    vk: int = 0
    qj: int = 0
    qk: int = 0
    dest: int = 0
    dj: bool = False
    dk: bool = False


class RingList:
    """A circular queue of fixed capacity whose slots are addressed directly."""

    def __init__(self) -> None:
        self._slots: list[Any] = [None] * CAPACITY
        self.first = 0
        self.last = 0
        self.size = 0

    def full(self) -> bool:
        return self.size == CAPACITY

    def empty(self) -> bool:
        return self.size == 0

    def _check(self, index: int) -> None:
        if not 0 <= index < CAPACITY:
            raise IndexError(f"slot {index} out of range")

    def __getitem__(self, index: int) -> Any:
        self._check(index)
        return self._slots[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self._check(index)
        self._slots[index] = value

    def __len__(self) -> int:
        return self.size

    def pop(self) -> None:
        """Drop the oldest element; does nothing when empty."""
        if self.empty():
            return
        self.first = (self.first + 1) % CAPACITY
        self.size -= 1

    def push(self, value: Any) -> int:
        """Append a value and return the index of the slot after it."""
        if self.full():
            raise IndexError("push onto a full list")
        self._slots[self.last] = value
        self.last = (self.last + 1) % CAPACITY
        self.size += 1
        return self.last

    def copy(self) -> RingList:
        """Return an independent copy, entries included."""
        other = RingList()
        other._slots = [copy.copy(item) for item in self._slots]
        other.first = self.first
        other.last = self.last
        other.size = self.size
        return other