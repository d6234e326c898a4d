"""The instruction-fetch unit that steps the program counter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rvsim.common import MASK32, DecodedInst

if TYPE_CHECKING:
    from rvsim.decoder import Decoder
    from rvsim.memory import MemoryUnit
    from rvsim.rob import ReorderBuffer


class InstructionUnit:
    """Holds the program counter and the instruction handed to the decoder."""

    def __init__(self) -> None:
        self.pc = 0
        self.inst = DecodedInst()
        self.stall = False
        self.ready = False
        self.addr = 0
        self._pc_next = 0
        self._inst_next = DecodedInst()
        self._stall_next = False
        self._ready_next = False

    def evaluate(self, rob: ReorderBuffer, decoder: Decoder, mu: MemoryUnit) -> None:
        """Choose the next program counter: reset target, jump target or next word."""
        if not rob.reset:
            if not decoder.ready:
                self._ready_next = True
                return
            if self.stall:
                self._ready_next = False
                self._stall_next = False
                return
        self._ready_next = True
        if rob.reset:
            self._pc_next = rob.pc
        elif decoder.set_pc:
            self._pc_next = decoder.pc
        else:
            self._pc_next = (self.pc + 4) & MASK32

    def reset(self) -> None:
        """Ask for a one-cycle stall."""
        self._stall_next = True

    def update(self) -> None:
        """Latch the staged state."""
        self.pc = self._pc_next
        self.inst = self._inst_next
        self.stall = self._stall_next
        self.ready = self._ready_next