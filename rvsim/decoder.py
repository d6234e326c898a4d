"""Instruction decoding and issue into the station, buffer and reorder buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rvsim.common import MASK32, DecodedInst, Inst, RSEntry
from rvsim.lsb import LSBEntry
from rvsim.rob import RoBEntry

if TYPE_CHECKING:
    from rvsim.fetch import InstructionUnit
    from rvsim.lsb import LoadStoreBuffer
    from rvsim.registers import RegisterFile
    from rvsim.reservation import ReservationStation
    from rvsim.rob import ReorderBuffer


class InvalidInstruction(ValueError):
    """Raised for an encoding or instruction kind that cannot be handled."""


_R_FUNCT = {
    0b0000000000: Inst.ADD,
    0b0000100000: Inst.SUB,
    0b1110000000: Inst.AND,
    0b1100000000: Inst.OR,
    0b1000000000: Inst.XOR,
    0b0010000000: Inst.SLL,
    0b1010000000: Inst.SRL,
    0b1010100000: Inst.SRA,
    0b0100000000: Inst.SLT,
    0b0110000000: Inst.SLTU,
}

_OP_IMM_FUNCT3 = {
    0b000: Inst.ADDI,
    0b111: Inst.ANDI,
    0b110: Inst.ORI,
    0b100: Inst.XORI,
    0b010: Inst.SLTI,
    0b011: Inst.SLTIU,
}

_LOAD_FUNCT3 = {
    0b000: Inst.LB,
    0b100: Inst.LBU,
    0b001: Inst.LH,
    0b101: Inst.LHU,
    0b010: Inst.LW,
}

_STORE_FUNCT3 = {0b000: Inst.SB, 0b001: Inst.SH, 0b010: Inst.SW}

_BRANCH_FUNCT3 = {
    0b000: Inst.BEQ,
    0b101: Inst.BGE,
    0b111: Inst.BGEU,
    0b100: Inst.BLT,
    0b110: Inst.BLTU,
    0b001: Inst.BNE,
}

_R_OPS = frozenset(_R_FUNCT.values())
_I_OPS = frozenset(
    {Inst.ADDI, Inst.SLLI, Inst.SLTI, Inst.SLTIU, Inst.XORI, Inst.SRLI, Inst.SRAI, Inst.ORI, Inst.ANDI}
)
_LOAD_OPS = frozenset(_LOAD_FUNCT3.values())
_STORE_OPS = frozenset(_STORE_FUNCT3.values())
_CONTROL_OPS = frozenset(_BRANCH_FUNCT3.values()) | {Inst.JAL, Inst.JALR}


def _signed32(word: int) -> int:
    word &= MASK32
    return word - (1 << 32) if word & 0x80000000 else word


def _lookup(table: dict[int, Inst], key: int) -> Inst:
    try:
        return table[key]
    except KeyError:
        raise InvalidInstruction("Invalid instruction") from None


def _operand(reg: RegisterFile, index: int) -> tuple[int, int, bool]:
    """Return (value, tag, pending) for a source register."""
    if reg.b[index]:
        return 0, reg.q[index], True
    return reg[index], 0, False


class Decoder:
    """Turns fetched words into entries for the execution units."""

    def __init__(self) -> None:
        self.set_pc = False
        self.pc = 0
        self.ready = False
        self._set_pc_next = False
        self._pc_next = 0
        self._ready_next = False

    def decode(self, word: int) -> DecodedInst:
        """Split a 32-bit instruction word into its fields."""
        x = _signed32(word)
        inst = DecodedInst()
        opcode = x & 0x7F
        if opcode == 0b0110011:
            funct = (((x >> 12) & 0x7) << 7) | ((x >> 25) & 0x7F)
            inst.rd = (x >> 7) & 0x1F
            inst.rs1 = (x >> 15) & 0x1F
            inst.rs2 = (x >> 20) & 0x1F
            inst.inst = _lookup(_R_FUNCT, funct)
        elif opcode == 0b0010011:
            funct3 = (x >> 12) & 0x7
            inst.rd = (x >> 7) & 0x1F
            inst.rs1 = (x >> 15) & 0x7
            if funct3 == 0b001:
                inst.inst = Inst.SLLI
                inst.imm = (x >> 20) & 0x1F
            elif funct3 == 0b101:
                funct7 = (x >> 25) & 0x7F
                inst.imm = (x >> 20) & 0x1F
                inst.inst = _lookup({0b0000000: Inst.SRLI, 0b0100000: Inst.SRAI}, funct7)
            else:
                inst.inst = _lookup(_OP_IMM_FUNCT3, funct3)
                inst.imm = (x >> 20) & MASK32
        elif opcode == 0b0000011:
            inst.rd = (x >> 7) & 0x1F
            inst.rs1 = (x >> 15) & 0x7
            inst.imm = (x >> 20) & MASK32
            inst.inst = _lookup(_LOAD_FUNCT3, (x >> 12) & 0x7)
        elif opcode == 0b0100011:
            inst.rs1 = (x >> 15) & 0x1F
            inst.rs2 = (x >> 20) & 0x1F
            inst.imm = (((x >> 25) << 5) | ((x >> 7) & 0x1F)) & MASK32
            inst.inst = _lookup(_STORE_FUNCT3, (x >> 12) & 0x7)
        elif opcode == 0b1100011:
            inst.rs1 = (x >> 15) & 0x1F
            inst.rs2 = (x >> 20) & 0x1F
            imm12 = (x >> 31) & 0x1
            imm10_5 = (x >> 25) & 0x3F
            imm4_1 = (x >> 8) & 0xF
            imm11 = (x >> 7) & 0x1
            inst.imm = (imm12 << 12) | (imm11 << 11) | (imm10_5 << 5) | (imm4_1 << 1)
            inst.inst = _lookup(_BRANCH_FUNCT3, (x >> 12) & 0x7)
        elif opcode == 0b1101111:
            imm20 = (x >> 31) & 0x1
            imm10_1 = (x >> 21) & 0x3FF
            imm11 = (x >> 20) & 0x1
            imm19_12 = (x >> 12) & 0xFF
            inst.imm = (imm20 << 20) | (imm19_12 << 12) | (imm11 << 11) | (imm10_1 << 1)
            inst.rd = (x >> 7) & 0x1F
            inst.inst = Inst.JAL
        elif opcode == 0b1100111:
            inst.imm = (x >> 20) & MASK32
            inst.rd = (x >> 7) & 0x1F
            inst.rs1 = (x >> 15) & 0x1F
            inst.inst = Inst.JALR
        elif opcode == 0b0010111:
            inst.imm = x & 0xFFFFF000
            inst.rd = (x >> 7) & 0x1F
            inst.inst = Inst.AUIPC
        elif opcode == 0b0110111:
            inst.imm = x & 0xFFFFF000
            inst.rd = (x >> 7) & 0x1F
            inst.inst = Inst.LUI
        else:
            raise InvalidInstruction("Invalid instruction")
        return inst

    def _stall(self, iu: InstructionUnit) -> None:
        self._ready_next = False
        iu.reset()

    def evaluate(
        self,
        rs: ReservationStation,
        lsb: LoadStoreBuffer,
        iu: InstructionUnit,
        rob: ReorderBuffer,
        reg: RegisterFile,
    ) -> None:
        """Issue the fetched instruction, or stall fetch when there is no room."""
        if rob.reset:
            self._ready_next = True
            return
        if not iu.ready:
            return
        if rob.full():
            iu.reset()
            return
        self._ready_next = True
        inst = iu.inst
        kind = inst.inst

        if kind in _R_OPS or kind in _I_OPS:
            if rs.full():
                self._stall(iu)
                return
            rob_id = rob.push(RoBEntry(inst, False, inst.rd, 0))
            vj, qj, dj = _operand(reg, inst.rs1)
            if kind in _R_OPS:
                vk, qk, dk = _operand(reg, inst.rs2)
            else:
                vk, qk, dk = inst.imm, 0, False
            rs.load(RSEntry(True, kind, vj, vk, qj, qk, rob_id, dj, dk))
            return

        if kind in _LOAD_OPS or kind in _STORE_OPS:
            if lsb.full():
                self._stall(iu)
                return
            rob_id = rob.push(RoBEntry(inst, False, inst.rd, 0))
            vj, qj, dj = _operand(reg, inst.rs1)
            if kind in _STORE_OPS:
                vk, qk, dk = _operand(reg, inst.rs2)
            else:
                vk, qk, dk = 0, 0, False
            lsb.load(LSBEntry(True, False, kind, vj, vk, qj, qk, rob_id, inst.imm, dj, dk))
            return

        if kind in _CONTROL_OPS and reg.b[inst.rs1]:
            self._stall(iu)
            return
        raise InvalidInstruction("Invalid instruction!")

    def update(self) -> None:
        """Latch the staged state."""
        self.set_pc = self._set_pc_next
        self.pc = self._pc_next
        self.ready = self._ready_next
        self._set_pc_next = False
        self._ready_next = False