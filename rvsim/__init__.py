"""Cycle-level units for an out-of-order RV32I processor simulator: decoder, ALU, registers, buffers and memory."""

__version__ = "0.1.0"