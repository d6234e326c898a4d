# rvsim

Building blocks for a cycle-level, out-of-order simulator of the RV32I
instruction set, organised around Tomasulo's algorithm.

Every clocked unit follows the same two-phase discipline:

* `evaluate(...)` reads the *current* state of the unit and of its
  neighbours and stages the *next* state;
* `update()` latches the staged state so that it becomes current.

Calling `evaluate` on every unit and then `update` on every unit advances the
machine by one clock cycle.

## Components

| Module              | Class(es)                                    | Role |
|---------------------|----------------------------------------------|------|
| `rvsim.common`      | `Inst`, `DecodedInst`, `RSEntry`, `RingList` | Instruction kinds, decoded fields, 16-slot circular queue |
| `rvsim.alu`         | `ALU`                                        | Integer and branch-comparison arithmetic |
| `rvsim.registers`   | `RegisterFile`                               | 32 registers with busy flags and reorder-buffer tags |
| `rvsim.rob`         | `RoBEntry`, `ReorderBuffer`                  | Program-order queue of in-flight instructions |
| `rvsim.memory`      | `Memory`, `MemoryUnit`                       | 512 KiB byte-addressed RAM and a three-cycle memory port |
| `rvsim.reservation` | `ReservationStation`                         | Holds ALU operations until their operands arrive |
| `rvsim.lsb`         | `LSBEntry`, `LoadStoreBuffer`                | Holds loads and stores until their operands arrive |
| `rvsim.decoder`     | `Decoder`, `InvalidInstruction`              | Decodes 32-bit words and issues them |
| `rvsim.fetch`       | `InstructionUnit`                            | Program counter of the fetch stage |

## Installation

```
pip install .
```

Install the `test` extra to run the test suite:

```
pip install .[test]
pytest
```

## Examples

Decoding an instruction word:

```python
from rvsim.decoder import Decoder
from rvsim.common import Inst

decoded = Decoder().decode(0x002081B3)  # add x3, x1, x2
assert decoded.inst is Inst.ADD
assert (decoded.rd, decoded.rs1, decoded.rs2) == (3, 1, 2)
```

Words that do not encode a supported instruction raise
`rvsim.decoder.InvalidInstruction` (a `ValueError`).

Driving the ALU for one cycle:

```python
from rvsim.alu import ALU
from rvsim.common import Inst

alu = ALU()
alu.load(Inst.ADD, 2, 3, rob_id=1)
alu.update()
assert alu.ready and alu.value == 5
```

Reading a program image in the `@address` / hex-byte text format:

```python
import io
from rvsim.memory import Memory

mem = Memory()
mem.load_hex(io.StringIO("@00000010\n37 01 02 00\n"))
assert mem.load_byte(0x10) == 0x37
```

`Memory.load_hex` takes the bytes of each line in groups of four, assembles
them little-endian, stores the low byte of the result at the current address
and moves the address on by four. Bytes left over at the end of a line are
dropped.

## Behaviour worth knowing

* Values are handled as 32-bit unsigned quantities; additions and
  subtractions wrap modulo 2**32.
* The ALU masks the result of every shift (`SLL`, `SRL`, `SRA` and their
  immediate forms) to its low five bits.
* `MemoryUnit` completes an operation three cycles after `load`. Byte and
  halfword loads are zero-extended; `SB` stores only bit 0 of its value and
  `SH` only the low eight bits.
* `Memory` raises `IndexError` for accesses outside its 512 KiB;
  `RingList.push` raises `IndexError` when the list is full, and
  `ReservationStation.load` / `LoadStoreBuffer.load` raise `IndexError` when
  every slot is taken.
* `Decoder.evaluate` issues register-register and register-immediate
  operations into the reservation station and loads and stores into the
  load/store buffer, stalling fetch when the target is full. For branches,
  `JAL` and `JALR` it stalls fetch while `rs1` is busy and otherwise raises
  `InvalidInstruction`, as it does for `LUI` and `AUIPC`.

## What the package does not do

It is a set of units, not a runnable simulator:

* There is no command and no top-level CPU object that wires the units
  together and clocks them.
* `InstructionUnit` steps the program counter but does not read instruction
  words from memory; its `inst` is never filled from a fetch.
* `ReorderBuffer` stages entries with `push` but has no clock step of its own,
  so nothing moves staged entries into its current view, commits them to the
  register file or retires them.
* Branches and jumps are not executed, and `LoadStoreBuffer` never hands its
  entries to the memory unit on its own.