# yourvm

A small 16-bit virtual machine. The package has these parts:

- an assembler for a compact instruction set,
- a decoder,
- a CPU with eight 16-bit registers and a stack,
- a memory bus with 32K words of RAM attached.

## Installation

```
pip install .
```

## Command line

```
yourvm
yourvm program.asm
```

With no argument the command assembles a short built-in program. With a file argument it assembles the lines of that file. It prints each machine word as 16 binary digits, runs the program until `HALT`, and then prints registers 1 to 4 as lines of the form `Register 1: 42`.

Assembly errors, runtime faults and unreadable files are reported on standard error as `Error: ...`, and the command exits with status 1.

## Using the library

```python
from yourvm.bus import Bus, BusController
from yourvm.ram import RAM
from yourvm.cpu import CPU
from yourvm.encoder import encode_program

controller = BusController()
controller.add_device(RAM())
cpu = CPU(Bus(), controller)

code = encode_program([
    "MOVI R1, #10",
    "MOVI R2, #20",
    "ADD R1, R2",
    "HALT",
])
cpu.load_program(code, 0x0000)
cpu.execute()
print(cpu.register(1))  # 30
```

### Modules

- `yourvm.bus`
  - `Bus` is a dataclass with the fields `address`, `data`, `read` and `write`.
  - `BusDevice` is the abstract base class for devices. It declares `in_range`, `read` and `write`.
  - `BusController` holds a list of devices. `add_device` adds a device to it. `tick` passes the current transfer to the first device that claims the address.
- `yourvm.ram`
  - `RAM` is a `BusDevice` that holds 32K 16-bit words at `0x0000`–`0x7FFF`. `len(ram)` is `0x8000`.
- `yourvm.decoder`
  - `Instruction` is an `IntEnum` of the opcodes.
  - `decode_instruction(word)` returns a `DecodedInstruction` with the fields `raw`, `opcode`, `reg1`, `reg2` and `imm`.
- `yourvm.encoder`
  - `encode_program(lines)` returns a list of machine words.
  - `encode_register` and `encode_immediate` parse single operands.
  - `OperandFormat` lists the operand layouts.
- `yourvm.cpu`
  - `CPU(bus, controller)` has these methods:
    - `load_program(words, start_address)` writes the words into memory.
    - `step()` executes one instruction.
    - `execute()` runs until `HALT`.
    - `register(index)` reads a register. It raises `IndexError` for an index outside 0–7.
  - The state of the CPU is in the attributes `registers`, `program_counter`, `stack_pointer`, `zero_flag` and `halted`.
- `yourvm.cli`
  - `main(argv=None)` is the command line entry point. It returns the exit status.

## Instruction format

Every instruction is one 16-bit word:

| bits  | field                                     |
|-------|-------------------------------------------|
| 15–11 | opcode                                    |
| 10–8  | first register                            |
| 7–5   | second register                           |
| 7–0   | 8-bit immediate (MOVI, IN, OUT)           |
| 10–0  | 11-bit immediate (JMP, JZ, JNZ, CALL)     |

## Assembly syntax

- Registers are written `R0` to `R7`.
- Immediates are written `#42`.
- Operands are separated by whitespace, and a trailing comma on any operand is dropped.
- Blank lines are skipped.

| mnemonic                                  | operands       |
|-------------------------------------------|----------------|
| MOV, LD, ST, ADD, SUB, CMP, AND, OR, XOR  | `Rd, Rs`       |
| MOVI, IN, OUT                             | `Rd, #imm8`    |
| SHL, SHR, PUSH, POP                       | `Rd`           |
| JMP, JZ, JNZ, CALL                        | `#imm11`       |
| RET, HALT                                 | none           |

Arithmetic wraps at 16 bits. Each instruction that writes a register sets the zero flag from the new value. `CMP` sets the zero flag when its two registers are equal.

### Errors

Malformed source raises `yourvm.encoder.AssemblyError`, which is a subclass of `ValueError`. Examples are an unknown mnemonic, a wrong operand count, a bad register and an out-of-range immediate.

Runtime faults raise `yourvm.cpu.CPUError`. Examples are an unknown opcode, a stack overflow and a stack underflow.

## Memory map

- RAM covers addresses `0x0000`–`0x7FFF`.
- The stack starts at `0x7FFF` and grows downwards.
- `IN` and `OUT` address `0xC000` plus their immediate.
- Reading an address that no device claims yields `0xFFFF`. Writing to such an address has no effect.

## What the package does not do

- No device is attached at the I/O addresses. `IN` therefore reads `0xFFFF`, and `OUT` writes go nowhere, unless you attach your own `BusDevice`.
- The assembler has no labels, comments or directives. Jump targets are plain addresses.

## Tests

```
pip install .[test]
pytest
```