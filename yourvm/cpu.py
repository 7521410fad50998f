"""A 16-bit CPU with eight registers that runs programs from bus-attached memory."""

from __future__ import annotations

from collections.abc import Iterable

from yourvm.bus import Bus, BusController
from yourvm.decoder import DecodedInstruction, Instruction, decode_instruction

WORD_MASK = 0xFFFF
PROGRAM_START = 0x0000
STACK_BASE = 0x7FFF
IO_BASE = 0xC000
REGISTER_COUNT = 8


class CPUError(RuntimeError):
    """Raised when the CPU cannot carry on executing."""


class CPU:
    """Fetches, decodes and executes instructions over a shared bus."""

    def __init__(self, bus: Bus, controller: BusController) -> None:
        self.bus = bus
        self.controller = controller
        self.registers = [0] * REGISTER_COUNT
        self.stack_pointer = STACK_BASE
        self.program_counter = PROGRAM_START
        self.carry_flag = False
        self.zero_flag = False
        self.halted = False

    def load_program(self, program: Iterable[int], start_address: int = PROGRAM_START) -> None:
        """Write machine words to consecutive addresses starting at ``start_address``."""
        address = start_address
        for word in program:
            self._bus_write(address, word)
            address = (address + 1) & WORD_MASK

    def step(self) -> None:
        """Fetch and execute the instruction at the program counter."""
        word = self._bus_read(self.program_counter)
        self.program_counter = (self.program_counter + 1) & WORD_MASK
        self._execute_instruction(decode_instruction(word))

    def execute(self) -> None:
        """Run until a HALT instruction is executed."""
        while not self.halted:
            self.step()

    def register(self, index: int) -> int:
        """Return the value of data register ``index``."""
        if not 0 <= index < REGISTER_COUNT:
            raise IndexError("Register index out of range")
        return self.registers[index]

    def _bus_write(self, address: int, value: int) -> None:
        bus = self.bus
        bus.address = address & WORD_MASK
        bus.data = value & WORD_MASK
        bus.write = True
        bus.read = False
        self.controller.tick(bus)
        bus.write = False

    def _bus_read(self, address: int) -> int:
        bus = self.bus
        bus.address = address & WORD_MASK
        bus.read = True
        bus.write = False
        self.controller.tick(bus)
        bus.read = False
        return bus.data

    def _push(self, value: int) -> None:
        if self.stack_pointer == 0x0000:
            raise CPUError("Stack overflow")
        self._bus_write(self.stack_pointer, value)
        self.stack_pointer -= 1

    def _pop(self) -> int:
        if self.stack_pointer >= WORD_MASK:
            raise CPUError("Stack underflow")
        self.stack_pointer += 1
        return self._bus_read(self.stack_pointer)

    def _set(self, index: int, value: int) -> None:
        value &= WORD_MASK
        self.registers[index] = value
        self.zero_flag = value == 0

    def _execute_instruction(self, inst: DecodedInstruction) -> None:
        regs = self.registers
        r1, r2 = inst.reg1, inst.reg2
        op = inst.opcode

        if op == Instruction.MOV:
            self._set(r1, regs[r2])
        elif op == Instruction.MOVI:
            self._set(r1, inst.imm)
        elif op == Instruction.LD:
            self._set(r1, self._bus_read(regs[r2]))
        elif op == Instruction.ST:
            self._bus_write(regs[r1], regs[r2])
        elif op == Instruction.ADD:
            self._set(r1, regs[r1] + regs[r2])
        elif op == Instruction.SUB:
            self._set(r1, regs[r1] - regs[r2])
        elif op == Instruction.CMP:
            self.zero_flag = regs[r1] == regs[r2]
        elif op == Instruction.AND:
            self._set(r1, regs[r1] & regs[r2])
        elif op == Instruction.OR:
            self._set(r1, regs[r1] | regs[r2])
        elif op == Instruction.XOR:
            self._set(r1, regs[r1] ^ regs[r2])
        elif op == Instruction.SHL:
            self._set(r1, regs[r1] << 1)
        elif op == Instruction.SHR:
            self._set(r1, regs[r1] >> 1)
        elif op == Instruction.JMP:
            self.program_counter = inst.imm
        elif op == Instruction.JZ:
            if self.zero_flag:
                self.program_counter = inst.imm
        elif op == Instruction.JNZ:
            if not self.zero_flag:
                self.program_counter = inst.imm
        elif op == Instruction.CALL:
            self._push(self.program_counter)
            self.program_counter = inst.imm
        elif op == Instruction.RET:
            self.program_counter = self._pop()
        elif op == Instruction.PUSH:
            self._push(regs[r1])
        elif op == Instruction.POP:
            self._set(r1, self._pop())
        elif op == Instruction.IN:
            self._set(r1, self._bus_read(IO_BASE + inst.imm))
        elif op == Instruction.OUT:
            self._bus_write(IO_BASE + inst.imm, regs[r1])
        elif op == Instruction.HALT:
            self.halted = True
        else:
            raise CPUError(f"Unknown opcode: 0x{op:02X}")