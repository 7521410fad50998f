"""Assembler that turns assembly lines into 16-bit machine words."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum, auto

from yourvm.decoder import Instruction

OPCODE_SHIFT = 11
REG1_SHIFT = 8
REG2_SHIFT = 5

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class AssemblyError(ValueError):
    """Raised when a line of assembly cannot be encoded."""


class OperandFormat(Enum):
    """Operand layouts an instruction can take."""

    NONE = auto()
    REG = auto()
    IMM8 = auto()
    IMM11 = auto()
    REG_REG = auto()
    REG_IMM8 = auto()


_F = OperandFormat
INSTRUCTION_FORMATS: dict[str, tuple[Instruction, OperandFormat]] = {
    "MOV": (Instruction.MOV, _F.REG_REG),
    "MOVI": (Instruction.MOVI, _F.REG_IMM8),
    "LD": (Instruction.LD, _F.REG_REG),
    "ST": (Instruction.ST, _F.REG_REG),
    "ADD": (Instruction.ADD, _F.REG_REG),
    "SUB": (Instruction.SUB, _F.REG_REG),
    "CMP": (Instruction.CMP, _F.REG_REG),
    "AND": (Instruction.AND, _F.REG_REG),
    "OR": (Instruction.OR, _F.REG_REG),
    "XOR": (Instruction.XOR, _F.REG_REG),
    "SHL": (Instruction.SHL, _F.REG),
    "SHR": (Instruction.SHR, _F.REG),
    "JMP": (Instruction.JMP, _F.IMM11),
    "JZ": (Instruction.JZ, _F.IMM11),
    "JNZ": (Instruction.JNZ, _F.IMM11),
    "CALL": (Instruction.CALL, _F.IMM11),
    "RET": (Instruction.RET, _F.NONE),
    "PUSH": (Instruction.PUSH, _F.REG),
    "POP": (Instruction.POP, _F.REG),
    "IN": (Instruction.IN, _F.REG_IMM8),
    "OUT": (Instruction.OUT, _F.REG_IMM8),
    "HALT": (Instruction.HALT, _F.NONE),
}


def _parse_int(text: str, token: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise AssemblyError(f"Invalid number: {token}")
    return int(match.group(1))


def encode_register(token: str) -> int:
    """Return the register number named by a token such as ``R3``."""
    if not token.startswith("R"):
        raise AssemblyError(f"Expected register format (e.g., R1): {token}")
    number = _parse_int(token[1:], token)
    if not 0 <= number <= 7:
        raise AssemblyError(f"Invalid register number: {token}")
    return number


def encode_immediate(token: str, bits: int) -> int:
    """Return the value of an immediate such as ``#42`` that must fit in ``bits`` bits."""
    if not token.startswith("#"):
        raise AssemblyError(f"Expected immediate format (e.g., #42): {token}")
    value = _parse_int(token[1:], token)
    if not 0 <= value <= (1 << bits) - 1:
        raise AssemblyError(f"Immediate value out of range: {token}")
    return value


def _encode_line(tokens: list[str]) -> int:
    mnemonic, operands = tokens[0], tokens[1:]
    try:
        opcode, fmt = INSTRUCTION_FORMATS[mnemonic]
    except KeyError:
        raise AssemblyError(f"Unknown instruction: {mnemonic}") from None

    encoded = opcode << OPCODE_SHIFT
    if fmt is OperandFormat.NONE:
        if operands:
            raise AssemblyError(f"No operands expected for: {mnemonic}")
    elif fmt is OperandFormat.REG:
        if len(operands) != 1:
            raise AssemblyError(f"Expected 1 register for: {mnemonic}")
        encoded |= encode_register(operands[0]) << REG1_SHIFT
    elif fmt is OperandFormat.IMM11:
        if len(operands) != 1:
            raise AssemblyError(f"Expected 1 immediate (11-bit) for: {mnemonic}")
        encoded |= encode_immediate(operands[0], 11)
    elif fmt is OperandFormat.REG_REG:
        if len(operands) != 2:
            raise AssemblyError(f"Expected 2 registers for: {mnemonic}")
        encoded |= encode_register(operands[0]) << REG1_SHIFT
        encoded |= encode_register(operands[1]) << REG2_SHIFT
    elif fmt is OperandFormat.REG_IMM8:
        if len(operands) != 2:
            raise AssemblyError(f"Expected reg, imm8 for: {mnemonic}")
        encoded |= encode_register(operands[0]) << REG1_SHIFT
        encoded |= encode_immediate(operands[1], 8)
    else:
        raise AssemblyError(f"Unknown operand format for: {mnemonic}")
    return encoded & 0xFFFF


def encode_program(program: Iterable[str]) -> list[int]:
    """Assemble lines of source into machine words, skipping blank lines."""
    machine_code = []
    for line in program:
        tokens = [token.removesuffix(",") for token in line.split()]
        if tokens:
            machine_code.append(_encode_line(tokens))
    return machine_code