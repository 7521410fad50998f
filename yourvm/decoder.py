"""Instruction set and decoding of 16-bit machine words."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Instruction(IntEnum):
    """Opcodes of the instruction set."""

    MOV = 0x01
    MOVI = 0x02
    LD = 0x03
    ST = 0x04

    ADD = 0x05
    SUB = 0x06
    CMP = 0x07
    AND = 0x08
    OR = 0x09
    XOR = 0x0A
    SHL = 0x0B
    SHR = 0x0C

    JMP = 0x0D
    JZ = 0x0E
    JNZ = 0x0F
    CALL = 0x10
    RET = 0x11

    PUSH = 0x12
    POP = 0x13

    IN = 0x14
    OUT = 0x15

    HALT = 0x1F


_IMM11_OPCODES = frozenset({Instruction.JMP, Instruction.JZ, Instruction.JNZ, Instruction.CALL})
_IMM8_OPCODES = frozenset({Instruction.MOVI, Instruction.IN, Instruction.OUT})


@dataclass(frozen=True)
class DecodedInstruction:
    """Fields extracted from one machine word."""

    raw: int
    opcode: int
    reg1: int
    reg2: int
    imm: int


def decode_instruction(machine_code: int) -> DecodedInstruction:
    """Split a machine word into opcode, register and immediate fields.

    The opcode is returned as a plain integer; unknown opcodes are not rejected here.
    """
    opcode = (machine_code >> 11) & 0x1F
    if opcode in _IMM11_OPCODES:
        imm = machine_code & 0x07FF
    elif opcode in _IMM8_OPCODES:
        imm = machine_code & 0x00FF
    else:
        imm = 0
    return DecodedInstruction(
        raw=machine_code,
        opcode=opcode,
        reg1=(machine_code >> 8) & 0x07,
        reg2=(machine_code >> 5) & 0x07,
        imm=imm,
    )