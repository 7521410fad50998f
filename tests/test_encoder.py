import pytest

from yourvm.decoder import Instruction, decode_instruction
from yourvm.encoder import (
    AssemblyError,
    encode_immediate,
    encode_program,
    encode_register,
)


@pytest.mark.parametrize("index", range(8))
def test_encode_register_accepts_r0_to_r7(index):
    assert encode_register(f"R{index}") == index


@pytest.mark.parametrize("token", ["R8", "R-1"])
def test_encode_register_rejects_out_of_range(token):
    with pytest.raises(AssemblyError, match="Invalid register number"):
        encode_register(token)


@pytest.mark.parametrize("token", ["X1", "r1", "", "#1"])
def test_encode_register_requires_r_prefix(token):
    with pytest.raises(AssemblyError, match="Expected register format"):
        encode_register(token)


def test_encode_register_without_digits():
    with pytest.raises(AssemblyError):
        encode_register("Rx")


def test_encode_immediate_limits():
    assert encode_immediate("#255", 8) == 255
    assert encode_immediate("#0", 8) == 0
    assert encode_immediate("#2047", 11) == 2047


@pytest.mark.parametrize("token, bits", [("#256", 8), ("#2048", 11), ("#-1", 8)])
def test_encode_immediate_out_of_range(token, bits):
    with pytest.raises(AssemblyError, match="Immediate value out of range"):
        encode_immediate(token, bits)


def test_encode_immediate_requires_hash():
    with pytest.raises(AssemblyError, match="Expected immediate format"):
        encode_immediate("42", 8)


def test_halt_encoding():
    assert encode_program(["HALT"]) == [0xF800]


def test_round_trip_through_decoder():
    words = encode_program(["MOV R1, R2", "MOVI R3, #42", "ADD R1, R3", "JMP #3", "PUSH R5"])
    decoded = [decode_instruction(w) for w in words]
    assert [d.opcode for d in decoded] == [
        Instruction.MOV,
        Instruction.MOVI,
        Instruction.ADD,
        Instruction.JMP,
        Instruction.PUSH,
    ]
    assert (decoded[0].reg1, decoded[0].reg2) == (1, 2)
    assert (decoded[1].reg1, decoded[1].imm) == (3, 42)
    assert (decoded[2].reg1, decoded[2].reg2) == (1, 3)
    assert decoded[3].imm == 3
    assert decoded[4].reg1 == 5


def test_blank_lines_are_skipped():
    assert encode_program(["", "   ", "HALT"]) == encode_program(["HALT"])


def test_comma_is_optional():
    assert encode_program(["MOV R1 R2"]) == encode_program(["MOV R1, R2"])


def test_unknown_instruction():
    with pytest.raises(AssemblyError, match="Unknown instruction: NOP"):
        encode_program(["NOP"])


@pytest.mark.parametrize(
    "line, message",
    [
        ("HALT R1", "No operands expected for: HALT"),
        ("PUSH", "Expected 1 register for: PUSH"),
        ("JMP", r"Expected 1 immediate \(11-bit\) for: JMP"),
        ("ADD R1", "Expected 2 registers for: ADD"),
        ("MOVI R1", "Expected reg, imm8 for: MOVI"),
        ("MOV R1 , R2", "Expected 2 registers for: MOV"),
    ],
)
def test_wrong_operand_count(line, message):
    with pytest.raises(AssemblyError, match=message):
        encode_program([line])


def test_error_is_value_error():
    with pytest.raises(ValueError):
        encode_program(["MOVI R1, #300"])


def test_every_mnemonic_keeps_its_opcode():
    samples = {
        "RET": Instruction.RET,
        "SHR R2": Instruction.SHR,
        "CALL #10": Instruction.CALL,
        "IN R1, #7": Instruction.IN,
        "OUT R1, #7": Instruction.OUT,
        "XOR R1, R2": Instruction.XOR,
    }
    words = encode_program(list(samples))
    assert [decode_instruction(w).opcode for w in words] == list(samples.values())