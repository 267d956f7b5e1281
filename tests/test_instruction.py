import pytest

from kaori.instruction import Instruction, Opcode


def test_plain_instruction_has_no_operand():
    instruction = Instruction(Opcode.ADD)
    assert instruction.opcode is Opcode.ADD
    assert instruction.operand is None
    assert instruction.frame_size is None


@pytest.mark.parametrize(
    "opcode",
    [
        Opcode.LOAD_CONST,
        Opcode.LOAD_LOCAL,
        Opcode.STORE_LOCAL,
        Opcode.JUMP,
        Opcode.JUMP_IF_FALSE,
    ],
)
def test_wide_operand_opcodes(opcode):
    assert Instruction(opcode, 0xFFFF).operand == 0xFFFF
    with pytest.raises(ValueError):
        Instruction(opcode, 0xFFFF + 1)
    with pytest.raises(ValueError):
        Instruction(opcode)
    with pytest.raises(ValueError):
        Instruction(opcode, -1)


def test_call_carries_arguments_and_frame_size():
    call = Instruction(Opcode.CALL, 2, 5)
    assert (call.operand, call.frame_size) == (2, 5)


@pytest.mark.parametrize(("arguments", "frame"), [(0x100, 1), (1, 0x100), (None, 1), (1, None)])
def test_call_rejects_bad_sizes(arguments, frame):
    with pytest.raises(ValueError):
        Instruction(Opcode.CALL, arguments, frame)


@pytest.mark.parametrize("opcode", [Opcode.ADD, Opcode.RETURN, Opcode.PRINT, Opcode.NOTHING])
def test_operand_on_plain_opcode_rejected(opcode):
    with pytest.raises(ValueError):
        Instruction(opcode, 1)


def test_frame_size_only_for_call():
    with pytest.raises(ValueError):
        Instruction(Opcode.LOAD_CONST, 1, 1)


def test_boolean_operand_rejected():
    with pytest.raises(ValueError):
        Instruction(Opcode.JUMP, True)


def test_instructions_compare_by_value():
    assert Instruction(Opcode.LOAD_LOCAL, 3) == Instruction(Opcode.LOAD_LOCAL, 3)
    assert len({Instruction(Opcode.POP), Instruction(Opcode.POP)}) == 1