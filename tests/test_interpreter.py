import io
import math

import pytest

from kaori.instruction import Instruction, Opcode
from kaori.interpreter import FunctionFrame, Interpreter, Register
from kaori.value import boolean, instruction_ptr, number


def op(opcode, operand=None, frame_size=None):
    return Instruction(opcode, operand, frame_size)


def run(instructions, constants):
    output = io.StringIO()
    vm = Interpreter(instructions, constants, output=output)
    vm.execute()
    return vm, output.getvalue().splitlines()


def binary(opcode, left, right):
    vm, _ = run(
        [op(Opcode.LOAD_CONST, 0), op(Opcode.LOAD_CONST, 1), op(opcode)],
        [left, right],
    )
    return vm.stack


def test_register_round_trip():
    register = Register()
    register.store_local(number(4.5), 10)
    assert register.load_local(10) == number(4.5)
    assert register.load_local(11) == boolean(False)


def test_register_size_and_bounds():
    register = Register()
    assert len(register) == 1024
    with pytest.raises(IndexError):
        register.load_local(len(register))
    with pytest.raises(IndexError):
        register.store_local(number(1), -1)


def test_load_const_and_print():
    vm, lines = run([op(Opcode.LOAD_CONST, 0), op(Opcode.PRINT)], [number(2.5)])
    assert lines == [repr(number(2.5))]
    assert vm.stack == []


def test_add_then_subtract_restores_operand():
    a, b = number(7.25), number(3.5)
    vm, _ = run(
        [
            op(Opcode.LOAD_CONST, 0),
            op(Opcode.LOAD_CONST, 1),
            op(Opcode.ADD),
            op(Opcode.LOAD_CONST, 1),
            op(Opcode.SUBTRACT),
        ],
        [a, b],
    )
    assert vm.stack == [a]


def test_modulo_keeps_sign_of_dividend():
    assert binary(Opcode.MODULO, number(-7), number(3)) == [number(-1.0)]


def test_divide_by_zero_is_infinite():
    [result] = binary(Opcode.DIVIDE, number(1), number(0))
    assert result.as_number() == math.inf


def test_zero_over_zero_is_nan():
    stack = binary(Opcode.DIVIDE, number(0), number(0))
    assert len(stack) == 1
    assert math.isnan(stack[0].as_number())


def test_comparisons_produce_booleans():
    assert binary(Opcode.LESS, number(1), number(2)) == [boolean(True)]
    assert binary(Opcode.GREATER_EQUAL, number(1), number(2)) == [boolean(False)]
    assert binary(Opcode.EQUAL, number(3), number(3)) == [boolean(True)]


def test_logical_operators():
    assert binary(Opcode.AND, boolean(True), boolean(False)) == [boolean(False)]
    assert binary(Opcode.OR, boolean(True), boolean(False)) == [boolean(True)]


def test_unary_operators():
    vm, _ = run(
        [op(Opcode.LOAD_CONST, 0), op(Opcode.NEGATE), op(Opcode.NEGATE),
         op(Opcode.LOAD_CONST, 1), op(Opcode.NOT), op(Opcode.NOT)],
        [number(8), boolean(True)],
    )
    assert vm.stack == [number(8), boolean(True)]


def test_store_local_keeps_value_on_stack():
    vm, _ = run([op(Opcode.LOAD_CONST, 0), op(Opcode.STORE_LOCAL, 3)], [number(9)])
    assert vm.stack == [number(9)]
    assert vm.register.load_local(3) == number(9)


def test_jump_if_false_skips_print():
    _, lines = run(
        [op(Opcode.LOAD_CONST, 0), op(Opcode.JUMP_IF_FALSE, 4),
         op(Opcode.LOAD_CONST, 0), op(Opcode.PRINT)],
        [boolean(False)],
    )
    assert lines == []


def test_countdown_loop():
    program = [
        op(Opcode.LOAD_CONST, 0),
        op(Opcode.STORE_LOCAL, 0),
        op(Opcode.POP),
        op(Opcode.LOAD_LOCAL, 0),
        op(Opcode.LOAD_CONST, 1),
        op(Opcode.GREATER),
        op(Opcode.JUMP_IF_FALSE, 15),
        op(Opcode.LOAD_LOCAL, 0),
        op(Opcode.PRINT),
        op(Opcode.LOAD_LOCAL, 0),
        op(Opcode.LOAD_CONST, 2),
        op(Opcode.SUBTRACT),
        op(Opcode.STORE_LOCAL, 0),
        op(Opcode.POP),
        op(Opcode.JUMP, 3),
    ]
    vm, lines = run(program, [number(3), number(0), number(1)])
    assert len(lines) == 3
    assert lines[0] == repr(number(3))
    assert vm.stack == []


def test_call_passes_argument_and_returns():
    program = [
        op(Opcode.LOAD_CONST, 0),
        op(Opcode.LOAD_CONST, 1),
        op(Opcode.CALL, 1, 1),
        op(Opcode.JUMP, 6),
        op(Opcode.LOAD_LOCAL, 0),
        op(Opcode.RETURN),
    ]
    vm, _ = run(program, [number(7), instruction_ptr(4)])
    assert vm.stack == [number(7)]
    assert vm.register.load_local(1) == number(7)
    assert vm.instruction_ptr == len(program)


def test_return_from_main_stops_execution():
    vm, lines = run(
        [op(Opcode.RETURN), op(Opcode.LOAD_CONST, 0), op(Opcode.PRINT)],
        [number(1)],
    )
    assert lines == []
    assert vm.instruction_ptr > 2


def test_print_goes_to_stdout_by_default(capsys):
    Interpreter([op(Opcode.LOAD_CONST, 0), op(Opcode.PRINT)], [boolean(True)]).execute()
    assert capsys.readouterr().out.strip() == repr(boolean(True))


def test_nothing_instruction_is_rejected():
    with pytest.raises(RuntimeError):
        Interpreter([op(Opcode.NOTHING)], []).execute()


def test_pop_on_empty_stack_is_rejected():
    with pytest.raises(RuntimeError):
        Interpreter([op(Opcode.POP)], []).execute()


def test_wrong_value_kind_is_rejected():
    with pytest.raises(TypeError):
        Interpreter([op(Opcode.LOAD_CONST, 0), op(Opcode.NEGATE)], [boolean(True)]).execute()


def test_function_frame_fields():
    frame = FunctionFrame(base_ptr=4, return_address=9)
    assert (frame.base_ptr, frame.return_address) == (4, 9)