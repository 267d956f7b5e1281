"""A stack-based virtual machine that runs bytecode instructions."""

from __future__ import annotations

import math
import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TextIO

from .instruction import Instruction, Opcode
from .value import Value, boolean, number

REGISTER_COUNT = 1024


def _divide(left: float, right: float) -> float:
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def _modulo(left: float, right: float) -> float:
    try:
        return math.fmod(left, right)
    except ValueError:
        return math.nan


_ARITHMETIC: dict[Opcode, Callable[[float, float], float]] = {
    Opcode.ADD: operator.add,
    Opcode.SUBTRACT: operator.sub,
    Opcode.MULTIPLY: operator.mul,
    Opcode.DIVIDE: _divide,
    Opcode.MODULO: _modulo,
}

_COMPARISON: dict[Opcode, Callable[[float, float], bool]] = {
    Opcode.NOT_EQUAL: operator.ne,
    Opcode.EQUAL: operator.eq,
    Opcode.GREATER: operator.gt,
    Opcode.GREATER_EQUAL: operator.ge,
    Opcode.LESS: operator.lt,
    Opcode.LESS_EQUAL: operator.le,
}

_LOGICAL: dict[Opcode, Callable[[bool, bool], bool]] = {
    Opcode.AND: lambda left, right: left and right,
    Opcode.OR: lambda left, right: left or right,
}


@dataclass(frozen=True)
class FunctionFrame:
    """Where a call's locals start and where execution resumes after it."""

    base_ptr: int
    return_address: int


class Register:
    """Fixed-size storage for local variables, initialised to ``false``."""

    def __init__(self, size: int = REGISTER_COUNT) -> None:
        self._slots: list[Value] = [boolean(False)] * size

    def __len__(self) -> int:
        return len(self._slots)

    def _check(self, offset: int) -> None:
        if not 0 <= offset < len(self._slots):
            raise IndexError(f"register offset out of range: {offset}")

    def load_local(self, offset: int) -> Value:
        """The value in slot ``offset``."""
        self._check(offset)
        return self._slots[offset]

    def store_local(self, value: Value, offset: int) -> None:
        """Put ``value`` into slot ``offset``."""
        self._check(offset)
        self._slots[offset] = value


class Interpreter:
    """Runs instructions against a constant pool; PRINT writes to ``output``."""

    def __init__(
        self,
        instructions: Iterable[Instruction],
        constant_pool: Iterable[Value],
        output: TextIO | None = None,
    ) -> None:
        self._instructions = list(instructions)
        self._constants = list(constant_pool)
        self._values: list[Value] = []
        self._frames = [FunctionFrame(0, len(self._instructions))]
        self._ip = 0
        self._output = output
        self.register = Register()

    @property
    def stack(self) -> list[Value]:
        """A copy of the value stack, bottom first."""
        return list(self._values)

    @property
    def instruction_ptr(self) -> int:
        """Index of the next instruction to run."""
        return self._ip

    def execute(self) -> None:
        """Run until the instruction pointer leaves the program."""
        while 0 <= self._ip < len(self._instructions):
            self._step(self._instructions[self._ip])
            self._ip += 1

    def _pop(self) -> Value:
        if not self._values:
            raise RuntimeError("value stack is empty")
        return self._values.pop()

    def _frame(self) -> FunctionFrame:
        if not self._frames:
            raise RuntimeError("no active function frame")
        return self._frames[-1]

    def _step(self, instruction: Instruction) -> None:
        opcode = instruction.opcode

        if opcode in _ARITHMETIC:
            right, left = self._pop(), self._pop()
            self._values.append(
                number(_ARITHMETIC[opcode](left.as_number(), right.as_number()))
            )
        elif opcode in _COMPARISON:
            right, left = self._pop(), self._pop()
            self._values.append(
                boolean(_COMPARISON[opcode](left.as_number(), right.as_number()))
            )
        elif opcode in _LOGICAL:
            right, left = self._pop(), self._pop()
            self._values.append(
                boolean(_LOGICAL[opcode](left.as_bool(), right.as_bool()))
            )
        elif opcode is Opcode.NEGATE:
            self._values.append(number(-self._pop().as_number()))
        elif opcode is Opcode.NOT:
            self._values.append(boolean(not self._pop().as_bool()))
        elif opcode is Opcode.LOAD_CONST:
            self._values.append(self._constants[instruction.operand])
        elif opcode is Opcode.LOAD_LOCAL:
            offset = self._frame().base_ptr + instruction.operand
            self._values.append(self.register.load_local(offset))
        elif opcode is Opcode.STORE_LOCAL:
            if not self._values:
                raise RuntimeError("value stack is empty")
            offset = self._frame().base_ptr + instruction.operand
            self.register.store_local(self._values[-1], offset)
        elif opcode is Opcode.JUMP:
            self._ip = instruction.operand - 1
        elif opcode is Opcode.JUMP_IF_FALSE:
            if not self._pop().as_bool():
                self._ip = instruction.operand - 1
        elif opcode is Opcode.POP:
            self._pop()
        elif opcode is Opcode.PRINT:
            print(repr(self._pop()), file=self._output)
        elif opcode is Opcode.CALL:
            self._call(instruction.operand, instruction.frame_size)
        elif opcode is Opcode.RETURN:
            self._ip = self._frame().return_address
            self._frames.pop()
        else:
            raise RuntimeError(f"cannot execute {opcode.name} instruction")

    def _call(self, arguments_size: int, frame_size: int) -> None:
        target = self._pop().as_instruction_ptr()
        base_ptr = self._frame().base_ptr + frame_size

        for offset in reversed(range(arguments_size)):
            self.register.store_local(self._pop(), base_ptr + offset)

        self._frames.append(FunctionFrame(base_ptr, self._ip))
        self._ip = target - 1