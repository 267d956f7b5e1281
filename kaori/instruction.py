"""Instructions of the bytecode virtual machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF


class Opcode(Enum):
    """Operation an instruction performs."""

    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULO = auto()
    AND = auto()
    OR = auto()
    NOT_EQUAL = auto()
    EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    NOT = auto()
    NEGATE = auto()

    LOAD_CONST = auto()
    LOAD_LOCAL = auto()
    STORE_LOCAL = auto()

    CALL = auto()
    RETURN = auto()

    JUMP = auto()
    JUMP_IF_FALSE = auto()
    POP = auto()
    PRINT = auto()

    NOTHING = auto()


_WIDE_OPERAND = frozenset(
    {
        Opcode.LOAD_CONST,
        Opcode.LOAD_LOCAL,
        Opcode.STORE_LOCAL,
        Opcode.JUMP,
        Opcode.JUMP_IF_FALSE,
    }
)


def _check_operand(value: int | None, limit: int, what: str) -> None:
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if not 0 <= value <= limit:
        raise ValueError(f"{what} must be between 0 and {limit}, got {value}")


@dataclass(frozen=True)
class Instruction:
    """One instruction.

    ``operand`` is the constant index, local offset or jump target for the
    opcodes that take one (up to 16 bits), and the argument count for CALL
    (up to 8 bits); ``frame_size`` is used by CALL alone.
    """

    opcode: Opcode
    operand: int | None = None
    frame_size: int | None = None

    def __post_init__(self) -> None:
        if self.opcode is Opcode.CALL:
            _check_operand(self.operand, _U8_MAX, "arguments size")
            _check_operand(self.frame_size, _U8_MAX, "frame size")
            return

        if self.frame_size is not None:
            raise ValueError(f"{self.opcode.name} takes no frame size")

        if self.opcode in _WIDE_OPERAND:
            _check_operand(self.operand, _U16_MAX, f"{self.opcode.name} operand")
        elif self.operand is not None:
            raise ValueError(f"{self.opcode.name} takes no operand")