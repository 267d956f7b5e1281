"""Runtime values of the virtual machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValueKind(Enum):
    """The variant a Value holds."""

    NUMBER = "Number"
    BOOL = "Bool"
    NULL = "Null"
    INSTRUCTION_PTR = "InstructionPtr"


@dataclass(frozen=True, eq=False, repr=False)
class Value:
    """A tagged runtime value."""

    kind: ValueKind
    payload: float | bool | int | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.kind is other.kind and self.payload == other.payload

    def __hash__(self) -> int:
        return hash((self.kind, self.payload))

    def __repr__(self) -> str:
        if self.kind is ValueKind.NULL:
            return "Null"
        if self.kind is ValueKind.BOOL:
            return f"Bool({'true' if self.payload else 'false'})"
        return f"{self.kind.value}({self.payload!r})"

    def _expect(self, kind: ValueKind) -> None:
        if self.kind is not kind:
            raise TypeError(f"expected a {kind.value} value, but found {self!r}")

    def as_number(self) -> float:
        """The number held; TypeError for any other variant."""
        self._expect(ValueKind.NUMBER)
        return self.payload  # type: ignore[return-value]

    def as_bool(self) -> bool:
        """The boolean held; TypeError for any other variant."""
        self._expect(ValueKind.BOOL)
        return self.payload  # type: ignore[return-value]

    def as_instruction_ptr(self) -> int:
        """The instruction index held; TypeError for any other variant."""
        self._expect(ValueKind.INSTRUCTION_PTR)
        return self.payload  # type: ignore[return-value]


NULL = Value(ValueKind.NULL)


def number(value: float) -> Value:
    """A number value."""
    return Value(ValueKind.NUMBER, float(value))


def boolean(value: bool) -> Value:
    """A boolean value."""
    return Value(ValueKind.BOOL, bool(value))


def instruction_ptr(pointer: int) -> Value:
    """A value pointing at an instruction index."""
    if pointer < 0:
        raise ValueError(f"instruction pointer must not be negative: {pointer}")
    return Value(ValueKind.INSTRUCTION_PTR, int(pointer))