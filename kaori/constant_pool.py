"""Constants and the bytecode container that holds them."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field

from .instruction import Instruction
from .value import NULL, Value


class ConstantPool:
    """Deduplicated constants plus one slot per global, keyed by node id."""

    def __init__(self) -> None:
        self.constants: list[Value] = []
        self._globals: dict[Hashable, int] = {}

    def __repr__(self) -> str:
        return f"ConstantPool(constants={self.constants!r})"

    def load_const(self, value: Value) -> int:
        """Index of an equal constant, adding ``value`` if there is none."""
        existing = next(
            (index for index, current in enumerate(self.constants) if current == value),
            None,
        )
        if existing is not None:
            return existing

        self.constants.append(value)
        return len(self.constants) - 1

    def load_global_const(self, node_id: Hashable) -> int:
        """Index of the global's slot, reserving a null slot on first use."""
        if node_id in self._globals:
            return self._globals[node_id]

        index = len(self.constants)
        self._globals[node_id] = index
        self.constants.append(NULL)
        return index

    def update_global_const(self, node_id: Hashable, value: Value) -> None:
        """Set the global's slot to ``value``, creating it if needed."""
        if node_id in self._globals:
            self.constants[self._globals[node_id]] = value
        else:
            self._globals[node_id] = len(self.constants)
            self.constants.append(value)


@dataclass
class Bytecode:
    """Instructions together with the constants they refer to."""

    instructions: list[Instruction] = field(default_factory=list)
    constant_pool: ConstantPool = field(default_factory=ConstantPool)