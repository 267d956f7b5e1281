"""Named symbols and the scoped table the resolver keeps them in."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SymbolKind(Enum):
    """What a symbol names."""

    VARIABLE = "variable"
    FUNCTION = "function"
    STRUCT = "struct"


@dataclass(frozen=True)
class Symbol:
    """A name bound to a declaration's identifier."""

    id: int
    name: str
    kind: SymbolKind


class SymbolTable:
    """Symbols in declaration order, split into nested scopes.

    Variables get consecutive offsets; leaving a scope frees the offsets of
    the variables declared in it.
    """

    def __init__(self) -> None:
        self.symbols: list[Symbol] = []
        self.scopes_ptr: list[int] = [0]
        self.variable_offset = 0

    def enter_scope(self) -> None:
        """Open a new innermost scope."""
        self.scopes_ptr.append(len(self.symbols))

    def exit_scope(self) -> None:
        """Close the innermost scope, dropping its symbols."""
        if not self.scopes_ptr:
            raise IndexError("no scope to exit")
        start = self.scopes_ptr.pop()

        dropped = self.symbols[start:]
        del self.symbols[start:]
        self.variable_offset -= sum(
            1 for symbol in dropped if symbol.kind is SymbolKind.VARIABLE
        )

    def declare_variable(self, hir_id: int, name: str) -> int:
        """Declare a variable and return its offset."""
        offset = self.variable_offset
        self.variable_offset += 1
        self.symbols.append(Symbol(hir_id, name, SymbolKind.VARIABLE))
        return offset

    def declare_function(self, hir_id: int, name: str) -> None:
        """Declare a function."""
        self.symbols.append(Symbol(hir_id, name, SymbolKind.FUNCTION))

    def declare_struct(self, hir_id: int, name: str) -> None:
        """Declare a struct."""
        self.symbols.append(Symbol(hir_id, name, SymbolKind.STRUCT))

    def search_current_scope(self, name: str) -> Optional[Symbol]:
        """The first symbol called ``name`` in the innermost scope, if any."""
        if not self.scopes_ptr:
            raise IndexError("no scope is open")
        start = self.scopes_ptr[-1]
        return next((s for s in self.symbols[start:] if s.name == name), None)

    def search(self, name: str) -> Optional[Symbol]:
        """The most recently declared visible symbol called ``name``, if any."""
        return next((s for s in reversed(self.symbols) if s.name == name), None)