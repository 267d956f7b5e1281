"""Types the type checker reasons about."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Union


class PrimitiveType(Enum):
    """Types without structure."""

    BOOLEAN = "Boolean"
    STRING = "String"
    NUMBER = "Number"
    VOID = "Void"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FunctionType:
    """A function's parameter types and return type."""

    parameters: tuple[TypeDef, ...]
    return_ty: TypeDef

    def __init__(self, parameters: Iterable[TypeDef], return_ty: TypeDef) -> None:
        object.__setattr__(self, "parameters", tuple(parameters))
        object.__setattr__(self, "return_ty", return_ty)

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"Function({params}) -> {self.return_ty}"


@dataclass(frozen=True)
class StructType:
    """A struct's field types, in declaration order."""

    fields: tuple[TypeDef, ...]

    def __init__(self, fields: Iterable[TypeDef]) -> None:
        object.__setattr__(self, "fields", tuple(fields))

    def __str__(self) -> str:
        return "Struct {" + ", ".join(str(f) for f in self.fields) + "}"


TypeDef = Union[PrimitiveType, FunctionType, StructType]