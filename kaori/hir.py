"""High-level intermediate representation produced by name resolution."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Optional, Union

from .span import Span
from .syntax_tree import BinaryOp, UnaryOp

_hir_ids = itertools.count()


def new_hir_id() -> int:
    """A fresh identifier, unique for the life of the process."""
    return next(_hir_ids)


def _fresh_id(compare: bool = True):
    return field(default_factory=new_hir_id, kw_only=True, compare=compare)


# Declarations


@dataclass
class HirDecl:
    """Base of all declarations; ``id`` is the identifier the resolver assigned."""

    id: int


@dataclass
class HirVariable(HirDecl):
    """A local variable stored at ``offset``."""

    offset: int
    right: HirExpr
    ty: HirTy
    span: Span


@dataclass
class HirFunction(HirDecl):
    """A function with its parameters, body and optional return type."""

    parameters: list[HirParameter]
    body: list[HirNode]
    return_ty: Optional[HirTy]
    span: Span


@dataclass
class HirStruct(HirDecl):
    """A struct and its fields."""

    fields: list[HirField]
    span: Span


@dataclass
class HirParameter(HirDecl):
    """A function parameter stored at ``offset``."""

    offset: int
    ty: HirTy
    span: Span


@dataclass
class HirField(HirDecl):
    """A struct field at ``offset``."""

    offset: int
    ty: HirTy
    span: Span


# Expressions


@dataclass
class HirExpr:
    """Base of all expressions; each gets a fresh ``id`` unless noted."""

    id: int = _fresh_id()


@dataclass
class HirBinary(HirExpr):
    """``left operator right``."""

    operator: BinaryOp
    left: HirExpr
    right: HirExpr
    span: Span


@dataclass
class HirUnary(HirExpr):
    """An operator applied to one operand."""

    operator: UnaryOp
    right: HirExpr
    span: Span


@dataclass
class HirAssign(HirExpr):
    """``left = right``."""

    left: HirExpr
    right: HirExpr
    span: Span


@dataclass
class HirVariableRef(HirExpr):
    """A use of the variable declared with id ``target``."""

    target: int
    span: Span


@dataclass
class HirFunctionRef(HirExpr):
    """A use of the function declared with id ``target``; its ``id`` is ``target``."""

    id: int = field(init=False)
    target: int
    span: Span

    def __post_init__(self) -> None:
        self.id = self.target


@dataclass
class HirFunctionCall(HirExpr):
    """A call of ``callee`` with ``arguments``."""

    callee: HirExpr
    arguments: list[HirExpr]
    span: Span


@dataclass
class HirStringLiteral(HirExpr):
    """A string literal."""

    value: str
    span: Span


@dataclass
class HirNumberLiteral(HirExpr):
    """A numeric literal."""

    value: float
    span: Span


@dataclass
class HirBooleanLiteral(HirExpr):
    """``true`` or ``false``."""

    value: bool
    span: Span


# Statements


@dataclass
class HirStmt:
    """Base of all statements; each gets a fresh ``id``."""

    id: int = _fresh_id()


@dataclass
class HirPrint(HirStmt):
    """Print the value of ``expression``."""

    expression: HirExpr
    span: Span


@dataclass
class HirBranch(HirStmt):
    """A conditional with an optional else branch."""

    condition: HirExpr
    then_branch: HirStmt
    else_branch: Optional[HirStmt]
    span: Span


@dataclass
class HirLoop(HirStmt):
    """A loop with an optional initialising declaration."""

    init: Optional[HirDecl]
    condition: HirExpr
    block: HirStmt
    span: Span


@dataclass
class HirBlock(HirStmt):
    """A sequence of nodes in their own scope."""

    nodes: list[HirNode]
    span: Span


@dataclass
class HirExpression(HirStmt):
    """An expression evaluated for its effect."""

    expression: HirExpr
    span: Span


@dataclass
class HirBreak(HirStmt):
    """Leave the innermost loop."""

    span: Span


@dataclass
class HirContinue(HirStmt):
    """Start the next iteration of the innermost loop."""

    span: Span


@dataclass
class HirReturn(HirStmt):
    """Return from the function, with or without a value."""

    expression: Optional[HirExpr]
    span: Span


# Types: two types are equal when their shapes are, whatever their ids and spans.


@dataclass
class HirTy:
    """Base of all resolved type annotations."""

    id: int = _fresh_id(compare=False)


@dataclass
class HirFunctionTy(HirTy):
    """A function type."""

    parameters: list[HirTy]
    return_ty: Optional[HirTy]
    span: Span = field(compare=False)


@dataclass
class HirTypeRef(HirTy):
    """A reference to the struct declared with id ``target``; its ``id`` is ``target``."""

    id: int = field(init=False, compare=False)
    target: int
    span: Span = field(compare=False)

    def __post_init__(self) -> None:
        self.id = self.target


@dataclass
class HirNumberTy(HirTy):
    """The ``number`` type."""

    span: Span = field(compare=False)


@dataclass
class HirBoolTy(HirTy):
    """The ``bool`` type."""

    span: Span = field(compare=False)


HirNode = Union[HirDecl, HirStmt]