"""Abstract syntax tree produced by the parser."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

from .span import Span

_ast_ids = itertools.count()


def _next_ast_id() -> int:
    return next(_ast_ids)


def _id_field():
    return field(default_factory=_next_ast_id, kw_only=True, compare=False, repr=False)


class BinaryOpKind(Enum):
    """Operators that take two operands."""

    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULO = auto()
    AND = auto()
    OR = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()


@dataclass(frozen=True)
class BinaryOp:
    """A binary operator and where it was written."""

    kind: BinaryOpKind
    span: Span


class UnaryOpKind(Enum):
    """Operators that take one operand."""

    NEGATE = auto()
    NOT = auto()
    INCREMENT = auto()
    DECREMENT = auto()


@dataclass(frozen=True)
class UnaryOp:
    """A unary operator and where it was written."""

    kind: UnaryOpKind
    span: Span


# Expressions


@dataclass
class Expr:
    """Base of all expression nodes; every node gets a unique ``id``."""

    id: int = _id_field()


@dataclass
class BinaryExpr(Expr):
    """``left operator right``; spans from the left operand to the right one."""

    operator: BinaryOp
    left: Expr
    right: Expr
    span: Span = field(init=False)

    def __post_init__(self) -> None:
        self.span = self.left.span.merge(self.right.span)


@dataclass
class UnaryExpr(Expr):
    """An operator applied to one operand; spans from the operator to the operand."""

    operator: UnaryOp
    right: Expr
    span: Span = field(init=False)

    def __post_init__(self) -> None:
        self.span = self.operator.span.merge(self.right.span)


@dataclass
class AssignExpr(Expr):
    """``left = right``."""

    left: Expr
    right: Expr
    span: Span = field(init=False)

    def __post_init__(self) -> None:
        self.span = self.left.span.merge(self.right.span)


@dataclass
class IdentifierExpr(Expr):
    """A reference to a name."""

    name: str
    span: Span


@dataclass
class FunctionCallExpr(Expr):
    """A call; ``closing`` is the span of the closing parenthesis."""

    callee: Expr
    arguments: list[Expr]
    closing: Span
    span: Span = field(init=False)

    def __post_init__(self) -> None:
        self.span = self.callee.span.merge(self.closing)


@dataclass
class StringLiteral(Expr):
    """A string literal, quotes included as written."""

    value: str
    span: Span


@dataclass
class NumberLiteral(Expr):
    """A numeric literal."""

    value: float
    span: Span


@dataclass
class BooleanLiteral(Expr):
    """``true`` or ``false``."""

    value: bool
    span: Span


# Types


@dataclass
class Ty:
    """Base of all type annotations."""

    id: int = _id_field()


@dataclass
class FunctionTy(Ty):
    """A function type."""

    parameters: list[Ty]
    return_ty: Optional[Ty] = None
    span: Span = Span()


@dataclass
class IdentifierTy(Ty):
    """A type named by an identifier."""

    name: str
    span: Span


@dataclass
class NumberTy(Ty):
    """The ``number`` type."""

    span: Span


@dataclass
class BoolTy(Ty):
    """The ``bool`` type."""

    span: Span


# Declarations


@dataclass
class Decl:
    """Base of all declarations."""

    id: int = _id_field()


@dataclass
class VariableDecl(Decl):
    """``name: ty = right``."""

    name: str
    right: Expr
    ty: Ty
    span: Span


@dataclass
class FunctionDecl(Decl):
    """``def name(parameters) -> return_ty { body }``."""

    name: str
    parameters: list[ParameterDecl]
    body: list[AstNode]
    return_ty: Optional[Ty]
    span: Span


@dataclass
class StructDecl(Decl):
    """``struct name { fields }``."""

    name: str
    fields: list[FieldDecl]
    span: Span


@dataclass
class ParameterDecl(Decl):
    """A function parameter."""

    name: str
    ty: Ty
    span: Span


@dataclass
class FieldDecl(Decl):
    """A struct field."""

    name: str
    ty: Ty
    span: Span


# Statements


@dataclass
class Stmt:
    """Base of all statements."""

    id: int = _id_field()


@dataclass
class PrintStmt(Stmt):
    """``print(expression);``."""

    expression: Expr
    span: Span


@dataclass
class IfStmt(Stmt):
    """``if condition { ... } else ...``."""

    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]
    span: Span


@dataclass
class WhileLoopStmt(Stmt):
    """``while condition { ... }``."""

    condition: Expr
    block: Stmt
    span: Span


@dataclass
class ForLoopStmt(Stmt):
    """``for init; condition; increment { ... }``."""

    init: VariableDecl
    condition: Expr
    increment: Stmt
    block: Stmt
    span: Span


@dataclass
class BlockStmt(Stmt):
    """``{ nodes }``."""

    nodes: list[AstNode]
    span: Span


@dataclass
class ExpressionStmt(Stmt):
    """An expression evaluated for its effect."""

    expression: Expr
    span: Span


@dataclass
class BreakStmt(Stmt):
    """``break;``."""

    span: Span


@dataclass
class ContinueStmt(Stmt):
    """``continue;``."""

    span: Span


@dataclass
class ReturnStmt(Stmt):
    """``return expression;`` or a bare ``return;``."""

    expression: Optional[Expr]
    span: Span


AstNode = Union[Decl, Stmt]