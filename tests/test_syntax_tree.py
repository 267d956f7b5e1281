import pytest

from kaori.span import Span
from kaori.syntax_tree import (
    AssignExpr,
    BinaryExpr,
    BinaryOp,
    BinaryOpKind,
    BlockStmt,
    BooleanLiteral,
    BoolTy,
    Decl,
    ForLoopStmt,
    FunctionCallExpr,
    FunctionDecl,
    FunctionTy,
    IdentifierExpr,
    IdentifierTy,
    IfStmt,
    NumberLiteral,
    NumberTy,
    ParameterDecl,
    PrintStmt,
    ReturnStmt,
    Stmt,
    UnaryExpr,
    UnaryOp,
    UnaryOpKind,
    VariableDecl,
)


def test_binary_span_covers_both_operands():
    left = NumberLiteral(1.0, Span(0, 1))
    right = NumberLiteral(2.0, Span(4, 5))
    expr = BinaryExpr(BinaryOp(BinaryOpKind.ADD, Span(2, 3)), left, right)
    assert expr.span == Span(left.span.start, right.span.end)
    assert expr.left is left and expr.right is right


def test_unary_span_starts_at_operator():
    operand = IdentifierExpr("x", Span(1, 2))
    op = UnaryOp(UnaryOpKind.NEGATE, Span(0, 1))
    expr = UnaryExpr(op, operand)
    assert expr.span == Span(op.span.start, operand.span.end)


def test_assign_span_covers_both_sides():
    left = IdentifierExpr("a", Span(3, 4))
    right = BooleanLiteral(True, Span(7, 11))
    assert AssignExpr(left, right).span == Span(3, 11)


def test_function_call_span_reaches_closing_paren():
    callee = IdentifierExpr("f", Span(10, 11))
    call = FunctionCallExpr(callee, [], Span(12, 13))
    assert call.span == Span(10, 13)
    assert call.arguments == []


def test_ids_are_unique_and_increasing():
    first = NumberLiteral(1.0, Span(0, 1))
    second = NumberLiteral(1.0, Span(0, 1))
    third = BoolTy(Span(0, 4))
    assert first.id < second.id < third.id


def test_equality_ignores_ids():
    first = IdentifierExpr("name", Span(0, 4))
    second = IdentifierExpr("name", Span(0, 4))
    assert first.id != second.id
    assert first == second


def test_different_fields_are_not_equal():
    assert NumberTy(Span(0, 6)) != NumberTy(Span(1, 7))
    assert IdentifierTy("Point", Span(0, 5)) != IdentifierTy("Other", Span(0, 5))


def test_function_type_defaults():
    ty = FunctionTy([NumberTy(Span(0, 6))])
    assert ty.span == Span()
    assert ty.return_ty is None
    assert len(ty.parameters) == 1


def test_function_declaration_holds_its_parts():
    param = ParameterDecl("x", NumberTy(Span(9, 15)), Span(6, 15))
    body = [ReturnStmt(IdentifierExpr("x", Span(30, 31)), Span(23, 29))]
    decl = FunctionDecl("id", [param], body, NumberTy(Span(20, 26)), Span(0, 3))
    assert isinstance(decl, Decl)
    assert decl.parameters[0].name == "x"
    assert isinstance(decl.body[0], Stmt)


def test_for_loop_wraps_declaration_and_block():
    init = VariableDecl("i", NumberLiteral(0.0, Span(15, 16)), NumberTy(Span(7, 13)), Span(4, 5))
    cond = BinaryExpr(
        BinaryOp(BinaryOpKind.LESS, Span(20, 21)),
        IdentifierExpr("i", Span(18, 19)),
        NumberLiteral(3.0, Span(22, 23)),
    )
    increment = PrintStmt(IdentifierExpr("i", Span(25, 26)), Span(25, 26))
    block = BlockStmt([], Span(30, 31))
    loop = ForLoopStmt(init, cond, increment, block, Span(0, 3))
    assert loop.init is init
    assert loop.condition.operator.kind is BinaryOpKind.LESS
    assert loop.block.nodes == []


def test_if_without_else():
    stmt = IfStmt(BooleanLiteral(False, Span(3, 8)), BlockStmt([], Span(9, 11)), None, Span(0, 2))
    assert stmt.else_branch is None
    assert stmt.condition.value is False


def test_operators_are_immutable():
    op = BinaryOp(BinaryOpKind.OR, Span(0, 2))
    with pytest.raises(AttributeError):
        op.kind = BinaryOpKind.AND
    assert op.kind is BinaryOpKind.OR
    assert op.span == Span(0, 2)