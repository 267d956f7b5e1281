"""Recursive-descent parser from tokens to the syntax tree."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional, TypeVar

from .errors import KaoriError
from .lexer import tokenize
from .syntax_tree import (
    AssignExpr,
    AstNode,
    BinaryExpr,
    BinaryOp,
    BinaryOpKind,
    BlockStmt,
    BooleanLiteral,
    BoolTy,
    BreakStmt,
    ContinueStmt,
    Decl,
    Expr,
    ExpressionStmt,
    FieldDecl,
    ForLoopStmt,
    FunctionCallExpr,
    FunctionDecl,
    IdentifierExpr,
    IdentifierTy,
    IfStmt,
    NumberLiteral,
    NumberTy,
    ParameterDecl,
    PrintStmt,
    ReturnStmt,
    Stmt,
    StringLiteral,
    StructDecl,
    Ty,
    UnaryExpr,
    UnaryOp,
    UnaryOpKind,
    VariableDecl,
    WhileLoopStmt,
)
from .token_stream import TokenStream
from .tokens import TokenKind

T = TypeVar("T")

_BINARY_OPERATORS = {
    TokenKind.PLUS: BinaryOpKind.ADD,
    TokenKind.MINUS: BinaryOpKind.SUBTRACT,
    TokenKind.MULTIPLY: BinaryOpKind.MULTIPLY,
    TokenKind.DIVIDE: BinaryOpKind.DIVIDE,
    TokenKind.MODULO: BinaryOpKind.MODULO,
    TokenKind.AND: BinaryOpKind.AND,
    TokenKind.OR: BinaryOpKind.OR,
    TokenKind.EQUAL: BinaryOpKind.EQUAL,
    TokenKind.NOT_EQUAL: BinaryOpKind.NOT_EQUAL,
    TokenKind.GREATER: BinaryOpKind.GREATER,
    TokenKind.GREATER_EQUAL: BinaryOpKind.GREATER_EQUAL,
    TokenKind.LESS: BinaryOpKind.LESS,
    TokenKind.LESS_EQUAL: BinaryOpKind.LESS_EQUAL,
}

_UNARY_OPERATORS = {
    TokenKind.MINUS: UnaryOpKind.NEGATE,
    TokenKind.NOT: UnaryOpKind.NOT,
    TokenKind.INCREMENT: UnaryOpKind.INCREMENT,
    TokenKind.DECREMENT: UnaryOpKind.DECREMENT,
}

_OR = frozenset({TokenKind.OR})
_AND = frozenset({TokenKind.AND})
_EQUALITY = frozenset({TokenKind.EQUAL, TokenKind.NOT_EQUAL})
_COMPARISON = frozenset(
    {
        TokenKind.GREATER,
        TokenKind.GREATER_EQUAL,
        TokenKind.LESS,
        TokenKind.LESS_EQUAL,
    }
)
_TERM = frozenset({TokenKind.PLUS, TokenKind.MINUS})
_FACTOR = frozenset({TokenKind.MULTIPLY, TokenKind.DIVIDE, TokenKind.MODULO})


class Parser:
    """Builds declarations, statements and expressions from a token stream."""

    def __init__(self, token_stream: TokenStream) -> None:
        self.token_stream = token_stream

    # Top level

    def parse(self) -> list[Decl]:
        """Parse every global declaration up to the end of the file."""
        stream = self.token_stream
        declarations: list[Decl] = []

        while not stream.at_end():
            kind = stream.token_kind
            if kind is TokenKind.FUNCTION:
                declarations.append(self.parse_function_declaration())
            elif kind is TokenKind.STRUCT:
                declarations.append(self.parse_struct_declaration())
            else:
                raise KaoriError(stream.span, "invalid declaration at global scope")

        return declarations

    def parse_ast_node(self) -> AstNode:
        """Parse one statement or local variable declaration."""
        stream = self.token_stream
        kind = stream.token_kind

        if kind is TokenKind.PRINT:
            return self._parse_print_statement()
        if kind is TokenKind.LEFT_BRACE:
            return self.parse_block_statement()
        if kind is TokenKind.IF:
            return self._parse_if_statement()
        if kind is TokenKind.WHILE:
            return self._parse_while_loop_statement()
        if kind is TokenKind.FOR:
            return self._parse_for_loop_statement()
        if kind is TokenKind.BREAK:
            return self._parse_break_statement()
        if kind is TokenKind.CONTINUE:
            return self._parse_continue_statement()
        if kind is TokenKind.RETURN:
            return self._parse_return_statement()

        if stream.look_ahead([TokenKind.IDENTIFIER, TokenKind.COLON]):
            declaration = self.parse_variable_declaration()
            stream.consume(TokenKind.SEMICOLON)
            return declaration

        # The missing semicolon is reported ahead of a bad expression.
        pending: Optional[KaoriError] = None
        statement: Optional[Stmt] = None
        try:
            statement = self._parse_expression_statement()
        except KaoriError as error:
            pending = error
        stream.consume(TokenKind.SEMICOLON)
        if pending is not None:
            raise pending
        assert statement is not None
        return statement

    def _comma_separated(
        self, parse_item: Callable[[], T], terminator: TokenKind
    ) -> list[T]:
        stream = self.token_stream
        items: list[T] = []

        while not stream.at_end() and stream.token_kind is not terminator:
            items.append(parse_item())
            if stream.token_kind is terminator:
                break
            stream.consume(TokenKind.COMMA)

        return items

    # Declarations

    def parse_variable_declaration(self) -> VariableDecl:
        """Parse ``name: type = expression`` (without the semicolon)."""
        stream = self.token_stream
        span = stream.span
        name = stream.lexeme

        stream.consume(TokenKind.IDENTIFIER)
        stream.consume(TokenKind.COLON)
        ty = self.parse_type()
        stream.consume(TokenKind.ASSIGN)
        right = self.parse_expression()

        return VariableDecl(name, right, ty, span)

    def parse_function_declaration(self) -> FunctionDecl:
        """Parse ``def name(parameters) -> type { body }``."""
        stream = self.token_stream
        span = stream.span

        stream.consume(TokenKind.FUNCTION)
        name = stream.lexeme
        stream.consume(TokenKind.IDENTIFIER)
        stream.consume(TokenKind.LEFT_PAREN)
        parameters = self._comma_separated(
            self._parse_function_parameter, TokenKind.RIGHT_PAREN
        )
        stream.consume(TokenKind.RIGHT_PAREN)

        return_ty: Optional[Ty] = None
        if stream.token_kind is TokenKind.THIN_ARROW:
            stream.consume(TokenKind.THIN_ARROW)
            return_ty = self.parse_type()

        stream.consume(TokenKind.LEFT_BRACE)
        body = self._parse_nodes_until_right_brace()
        stream.consume(TokenKind.RIGHT_BRACE)

        return FunctionDecl(name, parameters, body, return_ty, span)

    def _parse_function_parameter(self) -> ParameterDecl:
        name, ty, span = self._parse_typed_name()
        return ParameterDecl(name, ty, span)

    def _parse_struct_field(self) -> FieldDecl:
        name, ty, span = self._parse_typed_name()
        return FieldDecl(name, ty, span)

    def _parse_typed_name(self):
        stream = self.token_stream
        start = stream.span
        name = stream.lexeme

        stream.consume(TokenKind.IDENTIFIER)
        stream.consume(TokenKind.COLON)
        ty = self.parse_type()

        return name, ty, start.merge(stream.span)

    def parse_struct_declaration(self) -> StructDecl:
        """Parse ``struct name { field: type, ... }``."""
        stream = self.token_stream
        span = stream.span

        stream.consume(TokenKind.STRUCT)
        name = stream.lexeme
        stream.consume(TokenKind.IDENTIFIER)
        stream.consume(TokenKind.LEFT_BRACE)
        fields = self._comma_separated(self._parse_struct_field, TokenKind.RIGHT_BRACE)
        stream.consume(TokenKind.RIGHT_BRACE)

        return StructDecl(name, fields, span)

    # Statements

    def _parse_nodes_until_right_brace(self) -> list[AstNode]:
        stream = self.token_stream
        nodes: list[AstNode] = []
        while not stream.at_end() and stream.token_kind is not TokenKind.RIGHT_BRACE:
            nodes.append(self.parse_ast_node())
        return nodes

    def parse_block_statement(self) -> BlockStmt:
        """Parse ``{ nodes }``."""
        stream = self.token_stream
        span = stream.span

        stream.consume(TokenKind.LEFT_BRACE)
        nodes = self._parse_nodes_until_right_brace()
        stream.consume(TokenKind.RIGHT_BRACE)

        return BlockStmt(nodes, span)

    def _parse_return_statement(self) -> ReturnStmt:
        stream = self.token_stream
        span = stream.span

        stream.consume(TokenKind.RETURN)
        if stream.token_kind is TokenKind.SEMICOLON:
            stream.consume(TokenKind.SEMICOLON)
            return ReturnStmt(None, span)

        expression = self.parse_expression()
        stream.consume(TokenKind.SEMICOLON)
        return ReturnStmt(expression, span)

    def _parse_continue_statement(self) -> ContinueStmt:
        stream = self.token_stream
        span = stream.span
        stream.consume(TokenKind.CONTINUE)
        stream.consume(TokenKind.SEMICOLON)
        return ContinueStmt(span)

    def _parse_break_statement(self) -> BreakStmt:
        stream = self.token_stream
        span = stream.span
        stream.consume(TokenKind.BREAK)
        stream.consume(TokenKind.SEMICOLON)
        return BreakStmt(span)

    def _parse_expression_statement(self) -> ExpressionStmt:
        span = self.token_stream.span
        return ExpressionStmt(self.parse_expression(), span)

    def _parse_print_statement(self) -> PrintStmt:
        stream = self.token_stream
        span = stream.span

        stream.consume(TokenKind.PRINT)
        stream.consume(TokenKind.LEFT_PAREN)
        expression = self.parse_expression()
        stream.consume(TokenKind.RIGHT_PAREN)
        stream.consume(TokenKind.SEMICOLON)

        return PrintStmt(expression, span)

    def _parse_if_statement(self) -> IfStmt:
        stream = self.token_stream
        span = stream.span

        stream.consume(TokenKind.IF)
        condition = self.parse_expression()
        then_branch = self.parse_block_statement()

        if stream.token_kind is not TokenKind.ELSE:
            return IfStmt(condition, then_branch, None, span)

        stream.advance()
        else_branch: Stmt
        if stream.token_kind is TokenKind.IF:
            else_branch = self._parse_if_statement()
        else:
            else_branch = self.parse_block_statement()

        return IfStmt(condition, then_branch, else_branch, span)

    def _parse_while_loop_statement(self) -> WhileLoopStmt:
        stream = self.token_stream
        span = stream.span

        stream.consume(TokenKind.WHILE)
        condition = self.parse_expression()
        block = self.parse_block_statement()

        return WhileLoopStmt(condition, block, span)

    def _parse_for_loop_statement(self) -> ForLoopStmt:
        stream = self.token_stream
        span = stream.span

        stream.consume(TokenKind.FOR)
        init = self.parse_variable_declaration()
        stream.consume(TokenKind.SEMICOLON)
        condition = self.parse_expression()
        stream.consume(TokenKind.SEMICOLON)
        increment = self._parse_expression_statement()
        block = self.parse_block_statement()

        return ForLoopStmt(init, condition, increment, block, span)

    # Types

    def parse_type(self) -> Ty:
        """Parse a type annotation."""
        stream = self.token_stream
        span = stream.span
        kind = stream.token_kind

        if kind is TokenKind.IDENTIFIER:
            name = stream.lexeme
            stream.consume(TokenKind.IDENTIFIER)
            return IdentifierTy(name, span)
        if kind is TokenKind.NUMBER:
            stream.advance()
            return NumberTy(span)
        if kind is TokenKind.BOOL:
            stream.advance()
            return BoolTy(span)

        raise KaoriError(span, f"expected a valid type, but found: {kind}")

    # Expressions

    def parse_expression(self) -> Expr:
        """Parse an expression, assignment included."""
        if self.token_stream.look_ahead([TokenKind.IDENTIFIER, TokenKind.ASSIGN]):
            return self._parse_assign()
        return self._parse_or()

    def _binary_operator(self) -> BinaryOp:
        stream = self.token_stream
        return BinaryOp(_BINARY_OPERATORS[stream.token_kind], stream.span)

    def _unary_operator(self) -> UnaryOp:
        stream = self.token_stream
        return UnaryOp(_UNARY_OPERATORS[stream.token_kind], stream.span)

    def _parse_assign(self) -> Expr:
        left = self._parse_identifier()
        self.token_stream.consume(TokenKind.ASSIGN)
        right = self.parse_expression()
        return AssignExpr(left, right)

    def _binary_level(
        self, operand: Callable[[], Expr], operators: frozenset[TokenKind]
    ) -> Expr:
        stream = self.token_stream
        left = operand()

        while not stream.at_end() and stream.token_kind in operators:
            operator = self._binary_operator()
            stream.advance()
            right = operand()
            left = BinaryExpr(operator, left, right)

        return left

    def _parse_or(self) -> Expr:
        return self._binary_level(self._parse_and, _OR)

    def _parse_and(self) -> Expr:
        return self._binary_level(self._parse_equality, _AND)

    def _parse_equality(self) -> Expr:
        return self._binary_level(self._parse_comparison, _EQUALITY)

    def _parse_comparison(self) -> Expr:
        return self._binary_level(self._parse_term, _COMPARISON)

    def _parse_term(self) -> Expr:
        return self._binary_level(self._parse_factor, _TERM)

    def _parse_factor(self) -> Expr:
        return self._binary_level(self._parse_prefix_unary, _FACTOR)

    def _parse_prefix_unary(self) -> Expr:
        stream = self.token_stream
        kind = stream.token_kind

        if kind is TokenKind.PLUS:
            stream.advance()
            return self._parse_prefix_unary()
        if kind not in (TokenKind.MINUS, TokenKind.NOT):
            return self._parse_primary()

        operator = self._unary_operator()
        stream.advance()
        right = self._parse_prefix_unary()
        return UnaryExpr(operator, right)

    def _parse_primary(self) -> Expr:
        stream = self.token_stream
        kind = stream.token_kind
        span = stream.span

        if kind is TokenKind.LEFT_PAREN:
            stream.consume(TokenKind.LEFT_PAREN)
            expression = self.parse_expression()
            stream.consume(TokenKind.RIGHT_PAREN)
            return expression
        if kind is TokenKind.NUMBER_LITERAL:
            value = float(stream.lexeme)
            stream.advance()
            return NumberLiteral(value, span)
        if kind is TokenKind.TRUE:
            stream.advance()
            return BooleanLiteral(True, span)
        if kind is TokenKind.FALSE:
            stream.advance()
            return BooleanLiteral(False, span)
        if kind is TokenKind.STRING_LITERAL:
            value = stream.lexeme
            stream.advance()
            return StringLiteral(value, span)
        if kind is TokenKind.IDENTIFIER:
            return self._parse_postfix_unary()

        raise KaoriError(span, f"expected a valid operand, but found: {kind}")

    def _parse_identifier(self) -> IdentifierExpr:
        stream = self.token_stream
        identifier = IdentifierExpr(stream.lexeme, stream.span)
        stream.consume(TokenKind.IDENTIFIER)
        return identifier

    def _parse_postfix_unary(self) -> Expr:
        stream = self.token_stream
        identifier = self._parse_identifier()
        kind = stream.token_kind

        if kind in (TokenKind.INCREMENT, TokenKind.DECREMENT):
            operator = self._unary_operator()
            stream.advance()
            return UnaryExpr(operator, identifier)
        if kind is TokenKind.LEFT_PAREN:
            return self._parse_function_call(identifier)
        return identifier

    def _parse_function_call(self, callee: Expr) -> Expr:
        stream = self.token_stream

        while stream.token_kind is TokenKind.LEFT_PAREN:
            stream.consume(TokenKind.LEFT_PAREN)
            arguments = self._comma_separated(
                self.parse_expression, TokenKind.RIGHT_PAREN
            )
            closing = stream.span
            stream.consume(TokenKind.RIGHT_PAREN)
            callee = FunctionCallExpr(callee, arguments, closing)

        return callee


def parse_source(source: str) -> list[Decl]:
    """Tokenize and parse ``source`` into its global declarations."""
    return Parser(TokenStream(source, tokenize(source))).parse()