"""Name resolution: turns the syntax tree into the high-level IR."""

from __future__ import annotations

from typing import Optional

from .errors import KaoriError
from .hir import (
    HirAssign,
    HirBinary,
    HirBlock,
    HirBooleanLiteral,
    HirBoolTy,
    HirBranch,
    HirBreak,
    HirContinue,
    HirDecl,
    HirExpr,
    HirExpression,
    HirField,
    HirFunction,
    HirFunctionCall,
    HirFunctionRef,
    HirFunctionTy,
    HirLoop,
    HirNode,
    HirNumberLiteral,
    HirNumberTy,
    HirParameter,
    HirPrint,
    HirReturn,
    HirStmt,
    HirStringLiteral,
    HirStruct,
    HirTy,
    HirTypeRef,
    HirUnary,
    HirVariable,
    HirVariableRef,
    new_hir_id,
)
from .symbols import SymbolKind, SymbolTable
from .syntax_tree import (
    AssignExpr,
    AstNode,
    BinaryExpr,
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
    StringLiteral,
    StructDecl,
    Ty,
    UnaryExpr,
    VariableDecl,
    WhileLoopStmt,
)


class Resolver:
    """Binds every name to its declaration and assigns variable offsets."""

    def __init__(self) -> None:
        self.symbol_table = SymbolTable()
        self.active_loops = 0
        self.global_scope = False
        self._ids: dict[int, int] = {}

    def enter_function(self) -> None:
        """Mark that resolution is inside a function."""
        self.global_scope = False

    def exit_function(self) -> None:
        """Mark that resolution is back at global scope."""
        self.global_scope = True

    def _generate_hir_id(self, ast_id: int) -> int:
        hir_id = new_hir_id()
        self._ids[ast_id] = hir_id
        return hir_id

    def generate_hir(self, declarations: list[Decl]) -> list[HirDecl]:
        """Resolve the global declarations; raise KaoriError on a name error."""
        for declaration in declarations:
            if isinstance(declaration, (FunctionDecl, StructDecl)):
                name = declaration.name
                if self.symbol_table.search_current_scope(name) is not None:
                    raise KaoriError(declaration.span, f"{name} is already declared")
                hir_id = self._generate_hir_id(declaration.id)
                if isinstance(declaration, FunctionDecl):
                    self.symbol_table.declare_function(hir_id, name)
                else:
                    self.symbol_table.declare_struct(hir_id, name)

        return [self._resolve_declaration(d) for d in declarations]

    def _resolve_node(self, node: AstNode) -> HirNode:
        if isinstance(node, Decl):
            return self._resolve_declaration(node)
        return self._resolve_statement(node)

    def _resolve_nodes(self, nodes: list[AstNode]) -> list[HirNode]:
        return [self._resolve_node(node) for node in nodes]

    def _resolve_declaration(self, declaration: Decl) -> HirDecl:
        table = self.symbol_table

        match declaration:
            case ParameterDecl(name=name, ty=ty, span=span):
                if table.search_current_scope(name) is not None:
                    raise KaoriError(
                        span,
                        f"function can't have parameters with the same name: {name}",
                    )
                hir_id = new_hir_id()
                offset = table.declare_variable(hir_id, name)
                return HirParameter(hir_id, offset, self._resolve_type(ty), span)

            case FieldDecl(name=name, ty=ty, span=span):
                if table.search_current_scope(name) is not None:
                    raise KaoriError(
                        span, f"struct can't have fields with the same name: {name}"
                    )
                hir_id = new_hir_id()
                offset = table.declare_variable(hir_id, name)
                return HirField(hir_id, offset, self._resolve_type(ty), span)

            case VariableDecl(name=name, right=right, ty=ty, span=span):
                resolved_right = self._resolve_expression(right)
                if table.search_current_scope(name) is not None:
                    raise KaoriError(span, f"{name} is already declared")
                hir_id = new_hir_id()
                offset = table.declare_variable(hir_id, name)
                return HirVariable(
                    hir_id, offset, resolved_right, self._resolve_type(ty), span
                )

            case FunctionDecl():
                table.enter_scope()
                parameters = [
                    self._resolve_declaration(p) for p in declaration.parameters
                ]
                body = self._resolve_nodes(declaration.body)
                return_ty: Optional[HirTy] = None
                if declaration.return_ty is not None:
                    return_ty = self._resolve_type(declaration.return_ty)
                table.exit_scope()
                return HirFunction(
                    self._ids[declaration.id],
                    parameters,
                    body,
                    return_ty,
                    declaration.span,
                )

            case StructDecl():
                fields = [self._resolve_declaration(f) for f in declaration.fields]
                return HirStruct(self._ids[declaration.id], fields, declaration.span)

        raise TypeError(f"unknown declaration: {declaration!r}")

    def _resolve_statement(self, statement: Stmt) -> HirStmt:
        table = self.symbol_table

        match statement:
            case ExpressionStmt(expression=expression, span=span):
                return HirExpression(self._resolve_expression(expression), span)

            case PrintStmt(expression=expression, span=span):
                return HirPrint(self._resolve_expression(expression), span)

            case BlockStmt(nodes=nodes, span=span):
                table.enter_scope()
                resolved = self._resolve_nodes(nodes)
                table.exit_scope()
                return HirBlock(resolved, span)

            case IfStmt():
                condition = self._resolve_expression(statement.condition)
                then_branch = self._resolve_statement(statement.then_branch)
                else_branch = None
                if statement.else_branch is not None:
                    else_branch = self._resolve_statement(statement.else_branch)
                return HirBranch(condition, then_branch, else_branch, statement.span)

            case WhileLoopStmt():
                condition = self._resolve_expression(statement.condition)
                self.active_loops += 1
                block = self._resolve_statement(statement.block)
                self.active_loops -= 1
                return HirLoop(None, condition, block, statement.span)

            case ForLoopStmt():
                table.enter_scope()
                init = self._resolve_declaration(statement.init)
                condition = self._resolve_expression(statement.condition)
                increment = self._resolve_statement(statement.increment)

                body = statement.block
                if not isinstance(body, BlockStmt):
                    raise TypeError("for loop body must be a block statement")

                self.active_loops += 1
                nodes = self._resolve_nodes(body.nodes)
                nodes.append(increment)
                self.active_loops -= 1

                block = HirBlock(nodes, body.span)
                table.exit_scope()
                return HirLoop(init, condition, block, statement.span)

            case BreakStmt(span=span):
                if self.active_loops == 0:
                    raise KaoriError(
                        span, "break statement can't appear outside of loops"
                    )
                return HirBreak(span)

            case ContinueStmt(span=span):
                if self.active_loops == 0:
                    raise KaoriError(
                        span, "continue statement can't appear outside of loops"
                    )
                return HirContinue(span)

            case ReturnStmt(expression=expression, span=span):
                resolved = None
                if expression is not None:
                    resolved = self._resolve_expression(expression)
                return HirReturn(resolved, span)

        raise TypeError(f"unknown statement: {statement!r}")

    def _resolve_expression(self, expression: Expr) -> HirExpr:
        match expression:
            case AssignExpr(left=left, right=right):
                resolved_right = self._resolve_expression(right)
                resolved_left = self._resolve_expression(left)
                return HirAssign(resolved_left, resolved_right, expression.span)

            case BinaryExpr(operator=operator, left=left, right=right):
                resolved_left = self._resolve_expression(left)
                resolved_right = self._resolve_expression(right)
                return HirBinary(operator, resolved_left, resolved_right, expression.span)

            case UnaryExpr(operator=operator, right=right):
                return HirUnary(operator, self._resolve_expression(right), expression.span)

            case FunctionCallExpr(callee=callee, arguments=arguments):
                resolved_callee = self._resolve_expression(callee)
                resolved_arguments = [self._resolve_expression(a) for a in arguments]
                return HirFunctionCall(
                    resolved_callee, resolved_arguments, expression.span
                )

            case NumberLiteral(value=value, span=span):
                return HirNumberLiteral(value, span)

            case BooleanLiteral(value=value, span=span):
                return HirBooleanLiteral(value, span)

            case StringLiteral(value=value, span=span):
                return HirStringLiteral(value, span)

            case IdentifierExpr(name=name, span=span):
                symbol = self.symbol_table.search(name)
                if symbol is None:
                    raise KaoriError(span, f"{name} is not declared")
                if symbol.kind is SymbolKind.FUNCTION:
                    return HirFunctionRef(symbol.id, span)
                if symbol.kind is SymbolKind.VARIABLE:
                    return HirVariableRef(symbol.id, span)
                raise KaoriError(span, f"{name} is not a value")

        raise TypeError(f"unknown expression: {expression!r}")

    def _resolve_type(self, ty: Ty) -> HirTy:
        match ty:
            case FunctionTy(parameters=parameters, return_ty=return_ty, span=span):
                resolved_parameters = [self._resolve_type(p) for p in parameters]
                resolved_return = None
                if return_ty is not None:
                    resolved_return = self._resolve_type(return_ty)
                return HirFunctionTy(resolved_parameters, resolved_return, span)

            case IdentifierTy(name=name, span=span):
                symbol = self.symbol_table.search(name)
                if symbol is None:
                    raise KaoriError(span, f"{name} type is not declared")
                if symbol.kind is not SymbolKind.STRUCT:
                    raise KaoriError(span, f"{name} is not a valid type")
                return HirTypeRef(symbol.id, span)

            case BoolTy(span=span):
                return HirBoolTy(span)

            case NumberTy(span=span):
                return HirNumberTy(span)

        raise TypeError(f"unknown type: {ty!r}")