"""Static pass run once over a parsed program before it executes.

Binds every local variable use to its declaration: each Variable and Assign
that names a local gets the number of scopes between the use and the
declaring scope, so a closure keeps reading the binding it saw when it was
defined even if the name is shadowed later in the same block.

Also reports, as LoxParseError, the mistakes that can be found without running:
- a `return` outside any function body,
- a local variable read inside its own initializer.
"""

from __future__ import annotations

import logging
from typing import Sequence

from lox.errors import LoxParseError
from lox.types.expr import (
    Assign,
    Binary,
    Call,
    Expr,
    Grouping,
    Lambda,
    Literal,
    Logical,
    Unary,
    Variable,
)
from lox.types.stmt import (
    BlockStmt,
    ExpressionStmt,
    FunctionStmt,
    IfStmt,
    PrintStmt,
    ReturnStmt,
    Stmt,
    VarStmt,
    WhileStmt,
)
from lox.types.token import Token

logger = logging.getLogger(__name__)


class Resolver:
    def __init__(self):
        # one dict per open local scope; False = declared, not yet initialized
        self.scopes: list[dict[str, bool]] = []
        self.function_depth = 0
        self.errors: list[LoxParseError] = []

    def resolve(self, statements: Sequence[Stmt]) -> list[LoxParseError]:
        for stmt in statements:
            self.resolve_stmt(stmt)
        logger.debug("resolver found %d errors", len(self.errors))
        return self.errors

    # --- Scope bookkeeping ---
    def declare(self, name: Token) -> None:
        if self.scopes:
            self.scopes[-1][name.lexeme] = False

    def define(self, name: Token) -> None:
        if self.scopes:
            self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr: Variable | Assign, name: Token) -> None:
        """Record how many scopes out the innermost declaration of `name` is.
        Names not found in any local scope are globals and stay unresolved."""
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                expr.resolve(depth)
                return

    def resolve_function(self, params: Sequence[Token], body: Sequence[Stmt]) -> None:
        self.function_depth += 1
        self.scopes.append({p.lexeme: True for p in params})
        try:
            for stmt in body:
                self.resolve_stmt(stmt)
        finally:
            self.scopes.pop()
            self.function_depth -= 1

    # --- Statements ---
    def resolve_stmt(self, stmt: Stmt) -> None:
        match stmt:
            case ExpressionStmt(expression) | PrintStmt(expression):
                self.resolve_expr(expression)

            case VarStmt(name, initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)

            case BlockStmt(statements):
                self.scopes.append({})
                try:
                    for inner in statements:
                        self.resolve_stmt(inner)
                finally:
                    self.scopes.pop()

            case IfStmt(condition, then_branch, else_branch):
                self.resolve_expr(condition)
                self.resolve_stmt(then_branch)
                if else_branch is not None:
                    self.resolve_stmt(else_branch)

            case WhileStmt(condition, body):
                self.resolve_expr(condition)
                self.resolve_stmt(body)

            case FunctionStmt(name, params, body):
                # defined before the body so the function can recurse
                self.declare(name)
                self.define(name)
                self.resolve_function(params, body)

            case ReturnStmt(keyword, value):
                if self.function_depth == 0:
                    self.errors.append(LoxParseError(keyword, "Can't return from top-level code."))
                if value is not None:
                    self.resolve_expr(value)

    # --- Expressions ---
    def resolve_expr(self, expr: Expr) -> None:
        match expr:
            case Literal():
                pass

            case Grouping(inner):
                self.resolve_expr(inner)

            case Unary(_, right):
                self.resolve_expr(right)

            case Binary(left, _, right) | Logical(left, _, right):
                self.resolve_expr(left)
                self.resolve_expr(right)

            case Variable(name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self.errors.append(
                        LoxParseError(name, "Can't read local variable in its own initializer.")
                    )
                self.resolve_local(expr, name)

            case Assign(name, value):
                self.resolve_expr(value)
                self.resolve_local(expr, name)

            case Call(callee, _, arguments):
                self.resolve_expr(callee)
                for arg in arguments:
                    self.resolve_expr(arg)

            case Lambda(_, params, body):
                self.resolve_function(params, body)


def resolve(statements: Sequence[Stmt]) -> list[LoxParseError]:
    """Return every static error in `statements` (empty when the program is fine)."""
    return Resolver().resolve(statements)
