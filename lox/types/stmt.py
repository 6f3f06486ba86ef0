"""Statement nodes. `for` loops have no node of their own; the parser
rewrites them into a While wrapped in a Block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from lox.types.expr import Expr
from lox.types.token import Token


@dataclass(frozen=True)
class ExpressionStmt:
    expression: Expr


@dataclass(frozen=True)
class PrintStmt:
    expression: Expr


@dataclass(frozen=True)
class VarStmt:
    name: Token
    initializer: Optional[Expr] = None


@dataclass(frozen=True)
class BlockStmt:
    statements: tuple[Stmt, ...]


@dataclass(frozen=True)
class IfStmt:
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt] = None


@dataclass(frozen=True)
class WhileStmt:
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class FunctionStmt:
    name: Token
    params: tuple[Token, ...]
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class ReturnStmt:
    keyword: Token
    value: Optional[Expr] = None


Stmt = Union[
    ExpressionStmt,
    PrintStmt,
    VarStmt,
    BlockStmt,
    IfStmt,
    WhileStmt,
    FunctionStmt,
    ReturnStmt,
]
