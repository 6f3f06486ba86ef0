"""Expression nodes.

Each variant is a frozen dataclass; the evaluator, resolver and printer
dispatch on them with structural `match`. Child sequences are tuples so a
node's shape never changes after the parser builds it.

Variable and Assign also carry `depth`: the number of scopes between the use
and the local that declares the name, filled in by the resolver. It stays
None for globals and for trees that were never resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from lox import LoxValue
from lox.types.token import Token

if TYPE_CHECKING:
    from lox.types.stmt import Stmt


@dataclass(frozen=True)
class Literal:
    value: LoxValue


@dataclass(frozen=True)
class Grouping:
    expression: Expr


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary:
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical:
    """`and` / `or`. Kept apart from Binary because the right side is lazy."""
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Variable:
    name: Token
    depth: Optional[int] = field(default=None, compare=False, repr=False)

    def resolve(self, depth: int) -> None:
        object.__setattr__(self, "depth", depth)


@dataclass(frozen=True)
class Assign:
    name: Token
    value: Expr
    depth: Optional[int] = field(default=None, compare=False, repr=False)

    def resolve(self, depth: int) -> None:
        object.__setattr__(self, "depth", depth)


@dataclass(frozen=True)
class Call:
    callee: Expr
    paren: Token
    arguments: tuple[Expr, ...]


@dataclass(frozen=True)
class Lambda:
    """Anonymous function expression: `fun (a, b) { ... }`."""
    keyword: Token
    params: tuple[Token, ...]
    body: tuple[Stmt, ...]


Expr = Union[Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call, Lambda]
