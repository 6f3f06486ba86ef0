"""Callable runtime values: user-defined functions and host-native functions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lox import LoxValue, NativeFn
from lox.types.environment import Environment
from lox.types.nil import Nil
from lox.types.token import Token

if TYPE_CHECKING:
    from lox.types.stmt import Stmt


class LoxCallable:
    """Base for every value that can appear in callee position."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    @property
    def arity(self) -> int:
        raise NotImplementedError


class LoxFunction(LoxCallable):
    """A first-class function with parameters, body, and closure env."""

    __slots__ = ("params", "body", "closure")

    def __init__(
        self,
        name: str | None,
        params: tuple[Token, ...],
        body: tuple[Stmt, ...],
        closure: Environment,
    ):
        super().__init__(name or "<lambda>")
        self.params = params
        self.body = body
        self.closure = closure

    @property
    def arity(self) -> int:
        return len(self.params)

    def extend_env(self, args: list[LoxValue]) -> Environment:
        """Bind argument values positionally in a fresh frame whose parent is
        the closure, not the caller's environment."""
        env = Environment(outer=self.closure)
        for param, arg in zip(self.params, args):
            env.define(param.lexeme, arg)
        return env

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return str(self)


class NativeFunction(LoxCallable):
    """A host Python callable exposed to Lox code."""

    __slots__ = ("fn", "_arity")

    def __init__(self, name: str, arity: int, fn: NativeFn):
        super().__init__(name)
        self.fn = fn
        self._arity = arity

    @property
    def arity(self) -> int:
        return self._arity

    def __call__(self, *args: LoxValue) -> LoxValue:
        result = self.fn(*args)
        # host functions returning None produce nil
        return Nil if result is None else result

    def __str__(self) -> str:
        return f"<native fn {self.name}>"

    def __repr__(self) -> str:
        return str(self)
