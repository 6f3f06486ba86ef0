"""Runtime environment for Lox.

The Environment stores bindings of names to evaluated Lox values and supports
nested lexical scopes via an `outer` link. A frame lives as long as anything
refers to it: the block or call executing in it, or a LoxFunction that
captured it as its closure.
"""

from __future__ import annotations

from typing import Optional

from lox import LoxValue
from lox.errors import LoxUndefinedVariable
from lox.types.token import Token


class Environment:
    """Hierarchical mapping from names to Lox values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, LoxValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: str, value: LoxValue) -> None:
        """Bind `name` to `value` in this frame only.

        Redeclaring a name that already exists in this frame overwrites it.
        """
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: Token) -> LoxValue:
        """Look up the value bound to `name`, walking outward.

        Raises LoxUndefinedVariable if no frame binds it.
        """
        env = self.find(name.lexeme)
        if env is None:
            raise LoxUndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")
        return env.vars[name.lexeme]

    def assign(self, name: Token, value: LoxValue) -> None:
        """Update an existing binding for `name` in the environment chain.

        Never creates a binding; raises LoxUndefinedVariable if none exists.
        """
        env = self.find(name.lexeme)
        if env is None:
            raise LoxUndefinedVariable(name, f"Undefined variable '{name.lexeme}'.")
        env.vars[name.lexeme] = value

    # --- Resolved access ---
    def ancestor(self, depth: int) -> Environment:
        """The frame `depth` links out from this one."""
        env = self
        for _ in range(depth):
            env = env.outer
        return env

    def root(self) -> Environment:
        """The outermost (global) frame."""
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def get_at(self, depth: int, name: Token) -> LoxValue:
        frame = self.ancestor(depth)
        try:
            return frame.vars[name.lexeme]
        except KeyError:
            raise LoxUndefinedVariable(name, f"Undefined variable '{name.lexeme}'.") from None

    def assign_at(self, depth: int, name: Token, value: LoxValue) -> None:
        self.ancestor(depth).vars[name.lexeme] = value

    def __repr__(self) -> str:
        depth = 0
        env = self.outer
        while env is not None:
            depth += 1
            env = env.outer
        names = " ".join(sorted(self.vars))
        return f"<Environment depth={depth} [{names}]>"
