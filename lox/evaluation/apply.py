"""Application engine for Lox.

Centralizes call semantics for the evaluator:
- The callee must be a LoxCallable; anything else is a LoxCallError.
- Argument count must equal the callee's arity exactly.
- A LoxFunction runs its body in a frame whose parent is its closure; a
  ReturnSignal raised anywhere inside the body ends the call with its value.
- A NativeFunction is invoked directly with the argument values.
- Running out of host stack inside a call is a LoxStackOverflow at that call.
"""

from __future__ import annotations

from typing import Callable, Sequence

from lox import LoxValue
from lox.errors import LoxArityError, LoxCallError, LoxStackOverflow
from lox.types.environment import Environment
from lox.types.lox_function import LoxCallable, LoxFunction, NativeFunction
from lox.types.nil import Nil
from lox.types.return_signal import ReturnSignal
from lox.types.stmt import Stmt
from lox.types.token import Token

ExecuteFn = Callable[[Sequence[Stmt], Environment], None]


def apply_function(
    fn: LoxFunction, args: list[LoxValue], execute: ExecuteFn
) -> LoxValue:
    """Run a user function and return its result (nil if no return fired)."""
    env = fn.extend_env(args)
    try:
        execute(fn.body, env)
    except ReturnSignal as signal:
        return signal.value
    return Nil


def apply(
    callee: LoxValue,
    args: list[LoxValue],
    paren: Token,
    execute: ExecuteFn,
) -> LoxValue:
    """Call `callee` with already-evaluated `args`; `paren` locates errors."""
    if not isinstance(callee, LoxCallable):
        raise LoxCallError(paren, "Can only call functions and classes.")
    if len(args) != callee.arity:
        raise LoxArityError(
            paren, f"Expected {callee.arity} arguments but got {len(args)}."
        )
    if isinstance(callee, LoxFunction):
        try:
            return apply_function(callee, args, execute)
        except RecursionError:
            raise LoxStackOverflow(paren, "Stack overflow.") from None
    if isinstance(callee, NativeFunction):
        return callee(*args)
    raise LoxCallError(paren, f"Unsupported callable {callee}.")
