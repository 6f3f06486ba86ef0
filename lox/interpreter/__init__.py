from __future__ import annotations

import logging
import sys
import threading
from typing import Callable, Iterable, TypeVar

from lox import LoxValue, NativeFn, SourceText
from lox.config import get_recursion_limit
from lox.errors import LoxParseFailure, LoxScanFailure
from lox.evaluation.evaluator import evaluate, execute
from lox.evaluation.resolver import resolve
from lox.reader.parser import parse_expression, parse_program
from lox.reader.scanner import scan
from lox.types.environment import Environment
from lox.types.expr import Expr
from lox.types.lox_function import NativeFunction
from lox.types.stmt import Stmt
from lox.types.token import Token

logger = logging.getLogger(__name__)

T = TypeVar("T")


# Stack size of the worker thread that executes Lox code.
THREAD_STACK_SIZE = 512 * 1024 * 1024


def call_with_deep_stack(action: Callable[[], T]) -> T:
    """Run `action` on a worker thread with a large stack and a raised frame
    limit, returning its result or re-raising its exception here."""
    outcome: dict = {}

    def target():
        try:
            outcome["value"] = action()
        except BaseException as err:
            outcome["error"] = err

    old_limit = sys.getrecursionlimit()
    old_stack_size = threading.stack_size()
    sys.setrecursionlimit(max(old_limit, get_recursion_limit()))
    try:
        threading.stack_size(THREAD_STACK_SIZE)
        worker = threading.Thread(target=target, name="lox-run", daemon=True)
        worker.start()
        threading.stack_size(old_stack_size)
        worker.join()
    finally:
        sys.setrecursionlimit(old_limit)

    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("value")


class Interpreter:
    """
    Orchestrates scanning, parsing and evaluating Lox code.
    Keeps one global Environment across calls, so definitions made by one
    `run` are visible to the next.
    """

    def __init__(self, natives: Iterable[NativeFunction] | None = None):
        self.globals: Environment = Environment()
        for native in natives or ():
            self.globals.define(native.name, native)

    def define_native(self, name: str, arity: int, fn: NativeFn) -> NativeFunction:
        """Expose a Python callable to Lox code under `name`."""
        native = NativeFunction(name, arity, fn)
        self.globals.define(name, native)
        return native

    def tokenize(self, source: SourceText) -> list[Token]:
        result = scan(source)
        if not result.ok:
            raise LoxScanFailure(result.errors)
        return result.tokens

    def parse_expression(self, source: SourceText) -> Expr:
        result = parse_expression(self.tokenize(source))
        if not result.ok:
            raise LoxParseFailure(result.errors)
        return result.tree

    def parse_program(self, source: SourceText) -> list[Stmt]:
        result = parse_program(self.tokenize(source))
        if not result.ok:
            raise LoxParseFailure(result.errors)
        static_errors = resolve(result.tree)
        if static_errors:
            raise LoxParseFailure(static_errors)
        return result.tree

    def evaluate(self, source: SourceText) -> LoxValue:
        """Evaluate a single expression in the global scope."""
        expr = self.parse_expression(source)
        return call_with_deep_stack(lambda: evaluate(expr, self.globals))

    def run(self, source: SourceText) -> None:
        """Execute a whole program; `print` output goes to stdout."""
        statements = self.parse_program(source)
        logger.debug("executing %d statements", len(statements))
        call_with_deep_stack(lambda: execute(statements, self.globals))
