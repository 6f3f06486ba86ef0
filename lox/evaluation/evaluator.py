"""Core tree-walk evaluator for Lox.

`evaluate` reduces an expression to a value; `execute` runs statements for
their effects. Both take the environment explicitly, so a block "exits" its
scope simply by returning to the caller's frame, whether it finishes normally,
raises a LoxRuntimeError, or is unwound by a ReturnSignal.

Names the resolver bound to a local are read and written at the recorded
depth; every other name lives in the global (root) frame.
"""

from __future__ import annotations

from typing import Sequence

from lox import LoxValue
from lox.evaluation.apply import apply
from lox.evaluation.operators import (
    BINARY_OPERATORS,
    UNARY_OPERATORS,
    is_truthy,
    stringify,
)
from lox.types.environment import Environment
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
from lox.types.lox_function import LoxFunction
from lox.types.nil import Nil
from lox.types.return_signal import ReturnSignal
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
from lox.types.token import TokenType


def evaluate(expr: Expr, env: Environment) -> LoxValue:
    match expr:
        case Literal(value):
            return value

        case Grouping(inner):
            return evaluate(inner, env)

        case Unary(operator, right):
            return UNARY_OPERATORS[operator.kind](operator, evaluate(right, env))

        case Binary(left, operator, right):
            left_value = evaluate(left, env)
            right_value = evaluate(right, env)
            return BINARY_OPERATORS[operator.kind](operator, left_value, right_value)

        case Logical(left, operator, right):
            # The operand that decides the result is returned as-is.
            left_value = evaluate(left, env)
            if operator.kind is TokenType.OR:
                if is_truthy(left_value):
                    return left_value
            elif not is_truthy(left_value):
                return left_value
            return evaluate(right, env)

        case Variable(name, depth):
            if depth is None:
                return env.root().get(name)
            return env.get_at(depth, name)

        case Assign(name, value_expr, depth):
            value = evaluate(value_expr, env)
            if depth is None:
                env.root().assign(name, value)
            else:
                env.assign_at(depth, name, value)
            return value

        case Call(callee_expr, paren, arguments):
            callee = evaluate(callee_expr, env)
            args = [evaluate(arg, env) for arg in arguments]
            return apply(callee, args, paren, execute)

        case Lambda(_, params, body):
            return LoxFunction(None, params, body, env)

    raise TypeError(f"Unknown expression node: {expr!r}")


def execute(statements: Sequence[Stmt], env: Environment) -> None:
    """Run `statements` in order in `env`."""
    for stmt in statements:
        execute_stmt(stmt, env)


def execute_stmt(stmt: Stmt, env: Environment) -> None:
    match stmt:
        case ExpressionStmt(expression):
            evaluate(expression, env)

        case PrintStmt(expression):
            print(stringify(evaluate(expression, env)))

        case VarStmt(name, initializer):
            value = Nil if initializer is None else evaluate(initializer, env)
            env.define(name.lexeme, value)

        case BlockStmt(statements):
            execute(statements, Environment(outer=env))

        case IfStmt(condition, then_branch, else_branch):
            if is_truthy(evaluate(condition, env)):
                execute_stmt(then_branch, env)
            elif else_branch is not None:
                execute_stmt(else_branch, env)

        case WhileStmt(condition, body):
            while is_truthy(evaluate(condition, env)):
                execute_stmt(body, env)

        case FunctionStmt(name, params, body):
            env.define(name.lexeme, LoxFunction(name.lexeme, params, body, env))

        case ReturnStmt(keyword, value_expr):
            value = Nil if value_expr is None else evaluate(value_expr, env)
            raise ReturnSignal(keyword, value)

        case _:
            raise TypeError(f"Unknown statement node: {stmt!r}")
