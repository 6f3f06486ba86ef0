"""Value semantics for Lox: truthiness, equality, display, and the operator tables.

The evaluator looks operators up by token kind in UNARY_OPERATORS and
BINARY_OPERATORS, so every operand type rule lives in this module.
"""

from __future__ import annotations

import math
from typing import Callable

from lox import LoxValue
from lox.errors import LoxTypeError, LoxZeroDivisionError
from lox.types.nil import NilType
from lox.types.token import Token, TokenType, format_decimal


# -------------------------------
# Predicates
# -------------------------------
def is_number(value: LoxValue) -> bool:
    # bool is an int subclass in Python; it is never a Lox number
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: LoxValue) -> bool:
    """nil and false are falsy; every other value is truthy (including 0 and "")."""
    if isinstance(value, NilType):
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: LoxValue, b: LoxValue) -> bool:
    """Equality over all value kinds. Values of different kinds are never equal."""
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, NilType) or isinstance(b, NilType):
        return isinstance(a, NilType) and isinstance(b, NilType)
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    # callables compare by identity
    return a is b


# -------------------------------
# Display
# -------------------------------
def format_number(value: float) -> str:
    """Integral numbers print without a trailing `.0`."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer():
        return f"{value:.0f}"
    return format_decimal(float(value))


def stringify(value: LoxValue) -> str:
    if isinstance(value, NilType):
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    return str(value)


# -------------------------------
# Operand checks
# -------------------------------
def check_number_operand(operator: Token, operand: LoxValue) -> None:
    if not is_number(operand):
        raise LoxTypeError(operator, f"Operand must be a number for unary '{operator.lexeme}'.")


def check_number_operands(operator: Token, left: LoxValue, right: LoxValue) -> None:
    if not (is_number(left) and is_number(right)):
        raise LoxTypeError(operator, f"Operands must be numbers for '{operator.lexeme}'.")


# -------------------------------
# Unary operators
# -------------------------------
def negate(operator: Token, right: LoxValue) -> LoxValue:
    check_number_operand(operator, right)
    return -float(right)


def logical_not(operator: Token, right: LoxValue) -> LoxValue:
    return not is_truthy(right)


# -------------------------------
# Binary operators
# -------------------------------
def add(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    if is_number(left) and is_number(right):
        return float(left + right)
    if isinstance(left, str) and isinstance(right, str):
        return left + right
    raise LoxTypeError(
        operator, f"Operands must be two numbers or two strings for '{operator.lexeme}'."
    )


def sub(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    return float(left - right)


def mul(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    return float(left * right)


def div(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    if right == 0:
        raise LoxZeroDivisionError(operator, "Division by zero.")
    return float(left / right)


def greater(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    return left > right


def greater_equal(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    return left >= right


def less(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    return left < right


def less_equal(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    check_number_operands(operator, left, right)
    return left <= right


def equal(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    return is_equal(left, right)


def not_equal(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    return not is_equal(left, right)


UnaryOperator = Callable[[Token, LoxValue], LoxValue]
BinaryOperator = Callable[[Token, LoxValue, LoxValue], LoxValue]

UNARY_OPERATORS: dict[TokenType, UnaryOperator] = {
    TokenType.MINUS: negate,
    TokenType.BANG: logical_not,
}

BINARY_OPERATORS: dict[TokenType, BinaryOperator] = {
    TokenType.PLUS: add,
    TokenType.MINUS: sub,
    TokenType.STAR: mul,
    TokenType.SLASH: div,
    TokenType.GREATER: greater,
    TokenType.GREATER_EQUAL: greater_equal,
    TokenType.LESS: less,
    TokenType.LESS_EQUAL: less_equal,
    TokenType.EQUAL_EQUAL: equal,
    TokenType.BANG_EQUAL: not_equal,
}
