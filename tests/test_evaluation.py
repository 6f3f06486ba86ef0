import pytest

from lox.errors import (
    LoxCallError,
    LoxRuntimeError,
    LoxTypeError,
    LoxUndefinedVariable,
    LoxZeroDivisionError,
)
from lox.evaluation.evaluator import evaluate
from lox.evaluation.operators import is_equal, is_truthy, stringify
from lox.reader.parser import parse_expression
from lox.reader.scanner import scan
from lox.types.environment import Environment
from lox.types.nil import Nil
from lox.types.token import Token, TokenType


def ev(source, env):
    result = parse_expression(scan(source).tokens)
    assert result.ok, [str(e) for e in result.errors]
    return evaluate(result.tree, env)


def _name(lexeme):
    return Token(TokenType.IDENTIFIER, lexeme, None, 1)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("7 * 3 / 7 / 1", 3.0),
        ("1 + 2", 3.0),
        ("10 / 4", 2.5),
        ("-(3)", -3.0),
        ("2 * (3 + 4)", 14.0),
        ("10 - 2 - 3", 5.0),
        ('"foo" + "bar"', "foobar"),
        ('"" + ""', ""),
        ("1 < 2", True),
        ("2 <= 2", True),
        ("2 > 3", False),
        ("2 >= 2", True),
        ("1 == 1.0", True),
        ('1 == "1"', False),
        ('"a" == "a"', True),
        ("nil == nil", True),
        ("nil == false", False),
        ("0 == false", False),
        ("true != false", True),
        ("!nil", True),
        ("!0", False),
        ('!""', False),
        ("!!true", True),
    ],
)
def test_expression_values(source, expected, env):
    value = ev(source, env)
    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize(
    "source, expected",
    [
        ('"a" or "b"', "a"),
        ('nil or "b"', "b"),
        ("false or false", False),
        ("1 and 2", 2.0),
        ("false and 1", False),
        ("nil and 1", Nil),
        # the right operand is never evaluated
        ("false and (1 / 0)", False),
        ("true or (1 / 0)", True),
        ("nil and undefined_name", Nil),
    ],
)
def test_logical_returns_deciding_operand(source, expected, env):
    value = ev(source, env)
    assert value == expected
    assert type(value) is type(expected)


def test_grouping_and_display(env):
    assert stringify(ev("7 * 3 / 7 / 1", env)) == "3"
    assert stringify(ev("(1 + 2) / 4", env)) == "0.75"


@pytest.mark.parametrize(
    "source, error, message",
    [
        ("1 / 0", LoxZeroDivisionError, "Division by zero."),
        ('1 + "a"', LoxTypeError, "Operands must be two numbers or two strings for '+'."),
        ("true + 1", LoxTypeError, "Operands must be two numbers or two strings for '+'."),
        ('-"x"', LoxTypeError, "Operand must be a number for unary '-'."),
        ('"a" < "b"', LoxTypeError, "Operands must be numbers for '<'."),
        ("nil * 2", LoxTypeError, "Operands must be numbers for '*'."),
        ('"s" - 1', LoxTypeError, "Operands must be numbers for '-'."),
        ("missing", LoxUndefinedVariable, "Undefined variable 'missing'."),
        ("missing = 1", LoxUndefinedVariable, "Undefined variable 'missing'."),
        ('"s"()', LoxCallError, "Can only call functions and classes."),
        ("nil()", LoxCallError, "Can only call functions and classes."),
    ],
)
def test_runtime_errors(source, error, message, env):
    with pytest.raises(error) as excinfo:
        ev(source, env)
    assert excinfo.value.message == message
    assert isinstance(excinfo.value, LoxRuntimeError)


def test_runtime_error_text_carries_line(env):
    with pytest.raises(LoxRuntimeError) as excinfo:
        ev("1 +\n\n nil", env)
    assert str(excinfo.value) == (
        "Operands must be two numbers or two strings for '+'.\n[line 1]"
    )


def test_operands_evaluate_left_to_right(env):
    # the left operand's failure wins
    with pytest.raises(LoxUndefinedVariable) as excinfo:
        ev("a + b", env)
    assert excinfo.value.message == "Undefined variable 'a'."


# -------------------------------
# Variables and environments
# -------------------------------
def test_variable_lookup(env):
    env.define("x", 42.0)
    assert ev("x", env) == 42.0
    assert ev("x * 2", env) == 84.0


def test_assignment_updates_and_returns_value(env):
    env.define("x", 1.0)
    assert ev("x = 5", env) == 5.0
    assert env.vars["x"] == 5.0


def test_assignment_is_right_associative(env):
    env.define("a", Nil)
    env.define("b", Nil)
    assert ev("a = b = 3", env) == 3.0
    assert env.vars == {"a": 3.0, "b": 3.0}


def test_assignment_never_creates_binding(env):
    with pytest.raises(LoxUndefinedVariable):
        ev("fresh = 1", env)
    assert "fresh" not in env.vars


def test_inner_frame_shadows_and_assign_walks_outward():
    outer = Environment()
    outer.define("x", 1.0)
    outer.define("y", 2.0)
    inner = Environment(outer=outer)
    inner.define("x", 10.0)

    assert inner.get(_name("x")) == 10.0
    assert inner.get(_name("y")) == 2.0

    inner.assign(_name("y"), 20.0)
    assert outer.vars["y"] == 20.0
    assert "y" not in inner.vars
    assert outer.get(_name("x")) == 1.0


def test_find_returns_binding_frame():
    outer = Environment()
    outer.define("x", 1.0)
    inner = Environment(outer=outer)
    assert inner.find("x") is outer
    assert inner.find("nope") is None


def test_environment_repr():
    outer = Environment()
    outer.define("x", 1.0)
    inner = Environment(outer=outer)
    inner.define("b", "s")
    inner.define("a", Nil)
    assert repr(outer) == "<Environment depth=0 [x]>"
    assert repr(inner) == "<Environment depth=1 [a b]>"


def test_access_at_depth():
    outer = Environment()
    outer.define("x", 1.0)
    middle = Environment(outer=outer)
    middle.define("x", 2.0)
    inner = Environment(outer=middle)

    assert inner.ancestor(2) is outer
    assert inner.root() is outer
    assert inner.get_at(1, _name("x")) == 2.0
    assert inner.get_at(2, _name("x")) == 1.0

    inner.assign_at(2, _name("x"), 10.0)
    assert outer.vars["x"] == 10.0
    assert middle.vars["x"] == 2.0


def test_get_at_missing_name():
    with pytest.raises(LoxUndefinedVariable):
        Environment(outer=Environment()).get_at(1, _name("x"))


# -------------------------------
# Value semantics
# -------------------------------
@pytest.mark.parametrize(
    "value, expected",
    [(Nil, False), (False, False), (True, True), (0.0, True), ("", True), ("a", True)],
)
def test_truthiness(value, expected):
    assert is_truthy(value) is expected


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (1.0, 1.0, True),
        (1.0, 2.0, False),
        (1.0, True, False),
        (0.0, False, False),
        (Nil, False, False),
        (Nil, Nil, True),
        ("1", 1.0, False),
        ("x", "x", True),
    ],
)
def test_equality_across_kinds(a, b, expected):
    assert is_equal(a, b) is expected
    assert is_equal(b, a) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (3.0, "3"),
        (2.5, "2.5"),
        (-7.0, "-7"),
        (0.1, "0.1"),
        (1e-7, "0.0000001"),
        (-0.000015, "-0.000015"),
        (123456.789, "123456.789"),
        (1e21, "1000000000000000000000"),
        (float("inf"), "Infinity"),
        (float("-inf"), "-Infinity"),
        (float("nan"), "NaN"),
        (Nil, "nil"),
        (True, "true"),
        (False, "false"),
        ("text", "text"),
    ],
)
def test_stringify(value, expected):
    assert stringify(value) == expected
