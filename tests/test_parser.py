import pytest

from lox.debug_utils.pprint import format_expr, format_stmt
from lox.reader.parser import Parser, parse_expression, parse_program
from lox.reader.scanner import scan
from lox.types.expr import Assign, Binary, Literal
from lox.types.stmt import PrintStmt


def _expr(source):
    result = parse_expression(scan(source).tokens)
    assert result.ok, [str(e) for e in result.errors]
    return result.tree


def _program(source):
    return parse_program(scan(source).tokens)


def _errors(result):
    return [str(e) for e in result.errors]


@pytest.mark.parametrize(
    "source, expected",
    [
        ("7 * 3 / 7 / 1", "(/ (/ (* 7.0 3.0) 7.0) 1.0)"),
        ("1 + 2 * 3", "(+ 1.0 (* 2.0 3.0))"),
        ("(1 + 2) * 3", "(* (group (+ 1.0 2.0)) 3.0)"),
        ("10.5 - 2", "(- 10.5 2.0)"),
        ("-!true", "(- (! true))"),
        ('"hi" == nil', "(== hi nil)"),
        ("1 < 2 != false", "(!= (< 1.0 2.0) false)"),
        ("a = b = 1", "(= a (= b 1.0))"),
        ("a or b and c", "(or a (and b c))"),
        ("a and b or c", "(or (and a b) c)"),
        ("f()", "(call f)"),
        ("f(1)(2, 3)", "(call (call f 1.0) 2.0 3.0)"),
        ("fun (x) { return x; }", "(fun (x) (return x))"),
        ("fun () {}", "(fun ())"),
    ],
)
def test_expression_forms(source, expected):
    assert format_expr(_expr(source)) == expected


def test_assignment_node():
    expr = _expr("x = 1")
    assert isinstance(expr, Assign)
    assert expr.name.lexeme == "x"
    assert expr.value == Literal(1.0)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(1 + 2", "[line 1] Error at end: Expect ')' after expression."),
        ("1 +", "[line 1] Error at end: Expect expression."),
        (")", "[line 1] Error at ')': Expect expression."),
        ("f(1", "[line 1] Error at end: Expect ')' after arguments."),
    ],
)
def test_expression_errors(source, expected):
    result = parse_expression(scan(source).tokens)
    assert result.tree is None
    assert _errors(result) == [expected]


def test_invalid_assignment_target_keeps_tree():
    result = parse_expression(scan("a + 1 = 2").tokens)
    assert _errors(result) == ["[line 1] Error at '=': Invalid assignment target."]
    assert isinstance(result.tree, Binary)


def test_parser_requires_eof():
    with pytest.raises(ValueError):
        Parser([])


# -------------------------------
# Statements
# -------------------------------
@pytest.mark.parametrize(
    "source, expected",
    [
        ("print 1;", ["(print 1.0)"]),
        ("x;", ["(expr x)"]),
        ("var a;", ["(var a)"]),
        ("var a = 1;", ["(var a 1.0)"]),
        ("{ var a = 1; print a; }", ["(block (var a 1.0) (print a))"]),
        ("if (x) print 1;", ["(if x (print 1.0))"]),
        ("if (x) print 1; else print 2;", ["(if x (print 1.0) (print 2.0))"]),
        ("if (a) if (b) print 1; else print 2;", ["(if a (if b (print 1.0) (print 2.0)))"]),
        ("while (x) x = x - 1;", ["(while x (expr (= x (- x 1.0))))"]),
        ("fun f(a, b) { return a; }", ["(fun f (a b) (return a))"]),
        ("fun f() { return; }", ["(fun f () (return))"]),
        ("fun () {}();", ["(expr (call (fun ())))"]),
        (
            "for (var i = 0; i < 3; i = i + 1) print i;",
            ["(block (var i 0.0) (while (< i 3.0) (block (print i) (expr (= i (+ i 1.0))))))"],
        ),
        ("for (;;) print 1;", ["(while true (print 1.0))"]),
        ("for (i = 0; i < 1;) print i;", ["(block (expr (= i 0.0)) (while (< i 1.0) (print i)))"]),
    ],
)
def test_statement_forms(source, expected):
    result = _program(source)
    assert _errors(result) == []
    assert [format_stmt(s) for s in result.tree] == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("print 1", "[line 1] Error at end: Expect ';' after value."),
        ("1 + 2", "[line 1] Error at end: Expect ';' after expression."),
        ("var 1;", "[line 1] Error at '1': Expect variable name."),
        ("var a = 1", "[line 1] Error at end: Expect ';' after variable declaration."),
        ("{ print 1;", "[line 1] Error at end: Expect '}' after block."),
        ("if x) print 1;", "[line 1] Error at 'x': Expect '(' after 'if'."),
        ("if (x print 1;", "[line 1] Error at 'print': Expect ')' after if condition."),
        ("while (x print 1;", "[line 1] Error at 'print': Expect ')' after condition."),
        ("for (var i = 0; i < 1 print i;", "[line 1] Error at 'print': Expect ';' after loop condition."),
        ("for (;; i = i + 1 print 1;", "[line 1] Error at 'print': Expect ')' after for clauses."),
        ("fun f(a { }", "[line 1] Error at '{': Expect ')' after parameters."),
        ("fun f(1) {}", "[line 1] Error at '1': Expect parameter name."),
        ("fun f() return 1;", "[line 1] Error at 'return': Expect '{' before function body."),
        ("return 1", "[line 1] Error at end: Expect ';' after return value."),
    ],
)
def test_statement_errors(source, expected):
    assert _errors(_program(source)) == [expected]


def test_recovery_reports_every_error():
    result = _program("var = 1;\nprint 2;\nprint ;")
    assert _errors(result) == [
        "[line 1] Error at '=': Expect variable name.",
        "[line 3] Error at ';': Expect expression.",
    ]
    assert result.tree == [PrintStmt(Literal(2.0))]


def test_recovery_stops_before_statement_keyword():
    result = _program("var a = ) 1\nprint 2;")
    assert len(result.errors) == 1
    assert [format_stmt(s) for s in result.tree] == ["(print 2.0)"]


def test_argument_limit():
    source = "f(" + ", ".join(["1"] * 256) + ");"
    result = _program(source)
    assert _errors(result) == ["[line 1] Error at '1': Can't have more than 255 arguments."]
    assert len(result.tree) == 1


def test_parameter_limit():
    params = ", ".join(f"p{i}" for i in range(256))
    result = _program(f"fun f({params}) {{}}")
    assert _errors(result) == ["[line 1] Error at 'p255': Can't have more than 255 parameters."]


def test_exactly_255_arguments_is_fine():
    source = "f(" + ", ".join(["1"] * 255) + ");"
    assert _program(source).ok
