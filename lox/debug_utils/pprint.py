"""Parenthesized prefix rendering of Lox syntax trees.

`format_expr` gives the exact single-line form used by the `parse` command,
e.g. `(+ 1.0 (* 2.0 3.0))`. `pprint_stmt` renders whole statements for `dbg`,
breaking a form over aligned lines once it exceeds `max_line_length`.
"""

from __future__ import annotations

from typing import Union

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
from lox.types.nil import NilType
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
from lox.types.token import format_literal

# A form is an atom or a parenthesized list of forms.
Form = Union[str, list]

DEFAULT_OPTIONS = {
    "max_line_length": 80,
}


# ----------------- Tree -> form -----------------
def literal_text(value) -> str:
    if isinstance(value, NilType):
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_literal(float(value))
    return str(value)


def expr_form(expr: Expr) -> Form:
    match expr:
        case Literal(value):
            return literal_text(value)
        case Grouping(inner):
            return ["group", expr_form(inner)]
        case Unary(operator, right):
            return [operator.lexeme, expr_form(right)]
        case Binary(left, operator, right) | Logical(left, operator, right):
            return [operator.lexeme, expr_form(left), expr_form(right)]
        case Variable(name):
            return name.lexeme
        case Assign(name, value):
            return ["=", name.lexeme, expr_form(value)]
        case Call(callee, _, arguments):
            return ["call", expr_form(callee), *(expr_form(a) for a in arguments)]
        case Lambda(_, params, body):
            return ["fun", [p.lexeme for p in params], *(stmt_form(s) for s in body)]
    raise TypeError(f"Unknown expression node: {expr!r}")


def stmt_form(stmt: Stmt) -> Form:
    match stmt:
        case ExpressionStmt(expression):
            return ["expr", expr_form(expression)]
        case PrintStmt(expression):
            return ["print", expr_form(expression)]
        case VarStmt(name, None):
            return ["var", name.lexeme]
        case VarStmt(name, initializer):
            return ["var", name.lexeme, expr_form(initializer)]
        case BlockStmt(statements):
            return ["block", *(stmt_form(s) for s in statements)]
        case IfStmt(condition, then_branch, None):
            return ["if", expr_form(condition), stmt_form(then_branch)]
        case IfStmt(condition, then_branch, else_branch):
            return ["if", expr_form(condition), stmt_form(then_branch), stmt_form(else_branch)]
        case WhileStmt(condition, body):
            return ["while", expr_form(condition), stmt_form(body)]
        case FunctionStmt(name, params, body):
            return ["fun", name.lexeme, [p.lexeme for p in params], *(stmt_form(s) for s in body)]
        case ReturnStmt(_, None):
            return ["return"]
        case ReturnStmt(_, value):
            return ["return", expr_form(value)]
    raise TypeError(f"Unknown statement node: {stmt!r}")


# ----------------- Form -> text -----------------
def render(form: Form, indent: int = 0, max_line_length: int | None = None) -> str:
    if isinstance(form, str):
        return form
    if not form:
        return "()"

    parts = [render(f, indent + 1, max_line_length) for f in form]
    single_line = "(" + " ".join(parts) + ")"
    if max_line_length is None or (
        "\n" not in single_line and len(single_line) + indent * 2 <= max_line_length
    ):
        return single_line

    aligned_lines = ["(" + parts[0]]
    for part in parts[1:]:
        aligned_lines.append("  " * (indent + 1) + part)
    aligned_lines[-1] += ")"
    return "\n".join(aligned_lines)


def format_expr(expr: Expr) -> str:
    """Fully parenthesized single-line form of `expr`."""
    return render(expr_form(expr))


def format_stmt(stmt: Stmt) -> str:
    return render(stmt_form(stmt))


def pprint_stmt(stmt: Stmt, options: dict = DEFAULT_OPTIONS) -> str:
    return render(stmt_form(stmt), 0, options.get("max_line_length", 80))
