"""
  Lox Parser

Recursive descent over a single cursor into the token list. Precedence,
lowest to highest:

    assignment -> logic_or -> logic_and -> equality -> comparison
               -> term -> factor -> unary -> call -> primary

Statement grammar:

    declaration -> varDecl | funDecl | statement
    statement   -> exprStmt | printStmt | block | ifStmt | whileStmt
                 | forStmt | returnStmt

Errors are collected on `Parser.errors`. A malformed declaration is dropped and
the cursor is synchronised to the next statement boundary, so one pass reports
every independent error and still yields the rest of the tree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Optional, Sequence, TypeVar

from lox.errors import LoxParseError
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
from lox.types.nil import Nil
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
from lox.types.token import Token, TokenType

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ARGS = 255

# Keywords that begin a new statement; panic-mode recovery stops in front of them.
STATEMENT_STARTS = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)

EQUALITY_OPS = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON_OPS = (
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
    TokenType.LESS,
    TokenType.LESS_EQUAL,
)
TERM_OPS = (TokenType.MINUS, TokenType.PLUS)
FACTOR_OPS = (TokenType.SLASH, TokenType.STAR)
UNARY_OPS = (TokenType.BANG, TokenType.MINUS)


@dataclass
class ParseResult(Generic[T]):
    tree: T
    errors: list[LoxParseError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        if not tokens or not tokens[-1].is_eof():
            raise ValueError("token sequence must end with an EOF token")
        self.tokens = tokens
        self.current = 0
        self.errors: list[LoxParseError] = []

    # --- Entry points ---
    def parse_program(self) -> list[Stmt]:
        statements: list[Stmt] = []
        while not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        logger.debug("parsed %d statements, %d errors", len(statements), len(self.errors))
        return statements

    def parse_expression(self) -> Optional[Expr]:
        try:
            return self.expression()
        except LoxParseError as err:
            self.errors.append(err)
            return None

    # --- Cursor helpers ---
    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def is_at_end(self) -> bool:
        return self.peek().is_eof()

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def check(self, *kinds: TokenType) -> bool:
        return self.peek().kind in kinds

    def check_next(self, kind: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.tokens[self.current + 1].kind is kind

    def match(self, *kinds: TokenType) -> bool:
        if self.check(*kinds):
            self.advance()
            return True
        return False

    def consume(self, kind: TokenType, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise LoxParseError(self.peek(), message)

    def report(self, token: Token, message: str) -> None:
        """Record an error that does not leave the parser confused."""
        self.errors.append(LoxParseError(token, message))

    def synchronize(self) -> None:
        """Discard tokens until just after a ';' or just before a statement keyword."""
        self.advance()
        while not self.is_at_end():
            if self.previous().kind is TokenType.SEMICOLON:
                return
            if self.peek().kind in STATEMENT_STARTS:
                return
            self.advance()

    # --- Declarations ---
    def declaration(self) -> Optional[Stmt]:
        try:
            if self.check(TokenType.FUN) and self.check_next(TokenType.IDENTIFIER):
                self.advance()
                return self.function("function")
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except LoxParseError as err:
            self.errors.append(err)
            self.synchronize()
            return None

    def var_declaration(self) -> Stmt:
        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = self.expression() if self.match(TokenType.EQUAL) else None
        self.consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarStmt(name, initializer)

    def function(self, kind: str) -> FunctionStmt:
        name = self.consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self.consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params = self.parameters()
        self.consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        return FunctionStmt(name, params, tuple(self.block()))

    def parameters(self) -> tuple[Token, ...]:
        """Parameter names up to and including the closing ')'."""
        params: list[Token] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= MAX_ARGS:
                    self.report(self.peek(), f"Can't have more than {MAX_ARGS} parameters.")
                params.append(self.consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self.match(TokenType.COMMA):
                    break
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        return tuple(params)

    # --- Statements ---
    def statement(self) -> Stmt:
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if self.match(TokenType.RETURN):
            return self.return_statement()
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return BlockStmt(tuple(self.block()))
        return self.expression_statement()

    def for_statement(self) -> Stmt:
        """Desugar `for (init; cond; incr) body` into
        `{ init; while (cond) { body; incr; } }`."""
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None if self.check(TokenType.SEMICOLON) else self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None if self.check(TokenType.RIGHT_PAREN) else self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self.statement()
        if increment is not None:
            body = BlockStmt((body, ExpressionStmt(increment)))
        body = WhileStmt(condition if condition is not None else Literal(True), body)
        if initializer is not None:
            body = BlockStmt((initializer, body))
        return body

    def if_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self.statement()
        else_branch = self.statement() if self.match(TokenType.ELSE) else None
        return IfStmt(condition, then_branch, else_branch)

    def print_statement(self) -> Stmt:
        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value)

    def return_statement(self) -> Stmt:
        keyword = self.previous()
        value = None if self.check(TokenType.SEMICOLON) else self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return ReturnStmt(keyword, value)

    def while_statement(self) -> Stmt:
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return WhileStmt(condition, self.statement())

    def block(self) -> list[Stmt]:
        """Statements up to and including the closing '}'."""
        statements: list[Stmt] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            stmt = self.declaration()
            if stmt is not None:
                statements.append(stmt)
        self.consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStmt(expr)

    # --- Expressions ---
    def expression(self) -> Expr:
        return self.assignment()

    def assignment(self) -> Expr:
        expr = self.logic_or()

        if self.match(TokenType.EQUAL):
            equals = self.previous()
            value = self.assignment()  # right-associative
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            self.report(equals, "Invalid assignment target.")

        return expr

    def logic_or(self) -> Expr:
        expr = self.logic_and()
        while self.match(TokenType.OR):
            operator = self.previous()
            expr = Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self) -> Expr:
        expr = self.equality()
        while self.match(TokenType.AND):
            operator = self.previous()
            expr = Logical(expr, operator, self.equality())
        return expr

    def _binary(self, operand, kinds: tuple[TokenType, ...]) -> Expr:
        """One left-associative binary tier."""
        expr = operand()
        while self.match(*kinds):
            operator = self.previous()
            expr = Binary(expr, operator, operand())
        return expr

    def equality(self) -> Expr:
        return self._binary(self.comparison, EQUALITY_OPS)

    def comparison(self) -> Expr:
        return self._binary(self.term, COMPARISON_OPS)

    def term(self) -> Expr:
        return self._binary(self.factor, TERM_OPS)

    def factor(self) -> Expr:
        return self._binary(self.unary, FACTOR_OPS)

    def unary(self) -> Expr:
        if self.match(*UNARY_OPS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.call()

    def call(self) -> Expr:
        expr = self.primary()
        while self.match(TokenType.LEFT_PAREN):
            expr = self.finish_call(expr)
        return expr

    def finish_call(self, callee: Expr) -> Expr:
        arguments: list[Expr] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= MAX_ARGS:
                    self.report(self.peek(), f"Can't have more than {MAX_ARGS} arguments.")
                arguments.append(self.expression())
                if not self.match(TokenType.COMMA):
                    break
        paren = self.consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, tuple(arguments))

    def primary(self) -> Expr:
        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(Nil)
        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)
        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        if self.match(TokenType.FUN):
            return self.lambda_expression()
        raise LoxParseError(self.peek(), "Expect expression.")

    def lambda_expression(self) -> Expr:
        keyword = self.previous()
        self.consume(TokenType.LEFT_PAREN, "Expect '(' after 'fun'.")
        params = self.parameters()
        self.consume(TokenType.LEFT_BRACE, "Expect '{' before function body.")
        return Lambda(keyword, params, tuple(self.block()))


def parse_program(tokens: Sequence[Token]) -> ParseResult[list[Stmt]]:
    parser = Parser(tokens)
    statements = parser.parse_program()
    return ParseResult(statements, parser.errors)


def parse_expression(tokens: Sequence[Token]) -> ParseResult[Optional[Expr]]:
    parser = Parser(tokens)
    expr = parser.parse_expression()
    return ParseResult(expr, parser.errors)
