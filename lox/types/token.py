"""Lexical units produced by the scanner and consumed by the parser."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

import numpy as np


class TokenType(Enum):
    # Single-character tokens.
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()
    # One or two character tokens.
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    # Literals.
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    # Keywords.
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

# Lexeme -> kind for every punctuation token, longest first so two-character
# operators win over their one-character prefixes.
OPERATORS: dict[str, TokenType] = {
    "!=": TokenType.BANG_EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "/": TokenType.SLASH,
    "*": TokenType.STAR,
    "!": TokenType.BANG,
    "=": TokenType.EQUAL,
    "<": TokenType.LESS,
    ">": TokenType.GREATER,
}


def format_decimal(value: float) -> str:
    """Shortest digits that round-trip, always positional (`0.0000001`, not `1e-07`)."""
    return np.format_float_positional(value, unique=True, trim="-")


def format_literal(literal: Union[float, str, None]) -> str:
    """Render a token literal: integral numbers keep one decimal place."""
    if literal is None:
        return "null"
    if isinstance(literal, float):
        if math.isfinite(literal) and literal.is_integer():
            return f"{literal:.1f}"
        return format_decimal(literal)
    return str(literal)


@dataclass(frozen=True)
class Token:
    kind: TokenType
    lexeme: str
    literal: Optional[Union[float, str]]
    line: int

    def is_eof(self) -> bool:
        return self.kind is TokenType.EOF

    def __str__(self) -> str:
        return f"{self.kind.name} {self.lexeme} {format_literal(self.literal)}"
