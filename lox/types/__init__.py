"""Data model for Lox: tokens, AST variants and runtime types."""

from lox.types.nil import Nil, NilType
from lox.types.token import Token, TokenType, KEYWORDS
from lox.types.environment import Environment
from lox.types.lox_function import LoxCallable, LoxFunction, NativeFunction
from lox.types.return_signal import ReturnSignal

__all__ = [
    "Nil",
    "NilType",
    "Token",
    "TokenType",
    "KEYWORDS",
    "Environment",
    "LoxCallable",
    "LoxFunction",
    "NativeFunction",
    "ReturnSignal",
]
