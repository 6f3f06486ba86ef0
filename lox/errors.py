from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lox.types.token import Token


class LoxError(Exception):
    """ Base class for all Lox errors"""
    pass


class LoxScanError(LoxError):
    """ Raised (or collected) when the scanner meets a malformed lexeme"""

    def __init__(self, line: int, message: str):
        super().__init__(message)
        self.line = line
        self.message = message

    def __str__(self) -> str:
        return f"[line {self.line}] Error: {self.message}"


class LoxParseError(LoxError):
    """ Raised when the token stream violates the grammar"""

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    @property
    def line(self) -> int:
        return self.token.line

    def __str__(self) -> str:
        if self.token.is_eof():
            where = "at end"
        else:
            where = f"at '{self.token.lexeme}'"
        return f"[line {self.line}] Error {where}: {self.message}"


class LoxRuntimeError(LoxError):
    """ Raised when evaluation cannot continue"""

    def __init__(self, token: Token, message: str):
        super().__init__(message)
        self.token = token
        self.message = message

    @property
    def line(self) -> int:
        return self.token.line

    def __str__(self) -> str:
        return f"{self.message}\n[line {self.line}]"


class LoxUndefinedVariable(LoxRuntimeError):
    """ Raised when a name is read or assigned before it is defined"""


class LoxTypeError(LoxRuntimeError):
    """ Raised when an operator receives operands of the wrong type"""


class LoxArityError(LoxRuntimeError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class LoxCallError(LoxRuntimeError):
    """ Raised when a value that is not callable is called"""


class LoxZeroDivisionError(LoxRuntimeError):
    """ Raised when a number is divided by zero"""


class LoxStackOverflow(LoxRuntimeError):
    """ Raised when Lox calls nest deeper than the host stack allows"""


class LoxErrorGroup(LoxError):
    """ Raised when a pipeline stage collected one or more errors"""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors))


class LoxScanFailure(LoxErrorGroup):
    """ The source contained malformed lexemes"""


class LoxParseFailure(LoxErrorGroup):
    """ The tokens did not form a valid program or expression"""
