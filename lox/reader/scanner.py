"""
  Lox Scanner

- Streaming, lazy tokenisation driven by a single master regex
- Never raises: malformed lexemes are collected as LoxScanError and skipped
- Always ends with exactly one EOF token

   - numbers -> float literal (a bare leading or trailing '.' is a DOT token)
   - strings -> str literal without the quotes, may span lines
   - identifiers -> IDENTIFIER, or the keyword kind from KEYWORDS
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator

from lox import SourceText
from lox.errors import LoxScanError
from lox.types.token import KEYWORDS, OPERATORS, Token, TokenType

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<whitespace>[^\S\n]+)"  # any whitespace except newline
    r"|(?P<comment>//[^\n]*)"  # line comment
    r'|(?P<string>"[^"]*")'  # strings may contain newlines
    r'|(?P<unterminated>"[^"]*\Z)'  # opening quote with no partner before EOF
    r"|(?P<number>[0-9]+(?:\.[0-9]+)?)"
    r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<operator>!=|==|<=|>=|[(){},.\-+;/*!=<>])"
    r"|(?P<unexpected>.)",
    re.DOTALL,
)


def lex(source: SourceText, errors: list[LoxScanError] | None = None) -> Iterator[Token]:
    """Token generator: yields Token objects, the last one always EOF.

    Scan errors are appended to `errors` (when given) and scanning continues
    after the offending character.
    """
    if errors is None:
        errors = []
    line = 1
    pos = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        kind = m.lastgroup
        text = m.group()
        pos = m.end()

        if kind == "newline":
            line += 1
        elif kind in ("whitespace", "comment"):
            continue
        elif kind == "string":
            line += text.count("\n")
            yield Token(TokenType.STRING, text, text[1:-1], line)
        elif kind == "unterminated":
            line += text.count("\n")
            errors.append(LoxScanError(line, "Unterminated string."))
        elif kind == "number":
            yield Token(TokenType.NUMBER, text, float(text), line)
        elif kind == "identifier":
            yield Token(KEYWORDS.get(text, TokenType.IDENTIFIER), text, None, line)
        elif kind == "operator":
            yield Token(OPERATORS[text], text, None, line)
        else:
            errors.append(LoxScanError(line, f"Unexpected character: {text}"))

    yield Token(TokenType.EOF, "", None, line)


@dataclass
class ScanResult:
    tokens: list[Token]
    errors: list[LoxScanError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def scan(source: SourceText) -> ScanResult:
    """Eagerly scan `source`, collecting every token and every scan error."""
    errors: list[LoxScanError] = []
    tokens = list(lex(source, errors))
    logger.debug("scanned %d tokens, %d errors", len(tokens), len(errors))
    return ScanResult(tokens, errors)
