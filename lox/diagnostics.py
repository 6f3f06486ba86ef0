"""Rendering of scan, parse and runtime errors for the command line.

Every diagnostic is one `str(error)` written to stderr, coloured with termcolor
when the stream is a terminal and colour has not been turned off.
"""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

from termcolor import colored

from lox.config import color_enabled
from lox.errors import LoxError


class Reporter:
    ERROR = "red"

    def __init__(self, stream: TextIO | None = None, color: bool | None = None):
        self.stream = stream if stream is not None else sys.stderr
        self.color = color_enabled(self.stream) if color is None else color
        self.count = 0

    def _paint(self, text: str) -> str:
        if not self.color:
            return text
        return colored(text, self.ERROR, attrs=["bold"], force_color=True)

    def message(self, text: str) -> None:
        print(self._paint(text), file=self.stream)
        self.count += 1

    def error(self, error: LoxError) -> None:
        self.message(str(error))

    def errors(self, errors: Iterable[LoxError]) -> None:
        for error in errors:
            self.error(error)
