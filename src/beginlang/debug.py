"""--trace output: productions entered and tokens read, written to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from beginlang.errors import printable
from beginlang.tokens import Token


class Tracer:
    """Print an indented trace of the recursive descent to *file*."""

    def __init__(self, *, file: TextIO = sys.stderr) -> None:
        self._file = file
        self._depth = 0

    def _indent(self) -> str:
        return "  " * self._depth

    def token(self, tok: Token) -> None:
        text = printable(tok.text)
        self._file.write(f"{self._indent()}Next token is: {tok.describe()}, next lexeme is {text}\n")

    @contextmanager
    def production(self, name: str) -> Iterator[None]:
        self._file.write(f"{self._indent()}Enter <{name}>\n")
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
        # Only reached when the production matched
        self._file.write(f"{self._indent()}Exit <{name}>\n")
