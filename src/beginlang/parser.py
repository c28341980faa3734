"""beginlang parser: recursive descent recognizer over the lexer's token stream.

Grammar:

    program              = "begin", statement_list, "end", "." ;
    statement_list       = statement, { statement } ;
    statement            = assignment_statement ;
    assignment_statement = identifier, "=", expr, ";" ;
    expr                 = term, { ("+" | "-"), term } ;
    term                 = factor, { ("*" | "/"), factor } ;
    factor               = identifier | number | "(", expr, ")" ;
    identifier           = IDENT, { "_", [ IDENT | INT_LIT ] } ;

Every production is entered with the current token positioned on the first
token of its construct and returns with the current token on the first
token after it. Nothing is built; a successful return is the result.
"""

from __future__ import annotations

import io
import sys
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from typing import TextIO

from beginlang.debug import Tracer
from beginlang.errors import ParseError
from beginlang.lexer import Lexer
from beginlang.source import CharacterSource
from beginlang.tokens import Token, TokenType

# Each level of parentheses costs three frames (expr, term, factor)
RECURSION_LIMIT = 20_000


@contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    """Raise the interpreter recursion limit to at least *limit* for the block."""
    old = sys.getrecursionlimit()
    if old < limit:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(old)


class Parser:
    """Recursive descent recognizer with a single token of lookahead."""

    def __init__(self, lexer: Lexer, *, tracer: Tracer | None = None) -> None:
        self._lexer = lexer
        self._tracer = tracer

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    @property
    def _tok(self) -> Token:
        tok = self._lexer.token
        assert tok is not None, "parser used before priming"
        return tok

    def _at(self, *types: TokenType) -> bool:
        return self._tok.type in types

    def _advance(self) -> Token:
        """Consume the current token and read the next one."""
        tok = self._lexer.next_token()
        if self._tracer is not None:
            self._tracer.token(tok)
        return tok

    def _expect(self, tt: TokenType, message: str) -> None:
        if not self._at(tt):
            raise self._error(message)
        self._advance()

    def _production(self, name: str) -> AbstractContextManager[None]:
        if self._tracer is None:
            return nullcontext()
        return self._tracer.production(name)

    def _error(self, message: str) -> ParseError:
        tok = self._tok
        return ParseError(
            message,
            tok.span,
            token=tok,
            char=self._lexer.chars.char,
            lexeme=self._lexer.lexeme,
            source=self._lexer.source,
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def parse(self) -> None:
        """Prime the lexer, recognize a program, and require end of input."""
        tok = self._lexer.prime()
        if self._tracer is not None:
            self._tracer.token(tok)

        try:
            with _recursion_limit(RECURSION_LIMIT):
                self._program()
        except RecursionError:
            raise self._error("expression nested too deeply") from None

        if not self._at(TokenType.EOF):
            raise self._error("unexpected symbols after end of program")

    # ------------------------------------------------------------------
    # Productions
    # ------------------------------------------------------------------

    def _program(self) -> None:
        with self._production("program"):
            self._expect(TokenType.BEGIN, "program must start with 'begin'")
            self._statement_list()
            self._expect(TokenType.END, "program must end with 'end'")
            self._expect(TokenType.PERIOD, "missing '.' after 'end'")

    def _statement_list(self) -> None:
        with self._production("statement_list"):
            self._statement()
            # Every statement starts with an identifier
            while self._at(TokenType.IDENT):
                self._statement()

    def _statement(self) -> None:
        with self._production("statement"):
            self._assignment_statement()

    def _assignment_statement(self) -> None:
        with self._production("assignment_statement"):
            self._identifier()
            self._expect(
                TokenType.ASSIGN, "assignment operator '=' missing in assignment statement"
            )
            self._expr()
            self._expect(
                TokenType.SEMICOLON, "semicolon ';' missing at end of assignment statement"
            )

    def _expr(self) -> None:
        with self._production("expr"):
            self._term()
            while self._at(TokenType.ADD, TokenType.SUB):
                self._advance()
                self._term()

    def _term(self) -> None:
        with self._production("term"):
            self._factor()
            while self._at(TokenType.MUL, TokenType.DIV):
                self._advance()
                self._factor()

    def _factor(self) -> None:
        with self._production("factor"):
            if self._at(TokenType.IDENT):
                self._identifier()
            elif self._at(TokenType.INT_LIT):
                self._advance()
            elif self._at(TokenType.LPAREN):
                self._advance()
                self._expr()
                self._expect(TokenType.RPAREN, "right parenthesis ')' expected")
            else:
                raise self._error("expected identifier, number, or '(' in factor")

    def _identifier(self) -> None:
        """Segments joined by single underscores; one trailing '_' is allowed."""
        with self._production("identifier"):
            self._expect(TokenType.IDENT, "identifier must start with a letter")
            while self._at(TokenType.UNDERSCORE):
                self._advance()
                if self._at(TokenType.UNDERSCORE):
                    raise self._error("consecutive underscores '__' not allowed in identifier")
                if not self._at(TokenType.IDENT, TokenType.INT_LIT):
                    break
                self._advance()


def parse_stream(
    stream: TextIO,
    *,
    strict: bool = False,
    tracer: Tracer | None = None,
    source: str | None = None,
) -> None:
    """Check the program read from *stream*; raise LexError or ParseError on failure.

    *source* is the full text, when the caller has it, for error context.
    """
    lexer = Lexer(CharacterSource(stream), strict=strict, source=source)
    Parser(lexer, tracer=tracer).parse()


def parse(source: str, *, strict: bool = False, tracer: Tracer | None = None) -> None:
    """Convenience function: check source text, raising on the first error."""
    parse_stream(io.StringIO(source), strict=strict, tracer=tracer, source=source)
