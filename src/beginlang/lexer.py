"""beginlang lexer: produces one token at a time from a character source."""

from __future__ import annotations

import io

from beginlang.errors import LexError
from beginlang.source import CharacterSource
from beginlang.tokens import (
    COMMENT_CHAR,
    EOF_LEXEME,
    KEYWORDS,
    MAX_LEXEME_LEN,
    PUNCTUATION,
    CharClass,
    Position,
    Span,
    Token,
    TokenType,
)


class Lexer:
    """Turn a CharacterSource into tokens on demand.

    Only the most recent token is kept (``self.token``); the parser pulls
    the next one once it has consumed the current one.
    """

    def __init__(
        self,
        chars: CharacterSource,
        *,
        strict: bool = False,
        source: str | None = None,
    ) -> None:
        self._chars = chars
        self._strict = strict
        # Full text, if known, so errors can show the offending line
        self._source = source
        self._lexeme: list[str] = []
        self.token: Token | None = None

    @property
    def chars(self) -> CharacterSource:
        return self._chars

    @property
    def source(self) -> str | None:
        return self._source

    @property
    def lexeme(self) -> str:
        return "".join(self._lexeme)

    def prime(self) -> Token:
        """Read the first character and produce the first token."""
        self._chars.advance()
        return self.next_token()

    def next_token(self) -> Token:
        """Scan the next token, skipping whitespace and comments."""
        chars = self._chars
        while True:
            self._lexeme = []
            chars.skip_whitespace()
            start = chars.position

            if chars.char_class is CharClass.LETTER:
                self._scan_while(CharClass.LETTER, CharClass.DIGIT)
                tt = KEYWORDS.get(self.lexeme, TokenType.IDENT)
                return self._emit(tt, start)

            if chars.char_class is CharClass.DIGIT:
                self._scan_while(CharClass.DIGIT)
                return self._emit(TokenType.INT_LIT, start)

            if chars.char_class is CharClass.OTHER:
                if chars.char == COMMENT_CHAR:
                    self._skip_comment()
                    continue
                return self._lex_punctuation(start)

            self._lexeme = list(EOF_LEXEME)
            return self._emit(TokenType.EOF, start)

    # ------------------------------------------------------------------
    # Scanners
    # ------------------------------------------------------------------

    def _scan_while(self, *classes: CharClass) -> None:
        self._add_char()
        self._chars.advance()
        while self._chars.char_class in classes:
            self._add_char()
            self._chars.advance()

    def _lex_punctuation(self, start: Position) -> Token:
        ch = self._chars.char
        tt = PUNCTUATION.get(ch)
        if tt is None:
            if self._strict:
                raise self._error(f"unrecognized character {ch!r}")
            # Anything outside the table ends the input
            tt = TokenType.EOF
        self._add_char()
        self._chars.advance()
        return self._emit(tt, start)

    def _skip_comment(self) -> None:
        chars = self._chars
        while chars.char != "\n" and not chars.at_eof:
            chars.advance()
        if chars.char == "\n":
            chars.advance()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _add_char(self) -> None:
        if len(self._lexeme) >= MAX_LEXEME_LEN:
            raise self._error("lexeme is too long")
        self._lexeme.append(self._chars.char)

    def _emit(self, tt: TokenType, start: Position) -> Token:
        # The current character is the first one past the token
        self.token = Token(tt, self.lexeme, Span(start, self._chars.position))
        return self.token

    def _error(self, message: str) -> LexError:
        pos = self._chars.position
        end = Position(pos.line, pos.column + 1, pos.offset + 1)
        return LexError(
            message,
            Span(pos, end),
            token=self.token,
            char=self._chars.char,
            lexeme=self.lexeme,
            source=self._source,
        )


def tokenize(source: str, *, strict: bool = False) -> list[Token]:
    """Lex a whole string, returning tokens up to and including the first EOF."""
    lexer = Lexer(CharacterSource(io.StringIO(source)), strict=strict, source=source)
    tokens = [lexer.prime()]
    while tokens[-1].type is not TokenType.EOF:
        tokens.append(lexer.next_token())
    return tokens
