"""Token types, data structures, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class CharClass(Enum):
    LETTER = auto()
    DIGIT = auto()
    OTHER = auto()
    EOF = auto()


class TokenType(Enum):
    """Token kinds. Each value is the symbolic code shown in diagnostics."""

    # Literals and names
    INT_LIT = 10
    IDENT = 11

    # Operators and punctuation (single-character)
    ASSIGN = 20  # =
    ADD = 21  # +
    SUB = 22  # -
    MUL = 23  # *
    DIV = 24  # /
    LPAREN = 25  # (
    RPAREN = 26  # )
    UNDERSCORE = 28  # _
    PERIOD = 29  # .
    SEMICOLON = 32  # ;

    # Reserved words
    BEGIN = 30
    END = 31

    EOF = -1


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token with its exact source text."""

    type: TokenType
    text: str
    span: Span

    @property
    def code(self) -> int:
        return self.type.value

    def describe(self) -> str:
        return f"{self.type.name} ({self.code})"


# Longest lexeme accepted before the lexer gives up
MAX_LEXEME_LEN = 98

# Empty string marks end of input; a stream never yields it as a character
EOF_CHAR = ""

# Lexeme text of the token emitted at end of input
EOF_LEXEME = "EOF"

COMMENT_CHAR = "~"

KEYWORDS: dict[str, TokenType] = {
    "begin": TokenType.BEGIN,
    "end": TokenType.END,
}

PUNCTUATION: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "+": TokenType.ADD,
    "-": TokenType.SUB,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "_": TokenType.UNDERSCORE,
    ".": TokenType.PERIOD,
    ";": TokenType.SEMICOLON,
    "=": TokenType.ASSIGN,
}

_WHITESPACE = frozenset(" \t\n\v\f\r")


def is_letter(ch: str) -> bool:
    """Return True if ch is an ASCII letter."""
    return ch.isascii() and ch.isalpha()


def is_digit(ch: str) -> bool:
    """Return True if ch is an ASCII decimal digit."""
    return ch != "" and ch in "0123456789"


def is_space(ch: str) -> bool:
    return ch in _WHITESPACE


def classify(ch: str) -> CharClass:
    """Return the character class of a single raw character (or EOF_CHAR)."""
    if ch == EOF_CHAR:
        return CharClass.EOF
    if is_letter(ch):
        return CharClass.LETTER
    if is_digit(ch):
        return CharClass.DIGIT
    return CharClass.OTHER
