"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from beginlang.lexer import tokenize
from beginlang.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding the final EOF)."""

    def _lex(source: str, strict: bool = False) -> list[Token]:
        tokens = tokenize(source, strict=strict)
        # Strip trailing EOF for convenience
        return tokens[:-1]

    return _lex


@pytest.fixture
def program():
    """Return a helper that wraps statements in a begin … end . block."""

    def _program(*statements: str) -> str:
        body = "\n".join(f"  {s}" for s in statements)
        return f"begin\n{body}\nend .\n"

    return _program


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token lexemes match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
