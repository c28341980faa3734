"""beginlang syntax checker for the begin … end . toy language."""

from __future__ import annotations

__version__ = "0.1.0"


def check(source: str, *, strict: bool = False) -> None:
    """Validate beginlang source, raising LexError or ParseError on the first error."""
    from beginlang.parser import parse

    parse(source, strict=strict)
