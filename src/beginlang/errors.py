"""Error types with formatted diagnostic context."""

from __future__ import annotations

from beginlang.tokens import EOF_CHAR, Span, Token


class CheckError(Exception):
    """First lexical or syntax violation found in a program.

    Carries the lexer state at the point of failure: the current token,
    the current raw character and the lexeme text. The source text is
    optional and only used to print the offending line.
    """

    def __init__(
        self,
        message: str,
        span: Span,
        *,
        token: Token | None,
        char: str,
        lexeme: str,
        source: str | None = None,
    ) -> None:
        self.message = message
        self.span = span
        self.token = token
        self.char = char
        self.lexeme = lexeme
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.bgn") -> str:
        line = self.span.start.line
        col = self.span.start.column

        line_num = str(line)
        gutter_width = len(line_num) + 1
        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        parts = [
            f"error: {self.message}",
            f"{' ' * gutter_width}--> {filename}:{line}:{col}",
        ]

        if self.source is not None:
            lines = self.source.splitlines()
            source_line = lines[line - 1] if 0 < line <= len(lines) else ""

            # Underline the token when it sits on one line
            if self.span.end.line == line:
                underline_len = max(1, self.span.end.column - col)
            else:
                underline_len = max(1, len(source_line) - col + 1)

            pad = " " * (col - 1)
            parts += [
                blank_gutter,
                f"{line_gutter} {printable(source_line)}",
                f"{blank_gutter} {pad}{'^' * underline_len}",
            ]

        token = self.token.describe() if self.token is not None else "none"
        parts += [
            f"  = next token: {token}",
            f"  = next char: {display_char(self.char)}",
            f"  = lexeme: {printable(self.lexeme)}",
        ]
        return "\n".join(parts)


class LexError(CheckError):
    """Raised when the lexer cannot produce a token (lexeme overflow)."""


class ParseError(CheckError):
    """Raised on the first grammar mismatch."""


def display_char(ch: str) -> str:
    """Quote a raw character for display; end of input shows as a blank."""
    if ch == EOF_CHAR:
        return "' '"
    if ch.isprintable():
        return f"'{ch}'"
    return repr(ch)


def printable(text: str) -> str:
    """Show bytes that were not valid UTF-8 as \\xNN escapes."""
    try:
        raw = text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "surrogatepass")
    return raw.decode("utf-8", "backslashreplace")
