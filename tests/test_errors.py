"""Test diagnostic formatting: message, location, context and lexer state."""

import pytest

from beginlang.errors import CheckError, LexError, ParseError, display_char, printable
from beginlang.parser import parse
from beginlang.tokens import Position, Span


def parse_error(source: str) -> CheckError:
    with pytest.raises(CheckError) as exc_info:
        parse(source)
    return exc_info.value


class TestErrorFormatting:
    def test_format_starts_with_error_prefix(self):
        formatted = parse_error("begin x = 1 + 2 end .").format()
        assert formatted.startswith("error: semicolon ';' missing")

    def test_format_contains_location(self):
        formatted = parse_error("begin x = 1 + 2 end .").format("prog.bgn")
        assert "--> prog.bgn:1:17" in formatted

    def test_format_contains_source_line(self):
        formatted = parse_error("begin x = 1 + 2 end .").format()
        assert "1 | begin x = 1 + 2 end ." in formatted

    def test_format_underlines_token(self):
        formatted = parse_error("begin x = 1 + 2 end .").format()
        caret_line = formatted.splitlines()[4]
        assert caret_line.endswith("^^^")
        assert caret_line.index("^") == caret_line.index("|") + 1 + 16

    def test_format_contains_lexer_state(self):
        formatted = parse_error("begin x = 1 + 2 end .").format()
        assert "next token: END (31)" in formatted
        assert "next char: ' '" in formatted
        assert "lexeme: end" in formatted

    def test_eof_char_is_blank(self):
        formatted = parse_error("begin x = 1; end").format()
        assert "next token: EOF (-1)" in formatted
        assert "next char: ' '" in formatted
        assert "lexeme: EOF" in formatted

    def test_multiline_source(self):
        formatted = parse_error("begin\n  x = 1\nend .").format()
        assert "3:1" in formatted
        assert "3 | end ." in formatted

    def test_str_is_formatted_message(self):
        err = parse_error("")
        assert str(err).startswith("error: program must start with 'begin'")


class TestWithoutSource:
    def test_no_source_skips_context_lines(self):
        pos = Position(2, 5, 10)
        err = ParseError(
            "test error",
            Span(pos, Position(2, 6, 11)),
            token=None,
            char="q",
            lexeme="q",
        )
        formatted = err.format("test.bgn")
        assert "error: test error" in formatted
        assert "test.bgn:2:5" in formatted
        assert "|" not in formatted
        assert "^" not in formatted
        assert "next token: none" in formatted
        assert "next char: 'q'" in formatted


class TestLexErrorFormat:
    def test_overflow_message(self):
        err = parse_error("begin x = " + "7" * 120 + "; end .")
        assert isinstance(err, LexError)
        formatted = err.format()
        assert "error: lexeme is too long" in formatted
        assert "next token: ASSIGN (20)" in formatted
        assert "lexeme: " + "7" * 98 in formatted

    def test_overflow_position(self):
        err = parse_error("begin x = " + "7" * 120 + "; end .")
        # First character past the limit
        assert err.span.start.column == 11 + 98


class TestDisplayChar:
    def test_printable(self):
        assert display_char("x") == "'x'"

    def test_eof_placeholder(self):
        assert display_char("") == "' '"

    def test_control_char(self):
        assert display_char("\n") == "'\\n'"


class TestPrintable:
    def test_plain_text_unchanged(self):
        assert printable("begin x = 1;") == "begin x = 1;"

    def test_escaped_byte_shown_as_hex(self):
        raw = b"caf\xe9".decode("utf-8", "surrogateescape")
        assert printable(raw) == "caf\\xe9"

    def test_valid_non_ascii_kept(self):
        assert printable("café") == "café"
