"""Tests for the --trace output."""

from __future__ import annotations

import io

import pytest

from beginlang.debug import Tracer
from beginlang.errors import ParseError
from beginlang.parser import parse


def trace(source: str) -> list[str]:
    out = io.StringIO()
    parse(source, tracer=Tracer(file=out))
    return out.getvalue().splitlines()


class TestTrace:
    def test_first_line_is_primed_token(self):
        lines = trace("begin x = 1; end .")
        assert lines[0] == "Next token is: BEGIN (30), next lexeme is begin"

    def test_program_enter_and_exit(self):
        lines = trace("begin x = 1; end .")
        assert lines[1] == "Enter <program>"
        assert lines[-1] == "Exit <program>"

    def test_nesting_is_indented(self):
        lines = trace("begin x = 1; end .")
        assert "  Enter <statement_list>" in lines
        assert "    Enter <statement>" in lines
        assert "      Enter <assignment_statement>" in lines

    def test_every_production_exits(self):
        lines = trace("begin x = (1 + y_2) * 3; end .")
        enters = [ln.strip()[len("Enter ") :] for ln in lines if ln.strip().startswith("Enter")]
        exits = [ln.strip()[len("Exit ") :] for ln in lines if ln.strip().startswith("Exit")]
        assert sorted(enters) == sorted(exits)

    def test_last_token_is_eof(self):
        lines = trace("begin x = 1; end .")
        token_lines = [ln.strip() for ln in lines if ln.strip().startswith("Next token")]
        assert token_lines[-1] == "Next token is: EOF (-1), next lexeme is EOF"

    def test_failed_production_has_no_exit(self):
        out = io.StringIO()
        with pytest.raises(ParseError):
            parse("begin x = ; end .", tracer=Tracer(file=out))
        lines = out.getvalue().splitlines()
        assert any(ln.strip() == "Enter <factor>" for ln in lines)
        assert not any(ln.strip() == "Exit <factor>" for ln in lines)
        assert not any(ln.strip() == "Exit <program>" for ln in lines)
