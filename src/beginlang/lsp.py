"""Minimal LSP server for beginlang: diagnostics only."""

from __future__ import annotations

import tomllib
from pathlib import Path

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from beginlang import __version__
from beginlang.cli import check_setting, load_config
from beginlang.errors import CheckError
from beginlang.parser import parse

server = LanguageServer(
    "beginlang-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _diagnostic(exc: CheckError) -> Diagnostic:
    start = exc.span.start
    end = exc.span.end
    # An empty span (end of input) still gets a one-character range
    end_col = max(end.column, start.column + 1) if end.line == start.line else end.column
    return Diagnostic(
        range=Range(
            start=Position(line=start.line - 1, character=start.column - 1),
            end=Position(line=end.line - 1, character=end_col - 1),
        ),
        message=exc.message,
        severity=DiagnosticSeverity.Error,
        source="beginlang",
    )


def _strict_for(uri: str, path: str) -> bool:
    """Read [check] strict from the beginlang.toml beside a file: document."""
    if not uri.startswith("file:"):
        return False
    try:
        config = load_config(None, Path(path).parent)
    except (OSError, tomllib.TOMLDecodeError):
        # The CLI reports a broken config; here the defaults apply
        return False
    return check_setting(config, "strict")


def _validate(ls: LanguageServer, uri: str) -> None:
    """Check the document and publish its first error, if any."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        parse(doc.source, strict=_strict_for(uri, doc.path))
    except CheckError as exc:
        diagnostics.append(_diagnostic(exc))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
