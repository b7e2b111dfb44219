"""Minimal LSP server for native2ascii: diagnostics only.

Reports the non-ASCII characters that ``encode`` would escape, that is,
the ones outside comments of the document's language.
"""

from __future__ import annotations

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

from native2ascii import __version__
from native2ascii.codec import to_code_units
from native2ascii.grammars import GRAMMARS, CommentGrammar
from native2ascii.scanner import Scanner, ScanState

server = LanguageServer("native2ascii-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full)


def grammar_for(language_id: str | None) -> CommentGrammar:
    """Pick the comment grammar for an LSP languageId, falling back to C-style."""
    if language_id and language_id in GRAMMARS:
        return GRAMMARS[language_id]
    return GRAMMARS["default"]


def find_escapes(source: str, grammar: CommentGrammar) -> list[Range]:
    """Return the ranges of non-ASCII runs outside comments.

    Positions count UTF-16 code units, which is the LSP default encoding.
    """
    units = to_code_units(source)
    states = Scanner(source, grammar).states()
    ranges: list[Range] = []
    line = 0
    col = 0
    run_start: Position | None = None

    for ch, state in zip(units, states):
        escaped = ord(ch) > 0x7F and state == ScanState.CODE
        if escaped and run_start is None:
            run_start = Position(line=line, character=col)
        elif not escaped and run_start is not None:
            ranges.append(Range(start=run_start, end=Position(line=line, character=col)))
            run_start = None

        if ch == "\n":
            line += 1
            col = 0
        else:
            col += 1

    if run_start is not None:
        ranges.append(Range(start=run_start, end=Position(line=line, character=col)))
    return ranges


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    grammar = grammar_for(doc.language_id)
    diagnostics = [
        Diagnostic(
            range=rng,
            message=f"non-ASCII text outside comments (escaped as \\uXXXX with --ignore-comments {grammar.tag})",
            severity=DiagnosticSeverity.Information,
            source="native2ascii",
        )
        for rng in find_escapes(doc.source, grammar)
    ]

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
