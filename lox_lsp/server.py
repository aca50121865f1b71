from __future__ import annotations

"""
A minimal pygls-based Language Server for Lox.

Features:
- Initialize/Shutdown/Exit
- Text synchronization and document store
- Diagnostics: every scanner and parser error, at its line
- Hover: natives and declared variables/functions
- Document Symbols: var and fun declarations from the indexer

Note: We never evaluate the buffer; the index comes from the parser alone.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TextDocumentSyncKind,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
)

from lox_lsp.indexer import build_index, BUILTIN_SIGNATURES, DocumentIndex

SOURCE = "lox-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class LoxLanguageServer(LanguageServer):
    CMD_NAME = "lox-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, "v0.1", text_document_sync_kind=TextDocumentSyncKind.Full)
        self.documents: Dict[str, DocumentState] = {}


ls = LoxLanguageServer()


# --- Text sync ---
@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _update(uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # the workspace has already applied the change set
    _update(uri, ls.workspace.get_text_document(uri).source)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, diagnostics_for(text, idx))


# --- Diagnostics ---
def _line_range(text: str, line: int) -> Range:
    lines = text.splitlines()
    width = len(lines[line]) if 0 <= line < len(lines) else 0
    return Range(start=Position(line=line, character=0), end=Position(line=line, character=width))


def diagnostics_for(text: str, idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []
    for err in idx.errors:
        line = max((err.line or 1) - 1, 0)
        diags.append(
            Diagnostic(
                range=_line_range(text, line),
                message=f"{err.message.rstrip('.')}{err.where}.",
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )
    return diags


# --- Hover ---
@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = _extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = hover_text(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


def hover_text(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return f"{BUILTIN_SIGNATURES[word]} (native)"
    sdef = idx.by_name().get(word)
    if sdef is None:
        return None
    return f"{sdef.detail} (defined at {sdef.line + 1}:{sdef.col + 1})"


# --- Document Symbols ---
@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for sdef in state.index.symbols:
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
        )
        symbols.append(
            DocumentSymbol(
                name=sdef.name,
                detail=sdef.detail,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---
def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines()
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = min(pos.character, len(line))
    while start > 0 and (line[start - 1].isalnum() or line[start - 1] == "_"):
        start -= 1
    end = min(pos.character, len(line))
    while end < len(line) and (line[end].isalnum() or line[end] == "_"):
        end += 1
    word = line[start:end]
    return word or None


if __name__ == "__main__":
    # Run the language server over stdio
    ls.start_io()
