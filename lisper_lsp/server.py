from __future__ import annotations

"""
A minimal pygls-based Language Server for Lisper.

Features:
- Text synchronization and document store
- Diagnostics: first lex/parse error from the real reader
- Hover: builtin and special form signatures, locally defined symbols
- Completion: special forms, builtins, document definitions
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from lisper import __version__
from lisper_lsp.indexer import DocumentIndex, build_index, completion_candidates, hover_text

logger = logging.getLogger(__name__)

COMPLETION_KINDS = {
    "keyword": CompletionItemKind.Keyword,
    "function": CompletionItemKind.Function,
    "var": CompletionItemKind.Variable,
}


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class LisperLanguageServer(LanguageServer):
    CMD_NAME = "lisper-ls"

    def __init__(self):
        super().__init__(name=self.CMD_NAME, version=__version__)
        self.documents: Dict[str, DocumentState] = {}

    def refresh(self, uri: str) -> DocumentState:
        """Re-index the workspace copy of `uri` and publish its diagnostics."""
        text = self.workspace.get_text_document(uri).source
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        self.publish_diagnostics(uri, _to_diagnostics(state.index))
        return state


ls = LisperLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LisperLanguageServer, params: DidOpenTextDocumentParams):
    logger.debug("opened %s", params.text_document.uri)
    ls.refresh(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LisperLanguageServer, params: DidChangeTextDocumentParams):
    ls.refresh(params.text_document.uri)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LisperLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _to_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=Range(
                start=Position(line=d.line, character=d.col),
                end=Position(line=d.line, character=d.col + 1),
            ),
            message=d.message,
            severity=DiagnosticSeverity.Error,
            source=LisperLanguageServer.CMD_NAME,
        )
        for d in idx.diagnostics
    ]


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(ls: LisperLanguageServer, params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = _extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = hover_text(state.index, word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(ls: LisperLanguageServer, params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    index = state.index if state else DocumentIndex()
    items = [
        CompletionItem(label=label, kind=COMPLETION_KINDS[kind], detail=detail)
        for label, kind, detail in completion_candidates(index)
    ]
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(
    ls: LisperLanguageServer, params: DocumentSymbolParams
) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.symbols.items():
        rng = Range(
            start=Position(line=sdef.line, character=sdef.col),
            end=Position(line=sdef.line, character=sdef.col + len(name)),
        )
        symbols.append(
            DocumentSymbol(
                name=name,
                kind=SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable,
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


# --- Helpers ---
def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    # expand to word boundaries
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in " \t()\n\r":
        start -= 1
    while end < len(line) and line[end] not in " \t()\n\r":
        end += 1
    return line[start:end] or None


def main():
    logging.basicConfig(level=logging.INFO)
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
