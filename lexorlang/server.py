"""
LEXOR Language Server entry point.

This server provides basic editor features for LEXOR source files using
`pygls`. It reuses the LEXOR lexer and parser to report lexical and syntax
errors as editor diagnostics, and builds a per-document index of declared
variables supporting definition lookup, hover information and document
symbols.


File: server.py
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_CHANGE,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)

from lexorlang.ast_nodes import Declare
from lexorlang.diagnostics import Diagnostics
from lexorlang.lexer import tokenize
from lexorlang.parser import Parser


@dataclass
class LexorSymbol:
    """A declared variable in a LEXOR file."""

    name: str
    uri: str
    line: int
    column: int
    detail: str

    @property
    def range(self) -> Range:
        """Zero-based editor range covering the variable name."""
        return Range(
            Position(self.line, self.column),
            Position(self.line, self.column + len(self.name)),
        )


def to_lsp_diagnostic(diagnostic) -> Diagnostic:
    """
    Convert a recorded LEXOR error into an editor diagnostic.

    LEXOR positions are 1-based; editor positions are 0-based.
    """
    line = max(diagnostic.line - 1, 0)
    column = max(diagnostic.column - 1, 0)
    return Diagnostic(
        range=Range(Position(line, column), Position(line, column + 1)),
        message=diagnostic.message,
        severity=DiagnosticSeverity.Error,
        source="lexor",
    )


def analyze(uri: str, text: str) -> Tuple[Optional[List[LexorSymbol]], List[Diagnostic]]:
    """
    Lex and parse ``text`` without running it.

    Returns:
        tuple: The declared symbols, or None if the document did not parse,
        and the editor diagnostics for every lexical and syntax error.
    """
    diagnostics = Diagnostics()
    tokens = tokenize(text, diagnostics)
    ast = Parser(tokens, diagnostics).parse()
    published = [to_lsp_diagnostic(d) for d in diagnostics.errors]
    if ast is None:
        return None, published

    symbols: List[LexorSymbol] = []
    for node in ast:
        if not isinstance(node, Declare):
            continue
        for name, _ in node.names:
            detail = f"DECLARE {node.var_type.value} {name.lexeme}"
            symbols.append(
                LexorSymbol(name.lexeme, uri, name.line - 1, name.column - 1, detail)
            )
    return symbols, published


class LexorLanguageServer(LanguageServer):
    """Language server for LEXOR source files."""

    def __init__(self) -> None:
        super().__init__("lexor-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[LexorSymbol]] = {}

    def update_index(self, uri: str, text: str) -> None:
        """
        Re-analyze ``text``, publish its diagnostics and update the symbol
        index for ``uri``.

        A document that fails to parse keeps its last good index so lookups
        keep working while it is being edited.
        """
        symbols, published = analyze(uri, text)
        if symbols is not None:
            self.symbols_by_uri[uri] = symbols
        self.publish_diagnostics(uri, published)

    def lookup(self, uri: str, word: str) -> Optional[LexorSymbol]:
        """Return the last declaration of ``word`` in ``uri``, if any."""
        matches = [sym for sym in self.symbols_by_uri.get(uri, []) if sym.name == word]
        return matches[-1] if matches else None


lang_server = LexorLanguageServer()


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LexorLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    ls.update_index(params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LexorLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    if params.content_changes:
        ls.update_index(params.text_document.uri, params.content_changes[0].text)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: LexorLanguageServer, params: DefinitionParams):
    """Return the declaration location for the variable under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(params.text_document.uri, word)
    if sym is None:
        return None
    return Location(uri=sym.uri, range=sym.range)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: LexorLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Show the declaration of the variable under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.lookup(params.text_document.uri, word)
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: LexorLanguageServer, params: DocumentSymbolParams):
    """Return the declared variables of the given document."""
    symbols = ls.symbols_by_uri.get(params.text_document.uri, [])
    result: List[DocumentSymbol] = []
    for sym in symbols:
        result.append(
            DocumentSymbol(
                name=sym.name,
                kind=SymbolKind.Variable,
                range=sym.range,
                selection_range=sym.range,
                detail=sym.detail,
            )
        )
    return result


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
