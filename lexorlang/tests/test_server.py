"""
Tests for the LEXOR language server analysis.
"""
from types import SimpleNamespace

from lsprotocol.types import DiagnosticSeverity, SymbolKind

from lexorlang import server
from lexorlang.tests.utils import program

URI = "file:///work/sample.lexor"


def test_analyze_indexes_declarations():
    symbols, published = server.analyze(URI, program(
        "DECLARE INT x, y = 5",
        "DECLARE STRING name",
        "PRINT: x",
    ))
    assert published == []
    assert [(s.name, s.line, s.column, s.detail) for s in symbols] == [
        ("x", 2, 12, "DECLARE INT x"),
        ("y", 2, 15, "DECLARE INT y"),
        ("name", 3, 15, "DECLARE STRING name"),
    ]
    rng = symbols[2].range
    assert (rng.start.line, rng.start.character) == (3, 15)
    assert (rng.end.line, rng.end.character) == (3, 19)


def test_analyze_reports_errors_as_diagnostics():
    symbols, published = server.analyze(URI, program("PRINT 5"))
    assert symbols is None
    (diagnostic,) = published
    assert diagnostic.message == "Expected ':' after 'PRINT'"
    assert diagnostic.severity == DiagnosticSeverity.Error
    assert diagnostic.source == "lexor"
    assert (diagnostic.range.start.line, diagnostic.range.start.character) == (2, 6)


def test_update_index_keeps_last_good_symbols(monkeypatch):
    published = []
    ls = server.lang_server
    monkeypatch.setattr(ls, "publish_diagnostics", lambda uri, diags: published.append((uri, diags)))
    monkeypatch.setattr(ls, "symbols_by_uri", {})

    ls.update_index(URI, program("DECLARE INT total = 1"))
    ls.update_index(URI, program("DECLARE INT total = 1", "PRINT 5"))

    assert ls.lookup(URI, "total").detail == "DECLARE INT total"
    assert ls.lookup(URI, "missing") is None
    assert [len(diags) for _, diags in published] == [0, 1]


def test_document_symbols(monkeypatch):
    ls = server.lang_server
    monkeypatch.setattr(ls, "publish_diagnostics", lambda uri, diags: None)
    monkeypatch.setattr(ls, "symbols_by_uri", {})
    ls.update_index(URI, program("DECLARE BOOL done = FALSE"))

    params = SimpleNamespace(text_document=SimpleNamespace(uri=URI))
    (symbol,) = server.document_symbols(ls, params)
    assert symbol.name == "done"
    assert symbol.kind == SymbolKind.Variable
    assert symbol.detail == "DECLARE BOOL done"
