import pytest

from lox_lsp.indexer import BUILTIN_SIGNATURES, build_index

SOURCE = """\
var total = 0;
fun add(a, b) {
  var sum = a + b;
  return sum;
}
{
  var hidden = 1;
}
print add(1, 2);
"""


def test_symbols_include_nested_declarations():
    idx = build_index(SOURCE)
    assert [(s.name, s.kind, s.line) for s in idx.symbols] == [
        ("total", "var", 0),
        ("add", "function", 1),
        ("sum", "var", 2),
        ("hidden", "var", 6),
    ]
    assert idx.errors == []
    add = idx.by_name()["add"]
    assert add.col == 4
    assert add.detail == "fun add(a, b)"


def test_errors_are_collected_without_losing_good_symbols():
    idx = build_index("var ok = 1;\nvar = 2;\nprint @;\nfun f() {}")
    assert [(e.line, e.message) for e in idx.errors] == [
        (2, "Expect variable name."),
        (3, "Unexpected character '@'."),
        (3, "Expect expression."),
    ]
    assert [s.name for s in idx.symbols] == ["ok", "f"]


def test_builtin_signatures():
    assert BUILTIN_SIGNATURES == {"clock": "clock()", "assert": "assert(arg)"}


def test_server_diagnostics_and_hover():
    pytest.importorskip("pygls")
    from lox_lsp import server

    text = "var x = 1;\nprint ;\n"
    idx = build_index(text)
    diags = server.diagnostics_for(text, idx)
    assert len(diags) == 1
    assert diags[0].range.start.line == 1
    assert diags[0].range.end.character == len("print ;")
    assert diags[0].message == "Expect expression at ';'."
    assert diags[0].source == "lox-ls"

    assert server.hover_text("x", idx) == "var x (defined at 1:5)"
    assert server.hover_text("clock", idx) == "clock() (native)"
    assert server.hover_text("nope", idx) is None


def test_resolver_errors_become_diagnostics():
    idx = build_index("return 1;\n{\n  var a = a;\n}\n")
    assert [(e.line, e.message) for e in idx.errors] == [
        (1, "Can't return from top-level code."),
        (3, "Can't read local variable in its own initializer."),
    ]
    assert [s.name for s in idx.symbols] == ["a"]
