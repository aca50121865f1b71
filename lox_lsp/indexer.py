from __future__ import annotations

"""
Indexer for Lox documents, used by the language server.

The document is scanned and parsed with error recovery, never evaluated. From
the result we keep:
- syntax errors (scanner, parser and resolver), each with its 1-based source line
- declarations: ``var`` (kind "var") and ``fun`` (kind "function"),
  including ones nested in blocks, branches, loops and function bodies

Partial or broken buffers are fine: statements that fail to parse are simply
missing from the symbol list.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from lox.builtins import NATIVES
from lox.errors import LoxSyntaxError
from lox.evaluation.resolver import Resolver
from lox.reader.parser import Parser
from lox.reader.scanner import Scanner
from lox.reader.tokens import Token
from lox.syntax.stmt import Block, FunDecl, If, Stmt, VarDecl, While


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int  # 0-based, as LSP positions are
    col: int
    detail: str = ""


@dataclass
class DocumentIndex:
    symbols: List[SymbolDef] = field(default_factory=list)
    errors: List[LoxSyntaxError] = field(default_factory=list)

    def by_name(self) -> Dict[str, SymbolDef]:
        # first declaration wins
        found: Dict[str, SymbolDef] = {}
        for sdef in self.symbols:
            found.setdefault(sdef.name, sdef)
        return found


def _column_of(lines: List[str], token: Token) -> int:
    idx = token.line - 1
    if 0 <= idx < len(lines):
        col = lines[idx].find(token.lexeme)
        if col != -1:
            return col
    return 0


def _walk(statements: Iterable[Stmt]) -> Iterable[Stmt]:
    for stmt in statements:
        yield stmt
        match stmt:
            case Block(statements=inner):
                yield from _walk(inner)
            case If(then_branch=then, else_branch=other):
                yield from _walk([then] if other is None else [then, other])
            case While(body=body):
                yield from _walk([body])
            case FunDecl(body=body):
                yield from _walk(body)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    lines = text.splitlines()

    scanner = Scanner(text)
    tokens = scanner.scan_tokens()
    parser = Parser(tokens)
    try:
        statements = parser.parse_partial()
    except RecursionError:
        statements = []
        parser.errors.append(LoxSyntaxError("Program nested too deeply.", tokens[-1].line))
    resolver = Resolver()
    try:
        resolver.resolve(statements)
    except RecursionError:
        resolver.errors.append(LoxSyntaxError("Program nested too deeply.", tokens[-1].line))
    idx.errors = sorted(scanner.errors + parser.errors + resolver.errors, key=lambda e: e.line or 0)

    for stmt in _walk(statements):
        if isinstance(stmt, FunDecl):
            params = ", ".join(p.lexeme for p in stmt.params)
            idx.symbols.append(
                SymbolDef(
                    name=stmt.name.lexeme,
                    kind="function",
                    line=stmt.name.line - 1,
                    col=_column_of(lines, stmt.name),
                    detail=f"fun {stmt.name.lexeme}({params})",
                )
            )
        elif isinstance(stmt, VarDecl):
            idx.symbols.append(
                SymbolDef(
                    name=stmt.name.lexeme,
                    kind="var",
                    line=stmt.name.line - 1,
                    col=_column_of(lines, stmt.name),
                    detail=f"var {stmt.name.lexeme}",
                )
            )
    return idx


# Native signatures for hover without evaluation
BUILTIN_SIGNATURES: Dict[str, str] = {
    native.name: f"{native.name}({', '.join('arg' for _ in range(native.arity))})" for native in NATIVES
}
