"""Statement nodes.

There is no node for ``for``: the parser desugars it into a Block holding the
initializer and a While loop.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass

from lox.reader.tokens import Token
from lox.syntax.expr import Expr


@dataclass(frozen=True)
class ExpressionStmt:
    expression: Expr


@dataclass(frozen=True)
class PrintStmt:
    expression: Expr


@dataclass(frozen=True)
class VarDecl:
    name: Token
    initializer: Expr | None = None


@dataclass(frozen=True)
class Block:
    statements: tuple[Stmt, ...]


@dataclass(frozen=True)
class If:
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt | None = None


@dataclass(frozen=True)
class While:
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class FunDecl:
    name: Token
    params: tuple[Token, ...]
    body: tuple[Stmt, ...]


@dataclass(frozen=True)
class Return:
    keyword: Token
    value: Expr | None = None


Stmt = ExpressionStmt | PrintStmt | VarDecl | Block | If | While | FunDecl | Return


def line_of(node: Stmt | Expr) -> int | None:
    """Line of the first token found in ``node``, searching depth first.

    Iterative, so it also works on trees nested deeper than the recursion limit.
    """
    pending: list = [node]
    while pending:
        item = pending.pop()
        if isinstance(item, Token):
            return item.line
        if isinstance(item, tuple):
            pending.extend(reversed(item))
        elif is_dataclass(item):
            pending.extend(reversed([getattr(item, f.name) for f in fields(item)]))
    return None
