"""Expression nodes.

Nodes are frozen dataclasses holding the tokens they came from, so the
evaluator can report the source line of a failure. Child sequences are
tuples: a parsed tree is never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass

from lox import LoxValue
from lox.reader.tokens import Token


@dataclass(frozen=True)
class Literal:
    value: LoxValue


@dataclass(frozen=True)
class Variable:
    name: Token


@dataclass(frozen=True)
class Assign:
    """``name = value``; the target is always a bare name."""

    name: Token
    value: Expr


@dataclass(frozen=True)
class Logical:
    """Short-circuiting ``and`` / ``or``."""

    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary:
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Call:
    """``callee(arguments...)``; ``paren`` is the closing parenthesis."""

    callee: Expr
    paren: Token
    arguments: tuple[Expr, ...]


@dataclass(frozen=True)
class Grouping:
    expression: Expr


Expr = Literal | Variable | Assign | Logical | Binary | Unary | Call | Grouping
