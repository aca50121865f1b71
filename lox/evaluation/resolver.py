"""Static resolution pass, run after parsing and before execution.

For every variable use and assignment the resolver records how many scopes
lie between the use and the scope that declares the name. The evaluator then
reads that exact scope, so a closure keeps seeing the binding that was in
view where it was written even if a later ``var`` in an enclosing block
declares the same name. Names found in no local scope resolve to globals.

It also reports, before anything runs:
- reading a local variable in its own initializer
- declaring a name twice in the same local scope (parameters included)
- ``return`` outside any function

The global scope is not tracked: globals may be redeclared, and a global use
is only checked when it executes.
"""

from __future__ import annotations

import logging
from typing import Iterable

from lox.errors import LoxSyntaxError, LoxSyntaxErrors
from lox.reader.tokens import Token
from lox.syntax.expr import (
    Assign,
    Binary,
    Call,
    Expr,
    Grouping,
    Literal,
    Logical,
    Unary,
    Variable,
)
from lox.syntax.stmt import (
    Block,
    ExpressionStmt,
    FunDecl,
    If,
    PrintStmt,
    Return,
    Stmt,
    VarDecl,
    While,
)

logger = logging.getLogger(__name__)

# id(node) -> number of scopes to walk out, or None for a global
Resolution = dict[int, int | None]


class Resolver:
    def __init__(self):
        # innermost scope last; name -> True once its initializer is done
        self.scopes: list[dict[str, bool]] = []
        self.in_function = False
        self.resolution: Resolution = {}
        self.errors: list[LoxSyntaxError] = []

    def resolve(self, statements: Iterable[Stmt]) -> Resolution:
        self._statements(statements)
        logger.debug("resolved %d name(s), %d error(s)", len(self.resolution), len(self.errors))
        return self.resolution

    def _statements(self, statements: Iterable[Stmt]) -> None:
        for stmt in statements:
            self._statement(stmt)

    # --- Statements ---
    def _statement(self, stmt: Stmt) -> None:
        match stmt:
            case ExpressionStmt(expression=expr) | PrintStmt(expression=expr):
                self._expression(expr)
            case VarDecl(name=name, initializer=initializer):
                self._declare(name)
                if initializer is not None:
                    self._expression(initializer)
                self._define(name)
            case Block(statements=statements):
                self.scopes.append({})
                self._statements(statements)
                self.scopes.pop()
            case If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                self._expression(condition)
                self._statement(then_branch)
                if else_branch is not None:
                    self._statement(else_branch)
            case While(condition=condition, body=body):
                self._expression(condition)
                self._statement(body)
            case FunDecl(name=name):
                # defined before the body is resolved, so the body may recurse
                self._declare(name)
                self._define(name)
                self._function(stmt)
            case Return(keyword=keyword, value=value):
                if not self.in_function:
                    self._error(keyword, "Can't return from top-level code.")
                if value is not None:
                    self._expression(value)
            case _:
                raise TypeError(f"Unknown statement node: {stmt!r}")

    def _function(self, fn: FunDecl) -> None:
        enclosing = self.in_function
        self.in_function = True
        # parameters and body share one scope, as in LoxFunction.extend_env
        self.scopes.append({})
        for param in fn.params:
            self._declare(param)
            self._define(param)
        self._statements(fn.body)
        self.scopes.pop()
        self.in_function = enclosing

    # --- Expressions ---
    def _expression(self, expr: Expr) -> None:
        match expr:
            case Literal():
                pass
            case Variable(name=name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self._error(name, "Can't read local variable in its own initializer.")
                self._resolve_local(expr, name)
            case Assign(name=name, value=value):
                self._expression(value)
                self._resolve_local(expr, name)
            case Logical(left=left, right=right) | Binary(left=left, right=right):
                self._expression(left)
                self._expression(right)
            case Unary(right=right):
                self._expression(right)
            case Grouping(expression=inner):
                self._expression(inner)
            case Call(callee=callee, arguments=arguments):
                self._expression(callee)
                for argument in arguments:
                    self._expression(argument)
            case _:
                raise TypeError(f"Unknown expression node: {expr!r}")

    # --- Scopes ---
    def _declare(self, name: Token) -> None:
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self._error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def _define(self, name: Token) -> None:
        if self.scopes:
            self.scopes[-1][name.lexeme] = True

    def _resolve_local(self, expr: Variable | Assign, name: Token) -> None:
        for distance, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.resolution[id(expr)] = distance
                return
        self.resolution[id(expr)] = None

    def _error(self, token: Token, message: str) -> None:
        self.errors.append(LoxSyntaxError(message, token.line, f" at '{token.lexeme}'"))


def resolve(statements: Iterable[Stmt]) -> Resolution:
    """Resolve ``statements``; raise LoxSyntaxErrors if any check failed."""
    resolver = Resolver()
    resolution = resolver.resolve(statements)
    if resolver.errors:
        raise LoxSyntaxErrors(resolver.errors)
    return resolution
