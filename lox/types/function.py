"""Function values: user-declared closures and Python-backed natives."""

from __future__ import annotations

from typing import Callable

from lox import LoxValue
from lox.syntax.stmt import FunDecl, Stmt
from lox.types.environment import Environment


class LoxFunction:
    """A function declared in Lox source, closed over its declaring scope."""

    __slots__ = ("declaration", "closure")

    def __init__(self, declaration: FunDecl, closure: Environment):
        self.declaration: FunDecl = declaration
        # The scope active at the declaration site, not the caller's.
        self.closure: Environment = closure

    @property
    def name(self) -> str:
        return self.declaration.name.lexeme

    @property
    def arity(self) -> int:
        return len(self.declaration.params)

    @property
    def body(self) -> tuple[Stmt, ...]:
        return self.declaration.body

    def extend_env(self, args: list[LoxValue]) -> Environment:
        """Return a fresh call scope, child of the closure, with parameters bound."""
        env = Environment(outer=self.closure)
        for param, arg in zip(self.declaration.params, args):
            env.define(param.lexeme, arg, param.line)
        return env

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        return str(self)


class NativeFunction:
    """A function implemented in Python and exposed to Lox code.

    ``fn`` receives the list of already-evaluated arguments.
    """

    __slots__ = ("name", "arity", "fn")

    def __init__(self, name: str, arity: int, fn: Callable[[list[LoxValue]], LoxValue]):
        self.name = name
        self.arity = arity
        self.fn = fn

    def __str__(self) -> str:
        return "<native fn>"

    def __repr__(self) -> str:
        return f"<native fn {self.name}>"


def is_callable(value: LoxValue) -> bool:
    return isinstance(value, (LoxFunction, NativeFunction))
