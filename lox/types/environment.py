"""Runtime environment for Lox.

An Environment stores the bindings of one scope and links to its lexical
parent through ``outer``. The global scope is the one without an ``outer``.
Lookups and assignments walk the chain outwards; declarations only ever touch
the innermost scope, so an inner ``var`` shadows rather than overwrites.

Closures keep a plain reference to their declaring Environment, which keeps
that scope (and its ancestors) alive for as long as the function value is
reachable. Python's cycle collector reclaims scopes that end up referring to
themselves through a function stored inside them.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lox import LoxValue
from lox.errors import AlreadyDefined, UndefinedVariable


class Environment:
    """Hierarchical mapping from names to Lox values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, LoxValue] = {}
        self.outer: Environment | None = outer

    @property
    def is_global(self) -> bool:
        return self.outer is None

    def define(self, name: str, value: LoxValue, line: int | None = None) -> None:
        """Bind ``name`` to ``value`` in this scope.

        The global scope allows redefinition (an interactive session redefines
        things all the time); a local scope declaring the same name twice
        raises AlreadyDefined.
        """
        if not self.is_global and name in self.vars:
            raise AlreadyDefined(f"Variable '{name}' already defined in this scope.", line)
        self.vars[name] = value

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds ``name``."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: str, line: int | None = None) -> LoxValue:
        """Return the value bound to ``name`` in the nearest enclosing scope.

        Raises UndefinedVariable if no scope in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise UndefinedVariable(f"Undefined variable '{name}'.", line)
        return env.vars[name]

    def assign(self, name: str, value: LoxValue, line: int | None = None) -> None:
        """Overwrite the nearest existing binding for ``name``.

        Never creates a binding: raises UndefinedVariable if the name is unbound.
        """
        env = self.find(name)
        if env is None:
            raise UndefinedVariable(f"Undefined variable '{name}'.", line)
        env.vars[name] = value

    def ancestor(self, distance: int) -> Environment:
        """The scope ``distance`` links out from this one (0 is this scope)."""
        env = self
        for _ in range(distance):
            env = env.outer
        return env

    def global_scope(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def get_at(self, distance: int, name: str, line: int | None = None) -> LoxValue:
        """Look ``name`` up in exactly one scope, as resolved ahead of time."""
        env = self.ancestor(distance)
        if name not in env.vars:
            raise UndefinedVariable(f"Undefined variable '{name}'.", line)
        return env.vars[name]

    def assign_at(self, distance: int, name: str, value: LoxValue, line: int | None = None) -> None:
        env = self.ancestor(distance)
        if name not in env.vars:
            raise UndefinedVariable(f"Undefined variable '{name}'.", line)
        env.vars[name] = value

    def depth(self) -> int:
        """Number of scopes between this one and the global scope."""
        n = 0
        env = self.outer
        while env is not None:
            n += 1
            env = env.outer
        return n

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            chain = []
            env = self
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
