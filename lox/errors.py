"""Error hierarchy for the Lox interpreter.

Every failure carries a ``kind`` (the class name for runtime errors,
``SyntaxError`` for parse/scan problems), a human-readable ``message`` and the
source ``line`` where it happened. Nothing here performs I/O: callers format
errors with :meth:`LoxError.report`.
"""

from __future__ import annotations


class LoxError(Exception):
    """Base class for all Lox errors."""

    kind = "LoxError"

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def report(self) -> str:
        if self.line is None:
            return f"{self.kind}: {self.message}"
        return f"[line {self.line}] {self.kind}: {self.message}"

    def __str__(self) -> str:
        return self.report()


class LoxSyntaxError(LoxError):
    """Raised when the token sequence does not match the grammar."""

    kind = "SyntaxError"

    def __init__(self, message: str, line: int | None = None, where: str = ""):
        super().__init__(message, line)
        # " at 'x'", " at end" or "" when no token is involved (scanner errors)
        self.where = where

    def report(self) -> str:
        if self.line is None:
            return f"{self.kind}{self.where}: {self.message}"
        return f"[line {self.line}] {self.kind}{self.where}: {self.message}"


class LoxSyntaxErrors(LoxError):
    """Aggregate of every syntax error found in one scan/parse pass."""

    kind = "SyntaxError"

    def __init__(self, errors: list[LoxSyntaxError]):
        first = errors[0]
        message = first.message
        if len(errors) > 1:
            message = f"{message} (plus {len(errors) - 1} more syntax error(s))"
        super().__init__(message, first.line)
        self.errors: list[LoxSyntaxError] = list(errors)

    def report(self) -> str:
        return "\n".join(err.report() for err in self.errors)


class LoxRuntimeError(LoxError):
    """Base class for errors raised while executing a program."""

    kind = "RuntimeError"

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.kind = cls.__name__


class UndefinedVariable(LoxRuntimeError):
    """Raised on lookup of, or assignment to, a name bound in no enclosing scope."""


class TypeMismatch(LoxRuntimeError):
    """Raised when an operator is applied to operands of the wrong kinds."""


class NotCallable(LoxRuntimeError):
    """Raised when the callee of a call expression is not a function."""


class ArityMismatch(LoxRuntimeError):
    """Raised when the number of arguments differs from the declared parameters."""


class ReturnOutsideFunction(LoxRuntimeError):
    """Raised when ``return`` executes outside any function call."""


class DivisionByZero(LoxRuntimeError):
    """Raised when the right operand of ``/`` is zero."""


class AlreadyDefined(LoxRuntimeError):
    """Raised when a local scope declares the same name twice."""


class StackOverflow(LoxRuntimeError):
    """Raised when call nesting exceeds the configured or host limit."""


class AssertionFailed(LoxRuntimeError):
    """Raised by the ``assert`` native when its argument is not ``true``."""
