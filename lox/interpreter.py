from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Callable, Iterator

from lox import LoxValue
from lox.builtins import register
from lox.errors import LoxSyntaxError, LoxSyntaxErrors, StackOverflow
from lox.evaluation.context import ExecutionContext
from lox.evaluation.evaluator import evaluate, execute_program
from lox.evaluation.resolver import Resolver
from lox.reader.parser import Parser
from lox.reader.scanner import Scanner
from lox.syntax.stmt import ExpressionStmt, Stmt, line_of
from lox.types.environment import Environment

logger = logging.getLogger(__name__)

# Python frames used per nested Lox call, with room to spare. Raising the
# limit this far needs 3.11+, where Python-to-Python calls use no C stack.
FRAMES_PER_CALL = 64


@contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    previous = sys.getrecursionlimit()
    if limit > previous:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Interpreter:
    """
    Runs Lox source text against a persistent global scope.
    Definitions made by one ``run`` are visible to the next, so the same
    object serves a script runner and an interactive prompt.
    """

    def __init__(self, output: Callable[[str], None] | None = None, max_call_depth: int | None = None):
        self.globals = Environment()
        register(self.globals)
        self.context = ExecutionContext()
        if output is not None:
            self.context.output = output
        if max_call_depth is not None:
            self.context.max_call_depth = max_call_depth

    def _parse(self, source: str) -> list[Stmt]:
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()
        parser = Parser(tokens)
        try:
            with _recursion_limit(self.context.max_call_depth * FRAMES_PER_CALL):
                statements = parser.parse_partial()
        except RecursionError:
            parser.errors.append(LoxSyntaxError("Program nested too deeply.", tokens[-1].line))
            statements = []
        errors = sorted(scanner.errors + parser.errors, key=lambda e: e.line or 0)
        if errors:
            raise LoxSyntaxErrors(errors)
        return statements

    def resolve(self, statements: list[Stmt]) -> None:
        """Bind variable uses to their scopes; raise LoxSyntaxErrors on misuse."""
        resolver = Resolver()
        try:
            with _recursion_limit(self.context.max_call_depth * FRAMES_PER_CALL):
                resolution = resolver.resolve(statements)
        except RecursionError:
            resolver.errors.append(LoxSyntaxError("Program nested too deeply.", line_of(statements[-1])))
            resolution = {}
        if resolver.errors:
            raise LoxSyntaxErrors(sorted(resolver.errors, key=lambda e: e.line or 0))
        self.context.resolution.update(resolution)

    def parse(self, source: str) -> list[Stmt]:
        """Scan, parse and resolve ``source``; raise LoxSyntaxErrors listing every problem found."""
        statements = self._parse(source)
        self.resolve(statements)
        return statements

    def execute(self, statements: list[Stmt]) -> None:
        """Resolve and run parsed statements; the first runtime error aborts the run."""
        self.resolve(statements)
        self.context.depth = 0
        with _recursion_limit(self.context.max_call_depth * FRAMES_PER_CALL):
            execute_program(statements, self.globals, self.context)

    def run(self, source: str) -> None:
        statements = self._parse(source)
        logger.debug("running %d top-level statement(s)", len(statements))
        self.execute(statements)

    def evaluate(self, source: str) -> LoxValue:
        """Evaluate a single expression (an optional trailing ';' is allowed)."""
        text = source.strip()
        if not text.endswith(";"):
            text += ";"
        statements = self.parse(text)
        if len(statements) != 1 or not isinstance(statements[0], ExpressionStmt):
            raise LoxSyntaxErrors([LoxSyntaxError("Expect a single expression.", 1)])
        self.context.depth = 0
        expr = statements[0].expression
        with _recursion_limit(self.context.max_call_depth * FRAMES_PER_CALL):
            try:
                return evaluate(expr, self.globals, self.context)
            except RecursionError:
                raise StackOverflow("Stack overflow (program nested too deeply).", line_of(expr)) from None


#  Example use-age:
if __name__ == "__main__":
    interp = Interpreter()
    interp.run(
        """
        fun makeCounter() {
          var i = 0;
          fun count() {
            i = i + 1;
            return i;
          }
          return count;
        }

        var counter = makeCounter();
        print counter(); // 1
        print counter(); // 2
        """
    )
