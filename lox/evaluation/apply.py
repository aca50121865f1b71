"""Application engine for Lox.

Centralizes call semantics for the evaluator:
- Only function values (closures and natives) are callable.
- Argument count must equal the declared parameter count exactly.
- A closure call runs its body in a new scope whose parent is the closure's
  captured environment, never the caller's scope.
- A ReturnValue signal coming out of the body is unwrapped here; a body that
  finishes without one yields nil.
- Nesting depth is bounded by ExecutionContext.max_call_depth. Running out
  of host stack below that depth (deep expressions inside a call) is a
  StackOverflow too, with its own message.
"""

from __future__ import annotations

import logging
from typing import Callable

from lox import LoxValue
from lox.errors import ArityMismatch, LoxRuntimeError, NotCallable, StackOverflow
from lox.evaluation.context import ExecutionContext
from lox.evaluation.operators import type_name
from lox.reader.tokens import Token
from lox.syntax.stmt import Stmt
from lox.types.environment import Environment
from lox.types.function import LoxFunction, NativeFunction, is_callable
from lox.types.nil import Nil
from lox.types.return_value import ReturnValue

logger = logging.getLogger(__name__)

ExecuteBlockFn = Callable[[tuple[Stmt, ...], Environment, ExecutionContext], "ReturnValue | None"]


def apply_function(
    fn: LoxFunction,
    args: list[LoxValue],
    paren: Token,
    ctx: ExecutionContext,
    execute_block_fn: ExecuteBlockFn,
) -> LoxValue:
    """Run a closure body with ``args`` bound to its parameters."""
    if ctx.depth >= ctx.max_call_depth:
        raise StackOverflow(f"Stack overflow (maximum call depth {ctx.max_call_depth} exceeded).", paren.line)

    ctx.depth += 1
    try:
        env = fn.extend_env(args)
        signal = execute_block_fn(fn.body, env, ctx)
    except RecursionError:
        logger.debug("host recursion limit hit in %s at depth %d", fn, ctx.depth)
        raise StackOverflow("Stack overflow (program nested too deeply).", paren.line) from None
    finally:
        ctx.depth -= 1

    if signal is None:
        return Nil
    return signal.value


def apply_native(fn: NativeFunction, args: list[LoxValue], paren: Token) -> LoxValue:
    try:
        return fn.fn(args)
    except LoxRuntimeError as err:
        # natives do not know where they were called from
        if err.line is None:
            err.line = paren.line
        raise


def apply(
    callee: LoxValue,
    args: list[LoxValue],
    paren: Token,
    ctx: ExecutionContext,
    execute_block_fn: ExecuteBlockFn,
) -> LoxValue:
    """Apply either a LoxFunction or a NativeFunction.

    Raises NotCallable for any other value and ArityMismatch when the number
    of arguments is not the declared number of parameters.
    """
    if not is_callable(callee):
        raise NotCallable(f"Can only call functions, got {type_name(callee)}.", paren.line)

    if len(args) != callee.arity:
        raise ArityMismatch(f"Expected {callee.arity} arguments but got {len(args)}.", paren.line)

    if isinstance(callee, NativeFunction):
        return apply_native(callee, args, paren)
    return apply_function(callee, args, paren, ctx, execute_block_fn)
