"""Core tree-walking evaluator for Lox.

``evaluate`` computes the value of an expression; ``execute`` runs a statement
and returns either ``None`` (completed normally) or a ReturnValue signal that
enclosing blocks and loops hand straight back up to the call site. Both take
the active scope and the execution context as explicit arguments; the
evaluator keeps no state of its own.

Variables the resolver has seen are read from the exact scope it recorded in
``ctx.resolution`` (None meaning global); a tree that was never resolved falls
back to searching the scope chain outwards.
"""

from __future__ import annotations

from lox import LoxValue
from lox.errors import ReturnOutsideFunction, StackOverflow
from lox.evaluation.apply import apply
from lox.evaluation.context import ExecutionContext
from lox.evaluation.operators import binary, is_truthy, unary
from lox.printer import stringify
from lox.reader.tokens import TokenType
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
    line_of,
)
from lox.types.environment import Environment
from lox.types.function import LoxFunction
from lox.types.nil import Nil
from lox.types.return_value import ReturnValue


def evaluate(expr: Expr, env: Environment, ctx: ExecutionContext) -> LoxValue:
    match expr:
        case Literal(value=value):
            return value

        case Grouping(expression=inner):
            return evaluate(inner, env, ctx)

        case Variable(name=name):
            if id(expr) not in ctx.resolution:
                return env.lookup(name.lexeme, name.line)
            distance = ctx.resolution[id(expr)]
            if distance is None:
                return env.global_scope().lookup(name.lexeme, name.line)
            return env.get_at(distance, name.lexeme, name.line)

        case Assign(name=name, value=value_expr):
            value = evaluate(value_expr, env, ctx)
            if id(expr) not in ctx.resolution:
                env.assign(name.lexeme, value, name.line)
            elif ctx.resolution[id(expr)] is None:
                env.global_scope().assign(name.lexeme, value, name.line)
            else:
                env.assign_at(ctx.resolution[id(expr)], name.lexeme, value, name.line)
            return value

        case Logical(left=left_expr, operator=operator, right=right_expr):
            left = evaluate(left_expr, env, ctx)
            if operator.type is TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return evaluate(right_expr, env, ctx)

        case Unary(operator=operator, right=right_expr):
            return unary(operator, evaluate(right_expr, env, ctx))

        case Binary(left=left_expr, operator=operator, right=right_expr):
            # left before right
            left = evaluate(left_expr, env, ctx)
            right = evaluate(right_expr, env, ctx)
            return binary(operator, left, right)

        case Call(callee=callee_expr, paren=paren, arguments=arg_exprs):
            callee = evaluate(callee_expr, env, ctx)
            args = [evaluate(arg, env, ctx) for arg in arg_exprs]
            return apply(callee, args, paren, ctx, execute_block)

    raise TypeError(f"Unknown expression node: {expr!r}")


def execute(stmt: Stmt, env: Environment, ctx: ExecutionContext) -> ReturnValue | None:
    match stmt:
        case ExpressionStmt(expression=expr):
            evaluate(expr, env, ctx)
            return None

        case PrintStmt(expression=expr):
            ctx.output(stringify(evaluate(expr, env, ctx)))
            return None

        case VarDecl(name=name, initializer=initializer):
            value = Nil if initializer is None else evaluate(initializer, env, ctx)
            env.define(name.lexeme, value, name.line)
            return None

        case Block(statements=statements):
            return execute_block(statements, Environment(outer=env), ctx)

        case If(condition=condition, then_branch=then_branch, else_branch=else_branch):
            if is_truthy(evaluate(condition, env, ctx)):
                return execute(then_branch, env, ctx)
            if else_branch is not None:
                return execute(else_branch, env, ctx)
            return None

        case While(condition=condition, body=body):
            while is_truthy(evaluate(condition, env, ctx)):
                signal = execute(body, env, ctx)
                if signal is not None:
                    return signal
            return None

        case FunDecl(name=name):
            # Bound in the current scope, which is also the closure: recursion works.
            env.define(name.lexeme, LoxFunction(stmt, env), name.line)
            return None

        case Return(keyword=keyword, value=value_expr):
            value = Nil if value_expr is None else evaluate(value_expr, env, ctx)
            return ReturnValue(value, keyword)

    raise TypeError(f"Unknown statement node: {stmt!r}")


def execute_block(statements: tuple[Stmt, ...], env: Environment, ctx: ExecutionContext) -> ReturnValue | None:
    """Execute ``statements`` in ``env`` (already the block's own scope)."""
    for stmt in statements:
        signal = execute(stmt, env, ctx)
        if signal is not None:
            return signal
    return None


def execute_program(statements: list[Stmt], env: Environment, ctx: ExecutionContext) -> None:
    """Run top-level statements; a return escaping to this level is an error."""
    for stmt in statements:
        try:
            signal = execute(stmt, env, ctx)
        except RecursionError:
            # nesting outside of any call: blocks within blocks...
            raise StackOverflow("Stack overflow (program nested too deeply).", line_of(stmt)) from None
        if signal is not None:
            raise ReturnOutsideFunction("Can't return from top-level code.", signal.keyword.line)
