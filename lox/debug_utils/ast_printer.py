"""Render AST nodes as parenthesised prefix text.

    1 + 2 * 3            -> (+ 1 (* 2 3))
    var x = -a;          -> (var x (- a))
    fun f(a) { return a; } -> (fun f (a) (return a))
"""

from __future__ import annotations

from lox.printer import stringify
from lox.syntax.expr import Assign, Binary, Call, Grouping, Literal, Logical, Unary, Variable
from lox.syntax.stmt import Block, ExpressionStmt, FunDecl, If, PrintStmt, Return, VarDecl, While


def _paren(name: str, *parts: str) -> str:
    return "(" + " ".join((name, *parts)) + ")"


def print_ast(node) -> str:
    match node:
        case Literal(value=value):
            if isinstance(value, str):
                return f'"{value}"'
            return stringify(value)
        case Variable(name=name):
            return name.lexeme
        case Assign(name=name, value=value):
            return _paren("=", name.lexeme, print_ast(value))
        case Logical(left=left, operator=op, right=right) | Binary(left=left, operator=op, right=right):
            return _paren(op.lexeme, print_ast(left), print_ast(right))
        case Unary(operator=op, right=right):
            return _paren(op.lexeme, print_ast(right))
        case Grouping(expression=inner):
            return _paren("group", print_ast(inner))
        case Call(callee=callee, arguments=arguments):
            return _paren("call", print_ast(callee), *(print_ast(a) for a in arguments))

        case ExpressionStmt(expression=expr):
            return _paren(";", print_ast(expr))
        case PrintStmt(expression=expr):
            return _paren("print", print_ast(expr))
        case VarDecl(name=name, initializer=None):
            return _paren("var", name.lexeme)
        case VarDecl(name=name, initializer=init):
            return _paren("var", name.lexeme, print_ast(init))
        case Block(statements=statements):
            return _paren("block", *(print_ast(s) for s in statements))
        case If(condition=cond, then_branch=then, else_branch=None):
            return _paren("if", print_ast(cond), print_ast(then))
        case If(condition=cond, then_branch=then, else_branch=other):
            return _paren("if-else", print_ast(cond), print_ast(then), print_ast(other))
        case While(condition=cond, body=body):
            return _paren("while", print_ast(cond), print_ast(body))
        case FunDecl(name=name, params=params, body=body):
            params_text = "(" + " ".join(p.lexeme for p in params) + ")"
            return _paren("fun", name.lexeme, params_text, *(print_ast(s) for s in body))
        case Return(value=None):
            return "(return)"
        case Return(value=value):
            return _paren("return", print_ast(value))
        case list() | tuple():
            return "\n".join(print_ast(s) for s in node)
    raise TypeError(f"Cannot print node {node!r}")
