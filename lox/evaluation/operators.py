"""Operator semantics: truthiness, equality, arithmetic and comparison.

There is no implicit coercion anywhere: arithmetic and comparison want two
numbers (``+`` also takes two strings) and equality across kinds is false.
"""

from __future__ import annotations

from lox import LoxValue
from lox.errors import DivisionByZero, TypeMismatch
from lox.reader.tokens import Token, TokenType
from lox.types.function import is_callable
from lox.types.nil import NilType


def is_number(value: LoxValue) -> bool:
    # bool is a subclass of int in Python; Lox booleans are not numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_truthy(value: LoxValue) -> bool:
    """nil and false are falsy; everything else (0 and "" included) is truthy."""
    if isinstance(value, NilType):
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a: LoxValue, b: LoxValue) -> bool:
    if isinstance(a, NilType) or isinstance(b, NilType):
        return isinstance(a, NilType) and isinstance(b, NilType)
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    # functions compare by identity
    return a is b


def type_name(value: LoxValue) -> str:
    if isinstance(value, NilType):
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_callable(value):
        return "function"
    return type(value).__name__


def _check_numbers(operator: Token, left: LoxValue, right: LoxValue) -> None:
    if not (is_number(left) and is_number(right)):
        raise TypeMismatch(f"Operands must be numbers for '{operator.lexeme}'.", operator.line)


def unary(operator: Token, right: LoxValue) -> LoxValue:
    match operator.type:
        case TokenType.MINUS:
            if not is_number(right):
                raise TypeMismatch(f"Operand must be a number for '{operator.lexeme}'.", operator.line)
            return -float(right)
        case TokenType.BANG:
            return not is_truthy(right)
    raise TypeMismatch(f"Unsupported unary operator '{operator.lexeme}'.", operator.line)


def binary(operator: Token, left: LoxValue, right: LoxValue) -> LoxValue:
    match operator.type:
        case TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        case TokenType.BANG_EQUAL:
            return not is_equal(left, right)
        case TokenType.PLUS:
            if is_number(left) and is_number(right):
                return float(left + right)
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise TypeMismatch(
                f"Operands must be two numbers or two strings for '{operator.lexeme}'.", operator.line
            )
        case TokenType.MINUS:
            _check_numbers(operator, left, right)
            return float(left - right)
        case TokenType.STAR:
            _check_numbers(operator, left, right)
            return float(left * right)
        case TokenType.SLASH:
            _check_numbers(operator, left, right)
            if right == 0:
                raise DivisionByZero("Can't divide by zero.", operator.line)
            return float(left / right)
        case TokenType.GREATER:
            _check_numbers(operator, left, right)
            return left > right
        case TokenType.GREATER_EQUAL:
            _check_numbers(operator, left, right)
            return left >= right
        case TokenType.LESS:
            _check_numbers(operator, left, right)
            return left < right
        case TokenType.LESS_EQUAL:
            _check_numbers(operator, left, right)
            return left <= right
    raise TypeMismatch(f"Unsupported binary operator '{operator.lexeme}'.", operator.line)
