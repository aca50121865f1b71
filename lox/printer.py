"""Textual representation of runtime values, as written by ``print``."""

from __future__ import annotations

import math

from lox import LoxValue
from lox.types.nil import NilType


def format_number(n: float) -> str:
    """Integral numbers print without a decimal point: 3.0 -> "3"."""
    if math.isfinite(n) and n == int(n):
        return str(int(n))
    return repr(float(n))


def stringify(value: LoxValue) -> str:
    if isinstance(value, NilType):
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value
    return str(value)
