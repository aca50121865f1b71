from __future__ import annotations
import time
from typing import Any

from lox.errors import AssertionFailed
from lox.types.environment import Environment
from lox.types.function import NativeFunction
from lox.types.nil import Nil


# -------------------------------
# Natives
# -------------------------------
def clock(args: list[Any]) -> float:
    """Seconds since the epoch, as a Lox number."""
    return time.time()


def assert_(args: list[Any]) -> Any:
    """Fail unless the single argument is exactly ``true``."""
    if args[0] is not True:
        raise AssertionFailed("Assertion failed.")
    return Nil


NATIVES: list[NativeFunction] = [
    NativeFunction("clock", 0, clock),
    NativeFunction("assert", 1, assert_),
]


def register(env: Environment) -> None:
    """Define every native function in ``env`` (normally the global scope)."""
    for native in NATIVES:
        env.define(native.name, native)
