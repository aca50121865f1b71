"""Per-run execution state passed explicitly through the evaluator."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable

from lox.config import get_max_call_depth


def _stdout_line(text: str) -> None:
    sys.stdout.write(text + "\n")


@dataclass
class ExecutionContext:
    """What the evaluator needs besides the current scope.

    - output: sink receiving one string per executed ``print``
    - max_call_depth: nested Lox calls allowed before StackOverflow
    - depth: current number of active Lox calls
    - resolution: scope distances recorded by the resolver, keyed by node id
    """

    output: Callable[[str], None] = _stdout_line
    max_call_depth: int = field(default_factory=get_max_call_depth)
    depth: int = 0
    resolution: dict[int, int | None] = field(default_factory=dict)
