from __future__ import annotations
import logging
import os

DEFAULT_MAX_CALL_DEPTH = 512
DEFAULT_MAX_ARGUMENTS = 255
DEFAULT_LOG_LEVEL = "WARNING"


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def get_max_call_depth() -> int:
    return int_from_env("LOX_MAX_CALL_DEPTH", DEFAULT_MAX_CALL_DEPTH)


def get_max_arguments() -> int:
    return int_from_env("LOX_MAX_ARGUMENTS", DEFAULT_MAX_ARGUMENTS)


def get_log_level() -> int:
    raw = os.environ.get("LOX_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.WARNING
