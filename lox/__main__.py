"""Command line runner: ``python -m lox [script] [--ast]``.

Without a script an interactive prompt reads one line at a time and runs it
against the same interpreter, so definitions persist across lines.

Exit codes follow the BSD sysexits convention: 64 usage, 65 syntax error
(data error), 70 runtime error (internal software error).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from lox.config import get_log_level
from lox.debug_utils.ast_printer import print_ast
from lox.errors import LoxError, LoxRuntimeError, LoxSyntaxErrors
from lox.interpreter import Interpreter

EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70

PROMPT = "lox> "


def run_file(interp: Interpreter, path: Path, show_ast: bool = False) -> int:
    source = path.read_text(encoding="utf-8")
    try:
        if show_ast:
            print(print_ast(interp.parse(source)))
        else:
            interp.run(source)
    except LoxSyntaxErrors as err:
        print(err.report(), file=sys.stderr)
        return EX_DATAERR
    except LoxRuntimeError as err:
        print(err.report(), file=sys.stderr)
        return EX_SOFTWARE
    return 0


def run_prompt(interp: Interpreter, show_ast: bool = False) -> int:
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return 0
        if not line.strip():
            continue
        try:
            if show_ast:
                print(print_ast(interp.parse(line)))
            else:
                interp.run(line)
        except LoxError as err:
            print(err.report(), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(prog="lox", description="Run a Lox script or start a prompt.")
    parser.add_argument("script", nargs="*", help="path of the script to run")
    parser.add_argument("--ast", action="store_true", help="print the parsed program instead of running it")
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print("Usage: lox [script]", file=sys.stderr)
        return EX_USAGE

    interp = Interpreter()
    if args.script:
        return run_file(interp, Path(args.script[0]), args.ast)
    return run_prompt(interp, args.ast)


if __name__ == "__main__":
    sys.exit(main())
