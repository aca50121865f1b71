"""
  Lox Scanner

- Single regex with named groups, tried at each position (first match wins)
- Emits Token objects; the stream always ends with an EOF token
- Problems (stray characters, unterminated strings) are collected as
  LoxSyntaxError instances in ``Scanner.errors`` and scanning carries on,
  so one pass reports every lexical problem in the source.

    - numbers   -> float literal
    - strings   -> str literal without the quotes, may span lines
    - keywords  -> their own TokenType (see KEYWORDS)
    - // ...    -> comment, skipped
"""

from __future__ import annotations

import logging
import re
from typing import Iterator

from lox.errors import LoxSyntaxError, LoxSyntaxErrors
from lox.reader.tokens import KEYWORDS, Token, TokenType

logger = logging.getLogger(__name__)


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<whitespace>[ \t\r]+)"
    r"|(?P<comment>//[^\n]*)"  # single-line comment
    r'|(?P<string>"[^"]*")'  # strings have no escapes
    r'|(?P<unterminated>"[^"]*\Z)'  # opening quote never closed
    r"|(?P<number>[0-9]+(?:\.[0-9]+)?)"  # a trailing '.' is a DOT token
    r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<operator>!=|==|<=|>=|[(){},.\-+;*/!=<>])"
)

OPERATORS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "!": TokenType.BANG,
    "!=": TokenType.BANG_EQUAL,
    "=": TokenType.EQUAL,
    "==": TokenType.EQUAL_EQUAL,
    "<": TokenType.LESS,
    "<=": TokenType.LESS_EQUAL,
    ">": TokenType.GREATER,
    ">=": TokenType.GREATER_EQUAL,
}


class Scanner:
    """Converts source text into a list of tokens, collecting lexical errors."""

    def __init__(self, source: str):
        self.source = source
        self.line = 1
        self.errors: list[LoxSyntaxError] = []

    def scan_tokens(self) -> list[Token]:
        tokens = list(self.tokens())
        if self.errors:
            logger.debug("scanner found %d error(s)", len(self.errors))
        return tokens

    def tokens(self) -> Iterator[Token]:
        """Token generator; the final token is always EOF."""
        source = self.source
        pos = 0
        n = len(source)

        while pos < n:
            m = TOKEN_RE.match(source, pos)
            if m is None:
                self._error(f"Unexpected character {source[pos]!r}.")
                pos += 1
                continue
            pos = m.end()
            kind = m.lastgroup
            text = m.group()

            if kind == "newline":
                self.line += 1
            elif kind in ("whitespace", "comment"):
                continue
            elif kind == "string":
                start_line = self.line
                self.line += text.count("\n")
                yield Token(TokenType.STRING, text, text[1:-1], start_line)
            elif kind == "unterminated":
                self._error("Unterminated string.")
                self.line += text.count("\n")
            elif kind == "number":
                yield Token(TokenType.NUMBER, text, float(text), self.line)
            elif kind == "identifier":
                yield Token(KEYWORDS.get(text, TokenType.IDENTIFIER), text, None, self.line)
            else:
                yield Token(OPERATORS[text], text, None, self.line)

        yield Token(TokenType.EOF, "", None, self.line)

    def _error(self, message: str) -> None:
        self.errors.append(LoxSyntaxError(message, self.line))


def scan(source: str) -> list[Token]:
    """Scan ``source``; raise LoxSyntaxErrors if any lexical error was found."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    if scanner.errors:
        raise LoxSyntaxErrors(scanner.errors)
    return tokens
