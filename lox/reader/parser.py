"""
  Lox Parser

Recursive descent over a token list with one-token lookahead. Expression
precedence, lowest to highest:

    assignment -> or -> and -> equality -> comparison -> term -> factor
               -> unary -> call -> primary

Errors are collected rather than raised to the caller one at a time: after a
syntax error the parser skips to the next statement boundary and keeps going,
so a single pass reports every independent problem. ``parse()`` raises one
LoxSyntaxErrors aggregate at the end if anything went wrong.
"""

from __future__ import annotations

import logging
from typing import Iterable

from lox.config import get_max_arguments
from lox.errors import LoxSyntaxError, LoxSyntaxErrors
from lox.reader.tokens import Token, TokenType
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
)
from lox.types.nil import Nil

logger = logging.getLogger(__name__)

# Tokens that start a statement; synchronisation stops in front of them.
STATEMENT_STARTS = frozenset(
    {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }
)


class Parser:
    """Builds a list of statements from a token stream ending in EOF."""

    def __init__(self, tokens: Iterable[Token], max_arguments: int | None = None):
        self.tokens: list[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].type is not TokenType.EOF:
            line = self.tokens[-1].line if self.tokens else 1
            self.tokens.append(Token(TokenType.EOF, "", None, line))
        self.current = 0
        self.errors: list[LoxSyntaxError] = []
        self.max_arguments = max_arguments if max_arguments is not None else get_max_arguments()

    # --- Entry points ---
    def parse(self) -> list[Stmt]:
        """Parse the whole program; raise LoxSyntaxErrors if any error was seen."""
        statements = self.parse_partial()
        if self.errors:
            raise LoxSyntaxErrors(self.errors)
        return statements

    def parse_partial(self) -> list[Stmt]:
        """Parse the whole program, leaving errors in ``self.errors``.

        Statements that failed to parse are dropped from the result.
        """
        statements: list[Stmt] = []
        while not self._is_at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        logger.debug("parsed %d statement(s), %d error(s)", len(statements), len(self.errors))
        return statements

    # --- Declarations and statements ---
    def _declaration(self) -> Stmt | None:
        try:
            if self._match(TokenType.VAR):
                return self._var_declaration()
            if self._match(TokenType.FUN):
                return self._function("function")
            return self._statement()
        except LoxSyntaxError as err:
            self.errors.append(err)
            self._synchronize()
            return None

    def _var_declaration(self) -> VarDecl:
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")
        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return VarDecl(name, initializer)

    def _function(self, kind: str) -> FunDecl:
        name = self._consume(TokenType.IDENTIFIER, f"Expect {kind} name.")
        self._consume(TokenType.LEFT_PAREN, f"Expect '(' after {kind} name.")
        params: list[Token] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(params) >= self.max_arguments:
                    self._report(self._peek(), f"Can't have more than {self.max_arguments} parameters.")
                params.append(self._consume(TokenType.IDENTIFIER, "Expect parameter name."))
                if not self._match(TokenType.COMMA):
                    break
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after parameters.")
        self._consume(TokenType.LEFT_BRACE, f"Expect '{{' before {kind} body.")
        body = self._block()
        return FunDecl(name, tuple(params), tuple(body))

    def _statement(self) -> Stmt:
        if self._match(TokenType.PRINT):
            return self._print_statement()
        if self._match(TokenType.LEFT_BRACE):
            return Block(tuple(self._block()))
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.FOR):
            return self._for_statement()
        if self._match(TokenType.RETURN):
            return self._return_statement()
        return self._expression_statement()

    def _print_statement(self) -> PrintStmt:
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(value)

    def _expression_statement(self) -> ExpressionStmt:
        expr = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStmt(expr)

    def _block(self) -> list[Stmt]:
        statements: list[Stmt] = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            stmt = self._declaration()
            if stmt is not None:
                statements.append(stmt)
        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def _if_statement(self) -> If:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")
        then_branch = self._statement()
        else_branch = None
        # The innermost unmatched 'if' claims the 'else'.
        if self._match(TokenType.ELSE):
            else_branch = self._statement()
        return If(condition, then_branch, else_branch)

    def _while_statement(self) -> While:
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return While(condition, self._statement())

    def _for_statement(self) -> Stmt:
        """Desugar ``for (init; cond; incr) body`` into
        ``{ init; while (cond) { body; incr; } }``."""
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        initializer: Stmt | None
        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition: Expr | None = None
        if not self._check(TokenType.SEMICOLON):
            condition = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment: Expr | None = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self._expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()
        if increment is not None:
            body = Block((body, ExpressionStmt(increment)))
        if condition is None:
            condition = Literal(True)
        loop: Stmt = While(condition, body)
        if initializer is not None:
            loop = Block((initializer, loop))
        return loop

    def _return_statement(self) -> Return:
        keyword = self._previous()
        value = None
        if not self._check(TokenType.SEMICOLON):
            value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after return value.")
        return Return(keyword, value)

    # --- Expressions ---
    def _expression(self) -> Expr:
        return self._assignment()

    def _assignment(self) -> Expr:
        expr = self._or()
        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self._assignment()  # right-associative
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            # Reported but not raised: the parser is not confused, only the target is wrong.
            self._report(equals, "Invalid assignment target.")
        return expr

    def _or(self) -> Expr:
        expr = self._and()
        while self._match(TokenType.OR):
            operator = self._previous()
            expr = Logical(expr, operator, self._and())
        return expr

    def _and(self) -> Expr:
        expr = self._equality()
        while self._match(TokenType.AND):
            operator = self._previous()
            expr = Logical(expr, operator, self._equality())
        return expr

    def _equality(self) -> Expr:
        return self._binary_left_assoc(self._comparison, TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)

    def _comparison(self) -> Expr:
        return self._binary_left_assoc(
            self._term,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        )

    def _term(self) -> Expr:
        return self._binary_left_assoc(self._factor, TokenType.MINUS, TokenType.PLUS)

    def _factor(self) -> Expr:
        return self._binary_left_assoc(self._unary, TokenType.SLASH, TokenType.STAR)

    def _binary_left_assoc(self, operand, *operators: TokenType) -> Expr:
        expr = operand()
        while self._match(*operators):
            operator = self._previous()
            expr = Binary(expr, operator, operand())
        return expr

    def _unary(self) -> Expr:
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            return Unary(operator, self._unary())
        return self._call()

    def _call(self) -> Expr:
        expr = self._primary()
        # f()(x)() chains into nested Call nodes
        while self._match(TokenType.LEFT_PAREN):
            expr = self._finish_call(expr)
        return expr

    def _finish_call(self, callee: Expr) -> Call:
        arguments: list[Expr] = []
        if not self._check(TokenType.RIGHT_PAREN):
            while True:
                if len(arguments) >= self.max_arguments:
                    self._report(self._peek(), f"Can't have more than {self.max_arguments} arguments.")
                arguments.append(self._expression())
                if not self._match(TokenType.COMMA):
                    break
        paren = self._consume(TokenType.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, tuple(arguments))

    def _primary(self) -> Expr:
        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NIL):
            return Literal(Nil)
        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().literal)
        if self._match(TokenType.IDENTIFIER):
            return Variable(self._previous())
        if self._match(TokenType.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)
        raise self._error(self._peek(), "Expect expression.")

    # --- Token stream helpers ---
    def _match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type is token_type

    def _advance(self) -> Token:
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        return self._peek().type is TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self.current]

    def _previous(self) -> Token:
        return self.tokens[self.current - 1]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        if self._check(token_type):
            return self._advance()
        raise self._error(self._peek(), message)

    def _error(self, token: Token, message: str) -> LoxSyntaxError:
        where = " at end" if token.type is TokenType.EOF else f" at '{token.lexeme}'"
        return LoxSyntaxError(message, token.line, where)

    def _report(self, token: Token, message: str) -> None:
        self.errors.append(self._error(token, message))

    def _synchronize(self) -> None:
        """Discard tokens until the start of what is probably the next statement."""
        self._advance()
        while not self._is_at_end():
            if self._previous().type is TokenType.SEMICOLON:
                return
            if self._peek().type in STATEMENT_STARTS:
                return
            self._advance()


def parse(tokens: Iterable[Token]) -> list[Stmt]:
    return Parser(tokens).parse()
