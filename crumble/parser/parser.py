"""
Crumble Recursive Descent Parser

One method per precedence level, loosest first:

    expression  -> equality
    equality    -> comparison ( ( "==" | "!=" ) comparison )*
    comparison  -> term ( ( ">" | ">=" | "<" | "<=" ) term )*
    term        -> factor ( ( "-" | "+" ) factor )*
    factor      -> unary ( ( "/" | "*" ) unary )*
    unary       -> ( "!" | "-" ) unary | primary
    primary     -> NUMBER | STRING | "true" | "false" | "null"
                 | "(" expression ")"

Binary levels fold left, so operators of one level are left-associative.
A syntax error is reported to the diagnostic sink and unwinds to ``parse``,
which synchronizes and returns ``None``.

Author: crumble maintainers
"""

import logging
from typing import List, Optional

from ..lexer.lexer import scan
from ..lexer.tokens import Token, TokenType
from ..diagnostics import DiagnosticSink
from .ast_nodes import Binary, Expr, Grouping, Literal, Unary
from .errors import (
    ParseError, CursorError, create_missing_token_error,
    create_expect_expression_error, create_nesting_too_deep_error, SyntaxErrorRecovery
)


logger = logging.getLogger(__name__)

# Deepest grouping or prefix operator nesting accepted. One grouping level
# is seven Python frames deep.
MAX_NESTING_DEPTH = 100


class Parser:
    """
    Crumble expression parser.

    Walks a token list with a single forward cursor and builds one
    expression tree per ``parse`` call.
    """

    def __init__(self, tokens: List[Token], sink: Optional[DiagnosticSink] = None):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer
            sink: Receives syntax errors; a fresh stderr sink if omitted
        """
        self.tokens = tokens
        self.sink = sink if sink is not None else DiagnosticSink()
        self.current = 0
        self.errors: List[ParseError] = []
        self.depth = 0

    def parse(self) -> Optional[Expr]:
        """
        Parse one expression from the token stream.

        Returns:
            Root of the expression tree, or None if a syntax error was hit
        """
        self.depth = 0
        try:
            return self._parse_expression()

        except ParseError as e:
            self.errors.append(e)
            logger.debug("parse failed: %s", e.diagnostic)
            self._synchronize()
            return None

    # Grammar rules, loosest binding first

    def _parse_expression(self) -> Expr:
        return self._parse_equality()

    def _parse_equality(self) -> Expr:
        expr = self._parse_comparison()

        while self._match(TokenType.EQUAL_EQUAL, TokenType.BANG_EQUAL):
            operator = self._previous()
            right = self._parse_comparison()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_comparison(self) -> Expr:
        expr = self._parse_term()

        while self._match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                          TokenType.LESS, TokenType.LESS_EQUAL):
            operator = self._previous()
            right = self._parse_term()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_term(self) -> Expr:
        expr = self._parse_factor()

        while self._match(TokenType.MINUS, TokenType.PLUS):
            operator = self._previous()
            right = self._parse_factor()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_factor(self) -> Expr:
        expr = self._parse_unary()

        while self._match(TokenType.SLASH, TokenType.STAR):
            operator = self._previous()
            right = self._parse_unary()
            expr = Binary(expr, operator, right)

        return expr

    def _parse_unary(self) -> Expr:
        """Parse a prefix operator; recursion allows stacking such as ``!!x``."""
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            self._enter_nested()
            right = self._parse_unary()
            self.depth -= 1
            return Unary(operator, right)

        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NULL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().literal)

        if self._match(TokenType.LEFT_PAREN):
            self._enter_nested()
            expr = self._parse_expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            self.depth -= 1
            return Grouping(expr)

        token = self._error_token()
        raise self._error(create_expect_expression_error(token, self._error_line(token)))

    def _enter_nested(self) -> None:
        """Count one level of grouping or prefix operator, failing past the limit."""
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            token = self._previous()
            raise self._error(create_nesting_too_deep_error(token, token.line))

    # Error handling

    def _error(self, error: ParseError) -> ParseError:
        """Report ``error`` to the sink and hand it back for raising."""
        self.sink.add(error.diagnostic)
        return error

    def _error_token(self) -> Optional[Token]:
        """The token a syntax error is reported at, None once the list is exhausted."""
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return None

    def _error_line(self, token: Optional[Token]) -> int:
        if token is not None:
            return token.line
        if self.tokens:
            return self.tokens[-1].line
        return 1

    def _synchronize(self) -> None:
        """
        Discard tokens until a likely statement boundary.

        Stops just after a ';' or just before a keyword that starts a
        statement, or at end of input.
        """
        if self.current < len(self.tokens):
            self._advance()

        while not self._is_at_end():
            if self._previous().type in SyntaxErrorRecovery.STATEMENT_TERMINATORS:
                return

            if self._peek().type in SyntaxErrorRecovery.STATEMENT_STARTS:
                return

            self._advance()

    # Utility methods

    def _match(self, *token_types: TokenType) -> bool:
        """Consume the current token if it has one of the given types."""
        for token_type in token_types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        if self.current >= len(self.tokens):
            raise CursorError("Unexpected end of input.")
        token = self.tokens[self.current]
        self.current += 1
        return token

    def _is_at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self.current >= len(self.tokens) or self.tokens[self.current].type == TokenType.EOF

    def _peek(self) -> Token:
        """Return current token without consuming."""
        if self.current >= len(self.tokens):
            raise CursorError("No token to peek.")
        return self.tokens[self.current]

    def _previous(self) -> Token:
        """Return the most recently consumed token."""
        if self.current <= 0:
            raise CursorError("No previous token available.")
        return self.tokens[self.current - 1]

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()

        token = self._error_token()
        raise self._error(create_missing_token_error(token_type, message, token,
                                                     self._error_line(token)))


def parse(tokens: List[Token], sink: Optional[DiagnosticSink] = None) -> Optional[Expr]:
    """
    Convenience function to parse a token list.

    Returns:
        Expression tree, or None after a reported syntax error
    """
    return Parser(tokens, sink).parse()


def parse_string(source: str, sink: Optional[DiagnosticSink] = None) -> Optional[Expr]:
    """
    Convenience function to scan and parse a source string.

    Lexical errors are reported to ``sink`` but parsing still runs over the
    tokens that were produced.
    """
    if sink is None:
        sink = DiagnosticSink()

    tokens = scan(source, sink)
    return Parser(tokens, sink).parse()
