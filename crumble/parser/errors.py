"""
Error handling for the Crumble parser.

Provides the syntax error raised while parsing, the cursor misuse error,
the synchronization boundaries used for panic-mode recovery and helpers
for building the common syntax errors.

Author: crumble maintainers
"""

from typing import Optional, List

from ..lexer.tokens import Token, TokenType
from ..diagnostics import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser meets a syntax error.

    Unwinds to ``Parser.parse``, which recovers and returns no tree. The
    diagnostic has already been reported by the time this is raised.
    """

    def __init__(
        self,
        message: str,
        token: Optional[Token],
        line: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            where=describe_location(token),
            code=code,
            help_text=help_text,
            suggestions=tuple(suggestions or ())
        )
        self.token = token

    def __str__(self) -> str:
        return str(self.diagnostic)


class CursorError(RuntimeError):
    """Token cursor used past its bounds; always a bug in the caller."""


def describe_location(token: Optional[Token]) -> str:
    """Location fragment appended to "Error" when reporting at ``token``."""
    if token is None or token.type == TokenType.EOF:
        return " at end"
    return f" at '{token.lexeme}'"


class SyntaxErrorRecovery:
    """
    Token sets used for panic-mode recovery.

    After a syntax error the parser discards tokens until it passes a
    statement terminator or reaches a keyword that starts a statement.
    """

    STATEMENT_TERMINATORS = frozenset({
        TokenType.SEMICOLON,
    })

    STATEMENT_STARTS = frozenset({
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    })

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
            TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
        }

        return list(token_suggestions.get(expected, []))


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Expected token not found",
    "P005": "Expected expression",
    "P006": "Expression nested too deeply",
}


def create_missing_token_error(expected: TokenType, message: str, found: Optional[Token],
                               line: int) -> ParseError:
    """Create an error for a required token that is absent."""
    found_str = found.type.name if found is not None else "end of input"

    return ParseError(
        message=message,
        token=found,
        line=line,
        code="P001",
        help_text=f"The parser expected to see {expected.name} here, but found {found_str} instead.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(expected)
    )


def create_expect_expression_error(found: Optional[Token], line: int) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(
        message="Expect expression.",
        token=found,
        line=line,
        code="P005",
        help_text="Expressions start with a number, string, true, false, null, '(', '!' or '-'.",
        suggestions=["Check for a missing operand"]
    )


def create_nesting_too_deep_error(found: Optional[Token], line: int) -> ParseError:
    """Create an error for grouping or prefix operators nested past the parser's limit."""
    return ParseError(
        message="Expression nested too deeply.",
        token=found,
        line=line,
        code="P006",
        help_text="Too many nested parentheses or prefix operators in one expression.",
        suggestions=["Split the expression into smaller parts"]
    )
