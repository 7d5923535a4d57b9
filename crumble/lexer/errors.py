"""
Error handling for the Crumble lexer.

Provides the lexer's exception type, its error codes and helpers for
building the common lexical errors.

Author: crumble maintainers
"""

from typing import Optional, List

from ..diagnostics import Diagnostic


class LexerError(Exception):
    """
    Exception raised when the lexer cannot produce a token.

    The lexer catches these itself; they never escape ``Lexer.tokenize``.
    """

    def __init__(
        self,
        message: str,
        line: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            line=line,
            code=code,
            help_text=help_text,
            suggestions=tuple(suggestions or ())
        )

    @property
    def line(self) -> int:
        return self.diagnostic.line

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Unexpected character",
    "L002": "Unterminated string literal",
}


def create_unexpected_character_error(char: str, line: int) -> LexerError:
    """Create an error for a character that starts no token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Crumble source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Unexpected character: {char}",
        line=line,
        code="L001",
        help_text=help_text
    )


def create_unterminated_string_error(line: int) -> LexerError:
    """Create an error for a string literal that reaches end of input."""
    return LexerError(
        message="Unterminated string.",
        line=line,
        code="L002",
        help_text="String literals must be closed with a matching \" quote.",
        suggestions=["Add a closing \" quote"]
    )
