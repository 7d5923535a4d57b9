"""
Crumble Lexer Package

Implements the lexical analyzer (tokenizer) for the Crumble expression
language.

Key Features:
- Maximal-munch scanning of one and two character operators
- Number and string literal decoding
- Exact, case-sensitive keyword recognition
- Error recovery: bad characters and unterminated strings are reported
  and skipped

Author: crumble maintainers
"""

from .tokens import Token, TokenType, KEYWORDS
from .lexer import Lexer, scan, scan_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "scan",
    "scan_file",
    "Token",
    "TokenType",
    "KEYWORDS",
    "Diagnostic",
    "LexerError",
]
