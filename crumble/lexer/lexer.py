"""
Crumble Lexer - turns source text into tokens

Single forward pass over the source. Each step records where the token
starts, consumes one character and dispatches on it. Longest match wins
for the two character operators.

Lexical errors never stop the scan: the bad character (or the unterminated
string) is reported to the diagnostic sink and dropped.
"""

import logging
from typing import List, Optional

from .tokens import (
    Token, TokenType, LiteralValue, KEYWORDS, SINGLE_CHAR_TOKENS, ONE_OR_TWO_CHAR_TOKENS
)
from .errors import (
    LexerError, create_unexpected_character_error, create_unterminated_string_error
)
from ..diagnostics import DiagnosticSink


logger = logging.getLogger(__name__)


class Lexer:
    """
    Crumble lexical analyzer.

    Converts source code text into a list of tokens terminated by a single
    EOF token.
    """

    def __init__(self, source: str, sink: Optional[DiagnosticSink] = None):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            sink: Receives lexical errors; a fresh stderr sink if omitted
        """
        self.source = source
        self.sink = sink if sink is not None else DiagnosticSink()
        self.start = 0
        self.pos = 0
        self.line = 1
        self.start_line = 1
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens including EOF token
        """
        self.start = 0
        self.pos = 0
        self.line = 1
        self.tokens = []
        self.errors = []

        while not self._is_at_end():
            self.start = self.pos
            self.start_line = self.line
            try:
                self._scan_token()

            except LexerError as e:
                # The offending text is already consumed, so just record it
                self.errors.append(e)
                self.sink.add(e.diagnostic)

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))

        logger.debug("scanned %d tokens with %d errors", len(self.tokens), len(self.errors))
        return self.tokens

    def _scan_token(self) -> None:
        """Scan one lexical unit starting at ``self.start``."""
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])
            return

        if char in ONE_OR_TWO_CHAR_TOKENS:
            single, double = ONE_OR_TWO_CHAR_TOKENS[char]
            self._add_token(double if self._match('=') else single)
            return

        if char == '/':
            if self._match('/'):
                # Line comment runs to the end of the line
                while self._peek() != '\n' and not self._is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
            return

        if char in ' \r\t':
            return

        if char == '\n':
            self.line += 1
            return

        if char == '"':
            self._tokenize_string()
            return

        if self._is_digit(char):
            self._tokenize_number()
            return

        if self._is_alpha(char):
            self._tokenize_identifier_or_keyword()
            return

        raise create_unexpected_character_error(char, self.line)

    def _tokenize_string(self) -> None:
        """Tokenize a string literal; no escape sequences are processed."""
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == '\n':
                self.line += 1
            self._advance()

        if self._is_at_end():
            raise create_unterminated_string_error(self.line)

        self._advance()  # Closing quote

        value = self.source[self.start + 1:self.pos - 1]
        self._add_token(TokenType.STRING, value)

    def _tokenize_number(self) -> None:
        """Tokenize a number literal: digits with an optional fraction."""
        while self._is_digit(self._peek()):
            self._advance()

        # A '.' belongs to the number only when a digit follows it
        if self._peek() == '.' and self._is_digit(self._peek(1)):
            self._advance()
            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self.start:self.pos]))

    def _tokenize_identifier_or_keyword(self) -> None:
        """Tokenize an identifier, or a keyword on exact lexeme match."""
        while self._is_alpha_numeric(self._peek()):
            self._advance()

        lexeme = self.source[self.start:self.pos]
        self._add_token(KEYWORDS.get(lexeme, TokenType.IDENTIFIER))

    def _add_token(self, token_type: TokenType, literal: LiteralValue = None) -> None:
        lexeme = self.source[self.start:self.pos]
        self.tokens.append(Token(token_type, lexeme, literal, self.start_line))

    def _advance(self) -> str:
        """Consume and return the current character."""
        char = self.source[self.pos]
        self.pos += 1
        return char

    def _match(self, expected: str) -> bool:
        """Consume the current character only if it is ``expected``."""
        if self._is_at_end() or self.source[self.pos] != expected:
            return False
        self.pos += 1
        return True

    def _peek(self, offset: int = 0) -> str:
        """Peek at character ahead without advancing."""
        peek_pos = self.pos + offset
        if peek_pos < len(self.source):
            return self.source[peek_pos]
        return '\0'

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    @staticmethod
    def _is_digit(char: str) -> bool:
        return '0' <= char <= '9'

    @staticmethod
    def _is_alpha(char: str) -> bool:
        return 'a' <= char <= 'z' or 'A' <= char <= 'Z' or char == '_'

    @classmethod
    def _is_alpha_numeric(cls, char: str) -> bool:
        return cls._is_alpha(char) or cls._is_digit(char)

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0


def scan(source: str, sink: Optional[DiagnosticSink] = None) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        sink: Receives lexical errors

    Returns:
        List of tokens, always ending with EOF
    """
    return Lexer(source, sink).tokenize()


def scan_file(filepath: str, sink: Optional[DiagnosticSink] = None) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        OSError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return scan(source, sink)
