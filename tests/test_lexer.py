"""
Test suite for the Crumble lexer.

Tests cover:
- Maximal-munch operator scanning
- Number, string and identifier literals
- Keyword recognition
- Error reporting and recovery

Author: crumble maintainers
"""

import io
import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from crumble.diagnostics import DiagnosticSink
from crumble.lexer import KEYWORDS, Lexer, TokenType, scan, scan_file


T = TokenType


class TestLexer(unittest.TestCase):
    """Test cases for the lexer."""

    def setUp(self):
        """Set up test fixtures."""
        self.sink = DiagnosticSink(stream=io.StringIO())

    def _types(self, source: str):
        return [token.type for token in scan(source, self.sink)]

    def test_single_character_punctuation(self):
        """Every single character token maps to its own type."""
        self.assertEqual(
            self._types("(){},.-+;*/"),
            [T.LEFT_PAREN, T.RIGHT_PAREN, T.LEFT_BRACE, T.RIGHT_BRACE, T.COMMA,
             T.DOT, T.MINUS, T.PLUS, T.SEMICOLON, T.STAR, T.SLASH, T.EOF]
        )
        self.assertFalse(self.sink.had_error)

    def test_two_character_operators_use_maximal_munch(self):
        """A trailing '=' is always folded into the operator."""
        self.assertEqual(
            self._types("!= == <= >="),
            [T.BANG_EQUAL, T.EQUAL_EQUAL, T.LESS_EQUAL, T.GREATER_EQUAL, T.EOF]
        )
        self.assertEqual(self._types("! = < >"), [T.BANG, T.EQUAL, T.LESS, T.GREATER, T.EOF])
        self.assertEqual(self._types("!=="), [T.BANG_EQUAL, T.EQUAL, T.EOF])
        self.assertEqual(self._types("==="), [T.EQUAL_EQUAL, T.EQUAL, T.EOF])
        self.assertEqual(self._types("!!"), [T.BANG, T.BANG, T.EOF])

    def test_line_comment_is_skipped(self):
        """'//' runs to end of line and produces no token."""
        tokens = scan("1 // two + three\n4", self.sink)

        self.assertEqual([t.type for t in tokens], [T.NUMBER, T.NUMBER, T.EOF])
        self.assertEqual(tokens[1].lexeme, "4")
        self.assertEqual(tokens[1].line, 2)

    def test_comment_at_end_of_input(self):
        self.assertEqual(self._types("// nothing here"), [T.EOF])

    def test_whitespace_and_newlines(self):
        """Whitespace is dropped and newlines advance the line counter."""
        tokens = scan(" \t\r1\n\n  +\n", self.sink)

        self.assertEqual([(t.type, t.line) for t in tokens],
                         [(T.NUMBER, 1), (T.PLUS, 3), (T.EOF, 4)])

    def test_integer_number(self):
        token = scan("123", self.sink)[0]

        self.assertEqual(token.type, T.NUMBER)
        self.assertEqual(token.lexeme, "123")
        self.assertEqual(token.literal, 123.0)
        self.assertIsInstance(token.literal, float)

    def test_decimal_number(self):
        token = scan("3.14159", self.sink)[0]

        self.assertEqual(token.lexeme, "3.14159")
        self.assertEqual(token.literal, float("3.14159"))

    def test_trailing_dot_is_not_part_of_number(self):
        """A '.' with no digit after it stays a separate DOT token."""
        tokens = scan("5.", self.sink)

        self.assertEqual([t.type for t in tokens], [T.NUMBER, T.DOT, T.EOF])
        self.assertEqual(tokens[0].lexeme, "5")
        self.assertEqual(tokens[0].literal, 5.0)

    def test_leading_dot_is_not_part_of_number(self):
        tokens = scan(".5", self.sink)

        self.assertEqual([t.type for t in tokens], [T.DOT, T.NUMBER, T.EOF])
        self.assertEqual(tokens[1].literal, 5.0)

    def test_number_followed_by_dot_and_identifier(self):
        self.assertEqual(self._types("1.abc"), [T.NUMBER, T.DOT, T.IDENTIFIER, T.EOF])

    def test_only_one_fraction_part(self):
        tokens = scan("1.2.3", self.sink)

        self.assertEqual([t.lexeme for t in tokens], ["1.2", ".", "3", ""])

    def test_string_literal(self):
        """The literal value is the text strictly between the quotes."""
        token = scan('"hello world"', self.sink)[0]

        self.assertEqual(token.type, T.STRING)
        self.assertEqual(token.lexeme, '"hello world"')
        self.assertEqual(token.literal, "hello world")

    def test_empty_string_literal(self):
        token = scan('""', self.sink)[0]

        self.assertEqual(token.type, T.STRING)
        self.assertEqual(token.literal, "")

    def test_string_has_no_escape_processing(self):
        token = scan(r'"a\nb"', self.sink)[0]

        self.assertEqual(token.literal, "a\\nb")

    def test_multiline_string_advances_line(self):
        tokens = scan('"one\ntwo\nthree" 1', self.sink)

        self.assertEqual(tokens[0].literal, "one\ntwo\nthree")
        self.assertEqual(tokens[0].line, 1)
        self.assertEqual(tokens[1].type, T.NUMBER)
        self.assertEqual(tokens[1].line, 3)
        self.assertEqual(tokens[-1].line, 3)

    def test_unterminated_string(self):
        """An unterminated string is reported and produces no STRING token."""
        tokens = scan('"abc', self.sink)

        self.assertEqual([t.type for t in tokens], [T.EOF])
        self.assertTrue(self.sink.had_error)
        self.assertEqual(len(self.sink.errors), 1)
        self.assertEqual(self.sink.errors[0].message, "Unterminated string.")
        self.assertEqual(self.sink.errors[0].code, "L002")

    def test_unterminated_string_reports_line_where_scanning_stopped(self):
        tokens = scan('1\n"abc\ndef', self.sink)

        self.assertEqual([t.type for t in tokens], [T.NUMBER, T.EOF])
        self.assertEqual(self.sink.errors[0].line, 3)

    def test_unexpected_character_is_skipped(self):
        """Scanning continues past an invalid character."""
        tokens = scan("1 @ 2", self.sink)

        self.assertEqual([t.type for t in tokens], [T.NUMBER, T.NUMBER, T.EOF])
        self.assertEqual([t.literal for t in tokens[:2]], [1.0, 2.0])
        self.assertEqual(self.sink.errors[0].message, "Unexpected character: @")
        self.assertEqual(self.sink.errors[0].line, 1)

    def test_every_bad_character_is_reported(self):
        tokens = scan("#\n$ ?", self.sink)

        self.assertEqual([t.type for t in tokens], [T.EOF])
        self.assertEqual([(d.line, d.message) for d in self.sink.errors], [
            (1, "Unexpected character: #"),
            (2, "Unexpected character: $"),
            (2, "Unexpected character: ?"),
        ])

    def test_lexer_records_errors(self):
        lexer = Lexer("@", self.sink)
        lexer.tokenize()

        self.assertTrue(lexer.has_errors())
        self.assertEqual(lexer.errors[0].line, 1)

    def test_every_keyword(self):
        """Each reserved word scans to its own token type."""
        for lexeme, token_type in KEYWORDS.items():
            with self.subTest(keyword=lexeme):
                token = scan(lexeme, self.sink)[0]
                self.assertEqual(token.type, token_type)
                self.assertEqual(token.lexeme, lexeme)
                self.assertIsNone(token.literal)

    def test_keyword_set(self):
        self.assertEqual(set(KEYWORDS), {
            "and", "class", "else", "false", "for", "fun", "if", "null",
            "or", "print", "return", "super", "this", "true", "var", "while",
        })

    def test_identifier_shaped_non_keywords(self):
        """Keyword lookup is exact and case sensitive."""
        for text in ["andy", "And", "TRUE", "_if", "nulls", "x1_y", "_", "classy"]:
            with self.subTest(identifier=text):
                tokens = scan(text, self.sink)
                self.assertEqual([t.type for t in tokens], [T.IDENTIFIER, T.EOF])
                self.assertEqual(tokens[0].lexeme, text)

    def test_identifier_stops_at_non_identifier_character(self):
        tokens = scan("foo+bar", self.sink)

        self.assertEqual([(t.type, t.lexeme) for t in tokens],
                         [(T.IDENTIFIER, "foo"), (T.PLUS, "+"), (T.IDENTIFIER, "bar"), (T.EOF, "")])

    def test_sequence_ends_with_single_eof(self):
        for source in ["", "   ", "1 + 2", "@", '"open']:
            with self.subTest(source=source):
                tokens = scan(source, self.sink)
                self.assertEqual(tokens[-1].type, T.EOF)
                self.assertEqual(tokens[-1].lexeme, "")
                self.assertEqual([t.type for t in tokens].count(T.EOF), 1)

    def test_lexemes_match_source_and_lines_never_decrease(self):
        source = 'var x = (1.5 + "s\nt") >= 2 // c\n!true'
        tokens = scan(source, self.sink)

        lines = [t.line for t in tokens]
        self.assertEqual(lines, sorted(lines))
        for token in tokens[:-1]:
            self.assertTrue(token.lexeme)
            self.assertIn(token.lexeme, source)

    def test_rescanning_is_idempotent(self):
        source = '(1 + 2) * "three" != nil'

        first = scan(source, DiagnosticSink.quiet())
        second = scan(source, DiagnosticSink.quiet())

        self.assertEqual(first, second)

    def test_tokenize_resets_state(self):
        lexer = Lexer("1 @", self.sink)

        self.assertEqual(lexer.tokenize(), lexer.tokenize())
        self.assertEqual(len(lexer.errors), 1)

    def test_token_str(self):
        tokens = scan('12 "s" +', self.sink)

        self.assertEqual(str(tokens[0]), "NUMBER 12 12.0")
        self.assertEqual(str(tokens[1]), 'STRING "s" s')
        self.assertEqual(str(tokens[2]), "PLUS +")

    def test_token_properties(self):
        number, plus, true = scan("1 + true", self.sink)[:3]

        self.assertTrue(number.is_literal)
        self.assertFalse(plus.is_literal)
        self.assertTrue(true.is_keyword)
        self.assertFalse(number.is_keyword)

    def test_scan_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "input.cr")
            with open(path, 'w', encoding='utf-8') as f:
                f.write('1 +\n"two"')

            tokens = scan_file(path, self.sink)

        self.assertEqual([t.type for t in tokens], [T.NUMBER, T.PLUS, T.STRING, T.EOF])
        self.assertEqual(tokens[2].line, 2)
        self.assertFalse(self.sink.had_error)

    def test_scan_file_missing_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(OSError):
                scan_file(os.path.join(tmpdir, "missing.cr"), self.sink)


if __name__ == '__main__':
    unittest.main()
