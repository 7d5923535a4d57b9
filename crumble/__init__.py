"""
Crumble Front End Package

Scanner and parser for the Crumble expression language.

Architecture:
    crumble/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis, AST nodes and printing
    ├── diagnostics.py   # Error sink shared by lexer and parser
    └── cli.py           # Command line driver

Author: crumble maintainers
License: MIT
"""

__version__ = "0.1.0"
__author__ = "crumble maintainers"
__license__ = "MIT"

from .diagnostics import DiagnosticSink
from .lexer import Lexer, Token, TokenType, scan
from .parser import Parser, AstPrinter, parse, parse_string

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "DiagnosticSink",
    "AstPrinter",
    "Token",
    "TokenType",

    # Convenience functions
    "scan",
    "parse",
    "parse_string",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
