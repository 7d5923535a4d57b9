"""
Crumble Parser Package

Implements a recursive descent parser for Crumble expressions with one
grammar rule per precedence level.

Key Features:
- Left-associative binary operators, stacked prefix operators
- Immutable AST nodes with a visitor interface
- Panic-mode error recovery and synchronization
- Tree-shaped AST printer

Author: crumble maintainers
"""

from .ast_nodes import Expr, ExprVisitor, Binary, Grouping, Literal, Unary
from .parser import Parser, parse, parse_string
from .printer import AstPrinter
from .errors import ParseError, CursorError

__all__ = [
    # Core parser
    "Parser",
    "parse",
    "parse_string",

    # AST nodes
    "Expr", "ExprVisitor",
    "Binary", "Grouping", "Literal", "Unary",
    "AstPrinter",

    # Error handling
    "ParseError", "CursorError",
]
