"""
Tree-shaped printer for Crumble expressions.

    Binary
    ├── Operator: *
    ├── Grouping
    │   └── Literal: 1.0
    └── Literal: 3.0
"""

from typing import List

from ..lexer.tokens import LiteralValue
from .ast_nodes import Binary, Expr, ExprVisitor, Grouping, Literal, Unary


class AstPrinter(ExprVisitor[str]):
    """Renders an expression tree as an indented outline."""

    def print(self, expr: Expr) -> str:
        return expr.accept(self)

    def visit_binary_expr(self, expr: Binary) -> str:
        return self._build_tree(
            "Binary",
            self._build_node("Operator", expr.operator.lexeme),
            expr.left.accept(self),
            expr.right.accept(self),
        )

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return self._build_tree("Grouping", expr.expression.accept(self))

    def visit_literal_expr(self, expr: Literal) -> str:
        return self._build_node("Literal", format_literal(expr.value))

    def visit_unary_expr(self, expr: Unary) -> str:
        return self._build_tree(
            "Unary",
            self._build_node("Operator", expr.operator.lexeme),
            expr.right.accept(self),
        )

    @staticmethod
    def _build_node(label: str, value: str) -> str:
        return f"{label}: {value}"

    def _build_tree(self, label: str, *children: str) -> str:
        lines = [label]
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            lines.extend(self._indent(child, is_last))
        return "\n".join(lines)

    @staticmethod
    def _indent(text: str, is_last: bool) -> List[str]:
        prefix = "└── " if is_last else "├── "
        continuation = "    " if is_last else "│   "
        first, *rest = text.split("\n")
        return [prefix + first] + [continuation + line for line in rest]


def format_literal(value: LiteralValue) -> str:
    """Source-like spelling of a literal value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
