"""
Abstract Syntax Tree node definitions for Crumble.

The expression tree is a closed set of four node classes. Operations over
the tree (printing, evaluation, ...) are written as ``ExprVisitor``
subclasses, one handler per node class, so new operations never touch the
node definitions.

Nodes are frozen dataclasses: immutable once built, and compared by
structure so two parses of the same input are equal.

Author: crumble maintainers
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, List, TypeVar

from ..lexer.tokens import LiteralValue, Token


R = TypeVar("R")


class ExprVisitor(ABC, Generic[R]):
    """Abstract visitor interface with one handler per expression node."""

    @abstractmethod
    def visit_binary_expr(self, expr: "Binary") -> R:
        pass

    @abstractmethod
    def visit_grouping_expr(self, expr: "Grouping") -> R:
        pass

    @abstractmethod
    def visit_literal_expr(self, expr: "Literal") -> R:
        pass

    @abstractmethod
    def visit_unary_expr(self, expr: "Unary") -> R:
        pass


class Expr(ABC):
    """Base class for expressions."""

    @abstractmethod
    def accept(self, visitor: ExprVisitor[R]) -> R:
        """Accept a visitor (visitor pattern)."""

    @abstractmethod
    def children(self) -> List["Expr"]:
        """Get all child nodes."""


@dataclass(frozen=True)
class Binary(Expr):
    """Binary operation such as ``a + b`` or ``a == b``."""
    left: Expr
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_binary_expr(self)

    def children(self) -> List[Expr]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Grouping(Expr):
    """Parenthesized expression."""
    expression: Expr

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_grouping_expr(self)

    def children(self) -> List[Expr]:
        return [self.expression]


@dataclass(frozen=True, eq=False)
class Literal(Expr):
    """Constant value; ``None`` is the ``null`` constant."""
    value: LiteralValue

    def __eq__(self, other: object) -> bool:
        # True == 1.0 in Python, so the value type takes part in equality
        if not isinstance(other, Literal):
            return NotImplemented
        return type(self.value) is type(other.value) and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_literal_expr(self)

    def children(self) -> List[Expr]:
        return []


@dataclass(frozen=True)
class Unary(Expr):
    """Prefix operation: ``!x`` or ``-x``."""
    operator: Token
    right: Expr

    def accept(self, visitor: ExprVisitor[R]) -> R:
        return visitor.visit_unary_expr(self)

    def children(self) -> List[Expr]:
        return [self.right]
