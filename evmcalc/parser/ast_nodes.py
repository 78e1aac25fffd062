"""
AST node definitions for calculator expressions.

This module contains the dataclasses representing nodes in the Abstract
Syntax Tree (AST) produced by the expression parser. Every node records
the character offset where it starts so that evaluation errors can point
back into the input line.
"""

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional, Tuple

from ..values import Value


# =============================================================================
# BASE NODE
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for all expression nodes."""
    pass


# =============================================================================
# EXPRESSION NODES
# =============================================================================

@dataclass(frozen=True)
class Literal(Expression):
    """Represents a numeric or string literal.

    ``exact`` holds the unrounded value of a fractional or scientific
    numeric literal (e.g. 1.5, 5e-1); ``value`` is then the rounded Uint.
    """
    value: Value
    raw: str = ''
    exact: Optional[Fraction] = None
    position: int = 0


@dataclass(frozen=True)
class Identifier(Expression):
    """Represents a bare name such as max_uint or now."""
    name: str
    position: int = 0


@dataclass(frozen=True)
class UnaryOperation(Expression):
    """Represents a unary operation (only negation: -x)."""
    operator: str
    operand: Expression
    position: int = 0


@dataclass(frozen=True)
class BinaryOperation(Expression):
    """Represents a binary operation (e.g., a + b, a << b)."""
    left: Expression
    operator: str
    right: Expression
    position: int = 0


@dataclass(frozen=True)
class UnitConversion(Expression):
    """Represents a unit suffix and/or a 'to' conversion.

    ``1 ether`` parses with from_unit='ether', to_unit=None (the result
    is in the family's base unit). ``x to gwei`` parses with
    from_unit=None, to_unit='gwei'.
    """
    expression: Expression
    from_unit: Optional[str] = None
    to_unit: Optional[str] = None
    position: int = 0


@dataclass(frozen=True)
class FunctionCall(Expression):
    """Represents a call of a built-in function."""
    name: str
    arguments: Tuple[Expression, ...] = field(default_factory=tuple)
    position: int = 0


@dataclass(frozen=True)
class UncheckedBlock(Expression):
    """Represents unchecked(expr): its subtree uses wrapping arithmetic."""
    expression: Expression
    position: int = 0
