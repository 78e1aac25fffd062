"""
Parser module for the expression evaluator.

This module provides AST node definitions and the parser implementation.
"""

from .ast_nodes import (
    ASTNode,
    Expression,
    Literal,
    Identifier,
    UnaryOperation,
    BinaryOperation,
    UnitConversion,
    FunctionCall,
    UncheckedBlock,
)
from .parser import Parser, parse_number_literal, DEFAULT_MAX_DEPTH

__all__ = [
    'ASTNode',
    'Expression',
    'Literal',
    'Identifier',
    'UnaryOperation',
    'BinaryOperation',
    'UnitConversion',
    'FunctionCall',
    'UncheckedBlock',
    'Parser',
    'parse_number_literal',
    'DEFAULT_MAX_DEPTH',
]
