"""
Lexer module for the expression evaluator.

This module provides tokenization of a single input line.
"""

from .tokens import TokenType, Token, KEYWORDS, TWO_CHAR_OPS, SINGLE_CHAR_OPS, describe
from .lexer import Lexer

__all__ = [
    'TokenType',
    'Token',
    'KEYWORDS',
    'TWO_CHAR_OPS',
    'SINGLE_CHAR_OPS',
    'describe',
    'Lexer',
]
