"""
Token definitions for the expression lexer.

This module contains the TokenType enum, Token dataclass, and
constant mappings for keywords and operators.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Enumeration of all token types recognized by the expression lexer."""

    # Keywords
    TO = auto()
    UNCHECKED = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    PERCENT = auto()
    STAR_STAR = auto()
    LT_LT = auto()
    GT_GT = auto()

    # Delimiters
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # Literals
    NUMBER = auto()
    HEX_NUMBER = auto()
    BINARY_NUMBER = auto()
    STRING_LITERAL = auto()
    IDENTIFIER = auto()

    # Special
    EOF = auto()


@dataclass
class Token:
    """Represents a single token from the lexer.

    ``position`` is the 0-based character offset of the token's first
    character in the input line.
    """
    type: TokenType
    value: str
    position: int


# Keyword to TokenType mapping
KEYWORDS = {
    'to': TokenType.TO,
    'unchecked': TokenType.UNCHECKED,
}

# Two-character operators
TWO_CHAR_OPS = {
    '**': TokenType.STAR_STAR,
    '<<': TokenType.LT_LT,
    '>>': TokenType.GT_GT,
}

# Single-character operators and delimiters
SINGLE_CHAR_OPS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '%': TokenType.PERCENT,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    ',': TokenType.COMMA,
}


def describe(token: Token) -> str:
    """Describe a token for an error message."""
    if token.type == TokenType.EOF:
        return 'end of input'
    if token.type == TokenType.STRING_LITERAL:
        return 'string literal'
    return f"'{token.value}'"
