"""
Lexer implementation for calculator expressions.

The Lexer tokenizes one input line into a stream of tokens that can be
consumed by the parser. Numeric literals are kept as raw text; converting
them to values (and range checking) is the parser's job.
"""

import string
from typing import List, Tuple

from ..errors import ExpressionSyntaxError
from .tokens import Token, TokenType, KEYWORDS, TWO_CHAR_OPS, SINGLE_CHAR_OPS


# ASCII only; str.isdigit and str.isalnum also accept other scripts.
DIGITS = frozenset(string.digits)
IDENT_START = frozenset(string.ascii_letters + '_')
WORD_CHARS = frozenset(string.ascii_letters + string.digits + '_')

ESCAPES = {
    'n': '\n',
    't': '\t',
    '\\': '\\',
    '"': '"',
    "'": "'",
}


class Lexer:
    """
    Lexer for a single expression line.

    Converts source text into a list of tokens for parsing.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> str:
        """Look ahead in the source without consuming."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ''
        return self.source[pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.peek()
        self.pos += 1
        return ch

    def skip_whitespace(self) -> None:
        """Skip over whitespace characters."""
        ch = self.peek()
        while ch and ch in ' \t\r\n':
            self.advance()
            ch = self.peek()

    def read_string(self) -> str:
        """Read a quoted string literal and return its unescaped contents."""
        start = self.pos
        quote = self.advance()
        result = ''
        while self.peek() and self.peek() != quote:
            if self.peek() == '\\':
                self.advance()
                escaped = self.advance()
                if escaped not in ESCAPES:
                    raise ExpressionSyntaxError(
                        self.pos - 2, f"invalid escape sequence '\\{escaped}'"
                    )
                result += ESCAPES[escaped]
            else:
                result += self.advance()
        if self.peek() != quote:
            raise ExpressionSyntaxError(start, 'unterminated string literal')
        self.advance()
        return result

    def read_number(self) -> Tuple[str, TokenType]:
        """Read a numeric literal (decimal, scientific, hex or binary)."""
        result = ''
        token_type = TokenType.NUMBER

        if self.peek() == '0' and self.peek(1) in ('x', 'X', 'b', 'B'):
            token_type = TokenType.HEX_NUMBER if self.peek(1) in 'xX' else TokenType.BINARY_NUMBER
            result += self.advance()  # 0
            result += self.advance()  # x / b
            # Consume every word character so that malformed digits are
            # reported as one bad literal rather than a stray identifier.
            while self.peek() and self.peek() in WORD_CHARS:
                if self.peek() != '_':
                    result += self.advance()
                else:
                    self.advance()
            return result, token_type

        while self.peek() and self.peek() in '0123456789_':
            if self.peek() != '_':
                result += self.advance()
            else:
                self.advance()
        # Handle decimal point
        if self.peek() == '.' and self.peek(1) and self.peek(1) in '0123456789':
            result += self.advance()
            while self.peek() and self.peek() in '0123456789_':
                if self.peek() != '_':
                    result += self.advance()
                else:
                    self.advance()
        # Handle exponent; "1ether" stays a number followed by a unit
        if self.peek() in ('e', 'E') and self.peek():
            sign = self.peek(1) if self.peek(1) in ('+', '-') and self.peek(1) else ''
            digit = self.peek(1 + len(sign))
            if digit and digit in '0123456789':
                result += self.advance()
                if sign:
                    result += self.advance()
                while self.peek() and self.peek() in '0123456789':
                    result += self.advance()

        return result, token_type

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        result = ''
        while self.peek() and self.peek() in WORD_CHARS:
            result += self.advance()
        return result

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source and return a list of tokens.

        Returns:
            List of Token objects, ending with an EOF token.

        Raises:
            ExpressionSyntaxError: on an unknown character or an
                unterminated string literal.
        """
        while self.pos < len(self.source):
            self.skip_whitespace()

            if self.pos >= len(self.source):
                break

            start = self.pos
            ch = self.peek()

            # String literals
            if ch in '"\'':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING_LITERAL, value, start))
                continue

            # Numbers
            if ch in DIGITS:
                value, token_type = self.read_number()
                self.tokens.append(Token(token_type, value, start))
                continue

            # Identifiers and keywords
            if ch in IDENT_START:
                value = self.read_identifier()
                token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
                self.tokens.append(Token(token_type, value, start))
                continue

            # Two-character operators
            two_char = self.peek() + self.peek(1)
            if two_char in TWO_CHAR_OPS:
                self.advance()
                self.advance()
                self.tokens.append(Token(TWO_CHAR_OPS[two_char], two_char, start))
                continue

            # Single-character operators and delimiters
            if ch in SINGLE_CHAR_OPS:
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_OPS[ch], ch, start))
                continue

            raise ExpressionSyntaxError(start, f"unexpected character '{ch}'")

        self.tokens.append(Token(TokenType.EOF, '', self.pos))
        return self.tokens
