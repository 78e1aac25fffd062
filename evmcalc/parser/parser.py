"""
Expression parser implementation.

The Parser converts the token stream from the Lexer into an Abstract
Syntax Tree (AST). It is a recursive descent parser with one method per
precedence level, lowest first:

    conversion      expr 'to' unit
    shift           << >>
    additive        + -
    multiplicative  * / %
    exponentiation  ** (right-associative)
    unary           -x
    postfix unit    primary [unit]
    primary         literal | identifier | call | ( expr ) | unchecked( expr )
"""

from fractions import Fraction
from typing import List, Tuple

from ..errors import ExpressionSyntaxError, InvalidLiteralError, RecursionLimitExceededError
from ..lexer import Lexer, Token, TokenType, describe
from ..values import Text, Uint, UINT256_MAX, is_unit
from .ast_nodes import (
    Expression,
    Literal,
    Identifier,
    UnaryOperation,
    BinaryOperation,
    UnitConversion,
    FunctionCall,
    UncheckedBlock,
)


DEFAULT_MAX_DEPTH = 64

# Exponents further than this from the mantissa length cannot produce an
# in-range integer other than 0, so they are decided without big arithmetic.
_EXPONENT_SLACK = 80

# Far above any 256-bit value (78 digits) and below the interpreter's
# int-from-str digit limit
MAX_DECIMAL_LITERAL_LENGTH = 1000


def parse_number_literal(token: Token) -> Literal:
    """Convert a numeric token into a Literal holding a Uint.

    Raises:
        InvalidLiteralError: if the digits are malformed for the base, the
            value does not fit in 256 bits, or a decimal literal is longer
            than MAX_DECIMAL_LITERAL_LENGTH.
    """
    text = token.value
    if token.type in (TokenType.HEX_NUMBER, TokenType.BINARY_NUMBER):
        base = 16 if token.type == TokenType.HEX_NUMBER else 2
        digits = text[2:]
        if not digits:
            raise InvalidLiteralError(f"'{text}' has no digits", token.position)
        try:
            value = int(digits, base)
        except ValueError:
            kind = 'hex' if base == 16 else 'binary'
            raise InvalidLiteralError(f"invalid {kind} literal '{text}'", token.position)
        if value > UINT256_MAX:
            raise InvalidLiteralError(f"literal '{text}' exceeds 256 bits", token.position)
        return Literal(value=Uint(value), raw=text, position=token.position)

    mantissa, _, exponent_text = text.lower().partition('e')
    if len(text) > MAX_DECIMAL_LITERAL_LENGTH:
        raise InvalidLiteralError(
            f"literal '{text[:20]}...' is longer than {MAX_DECIMAL_LITERAL_LENGTH} characters",
            token.position,
        )
    exponent = int(exponent_text) if exponent_text else 0
    significand = Fraction(mantissa)

    if significand == 0:
        exact = Fraction(0)
    elif exponent - len(mantissa) > _EXPONENT_SLACK:
        raise InvalidLiteralError(f"literal '{text}' exceeds 256 bits", token.position)
    elif exponent + len(mantissa) < -1:
        exact = Fraction(0)
    else:
        exact = significand * Fraction(10) ** exponent

    rounded = int(exact + Fraction(1, 2)) if exact.denominator != 1 else int(exact)
    if rounded > UINT256_MAX:
        raise InvalidLiteralError(f"literal '{text}' exceeds 256 bits", token.position)
    return Literal(
        value=Uint(rounded),
        raw=text,
        exact=exact if exact.denominator != 1 else None,
        position=token.position,
    )


class Parser:
    """
    Recursive descent parser for calculator expressions.

    Parses a stream of tokens into an AST. A parser instance handles one
    line and is discarded afterwards.
    """

    def __init__(self, tokens: List[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    @classmethod
    def from_source(cls, source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> 'Parser':
        """Tokenize a line and return a parser over its tokens."""
        return cls(Lexer(source).tokenize(), max_depth)

    def peek(self, offset: int = 0) -> Token:
        """Look ahead in the token stream without consuming."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def current(self) -> Token:
        """Return the current token."""
        return self.peek()

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current()
        self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def expect(self, token_type: TokenType, message: str) -> Token:
        """Consume the current token if it matches, otherwise raise an error."""
        if self.current().type != token_type:
            raise ExpressionSyntaxError(
                self.current().position,
                f'{message}, found {describe(self.current())}',
            )
        return self.advance()

    def error(self, message: str) -> ExpressionSyntaxError:
        return ExpressionSyntaxError(self.current().position, message)

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise RecursionLimitExceededError(
                f'expression nested deeper than {self.max_depth} levels',
                self.current().position,
            )

    def _leave(self) -> None:
        self.depth -= 1

    # =========================================================================
    # TOP-LEVEL PARSING
    # =========================================================================

    def parse(self) -> Expression:
        """Parse the whole line into a single expression."""
        if self.match(TokenType.EOF):
            raise self.error('empty expression')
        expr = self.parse_expression()
        if not self.match(TokenType.EOF):
            raise self.error(f'unexpected {describe(self.current())}')
        return expr

    # =========================================================================
    # EXPRESSION PARSING
    # =========================================================================

    def parse_expression(self) -> Expression:
        """Parse an expression."""
        self._enter()
        try:
            return self.parse_conversion()
        finally:
            self._leave()

    def parse_conversion(self) -> Expression:
        """Parse a unit conversion: expr 'to' unit."""
        left = self.parse_shift()
        while self.match(TokenType.TO):
            self.advance()
            unit = self.expect(TokenType.IDENTIFIER, "expected a unit after 'to'").value
            left = UnitConversion(expression=left, to_unit=unit, position=left.position)
        return left

    def parse_shift(self) -> Expression:
        """Parse a shift expression."""
        left = self.parse_additive()
        while self.match(TokenType.LT_LT, TokenType.GT_GT):
            op = self.advance().value
            right = self.parse_additive()
            left = BinaryOperation(left=left, operator=op, right=right, position=left.position)
        return left

    def parse_additive(self) -> Expression:
        """Parse an additive expression."""
        left = self.parse_multiplicative()
        while self.match(TokenType.PLUS, TokenType.MINUS):
            op = self.advance().value
            right = self.parse_multiplicative()
            left = BinaryOperation(left=left, operator=op, right=right, position=left.position)
        return left

    def parse_multiplicative(self) -> Expression:
        """Parse a multiplicative expression."""
        left = self.parse_exponentiation()
        while self.match(TokenType.STAR, TokenType.SLASH, TokenType.PERCENT):
            op = self.advance().value
            right = self.parse_exponentiation()
            left = BinaryOperation(left=left, operator=op, right=right, position=left.position)
        return left

    def parse_exponentiation(self) -> Expression:
        """Parse an exponentiation expression (right-associative)."""
        left = self.parse_unary()
        if self.match(TokenType.STAR_STAR):
            op = self.advance().value
            self._enter()
            try:
                right = self.parse_exponentiation()
            finally:
                self._leave()
            return BinaryOperation(left=left, operator=op, right=right, position=left.position)
        return left

    def parse_unary(self) -> Expression:
        """Parse a unary negation."""
        if self.match(TokenType.MINUS):
            position = self.advance().position
            self._enter()
            try:
                operand = self.parse_unary()
            finally:
                self._leave()
            return UnaryOperation(operator='-', operand=operand, position=position)

        return self.parse_postfix_unit()

    def parse_postfix_unit(self) -> Expression:
        """Parse a primary expression with an optional unit suffix (1 ether)."""
        expr = self.parse_primary()
        if self.match(TokenType.IDENTIFIER) and is_unit(self.current().value):
            unit = self.advance().value
            return UnitConversion(expression=expr, from_unit=unit, position=expr.position)
        return expr

    def parse_arguments(self) -> Tuple[Expression, ...]:
        """Parse function call arguments up to (not including) ')'."""
        args = []
        if self.match(TokenType.RPAREN):
            return tuple(args)

        while True:
            args.append(self.parse_expression())
            if not self.match(TokenType.COMMA):
                break
            self.advance()

        return tuple(args)

    def parse_primary(self) -> Expression:
        """Parse a primary expression."""
        if self.match(TokenType.NUMBER, TokenType.HEX_NUMBER, TokenType.BINARY_NUMBER):
            return parse_number_literal(self.advance())

        if self.match(TokenType.STRING_LITERAL):
            token = self.advance()
            return Literal(value=Text(token.value), raw=token.value, position=token.position)

        # unchecked( expr )
        if self.match(TokenType.UNCHECKED):
            position = self.advance().position
            self.expect(TokenType.LPAREN, "expected '(' after 'unchecked'")
            inner = self.parse_expression()
            self.expect(TokenType.RPAREN, "expected ')' to close 'unchecked('")
            return UncheckedBlock(expression=inner, position=position)

        # Parenthesized expression
        if self.match(TokenType.LPAREN):
            self.advance()
            inner = self.parse_expression()
            self.expect(TokenType.RPAREN, "expected ')'")
            return inner

        # Function call or identifier
        if self.match(TokenType.IDENTIFIER):
            token = self.advance()
            if self.match(TokenType.LPAREN):
                self.advance()
                args = self.parse_arguments()
                self.expect(TokenType.RPAREN, f"expected ',' or ')' in call to '{token.value}'")
                return FunctionCall(name=token.value, arguments=args, position=token.position)
            return Identifier(name=token.value, position=token.position)

        if self.match(TokenType.EOF):
            raise self.error('unexpected end of input')
        raise self.error(f'unexpected {describe(self.current())}')
