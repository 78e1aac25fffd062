"""
Error types raised while parsing and evaluating an expression.

Every failure the evaluator can report derives from EvalError. Each class
carries a ``kind`` naming the error category shown to the host, and the
string form of the exception is the message displayed to the user.
"""

from typing import Optional


class EvalError(Exception):
    """Base class for all evaluation errors."""

    kind = 'EvalError'

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        return f'{self.kind}: {self.message}'


class ExpressionSyntaxError(EvalError):
    """The input line does not match the expression grammar."""

    kind = 'SyntaxError'

    def __init__(self, position: int, message: str):
        super().__init__(message, position)

    def __str__(self) -> str:
        return f'{self.kind} at position {self.position}: {self.message}'


class UnknownIdentifierError(EvalError):
    kind = 'UnknownIdentifier'


class UnknownFunctionError(EvalError):
    kind = 'UnknownFunction'


class ArityMismatchError(EvalError):
    kind = 'ArityMismatch'


class TypeMismatchError(EvalError):
    kind = 'TypeMismatch'


class InvalidLiteralError(EvalError):
    """A numeric, hex, binary or textual literal is malformed or out of range."""

    kind = 'InvalidLiteral'


class ArithmeticOverflowError(EvalError):
    kind = 'ArithmeticOverflow'


class ArithmeticUnderflowError(EvalError):
    kind = 'ArithmeticUnderflow'


class DivisionByZeroError(EvalError):
    kind = 'DivisionByZero'


class AbiSelectorMismatchError(EvalError):
    kind = 'AbiSelectorMismatch'


class AbiMalformedCalldataError(EvalError):
    kind = 'AbiMalformedCalldata'


class UnitConversionUnsupportedError(EvalError):
    kind = 'UnitConversionUnsupported'


class RecursionLimitExceededError(EvalError):
    kind = 'RecursionLimitExceeded'


class OutOfRangeError(EvalError):
    """A well-formed argument lies outside the domain of a function."""

    kind = 'OutOfRange'
