"""
Fixed-width 256-bit unsigned arithmetic.

Every operation takes and returns plain ints in [0, 2**256 - 1]. In checked
mode an out-of-range result raises; in unchecked mode it wraps modulo
2**256, matching EVM semantics. Division and modulo by zero always raise
because no wrapped result exists.
"""

from typing import Callable, Dict

from ..errors import ArithmeticOverflowError, ArithmeticUnderflowError, DivisionByZeroError
from ..values import UINT256_CEILING, UINT256_MAX


def add(a: int, b: int, unchecked: bool = False) -> int:
    result = a + b
    if result > UINT256_MAX:
        if unchecked:
            return result % UINT256_CEILING
        raise ArithmeticOverflowError(f'{a} + {b} overflows uint256')
    return result


def sub(a: int, b: int, unchecked: bool = False) -> int:
    if b > a:
        if unchecked:
            return (a - b) % UINT256_CEILING
        raise ArithmeticUnderflowError(f'{a} - {b} underflows uint256')
    return a - b


def mul(a: int, b: int, unchecked: bool = False) -> int:
    result = a * b
    if result > UINT256_MAX:
        if unchecked:
            return result % UINT256_CEILING
        raise ArithmeticOverflowError(f'{a} * {b} overflows uint256')
    return result


def div(a: int, b: int, unchecked: bool = False) -> int:
    if b == 0:
        raise DivisionByZeroError(f'{a} / 0')
    return a // b


def mod(a: int, b: int, unchecked: bool = False) -> int:
    if b == 0:
        raise DivisionByZeroError(f'{a} % 0')
    return a % b


def power(base: int, exponent: int, unchecked: bool = False) -> int:
    if unchecked:
        return pow(base, exponent, UINT256_CEILING)
    if exponent == 0:
        return 1
    if base in (0, 1):
        return base
    # base >= 2, so any exponent of 256 or more is out of range
    if exponent >= 256:
        raise ArithmeticOverflowError(f'{base} ** {exponent} overflows uint256')
    result = base ** exponent
    if result > UINT256_MAX:
        raise ArithmeticOverflowError(f'{base} ** {exponent} overflows uint256')
    return result


def shl(a: int, shift: int, unchecked: bool = False) -> int:
    """Left shift; bits above 256 are dropped, shifts >= 256 give 0."""
    if shift >= 256:
        return 0
    return (a << shift) & UINT256_MAX


def shr(a: int, shift: int, unchecked: bool = False) -> int:
    """Logical right shift; shifts >= 256 give 0."""
    if shift >= 256:
        return 0
    return a >> shift


def negate(a: int, unchecked: bool = False) -> int:
    """Unary minus on an unsigned value: two's complement when unchecked."""
    if a == 0:
        return 0
    if unchecked:
        return UINT256_CEILING - a
    raise ArithmeticUnderflowError(f'-{a} underflows uint256')


BinaryOp = Callable[[int, int, bool], int]

BINARY_OPERATIONS: Dict[str, BinaryOp] = {
    '+': add,
    '-': sub,
    '*': mul,
    '/': div,
    '%': mod,
    '**': power,
    '<<': shl,
    '>>': shr,
}


def apply_binary(operator: str, a: int, b: int, unchecked: bool = False) -> int:
    """Apply a binary operator by its source spelling."""
    return BINARY_OPERATIONS[operator](a, b, unchecked)


def to_signed(value: int) -> int:
    """Interpret a 256-bit word as a two's-complement int256."""
    if value >= UINT256_CEILING // 2:
        return value - UINT256_CEILING
    return value
