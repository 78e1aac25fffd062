"""
Integer square and n-th roots (floor of the exact root).
"""

import math

from ..errors import DivisionByZeroError


def isqrt(x: int) -> int:
    """Floor of the exact square root of x."""
    return math.isqrt(x)


def iroot(x: int, n: int) -> int:
    """Floor of the exact n-th root of x for n >= 1.

    Newton's iteration on integers, started from a power of two that is
    guaranteed to be at or above the root.
    """
    if n == 0:
        raise DivisionByZeroError('root of degree 0 is undefined')
    if x < 2 or n == 1:
        return x
    if n >= x.bit_length():
        # 2**n > x, so the root is 1
        return 1

    guess = 1 << -(-x.bit_length() // n)
    while True:
        nxt = ((n - 1) * guess + x // guess ** (n - 1)) // n
        if nxt >= guess:
            break
        guess = nxt

    # Newton from above lands on the floor; confirm against rounding.
    while guess ** n > x:
        guess -= 1
    while (guess + 1) ** n <= x:
        guess += 1
    return guess
