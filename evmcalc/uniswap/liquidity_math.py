"""
Concentrated-liquidity conversions between token amounts and liquidity.

Follows LiquidityAmounts from v3-periphery: intermediate products are
computed at full precision (mul_div) and every result is range checked,
liquidity against uint128 and amounts against uint256.
"""

from typing import Tuple

from ..errors import ArithmeticOverflowError, DivisionByZeroError, OutOfRangeError
from ..values import UINT256_MAX
from .tick_math import Q96


UINT128_MAX = 2**128 - 1


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator) with a full-width intermediate product."""
    if denominator == 0:
        raise DivisionByZeroError('mul_div by zero')
    result = (a * b) // denominator
    if result > UINT256_MAX:
        raise ArithmeticOverflowError('mul_div result overflows uint256')
    return result


def _to_uint128(value: int) -> int:
    if value > UINT128_MAX:
        raise ArithmeticOverflowError(f'liquidity {value} overflows uint128')
    return value


def _position_range(sqrt_price_x96: int, sqrt_pa_x96: int, sqrt_pb_x96: int) -> Tuple[int, int]:
    if sqrt_price_x96 == 0:
        raise OutOfRangeError('sqrt_price_x96 must be non-zero')
    low, high = sorted((sqrt_pa_x96, sqrt_pb_x96))
    if low == 0:
        raise OutOfRangeError('sqrt price bounds must be non-zero')
    if low == high:
        raise DivisionByZeroError('price range is empty (sqrt_pa_x96 == sqrt_pb_x96)')
    return low, high


# =============================================================================
# TWO-BOUNDARY FORMULAS
# =============================================================================

def liquidity_for_amount0(sqrt_a: int, sqrt_b: int, amount0: int) -> int:
    """L = amount0 * (sqrtA * sqrtB / Q96) / (sqrtB - sqrtA)."""
    sqrt_a, sqrt_b = sorted((sqrt_a, sqrt_b))
    intermediate = mul_div(sqrt_a, sqrt_b, Q96)
    return _to_uint128(mul_div(amount0, intermediate, sqrt_b - sqrt_a))


def liquidity_for_amount1(sqrt_a: int, sqrt_b: int, amount1: int) -> int:
    """L = amount1 * Q96 / (sqrtB - sqrtA)."""
    sqrt_a, sqrt_b = sorted((sqrt_a, sqrt_b))
    return _to_uint128(mul_div(amount1, Q96, sqrt_b - sqrt_a))


def amount0_for_liquidity(sqrt_a: int, sqrt_b: int, liquidity: int) -> int:
    """amount0 = (L << 96) * (sqrtB - sqrtA) / sqrtB / sqrtA."""
    sqrt_a, sqrt_b = sorted((sqrt_a, sqrt_b))
    return mul_div(liquidity << 96, sqrt_b - sqrt_a, sqrt_b) // sqrt_a


def amount1_for_liquidity(sqrt_a: int, sqrt_b: int, liquidity: int) -> int:
    """amount1 = L * (sqrtB - sqrtA) / Q96."""
    sqrt_a, sqrt_b = sorted((sqrt_a, sqrt_b))
    return mul_div(liquidity, sqrt_b - sqrt_a, Q96)


# =============================================================================
# POSITION FORMULAS (current price plus range)
# =============================================================================

def get_liquidity_from_amount0(sqrt_price_x96: int, sqrt_pa_x96: int, sqrt_pb_x96: int,
                               amount0: int) -> int:
    """Liquidity provided by amount0 over [max(price, pa), pb].

    Returns 0 when the current price is at or above the upper bound, since
    the position then holds only token1.
    """
    low, high = _position_range(sqrt_price_x96, sqrt_pa_x96, sqrt_pb_x96)
    if sqrt_price_x96 >= high:
        return 0
    return liquidity_for_amount0(max(sqrt_price_x96, low), high, amount0)


def get_liquidity_from_amount1(sqrt_price_x96: int, sqrt_pa_x96: int, sqrt_pb_x96: int,
                               amount1: int) -> int:
    """Liquidity provided by amount1 over [pa, min(price, pb)].

    Returns 0 when the current price is at or below the lower bound, since
    the position then holds only token0.
    """
    low, high = _position_range(sqrt_price_x96, sqrt_pa_x96, sqrt_pb_x96)
    if sqrt_price_x96 <= low:
        return 0
    return liquidity_for_amount1(low, min(sqrt_price_x96, high), amount1)


def get_amount0_from_liquidity(sqrt_price_x96: int, sqrt_pa_x96: int, sqrt_pb_x96: int,
                               liquidity: int) -> int:
    """Token0 held by a position of the given liquidity at the current price."""
    low, high = _position_range(sqrt_price_x96, sqrt_pa_x96, sqrt_pb_x96)
    if sqrt_price_x96 >= high:
        return 0
    return amount0_for_liquidity(max(sqrt_price_x96, low), high, liquidity)


def get_amount1_from_liquidity(sqrt_price_x96: int, sqrt_pa_x96: int, sqrt_pb_x96: int,
                               liquidity: int) -> int:
    """Token1 held by a position of the given liquidity at the current price."""
    low, high = _position_range(sqrt_price_x96, sqrt_pa_x96, sqrt_pb_x96)
    if sqrt_price_x96 <= low:
        return 0
    return amount1_for_liquidity(low, min(sqrt_price_x96, high), liquidity)
