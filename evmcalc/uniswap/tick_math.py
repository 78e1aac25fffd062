"""
Tick <-> sqrtPriceX96 conversions with on-chain precision.

get_sqrt_ratio_at_tick reproduces TickMath.getSqrtRatioAtTick bit for bit:
|tick| is decomposed into bits, each set bit multiplies a Q128 ratio by a
precomputed sqrt(1.0001)^(-2^i) constant, positive ticks are inverted and
the result is rounded up from Q128 to Q96.
"""

from fractions import Fraction

from ..errors import OutOfRangeError
from ..values import UINT256_MAX


MIN_TICK = -887272
MAX_TICK = 887272

MIN_SQRT_RATIO = 4295128739
MAX_SQRT_RATIO = 1461446703485210103287273052203988822378723970342

Q96 = 2**96
Q192 = 2**192

# Q128 multipliers for each bit of |tick|, starting at bit 1 (bit 0 seeds
# the ratio directly).
_TICK_BIT_MULTIPLIERS = (
    (0x2, 0xfff97272373d413259a46990580e213a),
    (0x4, 0xfff2e50f5f656932ef12357cf3c7fdcc),
    (0x8, 0xffe5caca7e10e4e61c3624eaa0941cd0),
    (0x10, 0xffcb9843d60f6159c9db58835c926644),
    (0x20, 0xff973b41fa98c081472e6896dfb254c0),
    (0x40, 0xff2ea16466c96a3843ec78b326b52861),
    (0x80, 0xfe5dee046a99a2a811c461f1969c3053),
    (0x100, 0xfcbe86c7900a88aedcffc83b479aa3a4),
    (0x200, 0xf987a7253ac413176f2b074cf7815e54),
    (0x400, 0xf3392b0822b70005940c7a398e4b70f3),
    (0x800, 0xe7159475a2c29b7443b29c7fa6e889d9),
    (0x1000, 0xd097f3bdfd2022b8845ad8f792aa5825),
    (0x2000, 0xa9f746462d870fdf8a65dc1f90e061e5),
    (0x4000, 0x70d869a156d2a1b890bb3df62baf32f7),
    (0x8000, 0x31be135f97d08fd981231505542fcfa6),
    (0x10000, 0x9aa508b5b7a84e1c677de54f3e99bc9),
    (0x20000, 0x5d6af8dedb81196699c329225ee604),
    (0x40000, 0x2216e584f5fa1ea926041bedfe98),
    (0x80000, 0x48a170391f7dc42444e8fa2),
)


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """Return sqrt(1.0001^tick) * 2^96 as TickMath computes it.

    Raises:
        OutOfRangeError: if tick is outside [MIN_TICK, MAX_TICK].
    """
    abs_tick = abs(tick)
    if abs_tick > MAX_TICK:
        raise OutOfRangeError(f'tick {tick} is outside [{MIN_TICK}, {MAX_TICK}]')

    if abs_tick & 0x1:
        ratio = 0xfffcb933bd6fad37aa2d162d1a594001
    else:
        ratio = 0x100000000000000000000000000000000
    for bit, multiplier in _TICK_BIT_MULTIPLIERS:
        if abs_tick & bit:
            ratio = (ratio * multiplier) >> 128

    if tick > 0:
        ratio = UINT256_MAX // ratio

    # Q128.128 -> Q64.96, rounding up so the result is never below the
    # true price for the tick.
    return (ratio >> 32) + (0 if ratio % (1 << 32) == 0 else 1)


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """Return the greatest tick whose sqrt ratio is <= sqrt_price_x96.

    Binary search over the tick range against get_sqrt_ratio_at_tick, so
    that get_tick_at_sqrt_ratio(get_sqrt_ratio_at_tick(t)) == t exactly.

    Raises:
        OutOfRangeError: if the input is outside [MIN_SQRT_RATIO, MAX_SQRT_RATIO].
    """
    if not MIN_SQRT_RATIO <= sqrt_price_x96 <= MAX_SQRT_RATIO:
        raise OutOfRangeError(
            f'sqrt price {sqrt_price_x96} is outside [{MIN_SQRT_RATIO}, {MAX_SQRT_RATIO}]'
        )
    low, high = MIN_TICK, MAX_TICK
    while low < high:
        mid = (low + high + 1) // 2
        if get_sqrt_ratio_at_tick(mid) <= sqrt_price_x96:
            low = mid
        else:
            high = mid - 1
    return low


def price_from_sqrt_ratio(sqrt_price_x96: int, decimals0: int, decimals1: int) -> Fraction:
    """Human price of token0 quoted in token1, adjusted for token decimals."""
    raw = Fraction(sqrt_price_x96 * sqrt_price_x96, Q192)
    return raw * Fraction(10) ** (decimals0 - decimals1)


def get_price_at_tick(tick: int, in_token1: bool, decimals0: int, decimals1: int) -> Fraction:
    """Exact price at a tick; token1 per token0, or its reciprocal if in_token1."""
    price = price_from_sqrt_ratio(get_sqrt_ratio_at_tick(tick), decimals0, decimals1)
    return 1 / price if in_token1 else price
