"""
Uniswap V3 math: tick/price conversions and liquidity amounts.
"""

from .tick_math import (
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    Q96,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    get_price_at_tick,
    price_from_sqrt_ratio,
)
from .liquidity_math import (
    UINT128_MAX,
    mul_div,
    get_liquidity_from_amount0,
    get_liquidity_from_amount1,
    get_amount0_from_liquidity,
    get_amount1_from_liquidity,
)

__all__ = [
    'MIN_TICK',
    'MAX_TICK',
    'MIN_SQRT_RATIO',
    'MAX_SQRT_RATIO',
    'Q96',
    'get_sqrt_ratio_at_tick',
    'get_tick_at_sqrt_ratio',
    'get_price_at_tick',
    'price_from_sqrt_ratio',
    'UINT128_MAX',
    'mul_div',
    'get_liquidity_from_amount0',
    'get_liquidity_from_amount1',
    'get_amount0_from_liquidity',
    'get_amount1_from_liquidity',
]
