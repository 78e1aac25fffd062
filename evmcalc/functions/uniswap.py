"""
Uniswap V3 built-ins: tick/price conversions and liquidity amounts.
"""

from typing import List

from ..display import MAX_UNIT_DECIMALS, format_fraction
from ..errors import OutOfRangeError
from ..uniswap import (
    get_amount0_from_liquidity,
    get_amount1_from_liquidity,
    get_liquidity_from_amount0,
    get_liquidity_from_amount1,
    get_price_at_tick,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
)
from ..values import Text, Uint, Value
from .base import Argument, BuiltinFunction, ParamKind, signed_result


class GetSqrtRatioFromTick(BuiltinFunction):
    _id = 'get_sqrt_ratio_from_tick'
    _inputs = (('tick', ParamKind.INT),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return Uint(get_sqrt_ratio_at_tick(args[0]))


class GetTickFromSqrtRatio(BuiltinFunction):
    _id = 'get_tick_from_sqrt_ratio'
    _inputs = (('sqrt_price_x96', ParamKind.UINT),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return signed_result(get_tick_at_sqrt_ratio(self.uint_arg(args, 0)))


class GetPriceFromTick(BuiltinFunction):
    """
    Human-readable price at a tick.

    Renders "1 token0 : <p> token1", or the reciprocal quote
    "1 token1 : <p> token0" when in_token1 is set.
    """
    _id = 'get_price_from_tick'
    _inputs = (
        ('tick', ParamKind.INT),
        ('in_token1', ParamKind.ANY),
        ('decimals0', ParamKind.UINT),
        ('decimals1', ParamKind.UINT),
    )

    def call(self, ctx, args: List[Argument]) -> Value:
        tick = args[0]
        in_token1 = self.flag_arg(args, 1)
        decimals0 = self.uint_arg(args, 2)
        decimals1 = self.uint_arg(args, 3)
        for decimals in (decimals0, decimals1):
            if decimals > MAX_UNIT_DECIMALS:
                raise OutOfRangeError(
                    f'{decimals} decimals exceeds the maximum of {MAX_UNIT_DECIMALS}'
                )

        price = get_price_at_tick(tick, in_token1, decimals0, decimals1)
        digits = ctx.config.price_precision
        rendered = format_fraction(price, digits)
        if (price * 10**digits).denominator != 1:
            ctx.diagnostics.info_price_rounded(digits)

        if in_token1:
            return Text(f'1 token1 : {rendered} token0')
        return Text(f'1 token0 : {rendered} token1')


class _PositionFunction(BuiltinFunction):
    """Shared shape of the (price, pa, pb, quantity) liquidity helpers."""

    def call(self, ctx, args: List[Argument]) -> Value:
        return Uint(self.compute(*(self.uint_arg(args, i) for i in range(4))))


def _position_inputs(quantity: str):
    return (
        ('sqrt_price_x96', ParamKind.UINT),
        ('sqrt_pa_x96', ParamKind.UINT),
        ('sqrt_pb_x96', ParamKind.UINT),
        (quantity, ParamKind.UINT),
    )


class GetLiquidityFromAmount0(_PositionFunction):
    _id = 'get_liquidity_from_amount0'
    _inputs = _position_inputs('amount0')
    compute = staticmethod(get_liquidity_from_amount0)


class GetLiquidityFromAmount1(_PositionFunction):
    _id = 'get_liquidity_from_amount1'
    _inputs = _position_inputs('amount1')
    compute = staticmethod(get_liquidity_from_amount1)


class GetAmount0FromLiquidity(_PositionFunction):
    _id = 'get_amount0_from_liquidity'
    _inputs = _position_inputs('liquidity')
    compute = staticmethod(get_amount0_from_liquidity)


class GetAmount1FromLiquidity(_PositionFunction):
    _id = 'get_amount1_from_liquidity'
    _inputs = _position_inputs('liquidity')
    compute = staticmethod(get_amount1_from_liquidity)
