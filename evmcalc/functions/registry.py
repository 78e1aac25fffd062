"""
Static table of built-in functions, keyed by the name users type.
"""

from typing import Dict, List

from ..errors import UnknownFunctionError
from .base import BuiltinFunction
from .clock import Unix
from .evm import (
    AbiDecode,
    AbiEncode,
    AbiEncodeWithSelector,
    Address,
    B64Decode,
    B64Encode,
    Checksum,
    Debug,
    Keccak256,
    Selector,
)
from .formatting import FormatEther, FormatUnits
from .numeric import Root, Sqrt
from .strings import Count, Len, Lower, Upper
from .uniswap import (
    GetAmount0FromLiquidity,
    GetAmount1FromLiquidity,
    GetLiquidityFromAmount0,
    GetLiquidityFromAmount1,
    GetPriceFromTick,
    GetSqrtRatioFromTick,
    GetTickFromSqrtRatio,
)


_BUILTINS = (
    # numeric
    Sqrt(),
    Root(),
    # evm / crypto
    Address(),
    Checksum(),
    Selector(),
    Keccak256(),
    B64Encode(),
    B64Decode(),
    AbiEncode(),
    AbiEncodeWithSelector(),
    AbiDecode(),
    Debug(),
    # string
    Upper(),
    Lower(),
    Len(),
    Count(),
    # time
    Unix(),
    # uniswap v3
    GetSqrtRatioFromTick(),
    GetTickFromSqrtRatio(),
    GetPriceFromTick(),
    GetLiquidityFromAmount0(),
    GetLiquidityFromAmount1(),
    GetAmount0FromLiquidity(),
    GetAmount1FromLiquidity(),
    # formatting
    FormatEther(),
    FormatUnits(),
)

DISPATCH_TABLE: Dict[str, BuiltinFunction] = {fn._id: fn for fn in _BUILTINS}


def lookup(name: str) -> BuiltinFunction:
    """Return the built-in registered under ``name``.

    Raises:
        UnknownFunctionError: if no built-in has that name.
    """
    try:
        return DISPATCH_TABLE[name]
    except KeyError:
        raise UnknownFunctionError(f"unknown function '{name}'") from None


def function_names() -> List[str]:
    return sorted(DISPATCH_TABLE)
