"""
Fixed-point formatting built-ins.
"""

from typing import List

from ..display import format_ether, format_units
from ..values import Text, Value
from .base import Argument, BuiltinFunction, ParamKind


class FormatEther(BuiltinFunction):
    _id = 'format_ether'
    _inputs = (('x', ParamKind.UINT),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return Text(format_ether(self.uint_arg(args, 0)))


class FormatUnits(BuiltinFunction):
    _id = 'format_units'
    _inputs = (('x', ParamKind.UINT), ('decimals', ParamKind.UINT))

    def call(self, ctx, args: List[Argument]) -> Value:
        return Text(format_units(self.uint_arg(args, 0), self.uint_arg(args, 1)))
