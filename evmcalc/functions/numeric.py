"""
Integer root built-ins.
"""

from typing import List

from ..arith import iroot, isqrt
from ..values import Uint, Value
from .base import Argument, BuiltinFunction, ParamKind


class Sqrt(BuiltinFunction):
    _id = 'sqrt'
    _inputs = (('x', ParamKind.UINT),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return Uint(isqrt(self.uint_arg(args, 0)))


class Root(BuiltinFunction):
    _id = 'root'
    _inputs = (('x', ParamKind.UINT), ('n', ParamKind.UINT))

    def call(self, ctx, args: List[Argument]) -> Value:
        return Uint(iroot(self.uint_arg(args, 0), self.uint_arg(args, 1)))
