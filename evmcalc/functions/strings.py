"""
String built-ins.
"""

from typing import List

from ..errors import TypeMismatchError
from ..values import Bytes, Text, Uint, Value
from .base import Argument, BuiltinFunction, ParamKind


class Upper(BuiltinFunction):
    _id = 'upper'
    _inputs = (('s', ParamKind.TEXT),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return Text(self.text_arg(args, 0).upper())


class Lower(BuiltinFunction):
    _id = 'lower'
    _inputs = (('s', ParamKind.TEXT),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return Text(self.text_arg(args, 0).lower())


class Len(BuiltinFunction):
    """Character count of text, or byte count of bytes."""
    _id = 'len'
    _inputs = (('s', ParamKind.ANY),)

    def call(self, ctx, args: List[Argument]) -> Value:
        value = args[0]
        if isinstance(value, Bytes):
            return Uint(len(value.value))
        return Uint(len(self.text_arg(args, 0)))


class Count(BuiltinFunction):
    """Non-overlapping occurrences of sub in s."""
    _id = 'count'
    _inputs = (('s', ParamKind.TEXT), ('sub', ParamKind.TEXT))

    def call(self, ctx, args: List[Argument]) -> Value:
        text = self.text_arg(args, 0)
        sub = self.text_arg(args, 1)
        if not sub:
            raise TypeMismatchError('count: sub must not be empty')
        return Uint(text.count(sub))
