"""
Built-in function registry.

This module provides the built-in function classes and the dispatch table
the evaluator resolves calls against.
"""

from .base import (
    ParamKind,
    Argument,
    BuiltinFunction,
    signed_from_value,
    signed_result,
)
from .registry import DISPATCH_TABLE, lookup, function_names

__all__ = [
    'ParamKind',
    'Argument',
    'BuiltinFunction',
    'signed_from_value',
    'signed_result',
    'DISPATCH_TABLE',
    'lookup',
    'function_names',
]
