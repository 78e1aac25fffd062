"""
Arithmetic engine: checked/wrapping 256-bit operations and integer roots.
"""

from .uint256 import (
    add,
    sub,
    mul,
    div,
    mod,
    power,
    shl,
    shr,
    negate,
    apply_binary,
    to_signed,
    BINARY_OPERATIONS,
)
from .roots import isqrt, iroot

__all__ = [
    'add',
    'sub',
    'mul',
    'div',
    'mod',
    'power',
    'shl',
    'shr',
    'negate',
    'apply_binary',
    'to_signed',
    'BINARY_OPERATIONS',
    'isqrt',
    'iroot',
]
