"""
Value model for the evaluator.

This module provides the tagged Value variants and the unit tables used
by unit conversions.
"""

from .value import (
    Value,
    Uint,
    Text,
    Bytes,
    Bool,
    ListEntry,
    ListValue,
    UINT256_CEILING,
    UINT256_MAX,
    ADDRESS_BYTES,
    address,
    type_label,
)
from .units import (
    Unit,
    UNITS,
    VALUE_FAMILY,
    TIME_FAMILY,
    lookup_unit,
    is_unit,
    base_unit,
)

__all__ = [
    'Value',
    'Uint',
    'Text',
    'Bytes',
    'Bool',
    'ListEntry',
    'ListValue',
    'UINT256_CEILING',
    'UINT256_MAX',
    'ADDRESS_BYTES',
    'address',
    'type_label',
    'Unit',
    'UNITS',
    'VALUE_FAMILY',
    'TIME_FAMILY',
    'lookup_unit',
    'is_unit',
    'base_unit',
]
