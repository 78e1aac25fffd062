"""
Formatter module: renders values to display text.
"""

from .formatter import (
    MAX_UNIT_DECIMALS,
    format_value,
    format_units,
    format_ether,
    format_fraction,
)

__all__ = [
    'MAX_UNIT_DECIMALS',
    'format_value',
    'format_units',
    'format_ether',
    'format_fraction',
]
