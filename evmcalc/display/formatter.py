"""
Rendering of values to display strings.
"""

from fractions import Fraction

from ..errors import OutOfRangeError
from ..values import Bool, Bytes, ListValue, Text, Uint, Value


# 10**77 is the largest power of ten below 2**256
MAX_UNIT_DECIMALS = 77

WORD_BYTES = 32


def format_value(value: Value, full_words: bool = False) -> str:
    """Render a value the way the host displays it.

    With ``full_words`` every Uint, addresses included, is shown as a
    complete 32-byte EVM word.
    """
    if isinstance(value, Uint):
        if full_words:
            return '0x' + format(value.value, f'0{WORD_BYTES * 2}x')
        if value.hex_width is not None:
            return '0x' + format(value.value, f'0{value.hex_width * 2}x')
        return str(value.value)
    if isinstance(value, Bytes):
        return '0x' + value.value.hex()
    if isinstance(value, Text):
        return value.value
    if isinstance(value, Bool):
        return 'true' if value.value else 'false'
    if isinstance(value, ListValue):
        return '\n'.join(
            f'{entry.name} ({entry.abi_type}): {format_value(entry.value, full_words)}'
            for entry in value.entries
        )
    raise TypeError(f'Cannot format {value!r}')


def format_units(amount: int, decimals: int) -> str:
    """Render amount / 10**decimals as '<integer>.<decimals digits>'.

    The fraction always has exactly ``decimals`` digits; with 0 decimals
    only the integer part is returned.
    """
    if decimals > MAX_UNIT_DECIMALS:
        raise OutOfRangeError(f'{decimals} decimals exceeds the maximum of {MAX_UNIT_DECIMALS}')
    if decimals == 0:
        return str(amount)
    whole, fraction = divmod(amount, 10**decimals)
    return f'{whole}.{fraction:0{decimals}d}'


def format_ether(amount: int) -> str:
    return format_units(amount, 18)


def format_fraction(value: Fraction, digits: int) -> str:
    """Render a non-negative rational with ``digits`` fraction digits, half-up."""
    scaled = value * 10**digits
    rounded = int(scaled + Fraction(1, 2))
    return format_units(rounded, digits)
