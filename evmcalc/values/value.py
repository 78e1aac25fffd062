"""
Value model shared by the parser, evaluator and formatter.

A Value is one of a closed set of frozen dataclasses. Consumers dispatch
with isinstance checks over every variant and raise TypeMismatchError for
the ones they do not accept.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


UINT256_CEILING = 2**256
UINT256_MAX = UINT256_CEILING - 1

ADDRESS_BYTES = 20


@dataclass(frozen=True)
class Uint:
    """Unsigned 256-bit integer.

    ``hex_width`` is a display hint: when set, the formatter renders the
    value as zero-padded hex of that many bytes (addresses use 20).
    """
    value: int
    hex_width: Optional[int] = None

    def __post_init__(self):
        if not 0 <= self.value <= UINT256_MAX:
            raise ValueError(f'Uint out of range: {self.value}')


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Bytes:
    value: bytes


@dataclass(frozen=True)
class Bool:
    value: bool


@dataclass(frozen=True)
class ListEntry:
    """One decoded field: parameter name, canonical ABI type, value."""
    name: str
    abi_type: str
    value: 'Value'


@dataclass(frozen=True)
class ListValue:
    entries: Tuple[ListEntry, ...] = field(default_factory=tuple)


Value = Union[Uint, Text, Bytes, Bool, ListValue]


def type_label(value: Value) -> str:
    """Return the user-facing name of a value's variant."""
    if isinstance(value, Uint):
        return 'address' if value.hex_width == ADDRESS_BYTES else 'uint256'
    if isinstance(value, Text):
        return 'string'
    if isinstance(value, Bytes):
        return 'bytes'
    if isinstance(value, Bool):
        return 'bool'
    if isinstance(value, ListValue):
        return 'list'
    raise TypeError(f'Not a value: {value!r}')


def address(value: int) -> Uint:
    """Build an address-flavoured Uint."""
    return Uint(value, hex_width=ADDRESS_BYTES)
