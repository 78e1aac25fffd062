"""
Static ABI encoding and decoding.

Each supported parameter occupies exactly one 32-byte big-endian word:
integers, bools and addresses are left-padded, signed integers use two's
complement, and fixed bytesN values are right-padded.
"""

from typing import List, Sequence, Union

from ..errors import (
    ExpressionSyntaxError,
    AbiMalformedCalldataError,
    AbiSelectorMismatchError,
    ArityMismatchError,
    InvalidLiteralError,
    TypeMismatchError,
)
from ..lexer import Lexer, TokenType
from ..parser import parse_number_literal
from ..values import (
    Bool,
    Bytes,
    ListEntry,
    ListValue,
    Text,
    Uint,
    Value,
    address,
    type_label,
)
from .hashing import hex_to_bytes, to_hex
from .signature import Signature, StaticType, require_function_name, selector, static_type


WORD_SIZE = 32
SELECTOR_SIZE = 4

# Raw argument values are either text pieces from a comma-separated
# argument string or values produced by evaluating expressions.
RawArgument = Union[str, Value]


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

def split_arguments(text: str) -> List[str]:
    """Split a comma-separated argument string, dropping surrounding quotes."""
    if not text.strip():
        return []
    pieces = []
    for piece in text.split(','):
        piece = piece.strip()
        if len(piece) >= 2 and piece[0] == piece[-1] and piece[0] in '"\'':
            piece = piece[1:-1]
        pieces.append(piece)
    return pieces


def parse_integer_text(text: str) -> int:
    """Parse a (possibly negative) numeric literal written as text."""
    try:
        tokens = Lexer(text.strip()).tokenize()
    except ExpressionSyntaxError as e:
        raise InvalidLiteralError(f"'{text}' is not a number") from e
    negative = bool(tokens) and tokens[0].type == TokenType.MINUS
    if negative:
        tokens = tokens[1:]
    numeric = (TokenType.NUMBER, TokenType.HEX_NUMBER, TokenType.BINARY_NUMBER)
    if len(tokens) != 2 or tokens[0].type not in numeric:
        raise InvalidLiteralError(f"'{text}' is not a number")
    literal = parse_number_literal(tokens[0])
    value = literal.value.value
    return -value if negative else value


# =============================================================================
# ENCODING
# =============================================================================

def _encode_uint(value: int, bits: int, abi_type: str) -> bytes:
    if not 0 <= value < 2**bits:
        raise InvalidLiteralError(f'{value} is out of range for {abi_type}')
    return value.to_bytes(WORD_SIZE, 'big')


def _encode_int(value: int, bits: int, abi_type: str) -> bytes:
    bound = 2**(bits - 1)
    if not -bound <= value < bound:
        raise InvalidLiteralError(f'{value} is out of range for {abi_type}')
    return (value % 2**256).to_bytes(WORD_SIZE, 'big')


def _argument_integer(arg: RawArgument, abi_type: str, signed: bool) -> int:
    if isinstance(arg, str):
        return parse_integer_text(arg)
    if isinstance(arg, Uint):
        value = arg.value
        if signed and value >= 2**255:
            return value - 2**256
        return value
    if isinstance(arg, Bool):
        return int(arg.value)
    if isinstance(arg, Text):
        return parse_integer_text(arg.value)
    raise TypeMismatchError(f'cannot encode {type_label(arg)} as {abi_type}')


def _argument_bytes(arg: RawArgument, size: int, abi_type: str) -> bytes:
    if isinstance(arg, (str, Text)):
        text = arg if isinstance(arg, str) else arg.value
        try:
            data = hex_to_bytes(text)
        except ValueError:
            raise InvalidLiteralError(f"'{text}' is not hex data for {abi_type}")
    elif isinstance(arg, Bytes):
        data = arg.value
    elif isinstance(arg, Uint):
        if arg.value >= 2**(8 * size):
            raise InvalidLiteralError(f'{arg.value} does not fit in {abi_type}')
        data = arg.value.to_bytes(size, 'big')
    else:
        raise TypeMismatchError(f'cannot encode {type_label(arg)} as {abi_type}')
    if len(data) > size:
        raise InvalidLiteralError(f'{len(data)} bytes do not fit in {abi_type}')
    return data


def _argument_bool(arg: RawArgument) -> bool:
    if isinstance(arg, Bool):
        return arg.value
    if isinstance(arg, (str, Text)):
        text = arg if isinstance(arg, str) else arg.value
        lowered = text.strip().lower()
        if lowered in ('true', '1'):
            return True
        if lowered in ('false', '0'):
            return False
        raise InvalidLiteralError(f"'{text}' is not a bool")
    if isinstance(arg, Uint) and arg.value in (0, 1):
        return bool(arg.value)
    raise InvalidLiteralError(f"{type_label(arg)} is not a bool")


def encode_word(abi_type: str, arg: RawArgument) -> bytes:
    """Encode a single argument into its 32-byte word."""
    described: StaticType = static_type(abi_type)
    if described.kind == 'uint':
        return _encode_uint(_argument_integer(arg, abi_type, False), described.size, abi_type)
    if described.kind == 'int':
        return _encode_int(_argument_integer(arg, abi_type, True), described.size, abi_type)
    if described.kind == 'address':
        if isinstance(arg, (str, Text)):
            data = _argument_bytes(arg, described.size, abi_type)
            return int.from_bytes(data, 'big').to_bytes(WORD_SIZE, 'big')
        return _encode_uint(_argument_integer(arg, abi_type, False), 160, abi_type)
    if described.kind == 'bool':
        return _encode_uint(int(_argument_bool(arg)), 8, abi_type)
    data = _argument_bytes(arg, described.size, abi_type)
    return data.ljust(WORD_SIZE, b'\x00')


def encode_arguments(signature: Signature, args: Sequence[RawArgument]) -> bytes:
    """Encode arguments in parameter order, one word per parameter.

    Raises:
        ArityMismatchError: if the number of arguments differs from the
            number of parameters.
    """
    if len(args) != len(signature.params):
        raise ArityMismatchError(
            f'{signature.canonical} takes {len(signature.params)} argument(s), '
            f'got {len(args)}'
        )
    return b''.join(encode_word(p.abi_type, arg) for p, arg in zip(signature.params, args))


def encode_with_selector(signature: Signature, args: Sequence[RawArgument]) -> bytes:
    return selector(signature) + encode_arguments(signature, args)


# =============================================================================
# DECODING
# =============================================================================

def calldata_bytes(arg: Value) -> bytes:
    """Coerce a calldata argument (hex text or bytes) to raw bytes."""
    if isinstance(arg, Bytes):
        return arg.value
    if isinstance(arg, Text):
        try:
            return hex_to_bytes(arg.value)
        except ValueError:
            raise AbiMalformedCalldataError(f"calldata '{arg.value}' is not hex")
    raise TypeMismatchError(f'calldata must be hex text or bytes, got {type_label(arg)}')


def decode_word(abi_type: str, word: bytes) -> Value:
    """Decode one 32-byte word, rejecting dirty padding."""
    described = static_type(abi_type)
    raw = int.from_bytes(word, 'big')
    if described.kind == 'uint':
        if raw >= 2**described.size:
            raise AbiMalformedCalldataError(f'word 0x{word.hex()} overflows {abi_type}')
        return Uint(raw)
    if described.kind == 'int':
        signed = raw - 2**256 if raw >= 2**255 else raw
        bound = 2**(described.size - 1)
        if not -bound <= signed < bound:
            raise AbiMalformedCalldataError(f'word 0x{word.hex()} overflows {abi_type}')
        return Uint(signed) if signed >= 0 else Text(str(signed))
    if described.kind == 'address':
        if raw >= 2**160:
            raise AbiMalformedCalldataError(f'word 0x{word.hex()} is not a clean address')
        return address(raw)
    if described.kind == 'bool':
        if raw not in (0, 1):
            raise AbiMalformedCalldataError(f'word 0x{word.hex()} is not a bool')
        return Bool(bool(raw))
    if any(word[described.size:]):
        raise AbiMalformedCalldataError(f'word 0x{word.hex()} has dirty {abi_type} padding')
    return Bytes(word[:described.size])


def decode_arguments(signature: Signature, data: bytes) -> ListValue:
    """Decode the words following a selector into a ListValue."""
    expected = WORD_SIZE * len(signature.params)
    if len(data) != expected:
        raise AbiMalformedCalldataError(
            f'{signature.canonical} expects {expected} bytes of arguments, got {len(data)}'
        )
    entries = []
    for i, (param, name) in enumerate(zip(signature.params, signature.param_names())):
        word = data[i * WORD_SIZE:(i + 1) * WORD_SIZE]
        entries.append(ListEntry(name=name, abi_type=param.abi_type, value=decode_word(param.abi_type, word)))
    return ListValue(entries=tuple(entries))


def decode_calldata(signature: Signature, calldata: bytes) -> ListValue:
    """Verify the selector and decode the remaining words.

    Raises:
        AbiMalformedCalldataError: if the calldata is shorter than a
            selector or its length does not match the parameters.
        AbiSelectorMismatchError: if the leading 4 bytes differ from the
            signature's selector.
    """
    require_function_name(signature)
    if len(calldata) < SELECTOR_SIZE:
        raise AbiMalformedCalldataError(
            f'calldata is {len(calldata)} bytes, shorter than the 4-byte selector'
        )
    expected = selector(signature)
    actual = calldata[:SELECTOR_SIZE]
    if actual != expected:
        raise AbiSelectorMismatchError(
            f'calldata selector {to_hex(actual)} does not match '
            f'{signature.canonical} ({to_hex(expected)})'
        )
    return decode_arguments(signature, calldata[SELECTOR_SIZE:])


def debug_calldata(calldata: bytes) -> List[str]:
    """Split calldata into its selector and 32-byte words, one hex line each."""
    if len(calldata) < SELECTOR_SIZE:
        raise AbiMalformedCalldataError(
            f'calldata is {len(calldata)} bytes, shorter than the 4-byte selector'
        )
    body = calldata[SELECTOR_SIZE:]
    if len(body) % WORD_SIZE:
        raise AbiMalformedCalldataError(
            f'{len(body)} argument bytes is not a whole number of 32-byte words'
        )
    lines = [to_hex(calldata[:SELECTOR_SIZE])]
    for i in range(len(body) // WORD_SIZE):
        lines.append(f'[{i}] {to_hex(body[i * WORD_SIZE:(i + 1) * WORD_SIZE])}')
    return lines
