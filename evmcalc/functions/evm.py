"""
EVM and crypto built-ins: addresses, hashing, base64 and ABI helpers.
"""

import base64
import re
from typing import List, Sequence

from ..abi import (
    calldata_bytes,
    debug_calldata,
    decode_calldata,
    encode_arguments,
    encode_with_selector,
    keccak256,
    parse_signature,
    selector,
    split_arguments,
    to_checksum_address,
)
from ..abi.codec import RawArgument
from ..errors import InvalidLiteralError, OutOfRangeError, TypeMismatchError
from ..values import ADDRESS_BYTES, Bytes, Text, Uint, Value, address, type_label
from .base import Argument, BuiltinFunction, ParamKind


ADDRESS_LIMIT = 2**(8 * ADDRESS_BYTES)
_HEX_DIGITS = re.compile(r'[0-9a-fA-F]+')


def _address_int(value: Value, name: str) -> int:
    if isinstance(value, Uint):
        number = value.value
    elif isinstance(value, Text):
        digits = value.value.strip()
        if digits[:2] in ('0x', '0X'):
            digits = digits[2:]
        if not _HEX_DIGITS.fullmatch(digits):
            raise InvalidLiteralError(f"{name}: '{value.value}' is not a hex address")
        number = int(digits, 16)
    else:
        raise TypeMismatchError(f'{name}: expected a number or hex text, got {type_label(value)}')
    if number >= ADDRESS_LIMIT:
        raise OutOfRangeError(f'{name}: {number} does not fit in 160 bits')
    return number


class Address(BuiltinFunction):
    _id = 'address'
    _inputs = (('n', ParamKind.ANY),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return address(_address_int(args[0], self._id))


class Checksum(BuiltinFunction):
    """EIP-55 mixed-case rendering of an address."""
    _id = 'checksum'
    _inputs = (('addr', ParamKind.ANY),)

    def call(self, ctx, args: List[Argument]) -> Value:
        value = args[0]
        if isinstance(value, Text):
            return Text(to_checksum_address(value.value))
        number = _address_int(value, self._id)
        return Text(to_checksum_address(format(number, '040x')))


class Selector(BuiltinFunction):
    _id = 'selector'
    _inputs = (('sig', ParamKind.TEXT),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return Bytes(selector(parse_signature(self.text_arg(args, 0))))


class Keccak256(BuiltinFunction):
    """Hash text (as UTF-8), bytes, or a number (as its 32-byte word)."""
    _id = 'keccak256'
    _inputs = (('data', ParamKind.ANY),)

    def call(self, ctx, args: List[Argument]) -> Value:
        value = args[0]
        if isinstance(value, Text):
            data = value.value.encode('utf-8')
        elif isinstance(value, Bytes):
            data = value.value
        elif isinstance(value, Uint):
            data = value.value.to_bytes(32, 'big')
        else:
            raise self._mismatch(0, 'text, bytes or a number', value)
        return Bytes(keccak256(data))


class B64Encode(BuiltinFunction):
    _id = 'b64_encode'
    _inputs = (('data', ParamKind.ANY),)

    def call(self, ctx, args: List[Argument]) -> Value:
        value = args[0]
        if isinstance(value, Text):
            data = value.value.encode('utf-8')
        elif isinstance(value, Bytes):
            data = value.value
        else:
            raise self._mismatch(0, 'text or bytes', value)
        return Text(base64.b64encode(data).decode('ascii'))


class B64Decode(BuiltinFunction):
    """Decode base64; UTF-8 payloads come back as text, anything else as bytes."""
    _id = 'b64_decode'
    _inputs = (('text', ParamKind.TEXT),)

    def call(self, ctx, args: List[Argument]) -> Value:
        text = self.text_arg(args, 0)
        try:
            data = base64.b64decode(text.strip(), validate=True)
        except ValueError:
            raise TypeMismatchError(f"b64_decode: '{text}' is not valid base64")
        try:
            return Text(data.decode('utf-8'))
        except UnicodeDecodeError:
            return Bytes(data)


class AbiEncode(BuiltinFunction):
    """
    abi_encode(sig, args...)

    The arguments are either separate expressions or a single string
    holding comma-separated literal values.
    """
    _id = 'abi_encode'
    _inputs = (('sig', ParamKind.TEXT),)

    def accepted_arities(self):
        return 1, None

    def raw_arguments(self, args: List[Argument]) -> Sequence[RawArgument]:
        rest = args[1:]
        if len(rest) == 1 and isinstance(rest[0], Text):
            return split_arguments(rest[0].value)
        return rest

    def call(self, ctx, args: List[Argument]) -> Value:
        signature = parse_signature(self.text_arg(args, 0))
        return Bytes(encode_arguments(signature, self.raw_arguments(args)))


class AbiEncodeWithSelector(AbiEncode):
    _id = 'abi_encode_with_selector'

    def call(self, ctx, args: List[Argument]) -> Value:
        signature = parse_signature(self.text_arg(args, 0))
        return Bytes(encode_with_selector(signature, self.raw_arguments(args)))


class AbiDecode(BuiltinFunction):
    _id = 'abi_decode'
    _inputs = (('sig', ParamKind.TEXT), ('calldata', ParamKind.ANY))

    def call(self, ctx, args: List[Argument]) -> Value:
        signature = parse_signature(self.text_arg(args, 0))
        return decode_calldata(signature, calldata_bytes(args[1]))


class Debug(BuiltinFunction):
    """Split calldata into its selector and 32-byte words."""
    _id = 'debug'
    _inputs = (('calldata', ParamKind.ANY),)

    def call(self, ctx, args: List[Argument]) -> Value:
        return Text('\n'.join(debug_calldata(calldata_bytes(args[0]))))
