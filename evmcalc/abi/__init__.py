"""
ABI codec: keccak hashing, checksums, signatures and static encoding.
"""

from .hashing import keccak256, hex_to_bytes, to_hex, to_checksum_address
from .signature import (
    AbiParam,
    Signature,
    StaticType,
    parse_signature,
    parse_type,
    static_type,
    selector,
)
from .codec import (
    WORD_SIZE,
    SELECTOR_SIZE,
    split_arguments,
    parse_integer_text,
    encode_word,
    encode_arguments,
    encode_with_selector,
    calldata_bytes,
    decode_word,
    decode_arguments,
    decode_calldata,
    debug_calldata,
)

__all__ = [
    'keccak256',
    'hex_to_bytes',
    'to_hex',
    'to_checksum_address',
    'AbiParam',
    'Signature',
    'StaticType',
    'parse_signature',
    'parse_type',
    'static_type',
    'selector',
    'WORD_SIZE',
    'SELECTOR_SIZE',
    'split_arguments',
    'parse_integer_text',
    'encode_word',
    'encode_arguments',
    'encode_with_selector',
    'calldata_bytes',
    'decode_word',
    'decode_arguments',
    'decode_calldata',
    'debug_calldata',
]
