"""
Keccak-256 hashing, hex helpers and EIP-55 address checksums.
"""

import re

from Crypto.Hash import keccak

from ..errors import InvalidLiteralError


HEX_ADDRESS_PATTERN = re.compile(r'^(0x)?([0-9a-fA-F]{40})$')


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest (the pre-NIST padding Ethereum uses)."""
    return keccak.new(digest_bits=256, data=data).digest()


def hex_to_bytes(text: str) -> bytes:
    """Decode ``0x``-prefixed (or bare) hex text into bytes.

    Raises:
        ValueError: if the text is not an even-length hex string.
    """
    digits = text.strip()
    if digits[:2] in ('0x', '0X'):
        digits = digits[2:]
    if len(digits) % 2:
        raise ValueError(f'odd-length hex string: {text!r}')
    return bytes.fromhex(digits)


def to_hex(data: bytes) -> str:
    return '0x' + data.hex()


def to_checksum_address(text: str) -> str:
    """Apply EIP-55 mixed-case encoding to a 20-byte hex address.

    The lowercase hex digits are hashed as ASCII; each letter whose
    corresponding hash nibble is 8 or more is uppercased.

    Raises:
        InvalidLiteralError: if the text is not 40 hex digits.
    """
    match = HEX_ADDRESS_PATTERN.match(text.strip())
    if not match:
        raise InvalidLiteralError(f"'{text}' is not a 20-byte hex address")
    lowered = match.group(2).lower()
    digest = keccak256(lowered.encode('ascii')).hex()
    chars = [
        ch.upper() if int(digest[i], 16) >= 8 else ch
        for i, ch in enumerate(lowered)
    ]
    return '0x' + ''.join(chars)
