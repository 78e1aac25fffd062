"""
Function signature parsing and selector computation.

Accepts human-written signatures such as ``transfer(address to, uint256)``,
bare parameter lists ``(address,uint256)`` or ``address,uint256``, nested
tuples and array suffixes. Types are canonicalized (``uint`` becomes
``uint256``, names and data locations are dropped) so that selectors match
the ones solc computes.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..errors import InvalidLiteralError, TypeMismatchError
from .hashing import keccak256


IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')
ARRAY_SUFFIX_PATTERN = re.compile(r'^(\[[0-9]*\])*$')
SIZED_TYPE_PATTERN = re.compile(r'^(uint|int|bytes)([0-9]+)$')

# Words that may follow a type in a Solidity-style parameter list
IGNORED_QUALIFIERS = {'memory', 'calldata', 'storage', 'indexed', 'payable'}

TYPE_ALIASES = {
    'uint': 'uint256',
    'int': 'int256',
    'byte': 'bytes1',
}


@dataclass(frozen=True)
class AbiParam:
    """A single parameter: canonical type string and optional name."""
    abi_type: str
    name: str = ''


@dataclass(frozen=True)
class Signature:
    """A parsed function signature."""
    name: str
    params: Tuple[AbiParam, ...] = field(default_factory=tuple)

    @property
    def types(self) -> List[str]:
        return [p.abi_type for p in self.params]

    @property
    def canonical(self) -> str:
        return f'{self.name}({",".join(self.types)})'

    def param_names(self) -> List[str]:
        """Return parameter names, defaulting to arg0, arg1, ..."""
        return [p.name or f'arg{i}' for i, p in enumerate(self.params)]


# =============================================================================
# STATIC TYPE DESCRIPTION
# =============================================================================

@dataclass(frozen=True)
class StaticType:
    """An elementary ABI type that encodes into exactly one 32-byte word.

    ``kind`` is one of 'address', 'uint', 'int', 'bool', 'bytes'; ``size`` is
    the bit width for integers and the byte length for bytesN/address.
    """
    kind: str
    size: int


def static_type(abi_type: str) -> StaticType:
    """Describe a canonical type that the codec can encode/decode.

    Raises:
        TypeMismatchError: for dynamic, tuple or array types.
    """
    if abi_type == 'address':
        return StaticType('address', 20)
    if abi_type == 'bool':
        return StaticType('bool', 1)
    match = SIZED_TYPE_PATTERN.match(abi_type)
    if match:
        return StaticType(match.group(1), int(match.group(2)))
    raise TypeMismatchError(f"unsupported ABI type '{abi_type}' (only static elementary types)")


# =============================================================================
# PARSING
# =============================================================================

def _split_top_level(text: str) -> List[str]:
    """Split on commas that are not nested inside parentheses."""
    parts = []
    depth = 0
    current = ''
    for ch in text:
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth -= 1
            if depth < 0:
                raise InvalidLiteralError(f"unbalanced ')' in '{text}'")
        if ch == ',' and depth == 0:
            parts.append(current)
            current = ''
        else:
            current += ch
    if depth != 0:
        raise InvalidLiteralError(f"unbalanced '(' in '{text}'")
    parts.append(current)
    return parts


def _matching_paren(text: str, start: int) -> int:
    depth = 0
    for i in range(start, len(text)):
        if text[i] == '(':
            depth += 1
        elif text[i] == ')':
            depth -= 1
            if depth == 0:
                return i
    raise InvalidLiteralError(f"unbalanced '(' in '{text}'")


def canonical_elementary(name: str) -> str:
    """Canonicalize an elementary type name, validating sizes."""
    name = TYPE_ALIASES.get(name, name)
    if name in ('address', 'bool', 'string', 'bytes', 'function'):
        return name
    match = SIZED_TYPE_PATTERN.match(name)
    if match:
        base, size = match.group(1), int(match.group(2))
        if base == 'bytes' and 1 <= size <= 32:
            return name
        if base in ('uint', 'int') and 8 <= size <= 256 and size % 8 == 0:
            return name
    raise InvalidLiteralError(f"unknown ABI type '{name}'")


def parse_type(text: str) -> str:
    """Parse one type expression (possibly a tuple with array suffixes)."""
    text = text.strip()
    if not text:
        raise InvalidLiteralError('empty type in signature')
    if text.startswith('('):
        end = _matching_paren(text, 0)
        inner = text[1:end]
        suffix = text[end + 1:].replace(' ', '')
        components = [] if not inner.strip() else [
            parse_param(part).abi_type for part in _split_top_level(inner)
        ]
        base = f'({",".join(components)})'
    else:
        bracket = text.find('[')
        base_name = text if bracket < 0 else text[:bracket]
        suffix = '' if bracket < 0 else text[bracket:].replace(' ', '')
        base = canonical_elementary(base_name.strip())
    if not ARRAY_SUFFIX_PATTERN.match(suffix):
        raise InvalidLiteralError(f"malformed array suffix in '{text}'")
    return base + suffix


def parse_param(text: str) -> AbiParam:
    """Parse ``type [qualifiers] [name]``."""
    text = text.strip()
    if not text:
        raise InvalidLiteralError('empty parameter in signature')

    if text.startswith('('):
        end = _matching_paren(text, 0)
        # Array suffixes directly follow the closing parenthesis
        rest_start = end + 1
        while rest_start < len(text) and (text[rest_start] in '[]0123456789'):
            rest_start += 1
        type_text, rest = text[:rest_start], text[rest_start:]
    else:
        words = text.split(None, 1)
        type_text = words[0]
        rest = words[1] if len(words) > 1 else ''

    words = [w for w in rest.split() if w not in IGNORED_QUALIFIERS]
    if len(words) > 1:
        raise InvalidLiteralError(f"cannot parse parameter '{text}'")
    name = words[0] if words else ''
    if name and not IDENTIFIER_PATTERN.match(name):
        raise InvalidLiteralError(f"invalid parameter name '{name}'")
    return AbiParam(abi_type=parse_type(type_text), name=name)


def parse_signature(text: str) -> Signature:
    """Parse a function signature or a bare parameter list.

    Raises:
        InvalidLiteralError: if the signature is malformed.
    """
    text = text.strip()
    name = ''
    body = text
    paren = text.find('(')
    if paren > 0 and IDENTIFIER_PATTERN.match(text[:paren].strip()):
        name = text[:paren].strip()
        if _matching_paren(text, paren) != len(text) - 1:
            raise InvalidLiteralError(f"trailing characters after ')' in '{text}'")
        body = text[paren + 1:-1]
    elif paren == 0 and _matching_paren(text, 0) == len(text) - 1:
        body = text[1:-1]
    elif paren > 0:
        head = text[:paren].strip()
        if not any(ch in head for ch in ', '):
            raise InvalidLiteralError(f"invalid function name '{head}'")

    if not body.strip():
        return Signature(name=name)
    params = tuple(parse_param(part) for part in _split_top_level(body))
    return Signature(name=name, params=params)


def require_function_name(signature: Signature, source: Optional[str] = None) -> None:
    if not signature.name:
        raise InvalidLiteralError(
            f"signature '{source or signature.canonical}' needs a function name"
        )


def selector(signature: Signature) -> bytes:
    """First 4 bytes of keccak256 of the canonical signature."""
    require_function_name(signature)
    return keccak256(signature.canonical.encode('ascii'))[:4]
