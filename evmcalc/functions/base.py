"""
Base class for built-in functions.

Each built-in is a BuiltinFunction subclass with an ``_id`` (the name users
type) and ``_inputs`` (parameter names and kinds). The evaluator asks the
function for its accepted arities before evaluating any argument, and for
the kind of each parameter so that signed parameters can receive negative
numbers written as ``-x``.
"""

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple, Union

from ..abi import hex_to_bytes, parse_integer_text
from ..arith import to_signed
from ..errors import ArityMismatchError, TypeMismatchError
from ..values import Bool, Bytes, Text, Uint, Value, type_label

if TYPE_CHECKING:
    from ..evaluator.context import EvaluationContext


class ParamKind(Enum):
    """How the evaluator should produce an argument for a parameter."""
    UINT = 'uint'
    # Signed integer: arrives as a Python int, may be negative
    INT = 'int'
    TEXT = 'text'
    ANY = 'any'


# Arguments are Values, except for INT parameters which receive ints.
Argument = Union[Value, int]


class BuiltinFunction:
    """
    Base class for all built-in functions.

    Subclasses set ``_id`` and ``_inputs`` and implement ``call``. Functions
    with optional or repeated parameters override ``accepted_arities`` and
    ``param_kind``.
    """

    _id: str = ''
    _inputs: Sequence[Tuple[str, ParamKind]] = ()

    # =========================================================================
    # ARITY AND PARAMETER KINDS
    # =========================================================================

    def accepted_arities(self) -> Tuple[int, Optional[int]]:
        """Return (minimum, maximum) argument counts; maximum None is unbounded."""
        return len(self._inputs), len(self._inputs)

    def check_arity(self, count: int) -> None:
        low, high = self.accepted_arities()
        if count < low or (high is not None and count > high):
            raise ArityMismatchError(
                f'{self._id} takes {self.describe_arity()}, got {count}'
            )

    def describe_arity(self) -> str:
        low, high = self.accepted_arities()
        if high is None:
            expected = f'at least {low} argument'
            return expected + ('' if low == 1 else 's')
        if low == high:
            return f'{low} argument' + ('' if low == 1 else 's')
        return f'{low} to {high} arguments'

    def param_kind(self, index: int, count: int) -> ParamKind:
        """Kind of the index-th argument when the call has ``count`` arguments."""
        if index < len(self._inputs):
            return self._inputs[index][1]
        return ParamKind.ANY

    def param_name(self, index: int) -> str:
        if index < len(self._inputs):
            return self._inputs[index][0]
        return f'argument {index + 1}'

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def call(self, ctx: 'EvaluationContext', args: List[Argument]) -> Value:
        raise NotImplementedError(f'{type(self).__name__}.call')

    # =========================================================================
    # ARGUMENT COERCION
    # =========================================================================

    def _mismatch(self, index: int, expected: str, value: Value) -> TypeMismatchError:
        return TypeMismatchError(
            f'{self._id}: {self.param_name(index)} must be {expected}, got {type_label(value)}'
        )

    def uint_arg(self, args: List[Argument], index: int) -> int:
        value = args[index]
        if isinstance(value, Uint):
            return value.value
        raise self._mismatch(index, 'a number', value)

    def text_arg(self, args: List[Argument], index: int) -> str:
        value = args[index]
        if isinstance(value, Text):
            return value.value
        raise self._mismatch(index, 'a string', value)

    def bytes_arg(self, args: List[Argument], index: int) -> bytes:
        """Bytes, or text holding hex data."""
        value = args[index]
        if isinstance(value, Bytes):
            return value.value
        if isinstance(value, Text):
            try:
                return hex_to_bytes(value.value)
            except ValueError:
                raise TypeMismatchError(
                    f'{self._id}: {self.param_name(index)} must be hex data, got {value.value!r}'
                )
        raise self._mismatch(index, 'hex data', value)

    def flag_arg(self, args: List[Argument], index: int) -> bool:
        value = args[index]
        if isinstance(value, Bool):
            return value.value
        if isinstance(value, Uint):
            return value.value != 0
        raise self._mismatch(index, 'a bool or number', value)


def signed_from_value(value: Value) -> int:
    """Interpret a value as a signed integer.

    Uints at or above 2**255 are read as two's complement, text must hold
    an integer literal (decoded negative ints are text).
    """
    if isinstance(value, Uint):
        return to_signed(value.value)
    if isinstance(value, Text):
        return parse_integer_text(value.value)
    raise TypeMismatchError(f'expected a signed integer, got {type_label(value)}')


def signed_result(value: int) -> Value:
    """Negative results are shown as text; non-negative ones stay numeric."""
    return Uint(value) if value >= 0 else Text(str(value))
