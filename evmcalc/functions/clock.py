"""
Timestamp built-in.

unix() is overloaded on its arguments:

    unix(Y, M, D, h, m, s)      -> timestamp of that UTC date and time
    unix("2024-01-01T00:00:00Z") -> timestamp of an ISO-8601 string
    unix(ts)                    -> ts rendered with the configured date format
    unix(ts, "%d/%m/%Y")        -> ts rendered with the given strftime format

Naive dates and strings are taken as UTC.
"""

from datetime import datetime, timezone
from typing import List

from ..errors import ArityMismatchError, InvalidLiteralError, OutOfRangeError
from ..values import Text, Uint, Value
from .base import Argument, BuiltinFunction, ParamKind


DATE_FIELDS = ('year', 'month', 'day', 'hour', 'minute', 'second')


def _timestamp(moment: datetime) -> Value:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    seconds = int(moment.timestamp())
    if seconds < 0:
        raise OutOfRangeError(f'{moment.isoformat()} is before the Unix epoch')
    return Uint(seconds)


def _moment(seconds: int) -> datetime:
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        raise OutOfRangeError(f'timestamp {seconds} is outside the supported calendar')


def parse_iso(text: str) -> datetime:
    """Parse an ISO-8601 date or date-time; a trailing Z means UTC."""
    candidate = text.strip()
    if candidate.endswith(('Z', 'z')):
        candidate = candidate[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        raise InvalidLiteralError(f"'{text}' is not an ISO-8601 date")


class Unix(BuiltinFunction):
    _id = 'unix'

    def accepted_arities(self):
        return 1, len(DATE_FIELDS)

    def check_arity(self, count: int) -> None:
        if count not in (1, 2, len(DATE_FIELDS)):
            raise ArityMismatchError(f'unix takes 1, 2 or 6 arguments, got {count}')

    def param_kind(self, index: int, count: int) -> ParamKind:
        if count == len(DATE_FIELDS) or (count == 2 and index == 0):
            return ParamKind.UINT
        if count == 2:
            return ParamKind.TEXT
        return ParamKind.ANY

    def param_name(self, index: int) -> str:
        return DATE_FIELDS[index] if index < len(DATE_FIELDS) else super().param_name(index)

    def call(self, ctx, args: List[Argument]) -> Value:
        if len(args) == len(DATE_FIELDS):
            parts = [self.uint_arg(args, i) for i in range(len(DATE_FIELDS))]
            try:
                moment = datetime(*parts, tzinfo=timezone.utc)
            except (ValueError, OverflowError) as e:
                raise InvalidLiteralError(f'invalid date {tuple(parts)}: {e}')
            return _timestamp(moment)

        if len(args) == 2:
            moment = _moment(self.uint_arg(args, 0))
            return Text(moment.strftime(self.text_arg(args, 1)))

        value = args[0]
        if isinstance(value, Text):
            return _timestamp(parse_iso(value.value))
        moment = _moment(self.uint_arg(args, 0))
        return Text(moment.strftime(ctx.config.date_format))
