"""
Evaluator configuration.

Defaults suit interactive use; a JSON file with the same keys can override
them (see load_config).
"""

import json
import time
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Callable, Union


DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S UTC'


@dataclass(frozen=True)
class EvaluatorConfig:
    """Settings that shape parsing, evaluation and rendering."""

    # Maximum AST nesting accepted by the parser and evaluator
    max_depth: int = 64

    # Fraction digits for get_price_from_tick
    price_precision: int = 6

    # strftime layout used by unix(timestamp)
    date_format: str = DEFAULT_DATE_FORMAT

    # Render every integer result as a 32-byte hex word
    full_words: bool = False

    # Source of the current Unix time, in seconds
    clock: Callable[[], float] = field(default=time.time, compare=False)

    def with_overrides(self, **overrides) -> 'EvaluatorConfig':
        """Return a copy with the given fields replaced (None values skipped)."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


_JSON_KEYS = {f.name for f in fields(EvaluatorConfig)} - {'clock'}


def load_config(path: Union[str, Path]) -> EvaluatorConfig:
    """Load an EvaluatorConfig from a JSON object file.

    Raises:
        ValueError: if the file is not a JSON object, contains unknown
            keys, or values of the wrong type.
    """
    with open(path, 'r') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f'{path}: expected a JSON object')

    unknown = set(data) - _JSON_KEYS
    if unknown:
        raise ValueError(f'{path}: unknown config key(s): {", ".join(sorted(unknown))}')

    for key in ('max_depth', 'price_precision'):
        if key in data and (not isinstance(data[key], int) or data[key] < 0):
            raise ValueError(f'{path}: {key} must be a non-negative integer')
    if 'date_format' in data and not isinstance(data['date_format'], str):
        raise ValueError(f'{path}: date_format must be a string')
    if 'full_words' in data and not isinstance(data['full_words'], bool):
        raise ValueError(f'{path}: full_words must be true or false')

    return EvaluatorConfig(**data)
