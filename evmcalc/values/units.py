"""
Unit tables for value (ether denomination) and time conversions.

Each unit belongs to exactly one family and has an integer factor relative
to the family's base unit (wei for values, seconds for time).
"""

from dataclasses import dataclass
from typing import Dict, Optional


# =============================================================================
# UNIT FAMILIES
# =============================================================================

VALUE_FAMILY = 'value'
TIME_FAMILY = 'time'


@dataclass(frozen=True)
class Unit:
    """A named unit with its scale factor relative to the family base."""
    name: str
    family: str
    factor: int


VALUE_UNITS: Dict[str, int] = {
    'wei': 1,
    'kwei': 10**3,
    'mwei': 10**6,
    'gwei': 10**9,
    'szabo': 10**12,
    'finney': 10**15,
    'ether': 10**18,
}

# Fixed-width calendar: a year is always 365 days.
TIME_UNITS: Dict[str, int] = {
    'seconds': 1,
    'minutes': 60,
    'hours': 3600,
    'days': 86400,
    'weeks': 604800,
    'years': 31536000,
}

TIME_UNIT_ALIASES: Dict[str, str] = {
    'second': 'seconds',
    'minute': 'minutes',
    'hour': 'hours',
    'day': 'days',
    'week': 'weeks',
    'year': 'years',
}

BASE_UNITS: Dict[str, str] = {
    VALUE_FAMILY: 'wei',
    TIME_FAMILY: 'seconds',
}


def _build_table() -> Dict[str, Unit]:
    table: Dict[str, Unit] = {}
    for name, factor in VALUE_UNITS.items():
        table[name] = Unit(name, VALUE_FAMILY, factor)
    for name, factor in TIME_UNITS.items():
        table[name] = Unit(name, TIME_FAMILY, factor)
    for alias, name in TIME_UNIT_ALIASES.items():
        table[alias] = table[name]
    return table


UNITS: Dict[str, Unit] = _build_table()


# =============================================================================
# LOOKUP
# =============================================================================

def lookup_unit(name: str) -> Optional[Unit]:
    """Return the unit for a name or alias, or None if it is not a unit."""
    return UNITS.get(name)


def is_unit(name: str) -> bool:
    return name in UNITS


def base_unit(family: str) -> Unit:
    """Return the base unit of a family (factor 1)."""
    return UNITS[BASE_UNITS[family]]
