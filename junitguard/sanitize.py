"""Cleaning of scalar values taken from untrusted XML.

All functions here are pure.
"""

import math
from typing import Any, Optional


MAX_STRING_LENGTH = 50000
MAX_PROPERTY_NAME_LENGTH = 100
TRUNCATED_MARKER = '...[truncated]'

# Names that would be dangerous if the property map were used as an object
DENIED_PROPERTY_NAMES = frozenset(('__proto__', 'constructor', 'prototype'))

# Number of decimal places kept in all time values
TIME_PRECISION = 6


def sanitize_string(value: Any) -> str:
    """Convert a value to a bounded string.

    A None input returns an empty string. Surrounding whitespace is stripped.
    """
    if value is None:
        return ''
    s = str(value).strip()
    if len(s) > MAX_STRING_LENGTH:
        return s[:MAX_STRING_LENGTH] + TRUNCATED_MARKER
    return s


def sanitize_optional(value: Any) -> Optional[str]:
    """Like sanitize_string() but returns None instead of an empty string."""
    return sanitize_string(value) or None


def valid_property_name(name: str) -> bool:
    if not name or not isinstance(name, str):
        return False
    if len(name) > MAX_PROPERTY_NAME_LENGTH:
        return False
    return name not in DENIED_PROPERTY_NAMES


def round_time(t: float) -> float:
    """Round a time value to avoid drift when summing many of them."""
    return round(t, TIME_PRECISION)


def parse_declared_time(value: Optional[str]) -> Optional[float]:
    """Parse a time attribute, returning None if there is no usable value.

    Negative values are clamped to 0.
    """
    if value is None:
        return None
    try:
        t = float(value)
    except ValueError:
        return None
    if not math.isfinite(t):
        return None
    return round_time(t) if t > 0 else 0.0


def parse_time(value: Optional[str]) -> float:
    """Parse a time attribute in seconds; anything invalid becomes 0."""
    t = parse_declared_time(value)
    return 0.0 if t is None else t
