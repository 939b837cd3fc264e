"""General-purpose utility helpers."""
import math
import re
from datetime import datetime, timezone
from typing import Any

_LEADING_INT = re.compile(r"^[+-]?\d+")


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def parse_int(value: Any, default: int = 0) -> int:
    """Permissively read an integer out of a loosely-typed CSV cell.

    Ints pass through, floats truncate, strings are read up to the first
    non-digit after dropping whitespace and thousands separators
    ("1,234 views" -> 1234, "12.7" -> 12). Anything else yields ``default``.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return default
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value.strip().replace(",", ""))
        if match:
            return int(match.group())
    return default


def truncate(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """Keep the first ``max_length`` characters and append ``suffix`` when cut."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + suffix
