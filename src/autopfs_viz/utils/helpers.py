"""Helper utilities for parsing and ordering loosely-typed job data.

This module contains:
- parse_int: integer parsing that keeps the raw token on failure
- parse_timestamp: RFC 3339 parsing that copes with nanosecond fractions
- value_key / compare_values: one total order over ints and raw tokens
"""

from __future__ import annotations

import locale
import math
import re
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from loguru import logger

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_FRACTION = re.compile(r"\.(\d+)")


def parse_int(value: Any, field: str = "value") -> Any:
    """Parse an integer from a loosely-typed JSON leaf.

    Leading whitespace, a sign and trailing garbage are tolerated
    ("12abc" -> 12). Anything else is returned unchanged and a warning is
    logged, so callers never see an exception.

    Args:
        value: Raw JSON value
        field: Field name used in the warning

    Returns:
        The parsed int, or the original value if it could not be parsed
    """
    if isinstance(value, bool):
        logger.warning(f"failed parsing {field} {value!r} as integer")
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))

    logger.warning(f"failed parsing {field} {value!r} as integer")
    return value


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 / RFC 3339 timestamp into an aware datetime.

    The backend sends one to nine fractional digits (trailing zeros are
    trimmed) and a ``Z`` suffix; the fraction is padded or cut to six
    digits and the suffix rewritten before ``datetime.fromisoformat``.
    Naive timestamps are taken to be UTC.

    Returns:
        Parsed datetime, or None if the value is not a usable timestamp
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text[-1] in "zZ":
            text = text[:-1] + "+00:00"
        # fromisoformat only takes 3 or 6 digits before 3.11
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def value_key(value: Any) -> Tuple[int, int, str]:
    """Sort key placing ints first (numerically), then raw tokens as text."""
    if is_number(value):
        return (0, value, "")
    return (1, 0, str(value))


def compare_text(a: Any, b: Any) -> int:
    """Locale-aware string comparison."""
    return locale.strcoll(str(a or ""), str(b or ""))


def compare_values(a: Any, b: Any) -> int:
    """Compare two possibly-malformed numeric values.

    Two ints compare by subtraction. A raw token always sorts after an int,
    and two raw tokens compare as text.
    """
    if is_number(a) and is_number(b):
        return a - b
    if is_number(a):
        return -1
    if is_number(b):
        return 1
    return compare_text(a, b)
