"""
Price text parsing.

Search results and AI estimates report prices as display strings
("$1,250", "LKR 3,000 per person"). These helpers turn them into numbers.
"""

import math
import re
from typing import Any

_NON_NUMERIC = re.compile(r"[^0-9.]")
_LEADING_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_price(value: Any) -> float:
    """
    Extract a number from a price string.

    Every character other than digits and '.' is removed, then the leading
    number is read ("1.2.3" -> 1.2). Anything unparseable yields 0.

    Args:
        value: Price text, number, or None

    Returns:
        Parsed price, or 0.0 when nothing numeric is found
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)

    cleaned = _NON_NUMERIC.sub("", str(value))
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))
