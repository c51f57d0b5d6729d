"""Wound size parsing for free-text measurements"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

# "3x2", "3 x 2", "2.5cm x 1.5cm", "3×2"
_DIMENSIONS = re.compile(r"([\d.]+)\s*(?:cm)?\s*[x×*]\s*([\d.]+)", re.IGNORECASE)
_NUMBER = re.compile(r"([\d.]+)")


def _parse_number(text: str) -> Decimal:
    try:
        value = Decimal(text)
    except InvalidOperation:
        return Decimal("0")
    return value if value.is_finite() else Decimal("0")


def parse_wound_size(raw: Optional[str]) -> Decimal:
    """
    Convert a recorded wound size to cm².

    "L x W" forms return L*W, anything else returns the first number found.
    Empty or unparseable input returns 0.
    """
    if not raw:
        return Decimal("0")
    text = str(raw).strip().lower()
    if not text:
        return Decimal("0")

    match = _DIMENSIONS.search(text)
    if match:
        return _parse_number(match.group(1)) * _parse_number(match.group(2))

    match = _NUMBER.search(text)
    if not match:
        return Decimal("0")
    return _parse_number(match.group(1))
