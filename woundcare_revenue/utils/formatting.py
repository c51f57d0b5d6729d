"""Display formatting for currency and areas"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

PLACEHOLDER = "-"


def format_usd(value: Optional[Decimal]) -> str:
    """Format as US dollars with cents, e.g. $29,761.00 or -$1,785.66"""
    if value is None:
        return PLACEHOLDER
    cents = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else ""
    return f"{sign}${abs(cents):,.2f}"


def format_area(value: Decimal, places: int = 1) -> str:
    """Fixed-point area, e.g. 21.3 or 64"""
    quantum = Decimal(1).scaleb(-places)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"
