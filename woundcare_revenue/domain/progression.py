"""Revenue progression engine - core business logic for provider revenue estimates"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Optional, Union
from woundcare_revenue.domain.models import GraftProduct, Progression, ProgressionRow, ProgressionTotals
from woundcare_revenue.domain.exceptions import MissingProductSelectionError, InvalidInputError

Number = Union[Decimal, int, float, str]

# Payer reimbursement and cost of goods as fractions of total billable
REIMBURSEMENT_RATE = Decimal("0.80")
COST_RATE = Decimal("0.60")

# Smallest trackable wound size in cm²
AREA_FLOOR = Decimal("1")

DISPLAY_AREA_QUANTUM = Decimal("0.1")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """Convert user or config input to Decimal without binary float noise"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def _checked_decimal(value: Number, name: str) -> Decimal:
    try:
        number = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from e
    if not number.is_finite():
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return number


def validate_progression_inputs(
    product: Optional[GraftProduct],
    initial_area: Number,
    treatment_count: int,
    closure_rate_percent: Number = 0,
    billing_fee_percent: Number = 0,
) -> None:
    """
    Caller-side guard run before the engine.

    Raises:
        MissingProductSelectionError: No product chosen
        InvalidInputError: Area, count or percentages out of range
    """
    if product is None:
        raise MissingProductSelectionError()

    if not product.unit_price.is_finite() or product.unit_price <= 0:
        raise InvalidInputError(f"Unit price must be positive, got {product.unit_price}")

    if isinstance(treatment_count, bool) or not isinstance(treatment_count, int):
        raise InvalidInputError(f"Treatment count must be an integer, got {treatment_count!r}")
    if treatment_count < 1:
        raise InvalidInputError(f"Treatment count must be at least 1, got {treatment_count}")

    area = _checked_decimal(initial_area, "Wound area")
    if area <= 0:
        raise InvalidInputError(f"Wound area must be positive, got {initial_area}")

    closure = _checked_decimal(closure_rate_percent, "Closure rate")
    if not (0 <= closure < HUNDRED):
        raise InvalidInputError(f"Closure rate must be in [0, 100), got {closure_rate_percent}")

    fee = _checked_decimal(billing_fee_percent, "Billing fee")
    if not (0 <= fee < HUNDRED):
        raise InvalidInputError(f"Billing fee must be in [0, 100), got {billing_fee_percent}")


def compute_row(
    treatment_index: int,
    area: Decimal,
    unit_price: Decimal,
    billing_fee_percent: Decimal,
) -> ProgressionRow:
    """Financials for a single treatment at the given wound area"""
    total_billable = area * unit_price
    reimbursed = total_billable * REIMBURSEMENT_RATE
    cost = total_billable * COST_RATE
    billing_fee = total_billable * billing_fee_percent / HUNDRED
    gross_profit = reimbursed - cost

    return ProgressionRow(
        treatment_index=treatment_index,
        area_at_treatment=area.quantize(DISPLAY_AREA_QUANTUM, rounding=ROUND_HALF_UP),
        carried_area=area,
        unit_price=unit_price,
        total_billable=total_billable,
        reimbursed_amount=reimbursed,
        cost_amount=cost,
        billing_fee_amount=billing_fee,
        gross_profit=gross_profit,
        net_profit=gross_profit - billing_fee,
    )


def next_area(area: Decimal, closure_rate_percent: Decimal) -> Decimal:
    """Apply one treatment's closure, never going below the area floor"""
    healed = area * (1 - closure_rate_percent / HUNDRED)
    return healed if healed >= AREA_FLOOR else AREA_FLOOR


def sum_rows(rows: List[ProgressionRow]) -> ProgressionTotals:
    """Accumulate every row; area sums the unrounded carried values"""
    zero = Decimal("0")
    return ProgressionTotals(
        area_at_treatment=sum((r.carried_area for r in rows), zero),
        total_billable=sum((r.total_billable for r in rows), zero),
        reimbursed_amount=sum((r.reimbursed_amount for r in rows), zero),
        cost_amount=sum((r.cost_amount for r in rows), zero),
        billing_fee_amount=sum((r.billing_fee_amount for r in rows), zero),
        gross_profit=sum((r.gross_profit for r in rows), zero),
        net_profit=sum((r.net_profit for r in rows), zero),
    )


def compute_progression(
    product: GraftProduct,
    initial_area: Number,
    treatment_count: int,
    closure_rate_percent: Number,
    billing_fee_percent: Number,
) -> Progression:
    """
    Main entry point: project revenue across a series of graft treatments.

    The wound shrinks by closure_rate_percent after every treatment and is
    floored at 1 cm². The unrounded area is carried from one treatment to the
    next; only the row's display area is rounded to one decimal place.

    Inputs are assumed valid (see validate_progression_inputs).

    Example:
        1190.44/cm², 25 cm², 3 treatments, 15% closure, 6% fee
        Areas carried: 25 -> 21.25 -> 18.0625 (displayed 25.0, 21.3, 18.1)
        Row 1: billable 29,761.00, net profit 4,166.54
    """
    start = to_decimal(initial_area)
    closure = to_decimal(closure_rate_percent)
    fee = to_decimal(billing_fee_percent)

    rows: List[ProgressionRow] = []
    area = start
    for treatment in range(1, treatment_count + 1):
        rows.append(compute_row(treatment, area, product.unit_price, fee))
        area = next_area(area, closure)

    return Progression(
        product=product,
        initial_area=start,
        treatment_count=treatment_count,
        closure_rate_percent=closure,
        billing_fee_percent=fee,
        rows=rows,
        totals=sum_rows(rows),
    )
