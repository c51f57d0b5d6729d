"""Flat revenue quote used during provider presentations"""

from woundcare_revenue.domain.models import GraftProduct, Quote
from woundcare_revenue.domain.progression import COST_RATE, Number, to_decimal


def compute_quote(product: GraftProduct, wound_area: Number, treatment_count: int = 1) -> Quote:
    """
    Billable and provider invoice for a wound that does not shrink between treatments.

    Provider invoice is the cost share (60%) of total billable.
    """
    area = to_decimal(wound_area)
    billable = area * product.unit_price
    invoice = billable * COST_RATE

    return Quote(
        product=product,
        wound_area=area,
        treatment_count=treatment_count,
        billable_per_treatment=billable,
        provider_invoice_per_treatment=invoice,
        billable_all_treatments=billable * treatment_count,
        provider_invoice_all_treatments=invoice * treatment_count,
    )
