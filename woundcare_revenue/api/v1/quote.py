"""POST /v1/quote - Flat per-treatment revenue quote"""

from fastapi import APIRouter, Depends, HTTPException

from woundcare_revenue.api.v1.schemas import QuoteRequest, QuoteResponse, ProductSchema
from woundcare_revenue.api.dependencies import get_price_table
from woundcare_revenue.domain.pricing import GraftPriceTable
from woundcare_revenue.domain.progression import validate_progression_inputs
from woundcare_revenue.domain.quote import compute_quote
from woundcare_revenue.domain.exceptions import (
    AmbiguousProductError,
    InvalidInputError,
    MissingProductSelectionError,
    ProductNotFoundError,
)
from woundcare_revenue.infrastructure.observability.metrics import record_estimate
from woundcare_revenue.utils.wound_size import parse_wound_size

router = APIRouter()


@router.post("/quote", response_model=QuoteResponse)
def create_quote(
    request_body: QuoteRequest,
    price_table: GraftPriceTable = Depends(get_price_table),
):
    """Total billable and provider invoice (60%) per treatment and across all treatments"""
    try:
        product = price_table.select(
            request_body.billing_code,
            manufacturer=request_body.manufacturer,
            product_name=request_body.product_name,
        )
        area = (
            request_body.wound_area
            if request_body.wound_area is not None
            else parse_wound_size(request_body.wound_size)
        )
        validate_progression_inputs(product, area, request_body.treatment_count)
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (MissingProductSelectionError, InvalidInputError, AmbiguousProductError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    quote = compute_quote(product, area, request_body.treatment_count)
    record_estimate("quote", product.billing_code)

    return QuoteResponse(
        product=ProductSchema.from_domain(quote.product),
        wound_area=quote.wound_area,
        treatment_count=quote.treatment_count,
        billable_per_treatment=quote.billable_per_treatment,
        provider_invoice_per_treatment=quote.provider_invoice_per_treatment,
        billable_all_treatments=quote.billable_all_treatments,
        provider_invoice_all_treatments=quote.provider_invoice_all_treatments,
    )
