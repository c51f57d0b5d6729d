"""GET /v1/grafts - Graft price table for the current quarter"""

from fastapi import APIRouter, Depends

from woundcare_revenue.api.v1.schemas import (
    GraftListResponse,
    GraftHistoryResponse,
    GraftQuarterSchema,
    PriceTableValidationResponse,
    ProductSchema,
)
from woundcare_revenue.api.dependencies import get_price_table
from woundcare_revenue.domain.pricing import GraftPriceTable

router = APIRouter()


@router.get("/grafts", response_model=GraftListResponse)
def list_grafts(price_table: GraftPriceTable = Depends(get_price_table)):
    """Active products in configured order; discontinued grafts are hidden"""
    return GraftListResponse(
        pricing_quarter=price_table.quarter_label,
        products=[ProductSchema.from_domain(p) for p in price_table.active_products()],
    )


@router.get("/grafts/history", response_model=GraftHistoryResponse)
def list_graft_history(price_table: GraftPriceTable = Depends(get_price_table)):
    """Archived quarters kept for audit"""
    quarters = []
    for archived in price_table.history:
        quarters.append(
            GraftQuarterSchema(
                pricing_quarter=archived.quarter_label,
                products=[ProductSchema.from_domain(p) for p in archived.products],
            )
        )
    return GraftHistoryResponse(quarters=quarters)


@router.get("/grafts/validation", response_model=PriceTableValidationResponse)
def validate_grafts(price_table: GraftPriceTable = Depends(get_price_table)):
    result = price_table.validate()
    return PriceTableValidationResponse(valid=result.valid, errors=result.errors)
