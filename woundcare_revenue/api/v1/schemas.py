"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from pydantic import BaseModel, Field
from typing import List, Optional

from woundcare_revenue.config import settings
from woundcare_revenue.domain.models import GraftProduct, Progression, ProgressionRow, ProgressionTotals

# Inputs must fit the estimate columns exactly so a saved estimate recomputes to the same rows
AREA_MAX_DIGITS = 10
AREA_DECIMAL_PLACES = 4
PERCENT_MAX_DIGITS = 7
PERCENT_DECIMAL_PLACES = 4


class ProductSelection(BaseModel):
    """Graft product chosen by the caller"""

    billing_code: Optional[str] = Field(None, description="CMS Q-code, e.g. Q4205-Q4")
    manufacturer: Optional[str] = Field(None, description="Disambiguates a shared billing code")
    product_name: Optional[str] = None


class ProgressionRequest(ProductSelection):
    """Request body for POST /v1/progression and /v1/progression/report"""

    requested_by: Optional[str] = Field(None, description="Sales rep identifier")
    initial_area: Optional[Decimal] = Field(
        None,
        gt=0,
        max_digits=AREA_MAX_DIGITS,
        decimal_places=AREA_DECIMAL_PLACES,
        description="Wound area in cm² at first treatment",
    )
    wound_size: Optional[str] = Field(None, description='Free-text size, e.g. "5 x 5 cm"')
    treatment_count: int = Field(1, ge=1, le=settings.max_treatment_count)
    closure_rate_percent: Decimal = Field(
        Decimal(str(settings.default_closure_rate_percent)),
        ge=0,
        lt=100,
        max_digits=PERCENT_MAX_DIGITS,
        decimal_places=PERCENT_DECIMAL_PLACES,
    )
    billing_fee_percent: Decimal = Field(
        Decimal(str(settings.default_billing_fee_percent)),
        ge=0,
        lt=100,
        max_digits=PERCENT_MAX_DIGITS,
        decimal_places=PERCENT_DECIMAL_PLACES,
    )


class QuoteRequest(ProductSelection):
    """Request body for POST /v1/quote"""

    wound_area: Optional[Decimal] = Field(None, gt=0, description="Wound area in cm²")
    wound_size: Optional[str] = None
    treatment_count: int = Field(1, ge=1, le=settings.max_treatment_count)


class ProductSchema(BaseModel):
    """Graft product with its quarterly price"""

    manufacturer: str
    product_name: str
    billing_code: str
    unit_price: Decimal
    year: int
    quarter: str

    @classmethod
    def from_domain(cls, product: GraftProduct) -> "ProductSchema":
        return cls(
            manufacturer=product.manufacturer,
            product_name=product.product_name,
            billing_code=product.billing_code,
            unit_price=product.unit_price,
            year=product.year,
            quarter=product.quarter,
        )


class GraftListResponse(BaseModel):
    """Response for GET /v1/grafts"""

    pricing_quarter: str
    products: List[ProductSchema]


class GraftQuarterSchema(BaseModel):
    """One archived pricing quarter"""

    pricing_quarter: str
    products: List[ProductSchema]


class GraftHistoryResponse(BaseModel):
    """Response for GET /v1/grafts/history"""

    quarters: List[GraftQuarterSchema]


class PriceTableValidationResponse(BaseModel):
    """Response for GET /v1/grafts/validation"""

    valid: bool
    errors: List[str]


class ProgressionRowSchema(BaseModel):
    """Single treatment in a progression"""

    treatment_index: int
    area_at_treatment: Decimal
    carried_area: Decimal
    unit_price: Decimal
    total_billable: Decimal
    reimbursed_amount: Decimal
    cost_amount: Decimal
    billing_fee_amount: Decimal
    gross_profit: Decimal
    net_profit: Decimal

    @classmethod
    def from_domain(cls, row: ProgressionRow) -> "ProgressionRowSchema":
        return cls(**vars(row))


class ProgressionTotalsSchema(BaseModel):
    """Sums across a progression"""

    area_at_treatment: Decimal
    total_billable: Decimal
    reimbursed_amount: Decimal
    cost_amount: Decimal
    billing_fee_amount: Decimal
    gross_profit: Decimal
    net_profit: Decimal

    @classmethod
    def from_domain(cls, totals: ProgressionTotals) -> "ProgressionTotalsSchema":
        return cls(**vars(totals))


class ProgressionResponse(BaseModel):
    """Response for POST /v1/progression and GET /v1/progression/{estimate_id}"""

    estimate_id: Optional[str] = None
    product: ProductSchema
    initial_area: Decimal
    treatment_count: int
    closure_rate_percent: Decimal
    billing_fee_percent: Decimal
    rows: List[ProgressionRowSchema]
    totals: ProgressionTotalsSchema
    created_at: Optional[str] = None

    @classmethod
    def from_domain(cls, progression: Progression, estimate_id: Optional[str] = None) -> "ProgressionResponse":
        return cls(
            estimate_id=estimate_id,
            product=ProductSchema.from_domain(progression.product),
            initial_area=progression.initial_area,
            treatment_count=progression.treatment_count,
            closure_rate_percent=progression.closure_rate_percent,
            billing_fee_percent=progression.billing_fee_percent,
            rows=[ProgressionRowSchema.from_domain(r) for r in progression.rows],
            totals=ProgressionTotalsSchema.from_domain(progression.totals),
        )


class QuoteResponse(BaseModel):
    """Response for POST /v1/quote"""

    product: ProductSchema
    wound_area: Decimal
    treatment_count: int
    billable_per_treatment: Decimal
    provider_invoice_per_treatment: Decimal
    billable_all_treatments: Decimal
    provider_invoice_all_treatments: Decimal


class HistoryItem(BaseModel):
    """Single saved estimate in history"""

    estimate_id: str
    billing_code: str
    product: str
    treatment_count: int
    total_billable: Decimal
    net_profit: Decimal
    created_at: str


class HistoryResponse(BaseModel):
    """Response for GET /v1/progression/history"""

    requested_by: str
    estimates: List[HistoryItem]
