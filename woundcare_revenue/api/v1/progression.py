"""POST /v1/progression - Wound healing revenue progression endpoints"""

import time
import uuid
import logging
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from starlette.responses import Response

from woundcare_revenue.api.v1.schemas import (
    ProgressionRequest,
    ProgressionResponse,
    AREA_DECIMAL_PLACES,
    AREA_MAX_DIGITS,
)
from woundcare_revenue.api.dependencies import get_price_table, get_renderer_client, get_request_id
from woundcare_revenue.infrastructure.database.session import get_db
from woundcare_revenue.infrastructure.database.models import RevenueEstimate
from woundcare_revenue.infrastructure.database.repositories import EstimateRepository
from woundcare_revenue.infrastructure.clients.renderer import ReportRendererClient
from woundcare_revenue.domain.models import GraftProduct, Progression
from woundcare_revenue.domain.pricing import GraftPriceTable
from woundcare_revenue.domain.progression import compute_progression, validate_progression_inputs
from woundcare_revenue.domain.report import build_progression_report
from woundcare_revenue.domain.exceptions import (
    AmbiguousProductError,
    InvalidInputError,
    MissingProductSelectionError,
    ProductNotFoundError,
    ReportRenderError,
)
from woundcare_revenue.infrastructure.observability.metrics import record_estimate
from woundcare_revenue.infrastructure.observability.logging import log_progression
from woundcare_revenue.utils.wound_size import parse_wound_size

router = APIRouter()

AREA_LIMIT = Decimal(10) ** (AREA_MAX_DIGITS - AREA_DECIMAL_PLACES)
AREA_QUANTUM = Decimal(1).scaleb(-AREA_DECIMAL_PLACES)


def check_area_precision(area: Decimal) -> None:
    """Text sizes bypass the schema bounds, so hold them to the same limits"""
    if area >= AREA_LIMIT or area != area.quantize(AREA_QUANTUM):
        raise InvalidInputError(
            f"Wound area must be below {AREA_LIMIT} with at most {AREA_DECIMAL_PLACES} decimal places, got {area}"
        )


def run_progression(request_body: ProgressionRequest, price_table: GraftPriceTable) -> Progression:
    """
    Resolve the selection, validate, and run the engine.

    Raises HTTPException for selection and input errors so both the JSON
    and the report endpoint map them the same way.
    """
    try:
        product = price_table.select(
            request_body.billing_code,
            manufacturer=request_body.manufacturer,
            product_name=request_body.product_name,
        )
        if request_body.initial_area is not None:
            area = request_body.initial_area
        else:
            area = parse_wound_size(request_body.wound_size)
            check_area_precision(area)
        validate_progression_inputs(
            product,
            area,
            request_body.treatment_count,
            request_body.closure_rate_percent,
            request_body.billing_fee_percent,
        )
    except ProductNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (MissingProductSelectionError, InvalidInputError, AmbiguousProductError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    return compute_progression(
        product,
        area,
        request_body.treatment_count,
        request_body.closure_rate_percent,
        request_body.billing_fee_percent,
    )


def rebuild_progression(estimate: RevenueEstimate) -> Progression:
    """
    Recompute a saved estimate from its product snapshot and stored inputs.

    Stored rows keep 6 decimal places; recomputing from the exact inputs
    returns the same rows and totals the estimate was created with.
    """
    quarter, _, year = estimate.pricing_quarter.partition(" ")
    product = GraftProduct(
        manufacturer=estimate.manufacturer,
        product_name=estimate.product_name,
        billing_code=estimate.billing_code,
        unit_price=estimate.unit_price,
        year=int(year),
        quarter=quarter,
    )
    return compute_progression(
        product,
        estimate.initial_area,
        estimate.treatment_count,
        estimate.closure_rate_percent,
        estimate.billing_fee_percent,
    )


@router.post("/progression", response_model=ProgressionResponse)
def create_progression(
    request_body: ProgressionRequest,
    request: Request,
    db: Session = Depends(get_db),
    price_table: GraftPriceTable = Depends(get_price_table),
):
    """
    Project revenue across a series of graft treatments and save the estimate.

    Flow:
    1. Resolve the graft product from the active price table
    2. Validate area, treatment count and percentages
    3. Run the progression engine
    4. Persist estimate + rows
    5. Return rows and totals
    """
    start_time = time.time()
    request_id = get_request_id(request)

    progression = run_progression(request_body, price_table)

    try:
        estimate_repo = EstimateRepository(db)
        db_estimate = estimate_repo.create_estimate(progression, requested_by=request_body.requested_by)
        db.commit()
    except Exception as e:
        db.rollback()
        logging.error(f"Failed to save estimate: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    # Record metrics and logs
    duration_ms = (time.time() - start_time) * 1000
    record_estimate("progression", progression.product.billing_code, progression.totals.total_billable)
    log_progression(request_id, request_body.requested_by, progression, duration_ms)

    response = ProgressionResponse.from_domain(progression, estimate_id=str(db_estimate.id))
    response.created_at = db_estimate.created_at.isoformat() if db_estimate.created_at else None
    return response


@router.post("/progression/report")
async def create_progression_report(
    request_body: ProgressionRequest,
    request: Request,
    price_table: GraftPriceTable = Depends(get_price_table),
    renderer: ReportRendererClient = Depends(get_renderer_client),
):
    """
    Render a progression as a downloadable PDF.

    The document itself is produced by the external renderer; this endpoint
    only lays out the table and streams the result back.
    """
    request_id = get_request_id(request)
    progression = run_progression(request_body, price_table)
    report = build_progression_report(progression)

    try:
        document = await renderer.render(report)
    except ReportRenderError as e:
        logging.error(f"Report renderer error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Report renderer unavailable")

    record_estimate("report", progression.product.billing_code)
    return Response(
        content=document,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )


@router.get("/progression/{estimate_id}", response_model=ProgressionResponse)
def get_progression(estimate_id: str, db: Session = Depends(get_db)):
    """
    Retrieve a saved estimate with its treatment rows.

    Product and prices are the snapshot taken when the estimate was computed.
    """
    try:
        estimate_uuid = uuid.UUID(estimate_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid estimate ID format")

    estimate_repo = EstimateRepository(db)
    estimate = estimate_repo.get_estimate_by_id(estimate_uuid)

    if not estimate:
        raise HTTPException(status_code=404, detail="Estimate not found")

    response = ProgressionResponse.from_domain(rebuild_progression(estimate), estimate_id=str(estimate.id))
    response.created_at = estimate.created_at.isoformat()
    return response
