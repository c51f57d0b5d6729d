"""GET /v1/progression/history - Fetch a sales rep's saved estimates"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from woundcare_revenue.api.v1.schemas import HistoryResponse, HistoryItem
from woundcare_revenue.infrastructure.database.session import get_db
from woundcare_revenue.infrastructure.database.repositories import EstimateRepository

router = APIRouter()


@router.get("/progression/history", response_model=HistoryResponse)
def get_estimate_history(
    requested_by: str = Query(..., description="Sales rep identifier"),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """
    Retrieve recent progression estimates for a sales rep.

    Returns:
        Newest first, with headline billable and net profit
    """
    estimate_repo = EstimateRepository(db)
    estimates = estimate_repo.get_estimates_by_user(requested_by, limit=limit)

    history_items = [
        HistoryItem(
            estimate_id=str(e.id),
            billing_code=e.billing_code,
            product=f"{e.manufacturer} {e.product_name}",
            treatment_count=e.treatment_count,
            total_billable=e.total_billable,
            net_profit=e.net_profit,
            created_at=e.created_at.isoformat(),
        )
        for e in estimates
    ]

    return HistoryResponse(requested_by=requested_by, estimates=history_items)
