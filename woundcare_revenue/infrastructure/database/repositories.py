"""Data access layer for saved revenue estimates"""

import uuid
from typing import List, Optional
from sqlalchemy.orm import Session
from woundcare_revenue.infrastructure.database.models import RevenueEstimate, RevenueEstimateRow
from woundcare_revenue.domain.models import Progression


class EstimateRepository:
    """Repository for progression estimates"""

    def __init__(self, db: Session):
        self.db = db

    def create_estimate(
        self,
        progression: Progression,
        requested_by: Optional[str] = None,
    ) -> RevenueEstimate:
        """Persist a progression with its treatment rows"""
        product = progression.product
        totals = progression.totals

        db_estimate = RevenueEstimate(
            requested_by=requested_by,
            manufacturer=product.manufacturer,
            product_name=product.product_name,
            billing_code=product.billing_code,
            unit_price=product.unit_price,
            pricing_quarter=f"{product.quarter} {product.year}",
            initial_area=progression.initial_area,
            treatment_count=progression.treatment_count,
            closure_rate_percent=progression.closure_rate_percent,
            billing_fee_percent=progression.billing_fee_percent,
            total_area=totals.area_at_treatment,
            total_billable=totals.total_billable,
            reimbursed_amount=totals.reimbursed_amount,
            cost_amount=totals.cost_amount,
            billing_fee_amount=totals.billing_fee_amount,
            gross_profit=totals.gross_profit,
            net_profit=totals.net_profit,
        )
        self.db.add(db_estimate)
        self.db.flush()  # Get ID without committing

        for row in progression.rows:
            self.db.add(
                RevenueEstimateRow(
                    estimate_id=db_estimate.id,
                    treatment_index=row.treatment_index,
                    area_at_treatment=row.area_at_treatment,
                    carried_area=row.carried_area,
                    total_billable=row.total_billable,
                    reimbursed_amount=row.reimbursed_amount,
                    cost_amount=row.cost_amount,
                    billing_fee_amount=row.billing_fee_amount,
                    gross_profit=row.gross_profit,
                    net_profit=row.net_profit,
                )
            )

        return db_estimate

    def get_estimate_by_id(self, estimate_id: uuid.UUID) -> Optional[RevenueEstimate]:
        """Fetch estimate with rows"""
        return (
            self.db.query(RevenueEstimate)
            .filter(RevenueEstimate.id == estimate_id)
            .first()
        )

    def get_estimates_by_user(self, requested_by: str, limit: int = 20) -> List[RevenueEstimate]:
        """Fetch recent estimates for a sales rep"""
        return (
            self.db.query(RevenueEstimate)
            .filter(RevenueEstimate.requested_by == requested_by)
            .order_by(RevenueEstimate.created_at.desc())
            .limit(limit)
            .all()
        )
