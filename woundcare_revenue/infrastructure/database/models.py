"""SQLAlchemy ORM models for saved revenue estimates"""

import uuid
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Text, Numeric, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

MONEY = Numeric(18, 6)
AREA = Numeric(14, 6)
PERCENT = Numeric(7, 4)


class RevenueEstimate(Base):
    """Saved wound healing progression estimate"""

    __tablename__ = "revenue_estimate"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    requested_by = Column(Text, nullable=True, index=True)

    # Product snapshot, prices change every quarter
    manufacturer = Column(Text, nullable=False)
    product_name = Column(Text, nullable=False)
    billing_code = Column(String(32), nullable=False, index=True)
    unit_price = Column(MONEY, nullable=False)
    pricing_quarter = Column(String(16), nullable=False)

    # Inputs
    initial_area = Column(AREA, nullable=False)
    treatment_count = Column(Integer, nullable=False)
    closure_rate_percent = Column(PERCENT, nullable=False)
    billing_fee_percent = Column(PERCENT, nullable=False)

    # Totals
    total_area = Column(AREA, nullable=False)
    total_billable = Column(MONEY, nullable=False)
    reimbursed_amount = Column(MONEY, nullable=False)
    cost_amount = Column(MONEY, nullable=False)
    billing_fee_amount = Column(MONEY, nullable=False)
    gross_profit = Column(MONEY, nullable=False)
    net_profit = Column(MONEY, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    rows = relationship(
        "RevenueEstimateRow",
        back_populates="estimate",
        cascade="all, delete-orphan",
        order_by="RevenueEstimateRow.treatment_index",
    )


class RevenueEstimateRow(Base):
    """One treatment within a saved estimate"""

    __tablename__ = "revenue_estimate_row"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    estimate_id = Column(Uuid, ForeignKey("revenue_estimate.id", ondelete="CASCADE"), nullable=False)
    treatment_index = Column(Integer, nullable=False)
    area_at_treatment = Column(AREA, nullable=False)
    carried_area = Column(AREA, nullable=False)
    total_billable = Column(MONEY, nullable=False)
    reimbursed_amount = Column(MONEY, nullable=False)
    cost_amount = Column(MONEY, nullable=False)
    billing_fee_amount = Column(MONEY, nullable=False)
    gross_profit = Column(MONEY, nullable=False)
    net_profit = Column(MONEY, nullable=False)

    estimate = relationship("RevenueEstimate", back_populates="rows")
