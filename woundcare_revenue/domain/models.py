"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Tuple


@dataclass(frozen=True)
class GraftProduct:
    """Skin graft product at one quarter's price point"""

    manufacturer: str
    product_name: str
    billing_code: str  # CMS Q-code, keeps the -Q# quarter suffix
    unit_price: Decimal  # Billable rate per cm²
    year: int
    quarter: str  # "Q1" .. "Q4"
    is_active: bool = True

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.manufacturer, self.product_name, self.billing_code)

    @property
    def label(self) -> str:
        return f"{self.manufacturer} {self.product_name}"


@dataclass(frozen=True)
class PriceQuarter:
    """Archived quarter of the price table, kept for audit"""

    year: int
    quarter: str
    products: Tuple[GraftProduct, ...] = ()

    @property
    def quarter_label(self) -> str:
        return f"{self.quarter} {self.year}"


@dataclass
class PriceTableValidation:
    """Result of checking a price table for configuration errors"""

    valid: bool
    errors: List[str] = field(default_factory=list)


@dataclass
class ProgressionRow:
    """One treatment in a wound healing progression"""

    treatment_index: int
    area_at_treatment: Decimal  # Display value, 1 decimal place
    carried_area: Decimal  # Unrounded area the row was computed from
    unit_price: Decimal
    total_billable: Decimal
    reimbursed_amount: Decimal
    cost_amount: Decimal
    billing_fee_amount: Decimal
    gross_profit: Decimal
    net_profit: Decimal


@dataclass
class ProgressionTotals:
    """Sums across every row of a progression"""

    area_at_treatment: Decimal
    total_billable: Decimal
    reimbursed_amount: Decimal
    cost_amount: Decimal
    billing_fee_amount: Decimal
    gross_profit: Decimal
    net_profit: Decimal


@dataclass
class Progression:
    """Output of the revenue progression engine"""

    product: GraftProduct
    initial_area: Decimal
    treatment_count: int
    closure_rate_percent: Decimal
    billing_fee_percent: Decimal
    rows: List[ProgressionRow]
    totals: ProgressionTotals


@dataclass
class Quote:
    """Flat per-treatment revenue quote without healing decay"""

    product: GraftProduct
    wound_area: Decimal
    treatment_count: int
    billable_per_treatment: Decimal
    provider_invoice_per_treatment: Decimal
    billable_all_treatments: Decimal
    provider_invoice_all_treatments: Decimal


@dataclass
class ProgressionReport:
    """Table handed to the report renderer"""

    title: str
    subtitle: str
    headers: List[str]
    rows: List[List[str]]
    totals: List[str]
    footer: List[str]
    filename: str
