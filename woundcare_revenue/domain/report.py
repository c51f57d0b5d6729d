"""Progression report table handed to the document renderer"""

from datetime import date
from typing import List
from woundcare_revenue.domain.models import Progression, ProgressionReport, ProgressionRow
from woundcare_revenue.utils.formatting import format_usd, format_area

REPORT_TITLE = "Wound Healing Progression Analysis"

REPORT_HEADERS = [
    "Code",
    "Product",
    "Treatment",
    "Units - sq cm",
    "Price Per sq cm",
    "Total Billable",
    "Reimbursed by Medicare",
    "Cost Per Graft",
    "Billing Fee",
    "Gross Profit",
    "Net Profit",
]


def _format_row(progression: Progression, row: ProgressionRow) -> List[str]:
    return [
        progression.product.billing_code,
        progression.product.label,
        str(row.treatment_index),
        format_area(row.area_at_treatment),
        format_usd(row.unit_price),
        format_usd(row.total_billable),
        format_usd(row.reimbursed_amount),
        format_usd(row.cost_amount),
        format_usd(row.billing_fee_amount),
        format_usd(row.gross_profit),
        format_usd(row.net_profit),
    ]


def build_progression_report(progression: Progression, generated_on: date | None = None) -> ProgressionReport:
    """
    Lay out a progression as a landscape table.

    Body rows mirror the progression rows; the final totals row shows total
    area with no decimals and summed money columns.
    """
    if generated_on is None:
        generated_on = date.today()

    totals = progression.totals
    closure = progression.closure_rate_percent.normalize()

    return ProgressionReport(
        title=REPORT_TITLE,
        subtitle=f"{progression.product.label} - {closure:f}% closure rate per treatment",
        headers=list(REPORT_HEADERS),
        rows=[_format_row(progression, row) for row in progression.rows],
        totals=[
            "",
            "",
            "Total:",
            format_area(totals.area_at_treatment, places=0),
            "",
            format_usd(totals.total_billable),
            format_usd(totals.reimbursed_amount),
            format_usd(totals.cost_amount),
            format_usd(totals.billing_fee_amount),
            format_usd(totals.gross_profit),
            format_usd(totals.net_profit),
        ],
        footer=[
            "Generated by Provider Revenue Calculator",
            f"Report generated on {generated_on.strftime('%m/%d/%Y')}",
        ],
        filename=f"wound-progression-analysis-{generated_on.isoformat()}.pdf",
    )
