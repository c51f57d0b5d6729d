"""Load the graft price table from its JSON configuration file"""

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List
from woundcare_revenue.domain.models import GraftProduct, PriceQuarter
from woundcare_revenue.domain.pricing import GraftPriceTable
from woundcare_revenue.domain.exceptions import PriceTableConfigError
from woundcare_revenue.infrastructure.observability.metrics import price_table_errors_gauge

logger = logging.getLogger(__name__)

QUARTERS = ("Q1", "Q2", "Q3", "Q4")


def _parse_quarter(data: Dict[str, Any]) -> tuple[int, str]:
    year = int(data["year"])
    quarter = str(data["quarter"])
    if quarter not in QUARTERS:
        raise ValueError(f"unknown quarter {quarter!r}")
    return year, quarter


def _parse_products(items: List[Dict[str, Any]], year: int, quarter: str) -> List[GraftProduct]:
    # Prices arrive as strings or numbers; both go through str() to stay exact
    return [
        GraftProduct(
            manufacturer=item["manufacturer"],
            product_name=item["product_name"],
            billing_code=item["billing_code"],
            unit_price=Decimal(str(item["unit_price"])),
            year=year,
            quarter=quarter,
            is_active=bool(item.get("is_active", True)),
        )
        for item in items
    ]


def parse_price_table(data: Dict[str, Any]) -> GraftPriceTable:
    """
    Build a price table from decoded JSON and validate the active quarter.

    Raises:
        PriceTableConfigError: Malformed entries, duplicate keys or non-positive prices
    """
    try:
        year, quarter = _parse_quarter(data)
        products = _parse_products(data["products"], year, quarter)

        history = []
        for archived in data.get("history", []):
            archived_year, archived_quarter = _parse_quarter(archived)
            history.append(
                PriceQuarter(
                    year=archived_year,
                    quarter=archived_quarter,
                    products=tuple(_parse_products(archived["products"], archived_year, archived_quarter)),
                )
            )
    except (KeyError, ValueError, TypeError, InvalidOperation) as e:
        price_table_errors_gauge.set(1)
        raise PriceTableConfigError([f"Malformed price table entry: {e!r}"]) from e

    table = GraftPriceTable(year=year, quarter=quarter, products=products, history=history)

    result = table.validate()
    price_table_errors_gauge.set(len(result.errors))
    if not result.valid:
        raise PriceTableConfigError(result.errors)

    return table


def load_price_table(path: Path) -> GraftPriceTable:
    """Read and validate the price table file once at startup"""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PriceTableConfigError([f"Cannot read price table {path}: {e}"]) from e

    table = parse_price_table(data)
    logger.info(
        "Graft price table loaded",
        extra={
            "pricing_quarter": table.quarter_label,
            "active_products": len(table.active_products()),
            "archived_quarters": len(table.history),
        },
    )
    return table
