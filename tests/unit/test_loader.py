"""Unit tests for loading the graft price table configuration"""

import json
import pytest
from decimal import Decimal
from woundcare_revenue.config import DEFAULT_GRAFT_PRICES_PATH
from woundcare_revenue.infrastructure.pricing.loader import load_price_table, parse_price_table
from woundcare_revenue.domain.exceptions import PriceTableConfigError


def test_load_packaged_price_table():
    """Test the shipped Q4 2025 table loads and validates"""
    table = load_price_table(DEFAULT_GRAFT_PRICES_PATH)

    assert table.quarter_label == "Q4 2025"
    assert len(table.products) == 13
    assert len(table.active_products()) == 12
    assert table.find_product("Q4205-Q4").unit_price == Decimal("1237.28")


def test_load_packaged_history():
    """Test Q3 2025 is kept as an archived quarter"""
    table = load_price_table(DEFAULT_GRAFT_PRICES_PATH)

    assert len(table.history) == 1
    archived = table.history[0]
    assert archived.quarter_label == "Q3 2025"
    assert len(archived.products) == 10
    assert archived.products[0].billing_code == "Q4205-Q3"
    assert archived.products[0].unit_price == Decimal("1190.44")
    assert {p.quarter for p in archived.products} == {"Q3"}


def test_numeric_prices_stay_exact():
    """Test JSON numbers are read through their text, not binary floats"""
    table = parse_price_table(
        {
            "year": 2026,
            "quarter": "Q1",
            "products": [
                {"manufacturer": "Biolab", "product_name": "Membrane Wrap", "billing_code": "Q4205-Q1", "unit_price": 1190.44}
            ],
        }
    )

    assert table.products[0].unit_price == Decimal("1190.44")
    assert table.products[0].is_active is True
    assert table.history == ()


def test_invalid_table_reports_all_errors(tmp_path):
    """Test duplicate and non-positive entries fail at load time"""
    path = tmp_path / "grafts.json"
    path.write_text(
        json.dumps(
            {
                "year": 2025,
                "quarter": "Q4",
                "products": [
                    {"manufacturer": "Biolab", "product_name": "Membrane Wrap", "billing_code": "Q4205-Q4", "unit_price": "1237.28"},
                    {"manufacturer": "Biolab", "product_name": "Membrane Wrap", "billing_code": "Q4205-Q4", "unit_price": "1237.28"},
                    {"manufacturer": "Encoll", "product_name": "Helicoll", "billing_code": "Q4164-Q4", "unit_price": "0"},
                ],
            }
        )
    )

    with pytest.raises(PriceTableConfigError) as exc_info:
        load_price_table(path)

    assert len(exc_info.value.errors) == 2
    assert "Duplicate graft" in exc_info.value.errors[0]
    assert "Invalid price" in exc_info.value.errors[1]


def test_malformed_entry():
    """Test missing fields surface as configuration errors"""
    with pytest.raises(PriceTableConfigError, match="Malformed"):
        parse_price_table({"year": 2025, "quarter": "Q4", "products": [{"manufacturer": "Biolab"}]})


def test_unknown_quarter():
    with pytest.raises(PriceTableConfigError):
        parse_price_table({"year": 2025, "quarter": "Q5", "products": []})


def test_missing_file(tmp_path):
    with pytest.raises(PriceTableConfigError, match="Cannot read price table"):
        load_price_table(tmp_path / "missing.json")


def test_empty_archived_quarter_keeps_its_label():
    """Test an archived quarter with no products still knows its quarter"""
    table = parse_price_table(
        {
            "year": 2025,
            "quarter": "Q4",
            "products": [],
            "history": [{"year": 2025, "quarter": "Q2", "products": []}],
        }
    )

    assert table.history[0].quarter_label == "Q2 2025"
    assert table.history[0].products == ()


def test_nan_price_is_reported_with_other_errors():
    """Test a NaN price fails validation without hiding other errors"""
    with pytest.raises(PriceTableConfigError) as exc_info:
        parse_price_table(
            {
                "year": 2025,
                "quarter": "Q4",
                "products": [
                    {"manufacturer": "Biolab", "product_name": "Membrane Wrap", "billing_code": "Q4205-Q4", "unit_price": "NaN"},
                    {"manufacturer": "Biolab", "product_name": "Membrane Wrap", "billing_code": "Q4205-Q4", "unit_price": "1237.28"},
                    {"manufacturer": "Encoll", "product_name": "Helicoll", "billing_code": "Q4164-Q4", "unit_price": "-1"},
                ],
            }
        )

    assert exc_info.value.errors == [
        "Invalid price for Biolab Membrane Wrap: NaN",
        "Duplicate graft: Biolab Membrane Wrap (Q4205-Q4)",
        "Invalid price for Encoll Helicoll: -1",
    ]


def test_infinite_price_fails_load():
    with pytest.raises(PriceTableConfigError, match="Invalid price"):
        parse_price_table(
            {
                "year": 2025,
                "quarter": "Q4",
                "products": [
                    {"manufacturer": "Biolab", "product_name": "Membrane Wrap", "billing_code": "Q4205-Q4", "unit_price": "Infinity"},
                ],
            }
        )
