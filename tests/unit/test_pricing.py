"""Unit tests for the graft price table"""

import pytest
from decimal import Decimal
from woundcare_revenue.domain.pricing import GraftPriceTable, validate_price_table
from woundcare_revenue.domain.exceptions import AmbiguousProductError, ProductNotFoundError
from woundcare_revenue.domain.models import GraftProduct, PriceQuarter


def make_product(manufacturer, product_name, billing_code, unit_price, is_active=True):
    return GraftProduct(manufacturer, product_name, billing_code, Decimal(unit_price), 2025, "Q3", is_active)


def test_active_products_hide_discontinued(price_table: GraftPriceTable):
    """Test inactive grafts stay in the table but are not selectable"""
    active = price_table.active_products()

    assert len(price_table.products) == 7
    assert len(active) == 6
    assert "Q4313-Q2" not in [p.billing_code for p in active]


def test_active_products_keep_configured_order(price_table: GraftPriceTable):
    """Test order matches the configuration file"""
    names = [p.product_name for p in price_table.active_products()]

    assert names == ["Membrane Wrap", "Membrane Hydro", "Dermabind Q3", "Helicoll", "Esano Sheet", "Esano Flow"]


def test_quarter_label(price_table: GraftPriceTable):
    assert price_table.quarter_label == "Q3 2025"


def test_find_product_by_billing_code(price_table: GraftPriceTable):
    """Test a unique billing code resolves on its own"""
    product = price_table.find_product("Q4205-Q3")

    assert product.product_name == "Membrane Wrap"
    assert product.unit_price == Decimal("1190.44")


def test_find_product_ignores_inactive(price_table: GraftPriceTable):
    """Test discontinued grafts cannot be selected"""
    with pytest.raises(ProductNotFoundError):
        price_table.find_product("Q4313-Q2")


def test_find_product_ignores_history(price_table: GraftPriceTable):
    """Test archived quarters never take part in lookups"""
    with pytest.raises(ProductNotFoundError):
        price_table.find_product("Q4205-Q2")


def test_find_product_ambiguous_code(price_table: GraftPriceTable):
    """Test a shared billing code needs manufacturer and name"""
    with pytest.raises(AmbiguousProductError):
        price_table.find_product("Q4275-Q3")

    product = price_table.find_product("Q4275-Q3", manufacturer="Evolution", product_name="Esano Flow")
    assert product.product_name == "Esano Flow"


def test_select_empty_returns_none(price_table: GraftPriceTable):
    """Test empty selection is left for the caller to reject"""
    assert price_table.select(None) is None
    assert price_table.select("") is None


def test_validate_clean_table(price_table: GraftPriceTable):
    result = price_table.validate()

    assert result.valid is True
    assert result.errors == []


def test_validate_reports_every_error():
    """Test duplicates and non-positive prices are all reported"""
    products = [
        make_product("Biolab", "Membrane Wrap", "Q4205-Q3", "1190.44"),
        make_product("Biolab", "Membrane Wrap", "Q4205-Q3", "1190.44"),
        make_product("Encoll", "Helicoll", "Q4164-Q3", "0"),
        make_product("Revogen", "Revoshield", "Q4289-Q3", "-10.00"),
    ]

    result = validate_price_table(products)

    assert result.valid is False
    assert result.errors == [
        "Duplicate graft: Biolab Membrane Wrap (Q4205-Q3)",
        "Invalid price for Encoll Helicoll: 0",
        "Invalid price for Revogen Revoshield: -10.00",
    ]


def test_same_product_different_code_is_not_duplicate():
    """Test key includes billing code, so quarter variants can coexist"""
    products = [
        make_product("Dermabind", "Dermabind", "Q4313-Q2", "3337.23"),
        make_product("Dermabind", "Dermabind", "Q4313-Q3", "3520.69"),
    ]

    assert validate_price_table(products).valid is True


def test_history_is_read_only_snapshot():
    """Test history is copied into tuples at construction"""
    archived = [make_product("Biolab", "Membrane Wrap", "Q4205-Q2", "1150.00")]
    table = GraftPriceTable(year=2025, quarter="Q3", products=[], history=[PriceQuarter(2025, "Q2", archived)])
    archived.append(make_product("Encoll", "Helicoll", "Q4164-Q2", "1600.00"))

    assert len(table.history[0].products) == 1
    assert table.history[0].quarter_label == "Q2 2025"


@pytest.mark.parametrize("price", ["NaN", "sNaN", "Infinity", "-Infinity"])
def test_validate_rejects_non_finite_price(price):
    """Test non-finite prices are reported instead of raising"""
    products = [
        make_product("Biolab", "Membrane Wrap", "Q4205-Q3", price),
        make_product("Encoll", "Helicoll", "Q4164-Q3", "1640.93"),
    ]

    result = validate_price_table(products)

    assert result.valid is False
    assert result.errors == [f"Invalid price for Biolab Membrane Wrap: {Decimal(price)}"]


def test_validate_non_finite_price_keeps_other_errors():
    """Test a NaN price does not hide duplicates or negative prices"""
    products = [
        make_product("Biolab", "Membrane Wrap", "Q4205-Q3", "NaN"),
        make_product("Biolab", "Membrane Wrap", "Q4205-Q3", "1190.44"),
        make_product("Revogen", "Revoshield", "Q4289-Q3", "-1"),
    ]

    result = validate_price_table(products)

    assert result.errors == [
        "Invalid price for Biolab Membrane Wrap: NaN",
        "Duplicate graft: Biolab Membrane Wrap (Q4205-Q3)",
        "Invalid price for Revogen Revoshield: -1",
    ]
