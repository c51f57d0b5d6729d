"""Pytest fixtures for testing"""

import pytest
from decimal import Decimal
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from woundcare_revenue.api.main import create_app
from woundcare_revenue.infrastructure.database.models import Base
from woundcare_revenue.infrastructure.database.session import get_db
from woundcare_revenue.domain.models import GraftProduct, PriceQuarter
from woundcare_revenue.domain.pricing import GraftPriceTable


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_product(
    manufacturer: str,
    product_name: str,
    billing_code: str,
    unit_price: str,
    is_active: bool = True,
) -> GraftProduct:
    return GraftProduct(
        manufacturer=manufacturer,
        product_name=product_name,
        billing_code=billing_code,
        unit_price=Decimal(unit_price),
        year=2025,
        quarter="Q3",
        is_active=is_active,
    )


@pytest.fixture
def membrane_wrap() -> GraftProduct:
    """Q3 2025 Membrane Wrap, the product used in the worked example"""
    return make_product("Biolab", "Membrane Wrap", "Q4205-Q3", "1190.44")


@pytest.fixture
def price_table(membrane_wrap: GraftProduct) -> GraftPriceTable:
    """Q3 2025 style table with a discontinued graft and a shared billing code"""
    products = [
        membrane_wrap,
        make_product("Biolab", "Membrane Hydro", "Q4290-Q3", "1864.71"),
        make_product("Dermabind", "Dermabind Q2", "Q4313-Q2", "3337.23", is_active=False),
        make_product("Dermabind", "Dermabind Q3", "Q4313-Q3", "3520.69"),
        make_product("Encoll", "Helicoll", "Q4164-Q3", "1640.93"),
        make_product("Evolution", "Esano Sheet", "Q4275-Q3", "2675.48"),
        make_product("Evolution", "Esano Flow", "Q4275-Q3", "2675.48"),
    ]
    history = [PriceQuarter(2025, "Q2", (make_product("Biolab", "Membrane Wrap", "Q4205-Q2", "1150.00"),))]
    return GraftPriceTable(year=2025, quarter="Q3", products=products, history=history)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session, price_table: GraftPriceTable) -> TestClient:
    """Create FastAPI test client with test database and price table"""
    app = create_app(price_table=price_table)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
