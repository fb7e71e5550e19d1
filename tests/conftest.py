"""Pytest configuration and fixtures."""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cafe_pos.db.base import Base
from cafe_pos.db.session import get_db
from cafe_pos.main import app
# Import all models to ensure they're registered with Base.metadata
from cafe_pos.models import *  # noqa: F401,F403
from cafe_pos.models.material import RawMaterial
from cafe_pos.models.store_settings import StoreSettings
from cafe_pos.schemas.product import ProductCreate, RecipeLineCreate
from cafe_pos.services.product_service import ProductService

# Use in-memory SQLite for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a test database engine."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory) -> Generator[Session, None, None]:
    """Create a test database session."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    # Disable rate limiters during tests to avoid flaky failures
    from cafe_pos.core.rate_limit import limiter
    limiter.enabled = False
    # Don't raise server exceptions so we can test error status codes
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def add_material(db: Session, material_id: str, **fields) -> RawMaterial:
    values = {
        "name": material_id,
        "unit": "g",
        "unit_cost": Decimal("0"),
        "current_stock": Decimal("0"),
        "min_stock": Decimal("0"),
        "target_stock": Decimal("0"),
    }
    values.update(fields)
    material = RawMaterial(id=material_id, **values)
    db.add(material)
    db.commit()
    db.refresh(material)
    return material


@pytest.fixture
def make_material(db_session: Session):
    """Factory inserting a raw material straight into the table."""
    def _make(material_id: str, **fields) -> RawMaterial:
        return add_material(db_session, material_id, **fields)
    return _make


@pytest.fixture
def coffee_materials(db_session: Session):
    """Beans and milk, the two materials of a latte."""
    beans = add_material(
        db_session, "mat-beans", name="Coffee Beans", unit="g",
        unit_cost=Decimal("3"), current_stock=Decimal("100"),
        min_stock=Decimal("20"), target_stock=Decimal("200"),
    )
    milk = add_material(
        db_session, "mat-milk", name="Milk", unit="ml",
        unit_cost=Decimal("4"), current_stock=Decimal("50"),
        min_stock=Decimal("10"), target_stock=Decimal("100"),
    )
    return beans, milk


@pytest.fixture
def latte(db_session: Session, coffee_materials):
    """Price 50; recipe 2 beans at 3 + 1 milk at 4, so cost 10 and profit 40."""
    return ProductService(db_session).create_product(ProductCreate(
        id="prod-latte",
        name="Latte",
        sku="SKU-LATTE",
        price=Decimal("50"),
        recipe=[
            RecipeLineCreate(material_id="mat-beans", quantity=Decimal("2")),
            RecipeLineCreate(material_id="mat-milk", quantity=Decimal("1")),
        ],
    ))


@pytest.fixture
def store_settings(db_session: Session) -> StoreSettings:
    row = StoreSettings(work_start_time="09:00", work_end_time="17:00", late_threshold=15)
    db_session.add(row)
    db_session.commit()
    db_session.refresh(row)
    return row
