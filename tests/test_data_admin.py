"""Tests for store settings and data administration."""

from decimal import Decimal

import pytest

from cafe_pos.core.exceptions import NotFoundError
from cafe_pos.models.material import RawMaterial
from cafe_pos.models.product import Product
from cafe_pos.models.sale import Sale
from cafe_pos.models.stock import StockMovement
from cafe_pos.models.user import User
from cafe_pos.schemas.material import MaterialCreate
from cafe_pos.schemas.product import ProductCreate, RecipeLineCreate
from cafe_pos.schemas.sale import CartLineCreate, SaleCreate
from cafe_pos.schemas.settings import DataInitRequest, StoreSettingsUpdate
from cafe_pos.schemas.user import UserCreate
from cafe_pos.services.data_admin_service import DataAdminService
from cafe_pos.services.sales_service import SalesService


class TestStoreSettings:

    def test_defaults_created_on_first_read(self, db_session):
        row = DataAdminService(db_session).get_settings()
        assert row.currency == "EGP"
        assert row.work_start_time == "09:00"
        assert row.late_threshold == 15

    def test_partial_update(self, db_session):
        service = DataAdminService(db_session)
        row = service.update_settings(StoreSettingsUpdate(late_threshold=5, work_start_time="8:30"))
        assert row.late_threshold == 5
        assert row.work_start_time == "08:30"
        assert row.currency == "EGP"


class TestDataAdmin:

    def test_clear_data_keeps_catalog(self, db_session, latte):
        SalesService(db_session).post_sale(SaleCreate(items=[CartLineCreate(product_id="prod-latte", quantity=1)]))

        counts = DataAdminService(db_session).clear_data()

        assert counts["sales"] == 1
        assert db_session.query(Sale).count() == 0
        assert db_session.query(StockMovement).count() == 0
        assert db_session.query(Product).count() == 1

    def test_initialize_replaces_catalog(self, db_session, latte):
        seed = DataInitRequest(
            materials=[MaterialCreate(id="mat-tea", name="Tea", unit="g", unit_cost=Decimal("1"),
                                      current_stock=Decimal("500"))],
            products=[ProductCreate(id="prod-tea", name="Tea", price=Decimal("20"),
                                    recipe=[RecipeLineCreate(material_id="mat-tea", quantity=Decimal("5"))])],
            users=[UserCreate(id="user-owner", username="owner", full_name="Owner", role="owner")],
            settings=StoreSettingsUpdate(store_name="Tea House"),
        )

        counts = DataAdminService(db_session).initialize(seed)

        assert counts == {"materials": 1, "products": 1, "users": 1}
        assert [m.id for m in db_session.query(RawMaterial).all()] == ["mat-tea"]
        assert [p.id for p in db_session.query(Product).all()] == ["prod-tea"]
        assert db_session.get(Product, "prod-tea").profit == Decimal("15")
        assert db_session.get(User, "user-owner").role == "owner"
        assert DataAdminService(db_session).get_settings().store_name == "Tea House"

    def test_failed_initialize_keeps_existing_store(self, db_session, latte):
        seed = DataInitRequest(
            materials=[MaterialCreate(id="m-new", name="New", unit="g")],
            products=[ProductCreate(id="prod-bad", name="Bad", price=Decimal("10"),
                                    recipe=[RecipeLineCreate(material_id="missing", quantity=Decimal("1"))])],
            settings=StoreSettingsUpdate(store_name="Never Applied"),
        )

        with pytest.raises(NotFoundError):
            DataAdminService(db_session).initialize(seed)

        assert sorted(m.id for m in db_session.query(RawMaterial).all()) == ["mat-beans", "mat-milk"]
        assert [p.id for p in db_session.query(Product).all()] == ["prod-latte"]
        assert db_session.get(Product, "prod-latte").recipe
        assert DataAdminService(db_session).get_settings().store_name != "Never Applied"
