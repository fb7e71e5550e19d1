"""Tests for posting sales and the stock they consume."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import patch

import pytest

from cafe_pos.core.exceptions import ConflictError, NotFoundError, ValidationError
from cafe_pos.models.sale import Sale, SaleItem
from cafe_pos.models.stock import StockMovement
from cafe_pos.schemas.product import ProductCreate, ProductUpdate, RecipeLineCreate
from cafe_pos.schemas.sale import CartLineCreate, SaleCreate
from cafe_pos.services.product_service import ProductService
from cafe_pos.services.sales_service import SalesService
from cafe_pos.services.stock_ledger import StockLedger


def _sale(quantity=1, **fields):
    return SaleCreate(items=[CartLineCreate(product_id="prod-latte", quantity=quantity)], **fields)


class TestPostSale:

    def test_totals_and_snapshot(self, db_session, latte):
        sale = SalesService(db_session).post_sale(_sale(quantity=2, cashier_id="user-1", cashier_name="Mona"))

        assert sale.id.startswith("SALE-")
        assert sale.subtotal == Decimal("100")
        assert sale.total_cost == Decimal("20")
        assert sale.total_profit == Decimal("80")
        item = sale.items[0]
        assert item.product_name == "Latte"
        assert item.unit_price == Decimal("50")
        assert item.total_profit == Decimal("80")

    def test_deducts_recipe_materials(self, db_session, latte):
        SalesService(db_session).post_sale(_sale(quantity=3))

        ledger = StockLedger(db_session)
        assert ledger.get_material("mat-beans").current_stock == Decimal("94")
        assert ledger.get_material("mat-milk").current_stock == Decimal("47")
        movements = db_session.query(StockMovement).all()
        assert {m.ref_type for m in movements} == {"sale"}
        assert len(movements) == 2

    def test_repeated_sales_drive_stock_negative(self, db_session, make_material):
        make_material("m1", unit_cost=Decimal("1"), current_stock=Decimal("3"))
        ProductService(db_session).create_product(ProductCreate(
            id="prod-shot", name="Shot", price=Decimal("10"),
            recipe=[RecipeLineCreate(material_id="m1", quantity=Decimal("2"))],
        ))
        service = SalesService(db_session)
        line = [CartLineCreate(product_id="prod-shot", quantity=1)]

        service.post_sale(SaleCreate(items=line))
        service.post_sale(SaleCreate(items=line))

        assert StockLedger(db_session).get_material("m1").current_stock == Decimal("-1")
        assert db_session.query(Sale).count() == 2

    def test_gram_level_recipe_on_kilogram_stock(self, db_session, make_material):
        make_material("m-kg", unit="kg", unit_cost=Decimal("3.3333"), current_stock=Decimal("10"))
        product = ProductService(db_session).create_product(ProductCreate(
            id="prod-cookie", name="Cookie", price=Decimal("5"),
            recipe=[RecipeLineCreate(material_id="m-kg", quantity=Decimal("0.0125"))],
        ))
        assert product.recipe[0].total_cost == Decimal("0.04166625")
        assert product.cost == Decimal("0.04166625")

        sale = SalesService(db_session).post_sale(
            SaleCreate(items=[CartLineCreate(product_id="prod-cookie", quantity=1)])
        )

        assert sale.total_cost == Decimal("0.04166625")
        assert StockLedger(db_session).get_material("m-kg").current_stock == Decimal("9.9875")

    def test_later_sale_leaves_earlier_record_unchanged(self, db_session, latte):
        service = SalesService(db_session)
        first = service.post_sale(_sale(quantity=2, cashier_id="user-1"))
        columns = [c.key for c in Sale.__table__.columns]
        item_columns = [c.key for c in SaleItem.__table__.columns]
        before = {c: getattr(first, c) for c in columns}
        items_before = [{c: getattr(i, c) for c in item_columns} for i in first.items]

        ProductService(db_session).update_product("prod-latte", ProductUpdate(price=Decimal("60")))
        service.post_sale(_sale(quantity=1))
        db_session.expire_all()

        stored = service.get_sale(first.id)
        assert {c: getattr(stored, c) for c in columns} == before
        assert [{c: getattr(i, c) for c in item_columns} for i in stored.items] == items_before

    def test_product_with_empty_recipe(self, db_session):
        ProductService(db_session).create_product(ProductCreate(id="prod-water", name="Water", price=Decimal("5")))

        sale = SalesService(db_session).post_sale(
            SaleCreate(items=[CartLineCreate(product_id="prod-water", quantity=4)])
        )
        assert sale.subtotal == Decimal("20")
        assert db_session.query(StockMovement).count() == 0

    def test_local_date_from_timestamp(self, db_session, latte):
        ts = datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc)
        sale = SalesService(db_session).post_sale(_sale(timestamp=ts))
        assert sale.date == "2024-03-01"

    def test_unknown_product(self, db_session):
        with pytest.raises(NotFoundError):
            SalesService(db_session).post_sale(SaleCreate(items=[CartLineCreate(product_id="nope", quantity=1)]))

    def test_inactive_product(self, db_session, latte):
        ProductService(db_session).update_product("prod-latte", ProductUpdate(is_active=False))
        with pytest.raises(ValidationError):
            SalesService(db_session).post_sale(_sale())

    def test_duplicate_id(self, db_session, latte):
        service = SalesService(db_session)
        service.post_sale(_sale(id="SALE-1"))
        with pytest.raises(ConflictError):
            service.post_sale(_sale(id="SALE-1"))

    def test_failed_deduction_rolls_back_everything(self, db_session, latte):
        ledger = StockLedger(db_session)
        service = SalesService(db_session, ledger)
        real_deduct = ledger.deduct
        calls = []

        def flaky_deduct(material_id, quantity, **kwargs):
            calls.append(material_id)
            if len(calls) == 2:
                raise RuntimeError("disk full")
            return real_deduct(material_id, quantity, **kwargs)

        with patch.object(ledger, "deduct", side_effect=flaky_deduct):
            with pytest.raises(RuntimeError):
                service.post_sale(_sale(quantity=1))

        assert db_session.query(Sale).count() == 0
        assert db_session.query(StockMovement).count() == 0
        assert ledger.get_material("mat-beans").current_stock == Decimal("100")


class TestSaleQueries:

    def test_list_by_date_and_cashier(self, db_session, latte):
        service = SalesService(db_session)
        day1 = datetime(2024, 3, 1, 10, tzinfo=timezone.utc)
        day2 = datetime(2024, 3, 2, 10, tzinfo=timezone.utc)
        service.post_sale(_sale(timestamp=day1, cashier_id="c1"))
        service.post_sale(_sale(timestamp=day2, cashier_id="c1"))
        service.post_sale(_sale(timestamp=day2, cashier_id="c2"))

        assert len(service.list_sales()) == 3
        assert len(service.list_sales(date="2024-03-02")) == 2
        assert len(service.list_sales(date="2024-03-02", cashier_id="c2")) == 1
        assert len(service.sales_between("2024-03-01", "2024-03-01")) == 1

    def test_get_missing_sale(self, db_session):
        with pytest.raises(NotFoundError):
            SalesService(db_session).get_sale("SALE-404")
