"""Tests for the product catalog service."""

from decimal import Decimal

import pytest

from cafe_pos.core.exceptions import ConflictError, NotFoundError
from cafe_pos.schemas.product import ProductCreate, ProductUpdate, RecipeLineCreate
from cafe_pos.services.product_service import ProductService


class TestCreateProduct:

    def test_cost_and_profit_from_recipe(self, latte):
        assert latte.cost == Decimal("10")
        assert latte.profit == Decimal("40")
        assert [item.material_id for item in latte.recipe] == ["mat-beans", "mat-milk"]
        assert latte.recipe[0].material_name == "Coffee Beans"
        assert latte.recipe[0].total_cost == Decimal("6")

    def test_generated_id_and_sku(self, db_session):
        product = ProductService(db_session).create_product(ProductCreate(name="Water", price=Decimal("5")))
        assert product.id.startswith("prod-")
        assert product.sku.startswith("SKU-")
        assert product.cost == Decimal("0")
        assert product.profit == Decimal("5")

    def test_duplicate_sku_conflicts(self, db_session, latte):
        with pytest.raises(ConflictError):
            ProductService(db_session).create_product(
                ProductCreate(name="Other", sku="SKU-LATTE", price=Decimal("1"))
            )

    def test_unknown_recipe_material(self, db_session):
        with pytest.raises(NotFoundError):
            ProductService(db_session).create_product(ProductCreate(
                name="Mystery", price=Decimal("5"),
                recipe=[RecipeLineCreate(material_id="mat-none", quantity=Decimal("1"))],
            ))

    def test_recipe_cost_is_frozen(self, db_session, latte, coffee_materials):
        beans, _ = coffee_materials
        beans.unit_cost = Decimal("100")
        db_session.commit()

        product = ProductService(db_session).get_product("prod-latte")
        assert product.cost == Decimal("10")
        assert product.recipe[0].unit_cost == Decimal("3")


class TestUpdateProduct:

    def test_price_change_rederives_profit(self, db_session, latte):
        product = ProductService(db_session).update_product("prod-latte", ProductUpdate(price=Decimal("60")))
        assert product.price == Decimal("60")
        assert product.cost == Decimal("10")
        assert product.profit == Decimal("50")

    def test_partial_update_keeps_other_fields(self, db_session, latte):
        product = ProductService(db_session).update_product("prod-latte", ProductUpdate(is_active=False))
        assert product.is_active is False
        assert product.name == "Latte"
        assert product.profit == Decimal("40")

    def test_list_active_only(self, db_session, latte):
        service = ProductService(db_session)
        service.update_product("prod-latte", ProductUpdate(is_active=False))
        assert service.list_products(active_only=True) == []
        assert len(service.list_products()) == 1
