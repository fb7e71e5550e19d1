"""Product catalog service: recipe snapshot, cost and profit derivation."""

import logging
from typing import List

from sqlalchemy.orm import Session

from cafe_pos.core import ids
from cafe_pos.core.exceptions import ConflictError, NotFoundError
from cafe_pos.models.material import RawMaterial
from cafe_pos.models.product import Product
from cafe_pos.schemas.product import ProductCreate, ProductUpdate
from cafe_pos.services import recipe_resolver

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"barcode", "category", "image_url"}


class ProductService:
    """Create, read and update catalog products."""

    def __init__(self, db: Session):
        self.db = db

    def list_products(self, active_only: bool = False) -> List[Product]:
        query = self.db.query(Product)
        if active_only:
            query = query.filter(Product.is_active.is_(True))
        return query.order_by(Product.name, Product.id).all()

    def get_product(self, product_id: str) -> Product:
        product = self.db.get(Product, product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    def create_product(self, data: ProductCreate, commit: bool = True) -> Product:
        """Create a product, freezing its recipe cost at authoring time.

        ``cost`` is the sum of the recipe's total costs and ``profit`` is
        ``price - cost`` rounded to a whole currency unit.
        """
        product_id = data.id or ids.new_id(ids.PRODUCT)
        if self.db.get(Product, product_id) is not None:
            raise ConflictError(f"Product '{product_id}' already exists")

        sku = data.sku or ids.default_sku()
        if self._sku_taken(sku):
            if data.sku:
                raise ConflictError(f"SKU '{sku}' is already in use")
            # Two products created in the same millisecond
            sku = ids.default_sku(unique=True)

        material_ids = [line.material_id for line in data.recipe]
        materials = {
            m.id: m
            for m in self.db.query(RawMaterial).filter(RawMaterial.id.in_(material_ids)).all()
        } if material_ids else {}
        recipe = recipe_resolver.build_recipe_items(data.recipe, materials)
        cost = recipe_resolver.recipe_cost(recipe)

        product = Product(
            id=product_id,
            name=data.name,
            sku=sku,
            barcode=data.barcode,
            category=data.category,
            image_url=data.image_url,
            cost=cost,
            price=data.price,
            profit=recipe_resolver.product_profit(data.price, cost),
            is_active=data.is_active,
            recipe=recipe,
        )
        self.db.add(product)
        if commit:
            self.db.commit()
            self.db.refresh(product)
        else:
            self.db.flush()

        logger.info(f"Created product {product.id} ({product.name}): cost {cost}, price {product.price}")
        if product.profit < 0:
            logger.warning(f"Product '{product.name}' sells below its recipe cost")
        return product

    def _sku_taken(self, sku: str) -> bool:
        return self.db.query(Product.id).filter(Product.sku == sku).first() is not None

    def update_product(self, product_id: str, updates: ProductUpdate) -> Product:
        """Apply a partial update. Cost stays frozen; a new price re-derives profit."""
        product = self.get_product(product_id)
        changes = {
            k: v for k, v in updates.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }
        for field, value in changes.items():
            setattr(product, field, value)
        if "price" in changes:
            product.profit = recipe_resolver.product_profit(product.price, product.cost)
        self.db.commit()
        self.db.refresh(product)
        return product
