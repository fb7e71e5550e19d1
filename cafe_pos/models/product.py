"""Product and recipe models."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from cafe_pos.db.base import Base, TimestampMixin
from cafe_pos.models.validators import non_negative, positive


class Product(Base, TimestampMixin):
    """A sellable item whose recipe consumes raw materials."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    sku: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    barcode: Mapped[Optional[str]] = mapped_column(String(64), nullable=True, index=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    cost: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=0, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    profit: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    recipe: Mapped[list["RecipeItem"]] = relationship(
        "RecipeItem",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="RecipeItem.position",
    )

    @validates("price")
    def _validate_price(self, key, value):
        return non_negative(key, value)


class RecipeItem(Base):
    """One material consumed per unit of a product.

    Name, unit and unit cost are frozen when the recipe is authored;
    later changes to the material's cost do not flow back here.
    """

    __tablename__ = "recipe_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[str] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    material_id: Mapped[str] = mapped_column(
        ForeignKey("raw_materials.id"), nullable=False, index=True
    )
    material_name: Mapped[str] = mapped_column(String(255), nullable=False)
    unit: Mapped[str] = mapped_column(String(20), nullable=False)
    unit_cost: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(16, 4), nullable=False)
    total_cost: Mapped[Decimal] = mapped_column(Numeric(18, 8), nullable=False)

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="recipe")

    @validates("quantity")
    def _validate_quantity(self, key, value):
        return positive(key, value)
