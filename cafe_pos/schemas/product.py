"""Product and recipe schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class RecipeLineCreate(BaseModel):
    """Recipe line creation schema."""

    material_id: str
    quantity: Decimal = Field(gt=0, decimal_places=4)


class RecipeItemResponse(BaseModel):
    """Recipe item response schema (frozen material snapshot)."""

    material_id: str
    material_name: str
    quantity: Decimal
    unit: str
    unit_cost: Decimal
    total_cost: Decimal

    model_config = {"from_attributes": True}


class ProductBase(BaseModel):
    """Base product schema."""

    name: str = Field(min_length=1, max_length=255)
    barcode: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    price: Decimal = Field(ge=0)
    is_active: bool = True


class ProductCreate(ProductBase):
    """Product creation schema. Cost and profit are derived from the recipe."""

    id: Optional[str] = None
    sku: Optional[str] = None
    recipe: List[RecipeLineCreate] = []


class ProductUpdate(BaseModel):
    """Product update schema. The recipe cannot be changed after creation."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    barcode: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class ProductResponse(ProductBase):
    """Product response schema."""

    id: str
    sku: str
    cost: Decimal
    profit: Decimal
    recipe: List[RecipeItemResponse] = []

    model_config = {"from_attributes": True}


class ConsumptionResponse(BaseModel):
    """A (material, quantity) pair produced by expanding a recipe."""

    material_id: str
    quantity: Decimal

    model_config = {"from_attributes": True}
