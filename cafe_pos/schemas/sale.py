"""Sale schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CartLineCreate(BaseModel):
    """A product and how many units were sold."""

    product_id: str
    quantity: int = Field(gt=0)


class SaleCreate(BaseModel):
    """Sale creation schema. Line figures are computed from the catalog."""

    id: Optional[str] = None
    items: List[CartLineCreate] = Field(min_length=1)
    payment_method: Literal["cash", "card"] = "cash"
    cashier_id: Optional[str] = None
    cashier_name: Optional[str] = None
    timestamp: Optional[datetime] = None


class CartItemResponse(BaseModel):
    """Cart line response schema."""

    product_id: str
    product_name: str
    sku: Optional[str] = None
    quantity: int
    unit_cost: Decimal
    unit_price: Decimal
    unit_profit: Decimal
    total_cost: Decimal
    total_price: Decimal
    total_profit: Decimal

    model_config = {"from_attributes": True}


class SaleResponse(BaseModel):
    """Sale response schema."""

    id: str
    items: List[CartItemResponse]
    subtotal: Decimal
    total_cost: Decimal
    total_profit: Decimal
    payment_method: str
    timestamp: datetime
    date: str
    cashier_id: Optional[str] = None
    cashier_name: Optional[str] = None

    model_config = {"from_attributes": True}
