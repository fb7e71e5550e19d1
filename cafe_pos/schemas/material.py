"""Raw material and stock schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

UNITS = ("g", "ml", "piece", "kg", "l")


class MaterialBase(BaseModel):
    """Base raw material schema."""

    name: str = Field(min_length=1, max_length=255)
    unit: str = "g"
    unit_cost: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    min_stock: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    target_stock: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=4)
    category: Optional[str] = None

    @field_validator("unit")
    @classmethod
    def validate_unit(cls, v: str) -> str:
        if v not in UNITS:
            raise ValueError(f"unit must be one of {', '.join(UNITS)}")
        return v


class MaterialCreate(MaterialBase):
    """Raw material creation schema."""

    id: Optional[str] = None
    current_stock: Decimal = Field(default=Decimal("0"), decimal_places=4)


class MaterialUpdate(BaseModel):
    """Raw material update schema. Stock levels change only via adjust/deduct."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    unit_cost: Optional[Decimal] = Field(default=None, ge=0, decimal_places=4)
    min_stock: Optional[Decimal] = Field(default=None, ge=0, decimal_places=4)
    target_stock: Optional[Decimal] = Field(default=None, ge=0, decimal_places=4)
    category: Optional[str] = None


class MaterialResponse(MaterialBase):
    """Raw material response schema."""

    id: str
    current_stock: Decimal

    model_config = {"from_attributes": True}


class StockAdjustmentRequest(BaseModel):
    """Manual stock adjustment request (recount or restock)."""

    delta: Decimal = Field(decimal_places=4)
    notes: Optional[str] = None


class StockDeductionRequest(BaseModel):
    """Direct deduction request."""

    quantity: Decimal = Field(gt=0, decimal_places=4)


class StockMovementResponse(BaseModel):
    """Stock movement response schema."""

    id: int
    ts: datetime
    material_id: str
    qty_delta: Decimal
    stock_after: Decimal
    reason: str
    ref_type: Optional[str] = None
    ref_id: Optional[str] = None
    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class PurchaseSuggestionResponse(BaseModel):
    """A reorder recommendation for a material below its minimum."""

    material: MaterialResponse
    needed_quantity: Decimal
    estimated_cost: Decimal

    model_config = {"from_attributes": True}
