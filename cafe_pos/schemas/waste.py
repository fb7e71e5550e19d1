"""Waste schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class WasteCreate(BaseModel):
    """Waste report. Material snapshot and loss are filled in by the service."""

    id: Optional[str] = None
    material_id: str
    quantity: Decimal = Field(gt=0, decimal_places=4)
    reason: str
    reported_by: str
    reported_by_id: str
    timestamp: Optional[datetime] = None


class WasteResponse(BaseModel):
    """Waste response schema."""

    id: str
    material_id: str
    material_name: str
    quantity: Decimal
    unit: str
    unit_cost: Decimal
    total_loss: Decimal
    reason: str
    reported_by: str
    reported_by_id: str
    timestamp: datetime
    date: str

    model_config = {"from_attributes": True}


class MaterialWasteSummary(BaseModel):
    """Total loss for one material over a set of waste records."""

    material_id: str
    material_name: str
    total_loss: Decimal
    total_quantity: Decimal
    count: int
