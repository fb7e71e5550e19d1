"""Store settings and data-admin schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from cafe_pos.schemas.material import MaterialCreate
from cafe_pos.schemas.product import ProductCreate
from cafe_pos.schemas.user import UserCreate


def _check_hhmm(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    parts = v.split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError("time must be HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError("time must be HH:MM")
    return f"{hours:02d}:{minutes:02d}"


class StoreSettingsUpdate(BaseModel):
    store_name: Optional[str] = None
    receipt_message: Optional[str] = None
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    currency: Optional[str] = None
    printer_name: Optional[str] = None
    work_start_time: Optional[str] = None
    work_end_time: Optional[str] = None
    late_threshold: Optional[int] = Field(default=None, ge=0)

    @field_validator("work_start_time", "work_end_time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        return _check_hhmm(v)


class StoreSettingsResponse(BaseModel):
    store_name: str
    receipt_message: str
    tax_rate: Decimal
    currency: str
    printer_name: Optional[str] = None
    work_start_time: str
    work_end_time: str
    late_threshold: int

    model_config = {"from_attributes": True}


class DataInitRequest(BaseModel):
    """Seed payload: replaces the catalog and clears every ledger."""

    materials: List[MaterialCreate] = []
    products: List[ProductCreate] = []
    users: List[UserCreate] = []
    settings: Optional[StoreSettingsUpdate] = None
