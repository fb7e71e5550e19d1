"""User schemas."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    full_name: str = Field(min_length=1, max_length=255)
    role: Literal["owner", "cashier"] = "cashier"
    is_active: bool = True
    phone: Optional[str] = None
    salary: Optional[Decimal] = Field(default=None, ge=0)


class UserCreate(UserBase):
    id: Optional[str] = None


class UserUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    role: Optional[Literal["owner", "cashier"]] = None
    is_active: Optional[bool] = None
    phone: Optional[str] = None
    salary: Optional[Decimal] = Field(default=None, ge=0)


class UserResponse(UserBase):
    id: str

    model_config = {"from_attributes": True}
