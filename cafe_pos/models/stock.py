"""Stock movement audit model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from cafe_pos.db.base import Base


class MovementReason(str, Enum):
    """Reasons for stock movements."""

    SALE = "sale"  # Recipe consumption from a checkout
    WASTE = "waste"  # Spoilage, breakage
    ADJUSTMENT = "adjustment"  # Manual recount or restock


class StockMovement(Base):
    """Ledger of all stock changes, written alongside every mutation."""

    __tablename__ = "stock_movements"

    id: Mapped[int] = mapped_column(primary_key=True)
    ts: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    # No FK: movements outlive the data-admin reset of materials
    material_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    qty_delta: Mapped[Decimal] = mapped_column(Numeric(16, 4), nullable=False)
    stock_after: Mapped[Decimal] = mapped_column(Numeric(16, 4), nullable=False)
    reason: Mapped[str] = mapped_column(String(50), nullable=False)
    ref_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # sale, waste
    ref_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
