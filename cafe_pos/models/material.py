"""Raw material model: the quantity-on-hand per ingredient."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from cafe_pos.db.base import Base, TimestampMixin
from cafe_pos.models.validators import non_negative


class RawMaterial(Base, TimestampMixin):
    """An ingredient tracked by the stock ledger.

    ``current_stock`` is deliberately unconstrained: sales and waste may
    drive it below zero when recorded stock is wrong.
    """

    __tablename__ = "raw_materials"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    unit: Mapped[str] = mapped_column(String(20), default="g", nullable=False)  # g, ml, piece, kg, l
    unit_cost: Mapped[Decimal] = mapped_column(Numeric(12, 4), default=0, nullable=False)
    current_stock: Mapped[Decimal] = mapped_column(Numeric(16, 4), default=0, nullable=False)
    min_stock: Mapped[Decimal] = mapped_column(Numeric(16, 4), default=0, nullable=False)
    target_stock: Mapped[Decimal] = mapped_column(Numeric(16, 4), default=0, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    @validates("unit_cost", "min_stock", "target_stock")
    def _validate_non_negative(self, key, value):
        return non_negative(key, value)
