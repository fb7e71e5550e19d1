"""Store-wide settings (single row)."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from cafe_pos.db.base import Base, TimestampMixin


class StoreSettings(Base, TimestampMixin):
    __tablename__ = "store_settings"

    id: Mapped[int] = mapped_column(primary_key=True)
    store_name: Mapped[str] = mapped_column(String(255), default="Café", nullable=False)
    receipt_message: Mapped[str] = mapped_column(String(500), default="Thank you for your visit", nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), default=0, nullable=False)
    currency: Mapped[str] = mapped_column(String(10), default="EGP", nullable=False)
    printer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    work_start_time: Mapped[str] = mapped_column(String(5), default="09:00", nullable=False)  # HH:MM
    work_end_time: Mapped[str] = mapped_column(String(5), default="17:00", nullable=False)  # HH:MM
    late_threshold: Mapped[int] = mapped_column(Integer, default=15, nullable=False)  # minutes
