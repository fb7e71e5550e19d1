"""Identifier generation and rounding helpers shared by the services."""

import time
import uuid
from decimal import ROUND_FLOOR, Decimal
from typing import Optional

# Entity id prefixes
MATERIAL = "mat"
PRODUCT = "prod"
SALE = "SALE"
WASTE = "waste"
ATTENDANCE = "att"
USER = "user"


def epoch_ms(now: Optional[float] = None) -> int:
    return int((now if now is not None else time.time()) * 1000)


def new_id(prefix: str) -> str:
    """Build an id of the form ``<prefix>-<epoch ms>-<6 hex>``.

    The random suffix keeps ids unique when two records are created within
    the same millisecond.
    """
    return f"{prefix}-{epoch_ms()}-{uuid.uuid4().hex[:6]}"


def default_sku(unique: bool = False) -> str:
    sku = f"SKU-{epoch_ms()}"
    return f"{sku}-{uuid.uuid4().hex[:4]}" if unique else sku


def round_half_up(value: Decimal, places: int = 0) -> Decimal:
    """Round like JavaScript's ``Math.round``: halves go toward +infinity."""
    step = Decimal(1).scaleb(-places)
    return ((value / step) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR) * step
