"""Waste Poster - records spoilage and deducts it from stock.

Waste references a material directly, so no recipe expansion is
involved. The record and the deduction are committed together.
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from cafe_pos.core import ids
from cafe_pos.core.exceptions import ConflictError, ValidationError
from cafe_pos.core.timeutils import local_day, to_utc, utcnow
from cafe_pos.models.stock import MovementReason
from cafe_pos.models.waste import Waste
from cafe_pos.schemas.waste import MaterialWasteSummary, WasteCreate
from cafe_pos.services.stock_ledger import StockLedger

logger = logging.getLogger(__name__)


class WasteService:
    """Append-only waste ledger."""

    def __init__(self, db: Session, ledger: Optional[StockLedger] = None):
        self.db = db
        self.ledger = ledger or StockLedger(db)

    def post_waste(self, data: WasteCreate) -> Waste:
        quantity = Decimal(str(data.quantity))
        if quantity <= 0:
            raise ValidationError("Waste quantity must be positive")
        reason = (data.reason or "").strip()
        if not reason:
            raise ValidationError("A reason is required for waste")

        material = self.ledger.get_material(data.material_id)
        if quantity > material.current_stock:
            raise ValidationError(
                f"Waste of {quantity} {material.unit} exceeds available stock "
                f"of {material.current_stock} {material.unit} for '{material.name}'"
            )

        waste_id = data.id or ids.new_id(ids.WASTE)
        if self.db.get(Waste, waste_id) is not None:
            raise ConflictError(f"Waste record '{waste_id}' already exists")

        timestamp = to_utc(data.timestamp) if data.timestamp else utcnow()
        record = Waste(
            id=waste_id,
            material_id=material.id,
            material_name=material.name,
            unit=material.unit,
            unit_cost=material.unit_cost,
            quantity=quantity,
            total_loss=quantity * material.unit_cost,
            reason=reason,
            reported_by=data.reported_by,
            reported_by_id=data.reported_by_id,
            timestamp=timestamp,
            date=local_day(timestamp),
        )

        try:
            self.db.add(record)
            self.db.flush()
            self.ledger.deduct(
                material.id,
                quantity,
                reason=MovementReason.WASTE,
                ref_type="waste",
                ref_id=record.id,
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Waste {waste_id} rolled back: {e}", exc_info=True)
            raise

        self.db.refresh(record)
        logger.info(f"Recorded waste {record.id}: {quantity} {record.unit} of {record.material_name}")
        return record

    def list_waste(self, date: Optional[str] = None) -> List[Waste]:
        query = self.db.query(Waste)
        if date:
            query = query.filter(Waste.date == date)
        return query.order_by(Waste.timestamp, Waste.id).all()

    def waste_between(self, start: str, end: str) -> List[Waste]:
        return (
            self.db.query(Waste)
            .filter(Waste.date >= start, Waste.date <= end)
            .order_by(Waste.timestamp, Waste.id)
            .all()
        )


def most_wasted(records: Iterable[Waste], limit: int = 5) -> List[MaterialWasteSummary]:
    """Per-material waste totals, highest loss first."""
    totals: Dict[str, MaterialWasteSummary] = {}
    for w in records:
        entry = totals.get(w.material_id)
        if entry is None:
            entry = totals[w.material_id] = MaterialWasteSummary(
                material_id=w.material_id,
                material_name=w.material_name,
                total_loss=Decimal("0"),
                total_quantity=Decimal("0"),
                count=0,
            )
        entry.total_loss += w.total_loss
        entry.total_quantity += w.quantity
        entry.count += 1
    return sorted(totals.values(), key=lambda e: e.total_loss, reverse=True)[:limit]
