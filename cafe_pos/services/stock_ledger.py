"""Stock Ledger - the authoritative quantity-on-hand per raw material.

Two mutation paths with deliberately different floors:

- ``deduct`` (sales, waste): subtracts exactly, no floor. Stock may go
  negative when recorded stock is behind reality. An unknown material id
  is a logged no-op so a stale recipe reference never blocks a checkout.
- ``adjust`` (manual recount/restock): applies a signed delta and floors
  the result at zero. An unknown material id raises ``NotFoundError``.

Every mutation appends a ``StockMovement`` audit row. ``deduct`` never
commits; the poster that calls it owns the transaction.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from cafe_pos.core import ids
from cafe_pos.core.exceptions import ConflictError, NotFoundError, ValidationError
from cafe_pos.models.material import RawMaterial
from cafe_pos.models.stock import MovementReason, StockMovement
from cafe_pos.schemas.material import MaterialCreate, MaterialUpdate

logger = logging.getLogger(__name__)


class StockLedger:
    """Reads and mutates raw material stock through one database session."""

    def __init__(self, db: Session):
        self.db = db

    # ===== READS =====

    def snapshot(self) -> List[RawMaterial]:
        """Return every material, ordered by name."""
        return self.db.query(RawMaterial).order_by(RawMaterial.name, RawMaterial.id).all()

    def find_material(self, material_id: str) -> Optional[RawMaterial]:
        return self.db.get(RawMaterial, material_id)

    def get_material(self, material_id: str) -> RawMaterial:
        material = self.find_material(material_id)
        if material is None:
            raise NotFoundError("Material", material_id)
        return material

    def low_stock(self) -> List[RawMaterial]:
        """Materials whose stock is strictly below their minimum."""
        return [m for m in self.snapshot() if m.current_stock < m.min_stock]

    def inventory_value(self) -> Decimal:
        return sum((m.current_stock * m.unit_cost for m in self.snapshot()), Decimal("0"))

    def movements(self, material_id: Optional[str] = None, limit: int = 100) -> List[StockMovement]:
        query = self.db.query(StockMovement)
        if material_id:
            query = query.filter(StockMovement.material_id == material_id)
        return query.order_by(StockMovement.id.desc()).limit(limit).all()

    # ===== ADMINISTRATION =====

    def create_material(self, data: MaterialCreate, commit: bool = True) -> RawMaterial:
        material_id = data.id or ids.new_id(ids.MATERIAL)
        if self.find_material(material_id) is not None:
            raise ConflictError(f"Material '{material_id}' already exists")

        material = RawMaterial(
            id=material_id,
            name=data.name,
            unit=data.unit,
            unit_cost=data.unit_cost,
            current_stock=data.current_stock,
            min_stock=data.min_stock,
            target_stock=data.target_stock,
            category=data.category,
        )
        self.db.add(material)
        if commit:
            self.db.commit()
            self.db.refresh(material)
        else:
            self.db.flush()
        logger.info(f"Created material {material.id} ({material.name})")
        return material

    def update_material(self, material_id: str, updates: MaterialUpdate) -> RawMaterial:
        material = self.get_material(material_id)
        for field, value in updates.model_dump(exclude_unset=True).items():
            if value is None and field != "category":
                continue
            setattr(material, field, value)
        self.db.commit()
        self.db.refresh(material)
        return material

    # ===== MUTATIONS =====

    def deduct(
        self,
        material_id: str,
        quantity: Decimal,
        reason: MovementReason = MovementReason.SALE,
        ref_type: Optional[str] = None,
        ref_id: Optional[str] = None,
    ) -> Optional[RawMaterial]:
        """Subtract ``quantity`` from a material's stock without a floor.

        Returns the material, or ``None`` when the id is unknown.
        """
        material = self.find_material(material_id)
        if material is None:
            logger.warning(
                f"Stock deduction skipped: material '{material_id}' not found "
                f"(ref {ref_type}:{ref_id}, qty {quantity})"
            )
            return None

        quantity = Decimal(str(quantity))
        material.current_stock = material.current_stock - quantity
        self._record_movement(material, -quantity, reason, ref_type, ref_id)
        self.db.flush()

        if material.current_stock < 0:
            logger.warning(
                f"Stock for '{material.name}' ({material.id}) is negative: "
                f"{material.current_stock} {material.unit}"
            )
        else:
            logger.debug(
                f"Deducted {quantity} {material.unit} of {material.name}. "
                f"New stock: {material.current_stock}"
            )
        return material

    def adjust(self, material_id: str, delta: Decimal, notes: Optional[str] = None) -> RawMaterial:
        """Apply a manual correction, flooring the result at zero."""
        delta = Decimal(str(delta))
        if delta == 0:
            raise ValidationError("Adjustment must be non-zero")

        material = self.get_material(material_id)
        before = material.current_stock
        material.current_stock = max(Decimal("0"), before + delta)
        effective = material.current_stock - before
        self._record_movement(material, effective, MovementReason.ADJUSTMENT, None, None, notes)
        self.db.commit()
        self.db.refresh(material)

        logger.info(
            f"Adjusted {material.name} ({material.id}) by {delta}: "
            f"{before} -> {material.current_stock} {material.unit}"
        )
        return material

    def _record_movement(
        self,
        material: RawMaterial,
        qty_delta: Decimal,
        reason: MovementReason,
        ref_type: Optional[str],
        ref_id: Optional[str],
        notes: Optional[str] = None,
    ) -> None:
        self.db.add(StockMovement(
            material_id=material.id,
            qty_delta=qty_delta,
            stock_after=material.current_stock,
            reason=reason.value,
            ref_type=ref_type,
            ref_id=ref_id,
            notes=notes,
        ))

    def summary(self) -> Dict[str, Any]:
        """Totals shown on the inventory screen."""
        materials = self.snapshot()
        return {
            "materials": len(materials),
            "inventory_value": self.inventory_value(),
            "low_stock_count": sum(1 for m in materials if m.current_stock < m.min_stock),
        }
