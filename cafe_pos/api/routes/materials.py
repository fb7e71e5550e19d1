"""Raw material and stock ledger routes."""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.session import DbSession
from cafe_pos.models.stock import MovementReason
from cafe_pos.schemas.material import (
    MaterialCreate,
    MaterialResponse,
    MaterialUpdate,
    StockAdjustmentRequest,
    StockDeductionRequest,
    StockMovementResponse,
)
from cafe_pos.services.purchase_advisor import stock_status
from cafe_pos.services.stock_ledger import StockLedger

router = APIRouter()


@router.get("", response_model=list[MaterialResponse])
@limiter.limit("60/minute")
def list_materials(request: Request, db: DbSession):
    """Current stock snapshot."""
    return StockLedger(db).snapshot()


@router.post("", response_model=MaterialResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_material(request: Request, material_in: MaterialCreate, db: DbSession):
    return StockLedger(db).create_material(material_in)


@router.get("/movements", response_model=list[StockMovementResponse])
@limiter.limit("60/minute")
def list_movements(
    request: Request,
    db: DbSession,
    material_id: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
):
    """Stock movement audit trail, newest first."""
    return StockLedger(db).movements(material_id=material_id, limit=limit)


@router.get("/summary")
@limiter.limit("60/minute")
def inventory_summary(request: Request, db: DbSession):
    """Inventory totals plus a per-material stock badge."""
    ledger = StockLedger(db)
    summary = ledger.summary()
    summary["status"] = {m.id: stock_status(m) for m in ledger.snapshot()}
    return summary


@router.put("/{material_id}", response_model=MaterialResponse)
@limiter.limit("30/minute")
def update_material(request: Request, material_id: str, material_in: MaterialUpdate, db: DbSession):
    return StockLedger(db).update_material(material_id, material_in)


@router.post("/{material_id}/adjust", response_model=MaterialResponse)
@limiter.limit("30/minute")
def adjust_stock(request: Request, material_id: str, body: StockAdjustmentRequest, db: DbSession):
    """Manual recount or restock. The result is floored at zero."""
    return StockLedger(db).adjust(material_id, body.delta, notes=body.notes)


@router.post("/{material_id}/deduct", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit("30/minute")
def deduct_stock(request: Request, material_id: str, body: StockDeductionRequest, db: DbSession):
    """Subtract stock without a floor. Unknown materials are ignored."""
    StockLedger(db).deduct(
        material_id, body.quantity, reason=MovementReason.ADJUSTMENT, ref_type="manual"
    )
    db.commit()
