"""Waste routes."""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.waste import MaterialWasteSummary, WasteCreate, WasteResponse
from cafe_pos.services.waste_service import WasteService, most_wasted

router = APIRouter()


@router.get("", response_model=list[WasteResponse])
@limiter.limit("60/minute")
def list_waste(
    request: Request,
    db: DbSession,
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
):
    return WasteService(db).list_waste(date=date)


@router.post("", response_model=WasteResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def post_waste(request: Request, waste_in: WasteCreate, db: DbSession):
    """Record spoilage and deduct it from the material's stock."""
    return WasteService(db).post_waste(waste_in)


@router.get("/most-wasted", response_model=list[MaterialWasteSummary])
@limiter.limit("60/minute")
def get_most_wasted(
    request: Request,
    db: DbSession,
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    limit: int = Query(5, ge=1, le=50),
):
    return most_wasted(WasteService(db).list_waste(date=date), limit)
