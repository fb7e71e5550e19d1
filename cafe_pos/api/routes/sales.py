"""Sales routes."""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.sale import SaleCreate, SaleResponse
from cafe_pos.services.sales_service import SalesService

router = APIRouter()


@router.get("", response_model=list[SaleResponse])
@limiter.limit("60/minute")
def list_sales(
    request: Request,
    db: DbSession,
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    cashier_id: Optional[str] = Query(None),
):
    return SalesService(db).list_sales(date=date, cashier_id=cashier_id)


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("120/minute")
def post_sale(request: Request, sale_in: SaleCreate, db: DbSession):
    """Record a sale and deduct its recipe materials from stock."""
    return SalesService(db).post_sale(sale_in)


@router.get("/{sale_id}", response_model=SaleResponse)
@limiter.limit("60/minute")
def get_sale(request: Request, sale_id: str, db: DbSession):
    return SalesService(db).get_sale(sale_id)
