"""Purchase suggestion route."""

from fastapi import APIRouter, Request

from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.material import PurchaseSuggestionResponse
from cafe_pos.services.purchase_advisor import get_purchase_suggestions
from cafe_pos.services.stock_ledger import StockLedger

router = APIRouter()


@router.get("", response_model=list[PurchaseSuggestionResponse])
@limiter.limit("60/minute")
def list_purchase_suggestions(request: Request, db: DbSession):
    """Materials below minimum stock with the quantity needed to reach target."""
    suggestions = get_purchase_suggestions(StockLedger(db).snapshot())
    return [PurchaseSuggestionResponse.model_validate(s) for s in suggestions]
