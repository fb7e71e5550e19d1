"""Data administration routes: seed and clear."""

from fastapi import APIRouter, Request

from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.settings import DataInitRequest
from cafe_pos.services.data_admin_service import DataAdminService

router = APIRouter()


@router.post("/init")
@limiter.limit("5/minute")
def initialize_data(request: Request, seed: DataInitRequest, db: DbSession):
    """Replace catalog, users and settings; clear every ledger."""
    return {"initialized": DataAdminService(db).initialize(seed)}


@router.post("/clear-data")
@limiter.limit("5/minute")
def clear_data(request: Request, db: DbSession):
    """Delete sales, waste, attendance and stock movements."""
    return {"deleted": DataAdminService(db).clear_data()}
