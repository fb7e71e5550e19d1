"""Store settings routes."""

from fastapi import APIRouter, Request

from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.settings import StoreSettingsResponse, StoreSettingsUpdate
from cafe_pos.services.data_admin_service import DataAdminService

router = APIRouter()


@router.get("", response_model=StoreSettingsResponse)
@limiter.limit("60/minute")
def get_store_settings(request: Request, db: DbSession):
    return DataAdminService(db).get_settings()


@router.put("", response_model=StoreSettingsResponse)
@limiter.limit("30/minute")
def update_store_settings(request: Request, body: StoreSettingsUpdate, db: DbSession):
    return DataAdminService(db).update_settings(body)
