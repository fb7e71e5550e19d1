"""User administration routes."""

from fastapi import APIRouter, Query, Request, status

from cafe_pos.core.rate_limit import limiter
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.user import UserCreate, UserResponse, UserUpdate
from cafe_pos.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=list[UserResponse])
@limiter.limit("60/minute")
def list_users(request: Request, db: DbSession, active_only: bool = Query(False)):
    return UserService(db).list_users(active_only=active_only)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def create_user(request: Request, user_in: UserCreate, db: DbSession):
    return UserService(db).create_user(user_in)


@router.put("/{user_id}", response_model=UserResponse)
@limiter.limit("30/minute")
def update_user(request: Request, user_id: str, user_in: UserUpdate, db: DbSession):
    return UserService(db).update_user(user_id, user_in)
