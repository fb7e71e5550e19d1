"""Attendance routes."""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from cafe_pos.core.rate_limit import limiter
from cafe_pos.core.timeutils import local_day
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.attendance import AttendanceResponse, CheckInRequest, CheckOutRequest, RosterEntry
from cafe_pos.services.attendance_service import AttendanceService

router = APIRouter()


@router.get("", response_model=list[AttendanceResponse])
@limiter.limit("60/minute")
def list_attendance(
    request: Request,
    db: DbSession,
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    user_id: Optional[str] = Query(None),
):
    return AttendanceService(db).list_attendance(date=date, user_id=user_id)


@router.get("/roster", response_model=list[RosterEntry])
@limiter.limit("60/minute")
def daily_roster(
    request: Request,
    db: DbSession,
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
):
    return AttendanceService(db).daily_roster(date or local_day())


@router.post("/checkin", response_model=AttendanceResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
def check_in(request: Request, body: CheckInRequest, db: DbSession):
    return AttendanceService(db).check_in(body.user_id, body.user_name, notes=body.notes)


@router.post("/checkout", response_model=AttendanceResponse)
@limiter.limit("30/minute")
def check_out(request: Request, body: CheckOutRequest, db: DbSession):
    return AttendanceService(db).check_out(body.user_id)
