"""Report routes: dashboard, period summary, cashier shift."""

from typing import Optional

from fastapi import APIRouter, Query, Request

from cafe_pos.core.exceptions import ValidationError
from cafe_pos.core.rate_limit import limiter
from cafe_pos.core.timeutils import local_day, month_start
from cafe_pos.db.session import DbSession
from cafe_pos.schemas.report import DashboardStats, PeriodSummary, ShiftSummary
from cafe_pos.services.report_service import ReportService

router = APIRouter()

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


@router.get("/dashboard", response_model=DashboardStats)
@limiter.limit("60/minute")
def get_dashboard(request: Request, db: DbSession, date: Optional[str] = Query(None, pattern=DATE_PATTERN)):
    return ReportService(db).dashboard(date)


@router.get("/summary", response_model=PeriodSummary)
@limiter.limit("30/minute")
def get_period_summary(
    request: Request,
    db: DbSession,
    start: Optional[str] = Query(None, pattern=DATE_PATTERN),
    end: Optional[str] = Query(None, pattern=DATE_PATTERN),
    top: int = Query(5, ge=1, le=50),
):
    """Profit and loss for a date range. Defaults to the current month."""
    end = end or local_day()
    start = start or month_start(end)
    if start > end:
        raise ValidationError("start must not be after end")
    return ReportService(db).period_summary(start, end, top=top)


@router.get("/shift", response_model=ShiftSummary)
@limiter.limit("60/minute")
def get_shift_summary(
    request: Request,
    db: DbSession,
    cashier_id: str = Query(...),
    date: Optional[str] = Query(None, pattern=DATE_PATTERN),
):
    return ReportService(db).shift_summary(cashier_id, date)
