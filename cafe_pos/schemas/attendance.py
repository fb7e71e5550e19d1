"""Attendance schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class CheckInRequest(BaseModel):
    user_id: str
    user_name: str
    notes: Optional[str] = None


class CheckOutRequest(BaseModel):
    user_id: str


class AttendanceResponse(BaseModel):
    """Attendance response schema."""

    id: str
    user_id: str
    user_name: str
    check_in: datetime
    check_out: Optional[datetime] = None
    date: str
    status: str
    notes: Optional[str] = None
    work_hours: Optional[Decimal] = None

    model_config = {"from_attributes": True}


class RosterEntry(BaseModel):
    """One user's attendance status for a day, including absentees."""

    user_id: str
    user_name: str
    status: str
    record: Optional[AttendanceResponse] = None
