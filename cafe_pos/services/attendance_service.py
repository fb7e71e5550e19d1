"""Staff attendance: check-in/check-out with late and half-day marking."""

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from cafe_pos.core import ids
from cafe_pos.core.exceptions import NotFoundError
from cafe_pos.core.ids import round_half_up
from cafe_pos.core.timeutils import as_aware, local_day, local_time, parse_hhmm, to_utc, utcnow
from cafe_pos.models.attendance import Attendance, AttendanceStatus
from cafe_pos.models.store_settings import StoreSettings
from cafe_pos.models.user import User
from cafe_pos.schemas.attendance import AttendanceResponse, RosterEntry

logger = logging.getLogger(__name__)

DEFAULT_WORK_START = "09:00"
DEFAULT_WORK_END = "17:00"
DEFAULT_LATE_THRESHOLD = 15


class AttendanceService:

    def __init__(self, db: Session):
        self.db = db

    def _store_settings(self) -> Optional[StoreSettings]:
        return self.db.query(StoreSettings).order_by(StoreSettings.id).first()

    def _schedule(self):
        row = self._store_settings()
        if row is None:
            return parse_hhmm(DEFAULT_WORK_START), parse_hhmm(DEFAULT_WORK_END), DEFAULT_LATE_THRESHOLD
        return parse_hhmm(row.work_start_time), parse_hhmm(row.work_end_time), row.late_threshold

    def check_in(
        self,
        user_id: str,
        user_name: str,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Attendance:
        """Open an attendance record for today.

        The check-in is ``late`` when the local time is strictly after the
        shift start plus the late threshold.
        """
        now = to_utc(now) if now is not None else utcnow()
        work_start, _, late_threshold = self._schedule()

        clock = local_time(now)
        minutes_in = clock.hour * 60 + clock.minute
        cutoff = work_start.hour * 60 + work_start.minute + late_threshold
        status = AttendanceStatus.LATE if minutes_in > cutoff else AttendanceStatus.PRESENT

        record = Attendance(
            id=ids.new_id(ids.ATTENDANCE),
            user_id=user_id,
            user_name=user_name,
            check_in=now,
            date=local_day(now),
            status=status.value,
            notes=notes,
        )
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)

        logger.info(f"{user_name} ({user_id}) checked in at {clock.strftime('%H:%M')}: {status.value}")
        return record

    def check_out(self, user_id: str, now: Optional[datetime] = None) -> Attendance:
        """Close the user's most recent open record and compute work hours."""
        now = to_utc(now) if now is not None else utcnow()
        record = (
            self.db.query(Attendance)
            .filter(Attendance.user_id == user_id, Attendance.check_out.is_(None))
            .order_by(Attendance.check_in.desc())
            .first()
        )
        if record is None:
            raise NotFoundError("Open attendance for user", user_id)

        worked = now - as_aware(record.check_in)
        hours = round_half_up(Decimal(str(worked.total_seconds())) / Decimal(3600), 2)
        record.check_out = now
        record.work_hours = hours

        work_start, work_end, _ = self._schedule()
        shift = (
            datetime.combine(now.date(), work_end) - datetime.combine(now.date(), work_start)
        ) % timedelta(days=1)
        shift_hours = Decimal(shift.total_seconds()) / Decimal(3600)
        if shift_hours and hours < shift_hours / 2:
            record.status = AttendanceStatus.HALF_DAY.value

        self.db.commit()
        self.db.refresh(record)
        logger.info(f"{record.user_name} ({user_id}) checked out after {hours}h")
        return record

    def list_attendance(self, date: Optional[str] = None, user_id: Optional[str] = None) -> List[Attendance]:
        query = self.db.query(Attendance)
        if date:
            query = query.filter(Attendance.date == date)
        if user_id:
            query = query.filter(Attendance.user_id == user_id)
        return query.order_by(Attendance.check_in, Attendance.id).all()

    def present_count(self, day: str) -> int:
        """Users with an open record on ``day``."""
        return (
            self.db.query(Attendance.user_id)
            .filter(Attendance.date == day, Attendance.check_out.is_(None))
            .distinct()
            .count()
        )

    def daily_roster(self, day: str, users: Optional[Iterable[User]] = None) -> List[RosterEntry]:
        """One entry per active user; users without a record are ``absent``."""
        if users is None:
            users = self.db.query(User).filter(User.is_active.is_(True)).order_by(User.full_name).all()

        latest = {}
        for record in self.list_attendance(date=day):
            latest[record.user_id] = record

        roster = []
        for user in users:
            if not user.is_active:
                continue
            record = latest.get(user.id)
            roster.append(RosterEntry(
                user_id=user.id,
                user_name=user.full_name,
                status=record.status if record else AttendanceStatus.ABSENT.value,
                record=AttendanceResponse.model_validate(record) if record else None,
            ))
        return roster
