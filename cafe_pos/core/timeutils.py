"""Local calendar helpers.

Sales, waste and attendance are bucketed by the store's local calendar day
(``settings.timezone``), while timestamps are stored in UTC.
"""

from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from cafe_pos.core.config import settings


def store_tz() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(ts: datetime) -> datetime:
    """SQLite drops tzinfo; treat naive timestamps as UTC."""
    return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)


def to_utc(ts: datetime) -> datetime:
    return as_aware(ts).astimezone(timezone.utc)


def local_day(ts: Optional[datetime] = None) -> str:
    """Return the local calendar day of ``ts`` as ``YYYY-MM-DD``."""
    ts = as_aware(ts) if ts is not None else utcnow()
    return ts.astimezone(store_tz()).date().isoformat()


def local_time(ts: datetime) -> time:
    return as_aware(ts).astimezone(store_tz()).time()


def parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


def month_start(day: str) -> str:
    d = date.fromisoformat(day)
    return d.replace(day=1).isoformat()
