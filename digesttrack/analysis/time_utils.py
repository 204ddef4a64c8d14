"""Timestamp normalisation and calendar-day helpers."""
import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def to_utc(dt: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken to already be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def get_zone(tz_name: Optional[str]) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name) if tz_name else ZoneInfo("UTC")
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def local_date(dt: datetime, tz: ZoneInfo) -> date:
    """Calendar day of dt as seen in tz."""
    return to_utc(dt).astimezone(tz).date()


def day_start(day: date, tz: ZoneInfo) -> datetime:
    """First instant of day in tz, as UTC."""
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day from start through end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (Python's round() goes to even)."""
    return int(math.floor(value + 0.5))
