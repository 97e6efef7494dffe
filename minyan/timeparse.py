# minyan/timeparse.py
from __future__ import annotations
import calendar
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional

def now_local(tz: Optional[tzinfo] = None) -> datetime:
    if tz is not None:
        return datetime.now(tz)
    return datetime.now().astimezone()

def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)

def end_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=23, minute=59, second=59, microsecond=0)

def on_date(d: date, tz: Optional[tzinfo]) -> datetime:
    """Midnight at the start of `d` in `tz`."""
    return datetime.combine(d, time.min, tzinfo=tz)

def start_of_week(dt: datetime) -> datetime:
    # Sunday as start (weekday() is Monday == 0)
    d0 = start_of_day(dt)
    return d0 - timedelta(days=(d0.weekday() + 1) % 7)

def plus_one_week(dt: datetime) -> datetime:
    return dt + timedelta(days=7) - timedelta(seconds=1)

def add_elapsed(dt: datetime, delta: timedelta) -> datetime:
    # Absolute-time arithmetic; plain `dt + delta` is wall-clock for aware datetimes
    if dt.tzinfo is None:
        return dt + delta
    return (dt.astimezone(timezone.utc) + delta).astimezone(dt.tzinfo)

def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]

def is_date_valid(year: int, month: int, day: int) -> bool:
    return (
        1 <= year <= 9999
        and 1 <= month <= 12
        and 1 <= day <= days_in_month(year, month)
    )

def next_occurrence_year(basedate: date, month: int, day: int) -> int:
    year = basedate.year
    # Dates already behind us this year mean next year
    if (month, day) < (basedate.month, basedate.day):
        year += 1
    return year

def parse_dt(s: str, tz: Optional[tzinfo] = None) -> datetime:
    s = s.strip()
    if s.lower() == "now":
        return now_local(tz)
    # allow "YYYY-MM-DD HH:MM"
    if " " in s and "T" not in s:
        s = s.replace(" ", "T")
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz or now_local().tzinfo)
    return dt.astimezone(tz) if tz is not None else dt
