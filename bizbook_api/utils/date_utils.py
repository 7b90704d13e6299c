"""Date manipulation utilities"""

from datetime import date, datetime, timedelta, timezone
from typing import Tuple


def start_of_week(day: date) -> date:
    """Most recent Sunday on or before `day`"""
    # date.weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_bounds(day: date) -> Tuple[date, date]:
    """Sunday..Saturday calendar week containing `day` (both inclusive)"""
    start = start_of_week(day)
    return start, start + timedelta(days=6)


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def one_year_before(day: date) -> date:
    """Same calendar day one year earlier (Feb 29 maps to Feb 28)"""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=28)


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC"""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
