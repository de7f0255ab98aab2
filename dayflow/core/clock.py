# core/clock.py
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dayflow.core.config import settings


HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
DATE_FORMAT = "%Y-%m-%d"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything is stored in UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_valid_timezone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def user_zone(user) -> ZoneInfo:
    """Zone of the user's profile, falling back to the server default."""
    name = getattr(user, "timezone", None) or settings.DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(settings.DEFAULT_TIMEZONE)


def local_now(user, now: Optional[datetime] = None) -> datetime:
    return as_utc(now or utc_now()).astimezone(user_zone(user))


def local_today(user, now: Optional[datetime] = None) -> date:
    return local_now(user, now).date()


def format_day(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def format_hhmm(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def validate_hhmm(value: str) -> str:
    value = value.strip()
    if not HHMM_PATTERN.match(value):
        raise ValueError("Time must use the 24-hour HH:mm format")
    return value


def parse_hhmm(value: str) -> time:
    hours, minutes = validate_hhmm(value).split(":")
    return time(int(hours), int(minutes))


def day_bounds_utc(day: date, zone: ZoneInfo) -> Tuple[datetime, datetime]:
    """UTC instants of local midnight and the following midnight."""
    start = datetime.combine(day, time.min, tzinfo=zone)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def week_bounds(day: date) -> Tuple[date, date]:
    """Monday and Sunday of the week containing ``day``."""
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)
