import calendar
import datetime
import re

_UNITS = {
    "s": datetime.timedelta(seconds=1),
    "sec": datetime.timedelta(seconds=1),
    "second": datetime.timedelta(seconds=1),
    "m": datetime.timedelta(minutes=1),
    "min": datetime.timedelta(minutes=1),
    "minute": datetime.timedelta(minutes=1),
    "h": datetime.timedelta(hours=1),
    "hour": datetime.timedelta(hours=1),
    "d": datetime.timedelta(days=1),
    "day": datetime.timedelta(days=1),
    "w": datetime.timedelta(weeks=1),
    "week": datetime.timedelta(weeks=1),
}

_AMOUNT_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-z]+)\s*$")
_CLOCK_RE = re.compile(r"^\s*(\d+):(\d{2}):(\d{2})\s*$")


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def to_utc(ts: datetime.datetime) -> datetime.datetime:
    # Naive timestamps are taken to already be in UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=datetime.timezone.utc)
    return ts.astimezone(datetime.timezone.utc)


def days_in_month(day: datetime.date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def parse_duration(text: str) -> datetime.timedelta:
    """Parse a duration string to a timedelta object.

    Args:
        text: Duration such as "10 days", "30 minutes", "10s", "2h" or "240:00:00"

    Returns:
        timedelta object

    Raises:
        ValueError: If the duration string is not recognized
    """
    normalized = text.strip().lower()
    if match := _CLOCK_RE.match(normalized):
        hours, minutes, seconds = (int(g) for g in match.groups())
        return datetime.timedelta(hours=hours, minutes=minutes, seconds=seconds)
    if match := _AMOUNT_RE.match(normalized):
        amount, unit = match.groups()
        # Plurals only for spelled-out units, so "ms" isn't read as minutes
        if unit not in _UNITS and len(unit) > 2 and unit.endswith("s"):
            unit = unit[:-1]
        if unit in _UNITS:
            return float(amount) * _UNITS[unit]
    raise ValueError(f"Unknown duration: {text}")


def format_duration(duration: datetime.timedelta) -> str:
    seconds = round(duration.total_seconds())
    for suffix, size in (("d", 86400), ("h", 3600), ("m", 60)):
        if seconds >= size and seconds % size == 0:
            return f"{seconds // size}{suffix}"
    return f"{seconds}s"
