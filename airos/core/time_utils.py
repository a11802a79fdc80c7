"""UTC time helpers.

All timestamps are stored as naive UTC datetimes in ISO-8601 text.
"""

from datetime import date, datetime, time, timedelta, timezone


def utcnow() -> datetime:
    """Server-side 'now' in UTC (naive, canonical)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_iso_datetime(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 datetime string and normalize to UTC-naive datetime.

    - None / "" -> None
    - a bare date ("YYYY-MM-DD") is midnight of that day
    - "...Z" or "...+/-HH:MM" is converted to UTC and tzinfo is stripped
    """
    if value is None:
        return None
    s = value.strip()
    if not s:
        return None

    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return the half-open interval [startOfDay, endOfDay) for a date."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def month_start(moment: datetime, months_back: int = 0) -> datetime:
    """First instant of the month `months_back` months before `moment`."""
    year, month = moment.year, moment.month - months_back
    while month < 1:
        month += 12
        year -= 1
    return datetime(year, month, 1)
