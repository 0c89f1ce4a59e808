# src/portfolio_accounting_engine/logic/dates.py
from datetime import date, datetime
from typing import Optional

from ..constants import DATE_SEPARATOR, LOCAL_ANCHOR_HOUR


def parse_local_date(value: str | None) -> Optional[datetime]:
    """
    Parses a `YYYY-MM-DD` string into a naive local datetime anchored at noon.

    Anchoring at noon keeps the calendar day stable when the value is later
    converted through a UTC timestamp. Malformed input returns None.
    """
    if not value or not isinstance(value, str):
        return None
    parts = value.strip().split(DATE_SEPARATOR)
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(part) for part in parts)
        return datetime(year, month, day, LOCAL_ANCHOR_HOUR)
    except ValueError:
        return None


def safe_timestamp(value: str | None) -> Optional[int]:
    """Epoch milliseconds of the local-noon anchor, or None for malformed input."""
    parsed = parse_local_date(value)
    if parsed is None:
        return None
    return int(parsed.timestamp() * 1000)


def is_today(value: str | None, today: date | None = None) -> bool:
    parsed = parse_local_date(value)
    if parsed is None:
        return False
    reference = today or date.today()
    return (parsed.year, parsed.month, parsed.day) == (reference.year, reference.month, reference.day)


def today_iso(today: date | None = None) -> str:
    return (today or date.today()).isoformat()


def to_iso(value: date | str | None) -> str:
    """Normalizes a reference date given as a date or a `YYYY-MM-DD` string."""
    if value is None:
        return today_iso()
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value
