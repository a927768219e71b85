"""Helpers for the ISO-8601 strings stored in collection records."""

from datetime import date, datetime, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat_z(moment: datetime) -> str:
    """Format a naive UTC datetime as 2024-01-15T10:00:00.000Z."""
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse a stored date value.

    Accepts datetime/date objects and ISO strings (with or without a
    trailing 'Z'). Returns None for anything unparseable.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).replace(tzinfo=None) if value.tzinfo else value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
