"""
UTC datetime utilities for consistent timezone handling.

All datetime values written to Firestore are timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository boundaries; Firestore timestamps decode as aware
    values but documents written by other clients may not.

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def parse_day_month_year(value: str | None) -> date | None:
    """
    Parse a "dd/mm/yyyy" string as entered in the mobile event form.

    Anything else (empty, wrong number of parts, non-numeric, out of range)
    returns None; callers treat an unparseable date as "no date".

    Args:
        value: Free-form date text

    Returns:
        Parsed date or None
    """
    if not isinstance(value, str):
        return None
    parts = value.strip().split("/")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(p) for p in parts)
        return date(year, month, day)
    except ValueError:
        return None
