"""
UTC datetime utilities for consistent timezone handling.

All datetime values in the system should be timezone-aware UTC.
Use these helpers instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, date, datetime, time


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

    Use at repository/persistence boundaries to normalize datetimes.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def start_of_day_utc(value: date | datetime | None = None) -> datetime:
    """
    Return midnight UTC of the given day (today when omitted).

    Workshop dates are stored at day granularity as UTC midnight, so
    "upcoming" comparisons use this as the lower bound and the current
    day's workshops stay listed.
    """
    if value is None:
        value = utc_now()
    if isinstance(value, datetime):
        value = ensure_utc(value).date()
    return datetime.combine(value, time.min, tzinfo=UTC)
