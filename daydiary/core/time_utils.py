"""
Timezone-safe datetime utilities.

All timestamps are stored in UTC. Diary dates are plain calendar keys and
never pass through these helpers.
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Return current UTC datetime with timezone info attached.

    Example:
        >>> now = utc_now()
        >>> now.tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Convert any datetime to UTC.

    Naive datetimes (as returned by SQLite) are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def serialize_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime as an ISO 8601 UTC string."""
    if dt is None:
        return None
    return ensure_utc(dt).isoformat()
