"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def age_in_days(since: datetime, now: datetime) -> float:
    """Fractional days elapsed between two aware datetimes (0 if `since` is in the future)."""
    return max(0.0, (now - since).total_seconds() / 86400)
