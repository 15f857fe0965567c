"""Freshness checks for cached query results."""

from datetime import UTC, datetime

from skyboard.models.common import utc_now


def is_stale(
    fetched_at: datetime | None, max_age_seconds: float, now: datetime | None = None
) -> bool:
    """A result is stale once it is older than max_age_seconds (or was never fetched)."""
    if fetched_at is None:
        return True
    if now is None:
        now = utc_now()
    if fetched_at.tzinfo is None:
        fetched_at = fetched_at.replace(tzinfo=UTC)
    return (now - fetched_at).total_seconds() > max_age_seconds
