"""Timestamp formatting shared by result payloads."""

from datetime import datetime, timezone


def utc_timestamp(now: datetime | None = None) -> str:
    """Format a moment as ISO-8601 UTC with millisecond precision, e.g. ``2024-05-01T12:00:00.000Z``."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
