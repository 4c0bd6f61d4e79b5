"""UTC datetime utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO8601 wire timestamp. Returns None when missing or malformed."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        # Backend emits "2024-01-01T10:00:00.000Z"; fromisoformat wants an offset
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_timestamp(value: object) -> str:
    """Format as 'DD/MM/YYYY • HH:MM' in local time, '' when unparseable."""
    dt = parse_timestamp(value)
    if dt is None:
        return ""
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    return f"{dt:%d/%m/%Y} • {dt:%H:%M}"
