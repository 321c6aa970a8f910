"""Time utilities for timestamps. All datetimes in UTC."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_millis() -> int:
    """Milliseconds since the Unix epoch, used in generated ids and object keys."""
    return int(utc_now().timestamp() * 1000)
