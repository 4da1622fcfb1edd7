"""Shared utility functions."""
from datetime import datetime, timedelta, timezone


def now_millis() -> int:
    """Return the current UTC time in milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def millis_ago(delta: timedelta) -> int:
    """Return the epoch-millisecond timestamp *delta* before now."""
    return int((datetime.now(timezone.utc) - delta).timestamp() * 1000)
