"""Time utilities for consistent timestamp handling."""

import math
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def days_elapsed(since: datetime, now: datetime) -> int:
    """Whole days between two instants, rounding partial days up.

    A naive ``since`` is taken to be UTC.
    """
    if since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    seconds = (now - since).total_seconds()
    return max(0, math.ceil(seconds / 86400))
