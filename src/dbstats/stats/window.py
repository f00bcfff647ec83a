"""Query window alignment."""

import math
from datetime import datetime, timezone

from dbstats.core.models import QueryWindow


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc_second(value: datetime) -> datetime:
    """Normalize a provider timestamp to an aware UTC datetime at second resolution.

    Naive datetimes are taken to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(math.floor(value.timestamp()), tz=timezone.utc)


def compute_window(
    now: datetime | None = None,
    duration: int = 3600,
    period: int = 60,
    offset: int = 0,
) -> QueryWindow:
    """Compute a window ending on a period boundary.

    ``end`` is ``now - offset`` rounded up to the next multiple of ``period``
    seconds since the epoch, and ``start`` is ``end - duration``.

    Args:
        now: Reference time (defaults to the current UTC time)
        duration: Window length in seconds
        period: Sampling period in seconds
        offset: Seconds to shift the window back from now

    Returns:
        Aligned QueryWindow
    """
    duration = int(duration)
    period = int(period)
    offset = int(offset)

    if now is None:
        now = utc_now()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    end_epoch = math.ceil((now.timestamp() - offset) / period) * period
    end = datetime.fromtimestamp(end_epoch, tz=timezone.utc)
    start = datetime.fromtimestamp(end_epoch - duration, tz=timezone.utc)

    return QueryWindow(start=start, end=end, period=period)
