"""Gap filling and derived series."""

from datetime import datetime, timedelta

from dbstats.core.models import TimeSeries


def fill_gaps(series: TimeSeries, start: datetime, end: datetime, period: int) -> TimeSeries:
    """Insert a None marker for every period slot in [start, end) with no entry.

    Existing entries, including None markers, are kept as they are. The input
    is not modified.

    Args:
        series: Possibly sparse series
        start: First slot (inclusive)
        end: End of the window (exclusive)
        period: Step between slots in seconds

    Returns:
        New series ordered by timestamp
    """
    filled = dict(series)
    step = timedelta(seconds=period)

    time = start
    while time < end:
        filled.setdefault(time, None)
        time += step

    return dict(sorted(filled.items()))


def free_space(quota: TimeSeries, used: TimeSeries) -> TimeSeries:
    """Compute quota - used at timestamps where both series have a value.

    Only points present in both series are used, so neither needs aligning
    against the current time.
    """
    data: TimeSeries = {}
    for time, total in quota.items():
        in_use = used.get(time)
        if total is not None and in_use is not None:
            data[time] = total - in_use
    return dict(sorted(data.items()))
