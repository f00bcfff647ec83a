"""Provider-independent query pipeline."""

from dbstats.stats.metric_names import resolve_metric_names
from dbstats.stats.series import fill_gaps, free_space
from dbstats.stats.system_stats import SystemStats
from dbstats.stats.window import compute_window

__all__ = [
    "SystemStats",
    "compute_window",
    "fill_gaps",
    "free_space",
    "resolve_metric_names",
]
