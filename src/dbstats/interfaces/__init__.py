"""Interface definitions for provider adapters."""

from dbstats.interfaces.metrics_provider import MetricsProvider

__all__ = [
    "MetricsProvider",
]
