"""Metrics provider interface for cloud monitoring services."""

from abc import ABC, abstractmethod

from dbstats.core.models import Provider, QueryWindow, TimeSeries


class MetricsProvider(ABC):
    """Abstract interface for fetching a database metric time series.

    This interface abstracts cloud monitoring services (CloudWatch,
    Cloud Monitoring, Azure Monitor) behind a single fetch operation.

    Design Philosophy:
    - Hides provider-specific request and response shapes
    - Returns timestamp -> average value mappings in canonical units
    - Never retries; SDK failures surface as ProviderError
    """

    provider: Provider

    @abstractmethod
    async def fetch(self, metric_name: str, window: QueryWindow) -> TimeSeries:
        """Fetch the average of a metric over a window.

        Args:
            metric_name: Provider-native metric name
            window: Aligned query window and sampling period

        Returns:
            Time series ordered by timestamp, possibly sparse

        Raises:
            InvalidInputError: If a value fails validation before the request
            UnsupportedPeriodError: If the provider cannot sample at window.period
            ProviderError: If the provider call fails
        """
