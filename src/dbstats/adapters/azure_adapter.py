"""Azure adapter implementing MetricsProvider over Azure Monitor."""

import asyncio

from dbstats.clients.azure_monitor_client import AzureMonitorClient
from dbstats.core.exceptions import ConfigurationError, UnsupportedPeriodError
from dbstats.core.models import Provider, QueryWindow, TimeSeries
from dbstats.interfaces.metrics_provider import MetricsProvider
from dbstats.stats.window import to_utc_second
from dbstats.utils.logging import get_logger
from dbstats.utils.validation import validate_metric_name

logger = get_logger(__name__)

# Azure Monitor only aggregates on these grains
INTERVALS: dict[int, str] = {
    60: "PT1M",
    300: "PT5M",
    900: "PT15M",
    1800: "PT30M",
    3600: "PT1H",
}


def interval_for_period(period: int) -> str:
    """Map a period in seconds to an Azure interval code.

    Raises:
        UnsupportedPeriodError: If Azure has no matching grain
    """
    try:
        return INTERVALS[int(period)]
    except KeyError:
        raise UnsupportedPeriodError(
            f"Unsupported period: {period} (expected one of {sorted(INTERVALS)})"
        ) from None


class AzureAdapter(MetricsProvider):
    """Adapter wrapping AzureMonitorClient to serve Azure Database metrics."""

    provider = Provider.AZURE

    def __init__(
        self,
        resource_id: str,
        subscription_id: str | None = None,
        timeout: float = 30.0,
        client: AzureMonitorClient | None = None,
    ):
        """Initialize Azure adapter.

        Args:
            resource_id: Full resource id of the database server
            subscription_id: Subscription id (required unless client is given)
            timeout: SDK timeout in seconds
            client: Existing AzureMonitorClient (optional)

        Raises:
            ConfigurationError: If no client and no subscription id are given
        """
        self.resource_id = resource_id

        if client is None:
            if not subscription_id:
                raise ConfigurationError(
                    f"Cannot determine Azure subscription for resource {resource_id}"
                )
            client = AzureMonitorClient(subscription_id=subscription_id, timeout=timeout)
        self.client = client

        logger.debug("azure_adapter_initialized", resource_id=resource_id)

    async def fetch(self, metric_name: str, window: QueryWindow) -> TimeSeries:
        """Fetch the average of an Azure Monitor metric.

        Args:
            metric_name: Azure metric name (e.g. cpu_percent)
            window: Aligned query window

        Returns:
            Time series ordered by timestamp

        Raises:
            UnsupportedPeriodError: If window.period is not an Azure grain
            InvalidInputError: If the metric name is malformed
            AzureError: If Azure Monitor rejects the request
        """
        interval = interval_for_period(window.period)
        validate_metric_name(metric_name)

        timespan = f"{window.start.isoformat()}/{window.end.isoformat()}"
        metrics = await asyncio.to_thread(
            self.client.list_metrics,
            resource_uri=self.resource_id,
            metric_names=metric_name,
            timespan=timespan,
            interval=interval,
            aggregation="Average",
        )

        data: TimeSeries = {}
        if metrics and metrics[0].timeseries:
            for point in metrics[0].timeseries[0].data or []:
                average = point.average
                data[to_utc_second(point.time_stamp)] = (
                    float(average) if average is not None else None
                )

        logger.info("metric_fetched", provider="azure", metric_name=metric_name, points=len(data))
        return dict(sorted(data.items()))
