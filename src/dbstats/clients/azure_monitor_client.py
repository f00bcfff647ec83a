"""Azure client for Monitor metrics."""

from typing import Any

from azure.core.exceptions import AzureError as AzureSDKError
from azure.identity import DefaultAzureCredential
from azure.mgmt.monitor import MonitorManagementClient

from dbstats.core.exceptions import AzureError
from dbstats.utils.logging import get_logger

logger = get_logger(__name__)


class AzureMonitorClient:
    """Azure Monitor metrics wrapper."""

    def __init__(
        self,
        subscription_id: str,
        timeout: float = 30.0,
        client: MonitorManagementClient | None = None,
    ):
        """Initialize Azure Monitor client.

        Args:
            subscription_id: Subscription containing the monitored resource
            timeout: Per-call timeout in seconds
            client: Existing MonitorManagementClient (optional)

        Raises:
            AzureError: If the client cannot be created
        """
        self.subscription_id = subscription_id
        self.timeout = timeout

        try:
            if client:
                self.client = client
            else:
                self.client = MonitorManagementClient(
                    DefaultAzureCredential(), subscription_id, retry_total=0
                )
        except AzureSDKError as e:
            raise AzureError(f"Failed to create Azure Monitor client: {e}") from e

        logger.debug("azure_monitor_client_initialized", subscription_id=subscription_id)

    def list_metrics(
        self,
        resource_uri: str,
        metric_names: str,
        timespan: str,
        interval: str,
        aggregation: str = "Average",
    ) -> list[Any]:
        """List metric values for a resource.

        Args:
            resource_uri: Full resource id of the monitored resource
            metric_names: Comma separated metric names
            timespan: ISO-8601 "start/end" interval
            interval: ISO-8601 duration code (e.g. PT5M)
            aggregation: Aggregation type

        Returns:
            List of azure.mgmt.monitor Metric objects

        Raises:
            AzureError: If the call fails
        """
        try:
            logger.debug(
                "listing_metrics",
                resource_uri=resource_uri,
                metric_names=metric_names,
                timespan=timespan,
                interval=interval,
            )

            response = self.client.metrics.list(
                resource_uri,
                timespan=timespan,
                interval=interval,
                metricnames=metric_names,
                aggregation=aggregation,
                timeout=self.timeout,
            )
            metrics = list(response.value or [])

            logger.debug("metrics_listed", metric_names=metric_names, count=len(metrics))
            return metrics

        except AzureSDKError as e:
            raise AzureError(f"Failed to list metrics {metric_names}: {e}") from e
