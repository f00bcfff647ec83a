"""GCP adapter implementing MetricsProvider over Cloud Monitoring."""

import asyncio

from dbstats.clients.gcp_monitoring_client import GCPMonitoringClient
from dbstats.core.models import Provider, QueryWindow, TimeSeries
from dbstats.interfaces.metrics_provider import MetricsProvider
from dbstats.stats.window import to_utc_second
from dbstats.utils.logging import get_logger
from dbstats.utils.validation import validate_metric_name, validate_resource_id

logger = get_logger(__name__)

METRIC_TYPE_PREFIX = "cloudsql.googleapis.com/database/"

# Cloud SQL reports utilization as a 0-1 fraction
PERCENT_FRACTION_METRICS = frozenset({"cpu/utilization"})


class GCPAdapter(MetricsProvider):
    """Adapter wrapping GCPMonitoringClient to serve Cloud SQL metrics."""

    provider = Provider.GCP

    def __init__(
        self,
        database_id: str,
        credentials_file: str | None = None,
        timeout: float = 30.0,
        client: GCPMonitoringClient | None = None,
    ):
        """Initialize GCP adapter.

        Args:
            database_id: Cloud SQL database id (project:instance)
            credentials_file: Service account key file (optional)
            timeout: SDK timeout in seconds
            client: Existing GCPMonitoringClient (optional)
        """
        self.database_id = database_id
        self.client = client or GCPMonitoringClient(
            credentials_file=credentials_file, timeout=timeout
        )
        logger.debug("gcp_adapter_initialized", database_id=database_id)

    @property
    def project_id(self) -> str:
        """Project part of the database id."""
        return self.database_id.split(":")[0]

    def build_filter(self, metric_name: str) -> str:
        """Build the monitoring filter for a metric on this database.

        Both values are checked first since they are interpolated into the
        filter expression.

        Raises:
            InvalidInputError: If the metric name or database id is malformed
        """
        validate_metric_name(metric_name)
        validate_resource_id(self.database_id, label="database id")

        return (
            f'metric.type = "{METRIC_TYPE_PREFIX}{metric_name}"'
            f' AND resource.label.database_id = "{self.database_id}"'
        )

    async def fetch(self, metric_name: str, window: QueryWindow) -> TimeSeries:
        """Fetch the mean of a Cloud SQL metric.

        Args:
            metric_name: Metric name below cloudsql.googleapis.com/database/
            window: Aligned query window

        Returns:
            Time series keyed by each point's interval start

        Raises:
            InvalidInputError: If the metric name or database id is malformed
            GCPError: If Cloud Monitoring rejects the request
        """
        filter = self.build_filter(metric_name)

        # widen by one period so the first aligned point is included
        results = await asyncio.to_thread(
            self.client.list_time_series,
            project_id=self.project_id,
            filter=filter,
            start_time=window.start - window.step,
            end_time=window.end,
            alignment_period=window.period,
        )

        scale = 100 if metric_name in PERCENT_FRACTION_METRICS else 1

        data: TimeSeries = {}
        if results:
            for point in results[0].points:
                time = to_utc_second(point.interval.start_time)
                data[time] = point.value.double_value * scale

        logger.info("metric_fetched", provider="gcp", metric_name=metric_name, points=len(data))
        return dict(sorted(data.items()))
