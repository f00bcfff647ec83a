"""AWS adapter implementing MetricsProvider over CloudWatch."""

import asyncio

from dbstats.clients.cloudwatch_client import CloudWatchClient
from dbstats.core.models import Provider, QueryWindow, TimeSeries
from dbstats.interfaces.metrics_provider import MetricsProvider
from dbstats.stats.window import to_utc_second
from dbstats.utils.logging import get_logger
from dbstats.utils.validation import validate_metric_name

logger = get_logger(__name__)

RDS_NAMESPACE = "AWS/RDS"


class AWSAdapter(MetricsProvider):
    """Adapter wrapping CloudWatchClient to serve RDS instance metrics.

    CloudWatch already reports CPUUtilization as a percentage, so no values
    are rescaled.
    """

    provider = Provider.AWS

    def __init__(
        self,
        db_instance_identifier: str,
        region: str = "us-east-1",
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        timeout: float = 30.0,
        client: CloudWatchClient | None = None,
    ):
        """Initialize AWS adapter.

        Args:
            db_instance_identifier: RDS instance identifier
            region: AWS region
            access_key_id: Explicit access key (optional)
            secret_access_key: Secret for access_key_id
            timeout: SDK timeout in seconds
            client: Existing CloudWatchClient (optional)
        """
        self.db_instance_identifier = db_instance_identifier
        self.client = client or CloudWatchClient(
            region=region,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            timeout=timeout,
        )
        logger.debug("aws_adapter_initialized", db_instance_identifier=db_instance_identifier)

    async def fetch(self, metric_name: str, window: QueryWindow) -> TimeSeries:
        """Fetch the average of an RDS metric.

        Args:
            metric_name: CloudWatch metric name (e.g. CPUUtilization)
            window: Aligned query window

        Returns:
            Time series ordered by timestamp

        Raises:
            InvalidInputError: If the metric name is malformed
            AWSError: If CloudWatch rejects the request
        """
        validate_metric_name(metric_name)

        datapoints = await asyncio.to_thread(
            self.client.get_metric_statistics,
            namespace=RDS_NAMESPACE,
            metric_name=metric_name,
            dimensions=[{"name": "DBInstanceIdentifier", "value": self.db_instance_identifier}],
            start_time=window.start,
            end_time=window.end,
            period=window.period,
            statistics=["Average"],
        )

        data: TimeSeries = {}
        for point in sorted(datapoints, key=lambda d: d["Timestamp"]):
            average = point.get("Average")
            data[to_utc_second(point["Timestamp"])] = (
                float(average) if average is not None else None
            )

        logger.info("metric_fetched", provider="aws", metric_name=metric_name, points=len(data))
        return data
