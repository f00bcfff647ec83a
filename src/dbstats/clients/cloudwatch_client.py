"""AWS client for CloudWatch metric statistics."""

from datetime import datetime
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from dbstats.core.exceptions import AWSError
from dbstats.utils.logging import get_logger

logger = get_logger(__name__)


class CloudWatchClient:
    """AWS client for CloudWatch GetMetricStatistics."""

    def __init__(
        self,
        region: str = "us-east-1",
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        timeout: float = 30.0,
        session: boto3.Session | None = None,
    ):
        """Initialize CloudWatch client.

        Args:
            region: AWS region
            access_key_id: Explicit access key (optional, default credential chain otherwise)
            secret_access_key: Secret for access_key_id
            timeout: Connect and read timeout in seconds
            session: Existing boto3 session (optional, overrides keys)

        Raises:
            AWSError: If the client cannot be created
        """
        self.region = region

        try:
            if session:
                self.session = session
            elif access_key_id:
                self.session = boto3.Session(
                    aws_access_key_id=access_key_id,
                    aws_secret_access_key=secret_access_key,
                    region_name=region,
                )
            else:
                self.session = boto3.Session(region_name=region)

            # retries are disabled; a failed call surfaces to the caller
            self.cloudwatch = self.session.client(
                "cloudwatch",
                config=Config(
                    connect_timeout=timeout,
                    read_timeout=timeout,
                    retries={"max_attempts": 1, "mode": "standard"},
                ),
            )
        except (BotoCoreError, ClientError) as e:
            raise AWSError(f"Failed to create CloudWatch client: {e}") from e

        logger.debug("cloudwatch_client_initialized", region=region)

    def get_metric_statistics(
        self,
        namespace: str,
        metric_name: str,
        dimensions: list[dict[str, str]],
        start_time: datetime,
        end_time: datetime,
        period: int,
        statistics: list[str],
    ) -> list[dict[str, Any]]:
        """Get statistics for a metric.

        Args:
            namespace: CloudWatch namespace (e.g. AWS/RDS)
            metric_name: CloudWatch metric name
            dimensions: Dimension filters
            start_time: Start of the window
            end_time: End of the window
            period: Granularity in seconds
            statistics: Statistics to return (e.g. ["Average"])

        Returns:
            Raw datapoints in the order CloudWatch returned them

        Raises:
            AWSError: If the call fails
        """
        try:
            logger.debug(
                "getting_metric_statistics",
                namespace=namespace,
                metric_name=metric_name,
                start_time=start_time.isoformat(),
                end_time=end_time.isoformat(),
                period=period,
            )

            response = self.cloudwatch.get_metric_statistics(
                Namespace=namespace,
                MetricName=metric_name,
                Dimensions=[{"Name": d["name"], "Value": d["value"]} for d in dimensions],
                StartTime=start_time.isoformat(),
                EndTime=end_time.isoformat(),
                Period=period,
                Statistics=statistics,
            )
            datapoints = response.get("Datapoints", [])

            logger.debug("metric_statistics_retrieved", metric_name=metric_name, count=len(datapoints))
            return datapoints

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            raise AWSError(f"Failed to get statistics for {metric_name}: {error_code}") from e
        except BotoCoreError as e:
            raise AWSError(f"Failed to get statistics for {metric_name}: {e}") from e
