"""GCP client for Cloud Monitoring time series."""

from datetime import datetime
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import monitoring_v3
from google.oauth2 import service_account

from dbstats.core.exceptions import GCPError
from dbstats.utils.logging import get_logger

logger = get_logger(__name__)


class GCPMonitoringClient:
    """Cloud Monitoring MetricService wrapper."""

    def __init__(
        self,
        credentials_file: str | None = None,
        timeout: float = 30.0,
        client: monitoring_v3.MetricServiceClient | None = None,
    ):
        """Initialize Cloud Monitoring client.

        Args:
            credentials_file: Service account key file (optional, default credentials otherwise)
            timeout: Per-call timeout in seconds
            client: Existing MetricServiceClient (optional)

        Raises:
            GCPError: If the client cannot be created
        """
        self.timeout = timeout

        try:
            if client:
                self.client = client
            elif credentials_file:
                credentials = service_account.Credentials.from_service_account_file(
                    credentials_file
                )
                self.client = monitoring_v3.MetricServiceClient(credentials=credentials)
            else:
                self.client = monitoring_v3.MetricServiceClient()
        except (GoogleAuthError, OSError, ValueError) as e:
            raise GCPError(f"Failed to create Cloud Monitoring client: {e}") from e

        logger.debug("gcp_monitoring_client_initialized")

    def list_time_series(
        self,
        project_id: str,
        filter: str,
        start_time: datetime,
        end_time: datetime,
        alignment_period: int,
    ) -> list[Any]:
        """List mean-aligned time series matching a filter.

        Args:
            project_id: Project to query
            filter: Monitoring filter expression
            start_time: Start of the interval
            end_time: End of the interval
            alignment_period: Alignment period in seconds

        Returns:
            List of monitoring_v3.TimeSeries

        Raises:
            GCPError: If the call fails
        """
        interval = monitoring_v3.TimeInterval(
            {
                "start_time": {"seconds": int(start_time.timestamp())},
                "end_time": {"seconds": int(end_time.timestamp())},
            }
        )
        aggregation = monitoring_v3.Aggregation(
            {
                "alignment_period": {"seconds": alignment_period},
                "per_series_aligner": monitoring_v3.Aggregation.Aligner.ALIGN_MEAN,
            }
        )

        try:
            logger.debug(
                "listing_time_series",
                project_id=project_id,
                filter=filter,
                alignment_period=alignment_period,
            )

            results = self.client.list_time_series(
                request={
                    "name": f"projects/{project_id}",
                    "filter": filter,
                    "interval": interval,
                    "view": monitoring_v3.ListTimeSeriesRequest.TimeSeriesView.FULL,
                    "aggregation": aggregation,
                },
                retry=None,
                timeout=self.timeout,
            )
            series = list(results)

            logger.debug("time_series_listed", project_id=project_id, count=len(series))
            return series

        except GoogleAPIError as e:
            raise GCPError(f"Failed to list time series: {e}") from e
