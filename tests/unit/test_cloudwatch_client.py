"""Unit tests for the CloudWatch client wrapper."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, Mock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from dbstats.clients.cloudwatch_client import CloudWatchClient
from dbstats.core.exceptions import AWSError

START = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
END = datetime(2024, 3, 1, 13, 0, tzinfo=timezone.utc)


class TestCloudWatchClientInitialization:
    """Tests for CloudWatchClient initialization."""

    def test_default_credentials(self) -> None:
        """Test the default credential chain is used without keys."""
        with patch("boto3.Session") as mock_session:
            client = CloudWatchClient(region="us-west-2")

            assert client.region == "us-west-2"
            mock_session.assert_called_once_with(region_name="us-west-2")

    def test_explicit_keys(self) -> None:
        """Test explicit access keys are passed to the session."""
        with patch("boto3.Session") as mock_session:
            CloudWatchClient(
                region="us-east-1", access_key_id="AKIAEXAMPLE", secret_access_key="secret"
            )

            mock_session.assert_called_once_with(
                aws_access_key_id="AKIAEXAMPLE",
                aws_secret_access_key="secret",
                region_name="us-east-1",
            )

    def test_creates_cloudwatch_client_with_timeout(self) -> None:
        """Test the cloudwatch service client gets timeouts and no retries."""
        with patch("boto3.Session") as mock_session_class:
            mock_session = Mock()
            mock_session_class.return_value = mock_session

            CloudWatchClient(timeout=5.0)

            args, kwargs = mock_session.client.call_args
            assert args == ("cloudwatch",)
            config = kwargs["config"]
            assert config.connect_timeout == 5.0
            assert config.read_timeout == 5.0
            assert config.retries["max_attempts"] == 1

    def test_existing_session(self) -> None:
        """Test an existing session is reused."""
        session = MagicMock()

        client = CloudWatchClient(session=session)

        assert client.session is session
        session.client.assert_called_once()


class TestGetMetricStatistics:
    """Tests for get_metric_statistics."""

    @pytest.fixture
    def cloudwatch_client(self) -> CloudWatchClient:
        """Create CloudWatchClient with mocked boto3 session."""
        with patch("boto3.Session"):
            return CloudWatchClient()

    def test_success(self, cloudwatch_client: CloudWatchClient) -> None:
        """Test request shape and returned datapoints."""
        datapoints = [{"Timestamp": START, "Average": 12.5, "Unit": "Percent"}]
        cloudwatch_client.cloudwatch.get_metric_statistics = Mock(
            return_value={"Label": "CPUUtilization", "Datapoints": datapoints}
        )

        result = cloudwatch_client.get_metric_statistics(
            namespace="AWS/RDS",
            metric_name="CPUUtilization",
            dimensions=[{"name": "DBInstanceIdentifier", "value": "prod-db"}],
            start_time=START,
            end_time=END,
            period=60,
            statistics=["Average"],
        )

        assert result == datapoints
        cloudwatch_client.cloudwatch.get_metric_statistics.assert_called_once_with(
            Namespace="AWS/RDS",
            MetricName="CPUUtilization",
            Dimensions=[{"Name": "DBInstanceIdentifier", "Value": "prod-db"}],
            StartTime="2024-03-01T12:00:00+00:00",
            EndTime="2024-03-01T13:00:00+00:00",
            Period=60,
            Statistics=["Average"],
        )

    def test_missing_datapoints(self, cloudwatch_client: CloudWatchClient) -> None:
        """Test a response without datapoints yields an empty list."""
        cloudwatch_client.cloudwatch.get_metric_statistics = Mock(return_value={})

        result = cloudwatch_client.get_metric_statistics(
            "AWS/RDS", "ReadIOPS", [], START, END, 60, ["Average"]
        )

        assert result == []

    def test_client_error(self, cloudwatch_client: CloudWatchClient) -> None:
        """Test ClientError becomes AWSError with the error code."""
        error = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "no"}}, "GetMetricStatistics"
        )
        cloudwatch_client.cloudwatch.get_metric_statistics = Mock(side_effect=error)

        with pytest.raises(AWSError) as exc_info:
            cloudwatch_client.get_metric_statistics(
                "AWS/RDS", "CPUUtilization", [], START, END, 60, ["Average"]
            )

        assert "AccessDenied" in str(exc_info.value)
        assert exc_info.value.provider == "aws"
        assert exc_info.value.__cause__ is error

    def test_connection_error(self, cloudwatch_client: CloudWatchClient) -> None:
        """Test transport failures become AWSError and are not retried."""
        error = EndpointConnectionError(endpoint_url="https://monitoring.us-east-1.amazonaws.com")
        cloudwatch_client.cloudwatch.get_metric_statistics = Mock(side_effect=error)

        with pytest.raises(AWSError):
            cloudwatch_client.get_metric_statistics(
                "AWS/RDS", "CPUUtilization", [], START, END, 60, ["Average"]
            )

        assert cloudwatch_client.cloudwatch.get_metric_statistics.call_count == 1
