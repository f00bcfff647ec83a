"""Unit tests for GCPAdapter.

All Cloud Monitoring calls are mocked to ensure tests are isolated and fast.
"""

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from dbstats.adapters.gcp_adapter import GCPAdapter
from dbstats.core.exceptions import GCPError, InvalidInputError
from dbstats.core.models import Provider, QueryWindow


def make_point(start, value: float) -> MagicMock:
    point = MagicMock()
    point.interval.start_time = start
    point.interval.end_time = start
    point.value.double_value = value
    return point


def make_series(*points: MagicMock) -> MagicMock:
    series = MagicMock()
    series.points = list(points)
    return series


def make_adapter(results=None, database_id="my-project:my-db") -> tuple[GCPAdapter, MagicMock]:
    client = MagicMock()
    client.list_time_series.return_value = results or []
    return GCPAdapter(database_id=database_id, client=client), client


class TestGCPAdapterInit:
    """Tests for GCPAdapter initialization."""

    @patch("dbstats.adapters.gcp_adapter.GCPMonitoringClient")
    def test_init_builds_client(self, mock_client_class: MagicMock) -> None:
        """Test the monitoring client gets credentials and timeout."""
        adapter = GCPAdapter(
            database_id="my-project:my-db", credentials_file="/key.json", timeout=9.0
        )

        mock_client_class.assert_called_once_with(credentials_file="/key.json", timeout=9.0)
        assert adapter.provider is Provider.GCP
        assert adapter.project_id == "my-project"


class TestGCPAdapterFetch:
    """Tests for fetch."""

    @pytest.mark.asyncio
    async def test_request_shape(self, sample_window: QueryWindow) -> None:
        """Test filter, widened interval and alignment period."""
        adapter, client = make_adapter()

        await adapter.fetch("postgresql/num_backends", sample_window)

        client.list_time_series.assert_called_once_with(
            project_id="my-project",
            filter='metric.type = "cloudsql.googleapis.com/database/postgresql/num_backends"'
            ' AND resource.label.database_id = "my-project:my-db"',
            start_time=sample_window.start - timedelta(seconds=60),
            end_time=sample_window.end,
            alignment_period=60,
        )

    @pytest.mark.asyncio
    async def test_cpu_fraction_scaled_to_percent(self, sample_window: QueryWindow) -> None:
        """Test cpu/utilization 0.42 becomes 42."""
        t1 = sample_window.start
        adapter, _ = make_adapter([make_series(make_point(t1, 0.42))])

        result = await adapter.fetch("cpu/utilization", sample_window)

        assert result[t1] == pytest.approx(42.0)

    @pytest.mark.asyncio
    async def test_other_metrics_not_scaled(self, sample_window: QueryWindow) -> None:
        """Test only the CPU metric is rescaled."""
        t1 = sample_window.start
        adapter, _ = make_adapter([make_series(make_point(t1, 0.42))])

        result = await adapter.fetch("replication/replica_lag", sample_window)

        assert result[t1] == 0.42

    @pytest.mark.asyncio
    async def test_points_keyed_by_start_and_sorted(self, sample_window: QueryWindow) -> None:
        """Test newest-first points come back in time order."""
        t1 = sample_window.start
        t2 = t1 + timedelta(minutes=1)
        adapter, _ = make_adapter([make_series(make_point(t2, 2.0), make_point(t1, 1.0))])

        result = await adapter.fetch("disk/read_ops_count", sample_window)

        assert list(result.items()) == [(t1, 1.0), (t2, 2.0)]

    @pytest.mark.asyncio
    async def test_only_first_series_used(self, sample_window: QueryWindow) -> None:
        """Test additional series are ignored."""
        t1 = sample_window.start
        adapter, _ = make_adapter(
            [make_series(make_point(t1, 1.0)), make_series(make_point(t1, 99.0))]
        )

        result = await adapter.fetch("disk/quota", sample_window)

        assert result == {t1: 1.0}

    @pytest.mark.asyncio
    async def test_no_series(self, sample_window: QueryWindow) -> None:
        """Test an empty result yields an empty series."""
        adapter, _ = make_adapter([])

        assert await adapter.fetch("disk/bytes_used", sample_window) == {}

    @pytest.mark.asyncio
    async def test_invalid_metric_name(self, sample_window: QueryWindow) -> None:
        """Test a metric name with quotes is rejected before the call."""
        adapter, client = make_adapter()

        with pytest.raises(InvalidInputError):
            await adapter.fetch('cpu/utilization" OR metric.type = "x', sample_window)

        client.list_time_series.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_database_id(self, sample_window: QueryWindow) -> None:
        """Test a database id with quotes is rejected before the call."""
        adapter, client = make_adapter(database_id='proj:db" OR "1')

        with pytest.raises(InvalidInputError) as exc_info:
            await adapter.fetch("cpu/utilization", sample_window)

        assert "Invalid database id" in str(exc_info.value)
        client.list_time_series.assert_not_called()

    @pytest.mark.asyncio
    async def test_client_error_propagates(self, sample_window: QueryWindow) -> None:
        """Test GCPError from the client propagates unchanged."""
        adapter, client = make_adapter()
        client.list_time_series.side_effect = GCPError("Failed to list time series: 403")

        with pytest.raises(GCPError):
            await adapter.fetch("cpu/utilization", sample_window)
