"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from dbstats.core.models import Provider, QueryWindow, TimeSeries
from dbstats.interfaces.metrics_provider import MetricsProvider


class FakeAdapter(MetricsProvider):
    """In-memory MetricsProvider returning canned series per metric name."""

    def __init__(
        self,
        provider: Provider,
        responses: dict[str, TimeSeries] | None = None,
        errors: dict[str, Exception] | None = None,
    ):
        self.provider = provider
        self.responses = responses or {}
        self.errors = errors or {}
        self.calls: list[tuple[str, QueryWindow]] = []

    async def fetch(self, metric_name: str, window: QueryWindow) -> TimeSeries:
        self.calls.append((metric_name, window))
        if metric_name in self.errors:
            raise self.errors[metric_name]
        return dict(self.responses.get(metric_name, {}))


@pytest.fixture
def fixed_now() -> datetime:
    """A reference time 90 seconds past an hour boundary."""
    return datetime(2024, 3, 1, 12, 1, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_window() -> QueryWindow:
    """One hour window at one minute resolution."""
    end = datetime(2024, 3, 1, 13, 0, 0, tzinfo=timezone.utc)
    return QueryWindow(start=end - timedelta(hours=1), end=end, period=60)


@pytest.fixture
def fake_adapter_factory() -> Any:
    """Build FakeAdapter instances."""
    return FakeAdapter


# ==============================================================================
# Pytest Markers
# ==============================================================================


def pytest_configure(config: Any) -> None:
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
