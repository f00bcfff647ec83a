"""Provider-independent entry point for database system stats."""

import asyncio
from collections.abc import Callable
from datetime import datetime
from typing import Any, assert_never

from pydantic import ValidationError

from dbstats.core.config import StatsConfig
from dbstats.core.exceptions import ConfigurationError, NotEnabledError
from dbstats.core.models import MetricKey, Provider, QueryOptions, TimeSeries
from dbstats.interfaces.metrics_provider import MetricsProvider
from dbstats.stats.metric_names import resolve_metric_names, supported_metrics
from dbstats.stats.series import fill_gaps, free_space
from dbstats.stats.window import compute_window, utc_now
from dbstats.utils.logging import get_logger

logger = get_logger(__name__)


class SystemStats:
    """Query system stats for one database instance.

    Each call resolves the provider metric name(s), computes an aligned
    window, fetches through the provider adapter and optionally fills gaps.
    Calls share no mutable state, so one instance can serve concurrent
    queries as long as the adapter's SDK client allows it.

    Example:
        >>> stats = SystemStats.from_config(StatsConfig.from_file("dbstats.yaml"))
        >>> series = await stats.cpu_usage(duration=7200, period=300, series=True)
    """

    def __init__(
        self,
        provider: Provider = Provider.NONE,
        adapter: MetricsProvider | None = None,
        defaults: QueryOptions | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize system stats.

        Args:
            provider: Active provider
            adapter: Adapter for the active provider (ignored when provider is NONE)
            defaults: Options applied when a query does not override them
            clock: Source of the current time (defaults to UTC now)

        Raises:
            ConfigurationError: If the adapter does not match the provider
        """
        self.provider = Provider(provider)
        self.defaults = defaults or QueryOptions()
        self.clock = clock or utc_now

        if self.provider is not Provider.NONE:
            if adapter is None:
                raise ConfigurationError(f"No adapter given for provider {self.provider.value}")
            if adapter.provider is not self.provider:
                raise ConfigurationError(
                    f"Adapter for {adapter.provider.value} cannot serve {self.provider.value}"
                )
        self.adapter = adapter

    @classmethod
    def from_config(cls, config: StatsConfig) -> "SystemStats":
        """Create SystemStats with the adapter for the configured provider.

        Args:
            config: Loaded configuration

        Returns:
            SystemStats instance

        Raises:
            ConfigurationError: If the provider section is incomplete
            ProviderError: If the SDK client cannot be created
        """
        provider = config.provider
        adapter: MetricsProvider | None

        if provider is Provider.AWS:
            from dbstats.adapters.aws_adapter import AWSAdapter

            if config.aws is None:
                raise ConfigurationError("Missing aws configuration section")
            adapter = AWSAdapter(
                db_instance_identifier=config.aws.db_instance_identifier,
                region=config.aws.region,
                access_key_id=config.aws.access_key_id,
                secret_access_key=config.aws.secret_access_key,
                timeout=config.timeout,
            )
        elif provider is Provider.GCP:
            from dbstats.adapters.gcp_adapter import GCPAdapter

            if config.gcp is None:
                raise ConfigurationError("Missing gcp configuration section")
            adapter = GCPAdapter(
                database_id=config.gcp.database_id,
                credentials_file=config.gcp.credentials_file,
                timeout=config.timeout,
            )
        elif provider is Provider.AZURE:
            from dbstats.adapters.azure_adapter import AzureAdapter

            if config.azure is None:
                raise ConfigurationError("Missing azure configuration section")
            adapter = AzureAdapter(
                resource_id=config.azure.resource_id,
                subscription_id=config.azure.resolved_subscription_id,
                timeout=config.timeout,
            )
        elif provider is Provider.NONE:
            adapter = None
        else:
            assert_never(provider)

        return cls(provider=provider, adapter=adapter, defaults=config.defaults)

    @property
    def enabled(self) -> bool:
        """Whether a provider is active."""
        return self.provider is not Provider.NONE

    def supported_metrics(self) -> list[MetricKey]:
        """Canonical keys the active provider can serve.

        Raises:
            NotEnabledError: If no provider is active
        """
        return supported_metrics(self.provider)

    def _options(self, options: QueryOptions | None, overrides: dict[str, Any]) -> QueryOptions:
        base = options or self.defaults
        if not overrides:
            return base
        try:
            return QueryOptions(**{**base.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid query options: {e}") from e

    async def query_metric(
        self,
        key: MetricKey | str,
        options: QueryOptions | None = None,
        **overrides: Any,
    ) -> TimeSeries:
        """Fetch a metric time series from the active provider.

        Args:
            key: Canonical metric key
            options: Query options (defaults to the configured defaults)
            **overrides: Individual option overrides (duration, period, offset, series)

        Returns:
            Time series ordered by timestamp; gap-filled when options.series is set

        Raises:
            NotEnabledError: If no provider is active
            UnsupportedMetricError: If the provider has no such metric
            ConfigurationError: If the options are invalid
            ProviderError: If a provider call fails
        """
        adapter = self.adapter
        if not self.enabled or adapter is None:
            raise NotEnabledError("System stats not enabled")

        names = resolve_metric_names(self.provider, key)
        opts = self._options(options, overrides)
        window = compute_window(
            now=self.clock(), duration=opts.duration, period=opts.period, offset=opts.offset
        )

        logger.debug(
            "querying_metric",
            provider=self.provider.value,
            metric=MetricKey(key).value,
            metric_names=list(names),
            start=window.start.isoformat(),
            end=window.end.isoformat(),
            period=window.period,
        )

        if len(names) == 2:
            quota_name, used_name = names
            quota, used = await asyncio.gather(
                adapter.fetch(quota_name, window),
                adapter.fetch(used_name, window),
            )
            data = free_space(quota, used)
        else:
            data = await adapter.fetch(names[0], window)

        if opts.series:
            data = fill_gaps(data, window.start, window.end, window.period)

        return data

    async def cpu_usage(self, options: QueryOptions | None = None, **overrides: Any) -> TimeSeries:
        """CPU utilization in percent."""
        return await self.query_metric(MetricKey.CPU, options, **overrides)

    async def connection_stats(
        self, options: QueryOptions | None = None, **overrides: Any
    ) -> TimeSeries:
        """Open connection count."""
        return await self.query_metric(MetricKey.CONNECTIONS, options, **overrides)

    async def replication_lag_stats(
        self, options: QueryOptions | None = None, **overrides: Any
    ) -> TimeSeries:
        """Replica lag in seconds."""
        return await self.query_metric(MetricKey.REPLICATION_LAG, options, **overrides)

    async def read_iops_stats(
        self, options: QueryOptions | None = None, **overrides: Any
    ) -> TimeSeries:
        return await self.query_metric(MetricKey.READ_IOPS, options, **overrides)

    async def write_iops_stats(
        self, options: QueryOptions | None = None, **overrides: Any
    ) -> TimeSeries:
        return await self.query_metric(MetricKey.WRITE_IOPS, options, **overrides)

    async def free_space_stats(
        self, options: QueryOptions | None = None, **overrides: Any
    ) -> TimeSeries:
        """Free storage in bytes."""
        return await self.query_metric(MetricKey.FREE_SPACE, options, **overrides)
