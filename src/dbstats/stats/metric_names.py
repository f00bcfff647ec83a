"""Canonical metric key to provider metric name mapping."""

from typing import assert_never

from dbstats.core.exceptions import NotEnabledError, UnsupportedMetricError
from dbstats.core.models import MetricKey, Provider

AWS_METRICS: dict[MetricKey, tuple[str, ...]] = {
    MetricKey.CPU: ("CPUUtilization",),
    MetricKey.CONNECTIONS: ("DatabaseConnections",),
    MetricKey.REPLICATION_LAG: ("ReplicaLag",),
    MetricKey.READ_IOPS: ("ReadIOPS",),
    MetricKey.WRITE_IOPS: ("WriteIOPS",),
    MetricKey.FREE_SPACE: ("FreeStorageSpace",),
}

# free space is derived from (quota, used)
GCP_METRICS: dict[MetricKey, tuple[str, ...]] = {
    MetricKey.CPU: ("cpu/utilization",),
    MetricKey.CONNECTIONS: ("postgresql/num_backends",),
    MetricKey.REPLICATION_LAG: ("replication/replica_lag",),
    MetricKey.READ_IOPS: ("disk/read_ops_count",),
    MetricKey.WRITE_IOPS: ("disk/write_ops_count",),
    MetricKey.FREE_SPACE: ("disk/quota", "disk/bytes_used"),
}

# Azure exposes no read/write IOPS for PostgreSQL servers
AZURE_METRICS: dict[MetricKey, tuple[str, ...]] = {
    MetricKey.CPU: ("cpu_percent",),
    MetricKey.CONNECTIONS: ("active_connections",),
    MetricKey.REPLICATION_LAG: ("pg_replica_log_delay_in_seconds",),
    MetricKey.FREE_SPACE: ("storage_limit", "storage_used"),
}


def metric_table(provider: Provider) -> dict[MetricKey, tuple[str, ...]]:
    """Get the metric mapping for a provider.

    Raises:
        NotEnabledError: If provider is Provider.NONE
    """
    if provider is Provider.AWS:
        return AWS_METRICS
    elif provider is Provider.GCP:
        return GCP_METRICS
    elif provider is Provider.AZURE:
        return AZURE_METRICS
    elif provider is Provider.NONE:
        raise NotEnabledError("System stats not enabled")
    else:
        assert_never(provider)


def resolve_metric_names(provider: Provider, key: MetricKey | str) -> tuple[str, ...]:
    """Resolve a canonical key to the provider's metric name(s).

    Args:
        provider: Active provider
        key: Canonical metric key

    Returns:
        One name for a directly fetched metric, or (quota, used) for a
        derived free space metric

    Raises:
        NotEnabledError: If no provider is active
        UnsupportedMetricError: If the key is unknown or the provider lacks it
    """
    table = metric_table(Provider(provider))

    try:
        metric_key = MetricKey(key)
    except ValueError as e:
        raise UnsupportedMetricError(f"Unknown metric: {key}") from e

    names = table.get(metric_key)
    if not names:
        raise UnsupportedMetricError(
            f"Metric not supported: {metric_key.value} on {Provider(provider).value}"
        )
    return names


def supported_metrics(provider: Provider) -> list[MetricKey]:
    """List the canonical keys a provider can serve."""
    table = metric_table(provider)
    return [key for key in MetricKey if key in table]
