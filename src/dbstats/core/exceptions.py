"""Custom exceptions for dbstats."""


class DBStatsError(Exception):
    """Base exception for all dbstats errors."""


class ConfigurationError(DBStatsError):
    """Configuration-related errors.

    Raised for problems the caller can fix by changing what they ask for,
    as opposed to ProviderError which signals an infrastructure failure.
    """


class NotEnabledError(ConfigurationError):
    """No active provider is configured for system stats."""


class UnsupportedMetricError(ConfigurationError):
    """The active provider has no mapping for the requested metric."""


class UnsupportedPeriodError(ConfigurationError):
    """The sampling period is not one the provider accepts."""


class InvalidInputError(ConfigurationError):
    """A value failed validation before being embedded in a provider query."""


class ProviderError(DBStatsError):
    """A provider SDK call failed.

    Attributes:
        provider: Provider that produced the failure (aws, gcp, azure)
    """

    provider: str = "unknown"

    def __init__(self, message: str, provider: str | None = None):
        """Initialize provider error.

        Args:
            message: Error message
            provider: Provider name (defaults to the subclass provider)
        """
        super().__init__(message)
        if provider is not None:
            self.provider = provider


class AWSError(ProviderError):
    """AWS CloudWatch operation failed."""

    provider = "aws"


class GCPError(ProviderError):
    """GCP Cloud Monitoring operation failed."""

    provider = "gcp"


class AzureError(ProviderError):
    """Azure Monitor operation failed."""

    provider = "azure"
