"""Configuration management for dbstats."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

from dbstats.core.exceptions import ConfigurationError
from dbstats.core.models import Provider, QueryOptions


class AWSConfig(BaseModel):
    """AWS CloudWatch configuration."""

    region: str = "us-east-1"
    db_instance_identifier: str
    access_key_id: str | None = None
    secret_access_key: str | None = None

    @model_validator(mode="after")
    def check_key_pair(self) -> "AWSConfig":
        """Access keys must be given together or not at all."""
        if bool(self.access_key_id) != bool(self.secret_access_key):
            raise ValueError("access_key_id and secret_access_key must be set together")
        return self


class GCPConfig(BaseModel):
    """GCP Cloud Monitoring configuration."""

    database_id: str = Field(..., description="Cloud SQL id in the form project:instance")
    credentials_file: str | None = None

    @property
    def project_id(self) -> str:
        """Project part of the database id."""
        return self.database_id.split(":")[0]


class AzureConfig(BaseModel):
    """Azure Monitor configuration."""

    resource_id: str
    subscription_id: str | None = None

    @property
    def resolved_subscription_id(self) -> str | None:
        """Configured subscription id, or the one embedded in the resource id."""
        if self.subscription_id:
            return self.subscription_id

        parts = [p for p in self.resource_id.split("/") if p]
        for i, part in enumerate(parts[:-1]):
            if part.lower() == "subscriptions":
                return parts[i + 1]
        return None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"
    output: str = "stderr"


class StatsConfig(BaseModel):
    """Main dbstats configuration."""

    provider: Provider = Provider.NONE
    aws: AWSConfig | None = None
    gcp: GCPConfig | None = None
    azure: AzureConfig | None = None
    timeout: float = Field(default=30.0, gt=0, description="Per-call SDK timeout in seconds")
    defaults: QueryOptions = Field(default_factory=QueryOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def check_provider_section(self) -> "StatsConfig":
        """The active provider needs its own configuration section."""
        if self.provider is not Provider.NONE and getattr(self, self.provider.value) is None:
            raise ValueError(f"provider '{self.provider.value}' requires a '{self.provider.value}' section")
        return self

    @classmethod
    def from_file(cls, path: str | Path) -> "StatsConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            StatsConfig instance

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        config_path = Path(path).expanduser()

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}") from e

        try:
            return cls(**(data or {}))
        except Exception as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation
        """
        return self.model_dump(mode="json")
