"""Core data models for dbstats."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Timestamp -> average value. None marks a slot with no data, which is
# distinct from a real zero.
TimeSeries = dict[datetime, float | None]


class Provider(str, Enum):
    """Cloud provider hosting the monitored database."""

    AWS = "aws"
    GCP = "gcp"
    AZURE = "azure"
    NONE = "none"


class MetricKey(str, Enum):
    """Provider-independent metric names."""

    CPU = "cpu"
    CONNECTIONS = "connections"
    REPLICATION_LAG = "replication_lag"
    READ_IOPS = "read_iops"
    WRITE_IOPS = "write_iops"
    FREE_SPACE = "free_space"


@dataclass(frozen=True)
class QueryWindow:
    """Aligned [start, end) query window sampled every ``period`` seconds."""

    start: datetime
    end: datetime
    period: int

    @property
    def duration(self) -> int:
        """Window length in seconds."""
        return int((self.end - self.start).total_seconds())

    @property
    def step(self) -> timedelta:
        """Sampling period as a timedelta."""
        return timedelta(seconds=self.period)


class QueryOptions(BaseModel):
    """Options for a single metric query.

    All durations are in seconds. ``series`` requests a gap-filled series with
    an explicit None for every period slot in the window.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    duration: int = Field(default=3600, gt=0, description="Window length in seconds")
    period: int = Field(default=60, gt=0, description="Sampling period in seconds")
    offset: int = Field(default=0, description="Shift the window back by seconds")
    series: bool = Field(default=False, description="Fill missing slots with None")

    @field_validator("duration", "period", "offset", mode="before")
    @classmethod
    def coerce_seconds(cls, value: Any) -> Any:
        """Accept timedeltas and numeric strings/floats as whole seconds."""
        if isinstance(value, timedelta):
            return int(value.total_seconds())
        if isinstance(value, float):
            return int(value)
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return int(value.strip())
        return value
