"""Adapter implementations for cloud monitoring services."""

from dbstats.adapters.aws_adapter import AWSAdapter
from dbstats.adapters.azure_adapter import AzureAdapter
from dbstats.adapters.gcp_adapter import GCPAdapter

__all__ = [
    "AWSAdapter",
    "AzureAdapter",
    "GCPAdapter",
]
