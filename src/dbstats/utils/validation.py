"""Input checks for values interpolated into provider queries."""

import re

from dbstats.core.exceptions import InvalidInputError

METRIC_NAME_PATTERN = re.compile(r"\A[A-Za-z/_]+\Z")
RESOURCE_ID_PATTERN = re.compile(r"\A[A-Za-z0-9:_-]+\Z")


def validate_metric_name(metric_name: str) -> str:
    """Check a provider metric name before it is embedded in a request.

    Raises:
        InvalidInputError: If the name contains anything but letters, '/' or '_'
    """
    if not isinstance(metric_name, str) or not METRIC_NAME_PATTERN.match(metric_name):
        raise InvalidInputError(f"Invalid metric name: {metric_name!r}")
    return metric_name


def validate_resource_id(resource_id: str, label: str = "resource id") -> str:
    """Check a resource identifier before it is embedded in a query filter.

    Raises:
        InvalidInputError: If the id contains characters outside [A-Za-z0-9:_-]
    """
    if not isinstance(resource_id, str) or not RESOURCE_ID_PATTERN.match(resource_id):
        raise InvalidInputError(f"Invalid {label}: {resource_id!r}")
    return resource_id
