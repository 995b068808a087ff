"""Host compatibility checks for kernel, cgroups and container runtime."""

from validation.errors import (
    MountResolutionError,
    ParseError,
    QueryError,
    UpstreamError,
    ValidationError,
)
from validation.report import HostProbes, build_report, from_config, write_report

__all__ = [
    "HostProbes",
    "MountResolutionError",
    "ParseError",
    "QueryError",
    "UpstreamError",
    "ValidationError",
    "build_report",
    "from_config",
    "write_report",
]
