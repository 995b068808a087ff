"""Exceptions raised while collecting host facts."""

from __future__ import annotations


class ValidationError(Exception):
    """Base class for host validation errors."""


class ParseError(ValidationError, ValueError):
    """Raised when a version string or host record has an unexpected shape.

    Attributes:
        text: The offending input, verbatim.
    """

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class MountResolutionError(ValidationError):
    """Raised when no cgroup mount serves the requested subsystem."""


class QueryError(ValidationError):
    """Raised when the container runtime daemon cannot be queried.

    Connection failures and API failures are not told apart.
    """


class UpstreamError(ValidationError):
    """Raised when the version-info snapshot cannot be assembled."""
