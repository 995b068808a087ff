"""Version facts about this tool and the host it runs on."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import metadata
from pathlib import Path
import platform
from typing import Protocol

from core.logging import log_warning
from validation.errors import QueryError, UpstreamError

DISTRIBUTION = "hostcheck"
OS_RELEASE = Path("/etc/os-release")


@dataclass(frozen=True)
class VersionInfo:
    """Snapshot of version strings used by the report."""

    self_version: str
    os_version: str
    kernel_version: str
    runtime_version: str


class RuntimeVersionSource(Protocol):
    def fetch_version(self) -> str:
        """Return the runtime daemon version or raise :class:`QueryError`."""


class VersionInfoProvider(Protocol):
    def get_version_info(self) -> VersionInfo:
        """Return a version snapshot or raise :class:`UpstreamError`."""


def get_self_version() -> str:
    try:
        return metadata.version(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "unknown"


def get_os_version(os_release: Path = OS_RELEASE) -> str:
    """Return ``PRETTY_NAME`` from os-release, or the platform string."""

    try:
        content = os_release.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return platform.platform()
    for line in content.splitlines():
        line = line.strip()
        if line.startswith("PRETTY_NAME="):
            value = line.split("=", 1)[1].strip().strip('"').strip("'")
            if value:
                return value
    return platform.platform()


class HostVersionProvider:
    """Collects version strings from the local host and runtime daemon."""

    def __init__(
        self,
        runtime_client: RuntimeVersionSource,
        os_release: Path = OS_RELEASE,
    ) -> None:
        self.runtime_client = runtime_client
        self.os_release = os_release

    def get_runtime_version(self) -> str:
        try:
            return self.runtime_client.fetch_version()
        except QueryError as exc:
            log_warning(f"Docker version unavailable: {exc}")
            return "Unknown"

    def get_version_info(self) -> VersionInfo:
        try:
            return VersionInfo(
                self_version=get_self_version(),
                os_version=get_os_version(self.os_release),
                kernel_version=platform.release(),
                runtime_version=self.get_runtime_version(),
            )
        except Exception as exc:  # noqa: BLE001 - surfaced as one upstream failure
            raise UpstreamError(f"failed to collect version info: {exc}") from exc
