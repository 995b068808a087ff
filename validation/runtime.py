"""Container runtime daemon probing and driver policy."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Protocol

import docker
from docker.errors import DockerException

from core.logging import log_warning
from diagnostics.models import CheckResult, SupportLevel
from validation.errors import QueryError
from validation.mounts import uses_systemd_cgroups

RUNTIME_INFO_CHECK = "Docker driver setup"
DEFAULT_ENDPOINT = "unix:///var/run/docker.sock"


@dataclass(frozen=True)
class RuntimeInfo:
    """Driver facts reported by the container runtime daemon."""

    execution_driver: str
    storage_driver: str
    systemd_cgroups: bool


class RuntimeClient(Protocol):
    """Anything that can fetch driver facts from a runtime daemon."""

    def fetch_info(self) -> RuntimeInfo:
        """Return daemon driver facts or raise :class:`QueryError`."""


class DockerRuntimeClient:
    """Runtime client backed by the Docker Engine API."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_s: float = 5.0,
        systemd_probe: Callable[[], bool] = uses_systemd_cgroups,
    ) -> None:
        self.endpoint = endpoint
        self.timeout_s = timeout_s
        self._systemd_probe = systemd_probe

    @contextmanager
    def _client(self) -> Iterator[docker.DockerClient]:
        try:
            client = docker.DockerClient(base_url=self.endpoint, timeout=self.timeout_s)
        except (DockerException, OSError) as exc:
            raise QueryError(f"cannot connect to {self.endpoint}: {exc}") from exc
        try:
            yield client
        except (DockerException, OSError) as exc:
            raise QueryError(f"query against {self.endpoint} failed: {exc}") from exc
        finally:
            client.close()

    def fetch_version(self) -> str:
        """Return the daemon's version string."""

        with self._client() as client:
            payload = client.version()
        return str(payload.get("Version") or "")

    def fetch_info(self) -> RuntimeInfo:
        with self._client() as client:
            payload = client.info()
        cgroup_driver = payload.get("CgroupDriver")
        if cgroup_driver:
            systemd_cgroups = cgroup_driver == "systemd"
        else:
            systemd_cgroups = self._systemd_probe()
        return RuntimeInfo(
            execution_driver=str(payload.get("ExecutionDriver") or ""),
            storage_driver=str(payload.get("Driver") or ""),
            systemd_cgroups=systemd_cgroups,
        )


def validate_runtime_info(client: RuntimeClient) -> CheckResult:
    """Classify the daemon's execution driver."""

    try:
        info = client.fetch_info()
    except QueryError as exc:
        log_warning(f"Docker remote API not reachable: {exc}")
        return CheckResult(
            name=RUNTIME_INFO_CHECK,
            level=SupportLevel.UNKNOWN,
            description="Docker remote API not reachable\n\t",
        )

    desc = (
        f"Docker exec driver is {info.execution_driver}. "
        f"Storage driver is {info.storage_driver}.\n"
    )
    if info.systemd_cgroups:
        desc += "\tsystemd is being used to create cgroups.\n"
    else:
        desc += "\tCgroups are being created through cgroup filesystem.\n"

    if "native" in info.execution_driver:
        level = SupportLevel.RECOMMENDED
    elif "lxc" in info.execution_driver:
        level = SupportLevel.SUPPORTED
    else:
        level = SupportLevel.UNKNOWN
    return CheckResult(name=RUNTIME_INFO_CHECK, level=level, description=desc)
