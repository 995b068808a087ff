"""Assembles the host validation report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
import os
from pathlib import Path
from typing import Any, TextIO

from diagnostics.models import CheckResult
from diagnostics.runner import format_result, run_checks
from validation.cgroups import PROC_CGROUPS, validate_cgroups
from validation.mounts import MOUNTINFO, find_cgroup_mountpoint, uses_systemd_cgroups, validate_cgroup_mounts
from validation.runtime import DockerRuntimeClient, RuntimeClient, validate_runtime_info
from validation.version_info import HostVersionProvider, VersionInfo, VersionInfoProvider
from validation.versions import validate_kernel_version, validate_runtime_version

PRODUCT_NAME = "hostcheck"


@dataclass(frozen=True)
class HostProbes:
    """Host state sources the checks read from."""

    runtime_client: RuntimeClient
    proc_cgroups: Path = PROC_CGROUPS
    resolve_mount: Callable[[str], str] = find_cgroup_mountpoint
    path_exists: Callable[[str], bool] = os.path.exists


def build_checks(info: VersionInfo, probes: HostProbes) -> list[tuple[str, Callable[[], CheckResult]]]:
    """Return the report's checks in rendering order."""

    return [
        ("Kernel version", partial(validate_kernel_version, info.kernel_version)),
        ("Cgroup setup", partial(validate_cgroups, probes.proc_cgroups)),
        (
            "Cgroup mount setup",
            partial(validate_cgroup_mounts, resolve=probes.resolve_mount, exists=probes.path_exists),
        ),
        ("Docker version", partial(validate_runtime_version, info.runtime_version)),
        ("Docker driver setup", partial(validate_runtime_info, probes.runtime_client)),
    ]


def build_report(provider: VersionInfoProvider, probes: HostProbes) -> str:
    """Render the full validation report.

    Raises:
        UpstreamError: If the version snapshot cannot be obtained. No other
            failure escapes; each check degrades on its own.
    """

    info = provider.get_version_info()

    out = f"{PRODUCT_NAME} version: {info.self_version}\n\n"
    # No OS is preferred or unsupported.
    out += f"OS version: {info.os_version}\n\n"
    for result in run_checks(build_checks(info, probes)):
        out += format_result(result)
    return out


def write_report(stream: TextIO, provider: VersionInfoProvider, probes: HostProbes) -> None:
    """Write the report to ``stream``; nothing is written if it cannot be built."""

    report = build_report(provider, probes)
    stream.write(report)


def from_config(config: dict[str, Any]) -> tuple[HostVersionProvider, HostProbes]:
    """Wire the host-backed provider and probes from loaded configuration."""

    host_cfg = config["host"]
    runtime_cfg = config["runtime"]
    mountinfo = Path(host_cfg.get("mountinfo", MOUNTINFO))

    runtime_client = DockerRuntimeClient(
        endpoint=runtime_cfg["endpoint"],
        timeout_s=runtime_cfg["timeout_s"],
        systemd_probe=partial(uses_systemd_cgroups, mountinfo),
    )
    provider = HostVersionProvider(runtime_client, os_release=Path(host_cfg["os_release"]))
    probes = HostProbes(
        runtime_client=runtime_client,
        proc_cgroups=Path(host_cfg["proc_cgroups"]),
        resolve_mount=partial(find_cgroup_mountpoint, mountinfo=mountinfo),
    )
    return provider, probes
