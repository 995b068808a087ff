"""Shared fixtures for host validation tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from config.controller import ConfigController
from validation.errors import UpstreamError
from validation.report import HostProbes
from validation.runtime import RuntimeInfo
from validation.version_info import VersionInfo

CGROUPS_LISTING = "\n".join(
    [
        "#subsys_name\thierarchy\tnum_cgroups\tenabled",
        "cpuset\t2\t1\t1",
        "cpu\t3\t64\t1",
        "cpuacct\t3\t64\t1",
        "blkio\t4\t64\t1",
        "memory\t5\t90\t1",
        "devices\t6\t64\t1",
        "freezer\t7\t1\t1",
        "",
    ]
)


class FakeVersionProvider:
    def __init__(self, info: VersionInfo | None = None, error: Exception | None = None) -> None:
        self.info = info or VersionInfo(
            self_version="0.1.0",
            os_version="Ubuntu 14.04 LTS",
            kernel_version="3.13.0-24-generic",
            runtime_version="1.3.0",
        )
        self.error = error
        self.calls = 0

    def get_version_info(self) -> VersionInfo:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.info


class FakeRuntimeClient:
    def __init__(self, info: RuntimeInfo | None = None) -> None:
        self.info = info or RuntimeInfo("native-0.2", "aufs", systemd_cgroups=False)

    def fetch_info(self) -> RuntimeInfo:
        return self.info


@pytest.fixture
def proc_cgroups(tmp_path: Path) -> Path:
    path = tmp_path / "cgroups"
    path.write_text(CGROUPS_LISTING, encoding="utf-8")
    return path


@pytest.fixture
def probes(proc_cgroups: Path) -> HostProbes:
    return HostProbes(
        runtime_client=FakeRuntimeClient(),
        proc_cgroups=proc_cgroups,
        resolve_mount=lambda subsystem: f"/sys/fs/cgroup/{subsystem}",
        path_exists=lambda path: path == "/sys/fs/cgroup",
    )


@pytest.fixture
def provider() -> FakeVersionProvider:
    return FakeVersionProvider()


@pytest.fixture
def failing_provider() -> FakeVersionProvider:
    return FakeVersionProvider(error=UpstreamError("version info unavailable"))


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    ConfigController._instance = None
    yield
    ConfigController._instance = None


@pytest.fixture
def make_provider():
    return FakeVersionProvider
