"""Tests for report assembly."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from config.controller import ConfigController
from validation.errors import UpstreamError
from validation.report import HostProbes, build_report, from_config, write_report
from validation.runtime import DockerRuntimeClient
from validation.version_info import VersionInfo

SECTION_ORDER = [
    "Kernel version:",
    "Cgroup setup:",
    "Cgroup mount setup:",
    "Docker version:",
    "Docker driver setup:",
]


def test_report_renders_sections_in_fixed_order(provider, probes: HostProbes) -> None:
    report = build_report(provider, probes)

    assert report.startswith("hostcheck version: 0.1.0\n\nOS version: Ubuntu 14.04 LTS\n\n")
    positions = [report.index(section) for section in SECTION_ORDER]
    assert positions == sorted(positions)


def test_report_block_format(provider, probes: HostProbes) -> None:
    report = build_report(provider, probes)

    assert (
        "Kernel version: [Supported and recommended]\n"
        "\tKernel version is 3.13.0-24-generic. Versions >= 2.6 are supported. 3.0+ are recommended.\n"
        "\n\n"
    ) in report
    assert "Cgroup setup: [Supported and recommended]\n\tAvailable cgroups:" in report
    assert "Cgroup mount setup: [Supported and recommended]\n\tCgroups are mounted at /sys/fs/cgroup." in report
    assert "Docker driver setup: [Supported and recommended]\n\tDocker exec driver is native-0.2." in report
    assert report.endswith("\n\n")


def test_report_is_idempotent(provider, probes: HostProbes) -> None:
    assert build_report(provider, probes) == build_report(provider, probes)
    assert provider.calls == 2


def test_failing_check_degrades_without_aborting(provider, probes: HostProbes) -> None:
    def broken_resolver(subsystem: str) -> str:
        raise RuntimeError("mount table exploded")

    broken = HostProbes(
        runtime_client=probes.runtime_client,
        proc_cgroups=probes.proc_cgroups,
        resolve_mount=broken_resolver,
        path_exists=probes.path_exists,
    )

    report = build_report(provider, broken)

    assert "Cgroup mount setup: [Unknown]\n\tCheck raised exception: mount table exploded" in report
    assert "Docker driver setup: [Supported and recommended]" in report


def test_unparseable_versions_degrade_to_unknown(make_provider, probes: HostProbes) -> None:
    provider = make_provider(
        VersionInfo(
            self_version="0.1.0",
            os_version="Linux",
            kernel_version="garbage",
            runtime_version="Unknown",
        )
    )

    report = build_report(provider, probes)

    assert "Kernel version: [Unknown]\n\tCould not parse kernel version." in report
    assert "Docker version: [Unknown]\n\tCould not parse docker version." in report


def test_version_info_failure_propagates(failing_provider, probes: HostProbes) -> None:
    with pytest.raises(UpstreamError):
        build_report(failing_provider, probes)


def test_version_info_failure_writes_nothing(failing_provider, probes: HostProbes) -> None:
    stream = io.StringIO()

    with pytest.raises(UpstreamError):
        write_report(stream, failing_provider, probes)
    assert stream.getvalue() == ""


def test_write_report_matches_build(provider, probes: HostProbes) -> None:
    stream = io.StringIO()

    write_report(stream, provider, probes)

    assert stream.getvalue() == build_report(provider, probes)


def test_from_config_wires_host_paths_and_runtime(tmp_path: Path) -> None:
    (tmp_path / "default.yaml").write_text(
        "\n".join(
            [
                "host:",
                f"  proc_cgroups: {tmp_path / 'cgroups'}",
                f"  mountinfo: {tmp_path / 'mountinfo'}",
                f"  os_release: {tmp_path / 'os-release'}",
                "runtime:",
                "  endpoint: tcp://10.0.0.5:2375",
                "  timeout_s: 0.5",
            ]
        ),
        encoding="utf-8",
    )
    (tmp_path / "mountinfo").write_text(
        "30 25 0:28 / /cgroup/cpu rw - cgroup cgroup rw,cpu\n"
        "26 25 0:24 / /cgroup/systemd rw - cgroup cgroup rw,name=systemd\n",
        encoding="utf-8",
    )

    config = ConfigController.load_from(tmp_path).get_config()
    provider, probes = from_config(config)

    client = probes.runtime_client
    assert isinstance(client, DockerRuntimeClient)
    assert client.endpoint == "tcp://10.0.0.5:2375"
    assert client.timeout_s == 0.5
    assert provider.runtime_client is client
    assert provider.os_release == tmp_path / "os-release"
    assert probes.proc_cgroups == tmp_path / "cgroups"
    assert probes.resolve_mount("cpu") == "/cgroup/cpu"
    assert client._systemd_probe() is False


def test_from_config_systemd_probe_reads_configured_mountinfo(tmp_path: Path) -> None:
    slice_root = tmp_path / "hierarchy"
    (slice_root / "system.slice").mkdir(parents=True)
    (tmp_path / "mountinfo").write_text(
        f"26 25 0:24 / {slice_root} rw - cgroup cgroup rw,name=systemd\n",
        encoding="utf-8",
    )
    (tmp_path / "default.yaml").write_text(
        f"host:\n  mountinfo: {tmp_path / 'mountinfo'}\n",
        encoding="utf-8",
    )

    _, probes = from_config(ConfigController.load_from(tmp_path).get_config())

    assert probes.runtime_client._systemd_probe() is True
    assert probes.resolve_mount("name=systemd") == str(slice_root)
