"""Cgroup mount point discovery and policy."""

from __future__ import annotations

from collections.abc import Callable
import os
from pathlib import Path

from core.logging import log_warning
from diagnostics.models import CheckResult, SupportLevel
from validation.errors import MountResolutionError

MOUNT_CHECK = "Cgroup mount setup"
MOUNTINFO = Path("/proc/self/mountinfo")
RECOMMENDED_MOUNT = "/sys/fs/cgroup"

MOUNT_POLICY = (
    "\tAny cgroup mount point that is detectible and accessible is supported. "
    f"{RECOMMENDED_MOUNT} is recommended as a standard location.\n"
)


def find_cgroup_mountpoint(subsystem: str, mountinfo: Path = MOUNTINFO) -> str:
    """Return the mount point of the cgroup hierarchy serving ``subsystem``.

    Only cgroup v1 mounts are considered; ``subsystem`` must appear among the
    mount's super options (for example ``cpu`` or ``name=systemd``).

    Raises:
        MountResolutionError: If mountinfo is unreadable or no mount matches.
    """

    try:
        text = mountinfo.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MountResolutionError(f"cannot read {mountinfo}: {exc}") from exc

    for line in text.splitlines():
        pre, sep, post = line.partition(" - ")
        if not sep:
            continue
        fields = pre.split()
        tail = post.split()
        if len(fields) < 5 or len(tail) < 3:
            continue
        fstype, super_options = tail[0], tail[2]
        if fstype != "cgroup":
            continue
        if subsystem in super_options.split(","):
            return fields[4]
    raise MountResolutionError(f"mountpoint for {subsystem} not found")


def uses_systemd_cgroups(
    mountinfo: Path = MOUNTINFO,
    exists: Callable[[str], bool] = os.path.exists,
) -> bool:
    """Return whether systemd has taken control of cgroup creation.

    systemd being installed is not enough; a ``system.slice`` cgroup under
    the ``name=systemd`` or ``cpu`` hierarchy is.
    """

    for subsystem in ("name=systemd", "cpu"):
        try:
            mount = find_cgroup_mountpoint(subsystem, mountinfo)
        except MountResolutionError:
            continue
        if exists(os.path.join(mount, "system.slice")):
            return True
    return False


def validate_cgroup_mounts(
    resolve: Callable[[str], str] | None = None,
    exists: Callable[[str], bool] = os.path.exists,
) -> CheckResult:
    """Classify where the cpu cgroup hierarchy is mounted.

    Args:
        resolve: Maps a subsystem name to its mount point; defaults to
            :func:`find_cgroup_mountpoint` against this host.
        exists: Filesystem accessibility check.
    """

    resolver = resolve or find_cgroup_mountpoint
    try:
        mount = resolver("cpu")
    except MountResolutionError as exc:
        log_warning(f"Could not locate cgroup mount point: {exc}")
        return CheckResult(
            name=MOUNT_CHECK,
            level=SupportLevel.UNKNOWN,
            description="Could not locate cgroup mount point.\n" + MOUNT_POLICY,
        )

    mount = mount.removesuffix("/cpu")
    if not exists(mount):
        return CheckResult(
            name=MOUNT_CHECK,
            level=SupportLevel.UNSUPPORTED,
            description=f"Cgroup mount directory {mount} inaccessible.\n" + MOUNT_POLICY,
        )

    out = f"Cgroups are mounted at {mount}.\n" + MOUNT_POLICY
    level = SupportLevel.RECOMMENDED if mount == RECOMMENDED_MOUNT else SupportLevel.SUPPORTED
    return CheckResult(name=MOUNT_CHECK, level=level, description=out)
