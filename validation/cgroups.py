"""Cgroup subsystem inventory and presence policy."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from core.logging import log_warning
from diagnostics.models import CheckResult, SupportLevel
from validation.errors import ParseError

CGROUP_CHECK = "Cgroup setup"
PROC_CGROUPS = Path("/proc/cgroups")

# Checked in declared order; the first missing or disabled entry is reported.
REQUIRED_CGROUPS: tuple[str, ...] = ("cpu", "cpuacct")
RECOMMENDED_CGROUPS: tuple[str, ...] = ("memory", "blkio", "cpuset", "devices", "freezer")


def get_enabled_cgroups(path: Path = PROC_CGROUPS) -> dict[str, int]:
    """Read the kernel subsystem listing into ``{name: enabled}``.

    The first line is a header and is always skipped. Every other non-blank
    line must be ``name hierarchy num_cgroups enabled``.

    Raises:
        OSError: If the listing cannot be read.
        UnicodeDecodeError: If the listing is not valid UTF-8.
        ParseError: On the first malformed line; no partial inventory is returned.
    """

    text = path.read_text(encoding="utf-8")
    cgroups: dict[str, int] = {}
    for index, line in enumerate(text.split("\n")):
        if index == 0 or line == "":
            continue
        fields = line.split()
        if len(fields) != 4:
            raise ParseError(f"failed to parse {path} entry {line!r}", line)
        name, hierarchy, num_cgroups, enabled = fields
        try:
            int(hierarchy)
            int(num_cgroups)
            cgroups[name] = int(enabled)
        except ValueError as exc:
            raise ParseError(f"failed to parse {path} entry {line!r}", line) from exc
    return cgroups


def format_inventory(available: Mapping[str, int]) -> str:
    """Render an inventory snapshot with entries sorted by name."""

    entries = " ".join(f"{name}:{available[name]}" for name in sorted(available))
    return f"[{entries}]"


def are_cgroups_present(available: Mapping[str, int], desired: Sequence[str]) -> tuple[bool, str]:
    """Return whether every desired subsystem is compiled in and enabled.

    Returns:
        ``(True, "")`` on success, otherwise ``(False, reason)`` for the first
        offending subsystem in ``desired`` order.
    """

    for cgroup in desired:
        enabled = available.get(cgroup)
        if enabled is None:
            reason = f"Missing cgroup {cgroup}. Available cgroups: {format_inventory(available)}\n"
            return False, reason
        if enabled != 1:
            reason = f"Cgroup {cgroup} not enabled. Available cgroups: {format_inventory(available)}\n"
            return False, reason
    return True, ""


def cgroup_policy_text(
    required: Sequence[str] = REQUIRED_CGROUPS,
    recommended: Sequence[str] = RECOMMENDED_CGROUPS,
) -> str:
    return (
        f"\tFollowing cgroups are required: [{' '.join(required)}]\n"
        f"\tFollowing other cgroups are recommended: [{' '.join(recommended)}]\n"
    )


def validate_cgroups(path: Path = PROC_CGROUPS) -> CheckResult:
    """Classify the kernel cgroup subsystems against the required and recommended sets."""

    desc = cgroup_policy_text()
    try:
        available = get_enabled_cgroups(path)
    except (OSError, UnicodeDecodeError, ParseError) as exc:
        log_warning(f"Could not read cgroup inventory from {path}: {exc}")
        return CheckResult(
            name=CGROUP_CHECK,
            level=SupportLevel.UNKNOWN,
            description=f"Could not parse {path}.\n{desc}",
        )

    ok, reason = are_cgroups_present(available, REQUIRED_CGROUPS)
    if not ok:
        return CheckResult(name=CGROUP_CHECK, level=SupportLevel.UNSUPPORTED, description=reason + desc)

    ok, reason = are_cgroups_present(available, RECOMMENDED_CGROUPS)
    if not ok:
        return CheckResult(name=CGROUP_CHECK, level=SupportLevel.SUPPORTED, description=reason + desc)

    out = f"Available cgroups: {format_inventory(available)}\n"
    return CheckResult(name=CGROUP_CHECK, level=SupportLevel.RECOMMENDED, description=out + desc)
