"""Version parsing and kernel/runtime version policies."""

from __future__ import annotations

import re

from core.logging import log_warning
from diagnostics.models import CheckResult, SupportLevel
from validation.errors import ParseError

KERNEL_CHECK = "Kernel version"
RUNTIME_VERSION_CHECK = "Docker version"

# major.minor.<trailing>; the trailing segment is required but ignored.
_VERSION_PATTERN = re.compile(r"(\d+)\.(\d+)\.(\S+)")


def parse_major_minor(version: str) -> tuple[int, int]:
    """Return ``(major, minor)`` from a ``major.minor.<anything>`` string.

    Raises:
        ParseError: If the string does not start with the three-segment shape.
    """

    match = _VERSION_PATTERN.match(version)
    if match is None:
        log_warning(f"Failed to parse version for {version!r}")
        raise ParseError(f"Failed to parse version {version!r}", version)
    return int(match.group(1)), int(match.group(2))


def validate_kernel_version(version: str) -> CheckResult:
    """Classify a kernel release string."""

    desc = f"Kernel version is {version}. Versions >= 2.6 are supported. 3.0+ are recommended.\n"
    try:
        major, minor = parse_major_minor(version)
    except ParseError:
        return CheckResult(
            name=KERNEL_CHECK,
            level=SupportLevel.UNKNOWN,
            description=f"Could not parse kernel version. {desc}",
        )

    if major < 2:
        level = SupportLevel.UNSUPPORTED
    elif major == 2 and minor < 6:
        level = SupportLevel.UNSUPPORTED
    elif major >= 3:
        level = SupportLevel.RECOMMENDED
    else:
        level = SupportLevel.SUPPORTED
    return CheckResult(name=KERNEL_CHECK, level=level, description=desc)


def validate_runtime_version(version: str) -> CheckResult:
    """Classify a container runtime version string."""

    desc = f"Docker version is {version}. Versions >= 1.0 are supported. 1.2+ are recommended.\n"
    try:
        major, minor = parse_major_minor(version)
    except ParseError:
        return CheckResult(
            name=RUNTIME_VERSION_CHECK,
            level=SupportLevel.UNKNOWN,
            description=f"Could not parse docker version. {desc}",
        )

    if major < 1:
        level = SupportLevel.UNSUPPORTED
    elif major == 1 and minor < 2:
        level = SupportLevel.SUPPORTED
    else:
        level = SupportLevel.RECOMMENDED
    return CheckResult(name=RUNTIME_VERSION_CHECK, level=level, description=desc)
