"""Models for host validation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SupportLevel(str, Enum):
    """Support classification for a single compatibility check."""

    RECOMMENDED = "[Supported and recommended]"
    SUPPORTED = "[Supported, but not recommended]"
    UNSUPPORTED = "[Unsupported]"
    UNKNOWN = "[Unknown]"


@dataclass(frozen=True)
class CheckResult:
    """Result for a single compatibility check."""

    name: str
    level: SupportLevel
    description: str
