"""Diagnostics helpers for hostcheck."""

from diagnostics.models import CheckResult, SupportLevel
from diagnostics.runner import format_result, run_checks

__all__ = [
    "CheckResult",
    "SupportLevel",
    "format_result",
    "run_checks",
]
