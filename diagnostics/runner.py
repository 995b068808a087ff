"""Check runner utilities."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from core.logging import logger as LOGGER
from diagnostics.models import CheckResult, SupportLevel

OUTPUT_FORMAT = "{name}: {label}\n\t{description}\n\n"


def format_result(result: CheckResult) -> str:
    """Render one check as a labelled report block."""

    return OUTPUT_FORMAT.format(
        name=result.name,
        label=result.level.value,
        description=result.description,
    )


def run_checks(checks: Iterable[tuple[str, Callable[[], CheckResult]]]) -> list[CheckResult]:
    """Run named checks in order and return their results."""

    results: list[CheckResult] = []
    for name, check in checks:
        try:
            result = check()
        except Exception as exc:  # noqa: BLE001 - report must keep running
            LOGGER.exception("Check failed: %s", name)
            result = CheckResult(
                name=name,
                level=SupportLevel.UNKNOWN,
                description=f"Check raised exception: {exc}\n",
            )
        results.append(result)
    return results
