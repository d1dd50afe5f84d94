"""Check that the external image optimizers are installed."""

from __future__ import annotations

import asyncio
import sys
from typing import Iterable

from upload_handler.integrations import IntegrationCheckResult, run_all_checks


def format_result(result: IntegrationCheckResult) -> str:
    """Render one check as a "STATUS | name | message" line."""

    status = "OK" if result.success else "MISSING"
    return f"{status:<7} | {result.name} | {result.message}"


def report(results: Iterable[IntegrationCheckResult]) -> int:
    """Print every result and return the number of missing tools."""

    missing = 0
    for result in results:
        print(format_result(result))
        missing += not result.success
    return missing


def main() -> int:
    return 1 if report(asyncio.run(run_all_checks())) else 0


if __name__ == "__main__":
    sys.exit(main())
