"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_jpegoptim,
    check_pngcrush,
    run_all_checks,
    warn_missing_dependencies,
)

__all__ = [
    "IntegrationCheckResult",
    "check_jpegoptim",
    "check_pngcrush",
    "run_all_checks",
    "warn_missing_dependencies",
]
