"""Availability checks for the external optimizer binaries."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from upload_handler.config.settings import Settings, get_settings
from upload_handler.optimizers import is_executable

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IntegrationCheckResult:
    """Structured result describing the integration check outcome."""

    name: str
    success: bool
    message: str


async def _run_check(name: str, binary: str, purpose: str) -> IntegrationCheckResult:
    found = await asyncio.to_thread(is_executable, binary)
    if found:
        return IntegrationCheckResult(
            name=name,
            success=True,
            message=f"{binary} is executable.",
        )
    return IntegrationCheckResult(
        name=name,
        success=False,
        message=f"{binary} not found or not executable; {purpose} is disabled.",
    )


async def check_pngcrush(settings: Settings | None = None) -> IntegrationCheckResult:
    """Check that pngcrush can be executed."""

    settings = settings or get_settings()
    return await _run_check("pngcrush", settings.pngcrush_path, "PNG optimization")


async def check_jpegoptim(settings: Settings | None = None) -> IntegrationCheckResult:
    """Check that jpegoptim can be executed."""

    settings = settings or get_settings()
    return await _run_check("jpegoptim", settings.jpegoptim_path, "JPEG optimization")


async def run_all_checks(settings: Settings | None = None) -> list[IntegrationCheckResult]:
    """Execute all integration checks concurrently."""

    settings = settings or get_settings()
    return list(await asyncio.gather(check_pngcrush(settings), check_jpegoptim(settings)))


async def warn_missing_dependencies(settings: Settings | None = None) -> list[IntegrationCheckResult]:
    """Log a warning for every optimizer that is unavailable."""

    settings = settings or get_settings()
    if not settings.dependency_check_enabled:
        return []

    failed = [result for result in await run_all_checks(settings) if not result.success]
    for result in failed:
        logger.warning("Missing dependency %s: %s", result.name, result.message)
    return failed
