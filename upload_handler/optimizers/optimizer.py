"""Best-effort recompression through external command-line optimizers."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from upload_handler.config.settings import Settings
from upload_handler.imgproc.normalize import JPEG_MIME_TYPES
from upload_handler.imgproc.probe import is_image
from upload_handler.metrics.prometheus_exporter import image_optimizations_total

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 85
PNG_MIME_TYPE = "image/png"


def is_executable(binary: str | Path) -> bool:
    """Return True when ``binary`` is a regular file we may execute."""

    return os.path.isfile(binary) and os.access(binary, os.X_OK)


def clamp_quality(quality: int) -> int:
    """Return ``quality`` if it lies in 1-100, otherwise the default."""

    if quality < 1 or quality > 100:
        return DEFAULT_JPEG_QUALITY
    return quality


def jpegoptim_command(binary: str | Path, file_path: str | Path, quality: int) -> list[str]:
    # Strip all metadata and re-encode as progressive at the target quality.
    return [str(binary), "-s", "--all-progressive", f"-m{clamp_quality(quality)}", str(file_path)]


def pngcrush_command(binary: str | Path, file_path: str | Path) -> list[str]:
    # Overwrite in place, reduce bit depth when lossless, drop every
    # ancillary chunk except transparency and gamma.
    return [str(binary), "-ow", "-reduce", "-rem", "allb", str(file_path)]


class ImageOptimizer:
    """Stateless wrapper around ``jpegoptim`` and ``pngcrush``."""

    def __init__(
        self,
        *,
        jpegoptim_path: str,
        pngcrush_path: str,
        jpeg_quality: int,
    ) -> None:
        self.jpegoptim_path = jpegoptim_path
        self.pngcrush_path = pngcrush_path
        self.jpeg_quality = jpeg_quality

    @classmethod
    def from_settings(cls, settings: Settings) -> ImageOptimizer:
        return cls(
            jpegoptim_path=settings.jpegoptim_path,
            pngcrush_path=settings.pngcrush_path,
            jpeg_quality=settings.jpeg_quality,
        )

    def optimize(self, file_path: str | Path, mime_type: str | None) -> bool:
        """Dispatch to the optimizer matching ``mime_type``."""

        if mime_type == PNG_MIME_TYPE:
            return self.optimize_png(file_path)
        if mime_type in JPEG_MIME_TYPES:
            return self.optimize_jpeg(file_path)
        return False

    def optimize_jpeg(self, file_path: str | Path) -> bool:
        if not self._can_process(self.jpegoptim_path, file_path):
            return False
        command = jpegoptim_command(self.jpegoptim_path, file_path, self.jpeg_quality)
        return self._run("jpegoptim", command)

    def optimize_png(self, file_path: str | Path) -> bool:
        if not self._can_process(self.pngcrush_path, file_path):
            return False
        return self._run("pngcrush", pngcrush_command(self.pngcrush_path, file_path))

    def _can_process(self, binary: str, file_path: str | Path) -> bool:
        if not is_executable(binary):
            logger.debug("Optimizer %s is not executable, skipping %s", binary, file_path)
            return False
        if not os.path.isfile(file_path) or not is_image(file_path):
            logger.debug("Not an image file, skipping %s", file_path)
            return False
        return True

    def _run(self, tool: str, command: list[str]) -> bool:
        try:
            proc = subprocess.run(command, capture_output=True, text=True)
        except OSError as exc:
            logger.warning("Failed to start %s: %s", tool, exc)
            image_optimizations_total.labels(tool=tool, status="error").inc()
            return False

        if proc.returncode != 0:
            logger.warning("%s exited with %s: %s", tool, proc.returncode, proc.stderr.strip()[:200])
            image_optimizations_total.labels(tool=tool, status="failed").inc()
            return False

        image_optimizations_total.labels(tool=tool, status="ok").inc()
        return True
