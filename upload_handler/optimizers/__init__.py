"""External image optimizers."""

from .optimizer import (
    DEFAULT_JPEG_QUALITY,
    ImageOptimizer,
    clamp_quality,
    is_executable,
    jpegoptim_command,
    pngcrush_command,
)

__all__ = [
    "DEFAULT_JPEG_QUALITY",
    "ImageOptimizer",
    "clamp_quality",
    "is_executable",
    "jpegoptim_command",
    "pngcrush_command",
]
