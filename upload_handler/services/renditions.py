"""Resized intermediate copies of uploaded images."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from PIL import Image

from upload_handler.imgproc.probe import canonical_format
from upload_handler.services.uploads import UploadHandler

logger = logging.getLogger(__name__)


def rendition_path(source: Path, width: int, height: int) -> Path:
    return source.with_name(f"{source.stem}-{width}x{height}{source.suffix}")


class RenditionGenerator:
    """Creates downscaled renditions and hands each to the optimizer hook."""

    def __init__(self, handler: UploadHandler, sizes: Iterable[int]) -> None:
        self._handler = handler
        self._sizes = sorted(set(sizes))

    def generate(self, file_path: str | Path) -> list[Path]:
        """Return the paths of the renditions written next to ``file_path``.

        Sizes are bounding boxes for the longest edge; images are never
        upscaled, so sizes at or above the original dimensions are skipped.
        """

        source = Path(file_path)
        try:
            with Image.open(source) as img:
                image_format = canonical_format(img.format)
                original = img.copy()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            logger.debug("No renditions for %s: %s", source, exc)
            return []

        if image_format not in Image.SAVE:
            logger.debug("No renditions for %s: %s cannot be written", source, image_format)
            return []

        options: dict = {"format": image_format}
        if image_format == "JPEG":
            options["quality"] = self._handler.jpeg_quality()

        created: list[Path] = []
        for size in self._sizes:
            if size >= max(original.size):
                continue

            resized = original.copy()
            resized.thumbnail((size, size), Image.Resampling.LANCZOS)
            target = rendition_path(source, *resized.size)
            try:
                resized.save(target, **options)
            except (OSError, ValueError) as exc:
                logger.warning("Cannot write rendition %s: %s", target, exc)
                continue

            self._handler.optimize_resized(target)
            created.append(target)

        return created
