"""Image orientation normalisation."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol

from upload_handler.imgproc.editor import ImageEditor, PillowImageEditor
from upload_handler.imgproc.errors import EditorUnavailable, MetadataUnreadable, TransformApplyFailed
from upload_handler.imgproc.exif import ExifMetadataReader
from upload_handler.imgproc.orientation import Flip, Rotate, Transform, transform_for
from upload_handler.metrics.prometheus_exporter import orientation_normalizations_total

logger = logging.getLogger(__name__)

JPEG_MIME_TYPES = frozenset({"image/jpg", "image/jpeg"})


class MetadataReader(Protocol):
    def read_orientation(self, file_path: str | Path) -> int | None: ...


class NormalizeOutcome(str, Enum):
    """Terminal state of a single normalisation call."""

    NOOP = "noop"
    TRANSFORMED = "transformed"


class ImageNormalizer:
    """Ensures uploaded JPEGs are stored upright.

    Every failure short of the final write degrades to a no-op: an upload is
    never blocked because auto-rotation did not work. Only
    :class:`~upload_handler.imgproc.errors.PersistFailed` propagates.
    """

    def __init__(
        self,
        reader: MetadataReader | None = None,
        editor: ImageEditor | None = None,
    ) -> None:
        self._reader = reader or ExifMetadataReader()
        self._editor = editor or PillowImageEditor()

    def normalize(self, file_path: str | Path, mime_type: str) -> NormalizeOutcome:
        """Rotate or flip ``file_path`` in place according to its EXIF orientation."""

        outcome = self._normalize(file_path, mime_type)
        orientation_normalizations_total.labels(outcome=outcome.value).inc()
        return outcome

    def _normalize(self, file_path: str | Path, mime_type: str) -> NormalizeOutcome:
        if mime_type not in JPEG_MIME_TYPES:
            return NormalizeOutcome.NOOP

        try:
            orientation = self._reader.read_orientation(file_path)
        except MetadataUnreadable as exc:
            logger.debug("Skipping orientation fix: %s", exc)
            return NormalizeOutcome.NOOP

        transform = transform_for(orientation)
        if transform is Transform.IDENTITY:
            return NormalizeOutcome.NOOP

        try:
            image = self._editor.open(file_path)
        except EditorUnavailable as exc:
            logger.info("Skipping orientation fix: %s", exc)
            return NormalizeOutcome.NOOP

        try:
            for operation in transform.operations:
                if isinstance(operation, Rotate):
                    image.rotate(operation.degrees)
                elif isinstance(operation, Flip):
                    image.flip(operation.horizontal, operation.vertical)
        except TransformApplyFailed as exc:
            logger.info("Skipping orientation fix: %s", exc)
            return NormalizeOutcome.NOOP

        image.save(file_path)
        logger.info("Applied %s to %s (orientation %s)", transform.name, file_path, orientation)
        return NormalizeOutcome.TRANSFORMED
