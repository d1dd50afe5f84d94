"""Upload hooks: orientation fix followed by recompression."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from upload_handler.config.settings import Settings
from upload_handler.imgproc.editor import PillowImageEditor
from upload_handler.imgproc.normalize import ImageNormalizer
from upload_handler.imgproc.probe import detect_mime_type
from upload_handler.optimizers import ImageOptimizer, clamp_quality, is_executable

logger = logging.getLogger(__name__)

# Editor output at this quality leaves jpegoptim as the only lossy pass.
LOSSLESS_EDITOR_QUALITY = 100


@dataclass(slots=True)
class UploadedFile:
    """Transient record describing one uploaded file."""

    file: str
    url: str
    type: str


class UploadHandler:
    """Facade the upload pipeline calls for every new or resized file."""

    def __init__(
        self,
        settings: Settings,
        *,
        optimizer: ImageOptimizer | None = None,
        normalizer: ImageNormalizer | None = None,
    ) -> None:
        self._settings = settings
        self._optimizer = optimizer or ImageOptimizer.from_settings(settings)
        self._normalizer = normalizer or ImageNormalizer(editor=PillowImageEditor(self.jpeg_quality()))

    def handle_upload(self, upload: UploadedFile) -> UploadedFile:
        """Fix orientation, then optimize the freshly uploaded file."""

        upload = self.rotate_by_exif(upload)
        return self.optimize_images(upload)

    def rotate_by_exif(self, upload: UploadedFile) -> UploadedFile:
        self._normalizer.normalize(upload.file, upload.type)
        return upload

    def optimize_images(self, upload: UploadedFile) -> UploadedFile:
        self._optimizer.optimize(upload.file, upload.type)
        return upload

    def optimize_resized(self, file_path: str | Path | None) -> str | Path | None:
        """Optimize a generated rendition; its mime type comes from the content."""

        if not file_path:
            return file_path

        mime_type = detect_mime_type(file_path)
        if mime_type:
            self._optimizer.optimize(file_path, mime_type)
        return file_path

    def jpeg_quality(self) -> int:
        """Quality the image editor should save JPEGs with."""

        if not is_executable(self._settings.jpegoptim_path):
            return clamp_quality(self._settings.jpeg_quality)
        return LOSSLESS_EDITOR_QUALITY
