"""Pillow-backed image editor used for in-place orientation fixes."""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Protocol

from PIL import ExifTags, Image

from upload_handler.imgproc.errors import EditorUnavailable, PersistFailed, TransformApplyFailed
from upload_handler.imgproc.probe import canonical_format

logger = logging.getLogger(__name__)

_ROTATIONS = {
    90: Image.Transpose.ROTATE_90,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_270,
}


class ImageHandle(Protocol):
    """Mutable image owned by a single normalisation call."""

    def rotate(self, degrees: int) -> None: ...

    def flip(self, horizontal: bool, vertical: bool) -> None: ...

    def save(self, file_path: str | Path) -> None: ...


class ImageEditor(Protocol):
    """Factory for image handles."""

    def open(self, file_path: str | Path) -> ImageHandle: ...


class PillowImageHandle:
    """Image handle that keeps pixels in memory until saved."""

    def __init__(
        self,
        image: Image.Image,
        *,
        image_format: str | None,
        exif: Image.Exif,
        jpeg_quality: int,
    ) -> None:
        self._image = image
        self._format = image_format
        self._exif = exif
        self._jpeg_quality = jpeg_quality

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def rotate(self, degrees: int) -> None:
        """Rotate counter-clockwise, expanding the canvas to fit."""

        degrees %= 360
        if degrees == 0:
            return
        try:
            method = _ROTATIONS.get(degrees)
            if method is None:
                self._image = self._image.rotate(degrees, expand=True)
            else:
                self._image = self._image.transpose(method)
        except (OSError, ValueError) as exc:
            raise TransformApplyFailed(f"rotate({degrees}) failed: {exc}") from exc

    def flip(self, horizontal: bool, vertical: bool) -> None:
        try:
            if horizontal:
                self._image = self._image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
            if vertical:
                self._image = self._image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
        except (OSError, ValueError) as exc:
            raise TransformApplyFailed(f"flip({horizontal}, {vertical}) failed: {exc}") from exc

    def _save_options(self) -> dict:
        options: dict = {"format": self._format}
        # Pixels are upright now; a stale tag would rotate them a second time.
        self._exif.pop(ExifTags.Base.Orientation, None)
        if len(self._exif):
            options["exif"] = self._exif.tobytes()
        icc_profile = self._image.info.get("icc_profile")
        if icc_profile:
            options["icc_profile"] = icc_profile
        if self._format == "JPEG":
            options["quality"] = self._jpeg_quality
        return options

    def save(self, file_path: str | Path) -> None:
        """Atomically overwrite ``file_path`` with the current pixels."""

        target = Path(file_path)
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
            )
        except OSError as exc:
            raise PersistFailed(f"Cannot write {target}: {exc}") from exc

        try:
            with os.fdopen(fd, "wb") as handle:
                self._image.save(handle, **self._save_options())
            if target.exists():
                shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
        except (OSError, ValueError, KeyError) as exc:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise PersistFailed(f"Cannot write {target}: {exc}") from exc

        logger.debug("Saved %s (%sx%s)", target, *self._image.size)


class PillowImageEditor:
    """Opens files into :class:`PillowImageHandle` instances."""

    def __init__(self, jpeg_quality: int = 90) -> None:
        self._jpeg_quality = jpeg_quality

    def open(self, file_path: str | Path) -> PillowImageHandle:
        try:
            with Image.open(file_path) as img:
                image_format = img.format
                exif = img.getexif()
                image = img.copy()
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            raise EditorUnavailable(f"Cannot open {file_path}: {exc}") from exc

        return PillowImageHandle(
            image,
            image_format=canonical_format(image_format),
            exif=exif,
            jpeg_quality=self._jpeg_quality,
        )
